from typing import List, Optional

import pytest

from screen2code.configs.config import LLMConfig, PreviewConfig
from screen2code.core.models import ImageInput
from screen2code.core.types import ModelProvider

REACT_MUI_OUTPUT = """```jsx
function GeneratedComponent(){return <div>form</div>;}
export default GeneratedComponent;
```"""

REACT_MUI_ACCESSIBLE_OUTPUT = """import React from 'react';
import { Box, Button, useMediaQuery } from '@mui/material';

function GeneratedComponent() {
  const isMobile = useMediaQuery('(max-width:600px)');
  return (
    <Box sx={{ p: isMobile ? 1 : 3 }}>
      <Button aria-label="Sign in">Sign in</Button>
    </Box>
  );
}

export default GeneratedComponent;
"""


class FakeInvoker:
    """Stands in for ``screen2code.llm.invoke``.

    Returns the queued responses in order and repeats the last one. Exceptions
    in the queue are raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [REACT_MUI_OUTPUT]
        self.calls: List[dict] = []

    async def __call__(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        *,
        config: LLMConfig,
        system_prompt: Optional[str] = None,
    ) -> str:
        self.calls.append(
            {"prompt": prompt, "image": image, "config": config, "system_prompt": system_prompt}
        )
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def make_invoker():
    return FakeInvoker


@pytest.fixture
def llm_config():
    return LLMConfig(model_provider=ModelProvider.TESTING, model_name="test-model", refine_attempts=0)


@pytest.fixture
def preview_config():
    return PreviewConfig()


@pytest.fixture
def png_image():
    return ImageInput(data=b"\x89PNG\r\n\x1a\nfake", media_type="image/png", filename="login.png")


@pytest.fixture
def react_mui_output():
    return REACT_MUI_OUTPUT


@pytest.fixture
def accessible_output():
    return REACT_MUI_ACCESSIBLE_OUTPUT
