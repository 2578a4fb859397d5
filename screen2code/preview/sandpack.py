"""React + Material-UI previews on Sandpack / CodeSandbox."""

import json
from typing import Dict, Optional
from urllib.parse import urlencode

import httpx

from screen2code.configs.config import PreviewConfig
from screen2code.core.exceptions import PreviewUnavailableError
from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat
from screen2code.preview.base import BasePreviewAdapter, PreviewResource
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

SANDPACK_DEPENDENCIES = {
    "react": "^18.0.0",
    "react-dom": "^18.0.0",
    "@mui/material": "^5.15.15",
    "@emotion/react": "^11.11.1",
    "@emotion/styled": "^11.11.0",
    "@mui/icons-material": "^5.15.14",
    "formik": "^2.4.6",
    "yup": "^1.6.1",
}

COMPONENT_FILE = "src/GeneratedComponent.js"
ENTRY_FILE = "src/index.js"

INDEX_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>React Preview</title>
  <link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Roboto:wght@300;400;500;700&display=swap" />
  <link rel="stylesheet" href="https://fonts.googleapis.com/icon?family=Material+Icons" />
</head>
<body>
  <div id="root"></div>
</body>
</html>
"""

INDEX_JS = """\
import React from 'react';
import ReactDOM from 'react-dom/client';
import { ThemeProvider, createTheme } from '@mui/material/styles';
import CssBaseline from '@mui/material/CssBaseline';
import GeneratedComponent from './GeneratedComponent';

const theme = createTheme();

const root = ReactDOM.createRoot(document.getElementById('root'));
root.render(
  <React.StrictMode>
    <ThemeProvider theme={theme}>
      <CssBaseline />
      <GeneratedComponent />
    </ThemeProvider>
  </React.StrictMode>
);
"""


def _package_json() -> str:
    return json.dumps(
        {
            "name": "screen2code-preview",
            "version": "1.0.0",
            "private": True,
            "main": ENTRY_FILE,
            "dependencies": SANDPACK_DEPENDENCIES,
            "browserslist": [">0.2%", "not dead", "not op_mini all"],
        },
        indent=2,
    )


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return response.reason_phrase


class SandpackPreviewAdapter(BasePreviewAdapter):
    """Bundle of project files for an in-browser React bundler.

    ``build`` is pure. ``register`` uploads the bundle to the CodeSandbox
    define API for clients that want a hosted embed URL instead.
    """

    code_format = CodeFormat.REACT_MUI

    def __init__(
        self,
        config: Optional[PreviewConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config)
        self._transport = transport

    def build(self, code: NormalizedCode) -> PreviewResource:
        self._check_format(code)
        files: Dict[str, str] = {
            "package.json": _package_json(),
            "public/index.html": INDEX_HTML,
            ENTRY_FILE: INDEX_JS,
            COMPONENT_FILE: code.text,
        }
        return PreviewResource(code_format=self.code_format, bundle_files=files, entry_file=ENTRY_FILE)

    def embed_url(self, sandbox_id: str) -> str:
        query = urlencode(
            {
                "fontsize": 14,
                "hidenavigation": 1,
                "module": f"/{COMPONENT_FILE}",
                "theme": "light",
                "view": "preview",
            },
            safe="/",
        )
        return f"{self.config.codesandbox_embed_url.rstrip('/')}/{sandbox_id}?{query}"

    async def register(self, resource: PreviewResource) -> str:
        """
        Upload a bundle to CodeSandbox and return its embed URL.

        Raises:
            PreviewUnavailableError: transport failure, non-2xx status or no sandbox id
        """
        if not resource.bundle_files:
            raise PreviewUnavailableError("Only bundle previews can be registered with CodeSandbox")

        payload = {
            "files": {
                path: {"content": content, "isBinary": False}
                for path, content in resource.bundle_files.items()
            }
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.config.codesandbox_define_url,
                    json=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            LOG.error(f"CodeSandbox define request failed: {e}")
            raise PreviewUnavailableError(f"CodeSandbox request failed: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            LOG.error(f"CodeSandbox API error {response.status_code}: {detail}")
            raise PreviewUnavailableError(
                f"CodeSandbox API error: {response.status_code} - {detail}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        sandbox_id = data.get("sandbox_id") if isinstance(data, dict) else None
        if not sandbox_id:
            raise PreviewUnavailableError("No sandbox ID returned from CodeSandbox API")

        LOG.info(f"Registered CodeSandbox {sandbox_id}")
        return self.embed_url(sandbox_id)
