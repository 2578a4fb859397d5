"""Write generated code into a local project with a version history."""

import json
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import aiofiles
from pydantic import BaseModel

from screen2code.configs.config import PublishConfig
from screen2code.core.exceptions import ConfigurationError
from screen2code.core.models import NormalizedCode, coerce_device_type
from screen2code.core.types import CodeFormat
from screen2code.preview.sandpack import INDEX_HTML, SANDPACK_DEPENDENCIES
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

COMPONENT_PATHS = {
    CodeFormat.REACT_MUI: "src/components/GeneratedComponent.jsx",
    CodeFormat.REACT_NATIVE: "App.js",
    CodeFormat.FLUTTER: "lib/main.dart",
}

APP_JSX = """\
import React from 'react';
import { ThemeProvider, createTheme } from '@mui/material/styles';
import CssBaseline from '@mui/material/CssBaseline';
import GeneratedComponent from './components/GeneratedComponent';

const theme = createTheme();

function App() {
  return (
    <ThemeProvider theme={theme}>
      <CssBaseline />
      <GeneratedComponent />
    </ThemeProvider>
  );
}

export default App;
"""

INDEX_JS = """\
import React from 'react';
import ReactDOM from 'react-dom/client';
import App from './App';

const root = ReactDOM.createRoot(document.getElementById('root'));
root.render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);
"""


def _react_package_json() -> str:
    dependencies = dict(SANDPACK_DEPENDENCIES)
    dependencies["react-scripts"] = "5.0.1"
    return json.dumps(
        {
            "name": "active-react-project",
            "version": "1.0.0",
            "private": True,
            "dependencies": dependencies,
            "scripts": {
                "start": "react-scripts start",
                "build": "react-scripts build",
            },
            "browserslist": [">0.2%", "not dead", "not op_mini all"],
        },
        indent=2,
    )


class PublishResult(BaseModel):
    project_path: str
    component_path: str
    version: int
    version_path: str


class ProjectWriter:
    """Publishes code to ``PublishConfig.output_dir``.

    The first publish of a React + Material-UI component also writes the
    scaffolding files needed to run it with react-scripts. Each publish
    overwrites the current component and adds ``versions/v<N>.<ext>``.
    """

    def __init__(self, config: Optional[PublishConfig] = None):
        self.config = config or PublishConfig()

    @property
    def project_path(self) -> Path:
        return Path(self.config.output_dir)

    def _scaffold(self, code_format: CodeFormat) -> Dict[str, str]:
        if code_format != CodeFormat.REACT_MUI:
            return {}
        return {
            "package.json": _react_package_json(),
            "public/index.html": INDEX_HTML,
            "src/index.js": INDEX_JS,
            "src/App.jsx": APP_JSX,
        }

    def next_version(self, extension: str) -> int:
        versions_dir = self.project_path / "versions"
        if not versions_dir.is_dir():
            return 1
        pattern = re.compile(rf"^v(\d+){re.escape(extension)}$")
        numbers = [int(m.group(1)) for m in map(pattern.match, os.listdir(versions_dir)) if m]
        return max(numbers, default=0) + 1

    async def _write(self, relative_path: str, content: str) -> Path:
        path = self.project_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, mode="w", encoding="utf-8") as f:
            await f.write(content)
        return path

    async def publish(
        self,
        code: NormalizedCode,
        device_type="desktop",
        metadata: Optional[dict] = None,
    ) -> PublishResult:
        """
        Save ``code`` as the current component and as a new version.

        Raises:
            ConfigurationError: empty code or unknown device type
        """
        if not code.text.strip():
            raise ConfigurationError("No code provided")
        device_type = coerce_device_type(device_type)

        for relative_path, content in self._scaffold(code.code_format).items():
            if not (self.project_path / relative_path).exists():
                await self._write(relative_path, content)

        component_relative = COMPONENT_PATHS[code.code_format]
        extension = Path(component_relative).suffix
        header = "\n".join(
            [
                f"// Generated at: {datetime.now(timezone.utc).isoformat()}",
                f"// Device Type: {device_type}",
                f"// Metadata: {json.dumps(metadata or {}, sort_keys=True)}",
            ]
        )
        content = f"{header}\n\n{code.text}"

        version = self.next_version(extension)
        version_path = await self._write(f"versions/v{version}{extension}", content)
        component_path = await self._write(component_relative, content)
        LOG.info(f"Published {code.code_format} component as version {version} to {self.project_path}")

        return PublishResult(
            project_path=str(self.project_path),
            component_path=str(component_path),
            version=version,
            version_path=str(version_path),
        )
