"""Type definitions for CLI arguments."""
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional


@dataclass
class BaseCommandArgs:
    """Base arguments for all commands."""
    verbose: bool
    config: Optional[Path]


@dataclass
class DescribeCommandArgs(BaseCommandArgs):
    """Arguments for the describe command."""
    command: Literal["describe"]
    image: Path = None


@dataclass
class GenerateCommandArgs(BaseCommandArgs):
    """Arguments for the generate command."""
    command: Literal["generate"]
    image: Optional[Path] = None
    description: Optional[str] = None
    code_format: str = "react-mui"
    device_type: str = "desktop"
    prompt: str = ""
    output: Optional[Path] = None
    preview: bool = False


@dataclass
class PreviewCommandArgs(BaseCommandArgs):
    """Arguments for the preview command."""
    command: Literal["preview"]
    file: Path = None
    code_format: str = "react-mui"
    register: bool = False


@dataclass
class ServeCommandArgs(BaseCommandArgs):
    """Arguments for the serve command."""
    command: Literal["serve"]
    host: str = "127.0.0.1"
    port: int = 8000
