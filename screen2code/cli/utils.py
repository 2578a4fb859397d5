import mimetypes
from pathlib import Path
from typing import Optional

from screen2code.configs import AppConfig
from screen2code.core.exceptions import ConfigurationError
from screen2code.core.models import ImageInput


def create_config(config_path: Optional[Path] = None) -> AppConfig:
    """Create configuration, reading ``config_path`` as the env file when given"""
    if config_path is None:
        return AppConfig()
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    return AppConfig(_env_file=str(config_path))


def load_image(path: Path) -> ImageInput:
    if not path.is_file():
        raise ConfigurationError(f"Image not found: {path}")
    media_type, _ = mimetypes.guess_type(path.name)
    if not media_type or not media_type.startswith("image/"):
        raise ConfigurationError(f"Not an image file: {path}")
    return ImageInput(data=path.read_bytes(), media_type=media_type, filename=path.name)
