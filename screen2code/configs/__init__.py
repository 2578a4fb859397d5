from .base import generate_model_config
from .config import (
    AppConfig,
    LLMConfig,
    PreviewConfig,
    PublishConfig,
)
from .logging_config import LoggingConfig
from screen2code.core.types import ModelProvider

__all__ = [
    "AppConfig",
    "generate_model_config",
    "LLMConfig",
    "LoggingConfig",
    "ModelProvider",
    "PreviewConfig",
    "PublishConfig",
]
