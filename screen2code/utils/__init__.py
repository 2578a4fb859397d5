from .fancy_log import FancyLogger, get_logger, setup_logger
from .model_provider import create_pydantic_model

__all__ = [
    "FancyLogger",
    "get_logger",
    "setup_logger",
    "create_pydantic_model",
]
