from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from screen2code.configs.base import generate_model_config


class LoggingConfig(BaseSettings):
    model_config = generate_model_config(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    show_path: bool = False
    rich_tracebacks: bool = True
    tracebacks_show_locals: bool = False
    file_enabled: bool = False
    file_path: Path = Field(default=Path("logs/screen2code.log"))
    json_logging: bool = False
