from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from screen2code.configs.base import _export_api_key, generate_model_config
from screen2code.configs.defaults import (
    DEFAULT_CODESANDBOX_DEFINE_URL,
    DEFAULT_CODESANDBOX_EMBED_URL,
    DEFAULT_DARTPAD_URL,
    DEFAULT_MAX_REFINE_ATTEMPTS,
    DEFAULT_MAX_URL_LENGTH,
    DEFAULT_MODEL_NAME,
    DEFAULT_PUBLISH_DIR,
    DEFAULT_SNACK_EMBED_URL,
)
from screen2code.configs.logging_config import LoggingConfig
from screen2code.core.types import ModelProvider


class LLMConfig(BaseSettings):
    model_config = generate_model_config(env_prefix="LLM_")

    model_provider: ModelProvider = Field(
        default=ModelProvider.OPENAI,
        description="Model provider (openai, anthropic, google-gla, azure, ollama, testing)",
    )
    model_name: str = Field(
        default=DEFAULT_MODEL_NAME,
        description="Name of the model, or the deployment name for Azure",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key for the model provider",
    )
    endpoint: Optional[str] = Field(
        default=None,
        description="Endpoint override (Azure resource URL or an OpenAI-compatible base URL)",
    )
    api_version: Optional[str] = Field(
        default=None,
        description="API version for Azure OpenAI",
    )
    system_prompt: Optional[str] = Field(
        default=None,
        description="Overrides the built-in system prompt for code generation",
    )
    temperature: Optional[float] = Field(default=0.0, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=8000, gt=0)
    refine_attempts: int = Field(
        default=0,
        ge=0,
        le=DEFAULT_MAX_REFINE_ATTEMPTS,
        description="How many times to resend when the quality check reports missing properties",
    )

    @field_validator('api_key', mode='after')
    @classmethod
    def export_api_key(cls, v, info):
        return _export_api_key(v, info)


class PreviewConfig(BaseSettings):
    model_config = generate_model_config(env_prefix="PREVIEW_")

    dartpad_url: str = DEFAULT_DARTPAD_URL
    snack_embed_url: str = DEFAULT_SNACK_EMBED_URL
    snack_platform: str = "ios"
    snack_theme: str = "light"
    codesandbox_define_url: str = DEFAULT_CODESANDBOX_DEFINE_URL
    codesandbox_embed_url: str = DEFAULT_CODESANDBOX_EMBED_URL
    max_url_length: int = Field(
        default=DEFAULT_MAX_URL_LENGTH,
        gt=0,
        description="Longest URL-encoded Dart source embedded in a DartPad URL",
    )
    request_timeout: float = Field(default=30.0, gt=0)


class PublishConfig(BaseSettings):
    model_config = generate_model_config(env_prefix="PUBLISH_")

    output_dir: Path = Path(DEFAULT_PUBLISH_DIR)


class AppConfig(BaseSettings):
    model_config = generate_model_config()

    llm: LLMConfig = Field(default_factory=LLMConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
