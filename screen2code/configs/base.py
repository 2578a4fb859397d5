from pydantic_settings import SettingsConfigDict
from pathlib import Path
from typing import Optional
from pydantic import ValidationInfo
from screen2code.core.types import ModelProvider
import os
import sys

# Environment variables read by the provider SDKs behind pydantic-ai
PROVIDER_API_KEY_ENV = {
    ModelProvider.OPENAI: ("OPENAI_API_KEY",),
    ModelProvider.ANTHROPIC: ("ANTHROPIC_API_KEY",),
    ModelProvider.GOOGLE: ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    ModelProvider.AZURE: ("AZURE_OPENAI_API_KEY",),
}


def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to resource, works for dev and PyInstaller"""
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        base_path = Path(sys._MEIPASS)
    else:
        base_path = Path.cwd()

    return base_path / relative_path


def generate_model_config(env_dir: Path = Path('settings'), env_file: Path = '.env', env_prefix: str = '') -> SettingsConfigDict:
    env_file_path = get_resource_path(str(env_dir / env_file))

    return SettingsConfigDict(
        env_file=str(env_file_path),
        env_prefix=env_prefix,
        env_file_encoding='utf-8',
        env_nested_delimiter='__',
        extra='ignore',
        protected_namespaces=(),
    )


def _export_api_key(v: Optional[str], info: ValidationInfo) -> Optional[str]:
    """Expose a configured API key under the provider's environment variable"""
    provider = info.data.get('model_provider')
    if v and provider in PROVIDER_API_KEY_ENV:
        for env_name in PROVIDER_API_KEY_ENV[provider]:
            os.environ[env_name] = v

    return v


def resolve_api_key(provider: ModelProvider, api_key: Optional[str]) -> Optional[str]:
    """Return the key from config or the provider's environment variables"""
    if api_key:
        return api_key
    for env_name in PROVIDER_API_KEY_ENV.get(provider, ()):
        if os.environ.get(env_name):
            return os.environ[env_name]
    return None
