from pydantic_ai.models import Model, KnownModelName

from screen2code.configs.base import resolve_api_key
from screen2code.configs.config import LLMConfig
from screen2code.configs.defaults import DEFAULT_AZURE_API_VERSION, DEFAULT_OLLAMA_BASE_URL
from screen2code.core.exceptions import ConfigurationError
from screen2code.core.types import ModelProvider

# Providers pydantic-ai resolves from a "<provider>:<model>" string
_STRING_PROVIDERS = {
    ModelProvider.OPENAI,
    ModelProvider.ANTHROPIC,
    ModelProvider.GOOGLE,
}


def create_pydantic_model(config: LLMConfig) -> Model | KnownModelName:
    model_provider = config.model_provider
    model_name = config.model_name

    if model_provider == ModelProvider.TESTING:
        # should be used for testing purposes only
        from pydantic_ai.models.test import TestModel
        return TestModel()

    if model_provider == ModelProvider.OLLAMA:
        from pydantic_ai.models.openai import OpenAIModel
        from pydantic_ai.providers.openai import OpenAIProvider
        return OpenAIModel(
            model_name=model_name,
            provider=OpenAIProvider(base_url=config.endpoint or DEFAULT_OLLAMA_BASE_URL),
        )

    api_key = resolve_api_key(model_provider, config.api_key)
    if not api_key:
        raise ConfigurationError(f"API key required for {model_provider}")

    if model_provider == ModelProvider.AZURE:
        if not config.endpoint:
            raise ConfigurationError("Azure OpenAI requires an endpoint")
        from pydantic_ai.models.openai import OpenAIModel
        from pydantic_ai.providers.azure import AzureProvider
        return OpenAIModel(
            model_name=model_name,
            provider=AzureProvider(
                azure_endpoint=config.endpoint,
                api_version=config.api_version or DEFAULT_AZURE_API_VERSION,
                api_key=api_key,
            ),
        )

    if model_provider in _STRING_PROVIDERS:
        if model_provider == ModelProvider.OPENAI and config.endpoint:
            from pydantic_ai.models.openai import OpenAIModel
            from pydantic_ai.providers.openai import OpenAIProvider
            return OpenAIModel(
                model_name=model_name,
                provider=OpenAIProvider(base_url=config.endpoint, api_key=api_key),
            )
        return f"{model_provider}:{model_name}"

    raise ConfigurationError(f"Model {model_provider}:{model_name} is not supported")
