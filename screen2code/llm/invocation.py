"""Boundary to the model provider.

``invoke`` is the only place that talks to an LLM. Configuration travels with
every call, and anything that needs model text takes an ``Invoker`` so a fake
can be injected in its place.
"""

from typing import Optional, Protocol

import httpx
from pydantic_ai import Agent, BinaryContent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.settings import ModelSettings

from screen2code.configs.config import LLMConfig
from screen2code.core.exceptions import (
    ConfigurationError,
    InvocationErrorKind,
    ModelInvocationError,
)
from screen2code.core.models import ImageInput
from screen2code.utils import FancyLogger, create_pydantic_model

LOG = FancyLogger(__name__)


class Invoker(Protocol):
    async def __call__(
        self,
        prompt: str,
        image: Optional[ImageInput] = None,
        *,
        config: LLMConfig,
        system_prompt: Optional[str] = None,
    ) -> str:
        ...


def _classify_status(status_code: int) -> InvocationErrorKind:
    if status_code in (401, 403):
        return InvocationErrorKind.AUTH
    if status_code == 429:
        return InvocationErrorKind.RATE_LIMIT
    return InvocationErrorKind.UNKNOWN


def _classify_exception(exc: Exception) -> InvocationErrorKind:
    if isinstance(exc, ModelHTTPError):
        return _classify_status(exc.status_code)
    if isinstance(exc, UnexpectedModelBehavior):
        return InvocationErrorKind.EMPTY_RESPONSE
    if isinstance(exc, (httpx.TransportError, TimeoutError, ConnectionError)):
        return InvocationErrorKind.NETWORK

    # provider SDKs raise their own connection/auth error types
    name = type(exc).__name__
    if "Authentication" in name or "PermissionDenied" in name:
        return InvocationErrorKind.AUTH
    if "RateLimit" in name:
        return InvocationErrorKind.RATE_LIMIT
    if "Connection" in name or "Timeout" in name:
        return InvocationErrorKind.NETWORK
    return InvocationErrorKind.UNKNOWN


def _model_settings(config: LLMConfig) -> ModelSettings:
    settings = ModelSettings()
    if config.temperature is not None:
        settings["temperature"] = config.temperature
    if config.max_tokens is not None:
        settings["max_tokens"] = config.max_tokens
    return settings


async def invoke(
    prompt: str,
    image: Optional[ImageInput] = None,
    *,
    config: LLMConfig,
    system_prompt: Optional[str] = None,
) -> str:
    """
    Send a prompt, and optionally one image, to the configured model.

    Args:
        prompt: The user prompt
        image: Screenshot for description generation
        config: Provider, model and credentials for this call
        system_prompt: Optional system instructions

    Returns:
        The raw completion text, with no structural guarantees

    Raises:
        ConfigurationError: Missing credentials or unsupported provider
        ModelInvocationError: Auth, network, rate-limit, empty or unknown failure
    """
    model = create_pydantic_model(config)
    agent = Agent(
        model,
        system_prompt=system_prompt or (),
    )

    user_prompt = prompt
    if image is not None:
        user_prompt = [prompt, BinaryContent(data=image.data, media_type=image.media_type)]

    try:
        result = await agent.run(user_prompt, model_settings=_model_settings(config))
    except ConfigurationError:
        raise
    except Exception as e:
        kind = _classify_exception(e)
        LOG.error(f"Model invocation failed ({kind.value}) for {config.model_provider}:{config.model_name}: {e}")
        raise ModelInvocationError(f"Model invocation failed: {e}", kind=kind) from e

    text = result.output if isinstance(result.output, str) else str(result.output or "")
    if not text.strip():
        raise ModelInvocationError(
            "Model returned an empty completion",
            kind=InvocationErrorKind.EMPTY_RESPONSE,
        )

    LOG.debug(f"Model returned {len(text)} characters")
    return text
