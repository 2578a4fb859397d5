import os
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from pydantic_ai import BinaryContent
from pydantic_ai.exceptions import ModelHTTPError

from screen2code.configs.config import LLMConfig
from screen2code.core.exceptions import (
    ConfigurationError,
    InvocationErrorKind,
    ModelInvocationError,
)
from screen2code.core.types import ModelProvider
from screen2code.llm import invoke


def _mock_agent(mock_agent_class, output="const x = 1;", side_effect=None):
    result = Mock()
    result.output = output
    mock_agent = mock_agent_class.return_value
    mock_agent.run = AsyncMock(return_value=result, side_effect=side_effect)
    return mock_agent


@pytest.mark.asyncio
@patch("screen2code.llm.invocation.Agent")
async def test_invoke_returns_completion_text(mock_agent_class, llm_config):
    mock_agent = _mock_agent(mock_agent_class, output="function GeneratedComponent() {}")

    text = await invoke("make a form", config=llm_config, system_prompt="be precise")

    assert text == "function GeneratedComponent() {}"
    assert mock_agent_class.call_args.kwargs["system_prompt"] == "be precise"
    mock_agent.run.assert_called_once()
    assert mock_agent.run.call_args.args[0] == "make a form"


@pytest.mark.asyncio
@patch("screen2code.llm.invocation.Agent")
async def test_invoke_sends_image_as_binary_content(mock_agent_class, llm_config, png_image):
    mock_agent = _mock_agent(mock_agent_class, output="A login screen")

    await invoke("describe", png_image, config=llm_config)

    user_prompt = mock_agent.run.call_args.args[0]
    assert user_prompt[0] == "describe"
    assert isinstance(user_prompt[1], BinaryContent)
    assert user_prompt[1].data == png_image.data
    assert user_prompt[1].media_type == "image/png"


@pytest.mark.asyncio
@patch("screen2code.llm.invocation.Agent")
async def test_invoke_passes_model_settings(mock_agent_class):
    mock_agent = _mock_agent(mock_agent_class)
    config = LLMConfig(model_provider=ModelProvider.TESTING, temperature=0.3, max_tokens=1234)

    await invoke("prompt", config=config)

    settings = mock_agent.run.call_args.kwargs["model_settings"]
    assert settings["temperature"] == 0.3
    assert settings["max_tokens"] == 1234


@pytest.mark.asyncio
@patch("screen2code.llm.invocation.Agent")
async def test_invoke_empty_completion(mock_agent_class, llm_config):
    _mock_agent(mock_agent_class, output="   \n")

    with pytest.raises(ModelInvocationError) as exc_info:
        await invoke("prompt", config=llm_config)
    assert exc_info.value.kind == InvocationErrorKind.EMPTY_RESPONSE
    assert exc_info.value.retryable


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, kind, retryable",
    [
        (ModelHTTPError(status_code=401, model_name="gpt-4o"), InvocationErrorKind.AUTH, False),
        (ModelHTTPError(status_code=429, model_name="gpt-4o"), InvocationErrorKind.RATE_LIMIT, True),
        (ModelHTTPError(status_code=500, model_name="gpt-4o"), InvocationErrorKind.UNKNOWN, True),
        (httpx.ConnectError("connection refused"), InvocationErrorKind.NETWORK, True),
        (RuntimeError("boom"), InvocationErrorKind.UNKNOWN, True),
    ],
)
@patch("screen2code.llm.invocation.Agent")
async def test_invoke_classifies_failures(mock_agent_class, error, kind, retryable, llm_config):
    _mock_agent(mock_agent_class, side_effect=error)

    with pytest.raises(ModelInvocationError) as exc_info:
        await invoke("prompt", config=llm_config)
    assert exc_info.value.kind == kind
    assert exc_info.value.retryable is retryable
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
@patch("screen2code.llm.invocation.Agent")
async def test_invoke_missing_api_key_is_configuration_error(mock_agent_class):
    with patch.dict(os.environ, {}, clear=True):
        config = LLMConfig(model_provider=ModelProvider.ANTHROPIC, model_name="claude", api_key=None)
        with pytest.raises(ConfigurationError):
            await invoke("prompt", config=config)
    mock_agent_class.assert_not_called()


@pytest.mark.asyncio
async def test_invoke_with_test_model(llm_config):
    text = await invoke("say something", config=llm_config)
    assert isinstance(text, str)
    assert text.strip()
