import pytest

from screen2code.core.exceptions import ConfigurationError
from screen2code.core.models import GenerationRequest
from screen2code.prompts import (
    build_description_prompt,
    build_prompt,
    build_refine_prompt,
    system_prompt_for,
)


def test_build_prompt_includes_request_fields():
    request = GenerationRequest(
        ui_description="A login form with email and password fields",
        user_prompt="Use a dark theme",
        device_type="mobile",
        code_format="react-mui",
    )
    prompt = build_prompt(request)

    assert "A login form with email and password fields" in prompt
    assert "Use a dark theme" in prompt
    assert "Device Type: mobile" in prompt
    assert '"GeneratedComponent"' in prompt
    assert "@mui/material" in prompt


def test_build_prompt_is_deterministic():
    request = GenerationRequest(ui_description="A settings screen", code_format="flutter")
    assert build_prompt(request) == build_prompt(request)


def test_build_prompt_uses_default_user_prompt():
    request = GenerationRequest(ui_description="A settings screen", user_prompt=None)
    prompt = build_prompt(request)
    assert "Create a faithful, functional Material-UI component" in prompt


@pytest.mark.parametrize(
    "code_format, expected",
    [
        ("react-native", '"App"'),
        ("flutter", '"MyApp"'),
        ("react-mui", "export default GeneratedComponent;"),
    ],
)
def test_build_prompt_per_format_requirements(code_format, expected):
    prompt = build_prompt(GenerationRequest(ui_description="A card", code_format=code_format))
    assert expected in prompt


def test_device_type_fills_requirement_placeholder():
    prompt = build_prompt(
        GenerationRequest(ui_description="A card", code_format="flutter", device_type="desktop")
    )
    assert "{device_type}" not in prompt
    assert "for desktop and other screen sizes" in prompt


def test_build_prompt_rejects_empty_description():
    with pytest.raises(ConfigurationError):
        build_prompt(GenerationRequest(ui_description="   "))


def test_unknown_code_format_is_configuration_error():
    with pytest.raises(ConfigurationError):
        GenerationRequest(ui_description="A card", code_format="vue")

    with pytest.raises(ConfigurationError):
        system_prompt_for("svelte")


def test_unknown_device_type_is_configuration_error():
    with pytest.raises(ConfigurationError):
        GenerationRequest(ui_description="A card", device_type="watch")


def test_description_prompt_asks_for_no_code():
    prompt = build_description_prompt()
    assert "Color scheme" in prompt
    assert "Do not write any code" in prompt


def test_refine_prompt_lists_issues_and_previous_code():
    request = GenerationRequest(ui_description="A login form", code_format="react-native")
    prompt = build_refine_prompt(
        request,
        "function App() { return null; }",
        ["accessibility props (accessibilityLabel or accessible)"],
    )

    assert "- accessibility props (accessibilityLabel or accessible)" in prompt
    assert "function App() { return null; }" in prompt
    assert "A login form" in prompt
    assert '"App"' in prompt


def test_refine_prompt_needs_issues():
    request = GenerationRequest(ui_description="A login form")
    with pytest.raises(ValueError):
        build_refine_prompt(request, "code", [])
