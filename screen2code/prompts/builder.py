"""Prompt construction for description and code generation.

Every function here is pure: identical inputs give identical prompts.
"""

from typing import Sequence

from screen2code.core.exceptions import ConfigurationError
from screen2code.core.models import GenerationRequest, coerce_code_format, coerce_device_type
from screen2code.core.types import CodeFormat
from screen2code.prompts.templates import (
    CODE_TEMPLATE,
    DEFAULT_USER_PROMPTS,
    DESCRIPTION_PROMPT,
    INTROS,
    REFINE_TEMPLATE,
    REQUIREMENTS,
    SYSTEM_PROMPT,
)


def _requirements(code_format: CodeFormat, device_type: str) -> str:
    # requirement lists contain literal braces, so no str.format here
    return REQUIREMENTS[code_format.value].replace("{device_type}", device_type)


def build_prompt(request: GenerationRequest) -> str:
    """Build the code-generation prompt for a request.

    Raises:
        ConfigurationError: empty UI description or unknown code format/device type
    """
    code_format = coerce_code_format(request.code_format)
    device_type = coerce_device_type(request.device_type)

    ui_description = (request.ui_description or "").strip()
    if not ui_description:
        raise ConfigurationError("A UI description is required to generate code")

    user_prompt = request.user_prompt.strip() or DEFAULT_USER_PROMPTS[code_format.value]

    return CODE_TEMPLATE.format(
        intro=INTROS[code_format.value],
        ui_description=ui_description,
        user_prompt=user_prompt,
        device_type=device_type.value,
        requirements=_requirements(code_format, device_type.value),
    ).strip()


def build_description_prompt() -> str:
    return DESCRIPTION_PROMPT.strip()


def system_prompt_for(code_format) -> str:
    """System prompt for code generation; the format is validated but the text is shared"""
    coerce_code_format(code_format)
    return SYSTEM_PROMPT.strip()


def build_refine_prompt(
    request: GenerationRequest,
    previous_code: str,
    issues: Sequence[str],
) -> str:
    """Ask the model to fix the listed quality issues in its previous answer."""
    code_format = coerce_code_format(request.code_format)
    device_type = coerce_device_type(request.device_type)
    if not issues:
        raise ValueError("build_refine_prompt needs at least one issue")

    return REFINE_TEMPLATE.format(
        code_format=code_format.value,
        issues="\n".join(f"- {issue}" for issue in issues),
        ui_description=request.ui_description.strip(),
        previous_code=previous_code.strip(),
        requirements=_requirements(code_format, device_type.value),
    ).strip()
