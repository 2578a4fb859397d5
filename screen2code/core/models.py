from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from screen2code.core.exceptions import ConfigurationError
from screen2code.core.types import CodeFormat, DeviceType


def coerce_code_format(value) -> CodeFormat:
    if isinstance(value, CodeFormat):
        return value
    try:
        return CodeFormat(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unsupported code format: {value!r} (expected one of {', '.join(f.value for f in CodeFormat)})"
        ) from None


def coerce_device_type(value) -> DeviceType:
    if isinstance(value, DeviceType):
        return value
    try:
        return DeviceType(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unsupported device type: {value!r} (expected one of {', '.join(d.value for d in DeviceType)})"
        ) from None


class GenerationRequest(BaseModel):
    """Input of a single code generation"""

    model_config = ConfigDict(frozen=True)

    ui_description: str
    user_prompt: str = ""
    device_type: DeviceType = DeviceType.DESKTOP
    code_format: CodeFormat = CodeFormat.REACT_MUI

    @field_validator("code_format", mode="before")
    @classmethod
    def _check_code_format(cls, v):
        return coerce_code_format(v)

    @field_validator("device_type", mode="before")
    @classmethod
    def _check_device_type(cls, v):
        return coerce_device_type(v)

    @field_validator("user_prompt", mode="before")
    @classmethod
    def _none_prompt(cls, v):
        return v or ""


class ImageInput(BaseModel):
    """Screenshot bytes sent to the model for description generation"""

    data: bytes
    media_type: str = "image/png"
    filename: Optional[str] = None


class RawModelOutput(BaseModel):
    text: str = ""


class NormalizedCode(BaseModel):
    """Model output coerced into a single renderable unit"""

    text: str
    code_format: CodeFormat
    component_name: str
    fallback_reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None
