from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field

from screen2code.configs.config import LLMConfig, PreviewConfig
from screen2code.core.models import GenerationRequest, ImageInput, NormalizedCode
from screen2code.core.types import CodeFormat, DeviceType
from screen2code.llm import Invoker, invoke
from screen2code.preview import PreviewResource


class GenerationStatus(IntEnum):
    """Progress of one generation run"""

    UNSPECIFIED = 0
    STARTING = 1
    DESCRIBING = 2
    GENERATING = 3
    NORMALIZING = 4
    REFINING = 5
    PREVIEWING = 6
    COMPLETE = 7
    ERROR = 8

    def to_string(self) -> str:
        return self.name.lower()


class GenerationResult(BaseModel):
    """Final result from the generation graph"""

    ui_description: str
    code: NormalizedCode
    quality_issues: List[str] = Field(default_factory=list)
    refine_attempts: int = 0
    preview: Optional[PreviewResource] = None
    preview_error: Optional[str] = None


@dataclass
class GenerationState:
    """State maintained throughout the generation graph execution"""

    ui_description: str = ""
    user_prompt: str = ""
    device_type: DeviceType = DeviceType.DESKTOP
    code_format: CodeFormat = CodeFormat.REACT_MUI
    image: Optional[ImageInput] = None
    raw_output: Optional[str] = None
    code: Optional[NormalizedCode] = None
    quality_issues: List[str] = field(default_factory=list)
    refine_count: int = 0
    preview: Optional[PreviewResource] = None
    preview_error: Optional[str] = None
    error_message: Optional[str] = None

    def request(self) -> GenerationRequest:
        return GenerationRequest(
            ui_description=self.ui_description,
            user_prompt=self.user_prompt,
            device_type=self.device_type,
            code_format=self.code_format,
        )

    def result(self) -> GenerationResult:
        return GenerationResult(
            ui_description=self.ui_description,
            code=self.code,
            quality_issues=list(self.quality_issues),
            refine_attempts=self.refine_count,
            preview=self.preview,
            preview_error=self.preview_error,
        )


@dataclass
class GenerationDeps:
    """Dependencies required by the generation graph"""

    llm_config: LLMConfig = None
    preview_config: PreviewConfig = None
    invoker: Invoker = invoke
    with_preview: bool = True
