from __future__ import annotations

from typing import AsyncGenerator, List, Optional

from pydantic import BaseModel, Field
from pydantic_graph import BaseNode, End, Graph

from screen2code.configs.config import LLMConfig, PreviewConfig
from screen2code.core.exceptions import (
    ConfigurationError,
    ModelInvocationError,
    PreviewUnavailableError,
    RefinementExhaustedError,
)
from screen2code.core.models import ImageInput, NormalizedCode, coerce_code_format, coerce_device_type
from screen2code.llm import Invoker
from screen2code.preview import PreviewResource
from screen2code.utils import FancyLogger

from .nodes.base import GenerationDeps, GenerationResult, GenerationState, GenerationStatus
from .nodes.describe import DescribeImageNode
from .nodes.generate import GenerateCodeNode
from .nodes.normalize import NormalizeCodeNode
from .nodes.preview import PreviewNode
from .nodes.refine import RefineCodeNode

LOG = FancyLogger(__name__)


class StreamingGenerationResult(BaseModel):
    """Progress record streamed while the generation graph runs"""

    status: GenerationStatus
    progress_message: str
    ui_description: str = ""
    code: Optional[NormalizedCode] = None
    quality_issues: List[str] = Field(default_factory=list)
    preview: Optional[PreviewResource] = None
    preview_error: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    retryable: bool = False

    @classmethod
    def from_node(cls, node: BaseNode, state: GenerationState) -> StreamingGenerationResult:
        """Create a StreamingGenerationResult from the node about to run"""
        if isinstance(node, DescribeImageNode):
            return cls(
                status=GenerationStatus.DESCRIBING,
                progress_message="Describing the screenshot",
            )
        elif isinstance(node, GenerateCodeNode):
            return cls(
                ui_description=state.ui_description,
                status=GenerationStatus.GENERATING,
                progress_message=f"Generating {state.code_format} code for a {state.device_type} layout",
            )
        elif isinstance(node, NormalizeCodeNode):
            return cls(
                ui_description=state.ui_description,
                status=GenerationStatus.NORMALIZING,
                progress_message="Normalizing model output",
            )
        elif isinstance(node, RefineCodeNode):
            return cls(
                ui_description=state.ui_description,
                code=state.code,
                quality_issues=list(state.quality_issues),
                status=GenerationStatus.REFINING,
                progress_message=f"Refining code to add: {', '.join(state.quality_issues)}",
            )
        elif isinstance(node, PreviewNode):
            return cls(
                ui_description=state.ui_description,
                code=state.code,
                quality_issues=list(state.quality_issues),
                status=GenerationStatus.PREVIEWING,
                progress_message="Building preview",
            )
        else:
            return cls(
                ui_description=state.ui_description,
                status=GenerationStatus.ERROR,
                progress_message=f"Unknown node type: {type(node).__name__}",
            )

    @classmethod
    def complete(cls, result: GenerationResult) -> StreamingGenerationResult:
        return cls(
            ui_description=result.ui_description,
            code=result.code,
            quality_issues=result.quality_issues,
            preview=result.preview,
            preview_error=result.preview_error,
            status=GenerationStatus.COMPLETE,
            progress_message="Code generation complete",
        )

    @classmethod
    def error(cls, state: GenerationState, exc: Exception) -> StreamingGenerationResult:
        """Create an error result that keeps whatever the run produced"""
        kind = None
        retryable = False
        if isinstance(exc, ModelInvocationError):
            kind = exc.kind.value
            retryable = exc.retryable
        elif isinstance(exc, ConfigurationError):
            kind = "configuration"
        elif isinstance(exc, RefinementExhaustedError):
            kind = "refinement_exhausted"
            retryable = True
        elif isinstance(exc, PreviewUnavailableError):
            kind = "preview"
            retryable = True

        return cls(
            ui_description=state.ui_description,
            code=state.code,
            quality_issues=list(state.quality_issues),
            status=GenerationStatus.ERROR,
            progress_message=f"An error occurred: {exc}",
            error_message=str(exc),
            error_kind=kind,
            retryable=retryable,
        )


generation_graph = Graph(
    nodes=[DescribeImageNode, GenerateCodeNode, NormalizeCodeNode, RefineCodeNode, PreviewNode]
)


def _prepare(
    ui_description: Optional[str],
    image: Optional[ImageInput],
    user_prompt: Optional[str],
    device_type,
    code_format,
    llm_config: Optional[LLMConfig],
    preview_config: Optional[PreviewConfig],
    invoker: Optional[Invoker],
    with_preview: bool,
):
    state = GenerationState(
        ui_description=(ui_description or "").strip(),
        user_prompt=user_prompt or "",
        device_type=coerce_device_type(device_type),
        code_format=coerce_code_format(code_format),
        image=image,
    )
    deps = GenerationDeps(
        llm_config=llm_config or LLMConfig(),
        preview_config=preview_config or PreviewConfig(),
        with_preview=with_preview,
    )
    if invoker is not None:
        deps.invoker = invoker

    if state.ui_description:
        start_node = GenerateCodeNode()
    elif image is not None:
        start_node = DescribeImageNode()
    else:
        raise ConfigurationError("An image or a UI description is required")
    return state, deps, start_node


async def stream_generation_progress(
    ui_description: Optional[str] = None,
    image: Optional[ImageInput] = None,
    user_prompt: Optional[str] = None,
    device_type="desktop",
    code_format="react-mui",
    llm_config: Optional[LLMConfig] = None,
    preview_config: Optional[PreviewConfig] = None,
    invoker: Optional[Invoker] = None,
    with_preview: bool = True,
) -> AsyncGenerator[StreamingGenerationResult, None]:
    """
    Stream generation progress through the graph.

    Starts by describing ``image`` when no description is given. Errors end
    the stream with an ERROR record instead of raising.
    """
    state = GenerationState(ui_description=(ui_description or "").strip())
    try:
        state, deps, start_node = _prepare(
            ui_description, image, user_prompt, device_type, code_format,
            llm_config, preview_config, invoker, with_preview,
        )
    except ConfigurationError as e:
        yield StreamingGenerationResult.error(state, e)
        return

    yield StreamingGenerationResult(
        ui_description=state.ui_description,
        status=GenerationStatus.STARTING,
        progress_message=f"Starting {state.code_format} generation",
    )

    try:
        async with generation_graph.iter(start_node, state=state, deps=deps, infer_name=False) as graph_run:
            next_node = graph_run.next_node
            while True:
                yield StreamingGenerationResult.from_node(next_node, state)

                next_node = await graph_run.next(next_node)

                if isinstance(next_node, End):
                    yield StreamingGenerationResult.complete(next_node.data)
                    break
                elif not isinstance(next_node, BaseNode):
                    raise TypeError(f"Invalid node type: {type(next_node)}")
    except Exception as e:
        LOG.error(f"Error in stream_generation_progress: {e}")
        yield StreamingGenerationResult.error(state, e)


async def generate_code(
    ui_description: Optional[str] = None,
    image: Optional[ImageInput] = None,
    user_prompt: Optional[str] = None,
    device_type="desktop",
    code_format="react-mui",
    llm_config: Optional[LLMConfig] = None,
    preview_config: Optional[PreviewConfig] = None,
    invoker: Optional[Invoker] = None,
    with_preview: bool = True,
) -> GenerationResult:
    """
    Run the whole graph and return the final result.

    Unlike the streaming version, errors propagate with their own type
    (``ConfigurationError``, ``ModelInvocationError``, ``RefinementExhaustedError``).
    """
    state, deps, start_node = _prepare(
        ui_description, image, user_prompt, device_type, code_format,
        llm_config, preview_config, invoker, with_preview,
    )
    result = await generation_graph.run(start_node, state=state, deps=deps, infer_name=False)
    return result.output
