from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pydantic_graph import BaseNode, End, GraphRunContext

from screen2code.agents.generation.nodes.base import GenerationDeps, GenerationResult, GenerationState
from screen2code.core.exceptions import RefinementExhaustedError
from screen2code.normalizer import check_quality, normalize
from screen2code.utils import FancyLogger

if TYPE_CHECKING:
    from screen2code.agents.generation.nodes import PreviewNode, RefineCodeNode

LOG = FancyLogger(__name__)


@dataclass
class NormalizeCodeNode(BaseNode[GenerationState, GenerationDeps, GenerationResult]):
    """Node that normalizes the raw completion and decides whether to refine it"""

    async def run(
        self, ctx: GraphRunContext[GenerationState, GenerationDeps]
    ) -> Union["RefineCodeNode", "PreviewNode", End[GenerationResult]]:
        state = ctx.state
        state.code = normalize(state.raw_output, state.code_format)
        state.quality_issues = check_quality(state.code).issues

        max_attempts = ctx.deps.llm_config.refine_attempts
        if state.quality_issues and max_attempts > 0:
            if state.refine_count < max_attempts:
                from screen2code.agents.generation.nodes import RefineCodeNode

                return RefineCodeNode()
            state.error_message = f"Quality issues remain: {', '.join(state.quality_issues)}"
            raise RefinementExhaustedError(state.quality_issues, state.refine_count, code=state.code)

        if state.quality_issues:
            LOG.warning(
                f"Generated {state.code_format} code misses: {', '.join(state.quality_issues)}",
                extra={"code_format": state.code_format.value},
            )

        if not ctx.deps.with_preview:
            return End(state.result())

        from screen2code.agents.generation.nodes import PreviewNode

        return PreviewNode()
