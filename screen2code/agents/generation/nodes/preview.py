from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from screen2code.agents.generation.nodes.base import GenerationDeps, GenerationResult, GenerationState
from screen2code.core.exceptions import PreviewUnavailableError
from screen2code.preview import build_preview
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)


@dataclass
class PreviewNode(BaseNode[GenerationState, GenerationDeps, GenerationResult]):
    """Node that builds the preview resource; a failure here never loses the code"""

    async def run(self, ctx: GraphRunContext[GenerationState, GenerationDeps]) -> End[GenerationResult]:
        try:
            ctx.state.preview = build_preview(ctx.state.code, ctx.deps.preview_config)
        except PreviewUnavailableError as e:
            LOG.warning(f"Preview unavailable: {e}")
            ctx.state.preview_error = str(e)

        return End(ctx.state.result())
