from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from screen2code.agents.generation.nodes.base import GenerationDeps, GenerationResult, GenerationState
from screen2code.prompts import build_refine_prompt, system_prompt_for
from screen2code.utils import FancyLogger

if TYPE_CHECKING:
    from screen2code.agents.generation.nodes import NormalizeCodeNode

LOG = FancyLogger(__name__)


@dataclass
class RefineCodeNode(BaseNode[GenerationState, GenerationDeps, GenerationResult]):
    """Node that resends the previous code together with its quality issues"""

    async def run(self, ctx: GraphRunContext[GenerationState, GenerationDeps]) -> "NormalizeCodeNode":
        state = ctx.state
        llm_config = ctx.deps.llm_config
        state.refine_count += 1
        LOG.info(
            f"Refine attempt {state.refine_count}/{llm_config.refine_attempts}: "
            f"{', '.join(state.quality_issues)}"
        )

        prompt = build_refine_prompt(state.request(), state.code.text, state.quality_issues)
        try:
            state.raw_output = await ctx.deps.invoker(
                prompt,
                config=llm_config,
                system_prompt=llm_config.system_prompt or system_prompt_for(state.code_format),
            )
        except Exception as e:
            state.error_message = f"Error refining code: {e}"
            raise

        from screen2code.agents.generation.nodes import NormalizeCodeNode

        return NormalizeCodeNode()
