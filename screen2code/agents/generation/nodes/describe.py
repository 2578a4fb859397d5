from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from screen2code.agents.generation.nodes.base import GenerationDeps, GenerationResult, GenerationState
from screen2code.core.exceptions import ConfigurationError
from screen2code.prompts import build_description_prompt
from screen2code.utils import FancyLogger

if TYPE_CHECKING:
    from screen2code.agents.generation.nodes import GenerateCodeNode

LOG = FancyLogger(__name__)


@dataclass
class DescribeImageNode(BaseNode[GenerationState, GenerationDeps, GenerationResult]):
    """Node that turns the screenshot into a detailed UI description"""

    async def run(self, ctx: GraphRunContext[GenerationState, GenerationDeps]) -> "GenerateCodeNode":
        if ctx.state.image is None:
            raise ConfigurationError("An image or a UI description is required")

        try:
            description = await ctx.deps.invoker(
                build_description_prompt(),
                ctx.state.image,
                config=ctx.deps.llm_config,
            )
        except Exception as e:
            ctx.state.error_message = f"Error describing image: {e}"
            raise

        ctx.state.ui_description = description.strip()
        LOG.debug(f"Image described in {len(ctx.state.ui_description)} characters")

        from screen2code.agents.generation.nodes import GenerateCodeNode

        return GenerateCodeNode()
