from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from screen2code.agents.generation.nodes.base import GenerationDeps, GenerationResult, GenerationState
from screen2code.prompts import build_prompt, system_prompt_for

if TYPE_CHECKING:
    from screen2code.agents.generation.nodes import NormalizeCodeNode


@dataclass
class GenerateCodeNode(BaseNode[GenerationState, GenerationDeps, GenerationResult]):
    """Node that asks the model for code matching the UI description"""

    async def run(self, ctx: GraphRunContext[GenerationState, GenerationDeps]) -> "NormalizeCodeNode":
        llm_config = ctx.deps.llm_config
        prompt = build_prompt(ctx.state.request())

        try:
            ctx.state.raw_output = await ctx.deps.invoker(
                prompt,
                config=llm_config,
                system_prompt=llm_config.system_prompt or system_prompt_for(ctx.state.code_format),
            )
        except Exception as e:
            ctx.state.error_message = f"Error generating code: {e}"
            raise

        from screen2code.agents.generation.nodes import NormalizeCodeNode

        return NormalizeCodeNode()
