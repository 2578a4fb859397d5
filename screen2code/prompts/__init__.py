from .builder import (
    build_description_prompt,
    build_prompt,
    build_refine_prompt,
    system_prompt_for,
)

__all__ = [
    "build_description_prompt",
    "build_prompt",
    "build_refine_prompt",
    "system_prompt_for",
]
