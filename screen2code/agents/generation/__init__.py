from .generation_graph import (
    StreamingGenerationResult,
    generate_code,
    generation_graph,
    stream_generation_progress,
)
from .nodes import GenerationDeps, GenerationResult, GenerationState, GenerationStatus

__all__ = [
    "GenerationDeps",
    "GenerationResult",
    "GenerationState",
    "GenerationStatus",
    "StreamingGenerationResult",
    "generate_code",
    "generation_graph",
    "stream_generation_progress",
]
