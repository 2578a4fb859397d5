"""Code generation nodes package."""

from screen2code.agents.generation.nodes.base import (
    GenerationDeps,
    GenerationResult,
    GenerationState,
    GenerationStatus,
)
from screen2code.agents.generation.nodes.describe import DescribeImageNode
from screen2code.agents.generation.nodes.generate import GenerateCodeNode
from screen2code.agents.generation.nodes.normalize import NormalizeCodeNode
from screen2code.agents.generation.nodes.preview import PreviewNode
from screen2code.agents.generation.nodes.refine import RefineCodeNode

__all__ = [
    "GenerationDeps",
    "GenerationResult",
    "GenerationState",
    "GenerationStatus",
    "DescribeImageNode",
    "GenerateCodeNode",
    "NormalizeCodeNode",
    "PreviewNode",
    "RefineCodeNode",
]
