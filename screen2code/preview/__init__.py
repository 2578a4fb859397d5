from .base import BasePreviewAdapter, PreviewResource
from .dartpad import DartPadPreviewAdapter
from .factory import PreviewAdapterFactory, build_preview
from .sandpack import SandpackPreviewAdapter
from .snack import SnackPreviewAdapter

__all__ = [
    "BasePreviewAdapter",
    "DartPadPreviewAdapter",
    "PreviewAdapterFactory",
    "PreviewResource",
    "SandpackPreviewAdapter",
    "SnackPreviewAdapter",
    "build_preview",
]
