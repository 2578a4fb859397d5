from typing import Dict, Optional, Type

from screen2code.configs.config import PreviewConfig
from screen2code.core.exceptions import PreviewUnavailableError
from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat
from screen2code.preview.base import BasePreviewAdapter, PreviewResource
from screen2code.preview.dartpad import DartPadPreviewAdapter
from screen2code.preview.sandpack import SandpackPreviewAdapter
from screen2code.preview.snack import SnackPreviewAdapter
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)


class PreviewAdapterFactory:
    """Factory class for creating preview adapters based on the code format."""

    _adapter_map: Dict[CodeFormat, Type[BasePreviewAdapter]] = {
        CodeFormat.REACT_MUI: SandpackPreviewAdapter,
        CodeFormat.REACT_NATIVE: SnackPreviewAdapter,
        CodeFormat.FLUTTER: DartPadPreviewAdapter,
    }

    @classmethod
    def get_adapter_class(cls, code_format: CodeFormat) -> Type[BasePreviewAdapter]:
        adapter_class = cls._adapter_map.get(code_format)
        if adapter_class is None:
            raise PreviewUnavailableError(f"No preview adapter registered for {code_format}")
        return adapter_class

    @classmethod
    def create(cls, code_format: CodeFormat, config: Optional[PreviewConfig] = None) -> BasePreviewAdapter:
        """
        Create a preview adapter for a code format.

        Args:
            code_format: Format of the code to preview
            config: Sandbox URLs and limits

        Returns:
            BasePreviewAdapter instance

        Raises:
            PreviewUnavailableError: If no adapter is registered for the format
        """
        return cls.get_adapter_class(code_format)(config)

    @classmethod
    def register_adapter(cls, code_format: CodeFormat, adapter_class: Type[BasePreviewAdapter]):
        cls._adapter_map[code_format] = adapter_class
        LOG.info(f"Registered preview adapter {adapter_class.__name__} for {code_format}")


def build_preview(code: NormalizedCode, config: Optional[PreviewConfig] = None) -> PreviewResource:
    """Build a fresh preview resource for normalized code.

    Any failure in the adapter surfaces as ``PreviewUnavailableError``.
    """
    adapter = PreviewAdapterFactory.create(code.code_format, config)
    try:
        return adapter.build(code)
    except PreviewUnavailableError:
        raise
    except Exception as e:
        LOG.error(f"{type(adapter).__name__} failed: {e}")
        raise PreviewUnavailableError(f"Could not build {code.code_format} preview: {e}") from e
