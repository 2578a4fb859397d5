"""Base preview adapter and the resource it produces."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from pydantic import BaseModel, model_validator

from screen2code.configs.config import PreviewConfig
from screen2code.core.exceptions import PreviewUnavailableError
from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat


class PreviewResource(BaseModel):
    """What a sandbox needs to render one piece of generated code.

    URL-based sandboxes get ``url``; bundle-based sandboxes get
    ``bundle_files`` (path -> content) and the ``entry_file`` to boot from.
    """

    code_format: CodeFormat
    url: Optional[str] = None
    bundle_files: Optional[Dict[str, str]] = None
    entry_file: Optional[str] = None

    @model_validator(mode="after")
    def _one_kind(self):
        if (self.url is None) == (self.bundle_files is None):
            raise ValueError("A preview resource has either a url or bundle files")
        return self


class BasePreviewAdapter(ABC):
    """Abstract base class for all preview surfaces."""

    code_format: CodeFormat

    def __init__(self, config: Optional[PreviewConfig] = None):
        self.config = config or PreviewConfig()

    def _check_format(self, code: NormalizedCode) -> None:
        if code.code_format != self.code_format:
            raise PreviewUnavailableError(
                f"{type(self).__name__} cannot preview {code.code_format} code"
            )

    @abstractmethod
    def build(self, code: NormalizedCode) -> PreviewResource:
        """
        Build the preview resource for normalized code.

        Args:
            code: Output of the normalizer, in this adapter's format

        Returns:
            PreviewResource with either a url or a bundle

        Raises:
            PreviewUnavailableError: the code cannot be previewed here
        """
        pass
