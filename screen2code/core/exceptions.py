"""Error kinds raised across the generation pipeline."""

from enum import Enum
from typing import Optional


class Screen2CodeError(Exception):
    """Base error for screen2code"""


class ConfigurationError(Screen2CodeError):
    """Bad enum value, empty description or missing credentials. Never retried."""


class InvocationErrorKind(str, Enum):
    AUTH = "auth"
    NETWORK = "network"
    RATE_LIMIT = "rate_limit"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


class ModelInvocationError(Screen2CodeError):
    """The model endpoint failed or returned nothing usable."""

    def __init__(self, message: str, kind: InvocationErrorKind = InvocationErrorKind.UNKNOWN):
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind != InvocationErrorKind.AUTH


class NormalizationFallback(Screen2CodeError):
    """Raised by a normalizer pass when the text cannot be coerced.

    ``normalize`` catches it and returns the placeholder component, so callers
    only ever see it as ``NormalizedCode.fallback_reason``.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class PreviewUnavailableError(Screen2CodeError):
    """A preview surface could not be built or registered."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RefinementExhaustedError(Screen2CodeError):
    """Quality issues remained after the allowed refine attempts."""

    def __init__(self, issues: list[str], attempts: int, code=None):
        super().__init__(
            f"Generated code still misses {', '.join(issues)} after {attempts} refine attempt(s)"
        )
        self.issues = issues
        self.attempts = attempts
        # last NormalizedCode produced, still usable
        self.code = code


class ImageNotFoundError(Screen2CodeError):
    def __init__(self, image_id: str):
        super().__init__(f"No image found with id: {image_id}")
        self.image_id = image_id
