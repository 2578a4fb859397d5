from typing import Union

from screen2code.core.exceptions import NormalizationFallback
from screen2code.core.models import NormalizedCode, RawModelOutput, coerce_code_format
from screen2code.core.types import CodeFormat
from screen2code.normalizer.fallbacks import FALLBACK_MARKER_RE, render_fallback
from screen2code.normalizer.imports import reconcile_imports
from screen2code.normalizer.passes import canonicalize_name, dedupe, strip_fences, validate
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

RawInput = Union[RawModelOutput, NormalizedCode, str, None]


def _raw_text(raw: RawInput) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (RawModelOutput, NormalizedCode)):
        return raw.text
    return str(raw)


def render_module(header: str, body: str) -> str:
    parts = [part.strip() for part in (header, body) if part.strip()]
    return "\n\n".join(parts) + "\n"


def _run_passes(text: str, code_format: CodeFormat) -> NormalizedCode:
    if not text.strip():
        raise NormalizationFallback("empty model output")

    body = strip_fences(text)
    if not body:
        raise NormalizationFallback("model output only contained code fences")

    table, body = reconcile_imports(body, code_format)
    body, name = canonicalize_name(body, code_format)
    body = dedupe(body, code_format, name)
    table.complete(body)

    module = render_module(table.render(), body)
    validate(module, code_format, name)

    marker = FALLBACK_MARKER_RE.search(body)
    return NormalizedCode(
        text=module,
        code_format=code_format,
        component_name=name,
        fallback_reason=marker.group("reason") if marker else None,
    )


def normalize(raw: RawInput, code_format) -> NormalizedCode:
    """
    Coerce untrusted model text into a single renderable unit.

    Passes run in order: fence strip, import reconcile, name canonicalize,
    dedupe, validate. When a pass gives up, the placeholder component for the
    format is normalized instead and ``fallback_reason`` records why. The
    result is a fixed point: normalizing it again returns an equal value.

    Raises:
        ConfigurationError: unknown code format
    """
    code_format = coerce_code_format(code_format)
    text = _raw_text(raw)

    try:
        return _run_passes(text, code_format)
    except NormalizationFallback as e:
        LOG.warning(f"Using placeholder {code_format} component: {e.reason}")
        return _run_passes(render_fallback(code_format, e.reason, text), code_format)
