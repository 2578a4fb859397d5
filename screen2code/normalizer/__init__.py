from .imports import ImportTable, reconcile_imports
from .normalizer import normalize
from .passes import canonicalize_name, dedupe, strip_fences, validate
from .quality import QualityReport, check_quality

__all__ = [
    "ImportTable",
    "QualityReport",
    "canonicalize_name",
    "check_quality",
    "dedupe",
    "normalize",
    "reconcile_imports",
    "strip_fences",
    "validate",
]
