"""Heuristic quality checks on normalized code.

These are substring and regex probes, not an analysis of the component tree.
Known false negatives: accessibility provided through a wrapper component,
responsiveness from flex/grid layout alone, or props spread from variables.
"""

import re
from typing import Callable, Dict, List

from pydantic import BaseModel, Field

from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat

Check = Callable[[str], bool]


class QualityReport(BaseModel):
    issues: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def _any(*patterns: str) -> Check:
    compiled = [re.compile(p) for p in patterns]
    return lambda text: any(p.search(text) for p in compiled)


QUALITY_CHECKS: Dict[CodeFormat, Dict[str, Check]] = {
    CodeFormat.REACT_MUI: {
        "accessibility attributes (aria-label or role)": _any(r"\baria-[a-z]+=", r"\brole="),
        "responsive design (useMediaQuery or breakpoints)": _any(
            r"\buseMediaQuery\b", r"\bbreakpoints\b", r"\b(?:xs|sm|md|lg|xl)\s*:"
        ),
    },
    CodeFormat.REACT_NATIVE: {
        "accessibility props (accessibilityLabel or accessible)": _any(
            r"\baccessibilityLabel\b", r"\baccessible\b", r"\baccessibilityRole\b"
        ),
        "responsive design (Dimensions or useWindowDimensions)": _any(
            r"\bDimensions\b", r"\buseWindowDimensions\b"
        ),
    },
    CodeFormat.FLUTTER: {
        "accessibility support (Semantics widgets or labels)": _any(
            r"\bSemantics\(", r"\bsemanticLabel\b", r"\bsemanticsLabel\b"
        ),
        "responsive design (MediaQuery or LayoutBuilder)": _any(r"\bMediaQuery\b", r"\bLayoutBuilder\b"),
    },
}


def check_quality(code: NormalizedCode) -> QualityReport:
    """List the quality properties ``code`` appears to be missing."""
    if code.is_fallback:
        return QualityReport(issues=[f"a usable component (output could not be normalized: {code.fallback_reason})"])

    checks = QUALITY_CHECKS[code.code_format]
    return QualityReport(issues=[label for label, check in checks.items() if not check(code.text)])
