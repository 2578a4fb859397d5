"""Named normalization passes.

Each pass takes and returns plain text, so it can be tested on its own.
``canonicalize_name`` and ``validate`` raise ``NormalizationFallback`` when the
text cannot be turned into a renderable unit.
"""

import re
import textwrap
from typing import List, Optional, Tuple

from screen2code.core.exceptions import NormalizationFallback
from screen2code.core.types import COMPONENT_NAMES, CodeFormat
from screen2code.normalizer.scanning import declaration_end, remove_span
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

FENCED_BLOCK_RE = re.compile(r"```[^\n`]*\n(.*?)```", re.S)
FENCE_MARKER_RE = re.compile(
    r"```(?:jsx|javascript|js|tsx|typescript|ts|dart|flutter|react-native|react)?(?![\w-])"
    r"|```"
)

# top-level (column 0) component declarations
COMPONENT_DECL_RE = re.compile(
    r"^(?:async\s+)?function\s*\*?\s*(?P<fn>[A-Z][\w$]*)\s*\("
    r"|^class\s+(?P<cls>[A-Z][\w$]*)\b"
    r"|^(?:const|let|var)\s+(?P<var>[A-Z][\w$]*)\s*(?::[^=\n]+)?=(?![=>])(?!\s*['\"`\d\[{])",
    re.M,
)
EXPORT_DEFAULT_DECL_RE = re.compile(
    r"^export\s+default\s+(?=(?:async\s+)?function\b|class\b)", re.M
)
ANON_FUNCTION_RE = re.compile(r"^((?:async\s+)?function)\s*(\*?)\s*\(", re.M)
ANON_CLASS_RE = re.compile(r"^class(\s+extends\b|\s*\{)", re.M)
EXPORT_DEFAULT_ARROW_RE = re.compile(
    r"^export\s+default\s+(?=\(|async\s*\(|async\s+[A-Za-z_$][\w$]*\s*=>|[A-Za-z_$][\w$]*\s*=>)",
    re.M,
)
EXPORT_DEFAULT_RE = re.compile(r"^export\s+default\b", re.M)
EXPORT_DEFAULT_TARGET_RE = re.compile(
    r"^export\s+default\s+(?:(?:React\.)?(?:memo|forwardRef)\(\s*)?(?P<name>[A-Za-z_$][\w$]*)\s*\)?\s*;?[ \t]*$",
    re.M,
)
EXPORT_LIST_RE = re.compile(
    r"^export\s*\{[^}]*\}\s*(?:from\s*['\"][^'\"\n]*['\"])?[ \t]*;?[ \t]*$", re.M
)
MODULE_EXPORTS_RE = re.compile(r"^module\.exports\b", re.M)
EXPORT_KEYWORD_RE = re.compile(r"^export\s+(?=(?:async\s+)?function\b|class\b|const\b|let\b|var\b)", re.M)
# entry-point mounting is done by the preview host
MOUNT_RE = re.compile(
    r"^(?:ReactDOM\.|AppRegistry\.|root\.render\b|createRoot\(|(?:const|let|var)\s+root\s*=\s*(?:ReactDOM\.)?createRoot\b)",
    re.M,
)

# SCREAMING_CASE constants are not components
CONSTANT_NAME_RE = re.compile(r"[A-Z][A-Z0-9]*_[A-Z0-9_]*")

CONVENTIONAL_NAMES = ("App", "GeneratedComponent", "Main", "MyComponent")

RETURN_RE = re.compile(r"\breturn\b|=>\s*\(?\s*<")
JSX_TAG_RE = re.compile(r"<([A-Za-z][\w.]*)(\s[^<>]*)?/?>")

# Dart
DART_WIDGET_CLASS_RE = re.compile(
    r"^[ \t]*class\s+(?P<name>[A-Z]\w*)\s+extends\s+(?:StatelessWidget|StatefulWidget)\b", re.M
)
DART_CLASS_RE = re.compile(r"^[ \t]*class\s+(?P<name>[A-Z]\w*)\b", re.M)
DART_MAIN_RE = re.compile(
    r"^[ \t]*(?:void\s+|Future<void>\s+)?main\s*\(\s*(?:List<String>\s+\w+)?\s*\)\s*(?:async\s*)?(?:\{|=>)",
    re.M,
)
RUN_APP_RE = re.compile(r"runApp\(\s*(?:const\s+)?(?P<name>[A-Z]\w*)\s*\(")
RUN_APP_HOME_RE = re.compile(
    r"runApp\(\s*(?:const\s+)?(?:MaterialApp|CupertinoApp)\(\s*home:\s*(?:const\s+)?(?P<name>[A-Z]\w*)\s*\("
)
# widgets that provide localizations and a navigator to the tree
APP_WIDGET_RE = re.compile(r"\b(?:MaterialApp|CupertinoApp|WidgetsApp)(?:\.router)?\s*\(")


def _tidy(text: str) -> str:
    lines = [line.rstrip() for line in text.splitlines()]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()


def strip_fences(text: str) -> str:
    """Keep the longest fenced block if there is one, then drop stray fence markers."""
    blocks = FENCED_BLOCK_RE.findall(text)
    if blocks:
        text = max(blocks, key=len)
    text = FENCE_MARKER_RE.sub("", text)
    return _tidy(textwrap.dedent(text.strip("\n")))


def component_declarations(body: str) -> List[Tuple[str, int]]:
    """(name, offset) of every top-level PascalCase declaration, in order."""
    found = []
    for m in COMPONENT_DECL_RE.finditer(body):
        name = m.group("fn") or m.group("cls") or m.group("var")
        if CONSTANT_NAME_RE.fullmatch(name):
            continue
        found.append((name, m.start()))
    return found


def _remove_statements(body: str, pattern: re.Pattern) -> str:
    while True:
        m = pattern.search(body)
        if not m:
            return body
        body = remove_span(body, m.start(), declaration_end(body, m.start()))


def _strip_exports(body: str, name: str) -> Tuple[str, Optional[str]]:
    """Remove export and mount syntax, returning the body and the default-export target."""
    target = None
    m = EXPORT_DEFAULT_TARGET_RE.search(body)
    if m:
        target = m.group("name")

    # `export default function X` / `export default class X`
    while True:
        m = EXPORT_DEFAULT_DECL_RE.search(body)
        if not m:
            break
        rest = body[m.end():]
        anon_fn = ANON_FUNCTION_RE.match(rest)
        anon_cls = ANON_CLASS_RE.match(rest)
        if anon_fn:
            rest = f"{anon_fn.group(1)}{anon_fn.group(2)} {name}(" + rest[anon_fn.end():]
            target = target or name
        elif anon_cls:
            rest = f"class {name}" + rest[len("class"):]
            target = target or name
        else:
            named = COMPONENT_DECL_RE.match(rest)
            if named and target is None:
                target = named.group("fn") or named.group("cls")
        body = body[:m.start()] + rest

    # `export default () => ...`
    if EXPORT_DEFAULT_ARROW_RE.search(body):
        body = EXPORT_DEFAULT_ARROW_RE.sub(f"const {name} = ", body, count=1)
        target = target or name

    body = _remove_statements(body, EXPORT_DEFAULT_RE)
    body = _remove_statements(body, MODULE_EXPORTS_RE)
    body = _remove_statements(body, MOUNT_RE)
    body = EXPORT_LIST_RE.sub("", body)
    body = EXPORT_KEYWORD_RE.sub("", body)
    return body, target


def _rename(body: str, old: str, new: str) -> str:
    """Rename a component at declaration, JSX-tag and static-property positions."""
    escaped = re.escape(old)
    body = re.sub(
        rf"(\b(?:function|class|const|let|var)\s+|</?)({escaped})(?![\w$])",
        rf"\g<1>{new}",
        body,
    )
    body = re.sub(
        rf"(?<![\w$.]){escaped}(?=\.(?:propTypes|defaultProps|displayName)\b)",
        new,
        body,
    )
    return body


def _wrap_jsx(body: str, name: str) -> str:
    inner = textwrap.indent(body.strip().rstrip(";"), "    ")
    return f"function {name}() {{\n  return (\n{inner}\n  );\n}}"


def _canonicalize_react(body: str, code_format: CodeFormat) -> Tuple[str, str]:
    name = COMPONENT_NAMES[code_format]
    body, target = _strip_exports(body, name)
    body = _tidy(body)

    stripped = body.strip()
    declared = [n for n, _ in component_declarations(body)]

    if name in declared:
        main = name
    elif target in declared:
        main = target
    elif any(n in declared for n in CONVENTIONAL_NAMES):
        main = next(n for n in CONVENTIONAL_NAMES if n in declared)
    elif declared:
        # prefer PascalCase over all-caps names such as THEME
        pascal = [n for n in declared if n.upper() != n]
        main = (pascal or declared)[-1]
    elif stripped.startswith("<") and stripped.rstrip(";").endswith(">"):
        LOG.debug(f"Wrapping bare JSX in {name}")
        return _wrap_jsx(stripped, name), name
    else:
        raise NormalizationFallback("no component definition found")

    if main != name:
        LOG.debug(f"Renaming component {main} to {name}")
        body = _rename(body, main, name)
    return body, name


def _flutter_root(body: str) -> Optional[str]:
    run_app = RUN_APP_HOME_RE.search(body) or RUN_APP_RE.search(body)
    if run_app:
        return run_app.group("name")

    widgets = [m.group("name") for m in DART_WIDGET_CLASS_RE.finditer(body)]
    for conventional in ("MyApp", "App"):
        if conventional in widgets:
            return conventional

    for m in DART_CLASS_RE.finditer(body):
        end = declaration_end(body, m.start())
        if re.search(r"\breturn\s+(?:const\s+)?MaterialApp\(|=>\s*(?:const\s+)?MaterialApp\(", body[m.start():end]):
            return m.group("name")

    return widgets[0] if widgets else None


def _canonicalize_flutter(body: str) -> Tuple[str, str]:
    root = _flutter_root(body)
    if root is None:
        raise NormalizationFallback("no Flutter widget class found")

    if not DART_MAIN_RE.search(body):
        LOG.debug(f"Adding main() for root widget {root}")
        app = f"{root}()" if APP_WIDGET_RE.search(body) else f"MaterialApp(home: {root}())"
        body = f"{body.rstrip()}\n\nvoid main() {{\n  runApp({app});\n}}"
    return body, root


def canonicalize_name(body: str, code_format: CodeFormat) -> Tuple[str, str]:
    """Give the entry point its canonical name.

    Returns the rewritten body and the component name: ``GeneratedComponent``
    or ``App`` for the React formats, the root widget for Flutter.
    """
    if code_format == CodeFormat.FLUTTER:
        return _canonicalize_flutter(body)
    return _canonicalize_react(body, code_format)


def dedupe(body: str, code_format: CodeFormat, name: str) -> str:
    """Collapse duplicated entry points and leave exactly one default export."""
    if code_format == CodeFormat.FLUTTER:
        mains = list(DART_MAIN_RE.finditer(body))
        for m in reversed(mains[1:]):
            LOG.debug("Removing duplicate main()")
            body = remove_span(body, m.start(), declaration_end(body, m.start()))
        return _tidy(body)

    body = _remove_statements(body, EXPORT_DEFAULT_RE)
    duplicates = [offset for n, offset in component_declarations(body) if n == name][1:]
    for offset in reversed(duplicates):
        LOG.debug(f"Removing duplicate declaration of {name}")
        body = remove_span(body, offset, declaration_end(body, offset))
    return f"{_tidy(body)}\n\nexport default {name};"


def validate(text: str, code_format: CodeFormat, name: str) -> None:
    """Raise ``NormalizationFallback`` unless ``text`` looks renderable."""
    if code_format == CodeFormat.FLUTTER:
        if not DART_WIDGET_CLASS_RE.search(text):
            raise NormalizationFallback("no StatelessWidget or StatefulWidget class")
        if not DART_MAIN_RE.search(text) or "runApp(" not in text:
            raise NormalizationFallback("no main() calling runApp")
        if not RETURN_RE.search(text):
            raise NormalizationFallback("no build method returning a widget")
        return

    declared = [n for n, _ in component_declarations(text)]
    if declared.count(name) != 1:
        raise NormalizationFallback(f"expected exactly one {name} declaration, found {declared.count(name)}")
    exports = EXPORT_DEFAULT_RE.findall(text)
    if len(exports) != 1 or not text.rstrip().endswith(f"export default {name};"):
        raise NormalizationFallback(f"expected a single trailing export default {name}")
    if not RETURN_RE.search(text):
        raise NormalizationFallback("component does not return any JSX")
    if code_format == CodeFormat.REACT_MUI and not JSX_TAG_RE.search(text):
        raise NormalizationFallback("no JSX element found")
