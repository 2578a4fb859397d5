"""Import parsing, filtering and re-insertion for generated modules."""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from screen2code.core.types import CodeFormat
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

JS_IMPORT_RE = re.compile(
    r"^[ \t]*import\s+(?!type\s)(?P<clause>[\w$*\s{},]+?)\s*from\s*"
    r"(?P<q>['\"])(?P<module>[^'\"\n]+)(?P=q)[ \t]*;?[ \t]*(?:\n|$)",
    re.M,
)
JS_SIDE_EFFECT_IMPORT_RE = re.compile(
    r"^[ \t]*import\s*(?P<q>['\"])(?P<module>[^'\"\n]+)(?P=q)[ \t]*;?[ \t]*(?:\n|$)",
    re.M,
)
DART_IMPORT_RE = re.compile(
    r"^[ \t]*import\s+(?P<q>['\"])(?P<uri>[^'\"\n]+)(?P=q)(?P<rest>[^;\n]*);[ \t]*(?:\n|$)",
    re.M,
)
DART_DIRECTIVE_RE = re.compile(
    r"^[ \t]*(?:export|part|library)\b[^;\n]*;[ \t]*(?:\n|$)",
    re.M,
)
_NAMESPACE_RE = re.compile(r"\*\s*as\s+([\w$]+)")
_DESTRUCTURE_RE = re.compile(r"\b(?:const|let|var)\s*\{([^}]*)\}\s*=")
_DECLARED_RE = re.compile(r"\b(?:function|class|const|let|var)\s+([A-Za-z_$][\w$]*)")

FLUTTER_MATERIAL = "package:flutter/material.dart"

REACT_HOOKS = (
    "useState", "useEffect", "useCallback", "useMemo", "useRef", "useContext",
    "useReducer", "useLayoutEffect", "useId", "useTransition", "useDeferredValue",
)

RN_COMPONENTS = (
    "ActivityIndicator", "Button", "FlatList", "Image", "ImageBackground",
    "KeyboardAvoidingView", "Modal", "Pressable", "RefreshControl", "SafeAreaView",
    "ScrollView", "SectionList", "StatusBar", "Switch", "Text", "TextInput",
    "TouchableHighlight", "TouchableOpacity", "TouchableWithoutFeedback", "View",
)
RN_APIS = (
    "Alert", "Animated", "Dimensions", "Keyboard", "Linking", "PixelRatio",
    "Platform", "StyleSheet",
)
RN_HOOKS = ("useWindowDimensions", "useColorScheme")
RN_PICKER_MODULE = "@react-native-picker/picker"

MUI_COMPONENTS = (
    "Accordion", "AccordionDetails", "AccordionSummary", "Alert", "AlertTitle",
    "AppBar", "Autocomplete", "Avatar", "Badge", "Box", "Breadcrumbs", "Button",
    "ButtonGroup", "Card", "CardActions", "CardContent", "CardHeader", "CardMedia",
    "Checkbox", "Chip", "CircularProgress", "Container", "CssBaseline", "Dialog",
    "DialogActions", "DialogContent", "DialogTitle", "Divider", "Drawer", "Fab",
    "FormControl", "FormControlLabel", "FormHelperText", "FormLabel", "Grid",
    "IconButton", "InputAdornment", "InputBase", "InputLabel", "LinearProgress",
    "Link", "List", "ListItem", "ListItemAvatar", "ListItemButton", "ListItemIcon",
    "ListItemText", "Menu", "MenuItem", "Pagination", "Paper", "Radio", "RadioGroup",
    "Rating", "Select", "Skeleton", "Slider", "Snackbar", "Stack", "Step",
    "StepLabel", "Stepper", "SvgIcon", "Switch", "Tab", "Table", "TableBody",
    "TableCell", "TableContainer", "TableHead", "TableRow", "Tabs", "TextField",
    "ThemeProvider", "Toolbar", "Tooltip", "Typography",
)
MUI_FUNCTIONS = ("useMediaQuery", "useTheme", "createTheme", "styled", "alpha")

_PRIMARY_MODULE = {
    CodeFormat.REACT_MUI: "@mui/material",
    CodeFormat.REACT_NATIVE: "react-native",
}


def _local_name(specifier: str) -> str:
    parts = specifier.split(" as ")
    return parts[-1].strip()


def _sort_key(specifier: str) -> Tuple[str, str]:
    return specifier.lower(), specifier


@dataclass
class ImportEntry:
    module: str
    default: Optional[str] = None
    namespace: Optional[str] = None
    named: List[str] = field(default_factory=list)
    # Dart only: trailing `as x` / `show y` clause
    suffix: str = ""

    def local_names(self) -> Set[str]:
        names = {_local_name(s) for s in self.named}
        if self.default:
            names.add(self.default)
        if self.namespace:
            names.add(self.namespace)
        return names

    def add_named(self, specifier: str) -> None:
        specifier = " ".join(specifier.split())
        local = _local_name(specifier)
        if local in self.local_names():
            return
        self.named.append(specifier)

    def render_js(self) -> List[str]:
        module = self.module
        named = sorted(self.named, key=_sort_key)
        braces = "{ " + ", ".join(named) + " }" if named else ""

        if self.namespace:
            head = f"{self.default}, * as {self.namespace}" if self.default else f"* as {self.namespace}"
            lines = [f"import {head} from '{module}';"]
            if braces:
                lines.append(f"import {braces} from '{module}';")
            return lines
        if self.default and braces:
            return [f"import {self.default}, {braces} from '{module}';"]
        if self.default:
            return [f"import {self.default} from '{module}';"]
        if braces:
            return [f"import {braces} from '{module}';"]
        return [f"import '{module}';"]

    def render_dart(self) -> str:
        return f"import '{self.module}'{self.suffix};"


class ImportTable:
    """Ordered, merged set of imports for one generated module."""

    def __init__(self, code_format: CodeFormat):
        self.code_format = code_format
        self.entries: Dict[str, ImportEntry] = {}

    def entry(self, module: str, suffix: str = "") -> ImportEntry:
        key = module + suffix
        if key not in self.entries:
            self.entries[key] = ImportEntry(module=module, suffix=suffix)
        return self.entries[key]

    def local_names(self) -> Set[str]:
        names: Set[str] = set()
        for entry in self.entries.values():
            names |= entry.local_names()
        return names

    def add(
        self,
        module: str,
        default: Optional[str] = None,
        namespace: Optional[str] = None,
        named: Iterable[str] = (),
    ) -> None:
        entry = self.entry(module)
        taken = self.local_names()
        if default and not entry.default and default not in taken:
            entry.default = default
        if namespace and not entry.namespace and namespace not in taken:
            entry.namespace = namespace
        for specifier in named:
            local = _local_name(specifier)
            if local in taken and local not in entry.local_names():
                LOG.debug(f"Skipping import of {local} from {module}: name already bound")
                continue
            entry.add_named(specifier)
            taken.add(local)

    def modules(self) -> List[str]:
        return [e.module for e in self.entries.values()]

    def render(self) -> str:
        if self.code_format == CodeFormat.FLUTTER:
            ordered = sorted(
                self.entries.values(),
                key=lambda e: 0 if (e.module == FLUTTER_MATERIAL and not e.suffix) else 1,
            )
            return "\n".join(e.render_dart() for e in ordered)

        primary = _PRIMARY_MODULE[self.code_format]
        rank = {"react": 0, primary: 1}
        ordered = sorted(self.entries.values(), key=lambda e: rank.get(e.module, 2))
        lines: List[str] = []
        for entry in ordered:
            lines.extend(entry.render_js())
        return "\n".join(lines)

    def complete(self, body: str) -> None:
        """Re-insert imports for names the body uses but never binds."""
        if self.code_format == CodeFormat.FLUTTER:
            self.entry(FLUTTER_MATERIAL)
            return

        declared = declared_names(body)

        def missing(name: str) -> bool:
            return name not in declared and name not in self.local_names()

        if "React" not in self.local_names():
            self.add("react", default="React")
        else:
            self.entry("react")

        hooks = [h for h in REACT_HOOKS if missing(h) and _calls(body, h)]
        if hooks:
            self.add("react", named=hooks)

        if self.code_format == CodeFormat.REACT_NATIVE:
            used = [c for c in RN_COMPONENTS if missing(c) and _uses_tag(body, c)]
            used += [a for a in RN_APIS if missing(a) and _uses_member(body, a)]
            used += [h for h in RN_HOOKS if missing(h) and _calls(body, h)]
            if used:
                self.add("react-native", named=used)
            if missing("Picker") and _uses_tag(body, "Picker"):
                self.add(RN_PICKER_MODULE, named=["Picker"])
        else:
            used = [c for c in MUI_COMPONENTS if missing(c) and _uses_tag(body, c)]
            used += [f for f in MUI_FUNCTIONS if missing(f) and _calls(body, f)]
            if used:
                self.add("@mui/material", named=used)


def _calls(body: str, name: str) -> bool:
    return re.search(rf"(?<![\w$.]){re.escape(name)}\s*\(", body) is not None


def _uses_tag(body: str, name: str) -> bool:
    return re.search(rf"<{re.escape(name)}(?=[\s/>.])", body) is not None


def _uses_member(body: str, name: str) -> bool:
    return re.search(rf"(?<![\w$.]){re.escape(name)}\.", body) is not None


def declared_names(body: str) -> Set[str]:
    names = set(_DECLARED_RE.findall(body))
    for group in _DESTRUCTURE_RE.findall(body):
        for part in group.split(","):
            part = part.split("=")[0].strip()
            if not part:
                continue
            names.add(part.split(":")[-1].strip())
    return names


def _parse_clause(clause: str) -> Tuple[Optional[str], Optional[str], List[str]]:
    clause = " ".join(clause.split())
    named: List[str] = []
    brace = re.search(r"\{(.*)\}", clause)
    if brace:
        named = [" ".join(s.split()) for s in brace.group(1).split(",") if s.strip()]
        clause = clause[:brace.start()] + clause[brace.end():]

    default = namespace = None
    for part in (p.strip() for p in clause.split(",")):
        if not part:
            continue
        ns = _NAMESPACE_RE.match(part)
        if ns:
            namespace = ns.group(1)
        else:
            default = part
    return default, namespace, named


def _keep_js_module(module: str, code_format: CodeFormat) -> bool:
    if module.startswith((".", "/")):
        return False
    if code_format == CodeFormat.REACT_NATIVE and (module.startswith("@mui/") or module == "react-dom"):
        return False
    if code_format == CodeFormat.REACT_MUI and module == "react-native":
        return False
    return True


def _reconcile_js(text: str, code_format: CodeFormat) -> Tuple[ImportTable, str]:
    table = ImportTable(code_format)
    matches = sorted(
        list(JS_IMPORT_RE.finditer(text)) + list(JS_SIDE_EFFECT_IMPORT_RE.finditer(text)),
        key=lambda m: m.start(),
    )
    dropped = []
    for m in matches:
        module = m.group("module")
        if not _keep_js_module(module, code_format):
            dropped.append(module)
            continue
        if "clause" not in m.groupdict():
            table.entry(module)
            continue

        default, namespace, named = _parse_clause(m.group("clause"))
        if code_format == CodeFormat.REACT_NATIVE and module == "react-native":
            pickers = [s for s in named if s.split(" as ")[0] == "Picker"]
            named = [s for s in named if s not in pickers]
            if pickers:
                table.add(RN_PICKER_MODULE, named=pickers)
            if not (default or namespace or named):
                continue
        table.add(module, default=default, namespace=namespace, named=named)

    if dropped:
        LOG.debug(f"Dropped imports not available in the {code_format} sandbox: {', '.join(dropped)}")

    body = JS_SIDE_EFFECT_IMPORT_RE.sub("", JS_IMPORT_RE.sub("", text))
    return table, body


def _reconcile_dart(text: str) -> Tuple[ImportTable, str]:
    table = ImportTable(CodeFormat.FLUTTER)
    table.entry(FLUTTER_MATERIAL)
    for m in DART_IMPORT_RE.finditer(text):
        uri = m.group("uri")
        if not uri.startswith(("package:", "dart:")):
            LOG.debug(f"Dropped local Dart import {uri}")
            continue
        rest = " ".join(m.group("rest").split())
        table.entry(uri, suffix=f" {rest}" if rest else "")

    body = DART_DIRECTIVE_RE.sub("", DART_IMPORT_RE.sub("", text))
    return table, body


def reconcile_imports(text: str, code_format: CodeFormat) -> Tuple[ImportTable, str]:
    """Split ``text`` into a merged import table and the remaining body.

    Imports that cannot resolve in the preview sandbox are dropped. Missing
    imports are added later by ``ImportTable.complete`` once the body has its
    final shape.
    """
    if code_format == CodeFormat.FLUTTER:
        return _reconcile_dart(text)
    return _reconcile_js(text, code_format)
