"""Lexical helpers shared by the JavaScript and Dart passes.

This is not a parser: it skips string literals and comments well enough to
match brackets in typical generated UI code. Quotes inside JSX text end at the
line break, so an apostrophe in ``<Text>Don't</Text>`` only hides the rest of
that line.
"""

from typing import Iterator, Tuple

_OPENERS = "{(["
_CLOSERS = "})]"
# characters that continue an expression onto the next line
_CONTINUATIONS = ".?:)]}{+-*/%&|=,<>"


def _skip_string(text: str, i: int, quote: str) -> int:
    n = len(text)
    i += 1
    while i < n:
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1
        if c == "\n" and quote != "`":
            return i
        i += 1
    return n


def code_positions(text: str, start: int = 0) -> Iterator[Tuple[int, str]]:
    """Yield (index, char) for characters outside strings and comments."""
    i = start
    n = len(text)
    while i < n:
        c = text[i]
        if c in "'\"`":
            i = _skip_string(text, i, c)
            continue
        if c == "/" and text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue
        if c == "/" and text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        yield i, c
        i += 1


def _next_line_starts_statement(text: str, newline_index: int) -> bool:
    rest = text[newline_index + 1:]
    for line in rest.splitlines():
        if not line.strip():
            continue
        first = line[0]
        return not first.isspace() and first not in _CONTINUATIONS
    return True


def declaration_end(text: str, start: int) -> int:
    """Return the index just past the declaration or statement starting at ``start``.

    Block declarations (``function X() {}``, ``class X {}``, ``void main() {}``)
    end at the brace closing their body. Everything else (``const X = ...``,
    ``export default X``, ``void main() => runApp(..)``) ends at a top-level
    semicolon, or at a line break followed by a new top-level statement.
    """
    depth = 0
    is_statement = False
    seen_block = False
    for i, c in code_positions(text, start):
        if c in _OPENERS:
            if c == "{" and depth == 0 and not is_statement:
                seen_block = True
            depth += 1
        elif c in _CLOSERS:
            depth = max(depth - 1, 0)
            if depth == 0 and c == "}" and seen_block:
                end = i + 1
                if text.startswith(";", end):
                    end += 1
                return end
        elif depth == 0:
            if c == "=" and not seen_block:
                is_statement = True
            elif c == ";":
                return i + 1
            elif c == "\n" and i > start and _next_line_starts_statement(text, i):
                return i
    return len(text)


def remove_span(text: str, start: int, end: int) -> str:
    return text[:start] + text[end:]
