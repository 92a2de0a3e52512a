"""Structure-aware scanning and editing of TypeScript / TSX source files.

``SourceFile`` scans a file once into a light structural index: matching
bracket pairs, string/comment/JSX-text regions, JSX elements and the JSX
expression containers among their children.  Queries (imports, the
default-exported function, object properties, array elements) are answered
from that index, and every edit splices the text and re-scans, so an edit can
never leave brackets unbalanced without the next scan noticing.

Only the shapes ``create-next-app`` produces need to be understood.  Regex
literals and generic arrow functions in ``.tsx`` files are not recognised;
a file that cannot be scanned raises :class:`SourceParseError`.
"""

from __future__ import annotations

import bisect
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(")]}")

_WORD_RE = re.compile(r"[A-Za-z_$][\w$]*")
_JSX_NAME_RE = re.compile(r"[A-Za-z_$][\w$.:-]*")
_JSX_PRECEDERS = frozenset("(,=:?{[&|!;")
_JSX_KEYWORDS = frozenset({"return", "default", "yield", "await", "case"})

_IMPORT_RE = re.compile(
    r"""import\s+(?:type\s+)?(?:(?P<clause>[^;'"]*?)\s*from\s*)?"""
    r"""(?P<q>['"])(?P<module>[^'"\n]+)(?P=q)[ \t]*;?""",
)
_DIRECTIVES_RE = re.compile(r"""\A(?:\s*(['"])use [\w ]+\1;?[ \t]*\r?\n?)*""")
_EXPORT_DEFAULT_FUNCTION_RE = re.compile(
    r"\bexport\s+default\s+(?:async\s+)?function\b\s*\*?\s*"
    r"(?P<name>[A-Za-z_$][\w$]*)?\s*(?:<[^>(]*>\s*)?\("
)
_EXPORT_DEFAULT_NAME_RE = re.compile(r"\bexport\s+default\s+(?P<name>[A-Za-z_$][\w$]*)\b")
_NOT_AN_IDENTIFIER = frozenset({"function", "class", "async", "abstract", "interface"})
_PROPERTY_KEY_RE = re.compile(r"""(?P<key>[A-Za-z_$][\w$]*|"[^"]*"|'[^']*')\s*:""")


class SourceParseError(Exception):
    """Raised when a source file cannot be scanned into a consistent structure."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        line: int | None = None,
    ) -> None:
        self.reason = message
        self.path = path
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        where = str(self.path) if self.path else "<source>"
        if self.line is not None:
            where += f":{self.line}"
        return f"{where}: {self.reason}"

    def with_path(self, path: Path | None) -> "SourceParseError":
        self.path = path
        self.args = (self._format(),)
        return self


# ---------------------------------------------------------------------------
# Structural records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)``."""

    start: int
    end: int

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class JsxElement:
    span: Span
    tag: str  # "" for fragments


@dataclass(frozen=True)
class JsxExpression:
    """A ``{...}`` container among the children of a JSX element."""

    span: Span
    parent_tag: str


@dataclass(frozen=True)
class ImportDeclaration:
    span: Span
    module: str
    names: tuple[str, ...]
    brace_open: int | None
    brace_close: int | None
    # Local names the declaration binds: default, namespace and named (after `as`).
    bindings: tuple[str, ...] = ()


@dataclass(frozen=True)
class FunctionDeclaration:
    name: str | None
    start: int
    params_open: int
    body_open: int
    body_close: int


@dataclass(frozen=True)
class Entry:
    """One comma-separated element of an array or object literal."""

    span: Span
    comma: int | None  # index of the comma following the entry, if any


@dataclass(frozen=True)
class Property:
    name: str | None
    entry: Entry
    value: Span | None


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


class _Scanner:
    """Single left-to-right pass building the structural index."""

    def __init__(self, text: str, jsx: bool) -> None:
        self.text = text
        self.n = len(text)
        self.jsx = jsx
        self.pairs: dict[int, int] = {}
        self.opaque: list[tuple[int, int, str]] = []
        self.elements: list[JsxElement] = []
        self.expressions: list[JsxExpression] = []
        self._prev = ""
        self._prev_word = ""

    def scan(self) -> None:
        self._code(0, None)

    # -- helpers -----------------------------------------------------------

    def _error(self, message: str, pos: int) -> SourceParseError:
        line = self.text.count("\n", 0, min(pos, self.n)) + 1
        return SourceParseError(message, line=line)

    def _mark(self, token: str) -> None:
        if token == ">" and self._prev == "=":
            token = "=>"
        self._prev = token
        self._prev_word = ""

    def _jsx_allowed(self) -> bool:
        if not self._prev:
            return True
        if self._prev == "a":
            return self._prev_word in _JSX_KEYWORDS
        return self._prev in _JSX_PRECEDERS or self._prev == "=>"

    def _opaque_text(self, start: int, end: int) -> None:
        if end > start:
            self.opaque.append((start, end, "jsx-text"))

    # -- code mode ---------------------------------------------------------

    def _code(self, pos: int, closer: str | None) -> int:
        """Scan code from *pos* up to the matching *closer*; return its index."""
        text = self.text
        while pos < self.n:
            ch = text[pos]
            if ch in " \t\r\n":
                pos += 1
            elif text.startswith("//", pos):
                end = text.find("\n", pos)
                end = self.n if end == -1 else end
                self.opaque.append((pos, end, "comment"))
                pos = end
            elif text.startswith("/*", pos):
                end = text.find("*/", pos + 2)
                if end == -1:
                    raise self._error("unterminated block comment", pos)
                self.opaque.append((pos, end + 2, "comment"))
                pos = end + 2
            elif ch in "'\"":
                pos = self._string(pos)
                self._mark('"')
            elif ch == "`":
                pos = self._template(pos)
                self._mark('"')
            elif ch in _OPENERS:
                self._mark(ch)
                close = self._code(pos + 1, _OPENERS[ch])
                self.pairs[pos] = close
                self._mark(text[close])
                pos = close + 1
            elif ch in _CLOSERS:
                if ch == closer:
                    return pos
                raise self._error(f"unexpected '{ch}'", pos)
            elif (
                ch == "<"
                and self.jsx
                and self._jsx_allowed()
                and (text.startswith(">", pos + 1) or _WORD_RE.match(text, pos + 1))
            ):
                pos = self._element(pos)
                self._mark(")")
            else:
                m = _WORD_RE.match(text, pos)
                if m:
                    self._prev = "a"
                    self._prev_word = m.group()
                    pos = m.end()
                else:
                    self._mark(ch)
                    pos += 1
        if closer is not None:
            raise self._error(f"missing '{closer}' before end of file", self.n)
        return pos

    def _string(self, pos: int) -> int:
        text = self.text
        quote = text[pos]
        i = pos + 1
        while i < self.n:
            c = text[i]
            if c == "\\":
                i += 2
                continue
            if c == quote:
                self.opaque.append((pos, i + 1, "string"))
                return i + 1
            if c == "\n":
                break
            i += 1
        raise self._error("unterminated string literal", pos)

    def _template(self, pos: int) -> int:
        text = self.text
        segment = pos
        i = pos + 1
        while i < self.n:
            c = text[i]
            if c == "\\":
                i += 2
                continue
            if c == "`":
                self.opaque.append((segment, i + 1, "string"))
                return i + 1
            if text.startswith("${", i):
                self.opaque.append((segment, i + 2, "string"))
                self._mark("{")
                close = self._code(i + 2, "}")
                self.pairs[i + 1] = close
                segment = close
                i = close + 1
                continue
            i += 1
        raise self._error("unterminated template literal", pos)

    # -- JSX mode ----------------------------------------------------------

    def _element(self, start: int) -> int:
        """Scan the JSX element opening at *start*; return the index past it."""
        text = self.text
        i = start + 1
        if text.startswith(">", i):
            tag = ""
            i += 1
        else:
            m = _JSX_NAME_RE.match(text, i)
            tag = m.group()
            i = m.end()
            while True:
                if i >= self.n:
                    raise self._error(f"unterminated JSX tag <{tag}>", start)
                c = text[i]
                if text.startswith("/>", i):
                    end = i + 2
                    self.elements.append(JsxElement(Span(start, end), tag))
                    return end
                if c == ">":
                    i += 1
                    break
                if c == "{":
                    self._mark("{")
                    close = self._code(i + 1, "}")
                    self.pairs[i] = close
                    i = close + 1
                elif c in "'\"":
                    j = text.find(c, i + 1)
                    if j == -1:
                        raise self._error("unterminated JSX attribute string", i)
                    self.opaque.append((i, j + 1, "string"))
                    i = j + 1
                else:
                    i += 1

        text_start = i
        while True:
            if i >= self.n:
                raise self._error(f"unterminated JSX element <{tag}>", start)
            c = text[i]
            if c == "{":
                self._opaque_text(text_start, i)
                self._mark("{")
                close = self._code(i + 1, "}")
                self.pairs[i] = close
                self.expressions.append(JsxExpression(Span(i, close + 1), tag))
                i = close + 1
                text_start = i
            elif c == "<":
                self._opaque_text(text_start, i)
                if text.startswith("</", i):
                    j = text.find(">", i)
                    if j == -1:
                        raise self._error(f"unterminated closing tag for <{tag}>", i)
                    closing = text[i + 2 : j].strip()
                    if closing != tag:
                        raise self._error(
                            f"expected </{tag}> but found </{closing}>", i
                        )
                    end = j + 1
                    self.elements.append(JsxElement(Span(start, end), tag))
                    return end
                i = self._element(i)
                text_start = i
            else:
                i += 1


# ---------------------------------------------------------------------------
# SourceFile
# ---------------------------------------------------------------------------


class SourceFile:
    """An immutable, scanned view of a source file.

    Editing methods return a new ``SourceFile``; the receiver is unchanged.

    Args:
        text: File content.
        path: Where the content came from (used for error messages and
            :meth:`save`).
        jsx: Whether JSX is recognised.  Defaults to ``True`` for ``.tsx``
            and ``.jsx`` paths.

    Raises:
        SourceParseError: If the content cannot be scanned.
    """

    def __init__(self, text: str, path: str | Path | None = None, jsx: bool | None = None) -> None:
        self.text = text
        self.path = Path(path) if path is not None else None
        if jsx is None:
            jsx = self.path is not None and self.path.suffix in (".tsx", ".jsx")
        self.jsx = jsx
        self.newline = "\r\n" if "\r\n" in text else "\n"

        scanner = _Scanner(text, jsx)
        try:
            scanner.scan()
        except SourceParseError as exc:
            raise exc.with_path(self.path) from None

        self.pairs = scanner.pairs
        self.jsx_elements = scanner.elements
        self.jsx_expressions = sorted(scanner.expressions, key=lambda e: e.span.start)
        self._opaque = sorted(scanner.opaque)
        self._opaque_starts = [start for start, _end, _kind in self._opaque]
        self._opaque_by_start = {start: end for start, end, _kind in self._opaque}
        self._elements_by_start = {e.span.start: e.span.end for e in scanner.elements}

    # -- I/O ---------------------------------------------------------------

    @classmethod
    def read(cls, path: str | Path) -> "SourceFile":
        file_path = Path(path)
        return cls(file_path.read_text(encoding="utf-8"), file_path)

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("SourceFile has no path to save to")
        target.write_text(self.text, encoding="utf-8")
        return target

    # -- Editing -----------------------------------------------------------

    def replace(self, start: int, end: int, new_text: str) -> "SourceFile":
        return SourceFile(self.text[:start] + new_text + self.text[end:], self.path, self.jsx)

    def insert(self, pos: int, new_text: str) -> "SourceFile":
        return self.replace(pos, pos, new_text)

    # -- Low-level queries -------------------------------------------------

    def slice(self, span: Span) -> str:
        return self.text[span.start : span.end]

    def is_code(self, pos: int) -> bool:
        """``True`` unless *pos* lies inside a string, comment or JSX text."""
        idx = bisect.bisect_right(self._opaque_starts, pos) - 1
        if idx < 0:
            return True
        _start, end, _kind = self._opaque[idx]
        return pos >= end

    def _comment_ending_at(self, pos: int) -> int | None:
        idx = bisect.bisect_right(self._opaque_starts, pos - 1) - 1
        if idx < 0:
            return None
        start, end, kind = self._opaque[idx]
        if kind == "comment" and start < pos <= end:
            return start
        return None

    def enclosing(self, pos: int) -> int | None:
        """Index of the innermost bracket opener strictly enclosing *pos*."""
        best: int | None = None
        for open_pos, close_pos in self.pairs.items():
            if open_pos < pos < close_pos and (best is None or open_pos > best):
                best = open_pos
        return best

    def is_top_level(self, pos: int) -> bool:
        return self.enclosing(pos) is None

    def finditer(
        self, pattern: str | re.Pattern[str], start: int = 0, end: int | None = None
    ) -> Iterator[re.Match[str]]:
        """Regex matches that begin in code (not strings, comments or JSX text)."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        stop = self._clamp(end)
        for m in regex.finditer(self.text, start, stop):
            if self.is_code(m.start()):
                yield m

    def _clamp(self, end: int | None) -> int:
        return len(self.text) if end is None else min(end, len(self.text))

    def line_indent(self, pos: int) -> str:
        line_start = self.text.rfind("\n", 0, pos) + 1
        m = re.match(r"[ \t]*", self.text[line_start:])
        return m.group() if m else ""

    # -- Imports -----------------------------------------------------------

    def imports(self) -> list[ImportDeclaration]:
        """Top-level import declarations in file order."""
        found: list[ImportDeclaration] = []
        for m in self.finditer(_IMPORT_RE):
            if not self.is_top_level(m.start()):
                continue
            if m.start() > 0 and (self.text[m.start() - 1].isalnum() or self.text[m.start() - 1] in "_$."):
                continue
            clause = m.group("clause") or ""
            names: tuple[str, ...] = ()
            bindings = _clause_bindings(clause)
            brace_open = brace_close = None
            brace = re.search(r"\{([^}]*)\}", clause)
            if brace:
                names = tuple(
                    part.strip().removeprefix("type ").split(" as ")[0].strip()
                    for part in brace.group(1).split(",")
                    if part.strip()
                )
                brace_open = m.start("clause") + brace.start()
                brace_close = m.start("clause") + brace.end() - 1
            found.append(
                ImportDeclaration(
                    span=Span(m.start(), m.end()),
                    module=m.group("module"),
                    names=names,
                    brace_open=brace_open,
                    brace_close=brace_close,
                    bindings=bindings,
                )
            )
        return found

    def find_imports(self, module: str) -> list[ImportDeclaration]:
        return [decl for decl in self.imports() if decl.module == module]

    def has_named_import(self, name: str, module: str) -> bool:
        return any(name in decl.names for decl in self.find_imports(module))

    def binds_name(self, name: str, module: str) -> bool:
        """True if an import from *module* already makes *name* available.

        Counts ``import name from``, ``import * as name from`` and named
        imports of *name* (aliased or not).
        """
        return any(
            name in decl.names or name in decl.bindings for decl in self.find_imports(module)
        )

    def add_named_import(self, name: str, module: str) -> "SourceFile":
        """Ensure ``import { name } from "module"`` is present.

        Extends an existing named-import clause for *module* when there is
        one; otherwise adds a declaration after the last import (or after the
        directive prologue when the file has no imports).
        """
        if self.has_named_import(name, module):
            return self

        for decl in self.find_imports(module):
            if decl.brace_open is None or decl.brace_close is None:
                continue
            inner = self.text[decl.brace_open + 1 : decl.brace_close]
            if not inner.strip():
                return self.replace(decl.brace_open + 1, decl.brace_close, f" {name} ")
            at = decl.brace_open + 1 + len(inner.rstrip())
            if inner.rstrip().endswith(","):
                return self.insert(at, f" {name},")
            return self.insert(at, f", {name}")

        declaration = f'import {{ {name} }} from "{module}";'
        existing = self.imports()
        if existing:
            return self.insert(existing[-1].span.end, self.newline + declaration)
        prologue_end = _DIRECTIVES_RE.match(self.text).end()
        return self.insert(prologue_end, declaration + self.newline)

    # -- Exports and functions ---------------------------------------------

    def default_export_name(self) -> str | None:
        """Identifier in an ``export default <identifier>`` statement, if any."""
        for m in self.finditer(_EXPORT_DEFAULT_NAME_RE):
            name = m.group("name")
            if name not in _NOT_AN_IDENTIFIER and self.is_top_level(m.start()):
                return name
        return None

    def default_export_function(self) -> FunctionDeclaration | None:
        """The function declaration that is the module's default export.

        Recognises ``export default function Name(...) {...}`` and a
        top-level ``function Name(...) {...}`` paired with
        ``export default Name``.
        """
        for m in self.finditer(_EXPORT_DEFAULT_FUNCTION_RE):
            if self.is_top_level(m.start()):
                return self._function_at(m.group("name"), m.start(), m.end() - 1)

        name = self.default_export_name()
        if name is None:
            return None
        pattern = re.compile(
            r"\b(?:export\s+)?(?:async\s+)?function\s*\*?\s*"
            + re.escape(name)
            + r"\s*(?:<[^>(]*>\s*)?\("
        )
        for m in self.finditer(pattern):
            if self.is_top_level(m.start()):
                return self._function_at(name, m.start(), m.end() - 1)
        return None

    def _function_at(self, name: str | None, start: int, params_open: int) -> FunctionDeclaration | None:
        params_close = self.pairs.get(params_open)
        if params_close is None:
            return None
        for pos in range(params_close + 1, len(self.text)):
            ch = self.text[pos]
            if ch == ";" and self.is_code(pos):
                return None  # overload signature, no body
            if ch == "{" and pos in self.pairs:
                return FunctionDeclaration(
                    name=name,
                    start=start,
                    params_open=params_open,
                    body_open=pos,
                    body_close=self.pairs[pos],
                )
        return None

    def return_statements(self, fn: FunctionDeclaration) -> list[Span]:
        """``return`` statements that are direct children of *fn*'s body."""
        spans: list[Span] = []
        for m in self.finditer(r"\breturn\b", fn.body_open + 1, fn.body_close):
            if self.enclosing(m.start()) != fn.body_open:
                continue
            end = self._statement_end(m.end(), fn.body_close)
            spans.append(Span(m.start(), end))
        return spans

    def _statement_end(self, pos: int, limit: int) -> int:
        while pos < limit:
            if pos in self._elements_by_start:
                pos = self._elements_by_start[pos]
            elif pos in self.pairs:
                pos = self.pairs[pos] + 1
            elif pos in self._opaque_by_start:
                pos = self._opaque_by_start[pos]
            elif self.text[pos] == ";":
                return pos + 1
            else:
                pos += 1
        return limit

    def jsx_expressions_in(self, span: Span) -> list[JsxExpression]:
        return [e for e in self.jsx_expressions if span.contains(e.span)]

    # -- Variables, objects and arrays -------------------------------------

    def variable_initializer(self, name: str) -> int | None:
        """Opening brace of ``const|let|var name[: T] = { ... }`` at top level."""
        pattern = re.compile(
            r"\b(?:const|let|var)\s+" + re.escape(name) + r"\b\s*(?::[^=;]+?)?=\s*"
        )
        for m in self.finditer(pattern):
            if not self.is_top_level(m.start()):
                continue
            pos = m.end()
            if pos < len(self.text) and self.text[pos] == "{" and pos in self.pairs:
                return pos
        return None

    def entries(self, open_pos: int) -> list[Entry]:
        """Comma-separated entries of the array/object literal opening at *open_pos*."""
        close = self.pairs[open_pos]
        found: list[Entry] = []
        segment = open_pos + 1
        pos = segment
        while pos < close:
            if pos in self._elements_by_start:
                pos = self._elements_by_start[pos]
            elif pos in self.pairs:
                pos = self.pairs[pos] + 1
            elif pos in self._opaque_by_start:
                pos = self._opaque_by_start[pos]
            elif self.text[pos] == ",":
                entry = self._entry(segment, pos, pos)
                if entry is not None:
                    found.append(entry)
                segment = pos + 1
                pos += 1
            else:
                pos += 1
        entry = self._entry(segment, close, None)
        if entry is not None:
            found.append(entry)
        return found

    def _entry(self, start: int, end: int, comma: int | None) -> Entry | None:
        text = self.text
        while start < end:
            if text[start].isspace():
                start += 1
            elif start in self._opaque_by_start and text.startswith(("//", "/*"), start):
                start = self._opaque_by_start[start]
            else:
                break
        while end > start:
            if text[end - 1].isspace():
                end -= 1
                continue
            comment_start = self._comment_ending_at(end)
            if comment_start is not None and comment_start >= start:
                end = comment_start
                continue
            break
        if start >= end:
            return None
        return Entry(Span(start, end), comma)

    def properties(self, object_open: int) -> list[Property]:
        props: list[Property] = []
        for entry in self.entries(object_open):
            m = _PROPERTY_KEY_RE.match(self.text, entry.span.start, entry.span.end)
            if not m:
                props.append(Property(None, entry, None))
                continue
            value_start = m.end()
            while value_start < entry.span.end and self.text[value_start].isspace():
                value_start += 1
            props.append(
                Property(m.group("key").strip("'\""), entry, Span(value_start, entry.span.end))
            )
        return props

    def get_property(self, object_open: int, name: str) -> Property | None:
        for prop in self.properties(object_open):
            if prop.name == name:
                return prop
        return None

    def array_literal(self, span: Span | None) -> int | None:
        """Opening bracket if *span* is exactly an array literal."""
        if span is None or span.start >= len(self.text) or self.text[span.start] != "[":
            return None
        close = self.pairs.get(span.start)
        if close is None or close + 1 != span.end:
            return None
        return span.start

    def append_entry(self, open_pos: int, value: str, pad: bool = False) -> "SourceFile":
        """Append *value* as the last entry of the literal opening at *open_pos*.

        Follows the literal's existing layout: multi-line literals get a new
        line at the first entry's indentation, and a trailing comma is kept
        when the literal already uses one.  ``pad`` surrounds the value with
        spaces when the literal is empty (``{ key: value }`` style).
        """
        close = self.pairs[open_pos]
        items = self.entries(open_pos)
        if not items:
            inner = self.text[open_pos + 1 : close]
            if not inner.strip():
                return self.replace(open_pos + 1, close, f" {value} " if pad else value)
            return self.insert(close, value)

        last = items[-1]
        multiline = "\n" in self.text[open_pos + 1 : items[0].span.start]
        if multiline:
            indent = self.line_indent(items[0].span.start)
            if last.comma is not None:
                return self.insert(last.comma + 1, f"{self.newline}{indent}{value},")
            return self.insert(last.span.end, f",{self.newline}{indent}{value}")
        if last.comma is not None:
            return self.insert(last.comma + 1, f" {value},")
        return self.insert(last.span.end, f", {value}")


def _clause_bindings(clause: str) -> tuple[str, ...]:
    """Local names bound by an import clause such as ``A, { b as c }`` or ``* as ns``."""
    bindings: list[str] = []
    brace = re.search(r"\{([^}]*)\}", clause)
    if brace:
        for part in brace.group(1).split(","):
            part = part.strip().removeprefix("type ").strip()
            if part:
                bindings.append(part.split(" as ")[-1].strip())
        clause = clause[: brace.start()] + clause[brace.end() :]
    for part in clause.split(","):
        part = part.strip()
        namespace = re.fullmatch(r"\*\s*as\s+([A-Za-z_$][\w$]*)", part)
        if namespace:
            bindings.append(namespace.group(1))
        elif _WORD_RE.fullmatch(part):
            bindings.append(part)
    return tuple(bindings)
