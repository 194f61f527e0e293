"""Go source header parsing.

Reads the package clause and the import declarations at the top of a Go
source file. Scanning stops at the first top-level declaration that is not an
import, so the body of the file is never tokenized.
"""
from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gop.core.exceptions import ParseError

# Characters Go rejects in import paths, in addition to spaces and
# non-printable characters.
_ILLEGAL_IMPORT_CHARS = frozenset("!\"#$%&'()*,:;<=>?[\\]^`{|}\ufffd")

IDENT = "ident"
STRING = "string"
PUNCT = "punct"
EOF = "eof"


@dataclass(frozen=True, slots=True)
class ImportSpec:
    """A single import declaration.

    Attributes:
        path: Import path string
        name: Local name (``_``, ``.`` or an identifier), if given
        line: 1-based line of the path literal
    """

    path: str
    name: Optional[str] = None
    line: int = 0


@dataclass(frozen=True, slots=True)
class FileHeader:
    """Package clause and imports of one file."""

    package: str
    imports: Tuple[ImportSpec, ...] = ()

    @property
    def import_paths(self) -> List[str]:
        return [spec.path for spec in self.imports]


class _Scanner:
    """On-demand tokenizer for the subset of Go needed by the header."""

    def __init__(self, source: str, filename: str) -> None:
        self.src = source
        self.filename = filename
        self.pos = 0
        self.line = 1

    def error(self, message: str, line: Optional[int] = None) -> ParseError:
        at = self.line if line is None else line
        return ParseError(
            f"{self.filename}:{at}: {message}",
            context={"file": self.filename, "line": at},
        )

    def _skip_space_and_comments(self) -> None:
        src = self.src
        while self.pos < len(src):
            ch = src[self.pos]
            if ch == "\n":
                self.line += 1
                self.pos += 1
            elif ch in " \t\r\ufeff":
                self.pos += 1
            elif src.startswith("//", self.pos):
                end = src.find("\n", self.pos)
                self.pos = len(src) if end < 0 else end
            elif src.startswith("/*", self.pos):
                end = src.find("*/", self.pos + 2)
                if end < 0:
                    raise self.error("comment not terminated")
                self.line += src.count("\n", self.pos, end)
                self.pos = end + 2
            else:
                return

    def next(self) -> Tuple[str, str, int]:
        """Return the next ``(kind, value, line)`` token."""
        self._skip_space_and_comments()
        src = self.src
        if self.pos >= len(src):
            return EOF, "", self.line

        start_line = self.line
        ch = src[self.pos]

        if ch.isalpha() or ch == "_":
            end = self.pos + 1
            while end < len(src) and (src[end].isalnum() or src[end] == "_"):
                end += 1
            value = src[self.pos:end]
            self.pos = end
            return IDENT, value, start_line

        if ch == '"':
            return STRING, self._interpreted_string(), start_line

        if ch == "`":
            end = src.find("`", self.pos + 1)
            if end < 0:
                raise self.error("raw string literal not terminated")
            value = src[self.pos + 1:end].replace("\r", "")
            self.line += src.count("\n", self.pos, end)
            self.pos = end + 1
            return STRING, value, start_line

        self.pos += 1
        return PUNCT, ch, start_line

    def _interpreted_string(self) -> str:
        src = self.src
        end = self.pos + 1
        while True:
            if end >= len(src) or src[end] == "\n":
                raise self.error("string literal not terminated")
            if src[end] == "\\":
                end += 2
                continue
            if src[end] == '"':
                break
            end += 1
        body = src[self.pos + 1:end]
        self.pos = end + 1
        if "\\" not in body:
            return body
        try:
            return ast.literal_eval('"' + body + '"')
        except (ValueError, SyntaxError) as exc:
            raise self.error(f"invalid escape in string literal: {body!r}") from exc


def _validate_import_path(path: str, scanner: _Scanner, line: int) -> None:
    if not path:
        raise scanner.error("invalid import path: empty string", line)
    for ch in path:
        if ch in _ILLEGAL_IMPORT_CHARS or ch.isspace() or not ch.isprintable():
            raise scanner.error(f"invalid import path: {path!r}", line)
    if path.startswith("./") or path.startswith("../") or path in {".", ".."}:
        return
    if any(part in {"", ".", ".."} for part in path.split("/")):
        raise scanner.error(f"invalid import path: {path!r}", line)


def parse_file_header(source: str, *, filename: str = "<source>") -> FileHeader:
    """Parse the package clause and import declarations of a Go file.

    Raises:
        ParseError: On a missing package clause, an unterminated literal,
            comment or import group, or an invalid import path.
    """
    scanner = _Scanner(source, filename)

    kind, value, line = scanner.next()
    if kind != IDENT or value != "package":
        raise scanner.error("expected 'package' clause", line)
    kind, package, line = scanner.next()
    if kind != IDENT:
        raise scanner.error("expected package name", line)

    imports: List[ImportSpec] = []
    kind, value, line = scanner.next()
    while True:
        if kind == PUNCT and value == ";":
            kind, value, line = scanner.next()
            continue
        if kind != IDENT or value != "import":
            break

        kind, value, line = scanner.next()
        if kind == PUNCT and value == "(":
            kind, value, line = scanner.next()
            while not (kind == PUNCT and value == ")"):
                if kind == EOF:
                    raise scanner.error("import group not terminated", line)
                if kind == PUNCT and value == ";":
                    kind, value, line = scanner.next()
                    continue
                spec = _import_spec(scanner, kind, value, line)
                imports.append(spec)
                kind, value, line = scanner.next()
        else:
            imports.append(_import_spec(scanner, kind, value, line))
        kind, value, line = scanner.next()

    return FileHeader(package=package, imports=tuple(imports))


def _import_spec(scanner: _Scanner, kind: str, value: str, line: int) -> ImportSpec:
    name: Optional[str] = None
    if kind == IDENT or (kind == PUNCT and value == "."):
        name = value
        kind, value, line = scanner.next()
    if kind != STRING:
        raise scanner.error("expected import path string", line)
    _validate_import_path(value, scanner, line)
    return ImportSpec(path=value, name=name, line=line)


def parse_imports(source: str, *, filename: str = "<source>") -> List[str]:
    """Return the import paths declared by a Go file, in declaration order."""
    return parse_file_header(source, filename=filename).import_paths


__all__ = [
    "ImportSpec",
    "FileHeader",
    "parse_file_header",
    "parse_imports",
]
