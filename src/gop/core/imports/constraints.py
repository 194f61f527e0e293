"""Go build constraints.

Decides which ``.go`` files of a package directory take part in a build,
following the rules of the Go toolchain:

- file names starting with ``_`` or ``.`` are ignored
- ``_test.go`` files are ignored unless tests are requested
- ``name_GOOS.go``, ``name_GOARCH.go`` and ``name_GOOS_GOARCH.go`` suffixes
- ``//go:build <expr>`` lines, or legacy ``// +build`` lines when no
  ``//go:build`` line is present
"""
from __future__ import annotations

import os
import platform
import re
import sys
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from gop.core.exceptions import ParseError

KNOWN_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
        "ios", "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris",
        "wasip1", "windows", "zos",
    }
)

KNOWN_ARCH = frozenset(
    {
        "386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be",
        "loong64", "mips", "mipsle", "mips64", "mips64le", "mips64p32",
        "mips64p32le", "ppc", "ppc64", "ppc64le", "riscv", "riscv64", "s390",
        "s390x", "sparc", "sparc64", "wasm",
    }
)

UNIX_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
        "ios", "linux", "netbsd", "openbsd", "solaris",
    }
)

# Latest go1.N release tag considered satisfied.
DEFAULT_GO_MINOR = 23

_PLATFORM_TO_GOOS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "aix": "aix",
    "sunos5": "solaris",
}

_MACHINE_TO_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "arm",
    "armv7l": "arm",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
    "mips64": "mips64",
}

_RELEASE_TAG_RE = re.compile(r"^go1\.(\d+)$")
_TAG_CHARS_RE = re.compile(r"^[A-Za-z0-9_.]+$")


def host_goos() -> str:
    for prefix, goos in _PLATFORM_TO_GOOS.items():
        if sys.platform.startswith(prefix):
            return goos
    for goos in ("freebsd", "openbsd", "netbsd", "dragonfly"):
        if sys.platform.startswith(goos):
            return goos
    return sys.platform


def host_goarch() -> str:
    machine = platform.machine().lower()
    return _MACHINE_TO_GOARCH.get(machine, machine or "amd64")


def parse_tags(expression: str | Iterable[str] | None) -> frozenset[str]:
    """Split a ``-tags`` style value (space or comma separated) into a tag set."""
    if not expression:
        return frozenset()
    if isinstance(expression, str):
        parts: Iterable[str] = re.split(r"[\s,]+", expression)
    else:
        parts = expression
    return frozenset(p.strip() for p in parts if p and p.strip())


@dataclass(frozen=True)
class BuildContext:
    """Build configuration used to select files.

    Attributes:
        goos: Target operating system
        goarch: Target architecture
        tags: User build tags
        cgo_enabled: Whether the ``cgo`` tag is satisfied
        go_minor: Highest satisfied ``go1.N`` release tag
        compiler: Compiler tag (``gc``)
    """

    goos: str
    goarch: str
    tags: frozenset[str] = field(default_factory=frozenset)
    cgo_enabled: bool = True
    go_minor: int = DEFAULT_GO_MINOR
    compiler: str = "gc"

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        tags: str | Iterable[str] | None = None,
    ) -> "BuildContext":
        """Build a context from ``GOOS``/``GOARCH``/``CGO_ENABLED`` or the host."""
        env = os.environ if environ is None else environ
        return cls(
            goos=(env.get("GOOS") or host_goos()).strip(),
            goarch=(env.get("GOARCH") or host_goarch()).strip(),
            tags=parse_tags(tags),
            cgo_enabled=(env.get("CGO_ENABLED", "1").strip() != "0"),
        )

    def match_tag(self, name: str) -> bool:
        """Report whether a single build tag is satisfied."""
        if not name:
            return False
        if name in self.tags:
            return True
        if name == self.goos or name == self.goarch or name == self.compiler:
            return True
        if name == "cgo":
            return self.cgo_enabled
        if name == "unix":
            return self.goos in UNIX_OS
        # GOOS aliases honoured by the toolchain.
        if name == "linux" and self.goos == "android":
            return True
        if name == "solaris" and self.goos == "illumos":
            return True
        if name == "darwin" and self.goos == "ios":
            return True
        m = _RELEASE_TAG_RE.match(name)
        if m:
            return 1 <= int(m.group(1)) <= self.go_minor
        return False

    def match_file_name(self, name: str, *, include_tests: bool = False) -> bool:
        """Report whether a file takes part in the build based on its name alone."""
        if not name.endswith(".go"):
            return False
        if name.startswith("_") or name.startswith("."):
            return False
        if name.endswith("_test.go") and not include_tests:
            return False
        return self._good_os_arch_file(name)

    def _good_os_arch_file(self, name: str) -> bool:
        stem = name.split(".", 1)[0]
        i = stem.find("_")
        if i < 0:
            return True
        parts = stem[i:].split("_")
        if parts and parts[-1] == "test":
            parts = parts[:-1]
        n = len(parts)
        if n >= 2 and parts[n - 2] in KNOWN_OS and parts[n - 1] in KNOWN_ARCH:
            return self.match_tag(parts[n - 2]) and self.match_tag(parts[n - 1])
        if n >= 1 and (parts[n - 1] in KNOWN_OS or parts[n - 1] in KNOWN_ARCH):
            return self.match_tag(parts[n - 1])
        return True

    def match_source(self, source: str, *, filename: str = "<source>") -> bool:
        """Evaluate the build constraints found in the header of ``source``."""
        go_build, plus_build = find_constraint_lines(source)
        if go_build is not None:
            line_no, expr = go_build
            return evaluate_go_build(expr, self.match_tag, filename=filename, line=line_no)
        return all(
            evaluate_plus_build(expr, self.match_tag) for _, expr in plus_build
        )


def _iter_header_lines(source: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_no, stripped_line)`` for the comment header of a file.

    Block comments are reported as a single ``"/*"`` marker. Iteration stops at
    the first line that is neither blank nor a comment.
    """
    lines = source.splitlines()
    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        if stripped.startswith("/*"):
            start = i
            end_rest = stripped[2:]
            while "*/" not in end_rest:
                i += 1
                if i >= len(lines):
                    return
                end_rest = lines[i]
            after = end_rest.split("*/", 1)[1].strip()
            yield start + 1, "/*"
            if after and not after.startswith("//"):
                return
            i += 1
            continue
        if stripped and not stripped.startswith("//"):
            return
        yield i + 1, stripped
        i += 1


def find_constraint_lines(
    source: str,
) -> Tuple[Optional[Tuple[int, str]], List[Tuple[int, str]]]:
    """Locate ``//go:build`` and ``// +build`` constraints in a file header.

    ``// +build`` lines only count when their comment group is followed by a
    blank line, as with the Go toolchain.

    Returns:
        ``(go_build, plus_build)`` where ``go_build`` is ``(line, expr)`` or None
        and ``plus_build`` is a list of ``(line, expr)``.
    """
    go_build: Optional[Tuple[int, str]] = None
    plus_build: List[Tuple[int, str]] = []
    pending: List[Tuple[int, str]] = []

    for line_no, line in _iter_header_lines(source):
        if not line:
            plus_build.extend(pending)
            pending = []
            continue
        if line == "/*":
            pending = []
            continue
        body = line[2:]
        if body.startswith("go:build") and (len(body) == 8 or body[8] in " \t"):
            if go_build is None:
                go_build = (line_no, body[8:].strip())
            continue
        text = body.strip()
        if text.startswith("+build") and (len(text) == 6 or text[6] in " \t"):
            pending.append((line_no, text[6:].strip()))

    return go_build, plus_build


def evaluate_plus_build(expr: str, match_tag) -> bool:
    """Evaluate a legacy ``// +build`` line: OR of space-separated AND groups."""
    for option in expr.split():
        ok = True
        for term in option.split(","):
            negated = term.startswith("!")
            tag = term[1:] if negated else term
            if not tag or tag.startswith("!") or not _TAG_CHARS_RE.match(tag):
                ok = False
                break
            if match_tag(tag) == negated:
                ok = False
                break
        if ok:
            return True
    return False


_TOKEN_RE = re.compile(r"\s*(\|\||&&|!|\(|\)|[A-Za-z0-9_.]+)")


class _ExprParser:
    """Recursive-descent evaluator for ``//go:build`` expressions."""

    def __init__(self, expr: str, match_tag, *, filename: str, line: int) -> None:
        self.tokens = self._tokenize(expr, filename=filename, line=line)
        self.pos = 0
        self.match_tag = match_tag
        self.filename = filename
        self.line = line

    def _tokenize(self, expr: str, *, filename: str, line: int) -> List[str]:
        tokens: List[str] = []
        pos = 0
        expr = expr.rstrip()
        while pos < len(expr):
            m = _TOKEN_RE.match(expr, pos)
            if not m:
                raise ParseError(
                    f"{filename}:{line}: invalid //go:build expression: {expr!r}",
                    context={"file": filename, "line": line},
                )
            tokens.append(m.group(1))
            pos = m.end()
        return tokens

    def _error(self, message: str) -> ParseError:
        return ParseError(
            f"{self.filename}:{self.line}: {message} in //go:build expression",
            context={"file": self.filename, "line": self.line},
        )

    def _peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self) -> Optional[str]:
        tok = self._peek()
        self.pos += 1
        return tok

    def parse(self) -> bool:
        if not self.tokens:
            raise self._error("empty expression")
        value = self._or()
        if self._peek() is not None:
            raise self._error(f"unexpected token {self._peek()!r}")
        return value

    # Both operands are always evaluated so that syntax errors are reported
    # regardless of short-circuiting.
    def _or(self) -> bool:
        value = self._and()
        while self._peek() == "||":
            self._next()
            rhs = self._and()
            value = value or rhs
        return value

    def _and(self) -> bool:
        value = self._not()
        while self._peek() == "&&":
            self._next()
            rhs = self._not()
            value = value and rhs
        return value

    def _not(self) -> bool:
        if self._peek() == "!":
            self._next()
            return not self._not()
        return self._atom()

    def _atom(self) -> bool:
        tok = self._next()
        if tok is None:
            raise self._error("unexpected end")
        if tok == "(":
            value = self._or()
            if self._next() != ")":
                raise self._error("missing ')'")
            return value
        if tok in {")", "&&", "||"}:
            raise self._error(f"unexpected token {tok!r}")
        return bool(self.match_tag(tok))


def evaluate_go_build(expr: str, match_tag, *, filename: str = "<source>", line: int = 0) -> bool:
    """Evaluate a ``//go:build`` expression against ``match_tag``."""
    return _ExprParser(expr, match_tag, filename=filename, line=line).parse()


__all__ = [
    "BuildContext",
    "KNOWN_OS",
    "KNOWN_ARCH",
    "UNIX_OS",
    "parse_tags",
    "host_goos",
    "host_goarch",
    "find_constraint_lines",
    "evaluate_go_build",
    "evaluate_plus_build",
]
