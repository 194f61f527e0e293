"""Import path classification.

Classification is purely syntactic:

- ``"C"`` is the cgo pseudo-import
- paths starting with ``.`` are relative references
- paths whose first element is a standard-library root are standard
- everything else is external (vendorable)
"""
from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Optional

from gop.core.exceptions import FilesystemError

CGO_PSEUDO_IMPORT = "C"


class ImportKind(str, Enum):
    CGO = "cgo"
    RELATIVE = "relative"
    STANDARD = "standard"
    EXTERNAL = "external"


class StandardLibrary:
    """Membership test for the Go standard-library namespace.

    A path is standard when its first element is a known standard root, or
    when ``$GOROOT/src/<path>`` is a directory.
    """

    def __init__(self, roots: Iterable[str], *, goroot: Optional[Path] = None) -> None:
        self.roots = frozenset(roots)
        self.goroot = Path(goroot) if goroot else None

    @classmethod
    def default(cls, environ: Optional[Mapping[str, str]] = None) -> "StandardLibrary":
        """Bundled root list, extended by ``GOROOT`` from ``environ`` when set."""
        from gop.data import read_yaml

        env = os.environ if environ is None else environ
        data = read_yaml("", "stdlib.yaml") or {}
        goroot = (env.get("GOROOT") or "").strip()
        return cls(data.get("roots", []), goroot=Path(goroot) if goroot else None)

    def __contains__(self, import_path: object) -> bool:
        if not isinstance(import_path, str) or not import_path:
            return False
        first = import_path.split("/", 1)[0]
        if first in self.roots:
            return True
        if self.goroot is not None and "." not in first:
            return (self.goroot / "src" / import_path).is_dir()
        return False


def classify_import(import_path: str, stdlib: StandardLibrary) -> ImportKind:
    """Classify ``import_path`` as cgo, relative, standard or external."""
    if import_path == CGO_PSEUDO_IMPORT:
        return ImportKind.CGO
    if import_path.startswith("."):
        return ImportKind.RELATIVE
    if import_path in stdlib:
        return ImportKind.STANDARD
    return ImportKind.EXTERNAL


def is_external(import_path: str, stdlib: StandardLibrary) -> bool:
    return classify_import(import_path, stdlib) is ImportKind.EXTERNAL


def normalize_import_path(import_path: str) -> str:
    """Map an import path to a relative filesystem path.

    The same mapping is used for the vendor tree and the package cache:
    ``/``-separated elements joined with the native separator.

    Raises:
        FilesystemError: If the path cannot be mapped to a location inside a
            directory (empty, absolute, backslashes, ``.``/``..`` elements).
    """
    cleaned = import_path.strip().rstrip("/")
    if not cleaned:
        raise FilesystemError(
            "Empty import path cannot be mapped to a directory",
            context={"import_path": import_path},
        )
    if cleaned.startswith("/") or "\\" in cleaned or (len(cleaned) > 1 and cleaned[1] == ":"):
        raise FilesystemError(
            f"Import path is not a relative package path: {import_path}",
            context={"import_path": import_path},
        )
    parts = cleaned.split("/")
    if any(p in {"", ".", ".."} for p in parts):
        raise FilesystemError(
            f"Import path contains empty, '.' or '..' elements: {import_path}",
            context={"import_path": import_path},
        )
    return os.path.join(*parts)


__all__ = [
    "CGO_PSEUDO_IMPORT",
    "ImportKind",
    "StandardLibrary",
    "classify_import",
    "is_external",
    "normalize_import_path",
]
