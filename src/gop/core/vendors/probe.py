"""Directory probing helpers.

``is_dir`` and ``exists`` answer with plain booleans and treat any stat
failure as "no". ``probe`` reports a tagged :class:`PathState` so callers can
tell a missing path from one that exists but cannot be inspected.
"""
from __future__ import annotations

import os
import stat
from enum import Enum
from pathlib import Path
from typing import List, Union

from gop.core.exceptions import FilesystemError

PathLike = Union[str, Path]

# OS bookkeeping files never listed in a manifest.
JUNK_FILE_MARKERS = (".DS_Store",)


class PathState(str, Enum):
    MISSING = "missing"
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    INACCESSIBLE = "inaccessible"

    @property
    def present(self) -> bool:
        return self not in (PathState.MISSING, PathState.INACCESSIBLE)


def is_dir(path: PathLike) -> bool:
    """Return True if ``path`` is a directory (following symlinks)."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False


def exists(path: PathLike) -> bool:
    """Return True if anything, including a dangling symlink, is at ``path``."""
    try:
        os.lstat(path)
    except (OSError, ValueError):
        return False
    return True


def probe(path: PathLike) -> PathState:
    """Classify ``path`` without following a final symlink."""
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return PathState.MISSING
    except NotADirectoryError:
        # A parent component is a regular file.
        return PathState.MISSING
    except OSError:
        return PathState.INACCESSIBLE
    if stat.S_ISLNK(st.st_mode):
        return PathState.SYMLINK
    if stat.S_ISDIR(st.st_mode):
        return PathState.DIRECTORY
    return PathState.FILE


def _is_junk(name: str) -> bool:
    return any(marker in name for marker in JUNK_FILE_MARKERS)


def _manifest(dir_path: str, rel_path: str, include_dirs: bool, out: List[str]) -> None:
    with os.scandir(dir_path) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if _is_junk(entry.name):
            continue
        rel = f"{rel_path}/{entry.name}" if rel_path else entry.name
        if entry.is_dir(follow_symlinks=False):
            if include_dirs:
                out.append(rel + "/")
            _manifest(entry.path, rel, include_dirs, out)
        else:
            out.append(rel)


def manifest(root: PathLike, include_dirs: bool = False) -> List[str]:
    """List the contents of ``root`` depth-first.

    Paths are relative to ``root`` and ``/``-separated. Directories are listed
    (with a trailing ``/``) before their contents when ``include_dirs`` is set.
    Symlinks to directories are listed as plain entries and not descended.
    The root itself is not included.

    Raises:
        FilesystemError: If ``root`` is not a directory or cannot be read.
    """
    if not is_dir(root):
        raise FilesystemError(
            f"Not a directory or does not exist: {root}",
            context={"path": str(root)},
        )
    out: List[str] = []
    try:
        _manifest(str(root), "", include_dirs, out)
    except OSError as exc:
        raise FilesystemError(
            f"Cannot list directory {root}: {exc}",
            context={"path": str(root)},
        ) from exc
    return out


__all__ = [
    "PathState",
    "JUNK_FILE_MARKERS",
    "is_dir",
    "exists",
    "probe",
    "manifest",
]
