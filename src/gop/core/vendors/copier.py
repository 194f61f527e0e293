"""Recursive copy of package sources into the vendor tree."""
from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from gop.core.exceptions import DestinationConflictError, FilesystemError
from gop.core.vendors.probe import PathLike, exists, manifest

logger = logging.getLogger(__name__)

ExcludeFn = Callable[[str], bool]

# Version-control metadata prefixes skipped when vendoring.
VCS_PREFIXES: Sequence[str] = (".git", ".hg", ".svn", ".bzr")


def exclude_vcs(rel_path: str) -> bool:
    """Return True if any component of ``rel_path`` is version-control metadata."""
    return any(
        part.startswith(tuple(VCS_PREFIXES))
        for part in rel_path.split("/")
        if part
    )


def copy_file(src: PathLike, dest: PathLike) -> None:
    """Copy one file, keeping its modification time and permission bits.

    Symbolic links are recreated with the same target string instead of
    copying what they point to.
    """
    st = os.lstat(src)

    if stat.S_ISLNK(st.st_mode):
        # chmod/utime would act on the link target, so links are left as created.
        os.symlink(os.readlink(src), dest)
        return

    shutil.copyfile(src, dest, follow_symlinks=False)
    os.utime(dest, ns=(st.st_mtime_ns, st.st_mtime_ns))
    os.chmod(dest, stat.S_IMODE(st.st_mode))


def copy_tree(src: PathLike, dest: PathLike, exclude: Optional[ExcludeFn] = None) -> List[str]:
    """Copy the directory ``src`` to ``dest``, which must not exist yet.

    ``exclude`` receives each ``/``-separated path relative to ``src``
    (directories with a trailing ``/``) and returns True to skip it. Skipping a
    directory skips everything below it.

    A failure leaves whatever was already written in place.

    Returns:
        Relative paths written under ``dest``, in copy order.

    Raises:
        DestinationConflictError: If ``dest`` already exists.
        FilesystemError: On any other I/O failure.
    """
    if exists(dest):
        raise DestinationConflictError(
            f"File or directory already exists: {dest}",
            context={"dest": str(dest)},
        )

    entries = manifest(src, include_dirs=True)

    try:
        os.makedirs(dest)
    except OSError as exc:
        raise FilesystemError(
            f"Cannot create directory {dest}: {exc}",
            context={"dest": str(dest)},
        ) from exc

    written: List[str] = []
    skipped_dirs: List[str] = []
    for rel in entries:
        if any(rel.startswith(d) for d in skipped_dirs):
            continue
        if exclude is not None and exclude(rel):
            if rel.endswith("/"):
                skipped_dirs.append(rel)
            continue
        target = Path(dest, *rel.rstrip("/").split("/"))
        try:
            if rel.endswith("/"):
                os.makedirs(target, exist_ok=True)
            else:
                copy_file(Path(src, *rel.split("/")), target)
        except OSError as exc:
            raise FilesystemError(
                f"Cannot copy {rel} from {src} to {dest}: {exc}",
                context={"src": str(src), "dest": str(dest), "path": rel},
            ) from exc
        written.append(rel)

    logger.debug("Copied %d entries from %s to %s", len(written), src, dest)
    return written


__all__ = [
    "VCS_PREFIXES",
    "ExcludeFn",
    "exclude_vcs",
    "copy_file",
    "copy_tree",
]
