"""Project scaffolding for ``gop init``.

Creates the workspace layout::

    <root>/gop.yml
    <root>/bin/
    <root>/src/main/main.go
    <root>/src/vendor/

Existing files and directories are left untouched.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from gop.core.config.project import CONFIG_FILENAME, SRC_DIRNAME, VENDOR_DIRNAME
from gop.core.exceptions import FilesystemError
from gop.core.utils.io import ensure_directory, write_text
from gop.core.utils.templates import render_bundled_template

logger = logging.getLogger(__name__)

DEFAULT_TARGET_DIR = "main"
DEFAULT_ASSETS: tuple[str, ...] = ("templates", "public")
BIN_DIRNAME = "bin"


@dataclass
class ScaffoldResult:
    """Paths touched by a scaffold run."""

    root: Path
    created: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "created": [str(p) for p in self.created],
            "skipped": [str(p) for p in self.skipped],
        }


def _make_dir(path: Path, result: ScaffoldResult) -> None:
    if path.is_dir():
        result.skipped.append(path)
        return
    try:
        ensure_directory(path)
    except OSError as exc:
        raise FilesystemError(f"Cannot create directory {path}: {exc}", context={"path": str(path)}) from exc
    result.created.append(path)


def _write_new(path: Path, content: str, result: ScaffoldResult) -> None:
    if path.exists():
        logger.info("Keeping existing %s", path)
        result.skipped.append(path)
        return
    try:
        write_text(path, content)
    except OSError as exc:
        raise FilesystemError(f"Cannot write {path}: {exc}", context={"path": str(path)}) from exc
    result.created.append(path)


def init_project(
    root: Path,
    *,
    name: Optional[str] = None,
    target_dir: str = DEFAULT_TARGET_DIR,
    assets: Sequence[str] = DEFAULT_ASSETS,
) -> ScaffoldResult:
    """Scaffold a gop workspace at ``root``.

    Args:
        root: Project directory (created if missing)
        name: Target name; defaults to the directory name
        target_dir: Target source directory relative to ``src``
        assets: Asset directories listed in ``gop.yml``

    Returns:
        ScaffoldResult listing created and skipped paths
    """
    root = Path(root).expanduser().resolve()
    target_name = name or root.name
    result = ScaffoldResult(root=root)

    src = root / SRC_DIRNAME
    for directory in (root, src, src / VENDOR_DIRNAME, src / target_dir, root / BIN_DIRNAME):
        _make_dir(directory, result)

    config_text = render_bundled_template(
        "gop.yml.j2",
        {"name": target_name, "target_dir": target_dir, "assets": list(assets)},
    )
    _write_new(root / CONFIG_FILENAME, config_text, result)
    _write_new(src / target_dir / "main.go", render_bundled_template("main.go.j2", {}), result)

    logger.debug("Scaffolded %s: %d created, %d skipped", root, len(result.created), len(result.skipped))
    return result


__all__ = ["DEFAULT_ASSETS", "DEFAULT_TARGET_DIR", "ScaffoldResult", "init_project"]
