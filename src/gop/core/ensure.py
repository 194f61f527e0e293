"""Ensure flow: walk a target's imports and vendor what is missing.

All paths of a run are resolved once into :class:`EnsureSettings` and passed
explicitly; there is no process-wide current target.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from gop.core.config import ProjectConfig, Target, resolve_cache_dir
from gop.core.imports import BuildContext, ImportGraph, ImportWalker
from gop.core.vendors import SyncResult, VendorSynchronizer
from gop.core.vendors.fetch import FetchCommand
from gop.core.vendors.sync import ReportFn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnsureSettings:
    """Resolved inputs of one ensure run."""

    project_root: Path
    target: Target
    target_dir: Path
    src_dir: Path
    vendor_dir: Path
    cache_dir: Path
    fetch_command: FetchCommand
    context: BuildContext

    def to_dict(self) -> dict:
        return {
            "project_root": str(self.project_root),
            "target": self.target.name,
            "target_dir": str(self.target_dir),
            "vendor_dir": str(self.vendor_dir),
            "cache_dir": str(self.cache_dir),
        }


def resolve_settings(
    project_root: Path,
    *,
    target_name: Optional[str] = None,
    cwd: Optional[Path] = None,
    tags: str = "",
    environ: Optional[Mapping[str, str]] = None,
) -> EnsureSettings:
    """Build :class:`EnsureSettings` for ``project_root``.

    GOPATH is checked before anything else so a missing package cache fails
    the run before any source is read.

    Raises:
        ConfigurationError: If GOPATH is unset, ``gop.yml`` is invalid, or the
            named target is unknown.
    """
    cache_dir = resolve_cache_dir(environ)
    config = ProjectConfig.load(project_root)
    target = config.select_target(target_name, cwd=cwd)
    return EnsureSettings(
        project_root=config.root,
        target=target,
        target_dir=config.target_dir(target),
        src_dir=config.src_dir,
        vendor_dir=config.vendor_dir,
        cache_dir=cache_dir,
        fetch_command=config.fetch_command,
        context=BuildContext.from_environ(environ, tags=tags),
    )


def walk_target(
    settings: EnsureSettings,
    *,
    transitive: bool = True,
    include_tests: bool = False,
) -> ImportGraph:
    """Walk the selected target; the vendor tree is searched before the cache."""
    walker = ImportWalker(
        package_root=settings.src_dir,
        search_paths=(settings.vendor_dir, settings.cache_dir),
        context=settings.context,
        transitive=transitive,
        include_tests=include_tests,
    )
    return walker.walk(settings.target_dir)


def run_ensure(
    settings: EnsureSettings,
    *,
    dry_run: bool = False,
    auto_fetch: bool = False,
    include_tests: bool = False,
    report: Optional[ReportFn] = None,
) -> SyncResult:
    """Vendor every external import of the selected target.

    Raises:
        ParseError: If the target sources cannot be walked.
        FilesystemError: On copy failures.
        SubprocessError: If fetching fails.
    """
    graph = walk_target(settings, include_tests=include_tests)
    imports = graph.import_set()
    logger.info(
        "Target %s: %d external imports (%d local packages followed)",
        settings.target.name,
        len(imports),
        len(graph.local_packages),
    )
    synchronizer = VendorSynchronizer(
        settings.vendor_dir,
        settings.cache_dir,
        fetch_dir=settings.src_dir,
        fetch_command=settings.fetch_command,
    )
    return synchronizer.sync(imports, dry_run=dry_run, auto_fetch=auto_fetch, report=report)


__all__ = ["EnsureSettings", "resolve_settings", "walk_target", "run_ensure"]
