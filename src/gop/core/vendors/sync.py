"""Vendor synchronizer.

For every external import path, ensures ``<vendor>/<path>`` exists by copying
it from the package cache, fetching it into the cache first when allowed.
An existing vendor directory always counts as satisfied; nothing is updated
or removed. The first failure aborts the run and leaves earlier copies in
place.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from gop.core.exceptions import FilesystemError
from gop.core.imports.classify import normalize_import_path
from gop.core.vendors.copier import ExcludeFn, copy_tree, exclude_vcs
from gop.core.vendors.fetch import DEFAULT_FETCH_COMMAND, FetchCommand, run_fetch
from gop.core.vendors.models import COPIED, FETCHED, PENDING, SKIPPED, SyncAction, SyncResult
from gop.core.vendors.probe import PathState, probe

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], None]
ReportFn = Callable[[SyncAction], None]


class VendorSynchronizer:
    """Materializes missing external packages into a vendor directory."""

    def __init__(
        self,
        vendor_dir: Path,
        cache_dir: Path,
        *,
        fetch_dir: Optional[Path] = None,
        fetch_command: FetchCommand = DEFAULT_FETCH_COMMAND,
        fetch: Optional[FetchFn] = None,
        exclude: ExcludeFn = exclude_vcs,
    ) -> None:
        """Initialize synchronizer.

        Args:
            vendor_dir: Project vendor directory (``<root>/src/vendor``)
            cache_dir: Package cache root (``$GOPATH/src``)
            fetch_dir: Working directory of the fetch command
            fetch_command: Command run with the import path appended
            fetch: Override for the whole fetch step
            exclude: Predicate over relative paths skipped while copying
        """
        self.vendor_dir = Path(vendor_dir)
        self.cache_dir = Path(cache_dir)
        self.fetch_dir = Path(fetch_dir) if fetch_dir else self.vendor_dir.parent
        self.fetch_command = fetch_command
        self.exclude = exclude
        self._fetch = fetch

    def _run_fetch(self, import_path: str) -> None:
        if self._fetch is not None:
            self._fetch(import_path)
            return
        run_fetch(import_path, cwd=self.fetch_dir, command=self.fetch_command)

    def sync(
        self,
        imports: Iterable[str],
        *,
        dry_run: bool = False,
        auto_fetch: bool = False,
        report: Optional[ReportFn] = None,
    ) -> SyncResult:
        """Vendor every import in ``imports`` that is not vendored yet.

        Imports are processed in sorted order.

        Args:
            imports: External import paths
            dry_run: Report pending copies without fetching or writing
            auto_fetch: Run the fetch command when the cache lacks a package
            report: Called with each action as soon as it is decided

        Returns:
            SyncResult with one action per import

        Raises:
            FilesystemError: On probing/copying failures, including
                DestinationConflictError.
            SubprocessError: If the fetch command fails.
        """
        actions: List[SyncAction] = []
        for import_path in sorted(set(imports)):
            action = self._sync_one(import_path, dry_run=dry_run, auto_fetch=auto_fetch)
            actions.append(action)
            if report is not None:
                report(action)
        return SyncResult(actions=tuple(actions), dry_run=dry_run)

    def _sync_one(self, import_path: str, *, dry_run: bool, auto_fetch: bool) -> SyncAction:
        rel = normalize_import_path(import_path)
        dest = self.vendor_dir / rel

        state = probe(dest)
        if state is PathState.INACCESSIBLE:
            raise FilesystemError(
                f"Cannot inspect vendor directory {dest}",
                context={"import_path": import_path, "dest": str(dest)},
            )
        if state.present:
            logger.debug("Already vendored: %s", import_path)
            return SyncAction(import_path=import_path, action=SKIPPED, dest=str(dest))

        src = self.cache_dir / rel
        if dry_run:
            logger.info("Would copy %s from %s", import_path, src)
            return SyncAction(import_path=import_path, action=PENDING, dest=str(dest), source=str(src))

        action = COPIED
        src_state = probe(src)
        if src_state is PathState.INACCESSIBLE:
            raise FilesystemError(
                f"Cannot inspect package cache directory {src}",
                context={"import_path": import_path, "source": str(src)},
            )
        if not src_state.present and auto_fetch:
            self._run_fetch(import_path)
            action = FETCHED

        logger.info("Copying %s to %s", import_path, dest)
        copy_tree(src, dest, exclude=self.exclude)
        return SyncAction(import_path=import_path, action=action, dest=str(dest), source=str(src))


def sync_imports(
    imports: Iterable[str],
    vendor_dir: Path,
    cache_dir: Path,
    *,
    dry_run: bool = False,
    auto_fetch: bool = False,
    fetch_dir: Optional[Path] = None,
    fetch_command: FetchCommand = DEFAULT_FETCH_COMMAND,
    report: Optional[ReportFn] = None,
) -> SyncResult:
    """Functional form of :meth:`VendorSynchronizer.sync`."""
    synchronizer = VendorSynchronizer(
        vendor_dir,
        cache_dir,
        fetch_dir=fetch_dir,
        fetch_command=fetch_command,
    )
    return synchronizer.sync(imports, dry_run=dry_run, auto_fetch=auto_fetch, report=report)


__all__ = ["VendorSynchronizer", "sync_imports"]
