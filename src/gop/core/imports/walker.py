"""Import graph walker.

Collects the external import paths reachable from a target source tree.
Every package directory below the target is scanned; with ``transitive``
enabled, imported packages that can be found on disk (project-local packages,
the vendor tree, the GOPATH cache) are scanned as well.
"""
from __future__ import annotations

import logging
import os
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Deque, Dict, Iterator, List, Optional, Sequence, Set

from gop.core.exceptions import FilesystemError, ParseError
from gop.core.imports.classify import (
    ImportKind,
    StandardLibrary,
    classify_import,
    normalize_import_path,
)
from gop.core.imports.constraints import BuildContext
from gop.core.imports.parser import ImportSpec, parse_file_header

logger = logging.getLogger(__name__)

# Directory names never scanned as part of a source tree.
SKIPPED_DIR_NAMES = frozenset({"vendor", "testdata"})


@dataclass
class ImportGraph:
    """Result of a walk.

    Attributes:
        importers: External import path -> directories that import it
        resolved: External import path -> directory it was found in on disk
        local_packages: Project-local packages that were followed
        scanned_dirs: Package directories that were parsed, in scan order
    """

    importers: Dict[str, Set[str]] = field(default_factory=dict)
    resolved: Dict[str, Path] = field(default_factory=dict)
    local_packages: Set[str] = field(default_factory=set)
    scanned_dirs: List[Path] = field(default_factory=list)

    def import_set(self) -> frozenset[str]:
        return frozenset(self.importers)

    @property
    def unresolved(self) -> frozenset[str]:
        return frozenset(p for p in self.importers if p not in self.resolved)


def iter_package_dirs(root: Path) -> Iterator[Path]:
    """Yield ``root`` and every directory below it that may hold a package.

    Directories named ``vendor`` or ``testdata`` and names starting with ``_``
    or ``.`` are pruned. Symbolic links are not followed.
    """
    for dirpath, dirnames, _ in os.walk(root, followlinks=False):
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in SKIPPED_DIR_NAMES and not d.startswith(("_", "."))
        )
        yield Path(dirpath)


class ImportWalker:
    """Walks Go package directories and collects their imports."""

    def __init__(
        self,
        *,
        package_root: Optional[Path] = None,
        search_paths: Sequence[Path] = (),
        context: Optional[BuildContext] = None,
        stdlib: Optional[StandardLibrary] = None,
        transitive: bool = True,
        include_tests: bool = False,
    ) -> None:
        """Initialize walker.

        Args:
            package_root: Project ``src`` directory; imports resolving below it
                (outside ``vendor``) are project-local packages
            search_paths: Directories where external packages are looked up
                for transitive scanning, in priority order
            context: Build context used to select files
            stdlib: Standard-library namespace
            transitive: Follow imports of imported packages
            include_tests: Include ``_test.go`` files of the starting tree
        """
        self.package_root = Path(package_root) if package_root else None
        self.search_paths = [Path(p) for p in search_paths]
        self.context = context or BuildContext.from_environ()
        self.stdlib = stdlib or StandardLibrary.default()
        self.transitive = transitive
        self.include_tests = include_tests

    def walk(self, target_dir: Path) -> ImportGraph:
        """Walk ``target_dir`` and return the import graph.

        Raises:
            ParseError: If the target is missing or any scanned file cannot be
                read or parsed.
        """
        target_dir = Path(target_dir)
        if not target_dir.is_dir():
            raise ParseError(
                f"Target source directory does not exist: {target_dir}",
                context={"target_dir": str(target_dir)},
            )

        graph = ImportGraph()
        seen: Set[Path] = set()
        queue: Deque[tuple[Path, bool]] = deque(
            (d, self.include_tests) for d in iter_package_dirs(target_dir)
        )

        while queue:
            pkg_dir, with_tests = queue.popleft()
            key = pkg_dir.resolve()
            if key in seen:
                continue
            seen.add(key)
            graph.scanned_dirs.append(pkg_dir)

            for spec in self.package_imports(pkg_dir, include_tests=with_tests):
                try:
                    follow = self._record(graph, pkg_dir, spec)
                except FilesystemError as exc:
                    raise ParseError(
                        f"Cannot map import {spec.path!r} in {pkg_dir}: {exc}",
                        context={"dir": str(pkg_dir), "import_path": spec.path},
                    ) from exc
                if follow is not None and self.transitive:
                    queue.append((follow, False))

        logger.debug(
            "Walked %d package directories under %s: %d external imports",
            len(graph.scanned_dirs),
            target_dir,
            len(graph.importers),
        )
        return graph

    def _record(self, graph: ImportGraph, pkg_dir: Path, spec: ImportSpec) -> Optional[Path]:
        """Record one import and return the directory to follow, if any."""
        kind = classify_import(spec.path, self.stdlib)
        if kind is ImportKind.CGO or kind is ImportKind.STANDARD:
            return None
        if kind is ImportKind.RELATIVE:
            rel_dir = pkg_dir / spec.path
            return rel_dir if rel_dir.is_dir() else None

        local_dir = self._local_package_dir(spec.path)
        if local_dir is not None:
            graph.local_packages.add(spec.path)
            return local_dir

        graph.importers.setdefault(spec.path, set()).add(str(pkg_dir))
        if spec.path in graph.resolved:
            return None
        found = self.locate(spec.path)
        if found is None:
            logger.debug("Import %s not found locally; not scanning its imports", spec.path)
            return None
        graph.resolved[spec.path] = found
        return found

    def _local_package_dir(self, import_path: str) -> Optional[Path]:
        if self.package_root is None:
            return None
        rel = normalize_import_path(import_path)
        if rel.split(os.sep, 1)[0] == "vendor":
            return None
        candidate = self.package_root / rel
        return candidate if candidate.is_dir() else None

    def locate(self, import_path: str) -> Optional[Path]:
        """Find the directory holding ``import_path`` in the search paths."""
        rel = normalize_import_path(import_path)
        for base in self.search_paths:
            candidate = base / rel
            if candidate.is_dir():
                return candidate
        return None

    def package_imports(self, pkg_dir: Path, *, include_tests: bool = False) -> List[ImportSpec]:
        """Return the imports of the buildable Go files directly in ``pkg_dir``."""
        try:
            names = sorted(
                entry.name
                for entry in os.scandir(pkg_dir)
                if entry.is_file() and self.context.match_file_name(entry.name, include_tests=include_tests)
            )
        except OSError as exc:
            raise ParseError(
                f"Cannot read package directory {pkg_dir}: {exc}",
                context={"dir": str(pkg_dir)},
            ) from exc

        specs: List[ImportSpec] = []
        for name in names:
            path = pkg_dir / name
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ParseError(
                    f"Cannot read Go source {path}: {exc}",
                    context={"file": str(path)},
                ) from exc
            if not self.context.match_source(source, filename=str(path)):
                continue
            specs.extend(parse_file_header(source, filename=str(path)).imports)
        return specs


def list_imports(
    target_dir: Path,
    *,
    package_root: Optional[Path] = None,
    tags: str = "",
    transitive: bool = True,
    include_tests: bool = False,
    search_paths: Sequence[Path] = (),
    context: Optional[BuildContext] = None,
    stdlib: Optional[StandardLibrary] = None,
) -> frozenset[str]:
    """Return the deduplicated external imports reachable from ``target_dir``.

    Standard-library paths, relative paths, the cgo pseudo-import and
    project-local packages are never part of the result.

    Raises:
        ParseError: If the target is missing or a scanned file is malformed.
    """
    if context is None:
        context = BuildContext.from_environ(tags=tags)
    walker = ImportWalker(
        package_root=package_root,
        search_paths=search_paths,
        context=context,
        stdlib=stdlib,
        transitive=transitive,
        include_tests=include_tests,
    )
    return walker.walk(target_dir).import_set()


__all__ = [
    "ImportGraph",
    "ImportWalker",
    "iter_package_dirs",
    "list_imports",
    "SKIPPED_DIR_NAMES",
]
