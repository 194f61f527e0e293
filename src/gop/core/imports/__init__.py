"""gop import graph subsystem.

Key components:
- parse_file_header: Read package clause and imports of a Go file
- BuildContext: Decide which files take part in a build
- classify_import: Separate cgo, relative, standard and external imports
- ImportWalker / list_imports: Collect the transitive external import set
"""
from __future__ import annotations

from gop.core.imports.classify import (
    CGO_PSEUDO_IMPORT,
    ImportKind,
    StandardLibrary,
    classify_import,
    is_external,
    normalize_import_path,
)
from gop.core.imports.constraints import BuildContext, parse_tags
from gop.core.imports.parser import FileHeader, ImportSpec, parse_file_header, parse_imports
from gop.core.imports.walker import ImportGraph, ImportWalker, list_imports

__all__ = [
    # Classification
    "CGO_PSEUDO_IMPORT",
    "ImportKind",
    "StandardLibrary",
    "classify_import",
    "is_external",
    "normalize_import_path",
    # Build constraints
    "BuildContext",
    "parse_tags",
    # Parsing
    "FileHeader",
    "ImportSpec",
    "parse_file_header",
    "parse_imports",
    # Walking
    "ImportGraph",
    "ImportWalker",
    "list_imports",
]
