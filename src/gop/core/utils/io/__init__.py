"""I/O utilities for gop.

- core: directory creation and atomic text writes
- yaml: ``gop.yml`` reading
"""
from __future__ import annotations

from .core import PathLike, ensure_directory, write_text
from .yaml import read_yaml, resolve_yaml_path

__all__ = [
    "PathLike",
    "ensure_directory",
    "write_text",
    "read_yaml",
    "resolve_yaml_path",
]
