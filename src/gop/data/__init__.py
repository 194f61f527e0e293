"""
gop data resource helpers.

Provides access to bundled schemas, templates and the Go standard-library
package list using importlib.resources.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subdirectory (e.g., "schemas", "templates")
        filename: Optional filename within the subdirectory

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("schemas", "gop.schema.yaml")
        PosixPath('/path/to/gop/data/schemas/gop.schema.yaml')
    """
    pkg = resources.files("gop.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> Any:
    """
    Read and parse a bundled YAML data file (cached).

    Pass an empty ``subpackage`` for files at the data package root.
    """
    path = get_data_path(subpackage, filename) if subpackage else get_data_path(filename)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


__all__ = ["get_data_path", "read_yaml"]
