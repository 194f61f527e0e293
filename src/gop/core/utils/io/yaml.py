"""YAML reading for ``gop.yml``."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = (".yml", ".yaml")


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Load a YAML document with ``yaml.safe_load``.

    An empty document yields ``default``. A missing or malformed file also
    yields ``default`` unless ``raise_on_error`` is set, in which case the
    ``OSError``/``yaml.YAMLError`` propagates.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


def resolve_yaml_path(path: Path) -> Path:
    """Return whichever of ``<stem>.yml`` / ``<stem>.yaml`` exists.

    ``.yml`` wins when both exist. When neither exists ``path`` is returned
    unchanged.
    """
    path = Path(path)
    stem = path.with_suffix("") if path.suffix in YAML_SUFFIXES else path
    for suffix in YAML_SUFFIXES:
        candidate = stem.with_suffix(suffix)
        if candidate.exists():
            return candidate
    return path


__all__ = ["read_yaml", "resolve_yaml_path"]
