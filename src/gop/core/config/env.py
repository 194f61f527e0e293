"""Environment-derived settings (GOPATH, project root override)."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from gop.core.exceptions import ConfigurationError

GOPATH_ENV = "GOPATH"
PROJECT_ROOT_ENV = "GOP_PROJECT_ROOT"


def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def resolve_gopath(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the first entry of ``$GOPATH``.

    Raises:
        ConfigurationError: If GOPATH is unset or empty.
    """
    raw = _environ(environ).get(GOPATH_ENV, "")
    entries = [e for e in raw.split(os.pathsep) if e.strip()]
    if not entries:
        raise ConfigurationError(
            "GOPATH is not set; the package cache location is unknown",
            context={"env": GOPATH_ENV},
        )
    return Path(entries[0]).expanduser()


def resolve_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Package cache root, ``$GOPATH/src``."""
    return resolve_gopath(environ) / "src"


def project_root_override(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    raw = _environ(environ).get(PROJECT_ROOT_ENV, "").strip()
    return Path(raw).expanduser() if raw else None


__all__ = [
    "GOPATH_ENV",
    "PROJECT_ROOT_ENV",
    "resolve_gopath",
    "resolve_cache_dir",
    "project_root_override",
]
