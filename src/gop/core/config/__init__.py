"""Project configuration: gop.yml, environment and project root."""
from __future__ import annotations

from gop.core.config.env import (
    GOPATH_ENV,
    PROJECT_ROOT_ENV,
    project_root_override,
    resolve_cache_dir,
    resolve_gopath,
)
from gop.core.config.paths import find_project_root, resolve_project_root
from gop.core.config.project import (
    CONFIG_FILENAME,
    SRC_DIRNAME,
    VENDOR_DIRNAME,
    ProjectConfig,
    Target,
)

__all__ = [
    "CONFIG_FILENAME",
    "SRC_DIRNAME",
    "VENDOR_DIRNAME",
    "GOPATH_ENV",
    "PROJECT_ROOT_ENV",
    "ProjectConfig",
    "Target",
    "find_project_root",
    "project_root_override",
    "resolve_cache_dir",
    "resolve_gopath",
    "resolve_project_root",
]
