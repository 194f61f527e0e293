"""Workspace scaffolding."""
from __future__ import annotations

from gop.core.setup.scaffold import DEFAULT_ASSETS, DEFAULT_TARGET_DIR, ScaffoldResult, init_project

__all__ = ["DEFAULT_ASSETS", "DEFAULT_TARGET_DIR", "ScaffoldResult", "init_project"]
