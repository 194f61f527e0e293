"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse
from pathlib import Path

from gop.core.config import ProjectConfig, resolve_project_root


def get_project_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--project-root`` or auto-detect."""
    explicit = getattr(args, "project_root", None)
    return resolve_project_root(Path(explicit) if explicit else None)


def load_project(args: argparse.Namespace) -> ProjectConfig:
    return ProjectConfig.load(get_project_root(args))


__all__ = ["get_project_root", "load_project"]
