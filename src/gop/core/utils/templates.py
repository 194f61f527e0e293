"""Lightweight text template rendering.

Used for project scaffolds written by ``gop init``.
"""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import Environment, StrictUndefined

from gop.data import get_data_path


def _environment() -> Environment:
    # Tag-only lines render to nothing.
    return Environment(
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render ``text`` with Jinja2 using ``context``."""
    return _environment().from_string(text).render(**context)


def render_bundled_template(name: str, context: Dict[str, Any]) -> str:
    """Render a template shipped under ``gop/data/templates``."""
    path = get_data_path("templates", name)
    return render_template_text(path.read_text(encoding="utf-8"), context)


__all__ = [
    "render_template_text",
    "render_bundled_template",
]
