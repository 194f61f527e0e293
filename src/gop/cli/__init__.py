"""gop command-line interface.

Commands are plain modules exposing ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``; :mod:`gop.cli._dispatcher` discovers them.
"""
from __future__ import annotations

from gop.cli._args import (
    add_dry_run_flag,
    add_json_flag,
    add_project_root_flag,
    add_tags_flag,
    add_target_arg,
    add_tests_flag,
    add_verbose_flag,
)
from gop.cli._output import OutputFormatter
from gop.cli._utils import get_project_root, load_project

__all__ = [
    "OutputFormatter",
    "add_dry_run_flag",
    "add_json_flag",
    "add_project_root_flag",
    "add_tags_flag",
    "add_target_arg",
    "add_tests_flag",
    "add_verbose_flag",
    "get_project_root",
    "load_project",
]
