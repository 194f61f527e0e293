"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_project_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --project-root flag for project root override."""
    parser.add_argument(
        "--project-root",
        type=str,
        help="Project directory holding gop.yml (default: nearest ancestor of the current directory)",
    )


def add_target_arg(parser: argparse.ArgumentParser) -> None:
    """Add optional positional target name."""
    parser.add_argument(
        "target",
        nargs="?",
        help="Target name from gop.yml (default: target containing the current directory, else the first)",
    )


def add_tags_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tags",
        default="",
        help="Extra build tags, comma or space separated",
    )


def add_tests_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tests",
        action="store_true",
        help="Include _test.go files of the target",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag."""
    parser.add_argument(
        "--dry-run",
        "-d",
        action="store_true",
        help="Show what would be copied without fetching or writing",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )


__all__ = [
    "add_json_flag",
    "add_project_root_flag",
    "add_target_arg",
    "add_tags_flag",
    "add_tests_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
]
