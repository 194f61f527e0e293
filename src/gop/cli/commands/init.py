"""
Project initialization command.

SUMMARY: Create a gop workspace (gop.yml, src/, src/vendor/, bin/)
"""

from __future__ import annotations

import argparse

from gop.cli import OutputFormatter, add_json_flag

SUMMARY = "Create a gop workspace (gop.yml, src/, src/vendor/, bin/)"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI arguments for ``gop init``."""
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory to initialize (defaults to current directory)",
    )
    parser.add_argument(
        "--name",
        help="Target name written to gop.yml (defaults to the directory name)",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Scaffold a workspace; existing files are kept."""
    from pathlib import Path

    from gop.core.setup import init_project

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        result = init_project(Path(args.path), name=args.name)
    except Exception as e:
        formatter.error(e, error_code="init_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(result.to_dict())
        return 0

    for path in result.created:
        formatter.text(f"created {path}")
    for path in result.skipped:
        formatter.text(f"exists  {path}")
    formatter.text(f"Initialized gop project in {result.root}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
