"""
List the external imports of a target.

SUMMARY: List a target's external imports and where each one is found
"""

from __future__ import annotations

import argparse

from gop.cli import (
    OutputFormatter,
    add_json_flag,
    add_project_root_flag,
    add_tags_flag,
    add_target_arg,
    add_tests_flag,
    get_project_root,
)

SUMMARY = "List a target's external imports and where each one is found"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_target_arg(parser)
    parser.add_argument(
        "--direct",
        action="store_true",
        help="Only imports of the target's own sources (no transitive walk)",
    )
    add_tags_flag(parser)
    add_tests_flag(parser)
    add_json_flag(parser)
    add_project_root_flag(parser)


def _status(import_path: str, settings) -> str:
    from gop.core.imports import normalize_import_path
    from gop.core.vendors import exists

    rel = normalize_import_path(import_path)
    if exists(settings.vendor_dir / rel):
        return "vendored"
    if exists(settings.cache_dir / rel):
        return "cached"
    return "missing"


def main(args: argparse.Namespace) -> int:
    """Print the import set of the selected target."""
    from pathlib import Path

    from gop.core.ensure import resolve_settings, walk_target

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = resolve_settings(
            get_project_root(args),
            target_name=getattr(args, "target", None),
            cwd=Path.cwd(),
            tags=getattr(args, "tags", "") or "",
        )
        graph = walk_target(
            settings,
            transitive=not getattr(args, "direct", False),
            include_tests=bool(getattr(args, "tests", False)),
        )
        rows = [
            {"import_path": p, "status": _status(p, settings)}
            for p in sorted(graph.import_set())
        ]
    except Exception as e:
        formatter.error(e, error_code="imports_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"target": settings.target.name, "imports": rows})
        return 0

    if not rows:
        formatter.text(f"No external imports for target {settings.target.name}.")
        return 0
    width = max(len(r["import_path"]) for r in rows)
    for row in rows:
        formatter.text(f"{row['import_path']:<{width}}  {row['status']}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
