"""
Vendor the external imports of a target.

SUMMARY: Copy missing external packages from $GOPATH/src into src/vendor
"""

from __future__ import annotations

import argparse

from gop.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_json_flag,
    add_project_root_flag,
    add_tags_flag,
    add_target_arg,
    add_tests_flag,
    get_project_root,
)

SUMMARY = "Copy missing external packages from $GOPATH/src into src/vendor"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_target_arg(parser)
    add_dry_run_flag(parser)
    parser.add_argument(
        "--get",
        "-g",
        dest="get",
        action="store_true",
        help="Run the fetch command (go get) for packages missing from $GOPATH/src",
    )
    add_tags_flag(parser)
    add_tests_flag(parser)
    add_json_flag(parser)
    add_project_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Run the ensure flow for the selected target."""
    from pathlib import Path

    from gop.core.ensure import resolve_settings, run_ensure
    from gop.core.vendors.models import SKIPPED, SyncAction

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    dry_run = bool(getattr(args, "dry_run", False))

    def report(action: SyncAction) -> None:
        if action.action == SKIPPED:
            return
        formatter.text(f"copying {action.import_path}")

    try:
        settings = resolve_settings(
            get_project_root(args),
            target_name=getattr(args, "target", None),
            cwd=Path.cwd(),
            tags=getattr(args, "tags", "") or "",
        )
        result = run_ensure(
            settings,
            dry_run=dry_run,
            auto_fetch=bool(getattr(args, "get", False)),
            include_tests=bool(getattr(args, "tests", False)),
            report=report,
        )
    except Exception as e:
        formatter.error(e, error_code="ensure_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({**settings.to_dict(), **result.to_dict()})
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
