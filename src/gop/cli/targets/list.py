"""
List the targets declared in gop.yml.

SUMMARY: List declared build targets
"""

from __future__ import annotations

import argparse

from gop.cli import OutputFormatter, add_json_flag, add_project_root_flag, load_project

SUMMARY = "List declared build targets"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)
    add_project_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """List targets."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = load_project(args)
    except Exception as e:
        formatter.error(e, error_code="config_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({
            "project_root": str(config.root),
            "targets": [t.to_dict() for t in config.targets],
        })
        return 0

    formatter.text(f"Targets ({len(config.targets)}):")
    for target in config.targets:
        formatter.text(f"  {target.name}")
        formatter.text(f"    Dir:    src/{target.dir}")
        if target.assets:
            formatter.text(f"    Assets: {', '.join(target.assets)}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
