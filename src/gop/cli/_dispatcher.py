"""
Auto-discovery CLI dispatcher for gop.

Command modules are found on disk and registered without a central list:

- ``cli/commands/<name>.py``  => ``gop <name>``
- ``cli/<domain>/<name>.py``  => ``gop <domain> <name>``

Each module provides ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from gop.cli._args import add_verbose_flag
from gop.core.utils.stdlib_logging import (
    configure_stdlib_logging,
    suppress_lastresort_in_json_mode,
)

logger = logging.getLogger(__name__)

CLI_DIR = Path(__file__).parent
ROOT_COMMANDS_DIR = "commands"

CommandTable = dict[str, dict[str, Any]]


def _is_command_file(path: Path) -> bool:
    return path.suffix == ".py" and not path.name.startswith("_")


def _discover(package: str, directory: Path) -> CommandTable:
    """Import every command module in ``directory`` (a subpackage of gop.cli)."""
    table: CommandTable = {}
    for path in sorted(directory.glob("*.py")):
        if not _is_command_file(path):
            continue
        module = importlib.import_module(f"{package}.{path.stem}")
        table[path.stem] = {
            "summary": getattr(module, "SUMMARY", path.stem),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return table


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Domain subfolders (``imports``, ``targets``) holding at least one command."""
    return {
        item.name: item
        for item in sorted(CLI_DIR.iterdir())
        if item.is_dir()
        and item.name != ROOT_COMMANDS_DIR
        and not item.name.startswith("_")
        and any(_is_command_file(f) for f in item.iterdir())
    }


@lru_cache(maxsize=1)
def discover_root_commands() -> CommandTable:
    """Commands without a domain prefix (``gop init``, ``gop ensure``)."""
    directory = CLI_DIR / ROOT_COMMANDS_DIR
    if not directory.is_dir():
        return {}
    return _discover(f"gop.cli.{ROOT_COMMANDS_DIR}", directory)


@lru_cache(maxsize=16)
def discover_commands(domain: str) -> CommandTable:
    """Commands of one domain, keyed by command name."""
    return _discover(f"gop.cli.{domain}", CLI_DIR / domain)


def _register(subparsers: argparse._SubParsersAction, commands: CommandTable) -> None:
    for name, info in commands.items():
        cmd_parser = subparsers.add_parser(name.replace("_", "-"), help=info["summary"])
        if info["register_args"]:
            info["register_args"](cmd_parser)
        if info["main"]:
            cmd_parser.set_defaults(_func=info["main"])


def _domain_summary(domain: str) -> str:
    doc = (importlib.import_module(f"gop.cli.{domain}").__doc__ or "").strip()
    return doc.splitlines()[0] if doc else f"{domain} commands"


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser from the discovered commands."""
    parser = argparse.ArgumentParser(
        prog="gop",
        description="gop - project-local Go dependency vendoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    add_verbose_flag(parser)

    top = parser.add_subparsers(dest="domain", title="commands", metavar="<command>")
    _register(top, discover_root_commands())

    for domain in discover_domains():
        commands = discover_commands(domain)
        if not commands:
            continue
        domain_parser = top.add_parser(domain, help=_domain_summary(domain))
        _register(
            domain_parser.add_subparsers(dest="command", title="commands", metavar="<command>"),
            commands,
        )

    return parser


def _get_version() -> str:
    from gop import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    if getattr(args, "verbose", False):
        configure_stdlib_logging(level="DEBUG")
    elif getattr(args, "json", False):
        # Keep stdout/stderr machine-readable.
        suppress_lastresort_in_json_mode()
    else:
        configure_stdlib_logging(level="WARNING")


def main(argv: list[str] | None = None) -> int:
    """
    Entry point of the ``gop`` console script.

    Returns:
        Exit code: 0 on success, 1 on error, 130 when interrupted
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(list(argv))

    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        # `gop <domain>` without a command
        parser.parse_args([args.domain, "--help"])
        return 0

    _configure_logging(args)
    logger.debug("Running gop %s", " ".join(argv))

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
