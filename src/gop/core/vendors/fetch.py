"""External package fetch.

Runs the fetch command (``go get`` by default) for an import path that is
missing from the package cache. The command inherits stdout/stderr and has
no timeout.
"""
from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from gop.core.exceptions import SubprocessError

logger = logging.getLogger(__name__)

DEFAULT_FETCH_COMMAND: tuple[str, ...] = ("go", "get")

FetchCommand = Union[str, Sequence[str]]


def split_command(command: FetchCommand) -> list[str]:
    """Turn a string or argv sequence into an argv list."""
    if isinstance(command, str):
        return shlex.split(command)
    return [str(part) for part in command]


def fetch_environment(base: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Environment for the fetch command.

    ``GO111MODULE`` defaults to ``off`` so that ``go get`` populates
    ``$GOPATH/src`` rather than the module cache.
    """
    env = dict(os.environ if base is None else base)
    env.setdefault("GO111MODULE", "off")
    return env


def run_fetch(
    import_path: str,
    *,
    cwd: Path,
    command: FetchCommand = DEFAULT_FETCH_COMMAND,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """Run ``command <import_path>`` in ``cwd`` and wait for it.

    Raises:
        SubprocessError: If the command is not found or exits non-zero.
    """
    argv = split_command(command)
    if not argv:
        raise SubprocessError("Fetch command is empty")
    argv.append(import_path)

    logger.info("Fetching %s: %s (cwd=%s)", import_path, " ".join(argv), cwd)
    try:
        subprocess.run(
            argv,
            cwd=str(cwd),
            env=fetch_environment(env),
            check=True,
        )
    except FileNotFoundError as exc:
        if not Path(cwd).is_dir():
            raise SubprocessError(
                f"Fetch working directory does not exist: {cwd}",
                context={"command": argv, "cwd": str(cwd)},
            ) from exc
        raise SubprocessError(
            f"Fetch command not found: {argv[0]}",
            context={"command": argv, "cwd": str(cwd)},
        ) from exc
    except subprocess.CalledProcessError as exc:
        raise SubprocessError(
            f"Fetch command failed with exit code {exc.returncode}: {' '.join(argv)}",
            context={"command": argv, "cwd": str(cwd), "returncode": exc.returncode},
        ) from exc
    except OSError as exc:
        raise SubprocessError(
            f"Cannot run fetch command {argv[0]}: {exc}",
            context={"command": argv, "cwd": str(cwd)},
        ) from exc


__all__ = [
    "DEFAULT_FETCH_COMMAND",
    "FetchCommand",
    "split_command",
    "fetch_environment",
    "run_fetch",
]
