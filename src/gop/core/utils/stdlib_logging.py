from __future__ import annotations

import logging
import sys

_GOP_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def configure_stdlib_logging(*, level: str = "INFO") -> None:
    """Configure Python stdlib logging for the gop CLI.

    Installs a single stderr handler on the root logger; stdout stays reserved
    for command output. Calling it again only updates the level.
    """
    global _GOP_HANDLER

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _GOP_HANDLER is not None:
        _GOP_HANDLER.setLevel(_level_from_name(level))
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)

    _GOP_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: drop the handler installed by :func:`configure_stdlib_logging`."""
    global _GOP_HANDLER, _JSON_MODE_NULL_HANDLER_INSTALLED
    root = logging.getLogger()
    if _GOP_HANDLER is not None:
        root.removeHandler(_GOP_HANDLER)
        _GOP_HANDLER.close()
    _GOP_HANDLER = None
    _JSON_MODE_NULL_HANDLER_INSTALLED = False


def suppress_lastresort_in_json_mode() -> None:
    """Prevent stdlib logging's lastResort handler from polluting JSON output.

    Python's logging module emits WARNING+ records to stderr via the implicit
    ``lastResort`` handler when no handlers are configured. For ``--json``
    output we want machine-readable streams, so the root logger gets a
    NullHandler when it otherwise has none.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = [
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
