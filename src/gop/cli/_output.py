"""CLI output formatting.

Every command writes through :class:`OutputFormatter` so ``--json`` output
stays machine-readable.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Optional

from gop.core.exceptions import GopError


class OutputFormatter:
    """Output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report an error on stderr.

        JSON mode emits ``{"error": code, "message": ...}`` plus the error
        context for :class:`GopError` instances.
        """
        msg = message or str(error)
        if self.json_mode:
            output: dict[str, Any] = {
                "error": error_code,
                "message": msg,
            }
            if isinstance(error, GopError):
                output["kind"] = error.__class__.__name__
                if error.context:
                    output["context"] = error.context
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        """Output raw JSON data."""
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        """Output plain text (suppressed in JSON mode)."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
