from __future__ import annotations

from typing import Any, Dict, Mapping


class GopError(Exception):
    """Base exception for gop."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(GopError):
    """Raised when a required environment or configuration value is missing or invalid."""


class ParseError(GopError):
    """Raised when a source directory cannot be parsed as Go source."""


class FilesystemError(GopError, OSError):
    """Raised for stat/read/write/permission failures while probing or copying."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GopError.__init__(self, message, context=context)
        OSError.__init__(self, message)


class DestinationConflictError(FilesystemError, FileExistsError):
    """Raised when a copy destination already exists."""


class SubprocessError(GopError, RuntimeError):
    """Raised when the fetch command fails or cannot be found."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GopError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "GopError",
    "ConfigurationError",
    "ParseError",
    "FilesystemError",
    "DestinationConflictError",
    "SubprocessError",
]
