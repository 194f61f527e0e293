"""Vendor data models.

Provides immutable dataclasses describing synchronization outcomes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

SKIPPED = "skipped"
PENDING = "pending"
COPIED = "copied"
FETCHED = "fetched"


@dataclass(frozen=True, slots=True)
class SyncAction:
    """What happened to one import path during a sync.

    Attributes:
        import_path: Import path as declared in source
        action: One of ``skipped``, ``pending``, ``copied``, ``fetched``
        dest: Vendor directory for the import
        source: Cache directory the files came from (None when skipped)
    """

    import_path: str
    action: str
    dest: str
    source: str | None = None

    @property
    def wrote(self) -> bool:
        return self.action in (COPIED, FETCHED)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "import_path": self.import_path,
            "action": self.action,
            "dest": self.dest,
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Result of a vendor sync run.

    Attributes:
        actions: One action per import path, in processing order
        dry_run: Whether the run was a dry run
    """

    actions: Tuple[SyncAction, ...] = ()
    dry_run: bool = False

    def _with(self, *actions: str) -> Tuple[SyncAction, ...]:
        return tuple(a for a in self.actions if a.action in actions)

    @property
    def skipped(self) -> Tuple[SyncAction, ...]:
        return self._with(SKIPPED)

    @property
    def pending(self) -> Tuple[SyncAction, ...]:
        return self._with(PENDING)

    @property
    def copied(self) -> Tuple[SyncAction, ...]:
        return self._with(COPIED, FETCHED)

    @property
    def fetched(self) -> Tuple[SyncAction, ...]:
        return self._with(FETCHED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "actions": [a.to_dict() for a in self.actions],
        }


__all__ = [
    "SKIPPED",
    "PENDING",
    "COPIED",
    "FETCHED",
    "SyncAction",
    "SyncResult",
]
