"""gop vendor subsystem.

Materializes external Go packages from the GOPATH cache into the project's
``src/vendor`` tree.

Key components:
- probe / manifest: Directory probing helpers
- copy_tree: Recursive copy preserving metadata and symlinks
- run_fetch: External fetch command (``go get``)
- VendorSynchronizer: Orchestrate probing, fetching and copying
"""
from __future__ import annotations

from gop.core.vendors.copier import VCS_PREFIXES, copy_file, copy_tree, exclude_vcs
from gop.core.vendors.fetch import DEFAULT_FETCH_COMMAND, run_fetch, split_command
from gop.core.vendors.models import SyncAction, SyncResult
from gop.core.vendors.probe import PathState, exists, is_dir, manifest, probe
from gop.core.vendors.sync import VendorSynchronizer, sync_imports

__all__ = [
    # Probing
    "PathState",
    "exists",
    "is_dir",
    "manifest",
    "probe",
    # Copying
    "VCS_PREFIXES",
    "copy_file",
    "copy_tree",
    "exclude_vcs",
    # Fetching
    "DEFAULT_FETCH_COMMAND",
    "run_fetch",
    "split_command",
    # Sync
    "VendorSynchronizer",
    "sync_imports",
    # Models
    "SyncAction",
    "SyncResult",
]
