"""Project root discovery."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from gop.core.config.env import PROJECT_ROOT_ENV, project_root_override
from gop.core.config.project import CONFIG_FILENAME
from gop.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def find_project_root(start: Path) -> Optional[Path]:
    """Nearest directory at or above ``start`` that holds ``gop.yml``."""
    start = Path(start).resolve()
    for candidate in (start, *start.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def resolve_project_root(
    explicit: Optional[Path] = None,
    *,
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Resolve the project root.

    Order: ``explicit``, then ``$GOP_PROJECT_ROOT``, then the nearest ancestor
    of ``cwd`` containing ``gop.yml``.

    Raises:
        ConfigurationError: If no project root can be found.
    """
    if explicit is not None:
        root = Path(explicit).expanduser().resolve()
        logger.debug("Project root from argument: %s", root)
        return root

    override = project_root_override(environ)
    if override is not None:
        root = override.resolve()
        logger.debug("Project root from %s: %s", PROJECT_ROOT_ENV, root)
        return root

    start = Path(cwd) if cwd is not None else Path.cwd()
    found = find_project_root(start)
    if found is None:
        raise ConfigurationError(
            f"No {CONFIG_FILENAME} found in {start} or any parent directory",
            context={"cwd": str(start)},
        )
    return found


__all__ = ["find_project_root", "resolve_project_root"]
