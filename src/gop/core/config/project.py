"""Project configuration loading.

Loads ``gop.yml`` from the project root and provides access to the declared
build targets and vendor settings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from gop.core.exceptions import ConfigurationError
from gop.core.schemas import SchemaValidationError, validate_payload
from gop.core.utils.io import read_yaml, resolve_yaml_path
from gop.core.vendors.fetch import DEFAULT_FETCH_COMMAND, FetchCommand

CONFIG_FILENAME = "gop.yml"
SRC_DIRNAME = "src"
VENDOR_DIRNAME = "vendor"


@dataclass(frozen=True, slots=True)
class Target:
    """A named build unit.

    Attributes:
        name: Target name
        dir: Source directory relative to ``<root>/src``
        assets: Asset directories shipped with the target
    """

    name: str
    dir: str
    assets: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Target":
        return cls(
            name=str(data["name"]),
            dir=str(data["dir"]),
            assets=tuple(str(a) for a in (data.get("assets") or [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "dir": self.dir, "assets": list(self.assets)}


@dataclass(frozen=True)
class ProjectConfig:
    """Parsed ``gop.yml`` of one project."""

    root: Path
    targets: tuple[Target, ...]
    fetch_command: FetchCommand = field(default=DEFAULT_FETCH_COMMAND)

    @property
    def src_dir(self) -> Path:
        return self.root / SRC_DIRNAME

    @property
    def vendor_dir(self) -> Path:
        return self.src_dir / VENDOR_DIRNAME

    def target_dir(self, target: Target) -> Path:
        return self.src_dir / Path(*target.dir.split("/"))

    @classmethod
    def load(cls, root: Path) -> "ProjectConfig":
        """Load and validate ``<root>/gop.yml``.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid.
        """
        root = Path(root)
        path = resolve_yaml_path(root / CONFIG_FILENAME)
        if not path.exists():
            raise ConfigurationError(
                f"Project configuration not found: {path}",
                context={"path": str(path)},
            )
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigurationError(
                f"Cannot read {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        return cls.from_dict(root, data, source=path)

    @classmethod
    def from_dict(cls, root: Path, data: Any, *, source: Optional[Path] = None) -> "ProjectConfig":
        where = str(source or Path(root) / CONFIG_FILENAME)
        try:
            validate_payload(data, "gop.schema")
        except SchemaValidationError as exc:
            raise ConfigurationError(
                f"Invalid {where}: {exc}",
                context={"path": where, "errors": exc.errors},
            ) from exc

        targets = tuple(Target.from_dict(item) for item in data["targets"])
        names = [t.name for t in targets]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Invalid {where}: duplicate target names: {', '.join(duplicates)}",
                context={"path": where},
            )
        for target in targets:
            _validate_target_dir(target, where)

        fetch_command = (data.get("vendor") or {}).get("fetch_command") or DEFAULT_FETCH_COMMAND
        if isinstance(fetch_command, list):
            fetch_command = tuple(fetch_command)
        return cls(root=Path(root), targets=targets, fetch_command=fetch_command)

    def get_target(self, name: str) -> Optional[Target]:
        for target in self.targets:
            if target.name == name:
                return target
        return None

    def select_target(self, name: Optional[str] = None, cwd: Optional[Path] = None) -> Target:
        """Pick the target for a run.

        Resolution order: explicit ``name``; the target whose source directory
        contains ``cwd``; the first declared target.

        Raises:
            ConfigurationError: If ``name`` is not declared.
        """
        if name:
            target = self.get_target(name)
            if target is None:
                known = ", ".join(t.name for t in self.targets)
                raise ConfigurationError(
                    f"Unknown target '{name}' (declared: {known})",
                    context={"target": name},
                )
            return target

        if cwd is not None:
            here = Path(cwd).resolve()
            for target in self.targets:
                tdir = self.target_dir(target).resolve()
                if here == tdir or tdir in here.parents:
                    return target

        return self.targets[0]


def _validate_target_dir(target: Target, where: str) -> None:
    raw = target.dir
    if raw.startswith(("/", "~")) or "\\" in raw or Path(raw).is_absolute():
        raise ConfigurationError(
            f"Invalid {where}: target '{target.name}' dir must be relative to src: {raw}",
            context={"path": where, "target": target.name},
        )
    parts = [p for p in raw.split("/") if p]
    if not parts or any(p in {".", ".."} for p in parts) or parts[0] == VENDOR_DIRNAME:
        raise ConfigurationError(
            f"Invalid {where}: target '{target.name}' dir must stay inside src: {raw}",
            context={"path": where, "target": target.name},
        )


__all__ = [
    "CONFIG_FILENAME",
    "SRC_DIRNAME",
    "VENDOR_DIRNAME",
    "Target",
    "ProjectConfig",
]
