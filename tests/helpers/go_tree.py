"""Builders for Go source trees used across tests."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Optional, Sequence


def go_source(package: str, imports: Sequence[str] = (), *, header: str = "") -> str:
    """Render a minimal Go file importing ``imports``."""
    parts = []
    if header:
        parts.append(textwrap.dedent(header).strip("\n") + "\n\n")
    parts.append(f"package {package}\n")
    if imports:
        parts.append("\nimport (\n")
        for imp in imports:
            parts.append(f'\t"{imp}"\n')
        parts.append(")\n")
    parts.append("\nfunc init() {}\n")
    return "".join(parts)


def write_go(
    directory: Path,
    name: str,
    package: str,
    imports: Sequence[str] = (),
    *,
    header: str = "",
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(go_source(package, imports, header=header), encoding="utf-8")
    return path


def write_package(
    base: Path,
    import_path: str,
    imports: Sequence[str] = (),
    *,
    files: Optional[dict[str, str]] = None,
) -> Path:
    """Create package ``import_path`` under ``base`` with one Go file.

    ``files`` adds extra files (relative path -> content) inside the package.
    """
    pkg_dir = base.joinpath(*import_path.split("/"))
    name = import_path.rsplit("/", 1)[-1].replace("-", "_").replace(".", "_")
    write_go(pkg_dir, f"{name}.go", name, imports)
    for rel, content in (files or {}).items():
        path = pkg_dir.joinpath(*rel.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return pkg_dir


def write_gop_yml(root: Path, content: str) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / "gop.yml"
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


class GoProject:
    """A gop workspace rooted at ``root``."""

    def __init__(self, root: Path, targets: Iterable[tuple[str, str]] = (("app", "main"),)) -> None:
        self.root = root
        self.targets = list(targets)

    @property
    def src(self) -> Path:
        return self.root / "src"

    @property
    def vendor(self) -> Path:
        return self.src / "vendor"

    def target_dir(self, name: str = "app") -> Path:
        for target_name, rel in self.targets:
            if target_name == name:
                return self.src.joinpath(*rel.split("/"))
        raise KeyError(name)

    def create(self) -> "GoProject":
        lines = ["targets:"]
        for name, rel in self.targets:
            lines.append(f"- name: {name}")
            lines.append(f"  dir: {rel}")
        write_gop_yml(self.root, "\n".join(lines) + "\n")
        self.vendor.mkdir(parents=True, exist_ok=True)
        for name, _ in self.targets:
            self.target_dir(name).mkdir(parents=True, exist_ok=True)
        return self

    def write_main(self, imports: Sequence[str], *, target: str = "app", name: str = "main.go") -> Path:
        return write_go(self.target_dir(target), name, "main", imports)


__all__ = [
    "GoProject",
    "go_source",
    "write_go",
    "write_gop_yml",
    "write_package",
]
