"""Tests for workspace scaffolding."""
from __future__ import annotations

from pathlib import Path

import yaml


class TestInitProject:
    def test_creates_layout(self, tmp_path: Path) -> None:
        from gop.core.setup import init_project

        root = tmp_path / "hello"
        result = init_project(root)

        for rel in ("src", "src/vendor", "src/main", "bin"):
            assert (root / rel).is_dir(), rel
        assert (root / "src" / "main" / "main.go").read_text() == "package main\n\nfunc main() {\n\n}\n"
        assert root / "gop.yml" in result.created
        assert result.skipped == []

    def test_default_config_is_loadable(self, tmp_path: Path) -> None:
        from gop.core.config import ProjectConfig
        from gop.core.setup import init_project

        root = tmp_path / "hello"
        init_project(root)

        data = yaml.safe_load((root / "gop.yml").read_text())
        assert data == {"targets": [{"name": "hello", "dir": "main", "assets": ["templates", "public"]}]}
        assert ProjectConfig.load(root).targets[0].name == "hello"

    def test_custom_name_and_no_assets(self, tmp_path: Path) -> None:
        from gop.core.config import ProjectConfig
        from gop.core.setup import init_project

        init_project(tmp_path, name="svc", assets=())

        target = ProjectConfig.load(tmp_path).targets[0]
        assert target.name == "svc"
        assert target.assets == ()

    def test_existing_files_are_kept(self, tmp_path: Path) -> None:
        from gop.core.setup import init_project

        (tmp_path / "gop.yml").write_text("targets:\n- {name: mine, dir: app}\n")
        (tmp_path / "src" / "main").mkdir(parents=True)
        (tmp_path / "src" / "main" / "main.go").write_text("package main // custom\n")

        result = init_project(tmp_path)

        assert (tmp_path / "gop.yml").read_text() == "targets:\n- {name: mine, dir: app}\n"
        assert (tmp_path / "src" / "main" / "main.go").read_text() == "package main // custom\n"
        assert tmp_path / "gop.yml" in result.skipped
        assert (tmp_path / "src" / "vendor").is_dir()

    def test_second_run_creates_nothing(self, tmp_path: Path) -> None:
        from gop.core.setup import init_project

        init_project(tmp_path)
        again = init_project(tmp_path)

        assert again.created == []
        assert len(again.skipped) == 7
