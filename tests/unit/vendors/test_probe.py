"""Tests for directory probing."""
from __future__ import annotations

import os
from pathlib import Path

import pytest


class TestProbe:
    def test_states(self, tmp_path: Path) -> None:
        from gop.core.vendors.probe import PathState, probe

        (tmp_path / "d").mkdir()
        (tmp_path / "f").write_text("x")
        os.symlink("missing-target", tmp_path / "dangling")

        assert probe(tmp_path / "d") is PathState.DIRECTORY
        assert probe(tmp_path / "f") is PathState.FILE
        assert probe(tmp_path / "dangling") is PathState.SYMLINK
        assert probe(tmp_path / "nope") is PathState.MISSING
        assert probe(tmp_path / "f" / "child") is PathState.MISSING

    def test_present(self) -> None:
        from gop.core.vendors.probe import PathState

        assert PathState.DIRECTORY.present
        assert PathState.SYMLINK.present
        assert not PathState.MISSING.present
        assert not PathState.INACCESSIBLE.present

    def test_boolean_helpers(self, tmp_path: Path) -> None:
        from gop.core.vendors.probe import exists, is_dir

        (tmp_path / "d").mkdir()
        (tmp_path / "f").write_text("x")
        os.symlink("missing-target", tmp_path / "dangling")
        os.symlink("d", tmp_path / "dirlink")

        assert is_dir(tmp_path / "d")
        assert is_dir(tmp_path / "dirlink")
        assert not is_dir(tmp_path / "f")
        assert not is_dir(tmp_path / "nope")
        assert exists(tmp_path / "dangling")
        assert exists(tmp_path / "f")
        assert not exists(tmp_path / "nope")


class TestManifest:
    def test_depth_first_sorted(self, tmp_path: Path) -> None:
        from gop.core.vendors.probe import manifest

        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "inner.go").write_text("")
        (tmp_path / "a.go").write_text("")
        (tmp_path / "c.go").write_text("")

        assert manifest(tmp_path) == ["a.go", "b/inner.go", "c.go"]
        assert manifest(tmp_path, include_dirs=True) == ["a.go", "b/", "b/inner.go", "c.go"]

    def test_skips_ds_store_and_does_not_follow_links(self, tmp_path: Path) -> None:
        from gop.core.vendors.probe import manifest

        other = tmp_path / "other"
        (other / "deep").mkdir(parents=True)
        (other / "deep" / "x.go").write_text("")
        root = tmp_path / "root"
        root.mkdir()
        (root / ".DS_Store").write_text("")
        (root / "main.go").write_text("")
        os.symlink(other, root / "link")

        assert manifest(root, include_dirs=True) == ["link", "main.go"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        from gop.core.vendors.probe import manifest

        assert manifest(tmp_path) == []

    def test_not_a_directory(self, tmp_path: Path) -> None:
        from gop.core.exceptions import FilesystemError
        from gop.core.vendors.probe import manifest

        (tmp_path / "f").write_text("x")

        with pytest.raises(FilesystemError):
            manifest(tmp_path / "f")
        with pytest.raises(FilesystemError):
            manifest(tmp_path / "missing")
