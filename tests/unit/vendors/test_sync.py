"""Tests for vendor synchronization."""
from __future__ import annotations

import os
from pathlib import Path
from typing import List

import pytest

from helpers.go_tree import write_package


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    vendor = tmp_path / "project" / "src" / "vendor"
    cache = tmp_path / "gopath" / "src"
    vendor.mkdir(parents=True)
    cache.mkdir(parents=True)
    return vendor, cache


def snapshot(root: Path) -> dict[str, int]:
    """Relative path -> mtime_ns for everything under ``root``."""
    out = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            out[path.relative_to(root).as_posix()] = os.lstat(path).st_mtime_ns
    return out


class TestVendorSynchronizer:
    """Scenario coverage for VendorSynchronizer.sync."""

    def test_copies_missing_packages(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "github.com/x/y", files={".git/HEAD": "ref\n", "sub/b.go": "package sub\n"})

        result = VendorSynchronizer(vendor, cache).sync(["github.com/x/y"])

        assert [a.import_path for a in result.copied] == ["github.com/x/y"]
        assert (vendor / "github.com" / "x" / "y" / "y.go").is_file()
        assert (vendor / "github.com" / "x" / "y" / "sub" / "b.go").is_file()
        assert not (vendor / "github.com" / "x" / "y" / ".git").exists()

    def test_parent_copy_satisfies_nested_package(self, dirs) -> None:
        """github.com/x/y is copied with its sub/ tree; github.com/x/y/sub is then present."""
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "github.com/x/y", files={"sub/sub.go": "package sub\n"})

        result = VendorSynchronizer(vendor, cache).sync(["github.com/x/y/sub", "github.com/x/y"])

        assert [(a.import_path, a.action) for a in result.actions] == [
            ("github.com/x/y", "copied"),
            ("github.com/x/y/sub", "skipped"),
        ]
        assert (vendor / "github.com" / "x" / "y" / "sub" / "sub.go").is_file()

    def test_existing_parent_does_not_satisfy_nested_package(self, dirs) -> None:
        """A vendored github.com/x/y without sub/ still gets github.com/x/y/sub copied."""
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "github.com/x/y", files={"sub/s.go": "package sub\n"})
        write_package(vendor, "github.com/x/y")

        result = VendorSynchronizer(vendor, cache).sync(["github.com/x/y", "github.com/x/y/sub"])

        assert [(a.import_path, a.action) for a in result.actions] == [
            ("github.com/x/y", "skipped"),
            ("github.com/x/y/sub", "copied"),
        ]
        assert (vendor / "github.com" / "x" / "y" / "sub" / "s.go").is_file()

    def test_dry_run_then_real_run(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/one")
        write_package(cache, "b.com/two")
        sync = VendorSynchronizer(vendor, cache)

        dry = sync.sync(["a.com/one", "b.com/two"], dry_run=True)

        assert dry.dry_run
        assert [a.import_path for a in dry.pending] == ["a.com/one", "b.com/two"]
        assert list(vendor.iterdir()) == []

        real = sync.sync(["a.com/one", "b.com/two"])

        assert [a.import_path for a in real.copied] == ["a.com/one", "b.com/two"]
        assert (vendor / "a.com" / "one").is_dir()
        assert (vendor / "b.com" / "two").is_dir()

    def test_second_run_writes_nothing(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/one")
        sync = VendorSynchronizer(vendor, cache)
        sync.sync(["a.com/one"])
        before = snapshot(vendor)

        again = sync.sync(["a.com/one"])

        assert again.copied == ()
        assert [a.action for a in again.actions] == ["skipped"]
        assert snapshot(vendor) == before

    def test_partial_destination_blocks_copy(self, dirs) -> None:
        """An existing vendor directory counts as vendored even if incomplete."""
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/one", files={"more.go": "package one\n"})
        partial = vendor / "a.com" / "one"
        partial.mkdir(parents=True)
        (partial / "one.go").write_text("package one\n")

        result = VendorSynchronizer(vendor, cache).sync(["a.com/one"])

        assert [a.action for a in result.actions] == ["skipped"]
        assert not (partial / "more.go").exists()

    def test_missing_cache_entry_fails(self, dirs) -> None:
        from gop.core.exceptions import FilesystemError
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs

        with pytest.raises(FilesystemError):
            VendorSynchronizer(vendor, cache).sync(["nowhere.org/pkg"])
        assert not (vendor / "nowhere.org").exists()

    def test_fail_fast_keeps_earlier_copies(self, dirs) -> None:
        from gop.core.exceptions import FilesystemError
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/one")
        write_package(cache, "c.com/three")

        with pytest.raises(FilesystemError):
            VendorSynchronizer(vendor, cache).sync(["a.com/one", "b.com/missing", "c.com/three"])

        assert (vendor / "a.com" / "one").is_dir()
        assert not (vendor / "c.com").exists()

    def test_auto_fetch_only_when_cache_misses(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/cached")
        fetched: List[str] = []

        def fake_fetch(import_path: str) -> None:
            fetched.append(import_path)
            write_package(cache, import_path)

        sync = VendorSynchronizer(vendor, cache, fetch=fake_fetch)
        result = sync.sync(["a.com/cached", "b.com/remote"], auto_fetch=True)

        assert fetched == ["b.com/remote"]
        assert [(a.import_path, a.action) for a in result.actions] == [
            ("a.com/cached", "copied"),
            ("b.com/remote", "fetched"),
        ]
        assert [a.import_path for a in result.fetched] == ["b.com/remote"]
        assert (vendor / "b.com" / "remote" / "remote.go").is_file()

    def test_dry_run_never_fetches(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        calls: List[str] = []

        sync = VendorSynchronizer(vendor, cache, fetch=calls.append)
        result = sync.sync(["b.com/remote"], dry_run=True, auto_fetch=True)

        assert calls == []
        assert [a.action for a in result.actions] == ["pending"]

    def test_fetch_without_auto_fetch_is_not_attempted(self, dirs) -> None:
        from gop.core.exceptions import FilesystemError
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        calls: List[str] = []

        with pytest.raises(FilesystemError):
            VendorSynchronizer(vendor, cache, fetch=calls.append).sync(["b.com/remote"])
        assert calls == []

    def test_report_called_in_order(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "b.com/two")
        write_package(cache, "a.com/one")
        seen = []

        VendorSynchronizer(vendor, cache).sync(["b.com/two", "a.com/one", "b.com/two"], report=seen.append)

        assert [a.import_path for a in seen] == ["a.com/one", "b.com/two"]

    def test_symlinked_vendor_entry_counts_as_present(self, dirs, tmp_path: Path) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/one")
        (vendor / "a.com").mkdir()
        os.symlink(tmp_path / "elsewhere", vendor / "a.com" / "one")

        result = VendorSynchronizer(vendor, cache).sync(["a.com/one"])

        assert [a.action for a in result.actions] == ["skipped"]

    def test_invalid_import_path(self, dirs) -> None:
        from gop.core.exceptions import FilesystemError
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs

        with pytest.raises(FilesystemError):
            VendorSynchronizer(vendor, cache).sync(["../escape"])

    def test_result_serialization(self, dirs) -> None:
        from gop.core.vendors import VendorSynchronizer

        vendor, cache = dirs
        write_package(cache, "a.com/one")

        data = VendorSynchronizer(vendor, cache).sync(["a.com/one"], dry_run=True).to_dict()

        assert data["dry_run"] is True
        assert data["actions"] == [
            {
                "import_path": "a.com/one",
                "action": "pending",
                "dest": str(vendor / "a.com" / "one"),
                "source": str(cache / "a.com" / "one"),
            }
        ]


class TestSyncImports:
    @pytest.mark.integration
    def test_functional_form_uses_fetch_command(self, dirs, gopath: Path) -> None:
        import sys

        from gop.core.vendors import sync_imports

        vendor, _ = dirs
        cache = gopath / "src"
        script = (
            "import os, sys\n"
            "p = os.path.join(os.environ['GOPATH'], 'src', *sys.argv[1].split('/'))\n"
            "os.makedirs(p)\n"
            "open(os.path.join(p, 'got.go'), 'w').write('package got\\n')\n"
        )

        result = sync_imports(
            ["example.org/got"],
            vendor,
            cache,
            auto_fetch=True,
            fetch_dir=vendor.parent,
            fetch_command=[sys.executable, "-c", script],
        )

        assert [a.action for a in result.actions] == ["fetched"]
        assert (vendor / "example.org" / "got" / "got.go").is_file()
