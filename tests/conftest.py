import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'gop' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


# Variables that change how gop resolves projects, the package cache and
# build constraints. Tests opt back in through monkeypatch.
_LEAK_PRONE_ENV_KEYS = [
    "GOP_PROJECT_ROOT",
    "GOPATH",
    "GOROOT",
    "GO111MODULE",
    "GOFLAGS",
]


@pytest.fixture(autouse=True)
def _isolated_go_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the build context to linux/amd64 and clear Go-related variables."""
    for key in _LEAK_PRONE_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GOOS", "linux")
    monkeypatch.setenv("GOARCH", "amd64")
    monkeypatch.setenv("CGO_ENABLED", "1")


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by CLI runs so tests do not leak them."""
    yield
    from gop.core.utils.stdlib_logging import reset_stdlib_logging_for_tests

    reset_stdlib_logging_for_tests()


@pytest.fixture
def gopath(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A GOPATH whose ``src`` directory is the package cache."""
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("GOPATH", str(root))
    return root


@pytest.fixture
def project(tmp_path: Path):
    """A gop workspace with a single ``app`` target in ``src/main``."""
    from helpers.go_tree import GoProject

    proj = GoProject(tmp_path / "project")
    proj.create()
    return proj


@pytest.fixture
def in_dir():
    """Change the working directory for the duration of a test."""
    original = Path.cwd()

    def _chdir(path: Path) -> None:
        os.chdir(path)

    yield _chdir
    os.chdir(original)
