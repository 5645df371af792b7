"""Pytest fixtures for sprout tests"""
import os
from pathlib import Path

import git
import pytest

from sprout.config import HooksConfig, SproutConfig
from sprout.effects.testing import TestEffects


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME and the XDG directories at a temporary location."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("SPROUT_SKIP_AUTOREPAIR", "1")
    for var in ("SPROUT_EDITOR", "EDITOR", "SPROUT_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory with symlinks resolved (git reports real paths)."""
    path = Path(os.path.realpath(tmp_path)) / "work"
    path.mkdir()
    return path


@pytest.fixture
def fx():
    """A fresh recording effects double."""
    return TestEffects()


@pytest.fixture
def hooks_config():
    """Config with one on_create and one on_open hook."""
    return SproutConfig(hooks=HooksConfig(on_create=["npm install"], on_open=["git fetch"]))


def _init_repo(path: Path) -> git.Repo:
    path.mkdir(parents=True)
    repo = git.Repo.init(path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "main")
    return repo


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on branch main."""
    repo = _init_repo(temp_dir / "test_repo")
    yield repo
    repo.close()


@pytest.fixture
def git_repo_with_origin(temp_dir):
    """A clone of a bare repository, so origin/main and origin/feature exist."""
    upstream = _init_repo(temp_dir / "upstream")
    upstream.git.branch("feature")
    bare = temp_dir / "origin.git"
    upstream.clone(str(bare), bare=True)
    clone = git.Repo.clone_from(str(bare), str(temp_dir / "clone"))
    clone.config_writer().set_value("user", "name", "Test User").release()
    clone.config_writer().set_value("user", "email", "test@example.com").release()
    yield clone
    clone.close()
    upstream.close()
