"""Tests for pure helpers: git arguments, worktree queries, branches and paths"""
import hashlib
import os

import pytest

from sprout.core.branches import get_worktree_available_branches
from sprout.core.git_commands import strip_remote_prefix, worktree_add_args, worktree_remove_args
from sprout.core.paths import derive_worktree_path, derive_worktree_root, repo_id, validate_branch_name
from sprout.core.worktrees import (
    filter_sprout_worktrees,
    filter_sprout_worktrees_any_root,
    find_worktree_by_branch,
    is_under_sprout_root,
)
from sprout.models.branch import Branch
from sprout.models.worktree import Worktree


class TestWorktreeAddArgs:
    """Test the git worktree add decision table."""

    @pytest.mark.parametrize("local,remote,origin_main,tail", [
        (True, True, True, ["feature"]),
        (True, False, False, ["feature"]),
        (False, True, False, ["-b", "feature", "origin/feature"]),
        (False, True, True, ["-b", "feature", "origin/feature"]),
        (False, False, True, ["-b", "feature", "--no-track", "origin/main"]),
        (False, False, False, ["-b", "feature", "--no-track", "HEAD"]),
    ])
    def test_decision_table(self, local, remote, origin_main, tail):
        """Each row of the table maps to its arguments."""
        args = worktree_add_args("/p", "feature", local, remote, origin_main)
        assert args == ["worktree", "add", "/p"] + tail

    def test_strips_origin_prefix(self):
        """origin/ prefixes are removed before building arguments."""
        args = worktree_add_args("/p", "origin/feature", False, True, True)
        assert args == ["worktree", "add", "/p", "-b", "feature", "origin/feature"]

    def test_strip_remote_prefix(self):
        """Only a leading origin/ is removed."""
        assert strip_remote_prefix("origin/a/b") == "a/b"
        assert strip_remote_prefix("feature/origin/x") == "feature/origin/x"

    def test_remove_args(self):
        """--force goes before the path."""
        assert worktree_remove_args("/p", False) == ["worktree", "remove", "/p"]
        assert worktree_remove_args("/p", True) == ["worktree", "remove", "--force", "/p"]


class TestSproutRoot:
    """Test sprout root membership."""

    def test_descendant(self):
        """Paths below the root are under it."""
        assert is_under_sprout_root("/s/repo-1/feature/repo", "/s")

    def test_equal_is_not_under(self):
        """The root itself does not count."""
        assert not is_under_sprout_root("/s", "/s")
        assert not is_under_sprout_root("/s/", "/s")

    def test_empty_inputs(self):
        """Empty inputs are never under."""
        assert not is_under_sprout_root("", "/s")
        assert not is_under_sprout_root("/s/x", "")

    def test_sibling_prefix(self):
        """A shared string prefix is not a parent directory."""
        assert not is_under_sprout_root("/sprout2/x", "/sprout")

    def test_lexical_cleanup(self):
        """.. components are resolved lexically."""
        assert not is_under_sprout_root("/s/../etc", "/s")
        assert is_under_sprout_root("/s/a/../b", "/s")

    def test_filter_and_find(self):
        """Filtering keeps sprout worktrees; lookup skips detached ones."""
        worktrees = [
            Worktree("/r", branch="main"),
            Worktree("/s/r-1/feature/r", branch="feature"),
            Worktree("/s/r-1/det/r", branch=""),
            Worktree("/elsewhere/feature", branch="feature"),
        ]
        assert [wt.path for wt in filter_sprout_worktrees(worktrees, "/s")] == [
            "/s/r-1/feature/r", "/s/r-1/det/r",
        ]
        assert find_worktree_by_branch(worktrees, "/s", "feature") == "/s/r-1/feature/r"
        assert find_worktree_by_branch(worktrees, "/s", "") is None
        assert find_worktree_by_branch(worktrees, "/s", "main") is None

    def test_filter_any_root(self):
        """Worktrees under the legacy root are included."""
        worktrees = [Worktree("/new/a/b"), Worktree("/old/a/b"), Worktree("/r")]
        kept = filter_sprout_worktrees_any_root(worktrees, ["/new", "/old"])
        assert [wt.path for wt in kept] == ["/new/a/b", "/old/a/b"]


class TestAvailableBranches:
    """Test branch availability for new worktrees."""

    def test_excludes_checked_out(self):
        """Branches checked out anywhere are not offered."""
        branches = [
            Branch("main", "main", True),
            Branch("feature", "feature", True),
            Branch("remote-only", "remote-only", False),
            Branch("", "", True),
        ]
        worktrees = [Worktree("/r", branch="main"), Worktree("/s/x", branch="")]
        available = get_worktree_available_branches(branches, worktrees)
        assert [b.name for b in available] == ["feature", "remote-only"]

    def test_ref_name(self):
        """Remote-only branches are referenced through origin."""
        assert Branch("x", "x", False).ref_name == "origin/x"
        assert Branch("x", "x", True).ref_name == "x"


class TestPathDerivation:
    """Test worktree path derivation."""

    def test_repo_id(self):
        """Repository ids are the first 8 hex digits of sha1."""
        assert repo_id("/r") == hashlib.sha1(b"/r").hexdigest()[:8]

    def test_layout(self):
        """Paths follow <root>/<name>-<id>/<branch>/<name>."""
        path, error = derive_worktree_path("/s", "/code/app", "feature/x")
        assert error is None
        assert path == os.path.join("/s", f"app-{repo_id('/code/app')}", "feature/x", "app")
        assert derive_worktree_root("/s", "/code/app") == os.path.join("/s", f"app-{repo_id('/code/app')}")

    def test_trailing_slash_is_same_repo(self):
        """Trailing separators do not change the repository id."""
        assert derive_worktree_root("/s", "/code/app/") == derive_worktree_root("/s", "/code/app")

    @pytest.mark.parametrize("branch", ["", "/abs", "../up", "a/../b", "a/./b", ".", "a//b"])
    def test_invalid_branches(self, branch):
        """Unsafe branch names are rejected."""
        path, error = derive_worktree_path("/s", "/code/app", branch)
        assert path == ""
        assert error

    def test_empty_repo(self):
        """An empty repository is rejected."""
        assert derive_worktree_path("/s", "", "x") == ("", "repository root cannot be empty")

    def test_validate_ok(self):
        """Nested branch names are fine."""
        assert validate_branch_name("feat/login-page") is None
