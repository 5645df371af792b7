"""Tests for command handlers driven through the effects double"""
import importlib
import os
from types import SimpleNamespace

import pytest

from sprout.cli.commands import maintenance
from sprout.cli.commands.add import cmd_add
from sprout.cli.commands.hooks import cmd_run_hooks
from sprout.cli.commands.list import cmd_list
from sprout.cli.commands.maintenance import cmd_prune, cmd_repair
from sprout.cli.commands.open import cmd_open
from sprout.cli.commands.remove import cmd_remove
from sprout.cli.commands.trust import cmd_hooks, cmd_trust, cmd_untrust
from sprout.cli.main import auto_repair, run, should_auto_repair
from sprout.config import HooksConfig, SproutConfig
from sprout.core.actions import HookType
from sprout.core.paths import derive_worktree_root
from sprout.effects.real import RealEffects
from sprout.effects.testing import git_key
from sprout.exceptions import GitOperationError, SelectionCancelledError
from sprout.models.branch import Branch
from sprout.models.worktree import Worktree, WorktreeStatus
from sprout.services.discovery_service import DiscoveredRepo

ROOT = derive_worktree_root("/sprout", "/repo")
FEATURE = os.path.join(ROOT, "feature", "repo")

# sprout.cli re-exports main(), which shadows the module attribute
main_module = importlib.import_module("sprout.cli.main")


def with_feature_worktree(fx):
    fx.worktrees = [Worktree("/repo", branch="main"), Worktree(FEATURE, branch="feature")]
    return fx


class TestAddCommand:
    """Test sprout add."""

    def test_creates_worktree(self, fx):
        """A new local branch gets a worktree and the editor."""
        fx.local_branches["feature"] = True
        assert cmd_add(fx, "feature") == 0
        assert fx.created_dirs == [(os.path.dirname(FEATURE), 0o755)]
        assert fx.git_commands == [("/repo", ("worktree", "add", FEATURE, "feature"))]
        assert fx.opened_paths == [FEATURE]
        assert fx.printed_msgs[-1] == "Worktree created!"

    def test_origin_prefix_is_stripped(self, fx):
        """origin/feature maps to the feature worktree."""
        fx.remote_branches["feature"] = True
        assert cmd_add(fx, "origin/feature", no_open=True) == 0
        assert fx.git_commands[0][1] == ("worktree", "add", FEATURE, "-b", "feature", "origin/feature")
        assert fx.opened_paths == []

    def test_new_branch_uses_origin_main(self, fx):
        """Unknown branches start from origin/main when it exists."""
        fx.remote_branches["main"] = True
        cmd_add(fx, "feature", no_open=True)
        assert fx.git_commands[0][1][3:] == ("-b", "feature", "--no-track", "origin/main")

    def test_untrusted_hooks_fail(self, fx, hooks_config):
        """Hooks without trust exit 1 before touching git."""
        fx.config = hooks_config
        assert cmd_add(fx, "feature") == 1
        assert "not trusted" in fx.printed_errs[0]
        assert fx.git_commands == []

    def test_trusted_hooks_run(self, fx, hooks_config):
        """Trusted hooks run in the new worktree."""
        fx.config = hooks_config
        fx.trusted_repos["/repo"] = True
        assert cmd_add(fx, "feature") == 0
        assert fx.hook_invocations[0].worktree_path == FEATURE
        assert fx.hook_invocations[0].commands == ("npm install",)

    def test_existing_worktree(self, fx):
        """Existing worktrees are reopened."""
        fx.files[FEATURE] = True
        assert cmd_add(fx, "feature") == 0
        assert fx.printed_msgs == [f"Worktree already exists at {FEATURE}"]
        assert fx.git_commands == []

    def test_interactive_selection(self, fx):
        """Without a branch the user picks among free branches."""
        fx.branches = [Branch("main", "main", True), Branch("feature", "feature", False)]
        fx.worktrees = [Worktree("/repo", branch="main")]
        fx.remote_branches["feature"] = True
        assert cmd_add(fx, None, no_open=True) == 0
        assert [b.name for b in fx.selected_from[0]] == ["feature"]
        assert fx.git_commands[0][1][2] == FEATURE

    def test_selection_cancelled(self, fx):
        """Cancelling the picker exits 1 silently."""
        fx.branches = [Branch("feature", "feature", True)]
        fx.selection_error = SelectionCancelledError()
        args = SimpleNamespace(command="add", branch=None, no_hooks=False, no_open=False, dry_run=False)
        assert run(fx, args) == 1
        assert fx.printed_errs == []
        assert fx.printed_msgs == []

    def test_dry_run(self, fx):
        """--dry-run prints the plan and executes nothing."""
        fx.local_branches["feature"] = True
        assert cmd_add(fx, "feature", dry_run=True) == 0
        assert fx.printed_msgs[0].startswith("Planned actions:")
        assert fx.git_commands == []
        assert fx.created_dirs == []

    def test_dry_run_error_plan(self, fx, hooks_config):
        """A dry run of a failing plan reports its exit code."""
        fx.config = hooks_config
        assert cmd_add(fx, "feature", dry_run=True) == 1
        assert "Exit with code 1" in fx.printed_msgs[0]

    def test_git_failure(self, fx):
        """A failing git command is reported and exits 1."""
        fx.local_branches["feature"] = True
        fx.git_command_errors[git_key("/repo", "worktree", "add", FEATURE, "feature")] = GitOperationError(
            "git worktree add", "exit 128", "fatal: already checked out"
        )
        assert cmd_add(fx, "feature") == 1
        assert fx.printed_errs[0].startswith("Error: git command in /repo failed")
        assert fx.opened_paths == []

    def test_invalid_branch(self, fx):
        """Unsafe branch names are rejected through run()."""
        args = SimpleNamespace(command="add", branch="../escape", no_hooks=False, no_open=False, dry_run=False)
        assert run(fx, args) == 1
        assert "invalid branch name" in fx.printed_errs[0]


class TestOpenCommand:
    """Test sprout open."""

    def test_open_by_branch(self, fx):
        """Branch names resolve to their sprout worktree."""
        with_feature_worktree(fx)
        assert cmd_open(fx, "feature") == 0
        assert fx.opened_paths == [FEATURE]

    def test_open_by_path(self, fx):
        """Existing paths are used directly."""
        fx.files[FEATURE] = True
        assert cmd_open(fx, FEATURE) == 0
        assert fx.opened_paths == [FEATURE]

    def test_unknown_branch(self, fx):
        """Unknown branches are an error."""
        with_feature_worktree(fx)
        args = SimpleNamespace(command="open", target="nope", no_hooks=False, dry_run=False)
        assert run(fx, args) == 1
        assert "no sprout-managed worktree found for branch 'nope'" in fx.printed_errs[0]

    def test_no_sprout_worktrees(self, fx):
        """Nothing to pick from prints a friendly line."""
        fx.worktrees = [Worktree("/repo", branch="main")]
        args = SimpleNamespace(command="open", target=None, no_hooks=False, dry_run=False)
        assert run(fx, args) == 1
        assert fx.printed_msgs == ["No sprout-managed worktrees found."]

    def test_selection(self, fx):
        """Without a target the user picks a sprout worktree."""
        with_feature_worktree(fx)
        assert cmd_open(fx) == 0
        assert fx.selected_from[0] == [Worktree(FEATURE, branch="feature")]
        assert fx.opened_paths == [FEATURE]

    def test_open_hooks(self, fx, hooks_config):
        """Trusted on_open hooks run after opening."""
        with_feature_worktree(fx)
        fx.config = hooks_config
        fx.trusted_repos["/repo"] = True
        assert cmd_open(fx, "feature") == 0
        assert fx.hook_invocations[0].hook_type == "on_open"


class TestRemoveCommand:
    """Test sprout remove."""

    def test_remove_by_branch(self, fx):
        """Removal runs remove then prune."""
        with_feature_worktree(fx)
        assert cmd_remove(fx, "feature") == 0
        assert fx.git_commands == [
            ("/repo", ("worktree", "remove", FEATURE)),
            ("/repo", ("worktree", "prune")),
        ]
        assert f"Removed worktree at {FEATURE}" in fx.printed_msgs

    def test_refuses_foreign_path(self, fx):
        """Existing paths outside the sprout root are refused."""
        fx.files["/tmp/foo"] = True
        assert cmd_remove(fx, "/tmp/foo") == 1
        assert fx.printed_errs == ["Refusing to remove non-sprout worktree: /tmp/foo"]
        assert fx.git_commands == []

    def test_refuses_other_repository_worktree(self, fx):
        """Paths under another repository's sprout directory are refused."""
        with_feature_worktree(fx)
        other = os.path.join(derive_worktree_root("/sprout", "/other"), "feature", "other")
        fx.files[other] = True
        assert cmd_remove(fx, other) == 1
        assert fx.printed_errs == [f"Refusing to remove non-sprout worktree: {other}"]
        assert fx.git_commands == []

    def test_force(self, fx):
        """--force reaches git."""
        with_feature_worktree(fx)
        cmd_remove(fx, "feature", force=True)
        assert fx.git_commands[0][1] == ("worktree", "remove", "--force", FEATURE)


class TestListCommand:
    """Test sprout list."""

    def test_current_repo(self, fx):
        """Lists the main worktree and sprout worktrees with status."""
        with_feature_worktree(fx)
        fx.statuses[FEATURE] = WorktreeStatus(dirty=True)
        assert cmd_list(fx) == 0
        output = fx.printed_msgs[0]
        assert "main" in output
        assert "🌱" in output
        assert "✗" in output
        assert fx.calls["get_worktree_status"] == 2

    def test_current_repo_empty(self, fx):
        """No sprout worktrees is not an error."""
        fx.worktrees = [Worktree("/repo", branch="main")]
        assert cmd_list(fx) == 0
        assert fx.printed_msgs == ["No sprout worktrees found for this repository."]

    def test_all_repos(self, fx):
        """--all groups discovered repositories."""
        repo_dir = os.path.basename(ROOT)
        fx.dirs = {"/sprout": [repo_dir], ROOT: ["feature"], os.path.join(ROOT, "feature"): ["repo"]}
        fx.files = {os.path.join(FEATURE, ".git"): True, FEATURE: True}
        fx.worktrees_by_repo[FEATURE] = [Worktree("/repo", branch="main"), Worktree(FEATURE, branch="feature")]
        assert cmd_list(fx, all_repos=True) == 0
        output = fx.printed_msgs[0]
        assert "├── " in output
        assert "└── " in output


class TestMaintenanceCommands:
    """Test sprout prune and repair."""

    def test_prune(self, fx):
        """Prune runs in the current repository."""
        assert cmd_prune(fx) == 0
        assert fx.git_commands == [("/repo", ("worktree", "prune"))]

    def test_repair_nothing_found(self, fx):
        """Repair without repositories only reports."""
        assert cmd_repair(fx) == 0
        assert fx.printed_msgs == ["No sprout-managed repositories found."]

    def test_repair_with_prune(self, fx):
        """--prune prunes after every repair."""
        repo_dir = os.path.basename(ROOT)
        fx.dirs = {"/sprout": [repo_dir], ROOT: ["feature"], os.path.join(ROOT, "feature"): ["repo"]}
        fx.files = {os.path.join(FEATURE, ".git"): True, FEATURE: True}
        fx.worktrees = [Worktree("/repo", branch="main"), Worktree(FEATURE, branch="feature")]
        assert cmd_repair(fx, prune=True) == 0
        assert fx.git_commands == [("/repo", ("worktree", "repair")), ("/repo", ("worktree", "prune"))]


class TestTrustCommands:
    """Test sprout trust, untrust and hooks."""

    def test_trust(self, fx):
        """Trust records the main worktree."""
        fx.main_worktree_path = "/main"
        assert cmd_trust(fx) == 0
        assert fx.trusted_repos_added == ["/main"]

    def test_trust_twice(self, fx):
        """Trusting a trusted repository changes nothing."""
        fx.trusted_repos["/repo"] = True
        assert cmd_trust(fx) == 0
        assert fx.calls["trust_repo"] == 0
        assert "already trusted" in fx.printed_msgs[0]

    def test_trust_path(self, fx):
        """An explicit path resolves to its main worktree."""
        fx.worktrees_by_repo[os.path.abspath("other")] = [Worktree("/other-main", branch="main")]
        assert cmd_trust(fx, "other") == 0
        assert fx.trusted_repos_added == ["/other-main"]

    def test_untrust(self, fx):
        """Untrust removes the repository."""
        fx.trusted_repos["/repo"] = True
        assert cmd_untrust(fx) == 0
        assert fx.trusted_repos_removed == ["/repo"]

    def test_trust_dry_run(self, fx):
        """Dry runs do not touch the store."""
        assert cmd_trust(fx, dry_run=True) == 0
        assert fx.calls["trust_repo"] == 0
        assert "Trust repository: /repo" in fx.printed_msgs[0]

    def test_hooks_status(self, fx, hooks_config):
        """hooks shows trust and commands."""
        hooks_config.path = "/repo/.sprout.yml"
        fx.config = hooks_config
        assert cmd_hooks(fx) == 0
        output = fx.printed_msgs[0]
        assert "Trusted: no" in output
        assert "1. npm install" in output
        assert "sprout trust" in output


class TestRunHooksCommand:
    """Test sprout init and sync."""

    def test_init_trusted(self, fx, hooks_config):
        """init runs on_create hooks in the current worktree."""
        fx.repo_root = FEATURE
        fx.config = hooks_config
        fx.trusted_repos["/repo"] = True
        assert cmd_run_hooks(fx, HookType.ON_CREATE) == 0
        assert fx.hook_invocations[0].worktree_path == FEATURE
        assert fx.hook_invocations[0].main_worktree_path == "/repo"

    def test_sync_prompts_when_interactive(self, fx, hooks_config):
        """Untrusted repositories prompt in a terminal."""
        fx.config = hooks_config
        fx.interactive = True
        assert cmd_run_hooks(fx, HookType.ON_OPEN) == 0
        assert fx.trust_prompts[0].hook_type == "on_open"
        assert fx.hook_invocations[0].commands == ("git fetch",)

    def test_untrusted_non_interactive(self, fx, hooks_config):
        """Without a terminal untrusted hooks fail."""
        fx.config = hooks_config
        assert cmd_run_hooks(fx, HookType.ON_CREATE) == 1
        assert fx.hook_invocations == []

    def test_no_hooks(self, fx):
        """Missing hooks are reported without checking trust."""
        assert cmd_run_hooks(fx, HookType.ON_OPEN) == 0
        assert fx.calls["is_trusted"] == 0
        assert fx.printed_msgs == ["No on_open hooks defined in .sprout.yml"]


class TestRun:
    """Test error translation in run()."""

    def test_not_a_repository(self, fx):
        """Git errors become Error: lines."""
        fx.get_repo_root_error = GitOperationError("rev-parse", "not a git repository")
        args = SimpleNamespace(command="prune", dry_run=False)
        assert run(fx, args) == 1
        assert fx.printed_errs[0].startswith("Error: ")

    def test_auto_repair_skipped_by_env(self, monkeypatch):
        """SPROUT_SKIP_AUTOREPAIR disables auto-repair."""
        args = SimpleNamespace(command="list", dry_run=False)
        assert should_auto_repair(args) is False
        monkeypatch.delenv("SPROUT_SKIP_AUTOREPAIR")
        assert should_auto_repair(args) is True

    @pytest.mark.parametrize("command", ["version", "completion", "install-completion", "hooks"])
    def test_auto_repair_skipped_for_commands(self, monkeypatch, command):
        """Informational commands never auto-repair."""
        monkeypatch.delenv("SPROUT_SKIP_AUTOREPAIR")
        assert should_auto_repair(SimpleNamespace(command=command, dry_run=False)) is False

    def test_auto_repair_skipped_for_dry_run(self, monkeypatch):
        """Dry runs never auto-repair."""
        monkeypatch.delenv("SPROUT_SKIP_AUTOREPAIR")
        assert should_auto_repair(SimpleNamespace(command="add", dry_run=True)) is False

    def test_auto_repair_runs_before_command(self, fx, monkeypatch):
        """Auto-repair repairs discovered repositories first."""
        monkeypatch.delenv("SPROUT_SKIP_AUTOREPAIR")
        repo_dir = os.path.basename(ROOT)
        fx.dirs = {"/sprout": [repo_dir], ROOT: ["feature"], os.path.join(ROOT, "feature"): ["repo"]}
        fx.files = {os.path.join(FEATURE, ".git"): True, FEATURE: True}
        fx.worktrees = [Worktree("/repo", branch="main"), Worktree(FEATURE, branch="feature")]
        assert run(fx, SimpleNamespace(command="prune", dry_run=False)) == 0
        assert fx.git_commands == [("/repo", ("worktree", "repair")), ("/repo", ("worktree", "prune"))]


class TestRepairIsolation:
    """Test that one broken repository does not stop repair of the others."""

    def _two_repos(self, monkeypatch):
        repos = [DiscoveredRepo(main_path="/a"), DiscoveredRepo(main_path="/b")]
        monkeypatch.setattr(maintenance, "discover_repos", lambda fx: repos)

    def test_failure_in_first_repository(self, fx, monkeypatch):
        """The second repository is repaired and the error is counted."""
        self._two_repos(monkeypatch)
        fx.git_command_errors[git_key("/a", "worktree", "repair")] = GitOperationError("worktree repair", "broken")
        assert cmd_repair(fx) == 1
        assert fx.git_commands == [("/a", ("worktree", "repair")), ("/b", ("worktree", "repair"))]
        assert "  ✅ Repaired: 1" in fx.printed_msgs
        assert "  ⚠️  Errors: 1" in fx.printed_msgs

    def test_prune_counts(self, fx, monkeypatch):
        """--prune prunes each repository after repairing it."""
        self._two_repos(monkeypatch)
        assert cmd_repair(fx, prune=True) == 0
        assert fx.git_commands == [
            ("/a", ("worktree", "repair")),
            ("/a", ("worktree", "prune")),
            ("/b", ("worktree", "repair")),
            ("/b", ("worktree", "prune")),
        ]
        assert "  🧹 Pruned: 2" in fx.printed_msgs
        assert not any("Errors" in msg for msg in fx.printed_msgs)

    def test_dry_run_lists_every_step(self, fx, monkeypatch):
        """Dry run prints the combined plan and executes nothing."""
        self._two_repos(monkeypatch)
        assert cmd_repair(fx, dry_run=True) == 0
        assert fx.git_commands == []
        assert "2. Run git command in /b: git worktree repair" in fx.printed_msgs[0]


class TestAutoRepairFailures:
    """Test that auto-repair never blocks the requested command."""

    def test_unreadable_sprout_root(self, fx, monkeypatch):
        """Errors while scanning roots are swallowed and the command runs."""
        monkeypatch.delenv("SPROUT_SKIP_AUTOREPAIR")
        fx.list_dir_error = NotADirectoryError(20, "Not a directory", "/sprout")
        assert run(fx, SimpleNamespace(command="prune", dry_run=False)) == 0
        assert fx.git_commands == [("/repo", ("worktree", "prune"))]
        assert fx.printed_errs == []

    def test_failing_repository_does_not_stop_others(self, fx, monkeypatch):
        """A repair failure in one repository still repairs the next."""
        repos = [DiscoveredRepo(main_path="/a"), DiscoveredRepo(main_path="/b")]
        monkeypatch.setattr(main_module, "discover_repos", lambda fx: repos)
        fx.git_command_errors[git_key("/a", "worktree", "repair")] = GitOperationError("worktree repair", "broken")
        auto_repair(fx)
        assert fx.git_commands == [("/a", ("worktree", "repair")), ("/b", ("worktree", "repair"))]

    def test_legacy_root_is_a_file(self, isolated_env):
        """A regular file where ~/.sprout should be is treated as empty."""
        (isolated_env / ".sprout").write_text("not a directory")
        effects = RealEffects()
        assert effects.list_dir(str(isolated_env / ".sprout")) == []
        auto_repair(effects)
