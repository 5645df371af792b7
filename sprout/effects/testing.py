"""Recording Effects double for exercising command handlers without git or a terminal."""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional

from sprout.config import SproutConfig
from sprout.core.paths import derive_worktree_path, derive_worktree_root
from sprout.exceptions import InvalidBranchNameError, SproutError
from sprout.models.branch import Branch
from sprout.models.worktree import Worktree, WorktreeStatus


@dataclass(frozen=True)
class HookInvocation:
    repo_root: str
    worktree_path: str
    main_worktree_path: str
    commands: tuple
    hook_type: str


@dataclass(frozen=True)
class TrustPrompt:
    main_worktree_path: str
    hook_type: str
    commands: tuple


def git_key(dir: str, *args: str) -> str:
    """Lookup key used by ``git_command_output`` and ``git_command_errors``."""
    return f"{dir}\n{' '.join(args)}"


class TestEffects:
    """Effects double programmed through plain attributes and dicts.

    Every method bumps ``calls[<method name>]``. Setting ``<method>_error``
    to an exception makes that method raise it.
    """

    __test__ = False  # Not a pytest test class

    def __init__(self):
        self.calls: Counter = Counter()

        # Programmed state
        self.repo_root = "/repo"
        self.main_worktree_path = "/repo"
        self.sprout_root = "/sprout"
        self.all_sprout_roots: Optional[List[str]] = None
        self.home = "/home/user"
        self.interactive = False
        self.config = SproutConfig()
        self.worktrees: List[Worktree] = []
        self.worktrees_by_repo: Dict[str, List[Worktree]] = {}
        self.branches: List[Branch] = []
        self.local_branches: Dict[str, bool] = {}
        self.remote_branches: Dict[str, bool] = {}
        self.git_command_output: Dict[str, str] = {}
        self.git_command_errors: Dict[str, Exception] = {}
        self.trusted_repos: Dict[str, bool] = {}
        self.files: Dict[str, bool] = {}
        self.dirs: Dict[str, List[str]] = {}
        self.worktree_paths: Dict[str, str] = {}
        self.statuses: Dict[str, WorktreeStatus] = {}
        self.selected_branch_index = 0
        self.selected_worktree_index = 0
        self.selection_error: Optional[Exception] = None
        self.prompt_trust_accepts = True

        # Error injection
        self.get_repo_root_error: Optional[Exception] = None
        self.get_main_worktree_path_error: Optional[Exception] = None
        self.list_worktrees_error: Optional[Exception] = None
        self.list_branches_error: Optional[Exception] = None
        self.mkdir_all_error: Optional[Exception] = None
        self.load_config_error: Optional[Exception] = None
        self.is_trusted_error: Optional[Exception] = None
        self.trust_repo_error: Optional[Exception] = None
        self.untrust_repo_error: Optional[Exception] = None
        self.open_editor_error: Optional[Exception] = None
        self.run_hooks_error: Optional[Exception] = None

        # Recordings
        self.printed_msgs: List[str] = []
        self.printed_errs: List[str] = []
        self.git_commands: List[tuple] = []
        self.opened_paths: List[str] = []
        self.created_dirs: List[tuple] = []
        self.hook_invocations: List[HookInvocation] = []
        self.trust_prompts: List[TrustPrompt] = []
        self.trusted_repos_added: List[str] = []
        self.trusted_repos_removed: List[str] = []
        self.config_loads: List[tuple] = []
        self.selected_from: List[list] = []

    def _record(self, name: str) -> None:
        self.calls[name] += 1
        error = getattr(self, f"{name}_error", None)
        if error is not None:
            raise error

    # Git queries

    def get_repo_root(self) -> str:
        self._record("get_repo_root")
        return self.repo_root

    def get_main_worktree_path(self) -> str:
        self._record("get_main_worktree_path")
        return self.main_worktree_path

    def list_worktrees(self, repo_root: str) -> List[Worktree]:
        self._record("list_worktrees")
        return list(self.worktrees_by_repo.get(repo_root, self.worktrees))

    def list_branches(self, repo_root: str) -> List[Branch]:
        self._record("list_branches")
        return list(self.branches)

    def local_branch_exists(self, repo_root: str, branch: str) -> bool:
        self._record("local_branch_exists")
        return self.local_branches.get(branch, False)

    def remote_branch_exists(self, repo_root: str, branch: str) -> bool:
        self._record("remote_branch_exists")
        return self.remote_branches.get(branch, False)

    def run_git_command(self, dir: str, *args: str) -> str:
        self._record("run_git_command")
        self.git_commands.append((dir, tuple(args)))
        key = git_key(dir, *args)
        if key in self.git_command_errors:
            raise self.git_command_errors[key]
        return self.git_command_output.get(key, "")

    def get_worktree_status(self, path: str) -> WorktreeStatus:
        self._record("get_worktree_status")
        return self.statuses.get(path, WorktreeStatus())

    # Filesystem

    def file_exists(self, path: str) -> bool:
        self._record("file_exists")
        return self.files.get(path, False)

    def mkdir_all(self, path: str, mode: int) -> None:
        self._record("mkdir_all")
        self.created_dirs.append((path, mode))

    def list_dir(self, path: str) -> List[str]:
        self._record("list_dir")
        return list(self.dirs.get(path, []))

    def user_home_dir(self) -> str:
        self._record("user_home_dir")
        return self.home

    # Configuration and trust

    def load_config(self, current_path: str, main_path: str) -> SproutConfig:
        self._record("load_config")
        self.config_loads.append((current_path, main_path))
        return self.config

    def is_trusted(self, repo_root: str) -> bool:
        self._record("is_trusted")
        return self.trusted_repos.get(repo_root, False)

    def trust_repo(self, repo_root: str) -> None:
        self._record("trust_repo")
        self.trusted_repos[repo_root] = True
        self.trusted_repos_added.append(repo_root)

    def untrust_repo(self, repo_root: str) -> None:
        self._record("untrust_repo")
        self.trusted_repos.pop(repo_root, None)
        self.trusted_repos_removed.append(repo_root)

    def prompt_trust_repo(self, main_worktree_path: str, hook_type: str, commands: List[str]) -> None:
        self._record("prompt_trust_repo")
        self.trust_prompts.append(TrustPrompt(main_worktree_path, hook_type, tuple(commands)))
        if not self.prompt_trust_accepts:
            raise SproutError("hooks not run: repository not trusted")
        self.trusted_repos[main_worktree_path] = True
        self.trusted_repos_added.append(main_worktree_path)

    # Editor and hooks

    def open_editor(self, path: str) -> None:
        self._record("open_editor")
        self.opened_paths.append(path)

    def run_hooks(
        self,
        repo_root: str,
        worktree_path: str,
        main_worktree_path: str,
        commands: List[str],
        hook_type: str,
    ) -> None:
        self._record("run_hooks")
        self.hook_invocations.append(
            HookInvocation(repo_root, worktree_path, main_worktree_path, tuple(commands), hook_type)
        )

    # Output and interaction

    def print(self, msg: str) -> None:
        self.calls["print"] += 1
        self.printed_msgs.append(msg)

    def print_err(self, msg: str) -> None:
        self.calls["print_err"] += 1
        self.printed_errs.append(msg)

    def is_interactive(self) -> bool:
        self._record("is_interactive")
        return self.interactive

    def select_branch(self, branches: List[Branch]) -> int:
        self._record("select_branch")
        self.selected_from.append(list(branches))
        if self.selection_error is not None:
            raise self.selection_error
        return self.selected_branch_index

    def select_worktree(self, worktrees: List[Worktree]) -> int:
        self._record("select_worktree")
        self.selected_from.append(list(worktrees))
        if self.selection_error is not None:
            raise self.selection_error
        return self.selected_worktree_index

    # Paths

    def get_sprout_root(self) -> str:
        self._record("get_sprout_root")
        return self.sprout_root

    def get_all_sprout_roots(self) -> List[str]:
        self._record("get_all_sprout_roots")
        if self.all_sprout_roots is not None:
            return list(self.all_sprout_roots)
        return [self.sprout_root]

    def get_worktree_root(self, repo_root: str) -> str:
        self._record("get_worktree_root")
        return derive_worktree_root(self.sprout_root, repo_root)

    def get_worktree_path(self, repo_root: str, branch: str) -> str:
        self._record("get_worktree_path")
        if branch in self.worktree_paths:
            return self.worktree_paths[branch]
        path, error = derive_worktree_path(self.sprout_root, repo_root, branch)
        if error:
            raise InvalidBranchNameError(branch, error)
        return path

