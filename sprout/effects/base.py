"""The Effects protocol: every side effect sprout performs."""

from typing import List, Protocol

from sprout.config import SproutConfig
from sprout.models.branch import Branch
from sprout.models.worktree import Worktree, WorktreeStatus


class Effects(Protocol):
    """Capability handed to command handlers and the executor.

    RealEffects talks to git, the filesystem and the terminal; TestEffects
    records calls and returns programmed values.
    """

    # Git queries
    def get_repo_root(self) -> str: ...
    def get_main_worktree_path(self) -> str: ...
    def list_worktrees(self, repo_root: str) -> List[Worktree]: ...
    def list_branches(self, repo_root: str) -> List[Branch]: ...
    def local_branch_exists(self, repo_root: str, branch: str) -> bool: ...
    def remote_branch_exists(self, repo_root: str, branch: str) -> bool: ...
    def run_git_command(self, dir: str, *args: str) -> str: ...
    def get_worktree_status(self, path: str) -> WorktreeStatus: ...

    # Filesystem
    def file_exists(self, path: str) -> bool: ...
    def mkdir_all(self, path: str, mode: int) -> None: ...
    def list_dir(self, path: str) -> List[str]: ...
    def user_home_dir(self) -> str: ...

    # Configuration and trust
    def load_config(self, current_path: str, main_path: str) -> SproutConfig: ...
    def is_trusted(self, repo_root: str) -> bool: ...
    def trust_repo(self, repo_root: str) -> None: ...
    def untrust_repo(self, repo_root: str) -> None: ...
    def prompt_trust_repo(self, main_worktree_path: str, hook_type: str, commands: List[str]) -> None: ...

    # Editor and hooks
    def open_editor(self, path: str) -> None: ...
    def run_hooks(
        self,
        repo_root: str,
        worktree_path: str,
        main_worktree_path: str,
        commands: List[str],
        hook_type: str,
    ) -> None: ...

    # Output and interaction
    def print(self, msg: str) -> None: ...
    def print_err(self, msg: str) -> None: ...
    def is_interactive(self) -> bool: ...
    def select_branch(self, branches: List[Branch]) -> int: ...
    def select_worktree(self, worktrees: List[Worktree]) -> int: ...

    # Paths
    def get_sprout_root(self) -> str: ...
    def get_all_sprout_roots(self) -> List[str]: ...
    def get_worktree_root(self, repo_root: str) -> str: ...
    def get_worktree_path(self, repo_root: str, branch: str) -> str: ...
