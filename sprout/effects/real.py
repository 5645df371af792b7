"""Effects implementation backed by git, the filesystem and the terminal."""

import errno
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from sprout import paths
from sprout.config import SproutConfig, load_config
from sprout.core.paths import derive_worktree_path, derive_worktree_root
from sprout.exceptions import InvalidBranchNameError, SproutError
from sprout.formatters.paths import shorten_path_with_home
from sprout.logging_config import get_logger
from sprout.models.branch import Branch
from sprout.models.worktree import Worktree, WorktreeStatus
from sprout.services.editor_service import EditorService
from sprout.services.git import BranchQueries, GitOperations, WorktreeService, WorktreeStatusService
from sprout.services.hooks_service import HooksService
from sprout.services.trust_service import TrustService
from sprout.ui import selector

logger = get_logger(__name__)


def untrusted_guidance(main_worktree_path: str, hook_type: str, commands: List[str]) -> str:
    lines = [
        f"Repository not trusted: {main_worktree_path}",
        "",
        f"This repository defines {hook_type} hooks:",
    ]
    lines += [f"  - {command}" for command in commands]
    lines += [
        "",
        "To trust this repository, run:",
        "  sprout trust",
        "",
        "Or skip hooks with --no-hooks",
    ]
    return "\n".join(lines)


class RealEffects:
    """Effects bound to the current process."""

    def __init__(
        self,
        cwd: Optional[str] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        trust_service: Optional[TrustService] = None,
    ):
        self.cwd = cwd or os.getcwd()
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.trust_service = trust_service or TrustService()

    # Git queries

    def get_repo_root(self) -> str:
        return GitOperations(self.cwd).get_toplevel()

    def get_main_worktree_path(self) -> str:
        return WorktreeService(self.cwd).get_main_worktree_path()

    def list_worktrees(self, repo_root: str) -> List[Worktree]:
        return WorktreeService(repo_root).list_worktrees()

    def list_branches(self, repo_root: str) -> List[Branch]:
        return BranchQueries(repo_root).list_branches()

    def local_branch_exists(self, repo_root: str, branch: str) -> bool:
        return BranchQueries(repo_root).local_branch_exists(branch)

    def remote_branch_exists(self, repo_root: str, branch: str) -> bool:
        return BranchQueries(repo_root).remote_branch_exists(branch)

    def run_git_command(self, dir: str, *args: str) -> str:
        return GitOperations(dir).run(*args)

    def get_worktree_status(self, path: str) -> WorktreeStatus:
        return WorktreeStatusService(path).get_status()

    # Filesystem

    def file_exists(self, path: str) -> bool:
        try:
            os.stat(path)
            return True
        except OSError as e:
            if e.errno != errno.ENOENT:
                logger.debug(f"Treating {path} as missing: {e}")
            return False

    def mkdir_all(self, path: str, mode: int) -> None:
        os.makedirs(path, mode=mode, exist_ok=True)

    def list_dir(self, path: str) -> List[str]:
        try:
            with os.scandir(path) as entries:
                return sorted(entry.name for entry in entries if entry.is_dir())
        except OSError as e:
            if e.errno != errno.ENOENT:
                logger.debug(f"Cannot list {path}: {e}")
            return []

    def user_home_dir(self) -> str:
        return paths.user_home_dir()

    # Configuration and trust

    def load_config(self, current_path: str, main_path: str) -> SproutConfig:
        return load_config(current_path, main_path)

    def is_trusted(self, repo_root: str) -> bool:
        return self.trust_service.is_trusted(repo_root)

    def trust_repo(self, repo_root: str) -> None:
        self.trust_service.trust(repo_root)

    def untrust_repo(self, repo_root: str) -> None:
        self.trust_service.untrust(repo_root)

    def prompt_trust_repo(self, main_worktree_path: str, hook_type: str, commands: List[str]) -> None:
        """Ask once whether to trust the repository, trusting it on "y"/"yes".

        Raises:
            SproutError: When not attached to a terminal or the user declines
        """
        guidance = untrusted_guidance(main_worktree_path, hook_type, commands)
        if not self.is_interactive():
            raise SproutError(guidance)

        self.print(f"This repository defines {hook_type} hooks:")
        for command in commands:
            self.print(f"  - {command}")
        response = self.console.input("Allow hooks? [y/N]: ")
        if response.strip().lower() not in ("y", "yes"):
            raise SproutError("hooks not run: repository not trusted")
        self.trust_repo(main_worktree_path)
        self.print(f"✅ Repository trusted: {main_worktree_path}")

    # Editor and hooks

    def open_editor(self, path: str) -> None:
        EditorService().open(path)

    def run_hooks(
        self,
        repo_root: str,
        worktree_path: str,
        main_worktree_path: str,
        commands: List[str],
        hook_type: str,
    ) -> None:
        logger.debug(f"Running {hook_type} hooks for {main_worktree_path}")
        HooksService(self.print).run(repo_root, worktree_path, commands, hook_type)

    # Output and interaction

    def print(self, msg: str) -> None:
        try:
            self.console.print(Text.from_ansi(msg), soft_wrap=True)
        except Exception as e:  # Output is best effort
            logger.debug(f"Could not print message: {e}")

    def print_err(self, msg: str) -> None:
        try:
            self.err_console.print(Text.from_ansi(msg, style="red"), soft_wrap=True)
        except Exception as e:
            logger.debug(f"Could not print error: {e}")

    def is_interactive(self) -> bool:
        return sys.stdin.isatty()

    def select_branch(self, branches: List[Branch]) -> int:
        return selector.select([b.display_name for b in branches], "Select a branch")

    def select_worktree(self, worktrees: List[Worktree]) -> int:
        home = self.user_home_dir()
        items = [
            f"{'(detached)' if wt.is_detached else wt.branch}  {shorten_path_with_home(wt.path, home)}"
            for wt in worktrees
        ]
        return selector.select(items, "Select a worktree")

    # Paths

    def get_sprout_root(self) -> str:
        return paths.get_sprout_root()

    def get_all_sprout_roots(self) -> List[str]:
        return paths.get_all_sprout_roots()

    def get_worktree_root(self, repo_root: str) -> str:
        return derive_worktree_root(self.get_sprout_root(), repo_root)

    def get_worktree_path(self, repo_root: str, branch: str) -> str:
        path, error = derive_worktree_path(self.get_sprout_root(), repo_root, branch)
        if error:
            raise InvalidBranchNameError(branch, error)
        return path
