"""Worktree listing and status service for sprout."""

from typing import List, Optional

from sprout.constants import DEFAULT_BASE_BRANCHES, REMOTE_PREFIX
from sprout.exceptions import GitOperationError
from sprout.logging_config import get_logger
from sprout.models.worktree import Worktree, WorktreeStatus
from sprout.services.git.operations import GitOperations

logger = get_logger(__name__)


def parse_worktree_porcelain(output: str) -> List[Worktree]:
    """Parse ``git worktree list --porcelain``.

    Format::

        worktree /path/to/worktree
        HEAD <sha>
        branch refs/heads/<name>     (or "detached")
        <blank line between entries>

    Returns:
        Worktrees in git's order; the first one is the main worktree
    """
    worktrees = []
    current: dict = {}

    def flush():
        if current.get("path"):
            worktrees.append(Worktree(
                path=current["path"],
                head=current.get("head", ""),
                branch=current.get("branch", ""),
            ))

    for line in output.splitlines():
        line = line.strip()
        if not line:
            flush()
            current = {}
            continue
        if line.startswith("worktree "):
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            current["head"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            ref = line.split(" ", 1)[1]
            current["branch"] = ref[len("refs/heads/"):] if ref.startswith("refs/heads/") else ""
        elif line == "detached":
            current["branch"] = ""

    # Last entry when there is no trailing blank line
    flush()
    return worktrees


class WorktreeService:
    """Service for querying git worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to any worktree of the repository
        """
        self.repo_path = repo_path
        self.git = GitOperations(repo_path)

    def list_worktrees(self) -> List[Worktree]:
        """Get all worktrees of the repository.

        Raises:
            GitOperationError: If git cannot list worktrees
        """
        output = self.git.run("worktree", "list", "--porcelain")
        worktrees = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def get_main_worktree_path(self) -> str:
        """Path of the main worktree (first porcelain entry).

        Raises:
            GitOperationError: If the list is empty or cannot be read
        """
        worktrees = self.list_worktrees()
        if not worktrees:
            raise GitOperationError("worktree list", "no worktrees found")
        return worktrees[0].path


class WorktreeStatusService:
    """Read-only status checks run inside one worktree.

    Each check degrades to a falsy value when git fails, so a broken or
    half-removed worktree still shows up in ``sprout list``.
    """

    def __init__(self, worktree_path: str):
        self.worktree_path = worktree_path
        self.git = GitOperations(worktree_path)

    def get_status(self) -> WorktreeStatus:
        ahead, behind = self._ahead_behind()
        return WorktreeStatus(
            dirty=self._is_dirty(),
            ahead=ahead,
            behind=behind,
            unmerged=self._has_unmerged_commits(),
        )

    def _is_dirty(self) -> bool:
        try:
            return bool(self.git.run("status", "--porcelain"))
        except GitOperationError as e:
            logger.debug(f"Could not read status of {self.worktree_path}: {e}")
            return False

    def _ahead_behind(self) -> tuple[int, int]:
        if not self.git.ref_exists("@{upstream}"):
            return 0, 0
        try:
            output = self.git.run("rev-list", "--left-right", "--count", "HEAD...@{upstream}")
            ahead, behind = output.split()
            return int(ahead), int(behind)
        except (GitOperationError, ValueError) as e:
            logger.debug(f"Could not compare {self.worktree_path} with upstream: {e}")
            return 0, 0

    def _default_branch(self) -> Optional[str]:
        """Default branch name of origin, e.g. ``main``."""
        try:
            ref = self.git.run("symbolic-ref", "--quiet", "--short", f"refs/remotes/{REMOTE_PREFIX}HEAD")
            if ref.startswith(REMOTE_PREFIX):
                return ref[len(REMOTE_PREFIX):]
        except GitOperationError:
            pass
        for name in DEFAULT_BASE_BRANCHES:
            if self.git.ref_exists(f"refs/remotes/{REMOTE_PREFIX}{name}"):
                return name
        return None

    def _has_unmerged_commits(self) -> bool:
        base = self._default_branch()
        if not base:
            return False
        try:
            current = self.git.run("rev-parse", "--abbrev-ref", "HEAD")
        except GitOperationError:
            return False
        if current == base:
            return False
        try:
            count = self.git.run("rev-list", "--count", f"{REMOTE_PREFIX}{base}..HEAD")
            return int(count) > 0
        except (GitOperationError, ValueError) as e:
            logger.debug(f"Could not count unmerged commits in {self.worktree_path}: {e}")
            return False
