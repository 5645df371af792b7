"""Git-related services for sprout."""

from .operations import GitOperations
from .worktrees import WorktreeService, WorktreeStatusService, parse_worktree_porcelain
from .branch_queries import BranchQueries, parse_branch_list

__all__ = [
    "GitOperations",
    "WorktreeService",
    "WorktreeStatusService",
    "BranchQueries",
    "parse_worktree_porcelain",
    "parse_branch_list",
]
