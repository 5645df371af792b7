"""Branch queries used when picking a branch for a new worktree."""

from typing import Iterable, List

from sprout.models.branch import Branch
from sprout.models.worktree import Worktree


def get_worktree_available_branches(all_branches: Iterable[Branch], worktrees: Iterable[Worktree]) -> List[Branch]:
    """Branches not currently checked out in any worktree.

    Detached worktrees never block a branch, and branches without a
    canonical name are dropped.
    """
    checked_out = {wt.branch for wt in worktrees if not wt.is_detached}
    return [b for b in all_branches if b.name and b.name not in checked_out]
