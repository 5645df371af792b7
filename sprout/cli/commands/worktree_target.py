"""Resolution of the ``branch-or-path`` argument shared by open and remove."""

import os
from typing import Optional

from sprout.core.git_commands import strip_remote_prefix
from sprout.core.worktrees import filter_sprout_worktrees, find_worktree_by_branch
from sprout.effects.base import Effects
from sprout.exceptions import NoSproutWorktreesError, SproutError


def resolve_target(fx: Effects, repo_root: str, main_path: str, target: Optional[str]) -> str:
    """Absolute path of the worktree the user means.

    An existing path is taken as-is; anything else is a branch name looked up
    among this repository's sprout worktrees. Without a target the user picks
    one interactively.

    Raises:
        NoSproutWorktreesError: If there is nothing to pick from
        SelectionCancelledError: If the user cancels the picker
        SproutError: If no sprout worktree has the branch checked out
    """
    if target and fx.file_exists(target):
        return os.path.abspath(target)

    worktrees = fx.list_worktrees(repo_root)
    worktree_root = fx.get_worktree_root(main_path)

    if not target:
        candidates = filter_sprout_worktrees(worktrees, worktree_root)
        if not candidates:
            raise NoSproutWorktreesError()
        index = fx.select_worktree(candidates)
        return candidates[index].path

    branch = strip_remote_prefix(target)
    path = find_worktree_by_branch(worktrees, worktree_root, branch)
    if path is None:
        raise SproutError(f"no sprout-managed worktree found for branch '{branch}'")
    return path
