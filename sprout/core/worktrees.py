"""Pure queries over worktree lists."""

import os
from typing import Iterable, List, Optional

from sprout.models.worktree import Worktree


def _clean_abs(path: str) -> str:
    # Lexical only: symlinks are not resolved
    return os.path.abspath(os.path.normpath(path))


def is_under_sprout_root(path: str, root: str) -> bool:
    """Whether ``path`` lies strictly below ``root``.

    The comparison is lexical after normalisation; symlinks are not resolved.
    Equal paths and empty inputs are never "under".
    """
    if not path or not root:
        return False
    path = _clean_abs(path)
    root = _clean_abs(root)
    if path == root:
        return False
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        # Different drives on Windows
        return False
    return rel != os.curdir and rel != os.pardir and not rel.startswith(os.pardir + os.sep)


def filter_sprout_worktrees(worktrees: Iterable[Worktree], sprout_root: str) -> List[Worktree]:
    """Worktrees that live under ``sprout_root``."""
    return [wt for wt in worktrees if is_under_sprout_root(wt.path, sprout_root)]


def filter_sprout_worktrees_any_root(worktrees: Iterable[Worktree], roots: Iterable[str]) -> List[Worktree]:
    """Worktrees that live under any of ``roots`` (current and legacy)."""
    roots = list(roots)
    return [wt for wt in worktrees if any(is_under_sprout_root(wt.path, root) for root in roots)]


def find_worktree_by_branch(worktrees: Iterable[Worktree], sprout_root: str, branch: str) -> Optional[str]:
    """Path of the first sprout-managed worktree with ``branch`` checked out."""
    if not branch:
        return None
    for wt in filter_sprout_worktrees(worktrees, sprout_root):
        if wt.branch == branch:
            return wt.path
    return None
