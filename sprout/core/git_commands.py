"""Git argument builders for worktree commands."""

from typing import List

from sprout.constants import REMOTE_PREFIX


def strip_remote_prefix(branch: str) -> str:
    """Drop a leading ``origin/`` so remote names map onto local branch names."""
    if branch.startswith(REMOTE_PREFIX):
        return branch[len(REMOTE_PREFIX):]
    return branch


def worktree_add_args(
    path: str,
    branch: str,
    local_exists: bool,
    remote_exists: bool,
    has_origin_main: bool,
) -> List[str]:
    """Build the ``git worktree add`` invocation for a branch.

    Args:
        path: Target worktree directory
        branch: Branch name, with or without an ``origin/`` prefix
        local_exists: Whether ``refs/heads/<branch>`` exists
        remote_exists: Whether ``refs/remotes/origin/<branch>`` exists
        has_origin_main: Whether ``origin/main`` exists to base new branches on

    Returns:
        Arguments to pass to git, starting with ``worktree add <path>``
    """
    branch = strip_remote_prefix(branch)
    args = ["worktree", "add", path]

    if local_exists:
        return args + [branch]
    if remote_exists:
        # Tracks the remote branch
        return args + ["-b", branch, f"{REMOTE_PREFIX}{branch}"]
    # --no-track has to come after -b
    base = f"{REMOTE_PREFIX}main" if has_origin_main else "HEAD"
    return args + ["-b", branch, "--no-track", base]


def worktree_remove_args(path: str, force: bool) -> List[str]:
    """Build the ``git worktree remove`` invocation."""
    args = ["worktree", "remove"]
    if force:
        args.append("--force")
    args.append(path)
    return args
