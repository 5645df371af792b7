"""Worktree path derivation.

Layout: ``<sprout-root>/<repo-basename>-<sha1(repo)[:8]>/<branch>/<repo-basename>``.
"""

import hashlib
import os
from typing import Optional


def repo_id(repo_path: str) -> str:
    """Short stable identifier for a repository path."""
    return hashlib.sha1(repo_path.encode("utf-8")).hexdigest()[:8]


def validate_branch_name(branch: str) -> Optional[str]:
    """Return a reason the branch cannot be used as a path segment, or None."""
    if not branch:
        return "branch name cannot be empty"
    if os.path.isabs(branch) or branch.startswith("/"):
        return "branch name cannot be an absolute path"
    for part in branch.replace("\\", "/").split("/"):
        if part in ("..", "."):
            return "branch name cannot contain '.' or '..' path components"
        if not part:
            return "branch name cannot contain empty path components"
    return None


def derive_worktree_root(sprout_root: str, repo_path: str) -> str:
    """Directory holding every sprout worktree of ``repo_path``."""
    repo_path = os.path.abspath(os.path.normpath(repo_path))
    name = os.path.basename(repo_path)
    return os.path.join(sprout_root, f"{name}-{repo_id(repo_path)}")


def derive_worktree_path(sprout_root: str, repo_path: str, branch: str) -> tuple[str, Optional[str]]:
    """Worktree directory for ``branch``.

    Returns:
        Tuple of (path, error). ``path`` is empty when ``error`` is set.
    """
    if not repo_path:
        return "", "repository root cannot be empty"
    error = validate_branch_name(branch)
    if error:
        return "", error
    repo_path = os.path.abspath(os.path.normpath(repo_path))
    root = derive_worktree_root(sprout_root, repo_path)
    return os.path.join(root, branch, os.path.basename(repo_path)), None
