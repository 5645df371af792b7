"""Formatting utilities for sprout.

- status: worktree status symbols
- paths: home-relative path display
- worktree: list command output
"""

from .status import build_status_emojis, build_plain_status_icons
from .paths import shorten_path_with_home
from .worktree import RepoDisplay, WorktreeDisplayInfo, format_repos, format_worktree

__all__ = [
    # Status
    "build_status_emojis",
    "build_plain_status_icons",
    # Paths
    "shorten_path_with_home",
    # Worktree
    "RepoDisplay",
    "WorktreeDisplayInfo",
    "format_repos",
    "format_worktree",
]
