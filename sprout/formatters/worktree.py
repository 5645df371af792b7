"""Formatting of ``sprout list`` output."""

from dataclasses import dataclass, field
from typing import List, Optional

from sprout.constants import (
    ANSI,
    MSG_NO_WORKTREES_LISTED,
    SYMBOL_SPROUT,
    TREE_BRANCH,
    TREE_LAST,
    TREE_PIPE,
    TREE_SPACE,
)
from sprout.formatters.paths import shorten_path_with_home
from sprout.formatters.status import build_status_emojis
from sprout.models.worktree import WorktreeStatus


@dataclass
class WorktreeDisplayInfo:
    branch: str
    path: str
    status: Optional[WorktreeStatus] = None
    is_main: bool = False


@dataclass
class RepoDisplay:
    name: str
    main_path: str
    worktrees: List[WorktreeDisplayInfo] = field(default_factory=list)


def format_worktree(wt: WorktreeDisplayInfo, home: str, tree_prefix: str = "", path_prefix: str = "") -> str:
    """
    Two-line rendering of one worktree: branch line, then path line.

    Args:
        wt: Worktree to render
        home: User home directory, collapsed to ``~`` in paths
        tree_prefix: Glyph before the branch when grouped by repository
        path_prefix: Continuation glyph before the path when grouped

    Returns:
        Rendered lines joined with a newline
    """
    icon = "" if wt.is_main else f"{SYMBOL_SPROUT} "
    branch = wt.branch or "(detached)"
    line = f"{tree_prefix}{icon}{ANSI['green']}{branch}{ANSI['reset']}"
    if wt.status is not None:
        emojis = build_status_emojis(wt.status)
        if emojis:
            line += f" {emojis}"

    indent = " " * (len(icon) + 1) if icon else ""
    path = shorten_path_with_home(wt.path, home)
    path_line = f"{path_prefix}{indent}{ANSI['gray']}{path}{ANSI['reset']}"
    return f"{line}\n{path_line}"


def format_repos(repos: List[RepoDisplay], home: str, group_by_repo: bool) -> str:
    """Render repositories and their worktrees for the list command."""
    if not repos:
        return MSG_NO_WORKTREES_LISTED

    blocks = []
    for repo in repos:
        lines = []
        if group_by_repo:
            lines.append(f"{ANSI['bold']}{repo.name}{ANSI['reset']}")
        last = len(repo.worktrees) - 1
        for i, wt in enumerate(repo.worktrees):
            if group_by_repo:
                tree = TREE_LAST if i == last else TREE_BRANCH
                cont = TREE_SPACE if i == last else TREE_PIPE
                lines.append(format_worktree(wt, home, tree, cont))
            else:
                lines.append(format_worktree(wt, home))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
