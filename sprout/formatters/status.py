"""Worktree status formatting utilities."""

from sprout.constants import ANSI, SYMBOL_AHEAD, SYMBOL_BEHIND, SYMBOL_DIRTY, SYMBOL_UNMERGED
from sprout.models.worktree import WorktreeStatus


def _status_parts(status: WorktreeStatus) -> list[tuple[str, str]]:
    parts = []
    if status.dirty:
        parts.append(("red", SYMBOL_DIRTY))
    if status.ahead > 0:
        parts.append(("yellow", SYMBOL_AHEAD))
    if status.behind > 0:
        parts.append(("cyan", SYMBOL_BEHIND))
    if status.unmerged:
        parts.append(("magenta", SYMBOL_UNMERGED))
    return parts


def build_status_emojis(status: WorktreeStatus) -> str:
    """
    Colored status symbols for a worktree.

    Args:
        status: Worktree status

    Returns:
        Space-separated symbols (dirty, ahead, behind, unmerged), or "" when clean
    """
    return " ".join(f"{ANSI[color]}{symbol}{ANSI['reset']}" for color, symbol in _status_parts(status))


def build_plain_status_icons(status: WorktreeStatus) -> str:
    """Uncolored variant of build_status_emojis for the interactive selector."""
    return " ".join(symbol for _, symbol in _status_parts(status))
