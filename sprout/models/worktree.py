"""Worktree data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Worktree:
    """A single entry of ``git worktree list --porcelain``."""

    path: str
    head: str = ""
    branch: str = ""  # Empty when HEAD is detached

    @property
    def is_detached(self) -> bool:
        return not self.branch

    def __str__(self) -> str:
        """String representation of worktree."""
        name = "(detached)" if self.is_detached else self.branch
        return f"{name} @ {self.path}"


@dataclass(frozen=True)
class WorktreeStatus:
    """Working state of a worktree as shown by ``sprout list``."""

    dirty: bool = False
    ahead: int = 0
    behind: int = 0
    unmerged: bool = False

    @property
    def is_clean(self) -> bool:
        return not (self.dirty or self.ahead or self.behind or self.unmerged)
