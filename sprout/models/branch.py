"""Branch model"""
from dataclasses import dataclass

from sprout.constants import REMOTE_PREFIX


@dataclass(frozen=True)
class Branch:
    """A branch offered for worktree creation.

    ``name`` is the canonical short name with any ``origin/`` prefix removed;
    ``display_name`` is what the selector shows, also without the prefix.
    """
    name: str
    display_name: str
    is_local: bool

    @property
    def ref_name(self) -> str:
        """Ref usable on the command line: ``origin/<name>`` for remote-only branches."""
        if self.is_local:
            return self.name
        return f"{REMOTE_PREFIX}{self.name}"
