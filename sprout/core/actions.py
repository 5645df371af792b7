"""Plan and action types produced by the planners."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from sprout.constants import WORKTREE_DIR_MODE


class HookType(Enum):
    """Lifecycle hook kinds."""
    ON_CREATE = "on_create"
    ON_OPEN = "on_open"


@dataclass(frozen=True)
class NoOp:
    pass


@dataclass(frozen=True)
class PrintMessage:
    msg: str


@dataclass(frozen=True)
class PrintError:
    msg: str


@dataclass(frozen=True)
class CreateDirectory:
    path: str
    mode: int = WORKTREE_DIR_MODE


@dataclass(frozen=True)
class RunGitCommand:
    dir: str
    args: tuple = ()

    def __post_init__(self):
        # Lists are accepted for convenience but stored as a tuple
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class OpenEditor:
    path: str


@dataclass(frozen=True)
class RunHooks:
    hook_type: HookType
    commands: tuple
    worktree_path: str
    repo_root: str
    main_worktree_path: str

    def __post_init__(self):
        object.__setattr__(self, "commands", tuple(self.commands))


@dataclass(frozen=True)
class TrustRepo:
    repo_root: str


@dataclass(frozen=True)
class UntrustRepo:
    repo_root: str


@dataclass(frozen=True)
class PromptTrust:
    """Ask the user to trust ``main_worktree_path`` before running hooks."""
    main_worktree_path: str
    hook_type: HookType
    commands: tuple

    def __post_init__(self):
        object.__setattr__(self, "commands", tuple(self.commands))


@dataclass(frozen=True)
class SelectInteractive:
    """Placeholder for interactive selection; never valid in an execution plan."""
    pass


@dataclass(frozen=True)
class Exit:
    code: int


Action = Union[
    NoOp,
    PrintMessage,
    PrintError,
    CreateDirectory,
    RunGitCommand,
    OpenEditor,
    RunHooks,
    TrustRepo,
    UntrustRepo,
    PromptTrust,
    SelectInteractive,
    Exit,
]


@dataclass
class Plan:
    """An ordered list of actions for the executor."""
    actions: List[Action] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    def is_error(self) -> bool:
        """True for the canonical ``[PrintError, Exit(1)]`` plan."""
        return (
            len(self.actions) == 2
            and isinstance(self.actions[0], PrintError)
            and self.actions[1] == Exit(1)
        )


def error_plan(msg: str) -> Plan:
    """Plan that reports ``msg`` on stderr and exits with status 1."""
    return Plan([PrintError(msg), Exit(1)])
