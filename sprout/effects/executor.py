"""Sequential, fail-fast plan executor."""

from sprout.core.actions import (
    CreateDirectory,
    Exit,
    NoOp,
    OpenEditor,
    Plan,
    PrintError,
    PrintMessage,
    PromptTrust,
    RunGitCommand,
    RunHooks,
    SelectInteractive,
    TrustRepo,
    UntrustRepo,
)
from sprout.effects.base import Effects
from sprout.exceptions import ActionError, ExitError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


def execute_plan(plan: Plan, fx: Effects) -> None:
    """Run every action of ``plan`` in order.

    Raises:
        ExitError: When the plan reaches an Exit action
        ActionError: When an action fails; later actions are not run
    """
    for action in plan.actions:
        logger.debug(f"Executing {action}")
        _execute_action(action, fx)


def _execute_action(action, fx: Effects) -> None:
    if isinstance(action, NoOp):
        return

    if isinstance(action, PrintMessage):
        fx.print(action.msg)
        return

    if isinstance(action, PrintError):
        fx.print_err(action.msg)
        return

    if isinstance(action, CreateDirectory):
        try:
            fx.mkdir_all(action.path, action.mode)
        except Exception as e:
            raise ActionError(f"create directory {action.path}: {e}") from e
        return

    if isinstance(action, RunGitCommand):
        try:
            fx.run_git_command(action.dir, *action.args)
        except Exception as e:
            raise ActionError(f"git command in {action.dir} failed: {e}") from e
        return

    if isinstance(action, OpenEditor):
        try:
            fx.open_editor(action.path)
        except Exception as e:
            raise ActionError(f"open editor for {action.path}: {e}") from e
        return

    if isinstance(action, RunHooks):
        try:
            fx.run_hooks(
                action.repo_root,
                action.worktree_path,
                action.main_worktree_path,
                list(action.commands),
                action.hook_type.value,
            )
        except Exception as e:
            raise ActionError(f"run {action.hook_type.value} hooks: {e}") from e
        return

    if isinstance(action, TrustRepo):
        try:
            fx.trust_repo(action.repo_root)
        except Exception as e:
            raise ActionError(f"trust repo {action.repo_root}: {e}") from e
        return

    if isinstance(action, UntrustRepo):
        try:
            fx.untrust_repo(action.repo_root)
        except Exception as e:
            raise ActionError(f"untrust repo {action.repo_root}: {e}") from e
        return

    if isinstance(action, PromptTrust):
        try:
            fx.prompt_trust_repo(action.main_worktree_path, action.hook_type.value, list(action.commands))
        except Exception as e:
            raise ActionError(f"trust prompt for {action.main_worktree_path}: {e}") from e
        return

    if isinstance(action, SelectInteractive):
        raise ActionError("interactive selection cannot be executed as part of a plan")

    if isinstance(action, Exit):
        raise ExitError(action.code)

    raise ActionError(f"unknown action type: {type(action).__name__}")


def is_exit(err: BaseException) -> tuple[int, bool]:
    """Return ``(code, True)`` when ``err`` is an ExitError, else ``(0, False)``."""
    if isinstance(err, ExitError):
        return err.code, True
    return 0, False
