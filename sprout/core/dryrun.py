"""Dry-run rendering of plans."""

from sprout.constants import PLAN_MESSAGE_MAX_LEN
from sprout.core.actions import (
    Action,
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


def truncate_message(msg: str) -> str:
    """First line of ``msg``, shortened to fit on one plan line.

    The limit is in UTF-8 bytes; a cut never splits a multi-byte character.
    """
    msg = msg.split("\n", 1)[0]
    encoded = msg.encode("utf-8")
    if len(encoded) > PLAN_MESSAGE_MAX_LEN:
        msg = encoded[:PLAN_MESSAGE_MAX_LEN - 3].decode("utf-8", "ignore") + "..."
    return msg


def describe_action(action: Action) -> str:
    """One-line description of an action."""
    if isinstance(action, NoOp):
        return "No operation"
    if isinstance(action, PrintMessage):
        return f'Print: "{truncate_message(action.msg)}"'
    if isinstance(action, PrintError):
        return f'Print error: "{truncate_message(action.msg)}"'
    if isinstance(action, CreateDirectory):
        return f"Create directory: {action.path}"
    if isinstance(action, RunGitCommand):
        if not action.args:
            return f"Run git in {action.dir}" if action.dir else "Run git"
        return f"Run git command in {action.dir}: git {' '.join(action.args)}"
    if isinstance(action, OpenEditor):
        return f"Open editor: {action.path}"
    if isinstance(action, RunHooks):
        return f"Run {len(action.commands)} {action.hook_type.value} hook(s) in {action.worktree_path}"
    if isinstance(action, TrustRepo):
        return f"Trust repository: {action.repo_root}"
    if isinstance(action, UntrustRepo):
        return f"Untrust repository: {action.repo_root}"
    if isinstance(action, PromptTrust):
        return (
            f"Prompt to trust repository: {action.main_worktree_path} "
            f"({len(action.commands)} {action.hook_type.value} hooks)"
        )
    if isinstance(action, SelectInteractive):
        return "Interactive selection (should not appear in execution plans)"
    if isinstance(action, Exit):
        return f"Exit with code {action.code}"
    return f"Unknown action: {type(action).__name__}"


def format_plan(plan: Plan) -> str:
    """Numbered, deterministic listing of a plan for --dry-run."""
    if not plan.actions:
        return "No actions to perform."
    lines = ["Planned actions:"]
    for i, action in enumerate(plan.actions, 1):
        lines.append(f"  {i}. {describe_action(action)}")
    return "\n".join(lines)
