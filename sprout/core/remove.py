"""Planner for ``sprout remove``."""

from dataclasses import dataclass

from sprout.core.actions import Plan, PrintMessage, RunGitCommand, error_plan
from sprout.core.git_commands import worktree_remove_args
from sprout.core.worktrees import is_under_sprout_root


@dataclass
class RemoveContext:
    repo_root: str
    sprout_root: str
    target_path: str
    force: bool = False


def plan_remove(ctx: RemoveContext) -> Plan:
    """Plan removal of a sprout-managed worktree followed by a prune.

    Paths outside the sprout root are refused so sprout never removes a
    worktree it did not create.
    """
    if not ctx.repo_root:
        return error_plan("repository root cannot be empty")
    if not ctx.sprout_root:
        return error_plan("sprout root cannot be empty")
    if not ctx.target_path:
        return error_plan("worktree path cannot be empty")

    if not is_under_sprout_root(ctx.target_path, ctx.sprout_root):
        return error_plan(f"Refusing to remove non-sprout worktree: {ctx.target_path}")

    return Plan([
        RunGitCommand(ctx.repo_root, worktree_remove_args(ctx.target_path, ctx.force)),
        PrintMessage(f"Removed worktree at {ctx.target_path}"),
        RunGitCommand(ctx.repo_root, ["worktree", "prune"]),
    ])
