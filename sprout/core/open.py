"""Planner for ``sprout open``."""

from dataclasses import dataclass, field

from sprout.config import SproutConfig
from sprout.constants import MSG_UNTRUSTED_HOOKS
from sprout.core.actions import HookType, OpenEditor, Plan, RunHooks, error_plan


@dataclass
class OpenContext:
    target_path: str
    repo_root: str
    main_worktree_path: str
    config: SproutConfig = field(default_factory=SproutConfig)
    is_trusted: bool = False
    no_hooks: bool = False


def plan_open(ctx: OpenContext) -> Plan:
    """Plan opening an existing worktree, running on_open hooks when trusted."""
    if not ctx.target_path:
        return error_plan("worktree path cannot be empty")
    if not ctx.repo_root:
        return error_plan("repository root cannot be empty")
    if ctx.config is None:
        return error_plan("config is required")

    should_run_hooks = ctx.config.has_open_hooks() and not ctx.no_hooks
    if should_run_hooks:
        if not ctx.main_worktree_path:
            return error_plan("main worktree path cannot be empty")
        if not ctx.is_trusted:
            return error_plan(MSG_UNTRUSTED_HOOKS)

    actions = [OpenEditor(ctx.target_path)]
    if should_run_hooks:
        actions.append(
            RunHooks(
                hook_type=HookType.ON_OPEN,
                commands=ctx.config.hooks.on_open,
                worktree_path=ctx.target_path,
                repo_root=ctx.repo_root,
                main_worktree_path=ctx.main_worktree_path,
            )
        )
    return Plan(actions)
