"""Planner for ``sprout add``."""

import os
from dataclasses import dataclass, field

from sprout.config import SproutConfig
from sprout.constants import MSG_UNTRUSTED_HOOKS, WORKTREE_DIR_MODE
from sprout.core.actions import (
    CreateDirectory,
    HookType,
    OpenEditor,
    Plan,
    PrintMessage,
    RunGitCommand,
    RunHooks,
    error_plan,
)
from sprout.core.git_commands import worktree_add_args


@dataclass
class AddContext:
    """Everything plan_add needs to know, gathered by the add command."""

    branch: str
    repo_root: str
    main_worktree_path: str
    worktree_path: str
    worktree_exists: bool = False
    local_branch_exists: bool = False
    remote_branch_exists: bool = False
    has_origin_main: bool = False
    config: SproutConfig = field(default_factory=SproutConfig)
    is_trusted: bool = False
    no_hooks: bool = False
    no_open: bool = False


def plan_add(ctx: AddContext) -> Plan:
    """Plan creation (or reopening) of a worktree.

    Hooks only run when the repository is trusted; the editor opens before
    on_create hooks so the user can browse while they run.
    """
    if not ctx.branch:
        return error_plan("branch name cannot be empty")
    if not ctx.repo_root:
        return error_plan("repository root cannot be empty")
    if not ctx.worktree_path:
        return error_plan("worktree path cannot be empty")
    if ctx.config is None:
        return error_plan("config is required")

    path = ctx.worktree_path

    if ctx.worktree_exists:
        actions = [PrintMessage(f"Worktree already exists at {path}")]
        if not ctx.no_open:
            actions.append(OpenEditor(path))
        return Plan(actions)

    should_run_hooks = ctx.config.has_create_hooks() and not ctx.no_hooks
    if should_run_hooks:
        if not ctx.main_worktree_path:
            return error_plan("main worktree path cannot be empty")
        if not ctx.is_trusted:
            return error_plan(MSG_UNTRUSTED_HOOKS)

    actions = [
        PrintMessage(f"Creating worktree for {ctx.branch} at {path}..."),
        CreateDirectory(os.path.dirname(path), WORKTREE_DIR_MODE),
        RunGitCommand(
            ctx.repo_root,
            worktree_add_args(
                path,
                ctx.branch,
                ctx.local_branch_exists,
                ctx.remote_branch_exists,
                ctx.has_origin_main,
            ),
        ),
        PrintMessage("Worktree created!"),
    ]

    if not ctx.no_open:
        actions.append(OpenEditor(path))
    if should_run_hooks:
        actions.append(
            RunHooks(
                hook_type=HookType.ON_CREATE,
                commands=ctx.config.hooks.on_create,
                worktree_path=path,
                repo_root=ctx.repo_root,
                main_worktree_path=ctx.main_worktree_path,
            )
        )
    return Plan(actions)
