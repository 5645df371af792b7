"""``sprout add``: create a worktree for a branch."""

from typing import Optional

from sprout.cli.commands.runner import run_plan
from sprout.core.add import AddContext, plan_add
from sprout.core.branches import get_worktree_available_branches
from sprout.core.git_commands import strip_remote_prefix
from sprout.effects.base import Effects
from sprout.exceptions import SproutError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


def select_branch(fx: Effects, repo_root: str) -> str:
    """Let the user pick a branch that is not checked out anywhere yet.

    Raises:
        SelectionCancelledError: If the user cancels
        SproutError: If no branch is available
    """
    branches = fx.list_branches(repo_root)
    worktrees = fx.list_worktrees(repo_root)
    available = get_worktree_available_branches(branches, worktrees)
    if not available:
        raise SproutError("no branches available: every branch is already checked out in a worktree")
    index = fx.select_branch(available)
    return available[index].name


def build_add_context(
    fx: Effects,
    branch: Optional[str],
    no_hooks: bool = False,
    no_open: bool = False,
) -> AddContext:
    """Gather everything plan_add needs.

    The worktree path is derived from the main worktree so every linked
    worktree of a repository maps to the same sprout directory.
    """
    repo_root = fx.get_repo_root()
    main_path = fx.get_main_worktree_path()

    if not branch:
        branch = select_branch(fx, repo_root)
    branch = strip_remote_prefix(branch)

    worktree_path = fx.get_worktree_path(main_path, branch)
    config = fx.load_config(repo_root, main_path)

    is_trusted = False
    if config.has_create_hooks() and not no_hooks:
        is_trusted = fx.is_trusted(main_path)

    ctx = AddContext(
        branch=branch,
        repo_root=repo_root,
        main_worktree_path=main_path,
        worktree_path=worktree_path,
        worktree_exists=fx.file_exists(worktree_path),
        local_branch_exists=fx.local_branch_exists(repo_root, branch),
        remote_branch_exists=fx.remote_branch_exists(repo_root, branch),
        has_origin_main=fx.remote_branch_exists(repo_root, "main"),
        config=config,
        is_trusted=is_trusted,
        no_hooks=no_hooks,
        no_open=no_open,
    )
    logger.debug(f"add context: {ctx}")
    return ctx


def cmd_add(
    fx: Effects,
    branch: Optional[str] = None,
    no_hooks: bool = False,
    no_open: bool = False,
    dry_run: bool = False,
) -> int:
    ctx = build_add_context(fx, branch, no_hooks=no_hooks, no_open=no_open)
    return run_plan(fx, plan_add(ctx), dry_run)
