"""``sprout remove``: delete a sprout worktree and prune git's metadata."""

from typing import Optional

from sprout.cli.commands.runner import run_plan
from sprout.cli.commands.worktree_target import resolve_target
from sprout.core.remove import RemoveContext, plan_remove
from sprout.effects.base import Effects


def cmd_remove(fx: Effects, target: Optional[str] = None, force: bool = False, dry_run: bool = False) -> int:
    repo_root = fx.get_repo_root()
    main_path = fx.get_main_worktree_path()
    ctx = RemoveContext(
        repo_root=repo_root,
        sprout_root=fx.get_worktree_root(main_path),
        target_path=resolve_target(fx, repo_root, main_path, target),
        force=force,
    )
    return run_plan(fx, plan_remove(ctx), dry_run)
