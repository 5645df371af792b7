"""``sprout open``: open a sprout worktree in the editor."""

from typing import Optional

from sprout.cli.commands.runner import run_plan
from sprout.cli.commands.worktree_target import resolve_target
from sprout.core.open import OpenContext, plan_open
from sprout.effects.base import Effects


def build_open_context(fx: Effects, target: Optional[str], no_hooks: bool = False) -> OpenContext:
    repo_root = fx.get_repo_root()
    main_path = fx.get_main_worktree_path()
    target_path = resolve_target(fx, repo_root, main_path, target)
    config = fx.load_config(repo_root, main_path)

    is_trusted = False
    if config.has_open_hooks() and not no_hooks:
        is_trusted = fx.is_trusted(main_path)

    return OpenContext(
        target_path=target_path,
        repo_root=repo_root,
        main_worktree_path=main_path,
        config=config,
        is_trusted=is_trusted,
        no_hooks=no_hooks,
    )


def cmd_open(fx: Effects, target: Optional[str] = None, no_hooks: bool = False, dry_run: bool = False) -> int:
    ctx = build_open_context(fx, target, no_hooks=no_hooks)
    return run_plan(fx, plan_open(ctx), dry_run)
