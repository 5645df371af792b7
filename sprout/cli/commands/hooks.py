"""``sprout init`` and ``sprout sync``: run hooks in the current worktree."""

from sprout.cli.commands.runner import run_plan
from sprout.core.actions import HookType
from sprout.core.hooks import HooksRunContext, plan_run_hooks
from sprout.effects.base import Effects


def cmd_run_hooks(fx: Effects, hook_type: HookType, dry_run: bool = False) -> int:
    repo_root = fx.get_repo_root()
    main_path = fx.get_main_worktree_path()
    config = fx.load_config(repo_root, main_path)
    ctx = HooksRunContext(
        hook_type=hook_type,
        worktree_path=repo_root,
        repo_root=repo_root,
        main_worktree_path=main_path,
        config=config,
        is_trusted=fx.is_trusted(main_path) if config.hooks.commands_for(hook_type.value) else False,
        interactive=fx.is_interactive(),
    )
    return run_plan(fx, plan_run_hooks(ctx), dry_run)
