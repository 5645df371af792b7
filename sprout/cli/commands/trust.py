"""``sprout trust``, ``sprout untrust`` and ``sprout hooks``."""

import os
from typing import Optional

from sprout.cli.commands.runner import run_plan
from sprout.core.hooks import HooksStatusContext, format_hooks_status
from sprout.core.trust import TrustContext, plan_trust, plan_untrust
from sprout.effects.base import Effects
from sprout.exceptions import GitOperationError, NotAGitRepositoryError


def resolve_trust_root(fx: Effects, path: Optional[str]) -> str:
    """Main worktree of the repository at ``path`` (default: the current one).

    Trust is keyed on the main worktree so it covers every linked worktree.
    """
    if not path:
        return fx.get_main_worktree_path()
    path = os.path.abspath(path)
    try:
        worktrees = fx.list_worktrees(path)
    except GitOperationError as e:
        raise NotAGitRepositoryError(path) from e
    if not worktrees:
        raise NotAGitRepositoryError(path)
    return worktrees[0].path


def cmd_trust(fx: Effects, path: Optional[str] = None, dry_run: bool = False) -> int:
    repo = resolve_trust_root(fx, path)
    ctx = TrustContext(repo_root=repo, already_trusted=fx.is_trusted(repo))
    return run_plan(fx, plan_trust(ctx), dry_run)


def cmd_untrust(fx: Effects, path: Optional[str] = None, dry_run: bool = False) -> int:
    repo = resolve_trust_root(fx, path)
    ctx = TrustContext(repo_root=repo, already_trusted=fx.is_trusted(repo))
    return run_plan(fx, plan_untrust(ctx), dry_run)


def cmd_hooks(fx: Effects) -> int:
    repo_root = fx.get_repo_root()
    main_path = fx.get_main_worktree_path()
    ctx = HooksStatusContext(
        repo_root=main_path,
        config=fx.load_config(repo_root, main_path),
        is_trusted=fx.is_trusted(main_path),
    )
    fx.print(format_hooks_status(ctx))
    return 0
