"""Main entry point for sprout."""

import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from sprout.cli.args import build_parser, parse_args
from sprout.cli.commands.add import cmd_add
from sprout.cli.commands.completion import cmd_completion, cmd_install_completion, cmd_version
from sprout.cli.commands.hooks import cmd_run_hooks
from sprout.cli.commands.list import cmd_list
from sprout.cli.commands.maintenance import cmd_prune, cmd_repair
from sprout.cli.commands.open import cmd_open
from sprout.cli.commands.remove import cmd_remove
from sprout.cli.commands.trust import cmd_hooks, cmd_trust, cmd_untrust
from sprout.constants import ENV_SKIP_AUTOREPAIR, MSG_NO_SPROUT_WORKTREES
from sprout.core.actions import HookType
from sprout.core.repair import RepairContext, plan_repair
from sprout.effects.base import Effects
from sprout.effects.executor import execute_plan
from sprout.effects.real import RealEffects
from sprout.exceptions import NoSproutWorktreesError, SelectionCancelledError, SproutError
from sprout.logging_config import debug_enabled, get_logger, setup_logging
from sprout.services.discovery_service import discover_repos

console = Console(stderr=True)
logger = get_logger(__name__)

# Commands that never trigger the automatic worktree repair
NO_AUTOREPAIR_COMMANDS = {None, "version", "completion", "install-completion", "hooks"}


def should_auto_repair(args) -> bool:
    if os.environ.get(ENV_SKIP_AUTOREPAIR) == "1":
        return False
    if args.command in NO_AUTOREPAIR_COMMANDS:
        return False
    return not getattr(args, "dry_run", False)


def auto_repair(fx: Effects) -> None:
    """Silently run ``git worktree repair`` in every known repository.

    Failures are only logged; they never stop the actual command.
    """
    try:
        repos = discover_repos(fx)
    except Exception as e:
        _report_auto_repair_failure(fx, e)
        return
    for repo in repos:
        try:
            execute_plan(plan_repair(RepairContext(repo_roots=[repo.main_path])), fx)
        except Exception as e:
            _report_auto_repair_failure(fx, e)


def _report_auto_repair_failure(fx: Effects, error: Exception) -> None:
    logger.debug(f"Auto-repair failed: {error}")
    if debug_enabled():
        fx.print_err(f"auto-repair: {error}")


def dispatch(fx: Effects, args) -> int:
    """Run the handler for ``args.command`` and return its exit code."""
    command = args.command
    if command == "add":
        return cmd_add(fx, args.branch, no_hooks=args.no_hooks, no_open=args.no_open, dry_run=args.dry_run)
    if command == "open":
        return cmd_open(fx, args.target, no_hooks=args.no_hooks, dry_run=args.dry_run)
    if command == "remove":
        return cmd_remove(fx, args.target, force=args.force, dry_run=args.dry_run)
    if command == "list":
        return cmd_list(fx, all_repos=args.all)
    if command == "prune":
        return cmd_prune(fx, dry_run=args.dry_run)
    if command == "repair":
        return cmd_repair(fx, prune=args.prune, dry_run=args.dry_run)
    if command == "trust":
        return cmd_trust(fx, args.path, dry_run=args.dry_run)
    if command == "untrust":
        return cmd_untrust(fx, args.path, dry_run=args.dry_run)
    if command == "hooks":
        return cmd_hooks(fx)
    if command == "init":
        return cmd_run_hooks(fx, HookType.ON_CREATE, dry_run=args.dry_run)
    if command == "sync":
        return cmd_run_hooks(fx, HookType.ON_OPEN, dry_run=args.dry_run)
    if command == "install-completion":
        return cmd_install_completion(fx, dry_run=args.dry_run)
    if command == "completion":
        return cmd_completion(fx, args.shell)
    if command == "version":
        return cmd_version(fx)
    raise SproutError(f"unknown command '{command}'")


def run(fx: Effects, args) -> int:
    """Run a parsed command, translating errors into exit codes."""
    try:
        if should_auto_repair(args):
            auto_repair(fx)
        return dispatch(fx, args)
    except SelectionCancelledError:
        return 1
    except NoSproutWorktreesError:
        fx.print(MSG_NO_SPROUT_WORKTREES)
        return 1
    except SproutError as e:
        logger.debug("Command failed", exc_info=True)
        fx.print_err(f"Error: {e}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, debug=args.debug)

    if args.command is None:
        build_parser().print_help()
        return 0

    try:
        return run(RealEffects(), args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
