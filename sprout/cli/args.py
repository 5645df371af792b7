"""Command-line argument parsing for sprout."""

import argparse
from typing import List, Optional

from sprout.__version__ import __version__

SHELLS = ["bash", "zsh", "fish"]


def _add_dry_run(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run", action="store_true", help="Show the planned actions without executing them"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the sprout argument parser."""
    parser = argparse.ArgumentParser(
        prog="sprout",
        description="Manage Git worktrees outside your project directory",
        epilog="Worktrees live under $XDG_DATA_HOME/sprout (default ~/.local/share/sprout).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"sprout {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    add = sub.add_parser("add", help="Create a worktree for a branch (or open it if it exists)")
    add.add_argument("branch", nargs="?", help="Branch name; pick interactively when omitted")
    add.add_argument("--no-hooks", action="store_true", help="Do not run on_create hooks")
    add.add_argument("--no-open", action="store_true", help="Do not open the editor")
    _add_dry_run(add)

    open_ = sub.add_parser("open", help="Open a sprout-managed worktree in your editor")
    open_.add_argument("target", nargs="?", metavar="branch-or-path", help="Branch name or worktree path")
    open_.add_argument("--no-hooks", action="store_true", help="Do not run on_open hooks")
    _add_dry_run(open_)

    remove = sub.add_parser("remove", aliases=["rm"], help="Remove a sprout-managed worktree")
    remove.add_argument("target", nargs="?", metavar="branch-or-path", help="Branch name or worktree path")
    remove.add_argument("--force", action="store_true", help="Remove even with local changes")
    _add_dry_run(remove)

    list_ = sub.add_parser("list", aliases=["ls"], help="List sprout worktrees")
    list_.add_argument("--all", action="store_true", help="List worktrees of every known repository")

    prune = sub.add_parser("prune", help="Prune stale worktree metadata of this repository")
    _add_dry_run(prune)

    repair = sub.add_parser("repair", help="Repair worktree links of every known repository")
    repair.add_argument("-p", "--prune", action="store_true", help="Also prune stale worktree metadata")
    _add_dry_run(repair)

    trust = sub.add_parser("trust", help="Allow this repository's hooks to run")
    trust.add_argument("path", nargs="?", help="Repository path (default: current repository)")
    _add_dry_run(trust)

    untrust = sub.add_parser("untrust", help="Stop running this repository's hooks")
    untrust.add_argument("path", nargs="?", help="Repository path (default: current repository)")
    _add_dry_run(untrust)

    sub.add_parser("hooks", help="Show trust status and configured hooks")

    init = sub.add_parser("init", help="Run on_create hooks in the current worktree")
    _add_dry_run(init)

    sync = sub.add_parser("sync", help="Run on_open hooks in the current worktree")
    _add_dry_run(sync)

    install = sub.add_parser("install-completion", help="Add shell completion to your shell rc file")
    _add_dry_run(install)

    completion = sub.add_parser("completion", help="Print the completion script for a shell")
    completion.add_argument("shell", choices=SHELLS)

    sub.add_parser("version", help="Print version information")

    return parser


ALIASES = {"rm": "remove", "ls": "list"}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    if args.command in ALIASES:
        args.command = ALIASES[args.command]
    return args
