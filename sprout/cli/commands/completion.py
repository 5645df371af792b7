"""``sprout install-completion``, ``sprout completion`` and ``sprout version``."""

import os

from sprout.__version__ import BUILD_DATE, COMMIT, __version__
from sprout.effects.base import Effects
from sprout.services.completion_service import CompletionInstaller, completion_script


def cmd_install_completion(fx: Effects, dry_run: bool = False) -> int:
    installer = CompletionInstaller(fx.user_home_dir(), os.environ.get("SHELL"))
    result = installer.install(dry_run=dry_run)

    if result.already_installed:
        fx.print(f"✅ Completion already installed in {result.rc_file}")
        return 0
    if dry_run:
        fx.print(f"Would append to {result.rc_file}:")
        fx.print(result.block.strip("\n"))
        return 0

    if result.backup_file:
        fx.print(f"Backed up {result.rc_file} to {result.backup_file}")
    fx.print(f"✅ Installed {result.shell} completion in {result.rc_file}")
    fx.print(f"Restart your shell or run: source {result.rc_file}")
    return 0


def cmd_completion(fx: Effects, shell: str) -> int:
    fx.print(completion_script(shell).rstrip("\n"))
    return 0


def version_string() -> str:
    return f"sprout {__version__}, commit {COMMIT}, built at {BUILD_DATE}"


def cmd_version(fx: Effects) -> int:
    fx.print(version_string())
    return 0
