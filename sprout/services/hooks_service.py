"""Hook execution service for sprout."""

import os
import subprocess
from typing import Callable, List, Optional

from sprout.constants import ENV_HOOK_REPO_ROOT, ENV_HOOK_TYPE, ENV_HOOK_WORKTREE_PATH
from sprout.exceptions import HookExecutionError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


def build_hook_env(repo_root: str, worktree_path: str, hook_type: str, base: Optional[dict] = None) -> dict:
    """Process environment for hook commands."""
    env = dict(os.environ if base is None else base)
    env[ENV_HOOK_REPO_ROOT] = repo_root
    env[ENV_HOOK_WORKTREE_PATH] = worktree_path
    env[ENV_HOOK_TYPE] = hook_type
    return env


class HooksService:
    """Runs hook commands through a login shell inside a worktree."""

    def __init__(self, output: Callable[[str], None], shell: str = "sh"):
        """Initialize the hooks service.

        Args:
            output: Callback for progress lines
            shell: Shell used as ``<shell> -lc <command>``
        """
        self.output = output
        self.shell = shell

    def run(self, repo_root: str, worktree_path: str, commands: List[str], hook_type: str) -> None:
        """Run ``commands`` in order, stopping at the first failure.

        Hook output is streamed straight to the terminal.

        Raises:
            HookExecutionError: If a command exits non-zero or cannot be started
        """
        if not commands:
            return

        env = build_hook_env(repo_root, worktree_path, hook_type)
        total = len(commands)
        self.output(f"🪝 Running {hook_type} hooks...")
        for i, command in enumerate(commands, 1):
            self.output(f"[{i}/{total}] {command}")
            logger.debug(f"Running {hook_type} hook in {worktree_path}: {command}")
            try:
                result = subprocess.run(
                    [self.shell, "-lc", command],
                    cwd=worktree_path,
                    env=env,
                    check=False,
                )
            except OSError as e:
                logger.error(f"Could not start hook '{command}': {e}")
                raise HookExecutionError(hook_type, command, 127) from e
            if result.returncode != 0:
                logger.error(f"Hook '{command}' exited with {result.returncode}")
                raise HookExecutionError(hook_type, command, result.returncode)
        self.output(f"✅ All {hook_type} hooks completed successfully")
