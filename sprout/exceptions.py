"""Custom exceptions for sprout"""

from typing import Optional


class SproutError(Exception):
    """Base exception for all sprout errors."""
    pass


class GitOperationError(SproutError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None, output: Optional[str] = None):
        self.operation = operation
        self.message = message
        self.output = output

        error_msg = f"Git operation '{operation}' failed"
        if message:
            error_msg += f": {message}"
        if output:
            error_msg += f"\n{output}"

        super().__init__(error_msg)


class NotAGitRepositoryError(GitOperationError):
    """Exception raised when the working directory is not inside a Git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("find_repository", f"not a git repository: {path}")


class InvalidBranchNameError(SproutError):
    """Exception raised for branch names that cannot be mapped to a worktree path."""

    def __init__(self, branch: str, reason: str):
        self.branch = branch
        self.reason = reason
        super().__init__(f"invalid branch name '{branch}': {reason}")


class ConfigError(SproutError):
    """Exception raised when .sprout.yml cannot be read or parsed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"failed to load config {path}: {message}")


class TrustStoreError(SproutError):
    """Exception raised when the trust store cannot be read or written."""
    pass


class HookExecutionError(SproutError):
    """Exception raised when a hook command exits with a non-zero status."""

    def __init__(self, hook_type: str, command: str, exit_code: int):
        self.hook_type = hook_type
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"{hook_type} hook failed (exit {exit_code}): {command}")


class EditorError(SproutError):
    """Exception raised when no editor could be launched."""
    pass


class SelectionCancelledError(SproutError):
    """Raised when the user cancels an interactive selection."""

    def __init__(self):
        super().__init__("selection cancelled")


class NoSproutWorktreesError(SproutError):
    """Raised when a repository has no sprout-managed worktrees to choose from."""

    def __init__(self):
        super().__init__("no sprout-managed worktrees found")


class ActionError(SproutError):
    """Exception raised when a planned action fails during execution."""
    pass


class ExitError(SproutError):
    """Raised by the executor when a plan requests process termination."""

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"exit with code {code}")
