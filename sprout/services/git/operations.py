"""Git command execution for sprout."""

import os

import git

from sprout.exceptions import GitOperationError, NotAGitRepositoryError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


def _unwrap_output(text: str, label: str) -> str:
    """Raw output from GitPython's ``\\n  stderr: '...'`` decoration."""
    text = (text or "").strip()
    prefix = f"{label}: '"
    if text.startswith(prefix) and text.endswith("'"):
        text = text[len(prefix):-1]
    return text.strip()


def _describe_failure(e: git.exc.GitCommandError) -> tuple[str, str]:
    """Exit status text and combined output of a failed git command."""
    stdout = _unwrap_output(getattr(e, "stdout", ""), "stdout")
    stderr = _unwrap_output(getattr(e, "stderr", ""), "stderr")
    status = e.status if hasattr(e, "status") else "unknown"
    output = "\n".join(part for part in (stdout, stderr) if part)
    return f"exit {status}", output


class GitOperations:
    """Run git commands in a fixed directory."""

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Directory git commands run in (any worktree of the repository)
        """
        self.repo_path = repo_path

    def _get_git(self) -> git.Git:
        """Get a git command wrapper bound to the repository directory.

        A fresh wrapper per call keeps the service usable from worker threads.
        """
        return git.Git(self.repo_path)

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return stripped stdout.

        Raises:
            GitOperationError: If git exits non-zero or cannot be started; the
                error carries git's combined output
        """
        command = ["git", *args]
        if not os.path.isdir(self.repo_path):
            raise GitOperationError(" ".join(command), f"no such directory: {self.repo_path}")
        logger.debug(f"Running {' '.join(command)} in {self.repo_path}")
        try:
            return self._get_git().execute(command).strip()
        except git.exc.GitCommandError as e:
            status, output = _describe_failure(e)
            raise GitOperationError(" ".join(command), status, output) from e
        except (git.exc.CommandError, OSError) as e:
            raise GitOperationError(" ".join(command), str(e)) from e

    def ref_exists(self, ref: str) -> bool:
        """Whether ``ref`` resolves (``git rev-parse --verify --quiet``)."""
        try:
            self.run("rev-parse", "--verify", "--quiet", ref)
            return True
        except GitOperationError:
            return False

    def get_toplevel(self) -> str:
        """Top-level directory of the worktree containing ``repo_path``.

        Raises:
            NotAGitRepositoryError: If ``repo_path`` is not inside a git worktree
        """
        try:
            return os.path.normpath(self.run("rev-parse", "--show-toplevel"))
        except GitOperationError as e:
            raise NotAGitRepositoryError(self.repo_path) from e
