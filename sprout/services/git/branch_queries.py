"""Branch query service for sprout."""

from typing import List

from sprout.constants import REMOTE_NAME, REMOTE_PREFIX
from sprout.logging_config import get_logger
from sprout.models.branch import Branch
from sprout.services.git.operations import GitOperations

logger = get_logger(__name__)


def parse_branch_list(output: str) -> List[Branch]:
    """Parse ``git branch --all --format=%(refname:short)``.

    Local branches come first. Remote ``origin/<x>`` entries are listed as
    ``x`` unless a local ``x`` exists. ``HEAD`` pointers and the bare
    ``origin`` label are dropped.
    """
    local = []
    remote = []
    for line in output.splitlines():
        name = line.strip()
        if not name or name == REMOTE_NAME or "HEAD" in name.split("/") or name.startswith("("):
            continue
        if name.startswith(REMOTE_PREFIX):
            short = name[len(REMOTE_PREFIX):]
            if short:
                remote.append(Branch(name=short, display_name=short, is_local=False))
        else:
            local.append(Branch(name=name, display_name=name, is_local=True))

    local_names = {b.name for b in local}
    seen = set()
    branches = list(local)
    for b in remote:
        if b.name in local_names or b.name in seen:
            continue
        seen.add(b.name)
        branches.append(b)
    return branches


class BranchQueries:
    """Service for querying branch information."""

    def __init__(self, repo_path: str):
        """Initialize the branch queries service.

        Args:
            repo_path: Path to the git repository
        """
        self.repo_path = repo_path
        self.git = GitOperations(repo_path)
        self.remote_name = REMOTE_NAME

    def list_branches(self) -> List[Branch]:
        """Local and origin branches, locals first.

        Raises:
            GitOperationError: If git cannot list branches
        """
        output = self.git.run("branch", "--all", "--format=%(refname:short)")
        branches = parse_branch_list(output)
        logger.debug(f"Found {len(branches)} branches")
        return branches

    def local_branch_exists(self, branch: str) -> bool:
        return self.git.ref_exists(f"refs/heads/{branch}")

    def remote_branch_exists(self, branch: str) -> bool:
        return self.git.ref_exists(f"refs/remotes/{self.remote_name}/{branch}")
