"""Discovery of sprout-managed repositories and their worktree status."""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from sprout.core.worktrees import filter_sprout_worktrees_any_root
from sprout.effects.base import Effects
from sprout.exceptions import SproutError
from sprout.logging_config import get_logger
from sprout.models.worktree import Worktree, WorktreeStatus
from sprout.utils.threading import get_optimal_worker_count

logger = get_logger(__name__)

# How deep below a repo directory to look for a checkout: <branch>/<name> plus one nested level
MAX_SCAN_DEPTH = 3


@dataclass
class DiscoveredRepo:
    main_path: str
    worktrees: List[Worktree] = field(default_factory=list)
    main_branch: str = ""

    @property
    def name(self) -> str:
        return os.path.basename(self.main_path.rstrip(os.sep))


def find_checkout(fx: Effects, directory: str, depth: int = MAX_SCAN_DEPTH) -> List[str]:
    """Directories below ``directory`` that contain a ``.git`` entry, breadth first."""
    found = []
    level = [directory]
    for _ in range(depth + 1):
        next_level = []
        for current in level:
            if fx.file_exists(os.path.join(current, ".git")):
                found.append(current)
                continue
            next_level.extend(os.path.join(current, name) for name in fx.list_dir(current))
        level = next_level
        if not level:
            break
    return found


def discover_repos(fx: Effects) -> List[DiscoveredRepo]:
    """Repositories with at least one worktree under any sprout root.

    Returns:
        Repositories sorted by main worktree path, each listed once
    """
    roots = fx.get_all_sprout_roots()
    repos = {}
    for root in roots:
        for repo_dir_name in fx.list_dir(root):
            repo_dir = os.path.join(root, repo_dir_name)
            repo = _inspect_repo_dir(fx, repo_dir, roots)
            if repo is None:
                continue
            if repo.main_path in repos:
                known = repos[repo.main_path]
                paths = {wt.path for wt in known.worktrees}
                known.worktrees.extend(wt for wt in repo.worktrees if wt.path not in paths)
            else:
                repos[repo.main_path] = repo
    return [repos[key] for key in sorted(repos)]


def _inspect_repo_dir(fx: Effects, repo_dir: str, roots: List[str]) -> Optional[DiscoveredRepo]:
    for checkout in find_checkout(fx, repo_dir):
        try:
            worktrees = fx.list_worktrees(checkout)
        except SproutError as e:
            logger.debug(f"Skipping {checkout}: {e}")
            continue
        if not worktrees:
            continue
        sprout_worktrees = [
            wt for wt in filter_sprout_worktrees_any_root(worktrees, roots)
            if fx.file_exists(wt.path)
        ]
        if not sprout_worktrees:
            return None
        return DiscoveredRepo(
            main_path=worktrees[0].path,
            worktrees=sprout_worktrees,
            main_branch=worktrees[0].branch,
        )
    logger.debug(f"No checkout found in {repo_dir}")
    return None


def collect_statuses(fx: Effects, paths: List[str]) -> List[WorktreeStatus]:
    """Status of every path, gathered in parallel.

    Each worker writes only its own slot, so results line up with ``paths``.
    """
    results: List[Optional[WorktreeStatus]] = [None] * len(paths)
    if not paths:
        return []

    def fetch(index: int) -> None:
        try:
            results[index] = fx.get_worktree_status(paths[index])
        except SproutError as e:
            logger.debug(f"Could not get status for {paths[index]}: {e}")
            results[index] = WorktreeStatus()

    workers = min(get_optimal_worker_count(), len(paths))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # list() re-raises anything unexpected from the workers
        list(executor.map(fetch, range(len(paths))))
    return results
