"""``sprout list``: show sprout worktrees with their status."""

from typing import List

from sprout.core.worktrees import filter_sprout_worktrees
from sprout.effects.base import Effects
from sprout.formatters.worktree import RepoDisplay, WorktreeDisplayInfo, format_repos
from sprout.models.worktree import Worktree
from sprout.services.discovery_service import DiscoveredRepo, collect_statuses, discover_repos


def _current_repo(fx: Effects) -> List[DiscoveredRepo]:
    repo_root = fx.get_repo_root()
    main_path = fx.get_main_worktree_path()
    worktrees = fx.list_worktrees(repo_root)
    sprout_worktrees = filter_sprout_worktrees(worktrees, fx.get_worktree_root(main_path))
    if not sprout_worktrees:
        return []
    main_branch = worktrees[0].branch if worktrees else ""
    return [DiscoveredRepo(main_path=main_path, worktrees=sprout_worktrees, main_branch=main_branch)]


def build_repo_displays(fx: Effects, repos: List[DiscoveredRepo]) -> List[RepoDisplay]:
    """Attach status to the main worktree and every sprout worktree of each repo.

    Status for all worktrees is collected in one parallel batch.
    """
    groups: List[List[Worktree]] = [
        [Worktree(path=repo.main_path, branch=repo.main_branch)] + repo.worktrees for repo in repos
    ]
    statuses = iter(collect_statuses(fx, [wt.path for group in groups for wt in group]))

    displays = []
    for repo, group in zip(repos, groups):
        infos = [
            WorktreeDisplayInfo(branch=wt.branch, path=wt.path, status=next(statuses), is_main=(i == 0))
            for i, wt in enumerate(group)
        ]
        displays.append(RepoDisplay(name=repo.name, main_path=repo.main_path, worktrees=infos))
    return displays


def cmd_list(fx: Effects, all_repos: bool = False) -> int:
    if all_repos:
        repos = discover_repos(fx)
    else:
        repos = _current_repo(fx)
        if not repos:
            fx.print("No sprout worktrees found for this repository.")
            return 0

    displays = build_repo_displays(fx, repos)
    fx.print(format_repos(displays, fx.user_home_dir(), group_by_repo=all_repos))
    return 0
