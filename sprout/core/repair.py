"""Planners for ``sprout repair`` and ``sprout prune``."""

from dataclasses import dataclass, field
from typing import List

from sprout.core.actions import Plan, RunGitCommand


@dataclass
class RepairContext:
    repo_roots: List[str] = field(default_factory=list)


def plan_repair(ctx: RepairContext) -> Plan:
    """One ``git worktree repair`` per repository, in input order."""
    return Plan([RunGitCommand(repo, ["worktree", "repair"]) for repo in ctx.repo_roots])


def plan_prune(ctx: RepairContext) -> Plan:
    """One ``git worktree prune`` per repository, in input order."""
    return Plan([RunGitCommand(repo, ["worktree", "prune"]) for repo in ctx.repo_roots])
