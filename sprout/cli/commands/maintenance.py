"""``sprout prune`` and ``sprout repair``."""

import os
from dataclasses import dataclass
from typing import List

from sprout.cli.commands.runner import run_plan
from sprout.core.actions import Plan, PrintMessage
from sprout.core.repair import RepairContext, plan_prune, plan_repair
from sprout.effects.base import Effects
from sprout.effects.executor import execute_plan
from sprout.exceptions import SproutError
from sprout.logging_config import get_logger
from sprout.services.discovery_service import discover_repos

logger = get_logger(__name__)


def cmd_prune(fx: Effects, dry_run: bool = False) -> int:
    plan = plan_prune(RepairContext(repo_roots=[fx.get_repo_root()]))
    plan.actions.append(PrintMessage("✅ Pruned stale worktree metadata"))
    return run_plan(fx, plan, dry_run)


def build_repair_plan(ctx: RepairContext, prune: bool = False) -> Plan:
    """Repairs for every repository, followed by prunes when requested."""
    plan = plan_repair(ctx)
    if prune:
        plan.actions.extend(plan_prune(ctx).actions)
    return plan


@dataclass
class RepairSummary:
    repaired: int = 0
    pruned: int = 0
    errors: int = 0


def _run_step(fx: Effects, plan: Plan, failure: str) -> bool:
    try:
        execute_plan(plan, fx)
        return True
    except SproutError as e:
        logger.debug(f"{failure}: {e}")
        fx.print(f"   ⚠️  {failure}: {e}")
        return False


def repair_repos(fx: Effects, repo_roots: List[str], prune: bool = False) -> RepairSummary:
    """Repair (and optionally prune) each repository on its own.

    A failing repository is reported and counted; the rest are still processed.
    """
    summary = RepairSummary()
    for repo in repo_roots:
        ctx = RepairContext(repo_roots=[repo])
        fx.print(f"📦 {os.path.basename(repo.rstrip(os.sep))}")
        if _run_step(fx, plan_repair(ctx), "Failed to repair"):
            fx.print("   ✅ Repaired worktree metadata")
            summary.repaired += 1
        else:
            summary.errors += 1
        if prune:
            if _run_step(fx, plan_prune(ctx), "Failed to prune"):
                fx.print("   🧹 Pruned stale worktree references")
                summary.pruned += 1
            else:
                summary.errors += 1
        fx.print("")
    return summary


def cmd_repair(fx: Effects, prune: bool = False, dry_run: bool = False) -> int:
    repo_roots = [repo.main_path for repo in discover_repos(fx)]
    if not repo_roots:
        fx.print("No sprout-managed repositories found.")
        return 0

    if dry_run:
        return run_plan(fx, build_repair_plan(RepairContext(repo_roots=repo_roots), prune), dry_run=True)

    fx.print(f"Found {len(repo_roots)} repository(ies) to repair...\n")
    summary = repair_repos(fx, repo_roots, prune)

    fx.print("Summary:")
    fx.print(f"  ✅ Repaired: {summary.repaired}")
    if prune:
        fx.print(f"  🧹 Pruned: {summary.pruned}")
    if summary.errors:
        fx.print(f"  ⚠️  Errors: {summary.errors}")
        return 1
    return 0
