"""Shared plan execution for command handlers."""

from sprout.core.actions import Exit, Plan
from sprout.core.dryrun import format_plan
from sprout.effects.base import Effects
from sprout.effects.executor import execute_plan, is_exit
from sprout.exceptions import SproutError


def run_plan(fx: Effects, plan: Plan, dry_run: bool = False) -> int:
    """Print or execute ``plan`` and return the exit code.

    A dry run of a plan that would exit reports the same exit code.
    """
    if dry_run:
        fx.print(format_plan(plan))
        if plan.actions and isinstance(plan.actions[-1], Exit):
            return plan.actions[-1].code
        return 0

    try:
        execute_plan(plan, fx)
    except SproutError as e:
        code, ok = is_exit(e)
        if ok:
            return code
        fx.print_err(f"Error: {e}")
        return 1
    return 0
