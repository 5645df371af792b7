"""Planners for ``sprout trust`` and ``sprout untrust``."""

from dataclasses import dataclass

from sprout.core.actions import Plan, PrintMessage, TrustRepo, UntrustRepo, error_plan


@dataclass
class TrustContext:
    repo_root: str
    already_trusted: bool = False


def plan_trust(ctx: TrustContext) -> Plan:
    if not ctx.repo_root:
        return error_plan("repository root cannot be empty")
    if ctx.already_trusted:
        return Plan([PrintMessage(f"✅ Repository is already trusted: {ctx.repo_root}")])
    return Plan([
        TrustRepo(ctx.repo_root),
        PrintMessage(
            f"✅ Repository trusted: {ctx.repo_root}\n"
            "\n"
            "on_create and on_open hooks from .sprout.yml will now run automatically.\n"
            "Use --no-hooks to skip them for a single command."
        ),
    ])


def plan_untrust(ctx: TrustContext) -> Plan:
    if not ctx.repo_root:
        return error_plan("repository root cannot be empty")
    if not ctx.already_trusted:
        return Plan([PrintMessage(f"Repository is not trusted: {ctx.repo_root}")])
    return Plan([
        UntrustRepo(ctx.repo_root),
        PrintMessage(
            f"✅ Repository untrusted: {ctx.repo_root}\n"
            "\n"
            "Hooks will no longer run automatically.\n"
            "Run 'sprout trust' to trust it again."
        ),
    ])
