"""Planning and status reporting for ``sprout init``, ``sprout sync`` and ``sprout hooks``."""

from dataclasses import dataclass, field

from sprout.config import SproutConfig
from sprout.constants import CONFIG_FILE_NAME
from sprout.core.actions import HookType, Plan, PrintMessage, PromptTrust, RunHooks, error_plan

EXAMPLE_CONFIG = """hooks:
  on_create:
    - npm install
  on_open:
    - git fetch"""


@dataclass
class HooksRunContext:
    hook_type: HookType
    worktree_path: str
    repo_root: str
    main_worktree_path: str
    config: SproutConfig = field(default_factory=SproutConfig)
    is_trusted: bool = False
    interactive: bool = False


def plan_run_hooks(ctx: HooksRunContext) -> Plan:
    """Plan running one hook type in the current worktree.

    Untrusted repositories get a trust prompt first when a terminal is
    attached, and an error otherwise.
    """
    if not ctx.worktree_path:
        return error_plan("worktree path cannot be empty")
    if not ctx.repo_root:
        return error_plan("repository root cannot be empty")
    if not ctx.main_worktree_path:
        return error_plan("main worktree path cannot be empty")
    if ctx.config is None:
        return error_plan("config is required")

    commands = ctx.config.hooks.commands_for(ctx.hook_type.value)
    if not commands:
        return Plan([PrintMessage(f"No {ctx.hook_type.value} hooks defined in {CONFIG_FILE_NAME}")])

    run = RunHooks(
        hook_type=ctx.hook_type,
        commands=commands,
        worktree_path=ctx.worktree_path,
        repo_root=ctx.repo_root,
        main_worktree_path=ctx.main_worktree_path,
    )
    if ctx.is_trusted:
        return Plan([run])
    if ctx.interactive:
        return Plan([PromptTrust(ctx.main_worktree_path, ctx.hook_type, commands), run])
    return error_plan(
        "Repository not trusted. Cannot run hooks.\n"
        "\n"
        "To trust this repository, run:\n"
        "  sprout trust"
    )


@dataclass
class HooksStatusContext:
    repo_root: str
    config: SproutConfig = field(default_factory=SproutConfig)
    is_trusted: bool = False


def _format_hook_list(name: str, commands) -> list:
    lines = [f"  {name}:"]
    if not commands:
        lines.append("    (none)")
    for i, command in enumerate(commands, 1):
        lines.append(f"    {i}. {command}")
    return lines


def format_hooks_status(ctx: HooksStatusContext) -> str:
    """Human-readable summary of trust state and configured hooks."""
    lines = [f"Repository: {ctx.repo_root}"]

    if ctx.config.path is None:
        lines += [
            f"Config: no {CONFIG_FILE_NAME} found",
            "",
            f"Create a {CONFIG_FILE_NAME} in the repository root, for example:",
            "",
        ]
        lines += [f"  {line}" for line in EXAMPLE_CONFIG.splitlines()]
        return "\n".join(lines)

    lines.append(f"Config: {ctx.config.path}")
    lines.append(f"Trusted: {'yes' if ctx.is_trusted else 'no'}")
    lines.append("")
    lines.append("Hooks:")
    lines += _format_hook_list(HookType.ON_CREATE.value, ctx.config.hooks.on_create)
    lines += _format_hook_list(HookType.ON_OPEN.value, ctx.config.hooks.on_open)
    lines.append("")

    if ctx.is_trusted:
        lines.append("Hooks run automatically on 'sprout add' and 'sprout open'.")
        lines.append("Run them manually with 'sprout init' (on_create) or 'sprout sync' (on_open).")
    else:
        lines.append("Hooks will not run until you trust this repository:")
        lines.append("  sprout trust")
    return "\n".join(lines)
