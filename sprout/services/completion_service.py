"""Shell completion scripts and installation into shell rc files."""

import os
import shutil
from dataclasses import dataclass
from typing import Optional

from sprout.exceptions import SproutError
from sprout.logging_config import get_logger

logger = get_logger(__name__)

COMMANDS = [
    "add", "open", "remove", "list", "prune", "repair", "trust", "untrust",
    "hooks", "init", "sync", "install-completion", "version",
]
BRANCH_COMMANDS = ["add", "open", "remove"]

INSTALL_MARKERS = ("sprout completion", "_sprout")
BACKUP_SUFFIX = ".backup-sprout"

BASH_SCRIPT = """_sprout() {
    local cur="${COMP_WORDS[COMP_CWORD]}"
    if [ "$COMP_CWORD" -eq 1 ]; then
        COMPREPLY=( $(compgen -W "%(commands)s" -- "$cur") )
        return
    fi
    case "${COMP_WORDS[1]}" in
        %(branch_case)s)
            COMPREPLY=( $(compgen -W "$(git branch --all --format='%%(refname:short)' 2>/dev/null)" -- "$cur") )
            ;;
    esac
}
complete -o default -F _sprout sprout
"""

ZSH_SCRIPT = """#compdef sprout
_sprout() {
    if (( CURRENT == 2 )); then
        compadd -- %(commands)s
        return
    fi
    case "$words[2]" in
        %(branch_case)s)
            compadd -- ${(f)"$(git branch --all --format='%%(refname:short)' 2>/dev/null)"}
            ;;
    esac
}
compdef _sprout sprout
"""

FISH_SCRIPT = """complete -c sprout -f
complete -c sprout -n '__fish_use_subcommand' -a '%(commands)s'
complete -c sprout -n '__fish_seen_subcommand_from %(branch_words)s' -a '(git branch --all --format="%%(refname:short)" 2>/dev/null)'
"""


def completion_script(shell: str) -> str:
    """Completion script for ``shell`` (bash, zsh or fish)."""
    values = {
        "commands": " ".join(COMMANDS),
        "branch_case": "|".join(BRANCH_COMMANDS),
        "branch_words": " ".join(BRANCH_COMMANDS),
    }
    scripts = {"bash": BASH_SCRIPT, "zsh": ZSH_SCRIPT, "fish": FISH_SCRIPT}
    if shell not in scripts:
        raise SproutError(f"unsupported shell '{shell}'")
    return scripts[shell] % values


def detect_shell(shell_env: Optional[str]) -> str:
    """Shell name from a ``$SHELL`` value.

    Raises:
        SproutError: If the shell is missing or unsupported
    """
    name = os.path.basename(shell_env or "")
    if name in ("bash", "zsh", "fish"):
        return name
    raise SproutError(f"could not detect a supported shell from SHELL={shell_env or ''!r} (bash, zsh, fish)")


def rc_file_for(shell: str, home: str) -> str:
    if shell == "zsh":
        return os.path.join(home, ".zshrc")
    if shell == "fish":
        return os.path.join(home, ".config", "fish", "config.fish")
    bashrc = os.path.join(home, ".bashrc")
    profile = os.path.join(home, ".bash_profile")
    if not os.path.exists(bashrc) and os.path.exists(profile):
        return profile
    return bashrc


def install_block(shell: str) -> str:
    """Lines appended to the rc file."""
    if shell == "fish":
        line = "sprout completion fish | source"
    else:
        line = f'eval "$(sprout completion {shell})"'
    return f"\n# sprout shell completion\n{line}\n"


@dataclass
class InstallResult:
    shell: str
    rc_file: str
    block: str
    already_installed: bool = False
    backup_file: Optional[str] = None


class CompletionInstaller:
    """Append sprout completion setup to the user's shell rc file."""

    def __init__(self, home: str, shell_env: Optional[str]):
        self.home = home
        self.shell_env = shell_env

    def install(self, dry_run: bool = False) -> InstallResult:
        """Install completion unless already present.

        Raises:
            SproutError: If the shell is unsupported or the rc file cannot be written
        """
        shell = detect_shell(self.shell_env)
        rc_file = rc_file_for(shell, self.home)
        result = InstallResult(shell=shell, rc_file=rc_file, block=install_block(shell))

        existing = ""
        if os.path.exists(rc_file):
            try:
                with open(rc_file, encoding="utf-8") as f:
                    existing = f.read()
            except OSError as e:
                raise SproutError(f"failed to read {rc_file}: {e}") from e
        if any(marker in existing for marker in INSTALL_MARKERS):
            result.already_installed = True
            return result
        if dry_run:
            return result

        try:
            if os.path.exists(rc_file):
                result.backup_file = rc_file + BACKUP_SUFFIX
                shutil.copy2(rc_file, result.backup_file)
            os.makedirs(os.path.dirname(rc_file), exist_ok=True)
            with open(rc_file, "a", encoding="utf-8") as f:
                f.write(result.block)
        except OSError as e:
            raise SproutError(f"failed to update {rc_file}: {e}") from e
        logger.info(f"Installed {shell} completion into {rc_file}")
        return result
