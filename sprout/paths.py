"""Locations of sprout's per-user directories."""

import os
from pathlib import Path
from typing import List

from sprout.constants import TRUST_FILE_NAME


def user_home_dir() -> str:
    return str(Path.home())


def get_sprout_root() -> str:
    """Root holding all sprout worktrees: ``$XDG_DATA_HOME/sprout`` or ``~/.local/share/sprout``."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return os.path.join(data_home, "sprout")
    return os.path.join(user_home_dir(), ".local", "share", "sprout")


def get_legacy_sprout_root() -> str:
    """Pre-XDG location, only scanned during discovery."""
    return os.path.join(user_home_dir(), ".sprout")


def get_all_sprout_roots() -> List[str]:
    """Current root followed by the legacy root, without duplicates."""
    roots = [get_sprout_root()]
    legacy = get_legacy_sprout_root()
    if os.path.normpath(legacy) != os.path.normpath(roots[0]):
        roots.append(legacy)
    return roots


def get_config_dir() -> str:
    """``$XDG_CONFIG_HOME/sprout`` or ``~/.config/sprout``."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(user_home_dir(), ".config")
    return os.path.join(config_home, "sprout")


def get_trust_file_path() -> str:
    return os.path.join(get_config_dir(), TRUST_FILE_NAME)
