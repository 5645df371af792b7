"""Configuration handling for sprout (.sprout.yml)"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

from sprout.constants import CONFIG_FILE_NAME
from sprout.exceptions import ConfigError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class HooksConfig:
    """Lifecycle hooks declared in .sprout.yml."""

    on_create: List[str] = field(default_factory=list)
    on_open: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.on_create = self._validate_commands("on_create", self.on_create)
        self.on_open = self._validate_commands("on_open", self.on_open)

    @staticmethod
    def _validate_commands(name: str, commands) -> List[str]:
        """Validate a hook list contains only non-empty strings."""
        if commands is None:
            return []
        if not isinstance(commands, list):
            raise ValueError(f"hooks.{name} must be a list of commands")
        for i, command in enumerate(commands):
            if not isinstance(command, str) or not command.strip():
                raise ValueError(f"hooks.{name}[{i}] must be a non-empty string")
        return list(commands)

    def commands_for(self, hook_type: str) -> List[str]:
        """Commands registered for a hook type ("on_create" or "on_open")."""
        if hook_type == "on_create":
            return self.on_create
        if hook_type == "on_open":
            return self.on_open
        raise ValueError(f"unknown hook type '{hook_type}'")


@dataclass
class SproutConfig:
    """Per-repository configuration."""

    hooks: HooksConfig = field(default_factory=HooksConfig)
    path: Optional[str] = None  # File the config was read from, None when absent

    def __post_init__(self):
        if isinstance(self.hooks, dict):
            self.hooks = HooksConfig(**_known_keys(self.hooks, {"on_create", "on_open"}))
        elif self.hooks is None:
            self.hooks = HooksConfig()
        elif not isinstance(self.hooks, HooksConfig):
            raise ValueError("hooks must be a mapping")

    def has_create_hooks(self) -> bool:
        return bool(self.hooks.on_create)

    def has_open_hooks(self) -> bool:
        return bool(self.hooks.on_open)

    def has_hooks(self) -> bool:
        return self.has_create_hooks() or self.has_open_hooks()

    def to_dict(self) -> dict:
        """Convert config to the mapping stored in .sprout.yml."""
        hooks = {}
        if self.hooks.on_create:
            hooks["on_create"] = list(self.hooks.on_create)
        if self.hooks.on_open:
            hooks["on_open"] = list(self.hooks.on_open)
        return {"hooks": hooks} if hooks else {}

    @classmethod
    def from_dict(cls, config_dict: Optional[dict], path: Optional[str] = None) -> "SproutConfig":
        """Create SproutConfig from a parsed YAML document."""
        if config_dict is None:
            return cls(path=path)
        if not isinstance(config_dict, dict):
            raise ValueError("top level of .sprout.yml must be a mapping")
        return cls(hooks=config_dict.get("hooks"), path=path)


def _known_keys(data: dict, known: set) -> dict:
    unknown = set(data) - known
    if unknown:
        logger.debug(f"Ignoring unknown hook keys: {sorted(unknown)}")
    return {k: v for k, v in data.items() if k in known}


def load_config_file(path: str) -> SproutConfig:
    """Parse a single .sprout.yml file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or fails validation
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(path, str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(path, f"invalid YAML: {e}") from e

    try:
        return SproutConfig.from_dict(data, path=path)
    except ValueError as e:
        raise ConfigError(path, str(e)) from e


def load_config(current_path: str, main_path: str = "") -> SproutConfig:
    """Load .sprout.yml from the current worktree, falling back to the main worktree.

    A missing file in both places is an empty config.

    Args:
        current_path: Root of the worktree the command runs in
        main_path: Root of the main worktree (gitignored configs live there)

    Returns:
        Parsed configuration
    """
    for directory in (current_path, main_path):
        if not directory:
            continue
        candidate = os.path.join(directory, CONFIG_FILE_NAME)
        if os.path.isfile(candidate):
            logger.debug(f"Loading config from {candidate}")
            return load_config_file(candidate)
    logger.debug("No .sprout.yml found")
    return SproutConfig()
