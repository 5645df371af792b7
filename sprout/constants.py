"""Shared constants for sprout."""

# File names
CONFIG_FILE_NAME = ".sprout.yml"
TRUST_FILE_NAME = "trusted-projects.json"
TRUST_STORE_VERSION = 1

# Remote and branch defaults
REMOTE_NAME = "origin"
REMOTE_PREFIX = "origin/"
DEFAULT_BASE_BRANCHES = ["main", "master"]

# Directory mode for worktree parents
WORKTREE_DIR_MODE = 0o755

# Environment variables
ENV_EDITOR = "SPROUT_EDITOR"
ENV_DEBUG = "SPROUT_DEBUG"
ENV_SKIP_AUTOREPAIR = "SPROUT_SKIP_AUTOREPAIR"
ENV_HOOK_REPO_ROOT = "SPROUT_REPO_ROOT"
ENV_HOOK_WORKTREE_PATH = "SPROUT_WORKTREE_PATH"
ENV_HOOK_TYPE = "SPROUT_HOOK_TYPE"

# Dry-run message truncation
PLAN_MESSAGE_MAX_LEN = 60


# ANSI colors for list output (converted by rich at print time)
ANSI = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "gray": "\033[90m",
    "bold": "\033[1m",
    "reset": "\033[0m",
}


# Worktree status symbols
SYMBOL_DIRTY = "✗"
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"
SYMBOL_UNMERGED = "↕"
SYMBOL_SPROUT = "🌱"

# Tree glyphs for grouped list output
TREE_BRANCH = "├── "
TREE_LAST = "└── "
TREE_PIPE = "│   "
TREE_SPACE = "    "


# User-facing messages
MSG_NO_SPROUT_WORKTREES = "No sprout-managed worktrees found."
MSG_NO_WORKTREES_LISTED = "No sprout worktrees found."
MSG_UNTRUSTED_HOOKS = (
    "Repository not trusted. Cannot run hooks.\n"
    "\n"
    "To trust this repository, run:\n"
    "  sprout trust\n"
    "\n"
    "Or skip hooks with --no-hooks"
)
