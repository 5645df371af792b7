"""Command-line interface for sprout.

This package provides the CLI entry point, argument parsing and one
handler module per command.
"""

from .main import main
from .args import parse_args

__all__ = ["main", "parse_args"]
