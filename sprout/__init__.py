"""
sprout - Git worktrees, kept out of your project directory
"""

from .__version__ import __version__
from .cli.main import main

__all__ = ["main", "__version__"]
