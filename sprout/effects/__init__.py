"""Side-effect capability used by command handlers and the plan executor."""

from .base import Effects
from .executor import execute_plan, is_exit

__all__ = ["Effects", "execute_plan", "is_exit"]
