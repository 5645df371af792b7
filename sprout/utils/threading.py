"""Threading utilities for sizing worker pools."""

import os
import sys
from typing import Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with the GIL disabled
    """
    # sys._is_gil_enabled() is only available on 3.13+
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is not None and not is_gil_enabled()


def get_optimal_worker_count(user_specified: Optional[int] = None) -> int:
    """Calculate a worker count for I/O-bound git status checks.

    Args:
        user_specified: Explicit worker count, used when positive

    Returns:
        Number of workers for parallel processing
    """
    if user_specified is not None and user_specified > 0:
        return user_specified

    cpu_count = os.cpu_count() or 1
    if is_free_threading_enabled():
        return min(64, cpu_count * 2)
    return min(32, cpu_count + 4)
