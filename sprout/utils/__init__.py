"""Utility functions for sprout.

- threading: worker pool sizing, aware of Python 3.13+ free-threading
"""

from .threading import is_free_threading_enabled, get_optimal_worker_count

__all__ = [
    "is_free_threading_enabled",
    "get_optimal_worker_count",
]
