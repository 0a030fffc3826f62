"""Caching infrastructure.

This module provides the ordered entry store backing memoized functions.
"""

from .memory_cache import MemoryCache

__all__ = [
    "MemoryCache",
]
