"""Presenters for CLI output formatting.

This module contains presenter classes that render cache and queue state
as rich tables.
"""

from .stats import CacheStatsPresenter, CallRow, QueuePresenter

__all__ = ["CacheStatsPresenter", "CallRow", "QueuePresenter"]
