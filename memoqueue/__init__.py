"""memoqueue package.

Two small in-process data structures:

- a memoizing function wrapper with LRU, LFU, time-based and custom eviction
- a bidirectional priority queue selecting by highest/lowest priority or
  oldest/newest insertion
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("memoqueue")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from memoqueue.domain.entities import (
    LFU,
    LRU,
    CacheEntry,
    CacheStats,
    Custom,
    QueueEntry,
    QueueStats,
    Selector,
    SortKey,
    TimeBased,
)
from memoqueue.domain.exceptions import (
    CacheConfigurationError,
    CacheError,
    CacheEvictionError,
    InvalidQueueEntryError,
    InvalidSelectorError,
    InvalidSortKeyError,
    MemoQueueError,
    QueueError,
    UnhashableArgumentError,
)
from memoqueue.domain.services.priority_queue import (
    BiDirectionalPriorityQueue,
    IndexedPriorityQueue,
)
from memoqueue.memoize import MemoizedFunction, MemoizeOptions, memoize

__all__ = [
    "__version__",
    # Cache
    "memoize",
    "MemoizeOptions",
    "MemoizedFunction",
    "CacheEntry",
    "CacheStats",
    "LRU",
    "LFU",
    "TimeBased",
    "Custom",
    # Queue
    "BiDirectionalPriorityQueue",
    "IndexedPriorityQueue",
    "QueueEntry",
    "QueueStats",
    "Selector",
    "SortKey",
    # Errors
    "MemoQueueError",
    "CacheError",
    "CacheConfigurationError",
    "CacheEvictionError",
    "UnhashableArgumentError",
    "QueueError",
    "InvalidQueueEntryError",
    "InvalidSelectorError",
    "InvalidSortKeyError",
]
