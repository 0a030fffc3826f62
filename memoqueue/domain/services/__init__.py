"""Domain services: canonical keys, eviction rules and the priority queue."""

from .eviction import evict, purge_expired
from .keys import make_key
from .priority_queue import BiDirectionalPriorityQueue, IndexedPriorityQueue

__all__ = [
    "BiDirectionalPriorityQueue",
    "IndexedPriorityQueue",
    "evict",
    "make_key",
    "purge_expired",
]
