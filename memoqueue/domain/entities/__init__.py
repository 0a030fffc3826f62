from .cache_entry import CacheEntry, CacheStats
from .eviction_policy import (
    LFU,
    LRU,
    Custom,
    CustomEvictor,
    EvictionPolicy,
    PolicyName,
    TimeBased,
    parse_policy,
)
from .queue_entry import QueueEntry, QueueStats, Selector, SortKey

__all__ = [
    "LFU",
    "LRU",
    "CacheEntry",
    "CacheStats",
    "Custom",
    "CustomEvictor",
    "EvictionPolicy",
    "PolicyName",
    "QueueEntry",
    "QueueStats",
    "Selector",
    "SortKey",
    "TimeBased",
    "parse_policy",
]
