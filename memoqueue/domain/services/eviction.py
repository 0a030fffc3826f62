"""Eviction rules applied to a full cache store.

The store is any ordered mutable mapping whose iteration order is the ledger
order: least-recently-used first for LRU, insertion order otherwise.
"""

from __future__ import annotations

from collections.abc import Hashable, MutableMapping
from typing import Any

from ..entities.cache_entry import CacheEntry
from ..entities.eviction_policy import LFU, LRU, Custom, EvictionPolicy, TimeBased
from ..exceptions import CacheEvictionError

Store = MutableMapping[Hashable, CacheEntry[Any]]


def evict(
    store: Store,
    policy: EvictionPolicy,
    *,
    now: float,
    max_size: int | None,
) -> list[Hashable]:
    """Remove entries from ``store`` according to ``policy``.

    Returns the evicted keys in removal order.

    Raises:
        CacheEvictionError: If a custom evictor removed nothing.
    """
    match policy:
        case LRU():
            return _evict_oldest(store)
        case LFU():
            return _evict_least_frequent(store)
        case TimeBased():
            evicted = purge_expired(store, max_age=policy.max_age_seconds, now=now)
            if max_size is not None and len(store) >= max_size:
                evicted.extend(_evict_oldest(store))
            return evicted
        case Custom(evict=evictor):
            return _evict_custom(store, evictor)
    raise TypeError(f"Unsupported eviction policy: {policy!r}")


def purge_expired(store: Store, *, max_age: float, now: float) -> list[Hashable]:
    expired = [key for key, entry in store.items() if entry.is_expired(now, max_age)]
    for key in expired:
        del store[key]
    return expired


def _evict_oldest(store: Store) -> list[Hashable]:
    if not store:
        return []
    key = next(iter(store))
    del store[key]
    return [key]


def _evict_least_frequent(store: Store) -> list[Hashable]:
    if not store:
        return []
    # min() keeps the first of equal candidates, so ties go to the oldest insertion
    key = min(store, key=lambda k: store[k].hits)
    del store[key]
    return [key]


def _evict_custom(store: Store, evictor: Any) -> list[Hashable]:
    name = getattr(evictor, "__name__", evictor)
    before = list(store)
    returned = evictor(store)
    if returned is not None:
        try:
            store.pop(returned, None)
        except TypeError as exc:
            raise CacheEvictionError(
                f"Custom evictor {name!r} returned an unhashable key of type "
                f"{type(returned).__name__}"
            ) from exc
    evicted = [key for key in before if key not in store]
    if not evicted:
        raise CacheEvictionError(
            f"Custom evictor {name!r} did not remove any of {len(before)} entries"
        )
    return evicted
