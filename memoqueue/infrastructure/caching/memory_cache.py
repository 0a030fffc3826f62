from collections import OrderedDict
from collections.abc import Callable, Hashable, Iterator, MutableMapping
from dataclasses import replace
import time

from ...domain.entities.cache_entry import CacheEntry


class MemoryCache[T](MutableMapping[Hashable, CacheEntry[T]]):
    """Ordered in-memory entry store.

    Iteration order is the ledger order: entries are appended on insert and
    only move when :meth:`touch` is called, so the first key is always the
    least recently touched (or oldest inserted) one. Reading through the
    mapping interface never reorders.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        self._store: OrderedDict[Hashable, CacheEntry[T]] = OrderedDict()
        self._clock = clock

    def __getitem__(self, key: Hashable) -> CacheEntry[T]:
        return self._store[key]

    def __setitem__(self, key: Hashable, entry: CacheEntry[T]) -> None:
        self._store[key] = entry
        self._store.move_to_end(key)

    def __delitem__(self, key: Hashable) -> None:
        del self._store[key]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"MemoryCache({list(self._store)!r})"

    def now(self) -> float:
        return self._clock()

    def set(self, key: Hashable, value: T, timestamp: float | None = None) -> CacheEntry[T]:
        entry = CacheEntry(
            value=value,
            timestamp=self.now() if timestamp is None else timestamp,
        )
        self[key] = entry
        return entry

    def touch(self, key: Hashable) -> None:
        self._store.move_to_end(key)

    def snapshot(self) -> dict[Hashable, CacheEntry[T]]:
        return {key: replace(entry) for key, entry in self._store.items()}
