"""Sample workloads for the ``memo`` command."""

from __future__ import annotations

from collections.abc import Callable, Hashable, MutableMapping
import math
from typing import Any

from ..domain.entities.cache_entry import CacheEntry


def fibonacci(n: int) -> int:
    if n <= 1:
        return n
    return fibonacci(n - 1) + fibonacci(n - 2)


def fibonacci_iter(n: int) -> int:
    if n <= 1:
        return n
    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, a + b
    return b


def factorial(n: int) -> int:
    return math.factorial(max(n, 0))


def square_root_sum(n: int) -> float:
    return math.fsum(math.sqrt(i) for i in range(n * 10_000))


DEMO_FUNCTIONS: dict[str, Callable[[int], Any]] = {
    "fibonacci": fibonacci,
    "fibonacci-iter": fibonacci_iter,
    "factorial": factorial,
    "square-sum": square_root_sum,
}


def evict_first_even(store: MutableMapping[Hashable, CacheEntry[Any]]) -> Hashable | None:
    """Pick the first entry holding an even result, else the oldest entry."""
    for key, entry in store.items():
        if isinstance(entry.value, int) and entry.value % 2 == 0:
            return key
    return next(iter(store), None)
