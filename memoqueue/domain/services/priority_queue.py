"""Bidirectional priority queue.

Entries live in an unsorted list in enqueue order. Every ``peek``/``dequeue``
runs a linear scan for the extreme entry along the priority axis or the
insertion axis, so enqueue is O(1) and selection is O(n). Among equal
priorities the earliest enqueued entry wins.

``IndexedPriorityQueue`` additionally tracks the index of the current
highest-priority entry so the default selector avoids the scan.
"""

from __future__ import annotations

from collections.abc import Iterator
import math
from numbers import Real
from typing import Self

from ..entities.queue_entry import QueueEntry, QueueStats, Selector, SortKey
from ..exceptions import InvalidQueueEntryError, InvalidSelectorError

_NOT_FOUND = -1


class BiDirectionalPriorityQueue[T]:
    def __init__(self) -> None:
        super().__init__()
        self._entries: list[QueueEntry[T]] = []
        self._counter = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return (entry.item for entry in self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_entries(SortKey.INSERTION_ASC)!r})"

    def enqueue(self, item: T, priority: float) -> Self:
        """Append ``item`` with ``priority`` and return the queue for chaining.

        Raises:
            InvalidQueueEntryError: If ``item`` is None or ``priority`` is not a
                finite ``numbers.Real`` that converts to a float. ``bool`` and
                ``Decimal`` priorities are rejected. The queue is left untouched.
        """
        _validate_entry(item, priority)
        entry = QueueEntry(item=item, priority=priority, inserted_at=self._counter)
        self._counter += 1
        self._entries.append(entry)
        self._on_append(len(self._entries) - 1)
        return self

    def peek(
        self,
        selector: Selector | str | None = None,
        *,
        highest: bool = False,
        lowest: bool = False,
        oldest: bool = False,
        newest: bool = False,
    ) -> T | None:
        entry = self.peek_entry(
            selector, highest=highest, lowest=lowest, oldest=oldest, newest=newest
        )
        return None if entry is None else entry.item

    def dequeue(
        self,
        selector: Selector | str | None = None,
        *,
        highest: bool = False,
        lowest: bool = False,
        oldest: bool = False,
        newest: bool = False,
    ) -> T | None:
        entry = self.dequeue_entry(
            selector, highest=highest, lowest=lowest, oldest=oldest, newest=newest
        )
        return None if entry is None else entry.item

    def peek_entry(
        self,
        selector: Selector | str | None = None,
        *,
        highest: bool = False,
        lowest: bool = False,
        oldest: bool = False,
        newest: bool = False,
    ) -> QueueEntry[T] | None:
        resolved = _resolve_selector(selector, highest, lowest, oldest, newest)
        index = self._find_index(resolved)
        if index == _NOT_FOUND:
            return None
        return self._entries[index]

    def dequeue_entry(
        self,
        selector: Selector | str | None = None,
        *,
        highest: bool = False,
        lowest: bool = False,
        oldest: bool = False,
        newest: bool = False,
    ) -> QueueEntry[T] | None:
        resolved = _resolve_selector(selector, highest, lowest, oldest, newest)
        index = self._find_index(resolved)
        if index == _NOT_FOUND:
            return None
        entry = self._entries.pop(index)
        self._on_remove(index)
        return entry

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> Self:
        self._entries = []
        self._counter = 0
        self._on_clear()
        return self

    def to_array(self, sort_key: SortKey | str = SortKey.PRIORITY_DESC) -> list[T]:
        return [entry.item for entry in self.to_entries(sort_key)]

    def to_entries(
        self, sort_key: SortKey | str = SortKey.PRIORITY_DESC
    ) -> list[QueueEntry[T]]:
        """Return a sorted snapshot; priority orders break ties by insertion."""
        key = SortKey.parse(sort_key)
        entries = list(self._entries)
        match key:
            case SortKey.PRIORITY_DESC:
                entries.sort(key=lambda e: (-e.priority, e.inserted_at))
            case SortKey.PRIORITY_ASC:
                entries.sort(key=lambda e: (e.priority, e.inserted_at))
            case SortKey.INSERTION_ASC:
                entries.sort(key=lambda e: e.inserted_at)
            case SortKey.INSERTION_DESC:
                entries.sort(key=lambda e: e.inserted_at, reverse=True)
        return entries

    def get_stats(self) -> QueueStats | None:
        if not self._entries:
            return None
        priorities = [entry.priority for entry in self._entries]
        insertion_times = [entry.inserted_at for entry in self._entries]
        return QueueStats(
            size=len(self._entries),
            highest_priority=max(priorities),
            lowest_priority=min(priorities),
            oldest_insertion_time=min(insertion_times),
            newest_insertion_time=max(insertion_times),
            average_priority=math.fsum(p / len(priorities) for p in priorities),
        )

    def _find_index(self, selector: Selector) -> int:
        match selector:
            case Selector.HIGHEST:
                return self._scan_highest()
            case Selector.LOWEST:
                return self._scan_lowest()
            case Selector.OLDEST:
                return self._scan_insertion(oldest=True)
            case Selector.NEWEST:
                return self._scan_insertion(oldest=False)

    def _scan_highest(self) -> int:
        if not self._entries:
            return _NOT_FOUND
        best = 0
        for index in range(1, len(self._entries)):
            current, top = self._entries[index], self._entries[best]
            if current.priority > top.priority or (
                current.priority == top.priority and current.inserted_at < top.inserted_at
            ):
                best = index
        return best

    def _scan_lowest(self) -> int:
        if not self._entries:
            return _NOT_FOUND
        best = 0
        for index in range(1, len(self._entries)):
            current, bottom = self._entries[index], self._entries[best]
            if current.priority < bottom.priority or (
                current.priority == bottom.priority
                and current.inserted_at < bottom.inserted_at
            ):
                best = index
        return best

    def _scan_insertion(self, *, oldest: bool) -> int:
        if not self._entries:
            return _NOT_FOUND
        best = 0
        for index in range(1, len(self._entries)):
            inserted_at = self._entries[index].inserted_at
            if oldest:
                better = inserted_at < self._entries[best].inserted_at
            else:
                better = inserted_at > self._entries[best].inserted_at
            if better:
                best = index
        return best

    def _on_append(self, index: int) -> None:
        return

    def _on_remove(self, index: int) -> None:
        return

    def _on_clear(self) -> None:
        return


class IndexedPriorityQueue[T](BiDirectionalPriorityQueue[T]):
    """Priority queue that caches the index of its highest-priority entry.

    Enqueue compares the new entry with the cached one in O(1). Removing any
    other index only shifts the cached position; removing the cached entry
    itself triggers a full rescan.
    """

    def __init__(self) -> None:
        super().__init__()
        self._highest_index = _NOT_FOUND

    def _find_index(self, selector: Selector) -> int:
        if selector is Selector.HIGHEST:
            return self._highest_index
        return super()._find_index(selector)

    def _on_append(self, index: int) -> None:
        # A later insertion only wins on a strictly greater priority.
        if (
            self._highest_index == _NOT_FOUND
            or self._entries[index].priority
            > self._entries[self._highest_index].priority
        ):
            self._highest_index = index

    def _on_remove(self, index: int) -> None:
        if index == self._highest_index:
            self._highest_index = self._scan_highest()
        elif index < self._highest_index:
            self._highest_index -= 1

    def _on_clear(self) -> None:
        self._highest_index = _NOT_FOUND


def _resolve_selector(
    selector: Selector | str | None,
    highest: bool,
    lowest: bool,
    oldest: bool,
    newest: bool,
) -> Selector:
    flagged = highest or lowest or oldest or newest
    if selector is not None:
        if flagged:
            raise InvalidSelectorError(
                "Pass either a selector or selection flags, not both"
            )
        return Selector.parse(selector)
    if not flagged:
        return Selector.HIGHEST
    return Selector.from_flags(
        highest=highest, lowest=lowest, oldest=oldest, newest=newest
    )


def _validate_entry(item: object, priority: object) -> None:
    if item is None:
        raise InvalidQueueEntryError("Item cannot be None")
    if isinstance(priority, bool) or not isinstance(priority, Real):
        raise InvalidQueueEntryError(
            "Priority must be a real number (int, float or Fraction), "
            f"got {type(priority).__name__}"
        )
    try:
        finite = math.isfinite(priority)
    except OverflowError as exc:
        raise InvalidQueueEntryError(
            f"Priority of type {type(priority).__name__} is too large for a float"
        ) from exc
    if not finite:
        raise InvalidQueueEntryError(
            f"Priority must be a finite number, got {priority!r}"
        )
