from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..exceptions import InvalidSelectorError, InvalidSortKeyError


@dataclass(frozen=True, slots=True)
class QueueEntry[T]:
    item: T
    priority: float
    inserted_at: int


@dataclass(frozen=True, slots=True)
class QueueStats:
    size: int
    highest_priority: float
    lowest_priority: float
    oldest_insertion_time: int
    newest_insertion_time: int
    average_priority: float


class Selector(StrEnum):
    HIGHEST = "highest"
    LOWEST = "lowest"
    OLDEST = "oldest"
    NEWEST = "newest"

    @classmethod
    def parse(cls, value: Selector | str) -> Selector:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidSelectorError(
                f"Unknown selector {value!r}; expected one of {allowed}"
            ) from exc

    @classmethod
    def from_flags(
        cls,
        *,
        highest: bool = False,
        lowest: bool = False,
        oldest: bool = False,
        newest: bool = False,
    ) -> Selector:
        """Build a selector from one-hot flags; exactly one must be set."""
        flags = {
            cls.HIGHEST: highest,
            cls.LOWEST: lowest,
            cls.OLDEST: oldest,
            cls.NEWEST: newest,
        }
        active = [selector for selector, enabled in flags.items() if enabled]
        if len(active) != 1:
            raise InvalidSelectorError(
                f"Exactly one selection mode must be active, got {len(active)}"
            )
        return active[0]


class SortKey(StrEnum):
    PRIORITY_DESC = "priority-desc"
    PRIORITY_ASC = "priority-asc"
    INSERTION_ASC = "insertion-asc"
    INSERTION_DESC = "insertion-desc"

    @classmethod
    def parse(cls, value: SortKey | str) -> SortKey:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(k.value for k in cls)
            raise InvalidSortKeyError(
                f"Unknown sort key {value!r}; expected one of {allowed}"
            ) from exc
