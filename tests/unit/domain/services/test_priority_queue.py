"""Unit tests for the bidirectional priority queues.

Every behavioural test runs against both the scanning queue and the variant
that caches the highest-priority index.
"""

from decimal import Decimal
from fractions import Fraction
import math
import random

import pytest

from memoqueue.domain.entities.queue_entry import QueueEntry, Selector, SortKey
from memoqueue.domain.exceptions import (
    InvalidQueueEntryError,
    InvalidSelectorError,
    InvalidSortKeyError,
)
from memoqueue.domain.services.priority_queue import (
    BiDirectionalPriorityQueue,
    IndexedPriorityQueue,
)


@pytest.fixture(params=[BiDirectionalPriorityQueue, IndexedPriorityQueue])
def queue(request):
    """Provide an empty queue of each variant."""
    return request.param()


@pytest.fixture
def task_queue(queue):
    """Queue loaded with the five demo tasks."""
    return (
        queue.enqueue("Task A", 5)
        .enqueue("Task B", 1)
        .enqueue("Task C", 10)
        .enqueue("Task D", 3)
        .enqueue("Task E", 7)
    )


class TestSelection:
    """peek/dequeue along the priority and insertion axes."""

    def test_peek_each_selector(self, task_queue):
        assert task_queue.peek(highest=True) == "Task C"
        assert task_queue.peek(lowest=True) == "Task B"
        assert task_queue.peek(oldest=True) == "Task A"
        assert task_queue.peek(newest=True) == "Task E"
        assert task_queue.size() == 5

    def test_default_selector_is_highest(self, task_queue):
        assert task_queue.peek() == "Task C"
        assert task_queue.dequeue() == "Task C"

    def test_selector_accepts_enum_and_string(self, task_queue):
        assert task_queue.peek(Selector.LOWEST) == "Task B"
        assert task_queue.peek("newest") == "Task E"
        assert task_queue.peek("OLDEST") == "Task A"

    def test_mixed_dequeue_sequence(self, task_queue):
        assert task_queue.dequeue(highest=True) == "Task C"
        assert task_queue.dequeue(lowest=True) == "Task B"
        assert task_queue.size() == 3
        assert task_queue.dequeue(oldest=True) == "Task A"
        assert task_queue.dequeue(newest=True) == "Task E"
        assert task_queue.to_array() == ["Task D"]

    def test_equal_priorities_dequeue_fifo(self, queue):
        queue.enqueue("X", 5).enqueue("Y", 5).enqueue("Z", 5)

        drained = [queue.dequeue(highest=True) for _ in range(3)]

        assert drained == ["X", "Y", "Z"]
        assert queue.is_empty()

    def test_equal_lowest_priorities_dequeue_fifo(self, queue):
        queue.enqueue("X", 1).enqueue("high", 9).enqueue("Y", 1)

        assert queue.dequeue(lowest=True) == "X"
        assert queue.dequeue(lowest=True) == "Y"

    def test_workflow_from_mixed_operations(self, queue):
        queue.enqueue("Email", 2).enqueue("Critical Bug", 10).enqueue(
            "Meeting", 6
        ).enqueue("Code Review", 4)

        assert queue.dequeue(highest=True) == "Critical Bug"
        assert queue.peek(oldest=True) == "Email"
        assert queue.dequeue(lowest=True) == "Email"
        assert queue.to_array() == ["Meeting", "Code Review"]

    def test_empty_queue_returns_none(self, queue):
        for selector in Selector:
            assert queue.peek(selector) is None
            assert queue.dequeue(selector) is None
            assert queue.peek_entry(selector) is None
            assert queue.dequeue_entry(selector) is None

    def test_dequeue_keeps_other_entries_and_sequence_numbers(self, task_queue):
        before = task_queue.to_entries(SortKey.INSERTION_ASC)

        removed = task_queue.dequeue_entry(highest=True)

        after = task_queue.to_entries(SortKey.INSERTION_ASC)
        assert removed == QueueEntry("Task C", 10, 2)
        assert after == [entry for entry in before if entry is not removed]
        assert [e.inserted_at for e in after] == [0, 1, 3, 4]

    def test_peek_entry_reports_priority_and_sequence(self, task_queue):
        entry = task_queue.peek_entry(lowest=True)

        assert entry == QueueEntry(item="Task B", priority=1, inserted_at=1)
        assert task_queue.size() == 5


class TestSelectorValidation:
    """Ambiguous or unknown selectors are rejected."""

    def test_multiple_flags_raise(self, task_queue):
        with pytest.raises(InvalidSelectorError):
            task_queue.peek(highest=True, lowest=True)
        with pytest.raises(InvalidSelectorError):
            task_queue.dequeue(oldest=True, newest=True)
        assert task_queue.size() == 5

    def test_selector_and_flags_together_raise(self, task_queue):
        with pytest.raises(InvalidSelectorError):
            task_queue.peek("highest", lowest=True)

    def test_unknown_selector_raises(self, task_queue):
        with pytest.raises(InvalidSelectorError):
            task_queue.dequeue("middle")
        assert task_queue.size() == 5

    def test_invalid_selector_raises_even_when_empty(self, queue):
        with pytest.raises(InvalidSelectorError):
            queue.peek(highest=True, newest=True)


class TestEnqueueValidation:
    """Invalid entries are rejected without touching the queue."""

    @pytest.mark.parametrize(
        "priority",
        [
            math.nan,
            math.inf,
            -math.inf,
            "5",
            None,
            True,
            3 + 0j,
            Decimal("1.5"),
            10**400,
            -(10**400),
            Fraction(10**400, 3),
        ],
    )
    def test_invalid_priority_rejected(self, queue, priority):
        queue.enqueue("kept", 1)

        with pytest.raises(InvalidQueueEntryError):
            queue.enqueue("bad", priority)

        assert queue.size() == 1
        queue.enqueue("next", 2)
        assert queue.peek_entry(newest=True).inserted_at == 1

    def test_none_item_rejected(self, queue):
        with pytest.raises(InvalidQueueEntryError):
            queue.enqueue(None, 1)
        assert queue.is_empty()
        assert queue.peek() is None

    def test_errors_are_value_errors(self, queue):
        with pytest.raises(ValueError):
            queue.enqueue("x", float("nan"))

    def test_falsy_items_are_allowed(self, queue):
        queue.enqueue(0, 1).enqueue("", 2).enqueue(False, 3)

        assert queue.to_array(SortKey.INSERTION_ASC) == [0, "", False]

    def test_negative_and_fractional_priorities(self, queue):
        queue.enqueue("a", -2.5).enqueue("b", 0).enqueue("c", -10)

        assert queue.peek(highest=True) == "b"
        assert queue.peek(lowest=True) == "c"

    def test_large_int_and_fraction_priorities(self, queue):
        queue.enqueue("huge", 10**300).enqueue("third", Fraction(1, 3)).enqueue(
            "small", -(10**300)
        )

        assert queue.peek(highest=True) == "huge"
        assert queue.peek(lowest=True) == "small"
        assert queue.get_stats().average_priority == pytest.approx(1 / 9)


class TestLifecycle:
    """size, is_empty, clear and iteration."""

    def test_size_and_is_empty(self, queue):
        assert queue.size() == 0
        assert len(queue) == 0
        assert queue.is_empty() is True

        queue.enqueue("a", 1)

        assert queue.size() == 1
        assert len(queue) == 1
        assert queue.is_empty() is False

    def test_enqueue_returns_queue(self, queue):
        assert queue.enqueue("a", 1) is queue

    def test_clear_resets_sequence_counter(self, task_queue):
        assert task_queue.clear() is task_queue
        assert task_queue.is_empty()

        task_queue.enqueue("fresh", 1)

        assert task_queue.peek_entry().inserted_at == 0

    def test_dequeue_does_not_reset_sequence_counter(self, queue):
        queue.enqueue("a", 1).enqueue("b", 2)
        queue.dequeue()
        queue.dequeue()

        queue.enqueue("c", 3)

        assert queue.peek_entry().inserted_at == 2

    def test_iteration_is_insertion_order(self, task_queue):
        assert list(task_queue) == ["Task A", "Task B", "Task C", "Task D", "Task E"]


class TestSnapshots:
    """to_array / to_entries never mutate the queue."""

    def test_sort_orders(self, task_queue):
        assert task_queue.to_array("priority-desc") == [
            "Task C",
            "Task E",
            "Task A",
            "Task D",
            "Task B",
        ]
        assert task_queue.to_array(SortKey.PRIORITY_ASC) == [
            "Task B",
            "Task D",
            "Task A",
            "Task E",
            "Task C",
        ]
        assert task_queue.to_array("insertion-asc") == [
            "Task A",
            "Task B",
            "Task C",
            "Task D",
            "Task E",
        ]
        assert task_queue.to_array("insertion-desc") == [
            "Task E",
            "Task D",
            "Task C",
            "Task B",
            "Task A",
        ]

    def test_default_sort_is_priority_desc(self, task_queue):
        assert task_queue.to_array() == task_queue.to_array(SortKey.PRIORITY_DESC)

    def test_priority_sorts_break_ties_by_insertion(self, queue):
        queue.enqueue("first", 5).enqueue("low", 1).enqueue("second", 5)

        assert queue.to_array("priority-desc") == ["first", "second", "low"]
        assert queue.to_array("priority-asc") == ["low", "first", "second"]

    def test_insertion_round_trip(self, queue):
        rng = random.Random(7)
        items = [f"item-{i}" for i in range(25)]
        for item in items:
            queue.enqueue(item, rng.randint(-5, 5))

        assert queue.to_array("insertion-asc") == items

    def test_snapshot_does_not_mutate(self, task_queue):
        snapshot = task_queue.to_array()
        snapshot.clear()

        assert task_queue.size() == 5
        assert task_queue.peek(oldest=True) == "Task A"

    def test_unknown_sort_key_raises(self, task_queue):
        with pytest.raises(InvalidSortKeyError):
            task_queue.to_array("alphabetical")


class TestStats:
    def test_stats_for_demo_priorities(self, queue):
        for priority in [5, 1, 10, 3, 7]:
            queue.enqueue(f"p{priority}", priority)

        stats = queue.get_stats()

        assert stats.size == 5
        assert stats.highest_priority == 10
        assert stats.lowest_priority == 1
        assert stats.average_priority == pytest.approx(5.2)
        assert stats.oldest_insertion_time == 0
        assert stats.newest_insertion_time == 4

    def test_stats_track_removals(self, task_queue):
        task_queue.dequeue(oldest=True)
        task_queue.dequeue(highest=True)

        stats = task_queue.get_stats()

        assert stats.size == 3
        assert stats.highest_priority == 7
        assert stats.oldest_insertion_time == 1
        assert stats.average_priority == pytest.approx(11 / 3)

    def test_stats_empty_queue_is_none(self, queue):
        assert queue.get_stats() is None


class TestIndexedVariantEquivalence:
    """The cached-index variant behaves exactly like the scanning queue."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_random_operation_sequences_match(self, seed):
        rng = random.Random(seed)
        plain: BiDirectionalPriorityQueue[int] = BiDirectionalPriorityQueue()
        indexed: IndexedPriorityQueue[int] = IndexedPriorityQueue()
        selectors = list(Selector)

        for step in range(300):
            action = rng.random()
            if action < 0.55:
                priority = rng.randint(0, 6)
                plain.enqueue(step, priority)
                indexed.enqueue(step, priority)
            elif action < 0.97:
                selector = rng.choice(selectors)
                assert plain.dequeue_entry(selector) == indexed.dequeue_entry(
                    selector
                )
            else:
                plain.clear()
                indexed.clear()
            assert plain.peek_entry() == indexed.peek_entry()
            assert plain.to_entries() == indexed.to_entries()

    def test_removing_entry_before_cached_index(self):
        queue: IndexedPriorityQueue[str] = IndexedPriorityQueue()
        queue.enqueue("old", 1).enqueue("mid", 2).enqueue("top", 9)

        assert queue.dequeue(oldest=True) == "old"
        assert queue.peek(highest=True) == "top"

    def test_removing_cached_entry_rescans(self):
        queue: IndexedPriorityQueue[str] = IndexedPriorityQueue()
        queue.enqueue("a", 4).enqueue("top", 9).enqueue("b", 4)

        assert queue.dequeue(highest=True) == "top"
        assert queue.peek(highest=True) == "a"

    def test_later_equal_priority_does_not_replace_cached_index(self):
        queue: IndexedPriorityQueue[str] = IndexedPriorityQueue()
        queue.enqueue("first", 5).enqueue("second", 5)

        assert queue.peek(highest=True) == "first"


class TestStatsNearFloatLimits:
    def test_average_of_max_floats_does_not_overflow(self, queue):
        queue.enqueue("a", 1e308).enqueue("b", 1e308)

        stats = queue.get_stats()

        assert stats.average_priority == pytest.approx(1e308)
        assert math.isfinite(stats.average_priority)
