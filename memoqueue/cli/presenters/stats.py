from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from ...domain.entities.cache_entry import CacheStats
    from ...domain.entities.queue_entry import QueueEntry, QueueStats


@dataclass(frozen=True, slots=True)
class CallRow:
    argument: int
    result: object
    elapsed_ms: float
    cached: bool


class CacheStatsPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, function_name: str, rows: Sequence[CallRow], stats: CacheStats) -> None:
        self.console.print()
        self.console.print(self._build_calls_table(function_name, rows))
        self.console.print()
        self.console.print(self._build_stats_table(stats))

    def _build_calls_table(self, function_name: str, rows: Sequence[CallRow]) -> Table:
        table = Table(
            title=f"Calls to {function_name}",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
        )
        table.add_column("Input", justify="right", style="cyan", no_wrap=True)
        table.add_column("Result", overflow="fold")
        table.add_column("Time (ms)", justify="right", style="yellow")
        table.add_column("Cache", justify="center")
        for row in rows:
            table.add_row(
                str(row.argument),
                escape(str(row.result)),
                f"{row.elapsed_ms:.3f}",
                "[green]hit[/green]" if row.cached else "[dim]miss[/dim]",
            )
        return table

    def _build_stats_table(self, stats: CacheStats) -> Table:
        table = Table(title="Cache Statistics", show_header=False, border_style="bright_blue")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Policy", stats.policy)
        table.add_row("Max size", "unbounded" if stats.max_size is None else str(stats.max_size))
        table.add_row("Entries", str(stats.size))
        table.add_row("Hits", str(stats.hits))
        table.add_row("Misses", str(stats.misses))
        table.add_row("Evictions", str(stats.evictions))
        table.add_row("Hit ratio", f"{stats.hit_ratio:.1%}")
        return table


class QueuePresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(
        self,
        taken: Sequence[tuple[str, QueueEntry[str] | None]],
        remaining: Sequence[QueueEntry[str]],
        stats: QueueStats | None,
        *,
        sort_key: str,
    ) -> None:
        if taken:
            self.console.print()
            self.console.print(self._build_taken_table(taken))
        self.console.print()
        self.console.print(self._build_entries_table(remaining, sort_key=sort_key))
        if stats is not None:
            self.console.print()
            self.console.print(self._build_stats_table(stats))

    def _build_taken_table(self, taken: Sequence[tuple[str, QueueEntry[str] | None]]) -> Table:
        table = Table(title="Dequeued", header_style="bold cyan", border_style="bright_blue")
        table.add_column("Selector", style="cyan")
        table.add_column("Item")
        table.add_column("Priority", justify="right", style="yellow")
        for selector, entry in taken:
            if entry is None:
                table.add_row(selector, "[dim]-[/dim]", "")
            else:
                table.add_row(selector, escape(entry.item), f"{entry.priority:g}")
        return table

    def _build_entries_table(self, entries: Sequence[QueueEntry[str]], *, sort_key: str) -> Table:
        table = Table(
            title=f"Queue ({sort_key})",
            header_style="bold cyan",
            border_style="bright_blue",
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Item")
        table.add_column("Priority", justify="right", style="yellow")
        for entry in entries:
            table.add_row(str(entry.inserted_at), escape(entry.item), f"{entry.priority:g}")
        return table

    def _build_stats_table(self, stats: QueueStats) -> Table:
        table = Table(title="Queue Statistics", show_header=False, border_style="bright_blue")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Size", str(stats.size))
        table.add_row("Highest priority", f"{stats.highest_priority:g}")
        table.add_row("Lowest priority", f"{stats.lowest_priority:g}")
        table.add_row("Average priority", f"{stats.average_priority:g}")
        table.add_row(
            "Insertion range",
            f"{stats.oldest_insertion_time}..{stats.newest_insertion_time}",
        )
        return table
