from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...domain.entities.cache_entry import CacheStats
    from ...domain.entities.queue_entry import QueueStats


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    function_name: str = ""


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "evictions": 0,
            "caches_reported": 0,
            "queues_reported": 0,
            "warnings": 0,
            "errors": 0,
        }

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def _get_prefix(self) -> str:
        if self._context is None or not self._context.function_name:
            return ""
        return escape(f"[{self._context.function_name}] ")

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_eviction(self, policy: str, keys: list[Hashable]) -> None:
        self._stats["evictions"] += len(keys)
        noun = "entry" if len(keys) == 1 else "entries"
        self.verbose(f"  {policy} evicted {len(keys)} {noun}")
        for key in keys:
            self.debug(f"    - {escape(repr(key))}")

    @override
    def log_cache_stats(self, name: str, stats: CacheStats) -> None:
        self._stats["caches_reported"] += 1
        bound = "unbounded" if stats.max_size is None else str(stats.max_size)
        self.console.print(
            f"[bold]{escape(name)}[/bold] cache ({stats.policy}, max {bound}): "
            f"{stats.hits} hits, {stats.misses} misses, {stats.size} entries"
        )
        self.verbose(f"  Hit ratio: {stats.hit_ratio:.1%}")
        self.verbose(f"  Evictions: {stats.evictions}")

    @override
    def log_queue_stats(self, stats: QueueStats | None) -> None:
        self._stats["queues_reported"] += 1
        if stats is None:
            self.console.print("[bold]Queue[/bold] is empty")
            return
        self.console.print(
            f"[bold]Queue[/bold]: {stats.size} items, priorities "
            f"{stats.lowest_priority:g}..{stats.highest_priority:g}"
        )
        self.verbose(f"  Average priority: {stats.average_priority:g}")
        self.debug(
            f"  Insertion range: {stats.oldest_insertion_time}..{stats.newest_insertion_time}"
        )

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Run Statistics:[/dim]")
            self.console.print(f"[dim]  Evictions: {self._stats['evictions']}[/dim]")
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()
