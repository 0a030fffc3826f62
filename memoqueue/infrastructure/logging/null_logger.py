from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...domain.entities.cache_entry import CacheStats
    from ...domain.entities.queue_entry import QueueStats


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_eviction(self, policy: str, keys: list[Hashable]) -> None:
        return None

    @override
    def log_cache_stats(self, name: str, stats: CacheStats) -> None:
        return None

    @override
    def log_queue_stats(self, stats: QueueStats | None) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
