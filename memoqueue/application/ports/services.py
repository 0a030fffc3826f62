from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.cache_entry import CacheStats
    from ...domain.entities.queue_entry import QueueStats


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_eviction(self, policy: str, keys: list[Hashable]) -> None: ...

    def log_cache_stats(self, name: str, stats: CacheStats) -> None: ...

    def log_queue_stats(self, stats: QueueStats | None) -> None: ...

    def log_final_stats(self) -> None: ...
