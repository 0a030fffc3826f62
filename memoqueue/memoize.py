"""Memoizing function wrapper with pluggable eviction.

This module provides:
- MemoizeOptions: validated options (size bound, policy, max age, evictor)
- MemoizedFunction: the callable wrapper holding the cache and its statistics
- memoize: decorator / factory building a MemoizedFunction
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from datetime import timedelta
import functools
import time
import types
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .domain.entities.cache_entry import CacheEntry, CacheStats
from .domain.entities.eviction_policy import (
    LRU,
    Custom,
    EvictionPolicy,
    PolicyName,
    TimeBased,
    parse_policy,
)
from .domain.exceptions import CacheConfigurationError
from .domain.services.eviction import evict
from .domain.services.keys import make_key
from .infrastructure.caching.memory_cache import MemoryCache
from .infrastructure.logging.null_logger import NullLogger

if TYPE_CHECKING:
    from .application.ports.services import LoggerPort
    from .config import MemoQueueConfig

KeyFunction = Callable[[tuple[Any, ...], Mapping[str, Any]], Hashable]


class MemoizeOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    max_size: int | None = Field(default=None, ge=1)
    eviction_policy: PolicyName = PolicyName.LRU
    max_age: timedelta | None = None
    custom_evict: Callable[..., Any] | None = None

    @field_validator("eviction_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _check_policy_requirements(self) -> MemoizeOptions:
        if self.max_age is not None and self.max_age <= timedelta(0):
            raise ValueError(f"max_age must be positive, got {self.max_age}")
        # Surfaces a missing max_age / evictor at construction time.
        self.resolve_policy()
        return self

    def resolve_policy(self) -> EvictionPolicy:
        return parse_policy(
            self.eviction_policy,
            max_age=self.max_age,
            custom_evict=self.custom_evict,
        )

    @classmethod
    def build(
        cls,
        *,
        max_size: int | None = None,
        eviction_policy: EvictionPolicy | str = PolicyName.LRU,
        max_age: timedelta | float | None = None,
        custom_evict: Callable[..., Any] | None = None,
    ) -> MemoizeOptions:
        """Validate loose options, raising CacheConfigurationError on failure."""
        match eviction_policy:
            case TimeBased(max_age=policy_age):
                max_age = policy_age if max_age is None else max_age
            case Custom(evict=evictor):
                custom_evict = evictor if custom_evict is None else custom_evict
        if not isinstance(eviction_policy, str):
            eviction_policy = eviction_policy.name
        try:
            return cls(
                max_size=max_size,
                eviction_policy=eviction_policy,
                max_age=max_age,
                custom_evict=custom_evict,
            )
        except ValidationError as exc:
            raise CacheConfigurationError(
                f"Invalid memoize options: {_describe(exc)}"
            ) from exc

    @classmethod
    def from_config(
        cls,
        config: MemoQueueConfig,
        *,
        custom_evict: Callable[..., Any] | None = None,
    ) -> MemoizeOptions:
        max_age = None
        if config.max_age_ms is not None:
            max_age = timedelta(milliseconds=config.max_age_ms)
        return cls.build(
            max_size=config.cache_max_size,
            eviction_policy=config.eviction_policy,
            max_age=max_age,
            custom_evict=custom_evict,
        )


class MemoizedFunction[**P, R]:
    """Callable wrapper caching results of ``fn`` by canonical argument key.

    Exceptions raised by ``fn`` propagate unchanged and nothing is cached for
    that call.
    """

    def __init__(
        self,
        fn: Callable[P, R],
        options: MemoizeOptions,
        *,
        key: KeyFunction | None = None,
        logger: LoggerPort | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        functools.update_wrapper(self, fn)
        self._fn = fn
        self.options = options
        self.policy = options.resolve_policy()
        self._make_key = key or make_key
        self._logger = logger or NullLogger()
        self._store: MemoryCache[R] = MemoryCache(clock=clock)
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        key = self._make_key(args, kwargs)
        now = self._store.now()
        entry = self._store.get(key)
        if entry is not None:
            if self._is_stale(entry, now):
                del self._store[key]
                self._logger.debug(f"Expired {key!r}")
            else:
                entry.hits += 1
                if isinstance(self.policy, LRU):
                    self._store.touch(key)
                self._hits += 1
                self._logger.debug(f"Hit {key!r} (hits={entry.hits})")
                return entry.value

        self._misses += 1
        self._logger.debug(f"Miss {key!r}")
        result = self._fn(*args, **kwargs)

        max_size = self.options.max_size
        if max_size is not None and len(self._store) >= max_size:
            evicted = evict(self._store, self.policy, now=now, max_size=max_size)
            self._evictions += len(evicted)
            self._logger.log_eviction(self.policy.name, evicted)

        self._store.set(key, result, timestamp=now)
        return result

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __repr__(self) -> str:
        return f"<memoized {getattr(self._fn, '__qualname__', self._fn)!r} policy={self.policy.name}>"

    @property
    def cache(self) -> dict[Hashable, CacheEntry[R]]:
        """Snapshot of the cached entries in ledger order."""
        return self._store.snapshot()

    def access_counts(self) -> dict[Hashable, int]:
        return {key: entry.hits for key, entry in self._store.items()}

    def cache_info(self) -> CacheStats:
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            size=len(self._store),
            max_size=self.options.max_size,
            policy=self.policy.name.value,
        )

    def cache_clear(self) -> None:
        self._store.clear()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _is_stale(self, entry: CacheEntry[R], now: float) -> bool:
        if not isinstance(self.policy, TimeBased):
            return False
        return entry.is_expired(now, self.policy.max_age_seconds)


def memoize(
    fn: Callable[..., Any] | None = None,
    /,
    *,
    max_size: int | None = None,
    eviction_policy: EvictionPolicy | str = PolicyName.LRU,
    max_age: timedelta | float | None = None,
    custom_evict: Callable[..., Any] | None = None,
    key: KeyFunction | None = None,
    logger: LoggerPort | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> Any:
    """Wrap ``fn`` in a result cache.

    Usable directly (``memoize(fn, max_size=2)``) or as a decorator with or
    without arguments. Options are validated before anything is wrapped.

    Args:
        fn: Function to wrap. Omit to get a decorator.
        max_size: Entry bound checked before each insertion; None is unbounded.
        eviction_policy: ``"LRU"``, ``"LFU"``, ``"TIME"``, ``"CUSTOM"`` or a
            policy variant.
        max_age: Entry lifetime for TIME, as a timedelta or seconds.
        custom_evict: Evictor for CUSTOM. Receives the live store and either
            deletes entries itself or returns the key to delete.
        key: Replacement for the canonical argument key builder.
        logger: Receives eviction and hit/miss traces.
        clock: Monotonic time source in seconds.

    Raises:
        CacheConfigurationError: If the options are inconsistent.
    """
    options = MemoizeOptions.build(
        max_size=max_size,
        eviction_policy=eviction_policy,
        max_age=max_age,
        custom_evict=custom_evict,
    )

    def decorate(func: Callable[..., Any]) -> MemoizedFunction[..., Any]:
        return MemoizedFunction(func, options, key=key, logger=logger, clock=clock)

    if fn is None:
        return decorate
    return decorate(fn)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
