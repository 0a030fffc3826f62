"""Eviction policies for the memoizing cache.

A policy is one of four frozen variants. String tags are only accepted at the
API boundary and converted with :func:`parse_policy`.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, MutableMapping
from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from typing import Any

from ..exceptions import CacheConfigurationError
from .cache_entry import CacheEntry

CustomEvictor = Callable[[MutableMapping[Hashable, CacheEntry[Any]]], Hashable | None]


class PolicyName(StrEnum):
    LRU = "LRU"
    LFU = "LFU"
    TIME = "TIME"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True, slots=True)
class LRU:
    @property
    def name(self) -> PolicyName:
        return PolicyName.LRU


@dataclass(frozen=True, slots=True)
class LFU:
    @property
    def name(self) -> PolicyName:
        return PolicyName.LFU


@dataclass(frozen=True, slots=True)
class TimeBased:
    max_age: timedelta

    def __post_init__(self) -> None:
        if self.max_age <= timedelta(0):
            raise CacheConfigurationError(
                f"max_age must be positive, got {self.max_age}"
            )

    @property
    def name(self) -> PolicyName:
        return PolicyName.TIME

    @property
    def max_age_seconds(self) -> float:
        return self.max_age.total_seconds()


@dataclass(frozen=True, slots=True)
class Custom:
    evict: CustomEvictor

    def __post_init__(self) -> None:
        if not callable(self.evict):
            raise CacheConfigurationError(
                f"custom evictor must be callable, got {type(self.evict).__name__}"
            )

    @property
    def name(self) -> PolicyName:
        return PolicyName.CUSTOM


EvictionPolicy = LRU | LFU | TimeBased | Custom


def parse_policy(
    policy: EvictionPolicy | str,
    *,
    max_age: timedelta | None = None,
    custom_evict: CustomEvictor | None = None,
) -> EvictionPolicy:
    """Resolve a policy tag (or variant) plus loose options into a variant.

    Raises:
        CacheConfigurationError: If the tag is unknown, TIME has no ``max_age``
            or CUSTOM has no evictor.
    """
    if isinstance(policy, (LRU, LFU, TimeBased, Custom)):
        return policy
    try:
        name = PolicyName(str(policy).strip().upper())
    except ValueError as exc:
        allowed = ", ".join(p.value for p in PolicyName)
        raise CacheConfigurationError(
            f"Unknown eviction policy {policy!r}; expected one of {allowed}"
        ) from exc
    match name:
        case PolicyName.LRU:
            return LRU()
        case PolicyName.LFU:
            return LFU()
        case PolicyName.TIME:
            if max_age is None:
                raise CacheConfigurationError("TIME eviction policy requires max_age")
            return TimeBased(max_age)
        case PolicyName.CUSTOM:
            if custom_evict is None:
                raise CacheConfigurationError(
                    "CUSTOM eviction policy requires custom_evict"
                )
            return Custom(custom_evict)
