from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults, EnvVars
from .domain.entities.eviction_policy import PolicyName
from .domain.entities.queue_entry import SortKey


@dataclass(frozen=True, slots=True)
class MemoQueueConfig:
    cache_max_size: int | None = None
    eviction_policy: str = Defaults.EVICTION_POLICY
    max_age_ms: int | None = None
    queue_sort: str = Defaults.QUEUE_SORT
    verbosity: int = Defaults.VERBOSITY

    def __post_init__(self) -> None:
        if self.cache_max_size is not None and self.cache_max_size < 1:
            raise ValueError(
                f"cache_max_size must be positive, got {self.cache_max_size}"
            )
        if self.eviction_policy.upper() not in {p.value for p in PolicyName}:
            raise ValueError(f"Unknown eviction_policy {self.eviction_policy!r}")
        if self.max_age_ms is not None and self.max_age_ms <= 0:
            raise ValueError(f"max_age_ms must be positive, got {self.max_age_ms}")
        if self.queue_sort.lower() not in {k.value for k in SortKey}:
            raise ValueError(f"Unknown queue_sort {self.queue_sort!r}")
        if self.verbosity < 0:
            raise ValueError(f"verbosity must not be negative, got {self.verbosity}")

    @classmethod
    def from_env(cls) -> MemoQueueConfig:
        return cls(
            cache_max_size=_optional_int(os.getenv(EnvVars.MAX_SIZE)),
            eviction_policy=os.getenv(
                EnvVars.EVICTION_POLICY, Defaults.EVICTION_POLICY
            ).strip(),
            max_age_ms=_optional_int(os.getenv(EnvVars.MAX_AGE_MS)),
            queue_sort=os.getenv(EnvVars.QUEUE_SORT, Defaults.QUEUE_SORT).strip(),
            verbosity=int(os.getenv(EnvVars.VERBOSITY, str(Defaults.VERBOSITY))),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> MemoQueueConfig:
        config = MemoQueueConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: MemoQueueConfig
    ) -> MemoQueueConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        cache_section = _get_table(data, "cache")
        queue_section = _get_table(data, "queue")
        cache_max_size = base_config.cache_max_size
        if (value := cache_section.get("max_size")) is not None:
            cache_max_size = _coerce_int(value, key="cache.max_size")
        eviction_policy = base_config.eviction_policy
        if (value := cache_section.get("eviction_policy")) is not None:
            eviction_policy = str(value).strip()
        max_age_ms = base_config.max_age_ms
        if (value := cache_section.get("max_age_ms")) is not None:
            max_age_ms = _coerce_int(value, key="cache.max_age_ms")
        queue_sort = base_config.queue_sort
        if (value := queue_section.get("sort")) is not None:
            queue_sort = str(value).strip()
        verbosity = base_config.verbosity
        if (value := data.get("verbosity")) is not None:
            verbosity = _coerce_int(value, key="verbosity")
        return MemoQueueConfig(
            cache_max_size=cache_max_size,
            eviction_policy=eviction_policy,
            max_age_ms=max_age_ms,
            queue_sort=queue_sort,
            verbosity=verbosity,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")
