from dataclasses import dataclass


@dataclass(slots=True)
class CacheEntry[T]:
    value: T
    timestamp: float
    hits: int = 1

    def age(self, now: float) -> float:
        return now - self.timestamp

    def is_expired(self, now: float, max_age: float | None) -> bool:
        if max_age is None:
            return False
        return self.age(now) > max_age


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    evictions: int
    size: int
    max_size: int | None
    policy: str

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total
