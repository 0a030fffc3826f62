class MemoQueueError(Exception):
    pass


class CacheError(MemoQueueError):
    pass


class CacheConfigurationError(CacheError, ValueError):
    """Raised when memoize options are inconsistent (e.g. CUSTOM without an evictor)."""


class CacheEvictionError(CacheError):
    """Raised when a custom evictor leaves a full cache unchanged."""


class UnhashableArgumentError(CacheError, TypeError):
    pass


class QueueError(MemoQueueError):
    pass


class InvalidQueueEntryError(QueueError, ValueError):
    pass


class InvalidSelectorError(QueueError, ValueError):
    pass


class InvalidSortKeyError(QueueError, ValueError):
    pass
