class Defaults:
    EVICTION_POLICY = "LRU"
    QUEUE_SORT = "priority-desc"
    VERBOSITY = 0
    CONFIG_FILE = "memoqueue.toml"


class EnvVars:
    MAX_SIZE = "MEMOQUEUE_MAX_SIZE"
    EVICTION_POLICY = "MEMOQUEUE_EVICTION_POLICY"
    MAX_AGE_MS = "MEMOQUEUE_MAX_AGE_MS"
    QUEUE_SORT = "MEMOQUEUE_QUEUE_SORT"
    VERBOSITY = "MEMOQUEUE_VERBOSITY"

    ALL = (MAX_SIZE, EVICTION_POLICY, MAX_AGE_MS, QUEUE_SORT, VERBOSITY)
