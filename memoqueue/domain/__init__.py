"""Domain layer for memoqueue.

This layer contains the cache and queue entities, the eviction rules and the
priority queue itself. It is independent of logging and CLI infrastructure.
"""
