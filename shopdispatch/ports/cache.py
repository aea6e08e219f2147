"""Cache port - Injectable memoisation of shortest-path runs.

The dispatch policies ask for the same source vertex many times per
client (the shop policy runs from the client once per shop). Because
the graph is append-only, a tree computed for a given graph, revision
and source stays valid, so the engine can reuse it through this port.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Disabled caching
    """

    def get(self, key: str) -> Optional[T]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if not found.
        """
        ...

    def set(self, key: str, value: T) -> None:
        """Set a value in the cache."""
        ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        If ``compute_fn`` raises, nothing is stored and the exception
        propagates to the caller.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...
