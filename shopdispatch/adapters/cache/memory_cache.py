"""Thread-safe in-memory memo of shortest-path trees.

Entries are never stale on their own: keys embed the graph id and
revision, so a graph change simply stops old keys from being asked for.
Once ``capacity`` entries are held, the oldest one makes room.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class InMemoryCache(Generic[T]):
    """Bounded, lock-guarded memo implementing CachePort.

    Attributes:
        max_size: Entry limit (None = unlimited)
        name: Suffix of the ``cache.<name>`` logger

    Example:
        trees = InMemoryCache[ShortestPathTree](name="runs", max_size=256)
        tree = trees.get_or_compute(key, lambda: engine_run())
    """

    max_size: Optional[int] = None
    name: str = "cache"

    _entries: Dict[str, T] = field(default_factory=dict, repr=False)
    _guard: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def get(self, key: str) -> Optional[T]:
        with self._guard:
            return self._entries.get(key)

    def set(self, key: str, value: T) -> None:
        with self._guard:
            if key not in self._entries:
                self._make_room()
            self._entries[key] = value

    def _make_room(self) -> None:
        if self.max_size is None:
            return
        # dicts keep insertion order, so the first key is the oldest
        while self._entries and len(self._entries) >= self.max_size:
            evicted = next(iter(self._entries))
            self._entries.pop(evicted)
            self._logger.debug("Tree evicted", extra={"key": evicted})

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Return the entry for ``key``, computing and storing it if absent.

        ``compute_fn`` runs outside the lock; two threads missing on the
        same key may both compute it, and the later result wins.
        """
        found = self.get(key)
        if found is not None:
            self._logger.debug("Tree reused", extra={"key": key})
            return found

        self._logger.debug("Tree not memoised yet", extra={"key": key})
        value = compute_fn()
        self.set(key, value)
        return value

    def size(self) -> int:
        with self._guard:
            return len(self._entries)
