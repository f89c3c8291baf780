"""In-memory session history of generation results.

The history mirrors the gallery ordering used elsewhere in the app: newest
first.  Unlike a gallery it is bounded and never persisted; once the limit
is reached the oldest result is dropped, and everything is gone when the
process exits.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator

from .settings import GenerationResult


class GenerationHistory:
    """Bounded, most-recent-first list of :class:`GenerationResult`.

    Attributes:
        limit: Maximum number of results retained.
    """

    def __init__(self, limit: int = 8) -> None:
        if limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self.limit = limit
        self._items: deque[GenerationResult] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, result: GenerationResult) -> None:
        """Insert a result at the front, evicting the oldest if full."""
        with self._lock:
            self._items.appendleft(result)

    def get(self, result_id: str) -> GenerationResult | None:
        with self._lock:
            return next((r for r in self._items if r.id == result_id), None)

    def entries(self) -> list[GenerationResult]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[GenerationResult]:
        return iter(self.entries())
