"""Single-slot TTL cache for the computed media listing."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from gallery.schemas.media import MediaItem

logger = logging.getLogger(__name__)


class MediaCache:
    """Holds the last successful listing and the time it was computed.

    One slot, not keyed. Concurrent writers are last-write-wins.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._items: list[MediaItem] | None = None
        self._cached_at: float | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def cached_at(self) -> float | None:
        return self._cached_at

    @property
    def is_empty(self) -> bool:
        return self._items is None

    def is_expired(self) -> bool:
        """True when nothing is cached or the entry is at least TTL old."""
        if self._items is None or self._cached_at is None:
            return True
        return self._clock() - self._cached_at >= self._ttl

    def get(self) -> list[MediaItem] | None:
        """Return the cached listing, or None if empty or expired."""
        if self.is_expired():
            return None
        return list(self._items)

    def set(self, items: list[MediaItem]) -> None:
        self._items = list(items)
        self._cached_at = self._clock()
        logger.debug("Media cache refreshed with %d items", len(items))
