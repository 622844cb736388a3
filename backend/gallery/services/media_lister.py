"""Media listing pipeline — filter, classify, order, name, cache."""

from __future__ import annotations

import logging
from datetime import datetime

from gallery.config import Settings
from gallery.schemas.media import EPOCH, MediaItem, MediaType, SourceEntry
from gallery.services.media_cache import MediaCache
from gallery.services.sources import CommitDatedSource, MediaSource

logger = logging.getLogger(__name__)


def get_extension(filename: str) -> str | None:
    """Lowercased suffix from the last ``.`` (inclusive), or None."""
    idx = filename.rfind(".")
    if idx == -1:
        return None
    return filename[idx:].lower()


def classify(extension: str, video_extensions: set[str]) -> MediaType:
    # Video is checked first; any other allowed extension is an image
    return "video" if extension in video_extensions else "image"


def display_name(prefix: str, position: int, width: int, extension: str) -> str:
    return f"{prefix}{str(position).zfill(width)}{extension}"


class MediaLister:
    """Produces the ordered media listing, served from a single-slot cache."""

    def __init__(self, source: MediaSource, cache: MediaCache, config: Settings):
        self._source = source
        self._cache = cache
        self._video_exts = set(config.video_extensions)
        self._allowed_exts = config.media_extensions
        self._sort_by = config.sort_by
        self._prefix = config.display_prefix
        self._padding = config.display_padding
        self._date_limit = config.date_fetch_concurrency

        if self._sort_by == "committed" and not isinstance(source, CommitDatedSource):
            raise ValueError("Source does not provide commit dates")

    @property
    def cache(self) -> MediaCache:
        return self._cache

    async def list_media(self) -> tuple[list[MediaItem], bool]:
        """Return ``(items, cache_hit)``.

        Raises MediaListingError subclasses on upstream failure; the cache
        is only written after a complete, successful listing.
        """
        cached = self._cache.get()
        if cached is not None:
            logger.debug("Media cache hit (%d items)", len(cached))
            return cached, True

        items = await self._build()
        self._cache.set(items)
        logger.info("Listed %d media items", len(items))
        return items, False

    async def _build(self) -> list[MediaItem]:
        entries = await self._source.list_entries()

        media: list[tuple[SourceEntry, str]] = []
        for entry in entries:
            ext = get_extension(entry.name)
            if ext is not None and ext in self._allowed_exts:
                media.append((entry, ext))

        dates: list[datetime] | None = None
        if self._sort_by == "committed":
            dates = await self._source.fetch_commit_dates(
                [entry.path for entry, _ in media], limit=self._date_limit
            )
            order = sorted(range(len(media)), key=lambda i: dates[i], reverse=True)
        else:
            order = sorted(range(len(media)), key=lambda i: media[i][0].name, reverse=True)

        items = []
        for position, i in enumerate(order, start=1):
            entry, ext = media[i]
            items.append(
                MediaItem(
                    name=entry.name,
                    display_name=display_name(self._prefix, position, self._padding, ext),
                    src=entry.src,
                    type=classify(ext, self._video_exts),
                    committed_at=dates[i] if dates is not None else None,
                )
            )
        return items
