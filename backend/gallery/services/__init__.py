"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gallery.config import settings

if TYPE_CHECKING:
    from gallery.services.media_lister import MediaLister

logger = logging.getLogger(__name__)

_media_lister: MediaLister | None = None


def init_services() -> None:
    """Create the process-wide lister and the cache slot it owns."""
    global _media_lister

    from gallery.services.media_cache import MediaCache
    from gallery.services.media_lister import MediaLister
    from gallery.services.sources import build_source

    if settings.source != "local" and not settings.github_token:
        if settings.require_token:
            logger.error("GITHUB_TOKEN not set and require_token is enabled — listings will fail")
        else:
            logger.warning("GITHUB_TOKEN not set — using unauthenticated GitHub API (60 req/h)")

    cache = MediaCache(ttl_seconds=settings.cache_ttl_seconds)
    _media_lister = MediaLister(build_source(settings), cache, settings)
    logger.info(
        "Media lister initialized (source=%s, sort_by=%s, ttl=%ss)",
        settings.source, settings.sort_by, settings.cache_ttl_seconds,
    )


def shutdown_services() -> None:
    global _media_lister
    _media_lister = None


def get_media_lister() -> MediaLister:
    if _media_lister is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _media_lister
