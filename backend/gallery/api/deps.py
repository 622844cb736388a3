"""FastAPI dependency injection — service accessors."""

from __future__ import annotations

from gallery.services import get_media_lister
from gallery.services.media_lister import MediaLister


def get_lister() -> MediaLister:
    """The process-wide media lister (and, through it, the shared cache)."""
    return get_media_lister()
