"""Local directory media source."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from gallery.schemas.media import SourceEntry
from gallery.services.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


class LocalDirectorySource:
    """Regular files below ``public_dir / gallery_dir``, served from ``/``."""

    def __init__(self, public_dir: str | Path, gallery_dir: str):
        self._public_dir = Path(public_dir)
        self._root = self._public_dir / gallery_dir

    def _walk(self) -> list[SourceEntry]:
        if not self._root.is_dir():
            raise UpstreamFetchError(404, f"Gallery directory not found: {self._root}")

        entries = []
        for file_path in sorted(self._root.rglob("*")):
            if not file_path.is_file():
                continue
            rel = file_path.relative_to(self._public_dir).as_posix()
            entries.append(SourceEntry(name=file_path.name, path=rel, src=f"/{rel}"))
        logger.debug("Walked %s: %d files", self._root, len(entries))
        return entries

    async def list_entries(self) -> list[SourceEntry]:
        return await asyncio.to_thread(self._walk)
