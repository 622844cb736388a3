"""GitHub-backed media sources."""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePosixPath
from typing import Any

from gallery.schemas.media import SourceEntry
from gallery.services.github_client import GitHubClient


class _GitHubSource:
    def __init__(self, client: GitHubClient, gallery_path: str):
        self._client = client
        self._gallery_path = gallery_path.strip("/")

    async def fetch_commit_dates(self, paths: list[str], limit: int) -> list[datetime]:
        return await self._client.fetch_commit_dates(paths, limit=limit)


class GitHubContentsSource(_GitHubSource):
    """Files directly inside the gallery directory (contents API)."""

    def _entry(self, item: dict[str, Any]) -> SourceEntry:
        name = item["name"]
        path = item.get("path")
        if not isinstance(path, str) or not path:
            path = f"{self._gallery_path}/{name}"
        src = item.get("download_url")
        if not isinstance(src, str) or not src:
            src = self._client.raw_url(path)
        return SourceEntry(name=name, path=path, src=src)

    async def list_entries(self) -> list[SourceEntry]:
        items = await self._client.list_contents(self._gallery_path)
        return [self._entry(item) for item in items if item.get("type") == "file"]


class GitHubTreeSource(_GitHubSource):
    """All blobs below the gallery prefix (recursive tree API)."""

    async def list_entries(self) -> list[SourceEntry]:
        prefix = f"{self._gallery_path}/" if self._gallery_path else ""
        entries = []
        for item in await self._client.get_tree():
            path = item["path"]
            if item.get("type") != "blob" or not path.startswith(prefix):
                continue
            entries.append(
                SourceEntry(
                    name=PurePosixPath(path).name,
                    path=path,
                    src=self._client.raw_url(path),
                )
            )
        return entries
