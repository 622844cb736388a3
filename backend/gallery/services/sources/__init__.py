"""Media sources — each yields raw candidate entries for the lister."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from gallery.config import Settings
from gallery.schemas.media import SourceEntry

if TYPE_CHECKING:
    import httpx


@runtime_checkable
class MediaSource(Protocol):
    async def list_entries(self) -> list[SourceEntry]: ...


@runtime_checkable
class CommitDatedSource(MediaSource, Protocol):
    """A source that can also report each file's latest commit date."""

    async def fetch_commit_dates(self, paths: list[str], limit: int) -> list[datetime]: ...


def build_source(config: Settings, transport: httpx.AsyncBaseTransport | None = None) -> MediaSource:
    """Create the source selected by ``config.source``."""
    if config.source == "local":
        from gallery.services.sources.local import LocalDirectorySource

        return LocalDirectorySource(config.public_dir, config.gallery_dir)

    from gallery.services.github_client import GitHubClient

    client = GitHubClient(config, transport=transport)
    if config.source == "tree":
        from gallery.services.sources.github import GitHubTreeSource

        return GitHubTreeSource(client, config.gallery_path)

    from gallery.services.sources.github import GitHubContentsSource

    return GitHubContentsSource(client, config.gallery_path)
