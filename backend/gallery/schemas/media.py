"""Media listing schemas."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MediaType = Literal["image", "video"]


@dataclass
class SourceEntry:
    """Raw candidate file as returned by a media source."""
    name: str  # leaf filename
    path: str  # path within the source, forward slashes
    src: str  # fetchable URL or public path


class MediaItem(BaseModel):
    """A single listed image or video."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    display_name: str = Field(alias="displayName")
    src: str
    type: MediaType
    committed_at: datetime | None = Field(default=None, alias="committedAt")


class ErrorResponse(BaseModel):
    error: str
