"""Gallery configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Gallery"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Media source: contents = GitHub directory listing, tree = GitHub
    # recursive tree, local = directory under public_dir
    source: Literal["contents", "tree", "local"] = "contents"

    # GitHub repository holding the gallery
    github_owner: str = "arparoy"
    github_repo: str = "actress-gallery"
    github_branch: str = "main"
    gallery_path: str = "public/gallery"
    github_api_url: str = "https://api.github.com"
    github_raw_url: str = "https://raw.githubusercontent.com"
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GALLERY_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    require_token: bool = False  # False = fall back to unauthenticated calls

    # Local source
    public_dir: str = "./public"
    gallery_dir: str = "gallery"  # relative to public_dir

    # Listing
    image_extensions: Annotated[list[str], NoDecode] = [".jpg", ".jpeg", ".png", ".webp", ".gif"]
    video_extensions: Annotated[list[str], NoDecode] = [".mp4", ".webm", ".mov"]
    sort_by: Literal["name", "committed"] = "name"
    display_prefix: str = "actress-gallery"
    display_padding: int = Field(default=3, ge=1)

    # Caching
    cache_ttl_seconds: float = 300.0
    stale_while_revalidate_seconds: int = 3600

    # Upstream
    date_fetch_concurrency: int = Field(default=10, ge=1)
    http_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="GALLERY_",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def media_extensions(self) -> set[str]:
        return set(self.image_extensions) | set(self.video_extensions)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @field_validator("image_extensions", "video_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        result = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            result.append(ext if ext.startswith(".") else f".{ext}")
        return result

    @model_validator(mode="after")
    def _check_source(self) -> "Settings":
        """Reject combinations the local source cannot serve; resolve paths."""
        if self.source == "local" and self.sort_by == "committed":
            raise ValueError("sort_by='committed' requires a GitHub source")
        if not Path(self.public_dir).is_absolute():
            base = Path(__file__).resolve().parent.parent  # backend/
            self.public_dir = str(base / self.public_dir)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
