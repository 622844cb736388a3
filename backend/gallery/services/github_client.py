"""GitHub REST API client — contents, trees and per-path commit history."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from gallery.config import Settings, settings as default_settings
from gallery.schemas.media import EPOCH
from gallery.services.errors import (
    MissingCredentialsError,
    PerFileDateError,
    SourceTooLargeError,
    UpstreamFetchError,
)
from gallery.utils.concurrency import bounded_gather

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"
MALFORMED_PAYLOAD = "Malformed upstream payload"


class GitHubClient:
    """Read-only access to one repository/branch."""

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        cfg = config or default_settings
        self._owner = cfg.github_owner
        self._repo = cfg.github_repo
        self._branch = cfg.github_branch
        self._base_url = cfg.github_api_url.rstrip("/")
        self._raw_base = cfg.github_raw_url.rstrip("/")
        self._token = cfg.github_token
        self._require_token = cfg.require_token
        self._timeout = cfg.http_timeout_seconds
        self._transport = transport

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    def _headers(self) -> dict[str, str]:
        if not self._token and self._require_token:
            raise MissingCredentialsError("GITHUB_TOKEN is not set")
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        )

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self._owner}/{self._repo}"

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a listing endpoint; any failure is fatal to the listing."""
        try:
            async with self._client() as client:
                resp = await client.get(path, params=params)
        except httpx.HTTPError as e:
            raise UpstreamFetchError(502, str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise UpstreamFetchError(resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamFetchError(resp.status_code, "Invalid JSON from upstream") from e

    async def list_contents(self, path: str) -> list[dict[str, Any]]:
        """Single-directory listing (non-recursive)."""
        data = await self._get_json(
            f"{self._repo_path}/contents/{quote(path.strip('/'))}",
            params={"ref": self._branch},
        )
        if not isinstance(data, list):
            # A file path returns an object rather than a directory listing
            raise UpstreamFetchError(200, f"{path} is not a directory")
        if not all(isinstance(item, dict) and isinstance(item.get("name"), str) for item in data):
            raise UpstreamFetchError(200, MALFORMED_PAYLOAD)
        return data

    async def get_tree(self) -> list[dict[str, Any]]:
        """Whole-repository recursive tree; truncation is a hard failure."""
        data = await self._get_json(
            f"{self._repo_path}/git/trees/{quote(self._branch)}",
            params={"recursive": "1"},
        )
        if not isinstance(data, dict):
            raise UpstreamFetchError(200, MALFORMED_PAYLOAD)
        if data.get("truncated"):
            raise SourceTooLargeError(
                f"Tree for {self._owner}/{self._repo}@{self._branch} is truncated"
            )
        tree = data.get("tree")
        if not isinstance(tree, list) or not all(
            isinstance(item, dict) and isinstance(item.get("path"), str) for item in tree
        ):
            raise UpstreamFetchError(200, MALFORMED_PAYLOAD)
        return tree

    async def _commit_date(self, client: httpx.AsyncClient, path: str) -> datetime:
        try:
            resp = await client.get(
                f"{self._repo_path}/commits",
                params={"path": path, "sha": self._branch, "per_page": 1},
            )
        except httpx.HTTPError as e:
            raise PerFileDateError(path, str(e) or type(e).__name__) from e
        if not resp.is_success:
            raise PerFileDateError(path, f"status {resp.status_code}")
        try:
            commits = resp.json()
            committed = datetime.fromisoformat(
                commits[0]["commit"]["committer"]["date"].replace("Z", "+00:00")
            )
        except (ValueError, LookupError, TypeError, AttributeError) as e:
            raise PerFileDateError(path, "no commit history") from e
        if committed.tzinfo is None:
            committed = committed.replace(tzinfo=timezone.utc)
        return committed

    async def fetch_commit_dates(self, paths: list[str], limit: int = 10) -> list[datetime]:
        """Latest commit date per path, in input order.

        At most ``limit`` requests in flight. A failed lookup yields the epoch
        for that path only.
        """
        if not paths:
            return []

        async with self._client() as client:

            async def _safe(path: str) -> datetime:
                try:
                    return await self._commit_date(client, path)
                except PerFileDateError as e:
                    logger.warning("%s — using epoch", e)
                    return EPOCH

            return await bounded_gather(_safe, paths, limit=limit)

    def raw_url(self, path: str) -> str:
        return f"{self._raw_base}/{self._owner}/{self._repo}/{self._branch}/{quote(path)}"
