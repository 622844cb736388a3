"""Test fixtures — fake GitHub transport, controllable clock, API client."""

import asyncio

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from gallery.api.deps import get_lister
from gallery.config import Settings
from gallery.main import create_app
from gallery.services.media_cache import MediaCache
from gallery.services.media_lister import MediaLister
from gallery.services.sources import build_source

OWNER = "octo"
REPO = "pics"
REPO_PATH = f"/repos/{OWNER}/{REPO}"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's environment and .env."""
    values = {
        "github_owner": OWNER,
        "github_repo": REPO,
        "github_branch": "main",
        "gallery_path": "public/gallery",
        "github_token": None,
        "display_prefix": "gallery",
        "display_padding": 3,
        "cache_ttl_seconds": 300,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGitHub:
    """In-process stand-in for the three GitHub endpoints the lister uses."""

    def __init__(self):
        self.contents: list[dict] = []
        self.contents_status = 200
        self.tree: list[dict] = []
        self.truncated = False
        self.commit_dates: dict[str, str] = {}
        self.failing_paths: set[str] = set()
        self.requests: list[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0
        # Contents request N waits on listing_gates[N] when one is set
        self.listing_gates: list[asyncio.Event] = []
        self._contents_seen = 0
        self.tree_payload: dict | None = None

    def add_file(self, name: str, directory: str = "public/gallery") -> None:
        path = f"{directory}/{name}"
        self.contents.append({
            "name": name,
            "path": path,
            "type": "file",
            "download_url": f"https://raw.example/{path}",
        })
        self.tree.append({"path": path, "type": "blob"})

    @property
    def listing_calls(self) -> int:
        return sum(1 for r in self.requests if "/commits" not in r.url.path)

    @property
    def commit_calls(self) -> int:
        return sum(1 for r in self.requests if r.url.path.endswith("/commits"))

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith(f"{REPO_PATH}/contents/"):
            index = self._contents_seen
            self._contents_seen += 1
            if index < len(self.listing_gates):
                await self.listing_gates[index].wait()
            if self.contents_status != 200:
                return httpx.Response(self.contents_status, text="Not Found")
            return httpx.Response(200, json=self.contents)

        if path.startswith(f"{REPO_PATH}/git/trees/"):
            payload = self.tree_payload or {"tree": self.tree, "truncated": self.truncated}
            return httpx.Response(200, json=payload)

        if path == f"{REPO_PATH}/commits":
            file_path = request.url.params["path"]
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            try:
                for _ in range(3):
                    await asyncio.sleep(0)
            finally:
                self.in_flight -= 1
            if file_path in self.failing_paths:
                return httpx.Response(500, text="boom")
            date = self.commit_dates.get(file_path)
            if date is None:
                return httpx.Response(200, json=[])
            return httpx.Response(200, json=[{"commit": {"committer": {"date": date}}}])

        return httpx.Response(404, text="unknown route")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_lister(github, clock):
    """Build a lister wired to the fake GitHub and fake clock."""

    def _make(**overrides) -> MediaLister:
        cfg = make_settings(**overrides)
        cache = MediaCache(ttl_seconds=cfg.cache_ttl_seconds, clock=clock)
        return MediaLister(build_source(cfg, transport=github.transport()), cache, cfg)

    return _make


@pytest.fixture
def app():
    return create_app()


@pytest_asyncio.fixture
async def client(app):
    """Async test client; tests install a lister via dependency_overrides."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def install_lister(app: FastAPI, lister: MediaLister) -> None:
    app.dependency_overrides[get_lister] = lambda: lister
