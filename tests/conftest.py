"""Shared test fixtures."""

import os

# Set test environment before the app reads settings
os.environ["PRESSKIT_LOG_LEVEL"] = "ERROR"  # Reduce log noise
os.environ["PRESSKIT_TREE_RATE_LIMIT"] = "1000/minute"
os.environ["PRESSKIT_GH_PAT"] = "test-token"
os.environ["PRESSKIT_LLM_API_KEY"] = "test-key"
os.environ.pop("PRESSKIT_REDIS_URL", None)
os.environ.pop("PRESSKIT_STORE_URL", None)

from collections.abc import AsyncGenerator  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from presskit import app  # noqa: E402
from presskit.config import Settings, settings  # noqa: E402
from presskit.fetcher import ContentFetcher  # noqa: E402
from presskit.pages import PageService  # noqa: E402
from presskit.storage import InMemoryKVStore  # noqa: E402

INDEX_MD = """---
title: Presskit Home
nav:
  - text: somewhere-else
    link: /elsewhere
---
# Welcome

This is the home page.
"""

NEW_THING_MD = """---
title: New Thing
---
## Something new

Fresh content.
"""


class UpstreamStub:
    """Canned upstream HTTP responses keyed by URL, recording every request."""

    def __init__(self) -> None:
        self.routes: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, status_code: int = 200, **kwargs: Any) -> None:
        """Register a response; kwargs go to httpx.Response, or exc= to raise."""
        self.routes[url] = {"status_code": status_code, **kwargs}

    def calls(self, url: str) -> int:
        return sum(1 for request in self.requests if str(request.url) == url)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="404: Not Found")

        route = dict(route)
        exc = route.pop("exc", None)
        if exc is not None:
            raise exc
        return httpx.Response(route.pop("status_code"), **route)


class RecordingKVStore(InMemoryKVStore):
    """In-memory store that records every write."""

    def __init__(self) -> None:
        super().__init__()
        self.puts: list[tuple[str, str]] = []

    async def put(self, key: str, value: str) -> None:
        self.puts.append((key, value))
        await super().put(key, value)


@pytest.fixture
def config() -> Settings:
    return settings


@pytest.fixture
def upstream(config: Settings) -> UpstreamStub:
    """Upstream stub serving the home index file."""
    stub = UpstreamStub()
    stub.add(f"{config.file_url_prefix}/{config.index_file}", text=INDEX_MD)
    return stub


@pytest.fixture
def store() -> RecordingKVStore:
    return RecordingKVStore()


@pytest.fixture
def summarizer() -> AsyncMock:
    mock_summarizer = AsyncMock()
    mock_summarizer.summarize.return_value = {"summary": "A short summary."}
    mock_summarizer.health_check.return_value = True
    return mock_summarizer


@pytest.fixture
def fetcher(upstream: UpstreamStub, config: Settings) -> ContentFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    return ContentFetcher(client, config)


@pytest.fixture
def service(
    store: RecordingKVStore, fetcher: ContentFetcher, summarizer: AsyncMock
) -> PageService:
    return PageService(store=store, fetcher=fetcher, summarizer=summarizer)


@pytest_asyncio.fixture
async def client(service: PageService) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Test client fixture - page service injected via app.state."""
    app.state.page_service = service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
