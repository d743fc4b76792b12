"""Page service: content lookup, caching and background summarization."""

import asyncio
import json
from typing import Any

from loguru import logger

from .exceptions import StorageError
from .fetcher import ContentFetcher
from .models import Content
from .providers import Summarizer
from .storage import TREE_KEY, KVStore
from .types import HealthStatus, NavItem

HOME_NAV: list[NavItem] = [
    {"text": "home", "link": "/"},
    {"text": "new-thing", "link": "/new-thing"},
    {"text": "multi-page", "link": "/multi-page"},
    {"text": "tailwind", "link": "/tailwind"},
    {"text": "summarize", "link": "/summarize"},
    {"text": "daisyUI", "link": "/daisyui"},
]


class PageService:
    """Serves rendered markdown pages through the key-value cache."""

    def __init__(
        self,
        store: KVStore,
        fetcher: ContentFetcher,
        summarizer: Summarizer,
    ) -> None:
        """Initialize with injected dependencies."""
        self.store = store
        self.fetcher = fetcher
        self.summarizer = summarizer
        self._home: Content | None = None
        self._home_lock = asyncio.Lock()

    async def home_content(self) -> Content:
        """Return the home page record, fetching it on first use.

        The navigation list is always the fixed HOME_NAV, whatever the
        remote index file declares.
        """
        if self._home is not None:
            return self._home

        async with self._home_lock:
            if self._home is None:
                home = await self.fetcher.get_content(self.fetcher.index_url())
                home.attrs = {**home.attrs, "nav": [dict(item) for item in HOME_NAV]}
                logger.info(f"Home content loaded: {json.dumps(home.attrs['nav'])}")
                self._home = home
        return self._home

    async def nav(self) -> list[NavItem]:
        home = await self.home_content()
        nav: list[NavItem] = home.attrs.get("nav") or []
        return nav

    async def get_page(self, path: str) -> tuple[Content, bool]:
        """Look up a page by request path.

        Returns:
            The content record and whether it came from the cache. On a miss
            the record is fetched but not stored; callers schedule
            summarize_and_cache to write it.
        """
        cached = await self._try_store_get(path)
        if cached is not None:
            logger.debug(f"Cache hit for {path}")
            return Content.from_json(cached), True

        logger.debug(f"Cache miss for {path}")
        content = await self.fetcher.get_content(self.fetcher.file_url(path))
        return content, False

    async def summarize_and_cache(self, key: str, content: Content) -> None:
        """Attach an AI summary to content and write it to the store.

        Runs detached from the request. Failures are logged and never reach
        the caller. A failed summary leaves the key uncached, so the next
        request fetches and summarizes again.
        """
        if content.ok:
            try:
                content.summary = await self.summarizer.summarize(content.html)
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Summarization failed for {key}, not caching: {e}")
                return

        try:
            await self.store.put(key, content.to_json())
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Cache write failed for {key} (non-critical): {e}")
        else:
            logger.info(f"Cached {key} (summary={'yes' if content.summary else 'no'})")

    async def get_tree(self) -> dict[str, Any] | None:
        """Return the cached repository tree, if any.

        Raises:
            StorageError: If the store cannot be read.
        """
        try:
            cached = await self.store.get(TREE_KEY)
        except Exception as e:
            logger.error(f"Failed to read tree: {e}")
            raise StorageError(f"Failed to read tree: {e}") from e
        if cached is None:
            return None
        tree: dict[str, Any] = json.loads(cached)
        return tree

    async def refresh_tree(self, token: str | None = None) -> None:
        """Fetch the repository tree and store the raw JSON.

        Raises:
            UpstreamError: If the source-control API rejects the request.
            StorageError: If the tree cannot be written.
        """
        tree = await self.fetcher.fetch_tree(token)
        try:
            await self.store.put(TREE_KEY, json.dumps(tree))
        except Exception as e:
            logger.error(f"Failed to store tree: {e}")
            raise StorageError(f"Failed to store tree: {e}") from e
        logger.info(f"Tree refreshed ({len(tree.get('tree', []))} entries)")

    async def _try_store_get(self, key: str) -> str | None:
        """Read from the store, treating failures as a miss."""
        try:
            return await self.store.get(key)
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Cache get failed for {key} (non-critical): {e}")
            return None

    async def health_check(self) -> HealthStatus:
        """Check health of all components."""
        return {
            "store": await self._check_store_health(),
            "summarizer": await self._check_summarizer_health(),
        }

    async def _check_store_health(self) -> bool:
        try:
            return await self.store.health_check()
        except Exception as e:  # noqa: BLE001
            logger.error(f"Store health check failed: {e}")
            return False

    async def _check_summarizer_health(self) -> bool:
        try:
            return await self.summarizer.health_check()
        except Exception as e:  # noqa: BLE001
            logger.error(f"Summarizer health check failed: {e}")
            return False
