"""Remote content and tree fetching over HTTP."""

from typing import Any

import httpx
from loguru import logger

from .config import Settings, settings
from .exceptions import FetchError, UpstreamError
from .models import Content
from .parse import parse_frontmatter, parse_markdown


class ContentFetcher:
    """Fetches markdown files and the repository tree from the source host."""

    def __init__(self, client: httpx.AsyncClient, config: Settings | None = None) -> None:
        """Initialize the fetcher.

        Args:
            client: Shared HTTP client, owned by the caller.
            config: Settings to read URLs and credentials from.
        """
        self.client = client
        self.config = config or settings

    def file_url(self, path: str) -> str:
        """Translate a request path into a file URL, including the .md extension."""
        return f"{self.config.file_url_prefix}/{path}.md"

    def index_url(self) -> str:
        return f"{self.config.file_url_prefix}/{self.config.index_file}"

    async def get_content(self, url: str) -> Content:
        """Fetch and render a markdown file.

        The upstream status code is kept on the record, so a missing file
        renders its error body with the upstream's status. Transport failures
        are returned as a 500 record carrying the error message.
        """
        try:
            response = await self.client.get(url)
            parsed = parse_frontmatter(response.text)
            return Content(
                status_code=response.status_code,
                attrs=parsed.attrs,
                html=parse_markdown(parsed.body),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Content fetch failed for {url}: {e}")
            return Content(status_code=500, attrs={}, html=str(e) or e.__class__.__name__)

    async def fetch_tree(self, token: str | None = None) -> dict[str, Any]:
        """Fetch the recursive file tree from the source-control API.

        Raises:
            UpstreamError: If the API answers with a non-2xx status.
            FetchError: If the API cannot be reached.
        """
        if token is None:
            token = self.config.gh_pat or ""
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": self.config.github_api_version,
            "User-Agent": self.config.user_agent,
        }
        try:
            response = await self.client.get(self.config.tree_url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Tree fetch failed: {e}")
            raise FetchError(f"Tree fetch failed: {e}") from e

        if not response.is_success:
            logger.warning(f"Tree fetch returned {response.status_code} {response.reason_phrase}")
            raise UpstreamError(response.status_code, response.reason_phrase)

        tree: dict[str, Any] = response.json()
        return tree


def create_http_client(config: Settings | None = None) -> httpx.AsyncClient:
    """Create the shared HTTP client used for all upstream calls."""
    config = config or settings
    return httpx.AsyncClient(timeout=config.http_timeout, follow_redirects=True)
