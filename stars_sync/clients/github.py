"""
GitHub REST API client.

Only the single endpoint the sync needs is wrapped: the authenticated
user's starred repositories. The star media type is requested so each
item carries the ``starred_at`` timestamp next to the repository object.
"""

import logging
from typing import Any

import httpx

from stars_sync.clients.http_client import HTTPClient, RetryConfig
from stars_sync.config.settings import Settings

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
STAR_MEDIA_TYPE = "application/vnd.github.star+json"


class GitHubClient:
    """
    Async GitHub client bound to one personal access token.

    Usage:
        async with GitHubClient(token) as github:
            items, next_page = await github.list_starred(page=1)
    """

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        retry_config: RetryConfig | None = None,
        timeout: float = 30.0,
    ):
        self._http = HTTPClient(
            retry_config=retry_config,
            timeout=timeout,
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": STAR_MEDIA_TYPE,
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings, token: str | None = None) -> "GitHubClient":
        """Build a client from application settings, optionally overriding the token."""
        return cls(
            token=token or settings.github_token or "",
            base_url=settings.github_api_url,
            retry_config=RetryConfig(
                max_retries=settings.max_http_retries,
                max_backoff_seconds=settings.max_backoff_seconds,
            ),
            timeout=settings.http_timeout_seconds,
        )

    async def __aenter__(self) -> "GitHubClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self._http.__aexit__(exc_type, exc_val, exc_tb)

    async def list_starred(
        self,
        page: int = 1,
        per_page: int = 100,
    ) -> tuple[list[dict[str, Any]], int | None]:
        """
        List one page of the authenticated user's starred repositories.

        Args:
            page: 1-based page number
            per_page: Page size (GitHub caps this at 100)

        Returns:
            Tuple of (raw star items, next page number or None on the last page)

        Raises:
            HTTPClientError: If the request fails
        """
        response = await self._http.get(
            "/user/starred",
            params={"per_page": per_page, "page": page},
        )
        logger.debug(f"Fetched starred page {page} ({len(response.content)} bytes)")
        return response.json(), parse_next_page(response)


def parse_next_page(response: httpx.Response) -> int | None:
    """Extract the next page number from the ``Link`` response header."""
    next_link = response.links.get("next")
    if not next_link or not next_link.get("url"):
        return None
    page = httpx.URL(next_link["url"]).params.get("page")
    if page is None or not page.isdigit():
        return None
    return int(page)
