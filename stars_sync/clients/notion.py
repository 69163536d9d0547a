"""
Notion REST API client.

Wraps the four database/page endpoints used by the sync:
- GET   /databases/{id}         database schema
- POST  /databases/{id}/query   paginated rows (opaque cursor)
- POST  /pages                  create a row
- PATCH /pages/{id}             update a row (archive flag)
"""

from typing import Any

from stars_sync.clients.http_client import HTTPClient, RetryConfig
from stars_sync.config.settings import Settings

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionClient:
    """
    Async Notion client bound to one integration token.

    Usage:
        async with NotionClient(token) as notion:
            database = await notion.get_database(database_id)
    """

    def __init__(
        self,
        token: str,
        base_url: str = NOTION_API_URL,
        notion_version: str = NOTION_VERSION,
        retry_config: RetryConfig | None = None,
        timeout: float = 30.0,
    ):
        self._http = HTTPClient(
            retry_config=retry_config,
            timeout=timeout,
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": notion_version,
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings, token: str | None = None) -> "NotionClient":
        """Build a client from application settings, optionally overriding the token."""
        return cls(
            token=token or settings.notion_token or "",
            base_url=settings.notion_api_url,
            notion_version=settings.notion_version,
            retry_config=RetryConfig(
                max_retries=settings.max_http_retries,
                max_backoff_seconds=settings.max_backoff_seconds,
            ),
            timeout=settings.http_timeout_seconds,
        )

    async def __aenter__(self) -> "NotionClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self._http.__aexit__(exc_type, exc_val, exc_tb)

    async def get_database(self, database_id: str) -> dict[str, Any]:
        """Retrieve a database object, including its property schema."""
        response = await self._http.get(f"/databases/{database_id}")
        return response.json()

    async def query_database(
        self,
        database_id: str,
        start_cursor: str | None = None,
        page_size: int = 50,
    ) -> dict[str, Any]:
        """
        Query one page of database rows.

        Returns:
            Raw response with ``results``, ``has_more`` and ``next_cursor``
        """
        body: dict[str, Any] = {"page_size": page_size}
        if start_cursor:
            body["start_cursor"] = start_cursor
        response = await self._http.post(f"/databases/{database_id}/query", json_body=body)
        return response.json()

    async def create_page(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a page (database row) from a full create payload."""
        response = await self._http.post("/pages", json_body=payload)
        return response.json()

    async def update_page(self, page_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Patch page properties or flags such as ``archived``."""
        response = await self._http.patch(f"/pages/{page_id}", json_body=payload)
        return response.json()
