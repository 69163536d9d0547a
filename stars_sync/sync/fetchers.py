"""
Paginated readers for the two remote collections.

Both fetchers accumulate the full remote state in memory and fail the
whole fetch on the first request error; no partial collection is returned.
An unparseable body or a star item missing its id is a fetch error too.
"""

from datetime import datetime
from typing import Any

from stars_sync.clients.github import GitHubClient
from stars_sync.clients.http_client import HTTPClientError
from stars_sync.clients.notion import NotionClient
from stars_sync.observability.logging import get_logger
from stars_sync.sync.collection import IndexedCollection, page_collection, repo_collection
from stars_sync.sync.errors import FetchError, SchemaViolationError
from stars_sync.sync.schemas import PROPERTY_REPO_ID, PROPERTY_TITLE, NotionPage, StarredRepo

GITHUB_REPOS_PER_PAGE = 100
NOTION_PAGES_PER_PAGE = 50

# Raised by response.json() on a non-JSON body and by projection of a malformed item
MALFORMED_RESPONSE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


async def fetch_starred_repos(github: GitHubClient) -> IndexedCollection[StarredRepo]:
    """
    Fetch every repository starred by the authenticated user.

    Raises:
        FetchError: If any page request fails or returns a malformed body
    """
    repos = repo_collection()
    page = 1

    while True:
        try:
            items, next_page = await github.list_starred(page=page, per_page=GITHUB_REPOS_PER_PAGE)
        except HTTPClientError as e:
            raise FetchError(f"error fetching starred repos page {page}: {e}") from e
        except MALFORMED_RESPONSE_ERRORS as e:
            raise FetchError(f"malformed starred repos page {page}: {e}") from e

        if not isinstance(items, list):
            raise FetchError(
                f"malformed starred repos page {page}: expected a list, got {type(items).__name__}"
            )

        for item in items:
            try:
                repos.add(parse_starred_repo(item))
            except MALFORMED_RESPONSE_ERRORS as e:
                raise FetchError(f"malformed star item on page {page}: {e!r}") from e

        if not next_page:
            break
        page = next_page

    return repos


def parse_starred_repo(item: dict[str, Any]) -> StarredRepo:
    """Project a raw star item (``{"starred_at", "repo"}``) into a StarredRepo."""
    repo = item.get("repo", item)
    return StarredRepo(
        id=int(repo["id"]),
        name=repo.get("name") or "",
        description=repo.get("description") or "",
        language=repo.get("language") or "",
        topics=list(repo.get("topics") or []),
        url=repo.get("html_url") or "",
        starred_at=_parse_timestamp(item.get("starred_at")),
    )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def fetch_database_pages(
    notion: NotionClient,
    database_id: str,
    strict: bool = True,
    logger: Any = None,
) -> IndexedCollection[NotionPage]:
    """
    Fetch every row of the Notion database.

    Args:
        notion: Notion client
        database_id: Database to query
        strict: Abort on a malformed row (True) or skip it with a warning
        logger: Structured logger for skipped rows (defaults to this module's)

    Raises:
        FetchError: If any query request fails or returns a malformed body
        SchemaViolationError: If strict and a row lacks the expected shape
    """
    logger = logger or get_logger(__name__)
    pages = page_collection()
    cursor: str | None = None

    while True:
        try:
            response = await notion.query_database(
                database_id,
                start_cursor=cursor,
                page_size=NOTION_PAGES_PER_PAGE,
            )
        except HTTPClientError as e:
            raise FetchError(f"error querying notion database: {e}") from e
        except MALFORMED_RESPONSE_ERRORS as e:
            raise FetchError(f"malformed notion query response: {e}") from e

        if not isinstance(response, dict) or not isinstance(response.get("results", []), list):
            raise FetchError("malformed notion query response: expected an object with a results list")

        for result in response.get("results", []):
            try:
                pages.add(parse_notion_page(result))
            except SchemaViolationError as e:
                if strict:
                    raise
                logger.warning(
                    "Skipping malformed notion page",
                    page_id=result.get("id") if isinstance(result, dict) else None,
                    error=str(e),
                )

        if not response.get("has_more"):
            break
        cursor = response.get("next_cursor")
        if not cursor:
            raise FetchError("notion reported more results but returned no next_cursor")

    return pages


def parse_notion_page(result: dict[str, Any]) -> NotionPage:
    """
    Project a raw Notion page into a NotionPage.

    Raises:
        SchemaViolationError: If the title or repository id property is malformed
    """
    if not isinstance(result, dict):
        raise SchemaViolationError(f"notion result is not an object: {result!r}")

    page_id = str(result.get("id", ""))
    properties = result.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    title_prop = _typed_property(page_id, properties, PROPERTY_TITLE, "title")
    runs = title_prop.get("title") or []
    if not runs or not isinstance(runs[0], dict) or "plain_text" not in runs[0]:
        raise SchemaViolationError(
            f"page {page_id} has an empty {PROPERTY_TITLE} property",
            property_name=PROPERTY_TITLE,
        )

    number_prop = _typed_property(page_id, properties, PROPERTY_REPO_ID, "number")
    number = number_prop.get("number")
    if not isinstance(number, (int, float)) or isinstance(number, bool):
        raise SchemaViolationError(
            f"page {page_id} has no numeric {PROPERTY_REPO_ID}",
            property_name=PROPERTY_REPO_ID,
        )

    return NotionPage(id=page_id, title=runs[0]["plain_text"], github_id=int(number))


def _typed_property(
    page_id: str,
    properties: dict[str, Any],
    name: str,
    expected_type: str,
) -> dict[str, Any]:
    prop = properties.get(name)
    if not isinstance(prop, dict) or prop.get("type") != expected_type:
        raise SchemaViolationError(
            f"page {page_id} property {name} is not a {expected_type} property",
            property_name=name,
        )
    return prop
