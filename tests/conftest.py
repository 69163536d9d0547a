"""Pytest fixtures for stars-sync tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from stars_sync.config.settings import Settings
from stars_sync.sync.schemas import NotionPage, StarredRepo

DATABASE_ID = "705baa92-0ea9-4a4f-bb97-4916d1cb45bc"


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(
        log_format="console",
        log_level="DEBUG",
        github_token="gh-test-token",
        notion_token="notion-test-token",
        notion_database_id=DATABASE_ID,
        max_http_retries=0,
    )


@pytest.fixture
def database_id() -> str:
    return DATABASE_ID


@pytest.fixture
def notion_database() -> dict[str, Any]:
    """A Notion database object exposing every required property."""
    return {
        "object": "database",
        "id": DATABASE_ID,
        "properties": {
            "Name": {"id": "title", "name": "Name", "type": "title", "title": {}},
            "Created time": {"id": "a1", "name": "Created time", "type": "created_time", "created_time": {}},
            "Description": {"id": "a2", "name": "Description", "type": "rich_text", "rich_text": {}},
            "Language": {"id": "a3", "name": "Language", "type": "select", "select": {"options": []}},
            "Topics": {"id": "a4", "name": "Topics", "type": "multi_select", "multi_select": {"options": []}},
            "Repository ID": {"id": "a5", "name": "Repository ID", "type": "number", "number": {"format": "number"}},
            "Repository URL": {"id": "a6", "name": "Repository URL", "type": "url", "url": {}},
        },
    }


@pytest.fixture
def make_star() -> Callable[..., dict[str, Any]]:
    """Factory for raw GitHub star items (star+json media type)."""

    def _make(repo_id: int, name: str | None = None, **repo_fields: Any) -> dict[str, Any]:
        repo = {
            "id": repo_id,
            "name": name or f"repo-{repo_id}",
            "description": f"Description of repo {repo_id}",
            "html_url": f"https://github.com/octocat/repo-{repo_id}",
            "topics": ["python", "cli"],
            "language": "Python",
        }
        repo.update(repo_fields)
        return {"starred_at": "2024-01-15T10:30:00Z", "repo": repo}

    return _make


@pytest.fixture
def make_notion_result() -> Callable[..., dict[str, Any]]:
    """Factory for raw Notion page objects as returned by a database query."""

    def _make(page_id: str, github_id: int | None, title: str | None = None) -> dict[str, Any]:
        return {
            "object": "page",
            "id": page_id,
            "properties": {
                "Name": {
                    "id": "title",
                    "type": "title",
                    "title": [{"type": "text", "plain_text": title or f"repo-{github_id}"}],
                },
                "Repository ID": {"id": "a5", "type": "number", "number": github_id},
            },
        }

    return _make


@pytest.fixture
def sample_repo() -> StarredRepo:
    return StarredRepo(
        id=42,
        name="httpx",
        description="A next generation HTTP client for Python.",
        language="Python",
        topics=["http", "asyncio"],
        url="https://github.com/encode/httpx",
    )


@pytest.fixture
def sample_page() -> NotionPage:
    return NotionPage(id="9ef240ab-18de-4808-92ee-22f6dce028e9", title="old-repo", github_id=4)


@pytest.fixture
def mock_notion() -> AsyncMock:
    """NotionClient double with successful defaults."""
    notion = AsyncMock()
    notion.get_database = AsyncMock()
    notion.query_database = AsyncMock(
        return_value={"results": [], "has_more": False, "next_cursor": None}
    )
    notion.create_page = AsyncMock(return_value={"object": "page"})
    notion.update_page = AsyncMock(return_value={"object": "page"})
    return notion


@pytest.fixture
def mock_github() -> AsyncMock:
    """GitHubClient double with an empty single page by default."""
    github = AsyncMock()
    github.list_starred = AsyncMock(return_value=([], None))
    return github
