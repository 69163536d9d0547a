"""
Mutation applier - creates and archives Notion pages for a SyncPlan.

Every call is independent: a failure is logged and recorded, and the
remaining calls still run. Nothing raised by a single mutation reaches
the caller.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from stars_sync.clients.notion import NotionClient
from stars_sync.observability.logging import get_logger
from stars_sync.sync.errors import MutationError
from stars_sync.sync.schemas import (
    PROPERTY_DESCRIPTION,
    PROPERTY_LANGUAGE,
    PROPERTY_REPO_ID,
    PROPERTY_REPO_URL,
    PROPERTY_TITLE,
    PROPERTY_TOPICS,
    ApplyReport,
    MutationResult,
    NotionPage,
    StarredRepo,
    SyncPlan,
)


def _text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def build_create_page_payload(database_id: str, repo: StarredRepo) -> dict[str, Any]:
    """
    Build the Notion create-page request for a starred repository.

    The Language select is only set when the repository has a language;
    Notion rejects an empty select option.
    """
    properties: dict[str, Any] = {
        PROPERTY_TITLE: {"title": _text(repo.name)},
        PROPERTY_DESCRIPTION: {"rich_text": _text(repo.description)},
        PROPERTY_REPO_URL: {"url": repo.url},
        PROPERTY_REPO_ID: {"number": repo.id},
        PROPERTY_TOPICS: {"multi_select": [{"name": topic} for topic in repo.topics]},
    }

    if repo.language:
        properties[PROPERTY_LANGUAGE] = {"select": {"name": repo.language}}

    return {
        "parent": {"type": "database_id", "database_id": database_id},
        "properties": properties,
    }


class MutationApplier:
    """
    Applies a SyncPlan against one Notion database.

    Creates run first, then archives. Within each phase calls run one at
    a time, or up to ``concurrency`` at once. Results keep plan order
    either way; with concurrency > 1 log lines may interleave.
    """

    def __init__(
        self,
        notion: NotionClient,
        database_id: str,
        concurrency: int = 1,
        logger: Any = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._notion = notion
        self._database_id = database_id
        self._concurrency = concurrency
        self._logger = logger or get_logger(__name__)

    async def apply(self, plan: SyncPlan) -> ApplyReport:
        """Create missing pages, then archive stale ones."""
        report = ApplyReport()

        self._logger.info("Pages to create", count=len(plan.to_create))
        report.results.extend(
            await self._run_all([
                (lambda repo=repo: self.create_page(repo)) for repo in plan.to_create
            ])
        )

        self._logger.info("Pages to archive", count=len(plan.to_delete))
        report.results.extend(
            await self._run_all([
                (lambda page=page: self.archive_page(page)) for page in plan.to_delete
            ])
        )

        return report

    async def create_page(self, repo: StarredRepo) -> MutationResult:
        """Create the page for one repo. Never raises."""
        payload = build_create_page_payload(self._database_id, repo)
        try:
            await self._notion.create_page(payload)
        except Exception as e:
            error = MutationError(str(e), action="create", label=repo.name)
            self._logger.error("Error creating notion page", repo=repo.name, error=str(error))
            return MutationResult(action="create", label=repo.name, ok=False, error=str(error))

        self._logger.info("Notion page created", repo=repo.name)
        return MutationResult(action="create", label=repo.name, ok=True)

    async def archive_page(self, page: NotionPage) -> MutationResult:
        """Archive (soft delete) one page. Never raises."""
        try:
            await self._notion.update_page(page.id, {"archived": True})
        except Exception as e:
            error = MutationError(str(e), action="archive", label=page.title)
            self._logger.error("Error archiving notion page", page=page.title, error=str(error))
            return MutationResult(action="archive", label=page.title, ok=False, error=str(error))

        self._logger.info("Notion page archived", page=page.title)
        return MutationResult(action="archive", label=page.title, ok=True)

    async def _run_all(
        self,
        calls: list[Callable[[], Awaitable[MutationResult]]],
    ) -> list[MutationResult]:
        if self._concurrency == 1:
            return [await call() for call in calls]

        semaphore = asyncio.Semaphore(self._concurrency)

        async def bounded(call: Callable[[], Awaitable[MutationResult]]) -> MutationResult:
            async with semaphore:
                return await call()

        return list(await asyncio.gather(*(bounded(call) for call in calls)))
