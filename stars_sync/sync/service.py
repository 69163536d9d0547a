"""
Sync service - reconciles GitHub stars with a Notion database.

A run walks a fixed sequence of states:

    VALIDATING_SCHEMA -> FETCHING_TARGET -> FETCHING_SOURCE -> DIFFING -> APPLYING -> DONE

Any fetch or validation error moves the run to FAILED and is re-raised
with the phase it happened in. The APPLYING phase never fails the run:
per-page errors are only logged and counted.

Cancellation is plain asyncio task cancellation. Pages already created
or archived when the task is cancelled are left as they are.
"""

from enum import Enum
from typing import Any

from stars_sync.clients.github import GitHubClient
from stars_sync.clients.http_client import HTTPClientError
from stars_sync.clients.notion import NotionClient
from stars_sync.observability.logging import bind_context, get_logger, log_context
from stars_sync.sync.applier import MutationApplier
from stars_sync.sync.config import SyncConfig
from stars_sync.sync.differ import compute_diff
from stars_sync.sync.errors import FetchError, SchemaViolationError, SyncError
from stars_sync.sync.fetchers import fetch_database_pages, fetch_starred_repos
from stars_sync.sync.schema import validate_database_schema
from stars_sync.sync.schemas import SyncReport


class SyncState(str, Enum):
    """Phases of a reconciliation run."""

    IDLE = "idle"
    VALIDATING_SCHEMA = "validating_schema"
    FETCHING_TARGET = "fetching_target"
    FETCHING_SOURCE = "fetching_source"
    DIFFING = "diffing"
    APPLYING = "applying"
    DONE = "done"
    FAILED = "failed"


class SyncService:
    """
    Orchestrates one reconciliation run at a time.

    Usage:
        async with GitHubClient(gh_token) as github, NotionClient(n_token) as notion:
            service = SyncService(github, notion)
            report = await service.sync(database_id)
    """

    def __init__(
        self,
        github: GitHubClient,
        notion: NotionClient,
        config: SyncConfig | None = None,
        logger: Any = None,
    ) -> None:
        """
        Initialize sync service.

        Args:
            github: GitHub API client
            notion: Notion API client
            config: Engine settings (or load from SYNC_* env vars)
            logger: Structured logger (defaults to this module's)
        """
        if github is None:
            raise ValueError("github client cannot be None")
        if notion is None:
            raise ValueError("notion client cannot be None")

        self._github = github
        self._notion = notion
        self._config = config or SyncConfig()
        self._logger = logger or get_logger(__name__)
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        """Current phase of the last (or running) sync."""
        return self._state

    def _transition(self, state: SyncState) -> None:
        self._logger.debug("Sync state changed", from_state=self._state.value, to_state=state.value)
        self._state = state
        bind_context(phase=state.value)

    async def sync(self, database_id: str) -> SyncReport:
        """
        Sync the user's starred repos into the given Notion database.

        Returns:
            SyncReport with collection sizes, plan sizes and mutation outcomes

        Raises:
            SchemaViolationError: If the database schema (or strictly, a row) is malformed
            FetchError: If any GitHub or Notion read fails
        """
        with log_context(database_id=database_id, phase=self._state.value):
            return await self._run(database_id)

    async def _run(self, database_id: str) -> SyncReport:
        self._logger.info("Starting syncer", database_id=database_id)

        try:
            self._transition(SyncState.VALIDATING_SCHEMA)
            try:
                database = await self._notion.get_database(database_id)
            except HTTPClientError as e:
                raise FetchError(f"error getting notion database: {e}", phase=self._state) from e
            except ValueError as e:
                raise FetchError(f"error getting notion database: malformed response: {e}", phase=self._state) from e
            if not isinstance(database, dict):
                raise FetchError("error getting notion database: expected a JSON object", phase=self._state)
            try:
                validate_database_schema(database)
            except SchemaViolationError as e:
                raise SchemaViolationError(
                    f"error validating notion database: {e}",
                    property_name=e.property_name,
                    phase=self._state,
                ) from e

            self._transition(SyncState.FETCHING_TARGET)
            self._logger.info(
                "Fetching pages from notion database. Depending on the size of the database, this might take a while."
            )
            try:
                pages = await fetch_database_pages(
                    self._notion,
                    database_id,
                    strict=self._config.strict_records,
                    logger=self._logger,
                )
            except FetchError as e:
                raise FetchError(f"error getting notion pages: {e}", phase=self._state) from e
            except SchemaViolationError as e:
                raise SchemaViolationError(
                    f"error getting notion pages: {e}",
                    property_name=e.property_name,
                    phase=self._state,
                ) from e
            self._logger.info("Found pages in notion", count=len(pages))

            self._transition(SyncState.FETCHING_SOURCE)
            self._logger.info(
                "Fetching starred repos from github. Depending on the number of starred repos, this might take a while."
            )
            try:
                repos = await fetch_starred_repos(self._github)
            except FetchError as e:
                raise FetchError(f"error getting starred repos: {e}", phase=self._state) from e
            self._logger.info("Found starred repos in github", count=len(repos))

        except SyncError:
            self._transition(SyncState.FAILED)
            raise

        self._transition(SyncState.DIFFING)
        plan = compute_diff(repos, pages)

        report = SyncReport(
            starred_repos=len(repos),
            existing_pages=len(pages),
            to_create=len(plan.to_create),
            to_delete=len(plan.to_delete),
            dry_run=self._config.dry_run,
        )

        if self._config.dry_run:
            self._logger.info(
                "Dry run, skipping mutations",
                to_create=[repo.name for repo in plan.to_create],
                to_delete=[page.title for page in plan.to_delete],
            )
        else:
            self._transition(SyncState.APPLYING)
            applier = MutationApplier(
                self._notion,
                database_id,
                concurrency=self._config.mutation_concurrency,
                logger=self._logger,
            )
            report.applied = await applier.apply(plan)

        self._transition(SyncState.DONE)
        self._logger.info("Sync finished", **report.to_dict())
        return report
