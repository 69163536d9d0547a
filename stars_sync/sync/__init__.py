"""Sync: reconciliation of GitHub stars with a Notion database."""

from stars_sync.sync.applier import MutationApplier, build_create_page_payload
from stars_sync.sync.collection import IndexedCollection
from stars_sync.sync.config import SyncConfig
from stars_sync.sync.differ import compute_diff
from stars_sync.sync.errors import (
    ConfigError,
    FetchError,
    MutationError,
    SchemaViolationError,
    SyncError,
)
from stars_sync.sync.fetchers import fetch_database_pages, fetch_starred_repos
from stars_sync.sync.schema import validate_database_schema
from stars_sync.sync.schemas import (
    REQUIRED_PROPERTIES,
    ApplyReport,
    MutationResult,
    NotionPage,
    RequiredProperty,
    StarredRepo,
    SyncPlan,
    SyncReport,
)
from stars_sync.sync.service import SyncService, SyncState

__all__ = [
    "REQUIRED_PROPERTIES",
    "ApplyReport",
    "ConfigError",
    "FetchError",
    "IndexedCollection",
    "MutationApplier",
    "MutationError",
    "MutationResult",
    "NotionPage",
    "RequiredProperty",
    "SchemaViolationError",
    "StarredRepo",
    "SyncConfig",
    "SyncError",
    "SyncPlan",
    "SyncReport",
    "SyncService",
    "SyncState",
    "build_create_page_payload",
    "compute_diff",
    "fetch_database_pages",
    "fetch_starred_repos",
    "validate_database_schema",
]
