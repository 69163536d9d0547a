"""Data models for the sync module."""

from dataclasses import dataclass, field
from datetime import datetime

# Notion database property names
PROPERTY_TITLE = "Name"
PROPERTY_CREATED_TIME = "Created time"
PROPERTY_DESCRIPTION = "Description"
PROPERTY_LANGUAGE = "Language"
PROPERTY_TOPICS = "Topics"
PROPERTY_REPO_URL = "Repository URL"
PROPERTY_REPO_ID = "Repository ID"


@dataclass(frozen=True)
class RequiredProperty:
    """A property the Notion database must expose, with its Notion type."""

    name: str
    type: str


REQUIRED_PROPERTIES: tuple[RequiredProperty, ...] = (
    RequiredProperty(PROPERTY_CREATED_TIME, "created_time"),
    RequiredProperty(PROPERTY_DESCRIPTION, "rich_text"),
    RequiredProperty(PROPERTY_LANGUAGE, "select"),
    RequiredProperty(PROPERTY_TOPICS, "multi_select"),
    RequiredProperty(PROPERTY_TITLE, "title"),
    RequiredProperty(PROPERTY_REPO_ID, "number"),
    RequiredProperty(PROPERTY_REPO_URL, "url"),
)


@dataclass
class StarredRepo:
    """A starred GitHub repository, reduced to what gets written to Notion.

    Identity is the numeric ``id``: a user can star several repositories
    sharing a name.
    """

    id: int
    name: str
    description: str = ""
    language: str = ""
    topics: list[str] = field(default_factory=list)
    url: str = ""
    starred_at: datetime | None = None


@dataclass
class NotionPage:
    """An existing database row and the repository id it mirrors."""

    id: str
    title: str
    github_id: int


@dataclass
class SyncPlan:
    """Output of the differ."""

    to_create: list[StarredRepo] = field(default_factory=list)
    to_delete: list[NotionPage] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_create and not self.to_delete


@dataclass
class MutationResult:
    """Outcome of one create or archive call."""

    action: str  # "create" or "archive"
    label: str  # repo name or page title
    ok: bool
    error: str | None = None


@dataclass
class ApplyReport:
    """Aggregated outcome of the mutation phase."""

    results: list[MutationResult] = field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(1 for r in self.results if r.ok and r.action == "create")

    @property
    def archived(self) -> int:
        return sum(1 for r in self.results if r.ok and r.action == "archive")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "archived": self.archived,
            "failed": self.failed,
        }


@dataclass
class SyncReport:
    """Summary of a completed run."""

    starred_repos: int
    existing_pages: int
    to_create: int
    to_delete: int
    dry_run: bool = False
    applied: ApplyReport = field(default_factory=ApplyReport)

    def to_dict(self) -> dict:
        return {
            "starred_repos": self.starred_repos,
            "existing_pages": self.existing_pages,
            "to_create": self.to_create,
            "to_delete": self.to_delete,
            "dry_run": self.dry_run,
            **self.applied.to_dict(),
        }
