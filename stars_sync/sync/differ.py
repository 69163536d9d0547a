"""Set difference between starred repos and existing Notion pages."""

from stars_sync.sync.collection import IndexedCollection
from stars_sync.sync.schemas import NotionPage, StarredRepo, SyncPlan


def compute_diff(
    repos: IndexedCollection[StarredRepo],
    pages: IndexedCollection[NotionPage],
) -> SyncPlan:
    """
    Compute which pages to create and which to archive.

    - A repo is created when no page mirrors its id.
    - A page is archived when its mirrored id is no longer starred.

    Both outputs keep the order of their input collection. Membership is
    checked against each collection's id index, so the cost is O(n + m).
    """
    to_create = [repo for repo in repos if not pages.contains(repo.id)]
    to_delete = [page for page in pages if not repos.contains(page.github_id)]
    return SyncPlan(to_create=to_create, to_delete=to_delete)
