"""Insertion-ordered collection with a hash index on a numeric identifier."""

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from stars_sync.sync.schemas import NotionPage, StarredRepo

T = TypeVar("T")


class IndexedCollection(Generic[T]):
    """
    Ordered sequence of items with O(1) membership test by id.

    Duplicate ids are kept as separate entries; the index only records
    that the id is present.

    Example:
        repos = IndexedCollection(lambda repo: repo.id)
        repos.add(repo)
        repos.contains(repo.id)  # True
    """

    def __init__(self, key: Callable[[T], int], items: Iterable[T] = ()):
        self._key = key
        self._items: list[T] = []
        self._ids: set[int] = set()
        for item in items:
            self.add(item)

    def add(self, item: T) -> None:
        """Append an item and index its id."""
        self._items.append(item)
        self._ids.add(self._key(item))

    def contains(self, item_id: int) -> bool:
        """Check whether any item carries the given id."""
        return item_id in self._ids

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def repo_collection(repos: Iterable[StarredRepo] = ()) -> IndexedCollection[StarredRepo]:
    """Collection of starred repos keyed by repository id."""
    return IndexedCollection(lambda repo: repo.id, repos)


def page_collection(pages: Iterable[NotionPage] = ()) -> IndexedCollection[NotionPage]:
    """Collection of Notion pages keyed by the mirrored repository id."""
    return IndexedCollection(lambda page: page.github_id, pages)
