"""Filtering and genre derivation over catalog snapshots."""

from collections.abc import Callable, Iterable

from pydantic import BaseModel

from app.models.book import Book
from app.services.catalog import CatalogStore, Snapshot, matches_keyword


class BookFilter(BaseModel):
    """Active filters for a catalog listing.

    Empty ``keyword`` and ``genre`` are inactive. ``only_available`` is a
    toggle: False means availability is not filtered at all.
    """

    keyword: str = ""
    genre: str = ""
    only_available: bool = False

    @property
    def is_active(self) -> bool:
        return bool(self.keyword or self.genre or self.only_available)


def filter_books(books: Iterable[Book], criteria: BookFilter) -> list[Book]:
    """Return the books satisfying every active filter, in their original order."""
    result = list(books)

    if criteria.keyword:
        result = [b for b in result if matches_keyword(b, criteria.keyword)]

    if criteria.genre:
        result = [b for b in result if b.genre == criteria.genre]

    if criteria.only_available:
        result = [b for b in result if b.available]

    return result


def derive_genres(books: Iterable[Book]) -> list[str]:
    """Distinct genres present in ``books``, sorted."""
    return sorted({b.genre for b in books})


class CatalogBrowser:
    """Keeps a filtered view of the catalog current as the catalog changes.

    The browser subscribes on construction and must be closed when no longer
    needed, either explicitly or by using it as a context manager.
    """

    def __init__(self, store: CatalogStore, criteria: BookFilter | None = None) -> None:
        self.criteria = criteria or BookFilter()
        self.books: Snapshot = ()
        self.genres: list[str] = []
        self.results: list[Book] = []
        self._unsubscribe: Callable[[], None] | None = store.subscribe(self._on_snapshot)

    def _on_snapshot(self, books: Snapshot) -> None:
        self.books = books
        self.genres = derive_genres(books)
        self.results = filter_books(books, self.criteria)

    def apply(self, criteria: BookFilter) -> list[Book]:
        """Switch to new filters and return the matching books."""
        self.criteria = criteria
        self.results = filter_books(self.books, criteria)
        return self.results

    def reset(self) -> list[Book]:
        """Clear every filter."""
        return self.apply(BookFilter())

    def close(self) -> None:
        """Stop following the catalog."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> "CatalogBrowser":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
