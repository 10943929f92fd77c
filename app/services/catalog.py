"""In-memory book catalog with a publish/subscribe snapshot channel."""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from fastapi import Request

from app.core.tracing import get_tracer
from app.models.book import Book, BookCreate

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

Snapshot = tuple[Book, ...]
Listener = Callable[[Snapshot], None]

SEED_BOOKS: tuple[Book, ...] = (
    Book(
        id=1,
        title="Il Signore degli Anelli",
        author="J.R.R. Tolkien",
        year=1954,
        genre="Fantasy",
        description="Un'epica avventura nella Terra di Mezzo",
        available=True,
        cover_url="https://images.pexels.com/photos/1130980/pexels-photo-1130980.jpeg?auto=compress&cs=tinysrgb&w=300",
    ),
    Book(
        id=2,
        title="1984",
        author="George Orwell",
        year=1949,
        genre="Distopia",
        description="Un romanzo distopico sul totalitarismo",
        available=True,
        cover_url="https://images.pexels.com/photos/256417/pexels-photo-256417.jpeg?auto=compress&cs=tinysrgb&w=300",
    ),
    Book(
        id=3,
        title="Il Piccolo Principe",
        author="Antoine de Saint-Exupéry",
        year=1943,
        genre="Favola",
        description="Una favola filosofica e poetica",
        available=False,
        cover_url="https://images.pexels.com/photos/46274/pexels-photo-46274.jpeg?auto=compress&cs=tinysrgb&w=300",
    ),
    Book(
        id=4,
        title="Harry Potter e la Pietra Filosofale",
        author="J.K. Rowling",
        year=1997,
        genre="Fantasy",
        description="Il primo libro della saga di Harry Potter",
        available=True,
        cover_url="https://images.pexels.com/photos/1029141/pexels-photo-1029141.jpeg?auto=compress&cs=tinysrgb&w=300",
    ),
)


def matches_keyword(book: Book, term: str) -> bool:
    """Case-insensitive substring match against title or author."""
    needle = term.lower()
    return needle in book.title.lower() or needle in book.author.lower()


class CatalogStore:
    """Owner of the canonical book collection.

    Mutations (``create``, ``update``, ``delete``) are synchronous: the change
    and the snapshot broadcast that follows it happen without yielding to the
    event loop. Reads are coroutines that wait a fixed delay before answering.
    Every collection handed out is an immutable tuple of frozen records.
    """

    def __init__(
        self,
        books: Iterable[Book] = (),
        list_delay: float = 0.0,
        lookup_delay: float = 0.0,
    ) -> None:
        """Initialize the store.

        Args:
            books: Initial records, kept in the given order.
            list_delay: Seconds ``list`` waits before returning.
            lookup_delay: Seconds ``get_by_id`` and ``search`` wait before returning.
        """
        self._books: Snapshot = tuple(books)
        self._listeners: list[Listener] = []
        self.list_delay = list_delay
        self.lookup_delay = lookup_delay

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CatalogStore":
        """Build a store configured from application settings."""
        return cls(
            books=SEED_BOOKS if settings.seed_catalog else (),
            list_delay=settings.list_delay_seconds,
            lookup_delay=settings.lookup_delay_seconds,
        )

    @property
    def snapshot(self) -> Snapshot:
        """The current collection."""
        return self._books

    # Subscription

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and deliver the current snapshot to it right away.

        Returns:
            A callable that unsubscribes the listener.
        """
        listener(self._books)
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Stop delivering snapshots to a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, books: Snapshot) -> None:
        self._books = books
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(books)

    # Reads

    async def list(self) -> Snapshot:
        """Return every record in insertion order."""
        books = self._books
        await asyncio.sleep(self.list_delay)
        return books

    async def get_by_id(self, book_id: int) -> Book | None:
        """Return the record with the given id, or None if there is none."""
        book = next((b for b in self._books if b.id == book_id), None)
        await asyncio.sleep(self.lookup_delay)
        return book

    async def search(self, term: str | None = None) -> Snapshot:
        """Return records whose title or author contains ``term``, ignoring case.

        An empty or missing term returns the full collection.
        """
        if term:
            books = tuple(b for b in self._books if matches_keyword(b, term))
        else:
            books = self._books
        await asyncio.sleep(self.lookup_delay)
        return books

    # Commands

    def next_id(self) -> int:
        """Id the next created record will receive."""
        return max((b.id for b in self._books), default=0) + 1

    def create(self, data: BookCreate) -> Book:
        """Append a new record and broadcast the new snapshot."""
        with tracer.start_as_current_span("catalog.create"):
            book = Book(id=self.next_id(), **data.model_dump())
            self._publish((*self._books, book))
            logger.info(f"Created book {book.id}")
            return book

    def update(self, book: Book) -> None:
        """Replace the record with the same id, keeping its position.

        Does nothing, and broadcasts nothing, when no record has that id.
        """
        with tracer.start_as_current_span("catalog.update"):
            index = next((i for i, b in enumerate(self._books) if b.id == book.id), None)
            if index is None:
                logger.debug(f"Ignoring update for unknown book {book.id}")
                return

            books = list(self._books)
            books[index] = book
            self._publish(tuple(books))
            logger.info(f"Updated book {book.id}")

    def delete(self, book_id: int) -> None:
        """Remove the record with the given id.

        A snapshot is broadcast even when no record was removed.
        """
        with tracer.start_as_current_span("catalog.delete"):
            books = tuple(b for b in self._books if b.id != book_id)
            removed = len(books) != len(self._books)
            self._publish(books)
            if removed:
                logger.info(f"Deleted book {book_id}")
            else:
                logger.debug(f"Delete for unknown book {book_id} removed nothing")


async def get_catalog_store(request: Request) -> CatalogStore:
    """Dependency that provides the application's catalog store."""
    return request.app.state.catalog
