"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.models.book import Book, BookCreate
from app.services.catalog import SEED_BOOKS, CatalogStore, get_catalog_store


@pytest.fixture
def store() -> CatalogStore:
    """A catalog seeded with the sample books and no read delay."""
    return CatalogStore(books=SEED_BOOKS)


@pytest.fixture
def empty_store() -> CatalogStore:
    """A catalog with no books."""
    return CatalogStore()


@pytest.fixture
def seed_books() -> tuple[Book, ...]:
    """The sample books, in catalog order."""
    return SEED_BOOKS


@pytest.fixture
def book_data() -> BookCreate:
    """Valid fields for a new book."""
    return BookCreate(
        title="Il Nome della Rosa",
        author="Umberto Eco",
        year=1980,
        genre="Giallo",
        description="Un mistero in un'abbazia medievale",
        available=True,
        cover_url="https://example.com/rosa.jpg",
    )


@pytest.fixture
def book_form() -> dict[str, str]:
    """Valid entry form fields, as submitted by a browser."""
    return {
        "title": "Il Nome della Rosa",
        "author": "Umberto Eco",
        "year": "1980",
        "genre": "Giallo",
        "description": "Un mistero in un'abbazia medievale",
        "available": "true",
        "cover_url": "",
    }


@pytest.fixture
def snapshots(store: CatalogStore):
    """Record every snapshot the seeded store emits."""
    received: list[tuple[Book, ...]] = []
    unsubscribe = store.subscribe(received.append)
    yield received
    unsubscribe()


async def _client_for(store: CatalogStore) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_catalog_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def client(store: CatalogStore) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client backed by the seeded store."""
    async for ac in _client_for(store):
        yield ac


@pytest.fixture
async def empty_client(empty_store: CatalogStore) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client backed by an empty store."""
    async for ac in _client_for(empty_store):
        yield ac
