"""Book API routes."""

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from app.api.schemas import (
    BookListResponse,
    BookPayload,
    BookResponse,
    BookSearchResponse,
    GenreListResponse,
    ValidationErrorResponse,
)
from app.models.book import Book, BookCreate
from app.services.catalog import CatalogStore, get_catalog_store
from app.services.query import BookFilter, derive_genres, filter_books
from app.services.validation import validate_book

router = APIRouter(prefix="/api/books", tags=["books"])


def _validated(payload: BookPayload) -> BookCreate:
    """Run the catalog's validation rules, raising 422 on failure."""
    result = validate_book(payload.model_dump())
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ValidationErrorResponse.from_result(result).model_dump(mode="json"),
        )
    return result.to_book_create()


@router.get("", response_model=BookListResponse)
async def list_books(
    q: str = "",
    genre: str = "",
    only_available: bool = False,
    store: CatalogStore = Depends(get_catalog_store),
) -> BookListResponse:
    """List books matching every active filter."""
    books = await store.list()
    criteria = BookFilter(keyword=q, genre=genre, only_available=only_available)
    filtered = filter_books(books, criteria)

    return BookListResponse(
        books=[BookResponse.model_validate(book) for book in filtered],
        total=len(filtered),
        genres=derive_genres(books),
    )


@router.get("/search", response_model=BookSearchResponse)
async def search_books(
    q: str = "",
    store: CatalogStore = Depends(get_catalog_store),
) -> BookSearchResponse:
    """Search books by title or author."""
    results = await store.search(q)
    return BookSearchResponse(results=[BookResponse.model_validate(book) for book in results])


@router.get("/genres", response_model=GenreListResponse)
async def list_genres(store: CatalogStore = Depends(get_catalog_store)) -> GenreListResponse:
    """List the genres present in the catalog."""
    books = await store.list()
    return GenreListResponse(genres=derive_genres(books))


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: BookPayload,
    store: CatalogStore = Depends(get_catalog_store),
) -> BookResponse:
    """Create a new book."""
    book = store.create(_validated(payload))
    return BookResponse.model_validate(book)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int,
    store: CatalogStore = Depends(get_catalog_store),
) -> BookResponse:
    """Get a specific book by ID."""
    book = await store.get_by_id(book_id)

    if not book:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not found",
        )

    return BookResponse.model_validate(book)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    payload: BookPayload,
    book_id: int = Path(..., gt=0),
    store: CatalogStore = Depends(get_catalog_store),
) -> BookResponse:
    """Replace every field of a book."""
    data = _validated(payload)
    store.update(Book(id=book_id, **data.model_dump()))

    # The catalog ignores updates for unknown ids
    book = await store.get_by_id(book_id)
    if not book:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not found",
        )

    return BookResponse.model_validate(book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: int,
    store: CatalogStore = Depends(get_catalog_store),
) -> Response:
    """Delete a book. Deleting an unknown id is not an error."""
    store.delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
