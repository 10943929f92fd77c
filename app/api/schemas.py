"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, ConfigDict

from app.services.validation import ErrorKind, ValidationResult


class BookPayload(BaseModel):
    """Schema for creating or replacing a book.

    Fields are deliberately loose: the catalog's own validation rules decide
    what is acceptable so that API and form submissions report the same errors.
    """

    title: str | None = None
    author: str | None = None
    year: int | str | None = None
    genre: str | None = None
    description: str | None = None
    available: bool | None = None
    cover_url: str | None = None


class BookResponse(BaseModel):
    """Schema for book response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    year: int
    genre: str
    description: str
    available: bool
    cover_url: str | None


class BookListResponse(BaseModel):
    """Schema for a filtered list of books."""

    books: list[BookResponse]
    total: int
    genres: list[str]


class BookSearchResponse(BaseModel):
    """Schema for keyword search results."""

    results: list[BookResponse]


class GenreListResponse(BaseModel):
    """Schema for the genres present in the catalog."""

    genres: list[str]


class FieldErrorResponse(BaseModel):
    """Schema for a single field validation error."""

    kind: ErrorKind
    message: str


class ValidationErrorResponse(BaseModel):
    """Schema for a rejected book submission."""

    errors: dict[str, FieldErrorResponse]

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationErrorResponse":
        return cls(
            errors={
                name: FieldErrorResponse(kind=error.kind, message=error.message)
                for name, error in result.errors.items()
            }
        )
