"""Book model."""

from pydantic import BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    """Fields a caller supplies when adding a book; the catalog assigns the id."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    year: int
    genre: str
    description: str
    available: bool = True
    cover_url: str | None = None


class Book(BookCreate):
    """A catalog record.

    Records are frozen so that snapshots handed out by the catalog cannot be
    altered by consumers. Changes go through ``CatalogStore.update``.
    """

    id: int = Field(..., gt=0)

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', author='{self.author}')>"
