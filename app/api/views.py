"""Web views for HTML pages."""

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup, escape

from app.models.book import Book
from app.services.catalog import CatalogStore, get_catalog_store
from app.services.formatting import availability_style, split_matches
from app.services.query import BookFilter, CatalogBrowser
from app.services.validation import GENRE_SUGGESTIONS, validate_book

router = APIRouter(tags=["views"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def highlight_html(text: str | None, term: str | None) -> Markup:
    """Jinja filter: mark occurrences of the search term, escaping every piece."""
    return Markup("").join(
        Markup("<mark>{}</mark>").format(part) if i % 2 else escape(part)
        for i, part in enumerate(split_matches(text or "", term or ""))
    )


templates.env.filters["highlight"] = highlight_html
templates.env.globals["availability_style"] = availability_style


def parse_book_id(segment: str) -> int | None:
    """Parse a book id from a URL segment.

    Anything but plain ASCII digits, or an id of zero, is treated as no id at all.
    """
    segment = segment.strip()
    if not (segment.isascii() and segment.isdigit()):
        return None
    book_id = int(segment)
    return book_id if book_id > 0 else None


def _to_list() -> RedirectResponse:
    return RedirectResponse(url="/books", status_code=status.HTTP_303_SEE_OTHER)


async def book_form_fields(
    title: str = Form(""),
    author: str = Form(""),
    year: str = Form(""),
    genre: str = Form(""),
    description: str = Form(""),
    available: str | None = Form(None),
    cover_url: str = Form(""),
) -> dict[str, Any]:
    """Collect the entry form fields. An unchecked checkbox is not submitted."""
    return {
        "title": title,
        "author": author,
        "year": year,
        "genre": genre,
        "description": description,
        "available": available is not None,
        "cover_url": cover_url,
    }


def _render_form(
    request: Request,
    action: str,
    values: dict[str, Any],
    errors: dict | None = None,
    book_id: int | None = None,
):
    return templates.TemplateResponse(
        request,
        "book_form.html",
        {
            "action": action,
            "values": values,
            "errors": errors or {},
            "book_id": book_id,
            "genre_suggestions": GENRE_SUGGESTIONS,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Home page."""
    books = await store.list()
    return templates.TemplateResponse(
        request,
        "home.html",
        {"book_count": len(books)},
    )


@router.get("/books", response_class=HTMLResponse)
async def book_list(
    request: Request,
    q: str = "",
    genre: str = "",
    only_available: bool = False,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Book list with keyword, genre and availability filters."""
    criteria = BookFilter(keyword=q, genre=genre, only_available=only_available)
    with CatalogBrowser(store, criteria) as browser:
        books = browser.results
        genres = browser.genres
        total = len(browser.books)

    return templates.TemplateResponse(
        request,
        "book_list.html",
        {
            "books": books,
            "genres": genres,
            "total": total,
            "criteria": criteria,
        },
    )


@router.get("/books/new", response_class=HTMLResponse)
async def new_book_page(request: Request):
    """Page for adding a new book."""
    return _render_form(
        request,
        action="/books/new",
        values={"available": True},
    )


@router.post("/books/new")
async def create_book_form(
    request: Request,
    fields: dict[str, Any] = Depends(book_form_fields),
    store: CatalogStore = Depends(get_catalog_store),
):
    """Create a new book from form submission."""
    result = validate_book(fields)
    if not result.is_valid:
        return _render_form(request, action="/books/new", values=fields, errors=result.errors)

    store.create(result.to_book_create())
    return _to_list()


@router.get("/books/{book_segment}", response_class=HTMLResponse)
async def book_detail(
    request: Request,
    book_segment: str,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Book detail page."""
    book_id = parse_book_id(book_segment)
    if book_id is None:
        return _to_list()

    book = await store.get_by_id(book_id)
    if not book:
        return _to_list()

    return templates.TemplateResponse(request, "book_detail.html", {"book": book})


@router.get("/books/{book_segment}/edit", response_class=HTMLResponse)
async def edit_book_page(
    request: Request,
    book_segment: str,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Page for editing a book, pre-filled with its current values."""
    book_id = parse_book_id(book_segment)
    if book_id is None:
        return _to_list()

    book = await store.get_by_id(book_id)
    if not book:
        return _to_list()

    values = book.model_dump(exclude={"id"})
    values["cover_url"] = values["cover_url"] or ""
    return _render_form(request, action=f"/books/{book_id}/edit", values=values, book_id=book_id)


@router.post("/books/{book_segment}/edit")
async def update_book_form(
    request: Request,
    book_segment: str,
    fields: dict[str, Any] = Depends(book_form_fields),
    store: CatalogStore = Depends(get_catalog_store),
):
    """Save an edited book from form submission."""
    book_id = parse_book_id(book_segment)
    if book_id is None:
        return _to_list()

    result = validate_book(fields)
    if not result.is_valid:
        return _render_form(
            request,
            action=f"/books/{book_id}/edit",
            values=fields,
            errors=result.errors,
            book_id=book_id,
        )

    store.update(Book(id=book_id, **result.to_book_create().model_dump()))
    return _to_list()


@router.get("/books/{book_segment}/delete", response_class=HTMLResponse)
async def confirm_delete_page(
    request: Request,
    book_segment: str,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Ask for confirmation before deleting a book."""
    book_id = parse_book_id(book_segment)
    if book_id is None:
        return _to_list()

    book = await store.get_by_id(book_id)
    if not book:
        return _to_list()

    return templates.TemplateResponse(request, "confirm_delete.html", {"book": book})


@router.post("/books/{book_segment}/delete")
async def delete_book_form(
    book_segment: str,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Delete a book once the user has confirmed."""
    book_id = parse_book_id(book_segment)
    if book_id is not None:
        store.delete(book_id)
    return _to_list()
