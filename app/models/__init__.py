"""Catalog models."""

from app.models.book import Book, BookCreate

__all__ = ["Book", "BookCreate"]
