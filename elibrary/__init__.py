"""E-Library - Core Package

This package contains the in-memory core of the application:
- Book record (book.py)
- Ordered catalog container (catalog.py)
- Undo history (history.py)
- Orchestration service (service.py)
- Error types (errors.py)
"""

from elibrary.book import Book
from elibrary.catalog import Catalog
from elibrary.errors import (
    AlreadyAvailableError,
    EmptyHistoryError,
    LibraryError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from elibrary.history import Action, ActionKind, ActionLog
from elibrary.service import SAMPLE_BOOKS, CatalogService

__all__ = [
    "Action",
    "ActionKind",
    "ActionLog",
    "AlreadyAvailableError",
    "Book",
    "Catalog",
    "CatalogService",
    "EmptyHistoryError",
    "LibraryError",
    "NotFoundError",
    "SAMPLE_BOOKS",
    "UnavailableError",
    "ValidationError",
]
