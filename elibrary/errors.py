from __future__ import annotations

from typing import Optional


class LibraryError(Exception):
    """Base class for every error the catalog core raises."""


class ValidationError(LibraryError, ValueError):
    """Malformed input: blank title, author or search query."""


class NotFoundError(LibraryError, LookupError):
    """No book in the catalog matches the given title."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Book titled {title!r} not found.")
        self.title = title


class UnavailableError(LibraryError):
    """Borrow attempted on a book that is already borrowed."""

    def __init__(self, title: str) -> None:
        super().__init__(f"{title!r} is not available for borrowing.")
        self.title = title


class AlreadyAvailableError(LibraryError):
    """Return attempted on a book that is already available."""

    def __init__(self, title: str) -> None:
        super().__init__(f"{title!r} is already available and cannot be returned.")
        self.title = title


class EmptyHistoryError(LibraryError):
    """Undo requested with nothing left to undo."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "No actions to undo.")
