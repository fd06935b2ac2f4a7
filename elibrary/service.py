import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from elibrary.book import Book
from elibrary.catalog import Catalog
from elibrary.errors import (
    AlreadyAvailableError,
    EmptyHistoryError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from elibrary.history import Action, ActionKind, ActionLog

logger = logging.getLogger(__name__)

# (title, author, is_available)
SAMPLE_BOOKS: Tuple[Tuple[str, str, bool], ...] = (
    ("To Kill a Mockingbird", "Harper Lee", True),
    ("1984", "George Orwell", True),
    ("The Great Gatsby", "F. Scott Fitzgerald", False),
    ("Moby Dick", "Herman Melville", True),
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class CatalogService:
    """Runs the add/borrow/return/undo/search use cases over one catalog.

    The service owns its ``Catalog`` and ``ActionLog`` for its whole
    lifetime. Borrow and return push an entry on the log; undo pops the
    latest entry and applies its inverse.
    """

    def __init__(self, catalog: Optional[Catalog] = None, history: Optional[ActionLog] = None) -> None:
        self.catalog = catalog if catalog is not None else Catalog()
        self.history = history if history is not None else ActionLog()

    @classmethod
    def with_sample_inventory(cls) -> "CatalogService":
        """A fresh service preloaded with the bootstrap inventory."""
        service = cls()
        service.seed(SAMPLE_BOOKS)
        return service

    # ------------------------- Bootstrap ------------------------- #
    def seed(self, entries: Iterable[Tuple[str, str, bool]]) -> List[Book]:
        """Bulk-load ``(title, author, is_available)`` entries. Not undoable."""
        added: List[Book] = []
        for title, author, is_available in entries:
            if _is_blank(title) or _is_blank(author):
                raise ValidationError("Seed entries need both a title and an author.")
            book = Book(title=title, author=author, is_available=is_available)
            self.catalog.append(book)
            added.append(book)
        return added

    # ------------------------- Core operations ------------------------- #
    def add_book(self, title: str, author: str) -> Book:
        """Create an available book and append it to the catalog."""
        if _is_blank(title) or _is_blank(author):
            raise ValidationError("Please enter both a title and an author for the new book.")
        book = Book(title=title, author=author)
        self.catalog.append(book)
        return book

    def borrow(self, title: str) -> Book:
        index = self._require_index(title)
        book = self.catalog[index]
        if not book.is_available:
            raise UnavailableError(book.title)
        self.catalog.update_item(index, _set_availability(False))
        self.history.push(Action(ActionKind.BORROW, title))
        return book

    def return_book(self, title: str) -> Book:
        index = self._require_index(title)
        book = self.catalog[index]
        if book.is_available:
            raise AlreadyAvailableError(book.title)
        self.catalog.update_item(index, _set_availability(True))
        self.history.push(Action(ActionKind.RETURN, title))
        return book

    def undo(self) -> Optional[Book]:
        """Reverse the most recent borrow or return.

        The popped action is consumed even when its book can no longer be
        found, in which case ``None`` is returned. The inverse is applied
        without checking the book's current state.
        """
        action = self.history.pop()
        if action is None:
            raise EmptyHistoryError()
        index = self.catalog.find_index(action.item_key)
        if index is None:
            logger.warning("Undo of %s dropped: %r is no longer in the catalog", action.kind.value, action.item_key)
            return None
        book = self.catalog.update_item(index, _set_availability(action.kind.inverse_availability()))
        return book

    def search(self, query: str) -> List[Book]:
        if _is_blank(query):
            raise ValidationError("Please enter a search term.")
        return self.catalog.search(query)

    def list_all(self) -> List[Book]:
        return self.catalog.all_items()

    def find(self, title: str) -> Optional[Book]:
        return self.catalog.find_by_title(title)

    # ------------------------- Introspection ------------------------- #
    @property
    def can_undo(self) -> bool:
        return not self.history.is_empty()

    @property
    def history_depth(self) -> int:
        return len(self.history)

    def get_statistics(self) -> Dict[str, Any]:
        books = self.catalog.all_items()
        available = sum(1 for b in books if b.is_available)
        return {
            "total_books": len(books),
            "available_books": available,
            "borrowed_books": len(books) - available,
            "unique_authors": len({b.author.lower() for b in books}),
        }

    # ------------------------- Utilities ------------------------- #
    def _require_index(self, title: str) -> int:
        index = self.catalog.find_index(title)
        if index is None:
            raise NotFoundError(title)
        return index


def _set_availability(value: bool):
    def apply(book: Book) -> None:
        book.is_available = value
    return apply
