from typing import Callable, List, Optional

from elibrary.book import Book


class Catalog:
    """Ordered in-memory container of books.

    Insertion order is meaningful: lookups return the first match and
    enumeration follows the order books were appended. Every query hands
    back the live ``Book`` records, so a change made through one reference
    is visible through all of them.
    """

    def __init__(self) -> None:
        self._books: List[Book] = []

    # ------------------------- Mutation ------------------------- #
    def append(self, book: Book) -> None:
        """Add a book at the end. Duplicate titles are allowed."""
        self._books.append(book)

    def update_item(self, index: int, fn: Callable[[Book], None]) -> Book:
        """Apply ``fn`` to the book stored at ``index`` in place and return it."""
        if not 0 <= index < len(self._books):
            raise IndexError(f"No book at position {index}.")
        book = self._books[index]
        fn(book)
        return book

    # ------------------------- Queries ------------------------- #
    def find_index(self, title: str) -> Optional[int]:
        for index, book in enumerate(self._books):
            if book.matches_title(title):
                return index
        return None

    def find_by_title(self, title: str) -> Optional[Book]:
        """Return the first book whose title matches, ignoring case."""
        index = self.find_index(title)
        if index is None:
            return None
        return self._books[index]

    def search(self, query: str) -> List[Book]:
        """Books whose title or author contains ``query``, ignoring case."""
        needle = query.lower()
        return [
            book for book in self._books
            if needle in book.title.lower() or needle in book.author.lower()
        ]

    def all_items(self) -> List[Book]:
        return list(self._books)

    def __getitem__(self, index: int) -> Book:
        return self._books[index]

    def __len__(self) -> int:
        return len(self._books)

