from __future__ import annotations


class Book:
    """Represents a single lendable book in the catalog."""

    def __init__(self, title: str, author: str, is_available: bool = True) -> None:
        self.title = title.strip()
        self.author = author.strip()
        self.is_available = is_available

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} ({self.status})"

    def __repr__(self) -> str:
        return f"Book(title={self.title!r}, author={self.author!r}, is_available={self.is_available!r})"

    @property
    def status(self) -> str:
        return "Available" if self.is_available else "Borrowed"

    def matches_title(self, title: str) -> bool:
        """Case-insensitive exact title comparison, ignoring surrounding spaces."""
        return self.title.lower() == title.strip().lower()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "is_available": self.is_available,
        }

