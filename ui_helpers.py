import os
import json
from typing import List, Any, Dict, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from elibrary import (
    AlreadyAvailableError,
    EmptyHistoryError,
    LibraryError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def print_list_result(books: List[Any], title: str = "📚 Book Inventory") -> None:
    """Print books in the current output mode.
    - plain: 'Title by Author [Status]' lines, or 'No books found.'
    - json: JSON array of title, author, is_available
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books found. Try adding some books or resetting the search.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status", no_wrap=True)
        for b in books:
            status = "[green]Available[/]" if b.is_available else "[red]Borrowed[/]"
            table.add_row(b.title, b.author, status)
        _console.print(table)
    else:
        for b in books:
            print(f"{b.title} by {b.author} [{b.status}]")


def print_stats_result(stats: Dict[str, Any]) -> None:
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {stats['total_books']}\n"
            f"[bold]Available:[/] {stats['available_books']}\n"
            f"[bold]Borrowed:[/] {stats['borrowed_books']}\n"
            f"[bold]Unique Authors:[/] {stats['unique_authors']}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {stats['total_books']}")
        print(f"Available: {stats['available_books']}")
        print(f"Borrowed: {stats['borrowed_books']}")
        print(f"Unique Authors: {stats['unique_authors']}")


# --- Messages ---
def added_message(book) -> str:
    return f'"{book.title}" by {book.author} has been added to the library!'


def borrowed_message(book) -> str:
    return f'"{book.title}" has been successfully borrowed.'


def returned_message(book) -> str:
    return f'"{book.title}" has been successfully returned.'


def undo_message(book: Optional[Any]) -> str:
    if book is None:
        return "Undo applied, but the book is no longer in the catalog."
    state = "available" if book.is_available else "borrowed"
    return f'Undo successful: "{book.title}" is now {state}.'


def search_message(results: List[Any]) -> str:
    return f"Found {len(results)} book(s) matching your search."


def error_message(error: LibraryError) -> str:
    """Turn a core error into the text shown to the user."""
    if isinstance(error, UnavailableError):
        return f'"{error.title}" is not available for borrowing.'
    if isinstance(error, AlreadyAvailableError):
        return f'"{error.title}" cannot be returned.'
    if isinstance(error, NotFoundError):
        return f'No book titled "{error.title}" in the library.'
    if isinstance(error, EmptyHistoryError):
        return "No actions to undo."
    if isinstance(error, ValidationError):
        return str(error)
    return f"Error: {error}"
