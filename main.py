import logging
import subprocess
import sys
import webbrowser
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import settings
from elibrary import CatalogService, LibraryError
from ui_helpers import (
    added_message,
    borrowed_message,
    error_message,
    print_list_result,
    print_stats_result,
    returned_message,
    search_message,
    set_output_mode,
    undo_message,
)

APP_NAME = "E-Library CLI"

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def new_service() -> CatalogService:
    """Build the catalog service every command works on."""
    if settings.seed_sample_books:
        return CatalogService.with_sample_inventory()
    return CatalogService()


# --- Script commands ---
def execute_command(service: CatalogService, line: str) -> Optional[str]:
    """Run one script line against ``service`` and return the message to show.

    Supported verbs: ``add <title> | <author>``, ``borrow <title>``,
    ``return <title>``, ``undo``, ``search <query>``, ``list``.
    Blank lines and ``#`` comments yield ``None``.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    logger.debug("Running %r", line)
    verb, _, arg = line.partition(" ")
    verb = verb.lower()
    arg = arg.strip()
    try:
        if verb == "add":
            title, _, author = arg.partition("|")
            return added_message(service.add_book(title, author))
        if verb == "borrow":
            return borrowed_message(service.borrow(arg))
        if verb == "return":
            return returned_message(service.return_book(arg))
        if verb == "undo":
            return undo_message(service.undo())
        if verb == "search":
            results = service.search(arg)
            lines = [search_message(results)]
            lines.extend(f"  {b.title} by {b.author} [{b.status}]" for b in results)
            return "\n".join(lines)
        if verb == "list":
            return "\n".join(f"  {b.title} by {b.author} [{b.status}]" for b in service.list_all())
    except LibraryError as e:
        logger.info("Command %r refused: %s", line, e)
        return error_message(e)
    return f"Unknown command: {verb}"


# --- Typer CLI Application ---
app = typer.Typer(help="E-Library CLI")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    _configure_logging()
    set_output_mode(output or settings.default_output_mode)


@app.command("list")
def cli_list():
    """List every book in the catalog."""
    print_list_result(new_service().list_all())


@app.command("search")
def cli_search(query: str = typer.Argument(..., help="Search by title or author")):
    """Search books by title or author."""
    service = new_service()
    try:
        results = service.search(query)
    except LibraryError as e:
        print(error_message(e))
        return
    print(search_message(results))
    if results:
        print_list_result(results, title=f"🔎 Results for '{query}'")


@app.command("stats")
def cli_stats():
    """Show catalog statistics."""
    print_stats_result(new_service().get_statistics())


@app.command("run")
def cli_run(script: Path = typer.Argument(..., help="File with one command per line")):
    """Run a sequence of commands against a single catalog session."""
    if not script.exists():
        print(f"File not found: {script}")
        raise typer.Exit(code=1)
    service = new_service()
    with open(script, "r", encoding="utf-8") as f:
        for line in f:
            message = execute_command(service, line)
            if message is not None:
                print(message)


@app.command("menu")
def cli_menu():
    """Open the interactive menu."""
    run_menu(new_service())


@app.command("serve")
def cli_serve():
    """Start the HTTP API with uvicorn."""
    host = settings.api_host
    port = int(settings.api_port)
    url = f"http://{host}:{port}/docs"
    print(f"Starting API on {url}")
    try:
        webbrowser.open(url)
    except Exception:
        logger.debug("Could not open a browser for %s", url)
    args = [sys.executable, "-m", "uvicorn", "api:app", "--host", host, "--port", str(port)]
    if settings.debug:
        args.append("--reload")
    try:
        subprocess.run(args)
    except FileNotFoundError:
        print("Error: `uvicorn` could not be started. Make sure it is installed.")
        raise typer.Exit(code=1)


# --- Interactive menu ---
def _show_books(service: CatalogService) -> None:
    books = service.list_all()
    if not books:
        console.print("[yellow]No books found. Try adding some books.[/]")
        return
    table = Table(title="📚 Book Inventory", show_lines=True, header_style="bold cyan")
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Status", no_wrap=True)
    for book in books:
        status = "[green]Available[/]" if book.is_available else "[red]Borrowed[/]"
        table.add_row(book.title, book.author, status)
    console.print(table)


def _report(message: str, ok: bool = True) -> None:
    style = "green" if ok else "yellow"
    console.print(Panel.fit(message, border_style=style))


def run_menu(service: CatalogService) -> None:
    """Simple interactive menu for the E-Library CLI."""
    def render_menu() -> None:
        undo_label = "Undo last action" if service.can_undo else "[dim]Undo last action (nothing to undo)[/]"
        menu_items = [
            ("1", "List all books", "📚"),
            ("2", "Add a new book", "➕"),
            ("3", "Borrow a book", "📖"),
            ("4", "Return a book", "↩️"),
            ("5", undo_label, "⏪"),
            ("6", "Search books", "🔎"),
            ("7", "Show statistics", "📊"),
            ("0", "Quit", "🚪"),
        ]
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    while True:
        render_menu()
        choice = Prompt.ask("Choose an option", choices=["1", "2", "3", "4", "5", "6", "7", "0"], default="1")
        try:
            if choice == "1":
                _show_books(service)
            elif choice == "2":
                title = Prompt.ask("Book title", default="")
                author = Prompt.ask("Author", default="")
                _report(added_message(service.add_book(title, author)))
            elif choice == "3":
                _report(borrowed_message(service.borrow(Prompt.ask("Title to borrow"))))
            elif choice == "4":
                _report(returned_message(service.return_book(Prompt.ask("Title to return"))))
            elif choice == "5":
                _report(undo_message(service.undo()))
            elif choice == "6":
                results = service.search(Prompt.ask("Search by title or author", default=""))
                _report(search_message(results))
                print_list_result(results)
            elif choice == "7":
                print_stats_result(service.get_statistics())
            elif choice == "0":
                console.print("[green]Goodbye![/]")
                break
        except LibraryError as e:
            logger.info("Menu option %s refused: %s", choice, e)
            _report(error_message(e), ok=False)
        print()


if __name__ == "__main__":
    if len(sys.argv) > 1:
        app()
    else:
        _configure_logging()
        run_menu(new_service())
