import json

import pytest
from typer.testing import CliRunner

import main
from main import app, execute_command
from config import settings
from elibrary import CatalogService

runner = CliRunner()


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.setenv("LIB_CLI_OUTPUT", "plain")
    monkeypatch.setattr(settings, "default_output_mode", "plain")
    monkeypatch.setattr(settings, "seed_sample_books", True)


def test_list_sample_inventory():
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "To Kill a Mockingbird by Harper Lee [Available]" in result.stdout
    assert "The Great Gatsby by F. Scott Fitzgerald [Borrowed]" in result.stdout


def test_list_empty_catalog(monkeypatch):
    monkeypatch.setattr(settings, "seed_sample_books", False)
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No books found." in result.stdout


def test_list_json_output():
    result = runner.invoke(app, ["--output", "json", "list"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip().splitlines()[-1])
    assert payload[1] == {"title": "1984", "author": "George Orwell", "is_available": True}


def test_search_found():
    result = runner.invoke(app, ["search", "gatsby"])
    assert result.exit_code == 0
    assert "Found 1 book(s) matching your search." in result.stdout
    assert "The Great Gatsby" in result.stdout
    assert "Moby Dick" not in result.stdout


def test_search_blank_query():
    result = runner.invoke(app, ["search", "  "])
    assert result.exit_code == 0
    assert "Please enter a search term." in result.stdout


def test_stats():
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 0
    assert "Total Books: 4" in result.stdout
    assert "Borrowed: 1" in result.stdout


def test_run_script(tmp_path):
    script = tmp_path / "session.txt"
    script.write_text(
        "# end-to-end session\n"
        "borrow 1984\n"
        "undo\n"
        "undo\n"
        "\n"
        "add Dune | Frank Herbert\n"
        "borrow dune\n"
        "borrow dune\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["run", str(script)])

    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert lines == [
        '"1984" has been successfully borrowed.',
        'Undo successful: "1984" is now available.',
        "No actions to undo.",
        '"Dune" by Frank Herbert has been added to the library!',
        '"Dune" has been successfully borrowed.',
        '"Dune" is not available for borrowing.',
    ]


def test_run_missing_script(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "File not found" in result.stdout


def test_execute_command_messages():
    service = CatalogService.with_sample_inventory()

    assert execute_command(service, "   ") is None
    assert execute_command(service, "# comment") is None
    assert execute_command(service, "return Moby Dick") == '"Moby Dick" cannot be returned.'
    assert execute_command(service, "return The Great Gatsby") == '"The Great Gatsby" has been successfully returned.'
    assert execute_command(service, "undo") == 'Undo successful: "The Great Gatsby" is now borrowed.'
    assert execute_command(service, "borrow Dune") == 'No book titled "Dune" in the library.'
    assert execute_command(service, "add Dune") == "Please enter both a title and an author for the new book."
    assert execute_command(service, "dance") == "Unknown command: dance"


def test_execute_command_search_and_list():
    service = CatalogService.with_sample_inventory()

    output = execute_command(service, "search orwell")
    assert output.splitlines()[0] == "Found 1 book(s) matching your search."
    assert "1984 by George Orwell [Available]" in output
    assert len(execute_command(service, "list").splitlines()) == 4


def test_serve_command(monkeypatch):
    calls = {}
    monkeypatch.setattr(main.webbrowser, "open", lambda url: calls.setdefault("url", url))
    monkeypatch.setattr(main.subprocess, "run", lambda args: calls.setdefault("args", args))

    result = runner.invoke(app, ["serve"])

    assert result.exit_code == 0
    assert "Starting API on" in result.stdout
    assert "uvicorn" in calls["args"]
    assert "api:app" in calls["args"]
    assert "--port" in calls["args"]


def test_menu_session():
    # undo (empty), borrow 1984, undo, quit
    result = runner.invoke(app, ["menu"], input="5\n3\n1984\n5\n0\n")

    assert result.exit_code == 0
    assert "No actions to undo." in result.stdout
    assert '"1984" has been successfully borrowed.' in result.stdout
    assert 'Undo successful: "1984" is now available.' in result.stdout
    assert "Goodbye!" in result.stdout


def test_refused_command_is_logged(caplog):
    service = CatalogService.with_sample_inventory()

    with caplog.at_level("INFO", logger="main"):
        message = execute_command(service, "borrow The Great Gatsby")

    assert message == '"The Great Gatsby" is not available for borrowing.'
    assert "refused" in caplog.text
