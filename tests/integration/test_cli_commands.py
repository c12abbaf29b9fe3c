"""Integration tests for the Folio CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from folio.cli import app

_MANUSCRIPT = "## Intro\nHello world.\n\n## Chapter Two\nMore text here.\n"


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_command_previews_chapters(tmp_path: Path) -> None:
    manuscript = _write(tmp_path / "book.txt", _MANUSCRIPT)
    runner = CliRunner()

    result = runner.invoke(app, ["parse", str(manuscript)])

    assert result.exit_code == 0, result.output
    assert "Detected chapters: 2" in result.output
    assert "1. Intro [intro]" in result.output
    assert "2. Chapter Two [chapter-two]" in result.output
    assert "   Hello world." in result.output


def test_import_full_command_reports_minted_version(tmp_path: Path) -> None:
    """Importing twice into the same label should report the newly minted label."""

    manuscript = _write(tmp_path / "book.txt", _MANUSCRIPT)
    store_path = tmp_path / "library.json"
    runner = CliRunner()
    args = [
        "import-full",
        str(manuscript),
        "--book",
        "The Divine Gene",
        "--author",
        "Ada",
        "--version",
        "1",
        "--store",
        str(store_path),
    ]

    first = runner.invoke(app, args)
    second = runner.invoke(app, args)

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "Imported 2 chapters into version 1." in first.output
    assert "Imported 2 chapters into version 2." in second.output
    payload = json.loads(store_path.read_text(encoding="utf-8"))
    assert len(payload["collections"]["chapters"]) == 4


def test_versions_and_chapters_commands_list_imported_content(tmp_path: Path) -> None:
    manuscript = _write(tmp_path / "book.txt", _MANUSCRIPT)
    store_path = tmp_path / "library.json"
    runner = CliRunner()
    imported = runner.invoke(
        app,
        ["import-full", str(manuscript), "--book", "Book", "--store", str(store_path)],
    )
    assert imported.exit_code == 0, imported.output

    versions = runner.invoke(app, ["versions", "--book", "Book", "--store", str(store_path)])
    chapters = runner.invoke(
        app,
        ["chapters", "--book", "Book", "--version", "1", "--store", str(store_path)],
    )

    assert versions.exit_code == 0, versions.output
    assert "1: 2 chapters (first: intro)" in versions.output
    assert chapters.exit_code == 0, chapters.output
    assert "1. Intro [intro]" in chapters.output


def test_import_chapter_command_appends_to_book(tmp_path: Path) -> None:
    content = _write(tmp_path / "chapter.txt", "Some chapter text.")
    store_path = tmp_path / "library.json"
    runner = CliRunner()
    args = [
        "import-chapter",
        str(content),
        "--book",
        "Book",
        "--title",
        "The Call",
        "--store",
        str(store_path),
    ]

    first = runner.invoke(app, args)
    second = runner.invoke(app, args)

    assert "Imported chapter `the-call` at position 1." in first.output
    assert "Imported chapter `the-call-2` at position 2." in second.output


def test_import_book_command_creates_then_updates(tmp_path: Path) -> None:
    manuscript = _write(tmp_path / "book.txt", _MANUSCRIPT)
    store_path = tmp_path / "library.json"
    runner = CliRunner()
    args = [
        "import-book",
        str(manuscript),
        "--book",
        "Book",
        "--author",
        "Ada",
        "--store",
        str(store_path),
    ]

    first = runner.invoke(app, args)
    second = runner.invoke(app, args)

    assert "Created book with 2 chapters." in first.output
    assert "Updated book with 2 chapters." in second.output


def test_commands_read_store_path_from_yaml_config(tmp_path: Path) -> None:
    manuscript = _write(tmp_path / "book.txt", _MANUSCRIPT)
    store_path = tmp_path / "configured.json"
    config_path = _write(
        tmp_path / "folio.yaml",
        f"store_path: {store_path}\ndefault_version_name: Original\n",
    )
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["import-full", str(manuscript), "--book", "Book", "--config", str(config_path)],
    )

    assert result.exit_code == 0, result.output
    assert "into version Original." in result.output
    assert store_path.exists()
