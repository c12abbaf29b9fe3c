"""CLI error-handling tests for concise diagnostics."""

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from folio.cli import app
from folio.errors import StoreError


def test_import_full_reports_missing_manuscript(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "import-full",
            str(tmp_path / "missing.txt"),
            "--book",
            "Book",
            "--store",
            str(tmp_path / "library.json"),
        ],
    )

    assert result.exit_code == 1
    assert "import-full failed at stage `input`" in result.output
    assert "Hint: Pass an existing UTF-8 text file." in result.output


def test_parse_reports_missing_config_file(tmp_path: Path) -> None:
    manuscript = tmp_path / "book.txt"
    manuscript.write_text("## A\nText.", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        app, ["parse", str(manuscript), "--config", "missing-folio.yaml"]
    )

    assert result.exit_code == 1
    assert "parse failed at stage `config`" in result.output
    assert "Config file not found: `missing-folio.yaml`." in result.output


def test_import_full_reports_invalid_config_values(tmp_path: Path) -> None:
    manuscript = tmp_path / "book.txt"
    manuscript.write_text("## A\nText.", encoding="utf-8")
    config_path = tmp_path / "folio.yaml"
    config_path.write_text("summary_max_chars: 0\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["import-full", str(manuscript), "--book", "Book", "--config", str(config_path)],
    )

    assert result.exit_code == 1
    assert "import-full failed at stage `config`" in result.output
    assert "summary_max_chars" in result.output


def test_import_full_reports_manuscript_without_chapters(tmp_path: Path) -> None:
    manuscript = tmp_path / "blank.txt"
    manuscript.write_text("\n   \n", encoding="utf-8")
    store_path = tmp_path / "library.json"
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["import-full", str(manuscript), "--book", "Book", "--store", str(store_path)],
    )

    assert result.exit_code == 1
    assert (
        "import-full failed: invalid `manuscript`: Manuscript contains no chapter text."
        in result.output
    )
    assert not store_path.exists()


def test_versions_reports_store_error(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Store failures should surface as generic command failures with exit code 1."""

    def _failing_list_versions(*_: object, **__: object) -> None:
        raise StoreError("Failed to read record store `library.json`: permission denied")

    monkeypatch.setattr("folio.cli.BookImporter.list_versions", _failing_list_versions)
    runner = CliRunner()

    result = runner.invoke(
        app, ["versions", "--book", "Book", "--store", str(tmp_path / "library.json")]
    )

    assert result.exit_code == 1
    assert "versions failed: Failed to read record store" in result.output
