"""Command-line interface for Folio.

Responsibilities:
- Expose user-facing commands for manuscript parsing and import flows.
- Convert CLI options into `FolioConfig` and a JSON record store.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_book_import,
    echo_chapter_import,
    echo_manuscript_import,
    echo_parsed_chapters,
    echo_version_list,
    exit_with_command_error,
)
from .config import ConfigLoader, FolioConfig
from .errors import ImportStageError
from .importer import BookImporter
from .io.storage import InMemoryRecordStore, JsonRecordStore
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="folio",
    no_args_is_help=True,
    help="Folio manuscript importer CLI.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file."),
]
StoreOption = Annotated[
    Path | None,
    typer.Option("--store", help="Path to the JSON record store (overrides config)."),
]
BookOption = Annotated[str, typer.Option("--book", help="Exact book title.")]


def _load_config(config_path: Path | None, store_path: Path | None) -> FolioConfig:
    """Load YAML or environment config and map failures to stage errors."""

    try:
        config = (
            ConfigLoader.from_env() if config_path is None else ConfigLoader.from_yaml(config_path)
        )
    except FileNotFoundError as exc:
        raise ImportStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ImportStageError(
            stage="config",
            detail=f"Invalid configuration: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise ImportStageError(
            stage="config",
            detail=f"Failed to load configuration: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc

    if store_path is not None:
        config.store_path = store_path
    return config


def _read_text(path: Path, label: str) -> str:
    """Read a UTF-8 input file and map failures to stage errors."""

    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ImportStageError(
            stage="input",
            detail=f"{label} file not found: `{path}`.",
            hint="Pass an existing UTF-8 text file.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ImportStageError(
            stage="input",
            detail=f"Failed to read {label.lower()} file `{path}`: {exc}",
            hint="Verify the file is readable UTF-8 text.",
        ) from exc


def _build_importer(config: FolioConfig) -> BookImporter:
    """Create an importer over the configured JSON record store."""

    return BookImporter(JsonRecordStore(config.store_path), config=config, run_logger=RunLogger())


@app.command("parse")
def parse_command(
    manuscript: Annotated[Path, typer.Argument(help="Path to manuscript text file.")],
    config_file: ConfigOption = None,
) -> None:
    """Preview detected chapters, slugs, and summaries without saving."""

    try:
        config = _load_config(config_file, None)
        text = _read_text(manuscript, "Manuscript")
        importer = BookImporter(InMemoryRecordStore(), config=config)
        chapters = importer.parse_manuscript(text)
    except Exception as exc:
        exit_with_command_error("parse", exc)

    echo_parsed_chapters(chapters)


@app.command("import-full")
def import_full_command(
    manuscript: Annotated[Path, typer.Argument(help="Path to manuscript text file.")],
    book: BookOption,
    author: Annotated[str | None, typer.Option("--author", help="Book author.")] = None,
    version: Annotated[
        str | None,
        typer.Option("--version", help="Requested version label (default from config)."),
    ] = None,
    config_file: ConfigOption = None,
    store: StoreOption = None,
) -> None:
    """Import a full manuscript into a new version of a book."""

    try:
        config = _load_config(config_file, store)
        text = _read_text(manuscript, "Manuscript")
        result = _build_importer(config).import_full_manuscript(book, author, version, text)
    except Exception as exc:
        exit_with_command_error("import-full", exc)

    echo_manuscript_import(result)


@app.command("import-chapter")
def import_chapter_command(
    content: Annotated[Path, typer.Argument(help="Path to chapter text file.")],
    book: BookOption,
    title: Annotated[str, typer.Option("--title", help="Chapter title.")],
    author: Annotated[str | None, typer.Option("--author", help="Book author.")] = None,
    config_file: ConfigOption = None,
    store: StoreOption = None,
) -> None:
    """Append one chapter to a book's unversioned chapters."""

    try:
        config = _load_config(config_file, store)
        text = _read_text(content, "Chapter")
        result = _build_importer(config).import_chapter(book, author, title, text)
    except Exception as exc:
        exit_with_command_error("import-chapter", exc)

    echo_chapter_import(result)


@app.command("import-book")
def import_book_command(
    manuscript: Annotated[Path, typer.Argument(help="Path to manuscript text file.")],
    book: BookOption,
    author: Annotated[str, typer.Option("--author", help="Book author.")],
    subtitle: Annotated[str | None, typer.Option("--subtitle", help="Book subtitle.")] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Book description.")
    ] = None,
    cover_alt: Annotated[
        str | None, typer.Option("--cover-alt", help="Cover image alt text.")
    ] = None,
    config_file: ConfigOption = None,
    store: StoreOption = None,
) -> None:
    """Import a manuscript as a book's chapters, replacing unversioned ones."""

    try:
        config = _load_config(config_file, store)
        text = _read_text(manuscript, "Manuscript")
        result = _build_importer(config).import_book(
            book,
            author,
            text,
            subtitle=subtitle,
            description=description,
            cover_alt=cover_alt,
        )
    except Exception as exc:
        exit_with_command_error("import-book", exc)

    echo_book_import(result)


@app.command("versions")
def versions_command(
    book: BookOption,
    config_file: ConfigOption = None,
    store: StoreOption = None,
) -> None:
    """List a book's versions with chapter counts and summaries."""

    try:
        config = _load_config(config_file, store)
        versions = _build_importer(config).list_versions(book)
    except Exception as exc:
        exit_with_command_error("versions", exc)

    echo_version_list(versions)


@app.command("chapters")
def chapters_command(
    book: BookOption,
    version: Annotated[
        str | None,
        typer.Option("--version", help="Version label; omit for unversioned chapters."),
    ] = None,
    config_file: ConfigOption = None,
    store: StoreOption = None,
) -> None:
    """List a book's chapters in reading order."""

    try:
        config = _load_config(config_file, store)
        chapters = _build_importer(config).list_chapters(book, version)
    except Exception as exc:
        exit_with_command_error("chapters", exc)

    echo_parsed_chapters(chapters)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
