"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
parsed chapter previews, import outcomes, and version listings.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import ImportStageError, ValidationError
from .models.datatypes import (
    BookImportResult,
    ChapterImportResult,
    ManuscriptImportResult,
    ParsedChapter,
    VersionOverview,
)


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ImportStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    elif isinstance(exc, ValidationError):
        typer.secho(
            f"{command_name} failed: invalid `{exc.field_name}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_parsed_chapters(chapters: list[ParsedChapter]) -> None:
    """Print numbered chapter rows with slugs and summaries."""

    if not chapters:
        typer.echo("No chapters detected.")
        return
    typer.echo(f"Detected chapters: {len(chapters)}")
    for index, chapter in enumerate(chapters, start=1):
        typer.echo(f"{index}. {chapter.title} [{chapter.slug}]")
        if chapter.description:
            typer.echo(f"   {chapter.description}")


def echo_manuscript_import(result: ManuscriptImportResult) -> None:
    """Print the version name actually used and the imported chapter count."""

    typer.echo(
        f"Imported {result.chapters_imported} chapters into version {result.version_name_used}."
    )


def echo_chapter_import(result: ChapterImportResult) -> None:
    """Print the stored slug and reading position of one imported chapter."""

    typer.echo(f"Imported chapter `{result.slug}` at position {result.order_index}.")


def echo_book_import(result: BookImportResult) -> None:
    """Print whether the book was created and how many chapters were written."""

    action = "Created" if result.created else "Updated"
    typer.echo(f"{action} book with {result.chapters_imported} chapters.")


def echo_version_list(versions: list[VersionOverview]) -> None:
    """Print version rows in creation order."""

    if not versions:
        typer.echo("No versions found.")
        return
    for version in versions:
        first = version.first_slug or "-"
        typer.echo(f"{version.name}: {version.chapter_count} chapters (first: {first})")
        if version.summary:
            typer.echo(f"   {version.summary}")
