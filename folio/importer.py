"""Manuscript import orchestration.

Responsibilities:
- Expose the parse and import entry points used by the CLI and other callers.
- Combine segmentation, identity resolution, and record-store writes per flow.
- Emit stage telemetry around every store-touching step.

Key public entry points:
- `BookImporter.parse_manuscript`: pure segmentation preview.
- `BookImporter.import_chapter`: append one chapter to a book's unversioned scope.
- `BookImporter.import_full_manuscript`: import a manuscript into a new version.
- `BookImporter.import_book`: replace a book's unversioned chapters wholesale.

Multi-step imports are not transactional. A failure after the book or version
row was written leaves those rows in place for the caller to reconcile.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping, TypeVar

from .config import FolioConfig
from .errors import RecordNotFoundError, ValidationError
from .io.chapter_splitter import ChapterSplitter
from .io.storage import BOOKS, CHAPTERS, COMMENTS, VERSIONS, RecordStore
from .library.resolver import IdentityResolver
from .models.datatypes import (
    BookImportResult,
    ChapterImportResult,
    ManuscriptImportResult,
    ParsedChapter,
    VersionOverview,
)
from .parsing import normalize_optional_string, require_text
from .telemetry.logger import RunLogger
from .text.slug import chapter_base_slug
from .text.summary import summarize

_StageResult = TypeVar("_StageResult")


class BookImporter:
    """Import pasted manuscripts into a record store."""

    def __init__(
        self,
        store: RecordStore,
        config: FolioConfig | None = None,
        run_logger: RunLogger | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize parsing and resolution components from one configuration."""

        self._config = config or FolioConfig()
        self._config.validate()
        self._store = store
        self._run_logger = run_logger
        self._splitter = ChapterSplitter(
            untitled_title=self._config.untitled_chapter_title,
            summary_max_chars=self._config.summary_max_chars,
        )
        self._resolver = IdentityResolver(
            store,
            default_version_name=self._config.default_version_name,
            slug_retry_limit=self._config.slug_retry_limit,
            version_retry_limit=self._config.version_retry_limit,
            clock=clock,
        )

    @property
    def resolver(self) -> IdentityResolver:
        """Return the identity resolver bound to this importer's store."""

        return self._resolver

    def parse_manuscript(self, text: str) -> list[ParsedChapter]:
        """Segment a manuscript into titled chapters without touching the store."""

        return self._splitter.parse(text)

    def import_chapter(
        self,
        book_title: str,
        author: str | None,
        chapter_title: str,
        chapter_content: str,
    ) -> ChapterImportResult:
        """Append one chapter to the unversioned scope of a book.

        The book is created when no book has this exact title. The chapter
        slug is made unique within the scope and the chapter is placed after
        the last existing chapter.
        """

        title = require_text(book_title, "book_title")
        heading = require_text(chapter_title, "chapter_title")
        content = require_text(chapter_content, "chapter_content")

        book_id = self._run_stage("book", lambda: self._resolver.resolve_book(title, author))

        def write_chapter() -> ChapterImportResult:
            order_index = self._resolver.next_order_index(book_id, None)
            slug = self._resolver.resolve_chapter_slug(
                book_id,
                None,
                chapter_base_slug(heading, order_index),
            )
            self._store.insert(
                CHAPTERS,
                self._chapter_row(book_id, None, slug, heading, content, order_index),
            )
            return ChapterImportResult(book_id=book_id, slug=slug, order_index=order_index)

        return self._run_stage("chapters", write_chapter)

    def import_full_manuscript(
        self,
        book_title: str,
        author: str | None,
        version_label: str | None,
        manuscript_text: str,
    ) -> ManuscriptImportResult:
        """Segment a manuscript and import every chapter into a new book version.

        The requested version label is used when free; otherwise the next free
        label is minted and reported in the result.
        """

        title = require_text(book_title, "book_title")
        chapters = self._require_chapters(manuscript_text)

        book_id = self._run_stage("book", lambda: self._resolver.resolve_book(title, author))
        version = self._run_stage(
            "version", lambda: self._resolver.resolve_version(book_id, version_label)
        )

        def write_chapters() -> tuple[str, ...]:
            used = self._resolver.used_slugs(book_id, version.id)
            start_order = self._resolver.next_order_index(book_id, version.id)
            slugs: list[str] = []
            for offset, chapter in enumerate(chapters):
                slug = self._resolver.resolve_chapter_slug(book_id, version.id, chapter.slug, used)
                used.add(slug)
                self._store.insert(
                    CHAPTERS,
                    self._chapter_row(
                        book_id,
                        version.id,
                        slug,
                        chapter.title,
                        chapter.content,
                        start_order + offset,
                    ),
                )
                slugs.append(slug)
            return tuple(slugs)

        slugs = self._run_stage("chapters", write_chapters, chapters=len(chapters))
        return ManuscriptImportResult(
            book_id=book_id,
            version_id=version.id,
            version_name_used=version.name,
            chapters_imported=len(slugs),
            slugs=slugs,
        )

    def import_book(
        self,
        book_title: str,
        author: str,
        manuscript_text: str,
        *,
        subtitle: str | None = None,
        description: str | None = None,
        cover_alt: str | None = None,
    ) -> BookImportResult:
        """Import a manuscript as the book's unversioned chapters, replacing old ones."""

        title = require_text(book_title, "book_title")
        book_author = require_text(author, "author")
        chapters = self._require_chapters(manuscript_text)

        created = self._resolver.find_book_id(title) is None
        book_id = self._run_stage(
            "book",
            lambda: self._resolver.resolve_book(
                title,
                book_author,
                subtitle=subtitle,
                description=description,
                cover_alt=cover_alt,
            ),
        )

        def replace_chapters() -> int:
            self._store.delete_where(CHAPTERS, {"book_id": book_id, "version_id": None})
            for order_index, chapter in enumerate(chapters, start=1):
                self._store.insert(
                    CHAPTERS,
                    self._chapter_row(
                        book_id, None, chapter.slug, chapter.title, chapter.content, order_index
                    ),
                )
            return len(chapters)

        imported = self._run_stage("replace", replace_chapters, chapters=len(chapters))
        return BookImportResult(book_id=book_id, created=created, chapters_imported=imported)

    def list_versions(self, book_title: str) -> list[VersionOverview]:
        """Return version overview rows for a book in creation order."""

        book_id = self._resolver.find_book_id(book_title)
        if book_id is None:
            return []

        overviews: list[VersionOverview] = []
        for version in self._store.find_many(VERSIONS, {"book_id": book_id}, order_by="created_at"):
            rows = self._store.find_many(
                CHAPTERS,
                {"book_id": book_id, "version_id": version["id"]},
                order_by="order_index",
            )
            joined = " ".join(
                row.get("description") or (row.get("content") or "").split("\n\n")[0]
                for row in rows
            )
            overviews.append(
                VersionOverview(
                    id=version["id"],
                    name=version["name"],
                    chapter_count=len(rows),
                    first_slug=rows[0]["slug"] if rows else None,
                    summary=summarize(joined, self._config.overview_summary_max_chars),
                )
            )
        return overviews

    def list_chapters(self, book_title: str, version_name: str | None = None) -> list[ParsedChapter]:
        """Return a scope's chapters in reading order.

        `version_name=None` selects the book's unversioned chapters. Unknown
        books or versions yield an empty list.
        """

        book_id = self._resolver.find_book_id(book_title)
        if book_id is None:
            return []
        version_id: str | None = None
        if version_name is not None:
            version = self._store.find_one(VERSIONS, {"book_id": book_id, "name": version_name})
            if version is None:
                return []
            version_id = version["id"]

        rows = self._store.find_many(
            CHAPTERS,
            {"book_id": book_id, "version_id": version_id},
            order_by="order_index",
        )
        return [
            ParsedChapter(
                title=row["title"],
                slug=row["slug"],
                description=row.get("description"),
                content=row["content"],
            )
            for row in rows
        ]

    def add_comment(
        self,
        book_title: str,
        version_name: str | None,
        chapter_slug: str,
        content: str,
        author_name: str | None = None,
        anchor: Mapping[str, Any] | None = None,
    ) -> str:
        """Store a reader comment on one chapter and return the comment id."""

        body = require_text(content, "content")

        def write_comment() -> str:
            book_id = self._resolver.find_book_id(book_title)
            if book_id is None:
                raise RecordNotFoundError("book", book_title)
            version_id: str | None = None
            if version_name is not None:
                version = self._store.find_one(
                    VERSIONS, {"book_id": book_id, "name": version_name}
                )
                if version is None:
                    raise RecordNotFoundError("version", version_name)
                version_id = version["id"]
            chapter = self._store.find_one(
                CHAPTERS,
                {"book_id": book_id, "version_id": version_id, "slug": chapter_slug},
            )
            if chapter is None:
                raise RecordNotFoundError("chapter", chapter_slug)

            row = self._store.insert(
                COMMENTS,
                {
                    "book_id": book_id,
                    "chapter_id": chapter["id"],
                    "version_id": version_id,
                    "content": body,
                    "author_name": normalize_optional_string(author_name),
                    "anchor": dict(anchor) if anchor is not None else None,
                },
            )
            return row["id"]

        return self._run_stage("comment", write_comment)

    def _require_chapters(self, manuscript_text: str) -> list[ParsedChapter]:
        """Parse a manuscript and reject one that yields no chapters."""

        chapters = self.parse_manuscript(manuscript_text or "")
        if not chapters:
            raise ValidationError("manuscript", "Manuscript contains no chapter text.")
        return chapters

    def _chapter_row(
        self,
        book_id: str,
        version_id: str | None,
        slug: str,
        title: str,
        content: str,
        order_index: int,
    ) -> dict[str, Any]:
        """Build one chapter record with its table-of-contents summary."""

        return {
            "book_id": book_id,
            "version_id": version_id,
            "slug": slug,
            "title": title.strip(),
            "description": summarize(content, self._config.summary_max_chars),
            "content": content,
            "order_index": order_index,
        }

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
        **context: object,
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name, **context)
        try:
            result = action()
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
            raise
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name, **context)
        return result
