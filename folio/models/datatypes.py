"""Core datatypes shared across Folio modules.

Responsibilities:
- Represent immutable records exchanged between parsing, resolution, and import stages.
- Provide explicit typing for the values reported back to callers.

Key types:
- `HeadingKind`, `HeadingMatch`, `DraftChapter`, `ParsedChapter`,
  `ResolvedVersion`, `ChapterImportResult`, `ManuscriptImportResult`,
  `BookImportResult`, and `VersionOverview`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HeadingKind(str, Enum):
    """Heading convention recognized on one manuscript line."""

    MARKDOWN_HEADING = "markdown_heading"
    NUMBERED_CHAPTER = "numbered_chapter"
    NAMED_SECTION = "named_section"
    ALL_CAPS_LINE = "all_caps_line"


@dataclass(frozen=True, slots=True)
class HeadingMatch:
    """Result of classifying one line as a chapter boundary.

    Attributes:
        title: Normalized human-facing chapter title.
        kind: Heading convention that matched.
    """

    title: str
    kind: HeadingKind


@dataclass(frozen=True, slots=True)
class DraftChapter:
    """A chapter produced by segmentation, before identity resolution.

    Attributes:
        position: 1-based detection position within one segmentation pass.
        title: Chapter title.
        body: Trimmed chapter body with paragraph breaks preserved.
    """

    position: int
    title: str
    body: str


@dataclass(frozen=True, slots=True)
class ParsedChapter:
    """A segmented chapter with a pass-unique slug and table-of-contents summary."""

    title: str
    slug: str
    description: str | None
    content: str


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    """Version row chosen for one import.

    Attributes:
        id: Store identifier of the created version.
        name: Final version name actually used.
        requested_name: Name the caller asked for.
    """

    id: str
    name: str
    requested_name: str

    @property
    def renamed(self) -> bool:
        """Return whether the requested name was taken and a new one was minted."""

        return self.name != self.requested_name


@dataclass(frozen=True, slots=True)
class ChapterImportResult:
    """Outcome of a single-chapter import."""

    book_id: str
    slug: str
    order_index: int


@dataclass(frozen=True, slots=True)
class ManuscriptImportResult:
    """Outcome of a full-manuscript import into a new version."""

    book_id: str
    version_id: str
    version_name_used: str
    chapters_imported: int
    slugs: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class BookImportResult:
    """Outcome of a whole-book import that replaces unversioned chapters."""

    book_id: str
    created: bool
    chapters_imported: int


@dataclass(frozen=True, slots=True)
class VersionOverview:
    """Table-of-versions row for one book version.

    Attributes:
        id: Store identifier of the version.
        name: Version label.
        chapter_count: Number of chapters in the version.
        first_slug: Slug of the first chapter in reading order, if any.
        summary: Combined summary of the version's chapters, if any text exists.
    """

    id: str
    name: str
    chapter_count: int
    first_slug: str | None
    summary: str | None
