"""Shared typed data models for Folio.

This package contains dataclasses used across parsing and import modules to
avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    BookImportResult,
    ChapterImportResult,
    DraftChapter,
    HeadingKind,
    HeadingMatch,
    ManuscriptImportResult,
    ParsedChapter,
    ResolvedVersion,
    VersionOverview,
)

__all__ = [
    "BookImportResult",
    "ChapterImportResult",
    "DraftChapter",
    "HeadingKind",
    "HeadingMatch",
    "ManuscriptImportResult",
    "ParsedChapter",
    "ResolvedVersion",
    "VersionOverview",
]
