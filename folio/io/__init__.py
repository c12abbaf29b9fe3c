"""Input/output components for Folio.

This package contains manuscript segmentation and the record store
interfaces used by the importer.
"""

from .chapter_splitter import ChapterSplitter
from .storage import InMemoryRecordStore, JsonRecordStore, RecordStore

__all__ = ["ChapterSplitter", "InMemoryRecordStore", "JsonRecordStore", "RecordStore"]
