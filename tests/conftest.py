"""Shared pytest fixtures for the full Folio test suite."""

from __future__ import annotations

import pytest

from folio.importer import BookImporter
from folio.io.storage import InMemoryRecordStore


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Provide an empty in-memory record store with library constraints."""

    return InMemoryRecordStore()


@pytest.fixture
def importer(store: InMemoryRecordStore) -> BookImporter:
    """Provide an importer with default configuration over the shared store."""

    return BookImporter(store)
