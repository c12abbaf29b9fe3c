"""Record store abstraction for books, versions, chapters, and comments.

Responsibilities:
- Define the narrow query interface the importer and resolvers depend on.
- Provide an in-memory store and a JSON-file-backed store with the same semantics.
- Enforce natural-key uniqueness so concurrent writers surface conflicts as errors.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol
import uuid

from ..errors import StoreError, UniqueViolationError

BOOKS = "books"
VERSIONS = "book_versions"
CHAPTERS = "chapters"
COMMENTS = "comments"

Record = dict[str, Any]

LIBRARY_UNIQUE_KEYS: Mapping[str, tuple[tuple[str, ...], ...]] = {
    BOOKS: (("title",),),
    VERSIONS: (("book_id", "name"),),
    CHAPTERS: (("book_id", "version_id", "slug"),),
    COMMENTS: (),
}


class RecordStore(Protocol):
    """Query interface over named record collections.

    Lookups that find nothing return `None` or an empty list. Every other
    failure raises `StoreError`.
    """

    def find_one(self, collection: str, filters: Mapping[str, Any]) -> Record | None:
        """Return the first record matching all equality filters."""

    def find_many(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[Record]:
        """Return matching records, optionally ordered (`-column` for descending)."""

    def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        """Insert a record and return it with store-assigned fields."""

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> None:
        """Apply partial changes to one record by identifier."""

    def delete_where(self, collection: str, filters: Mapping[str, Any]) -> None:
        """Delete every record matching all equality filters."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _matches(record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    return all(record.get(key) == value for key, value in filters.items())


class InMemoryRecordStore:
    """Process-local record store with uniqueness constraints."""

    def __init__(
        self,
        unique_keys: Mapping[str, tuple[tuple[str, ...], ...]] = LIBRARY_UNIQUE_KEYS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize empty collections for every constrained collection name."""

        self._unique_keys = dict(unique_keys)
        self._clock = clock
        self._tables: dict[str, list[Record]] = {name: [] for name in self._unique_keys}

    @property
    def collections(self) -> tuple[str, ...]:
        """Return known collection names in declaration order."""

        return tuple(self._tables)

    def find_one(self, collection: str, filters: Mapping[str, Any]) -> Record | None:
        for record in self._table(collection):
            if _matches(record, filters):
                return dict(record)
        return None

    def find_many(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[Record]:
        rows = [dict(record) for record in self._table(collection) if _matches(record, filters)]
        if order_by:
            column = order_by.lstrip("-")
            descending = order_by.startswith("-")
            present = [row for row in rows if row.get(column) is not None]
            missing = [row for row in rows if row.get(column) is None]
            present.sort(key=lambda row: row[column], reverse=descending)
            rows = present + missing
        if limit is not None:
            rows = rows[:limit]
        return rows

    def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        table = self._table(collection)
        timestamp = self._clock().isoformat()
        row: Record = {**record, "id": str(uuid.uuid4())}
        row.setdefault("created_at", timestamp)
        row["updated_at"] = timestamp
        self._check_unique(collection, row)
        snapshot = list(table)
        table.append(row)
        self._commit_or_restore(table, snapshot)
        return dict(row)

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> None:
        table = self._table(collection)
        for position, record in enumerate(table):
            if record["id"] != record_id:
                continue
            merged = {**record, **changes, "id": record_id}
            merged["updated_at"] = self._clock().isoformat()
            self._check_unique(collection, merged)
            snapshot = list(table)
            table[position] = merged
            self._commit_or_restore(table, snapshot)
            return
        raise StoreError(f"No `{collection}` record with id `{record_id}`.")

    def delete_where(self, collection: str, filters: Mapping[str, Any]) -> None:
        table = self._table(collection)
        kept = [record for record in table if not _matches(record, filters)]
        if len(kept) == len(table):
            return
        snapshot = list(table)
        table[:] = kept
        self._commit_or_restore(table, snapshot)

    def _table(self, collection: str) -> list[Record]:
        try:
            return self._tables[collection]
        except KeyError as exc:
            raise StoreError(f"Unknown collection `{collection}`.") from exc

    def _check_unique(self, collection: str, row: Mapping[str, Any]) -> None:
        """Raise when another row already holds any unique key of `row`."""

        for columns in self._unique_keys.get(collection, ()):
            values = tuple(row.get(column) for column in columns)
            for existing in self._tables[collection]:
                if existing["id"] == row["id"]:
                    continue
                if tuple(existing.get(column) for column in columns) == values:
                    raise UniqueViolationError(collection, columns, values)

    def _commit_or_restore(self, table: list[Record], snapshot: list[Record]) -> None:
        """Persist a mutation, putting `table` back to `snapshot` if that fails."""

        try:
            self._commit()
        except StoreError:
            table[:] = snapshot
            raise

    def _commit(self) -> None:
        """Persist state after a mutation; in-memory stores keep nothing else."""


class JsonRecordStore(InMemoryRecordStore):
    """Record store persisted as one JSON document on disk."""

    def __init__(
        self,
        path: Path,
        unique_keys: Mapping[str, tuple[tuple[str, ...], ...]] = LIBRARY_UNIQUE_KEYS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the store and load existing collections from `path`."""

        super().__init__(unique_keys=unique_keys, clock=clock)
        self.path = path
        if path.exists():
            self._load()

    def _load(self) -> None:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StoreError(f"Failed to read record store `{self.path}`: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"Record store `{self.path}` is not valid JSON: {exc}") from exc

        collections = payload.get("collections") if isinstance(payload, dict) else None
        if not isinstance(collections, dict):
            raise StoreError(f"Record store `{self.path}` must contain a `collections` object.")
        for name, rows in collections.items():
            if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
                raise StoreError(f"Collection `{name}` in `{self.path}` must be a list of objects.")
            self._tables[name] = [dict(row) for row in rows]

    def _commit(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(
                    {"collections": self._tables},
                    ensure_ascii=False,
                    indent=2,
                    sort_keys=True,
                ),
                encoding="utf-8",
            )
        except OSError as exc:
            raise StoreError(f"Failed to write record store `{self.path}`: {exc}") from exc
