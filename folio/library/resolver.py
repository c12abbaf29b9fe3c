"""Book, version, and chapter identity resolution against a record store.

Responsibilities:
- Look up or create books by exact title.
- Mint a fresh, distinctly named version for every import.
- Resolve chapter slug collisions and reading-order positions within a
  (book, version) scope.

Every operation is a read followed by a write without a spanning transaction.
Conflicts that slip through are caught by the store's uniqueness constraints
and retried here a bounded number of times.
"""

from __future__ import annotations

import re
import time
from typing import Callable, Collection

from ..errors import ResolutionExhaustedError, UniqueViolationError, ValidationError
from ..io.storage import BOOKS, CHAPTERS, VERSIONS, RecordStore
from ..models.datatypes import ResolvedVersion
from ..parsing import normalize_optional_string, require_text

DEFAULT_VERSION_NAME = "1"
DEFAULT_SLUG_RETRY_LIMIT = 10
DEFAULT_VERSION_RETRY_LIMIT = 10

_NUMERIC_RE = re.compile(r"^[0-9]+$")
_NUMERIC_SUFFIX_RE = re.compile(r"^(?P<prefix>.*?)(?P<number>[0-9]+)$", re.DOTALL)
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def next_version_name(requested: str, taken: Collection[str]) -> str:
    """Return the next version name after `requested` that is not in `taken`.

    - Purely numeric names count up as integers (`"1"` -> `"2"`).
    - Names ending in digits count up the suffix and keep the prefix (`"v1"` -> `"v2"`).
    - Other names get `2`, `3`, ... appended (`"Original"` -> `"Original2"`).
    """

    if _NUMERIC_RE.match(requested):
        number = int(requested) + 1
        while str(number) in taken:
            number += 1
        return str(number)

    suffix_match = _NUMERIC_SUFFIX_RE.match(requested)
    if suffix_match:
        prefix = suffix_match.group("prefix")
        number = int(suffix_match.group("number")) + 1
    else:
        prefix = requested
        number = 2
    while f"{prefix}{number}" in taken:
        number += 1
    return f"{prefix}{number}"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


class IdentityResolver:
    """Resolve natural-key collisions for books, versions, and chapter slugs."""

    def __init__(
        self,
        store: RecordStore,
        *,
        default_version_name: str = DEFAULT_VERSION_NAME,
        slug_retry_limit: int = DEFAULT_SLUG_RETRY_LIMIT,
        version_retry_limit: int = DEFAULT_VERSION_RETRY_LIMIT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the resolver over an explicit store handle."""

        if slug_retry_limit <= 0 or version_retry_limit <= 0:
            raise ValueError("Retry limits must be positive integers.")
        self._store = store
        self._default_version_name = default_version_name
        self._slug_retry_limit = slug_retry_limit
        self._version_retry_limit = version_retry_limit
        self._clock = clock

    def find_book_id(self, title: str) -> str | None:
        """Return the id of the book with exactly this (trimmed) title, if any."""

        row = self._store.find_one(BOOKS, {"title": require_text(title, "book_title")})
        return None if row is None else row["id"]

    def resolve_book(
        self,
        title: str,
        author: str | None = None,
        *,
        subtitle: str | None = None,
        description: str | None = None,
        cover_alt: str | None = None,
    ) -> str:
        """Return the id of the book titled `title`, creating it when absent.

        Non-blank metadata values overwrite the stored ones on an existing
        book. A concurrent insert of the same title is resolved by looking
        the winner up again.
        """

        book_title = require_text(title, "book_title")
        metadata: dict[str, str] = {}
        for key, value in (
            ("author", author),
            ("subtitle", subtitle),
            ("description", description),
            ("cover_alt", cover_alt),
        ):
            normalized = normalize_optional_string(value)
            if normalized is not None:
                metadata[key] = normalized

        existing = self._store.find_one(BOOKS, {"title": book_title})
        if existing is not None:
            if metadata:
                self._store.update(BOOKS, existing["id"], metadata)
            return existing["id"]

        record = {
            "title": book_title,
            "author": None,
            "subtitle": None,
            "description": None,
            "cover_alt": None,
            **metadata,
        }
        try:
            return self._store.insert(BOOKS, record)["id"]
        except UniqueViolationError:
            winner = self._store.find_one(BOOKS, {"title": book_title})
            if winner is None:
                raise
            if metadata:
                self._store.update(BOOKS, winner["id"], metadata)
            return winner["id"]

    def resolve_version(
        self,
        book_id: str,
        requested_name: str | None,
        description: str | None = None,
    ) -> ResolvedVersion:
        """Create a new version for `book_id` and return its id and final name.

        A free requested name is used verbatim. A taken name is never reused;
        the next free name from `next_version_name` is minted instead.
        """

        requested = normalize_optional_string(requested_name) or self._default_version_name
        name = requested
        if self._store.find_one(VERSIONS, {"book_id": book_id, "name": requested}) is not None:
            name = self._next_free_version_name(book_id, requested)

        for _ in range(self._version_retry_limit):
            try:
                row = self._store.insert(
                    VERSIONS,
                    {
                        "book_id": book_id,
                        "name": name,
                        "description": normalize_optional_string(description),
                    },
                )
            except UniqueViolationError:
                name = self._next_free_version_name(book_id, requested)
                continue
            return ResolvedVersion(id=row["id"], name=name, requested_name=requested)

        raise ResolutionExhaustedError("version name", requested, self._version_retry_limit)

    def used_slugs(self, book_id: str, version_id: str | None) -> set[str]:
        """Return every chapter slug already stored in a (book, version) scope."""

        rows = self._store.find_many(CHAPTERS, {"book_id": book_id, "version_id": version_id})
        return {row["slug"] for row in rows}

    def resolve_chapter_slug(
        self,
        book_id: str,
        version_id: str | None,
        candidate: str,
        used_slugs: Collection[str] | None = None,
    ) -> str:
        """Return `candidate` or the first free `-N` variant within the scope.

        Up to the retry limit of numbered variants are tried, then a single
        time-derived suffix. `used_slugs` is loaded from the store when omitted.
        """

        if not candidate:
            raise ValidationError("slug", "Chapter slug candidate must not be empty.")
        used = self.used_slugs(book_id, version_id) if used_slugs is None else used_slugs

        if candidate not in used:
            return candidate
        for suffix in range(2, self._slug_retry_limit + 2):
            slug = f"{candidate}-{suffix}"
            if slug not in used:
                return slug

        slug = f"{candidate}-{_base36(int(self._clock() * 1000))}"
        if slug not in used:
            return slug
        raise ResolutionExhaustedError("chapter slug", candidate, self._slug_retry_limit + 1)

    def next_order_index(self, book_id: str, version_id: str | None) -> int:
        """Return one more than the highest order index in scope, or 1 when empty."""

        rows = self._store.find_many(
            CHAPTERS,
            {"book_id": book_id, "version_id": version_id},
            order_by="-order_index",
            limit=1,
        )
        if not rows:
            return 1
        return int(rows[0]["order_index"]) + 1

    def _next_free_version_name(self, book_id: str, requested: str) -> str:
        rows = self._store.find_many(VERSIONS, {"book_id": book_id})
        return next_version_name(requested, {row["name"] for row in rows})
