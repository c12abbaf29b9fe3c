"""Domain exceptions for manuscript parsing, identity resolution, and CLI diagnostics."""

from __future__ import annotations


class FolioError(RuntimeError):
    """Base class for all Folio domain errors."""


class ValidationError(FolioError, ValueError):
    """Raised when a required import field is missing or blank."""

    def __init__(self, field_name: str, detail: str) -> None:
        """Initialize a field-scoped validation error."""

        super().__init__(detail)
        self.field_name = field_name
        self.detail = detail


class StoreError(FolioError):
    """Raised when the record store fails to complete an operation."""


class UniqueViolationError(StoreError):
    """Raised when an insert or update breaks a store uniqueness constraint."""

    def __init__(self, collection: str, columns: tuple[str, ...], values: tuple[object, ...]) -> None:
        """Initialize a constraint error with the violated column set."""

        rendered = ", ".join(f"{column}={value!r}" for column, value in zip(columns, values))
        super().__init__(f"Duplicate `{collection}` row for ({rendered}).")
        self.collection = collection
        self.columns = columns
        self.values = values


class ResolutionExhaustedError(FolioError):
    """Raised when a bounded name or slug search finds no free candidate."""

    def __init__(self, kind: str, candidate: str, attempts: int) -> None:
        """Initialize an exhausted-search error for one candidate identifier."""

        super().__init__(
            f"Could not find a free {kind} for `{candidate}` after {attempts} attempts."
        )
        self.kind = kind
        self.candidate = candidate
        self.attempts = attempts


class ImportStageError(RuntimeError):
    """Raised when a specific CLI stage fails before the core is invoked."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped import error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class RecordNotFoundError(FolioError, LookupError):
    """Raised when an operation needs an existing book, version, or chapter that is absent."""

    def __init__(self, kind: str, key: str) -> None:
        """Initialize a lookup error for one natural key."""

        super().__init__(f"No {kind} found for `{key}`.")
        self.kind = kind
        self.key = key
