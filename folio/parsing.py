"""Shared parsing helpers for configuration and import-field normalization."""

from __future__ import annotations

from .errors import ValidationError


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_positive_int(value: object, field_name: str) -> int:
    """Parse a strictly positive integer from an int or numeric text token.

    Args:
        value: Integer or textual integer value.
        field_name: Field name for an actionable validation error message.

    Raises:
        ValueError: If the value is not a positive integer.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive integer.")
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None or not normalized.isdigit():
            raise ValueError(f"`{field_name}` must be a positive integer.")
        parsed = int(normalized)
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer.")
    return parsed


def require_text(value: object, field_name: str) -> str:
    """Return stripped required text or raise a field-scoped `ValidationError`."""

    normalized = normalize_optional_string(value)
    if normalized is None:
        raise ValidationError(field_name, f"`{field_name}` must not be blank.")
    return normalized
