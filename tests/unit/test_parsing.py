"""Unit tests for shared parsing helpers."""

import pytest

from folio.errors import ValidationError
from folio.parsing import normalize_optional_string, parse_positive_int, require_text


def test_normalize_optional_string_handles_blank_values() -> None:
    """Normalization should return `None` for `None` and blank textual values."""

    assert normalize_optional_string(None) is None
    assert normalize_optional_string("") is None
    assert normalize_optional_string("   ") is None


def test_normalize_optional_string_strips_non_blank_values() -> None:
    assert normalize_optional_string("  value  ") == "value"
    assert normalize_optional_string(42) == "42"


@pytest.mark.parametrize(("value", "expected"), [(3, 3), ("12", 12), (" 7 ", 7)])
def test_parse_positive_int_accepts_ints_and_digit_tokens(value: object, expected: int) -> None:
    assert parse_positive_int(value, "limit") == expected


@pytest.mark.parametrize("value", [0, -1, True, "0", "1.5", "", None, "ten"])
def test_parse_positive_int_rejects_invalid_values(value: object) -> None:
    with pytest.raises(ValueError, match="`limit` must be a positive integer."):
        parse_positive_int(value, "limit")


def test_require_text_returns_stripped_value_or_raises() -> None:
    assert require_text("  Title ", "book_title") == "Title"

    with pytest.raises(ValidationError) as error:
        require_text(" \n ", "book_title")

    assert error.value.field_name == "book_title"
    assert isinstance(error.value, ValueError)
