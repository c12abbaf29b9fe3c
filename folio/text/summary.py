"""Table-of-contents summary helpers.

Responsibilities:
- Collapse chapter body whitespace into a single display line.
- Derive a bounded preview that prefers a clean sentence boundary over a hard cut.
"""

from __future__ import annotations

import re

DEFAULT_SUMMARY_MAX_CHARS = 160
_SENTENCE_MIN_CHARS = 40
_SENTENCE_BREAK = ". "
_ELLIPSIS = "…"
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim the result."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def summarize(body: str, max_length: int = DEFAULT_SUMMARY_MAX_CHARS) -> str | None:
    """Return a preview of at most `max_length` characters, or `None` for blank text.

    Text that already fits is returned whole. Longer text is cut after the first
    period followed by a space that lies past the minimum sentence length and
    before `max_length`; otherwise it is hard-truncated and ends with an ellipsis.

    The minimum sentence length is 40 characters. Limits of 40 or less, where
    no such sentence could fit, use a quarter of `max_length` instead.
    """

    if max_length <= 1:
        raise ValueError("`max_length` must be greater than 1.")

    text = normalize_whitespace(body)
    if not text:
        return None
    if len(text) <= max_length:
        return text

    if max_length > _SENTENCE_MIN_CHARS:
        lower_bound = _SENTENCE_MIN_CHARS
    else:
        lower_bound = max_length // 4
    period_index = text.find(_SENTENCE_BREAK, lower_bound + 1)
    if 0 <= period_index < max_length:
        return text[: period_index + 1]
    return text[: max_length - 1] + _ELLIPSIS
