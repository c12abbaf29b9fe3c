"""Deterministic slug helpers for URL-safe chapter identifiers.

Responsibilities:
- Normalize free-form titles into canonical lowercase ASCII slugs.
- Provide the placeholder slug used when a title yields no valid characters.
"""

from __future__ import annotations

import re

_DISALLOWED_RE = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHEN_RUN_RE = re.compile(r"-+")


def slugify(title: str) -> str:
    """Return a URL-safe slug for a title, or an empty string when nothing survives."""

    lowered = title.lower()
    kept = _DISALLOWED_RE.sub("", lowered)
    hyphenated = _WHITESPACE_RE.sub("-", kept)
    collapsed = _HYPHEN_RUN_RE.sub("-", hyphenated)
    return collapsed.strip("-")


def fallback_chapter_slug(position: int) -> str:
    """Return the placeholder slug for the chapter at a 1-based position."""

    return f"chapter-{position}"


def chapter_base_slug(title: str, position: int) -> str:
    """Return the slugified title, falling back to a positional placeholder."""

    return slugify(title) or fallback_chapter_slug(position)
