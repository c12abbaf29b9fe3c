"""Text helpers for manuscript segmentation.

This package provides deterministic slug, summary, and heading-recognition
building blocks used by the chapter splitter.
"""

from .headings import HeadingClassifier
from .slug import slugify
from .summary import normalize_whitespace, summarize

__all__ = ["HeadingClassifier", "slugify", "normalize_whitespace", "summarize"]
