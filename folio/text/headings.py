"""Chapter heading recognition for pasted manuscripts.

Responsibilities:
- Decide whether one physical line marks the start of a new chapter.
- Normalize the heading into a display title across competing conventions.

Recognizers run in a fixed priority order and the first match wins:
markdown headings, numbered chapter markers, named section markers, and
finally all-caps lines.
"""

from __future__ import annotations

import re
from typing import Callable

from ..models.datatypes import HeadingKind, HeadingMatch

SECTION_NAMES: tuple[str, ...] = (
    "introduction",
    "prologue",
    "epilogue",
    "preface",
    "foreword",
    "afterword",
)

_SEPARATOR = r"[:.\-–—]"
# Well-formed numerals only, so words such as "did" or "civil" stay body text.
_ROMAN_NUMERAL = (
    r"(?=[ivxlcdm])m{0,4}(?:cm|cd|d?c{0,3})(?:xc|xl|l?x{0,3})(?:ix|iv|v?i{0,3})(?<=[ivxlcdm])"
)


class HeadingClassifier:
    """Classify manuscript lines as chapter headings."""

    _MARKDOWN_RE = re.compile(r"^#{1,3}\s+(?P<title>.+)$")
    _NUMBERED_RE = re.compile(
        r"^(?:chapter|ch\.)\s+(?P<number>\d+|" + _ROMAN_NUMERAL + r")\b"
        rf"\s*(?:{_SEPARATOR}\s*)?(?P<rest>.*)$",
        re.IGNORECASE,
    )
    _ALL_CAPS_RE = re.compile(r"^[A-Z][A-Z0-9 ,'\-]{3,}$")

    def __init__(self, section_names: tuple[str, ...] = SECTION_NAMES) -> None:
        """Initialize recognizers with the named-section vocabulary."""

        alternation = "|".join(re.escape(name) for name in section_names)
        self._named_re = re.compile(
            rf"^(?P<name>{alternation})(?:\s*{_SEPARATOR}\s*(?P<rest>.*))?$",
            re.IGNORECASE,
        )
        self._recognizers: tuple[Callable[[str], HeadingMatch | None], ...] = (
            self._markdown_heading,
            self._numbered_chapter,
            self._named_section,
            self._all_caps_line,
        )

    def classify(self, line: str) -> HeadingMatch | None:
        """Return the heading match for a line, or `None` for body text and blank lines."""

        candidate = line.strip()
        if not candidate:
            return None
        for recognizer in self._recognizers:
            match = recognizer(candidate)
            if match is not None:
                return match
        return None

    def is_heading(self, line: str) -> bool:
        """Return whether the line would start a new chapter."""

        return self.classify(line) is not None

    def _markdown_heading(self, line: str) -> HeadingMatch | None:
        match = self._MARKDOWN_RE.match(line)
        if match is None:
            return None
        return HeadingMatch(title=match.group("title").strip(), kind=HeadingKind.MARKDOWN_HEADING)

    def _numbered_chapter(self, line: str) -> HeadingMatch | None:
        match = self._NUMBERED_RE.match(line)
        if match is None:
            return None
        number = match.group("number")
        rest = match.group("rest").strip()
        title = f"Chapter {number}: {rest}" if rest else f"Chapter {number}"
        return HeadingMatch(title=title, kind=HeadingKind.NUMBERED_CHAPTER)

    def _named_section(self, line: str) -> HeadingMatch | None:
        match = self._named_re.match(line)
        if match is None:
            return None
        name = match.group("name").capitalize()
        rest = (match.group("rest") or "").strip()
        title = f"{name}: {rest}" if rest else name
        return HeadingMatch(title=title, kind=HeadingKind.NAMED_SECTION)

    def _all_caps_line(self, line: str) -> HeadingMatch | None:
        if self._ALL_CAPS_RE.match(line) is None:
            return None
        return HeadingMatch(title=line, kind=HeadingKind.ALL_CAPS_LINE)
