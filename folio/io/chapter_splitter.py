"""Manuscript segmentation into titled chapters.

Responsibilities:
- Convert pasted manuscript text into ordered draft chapters.
- Assign pass-unique slugs and table-of-contents summaries to drafts.
"""

from __future__ import annotations

import re

from ..models.datatypes import DraftChapter, ParsedChapter
from ..text.headings import HeadingClassifier
from ..text.slug import chapter_base_slug
from ..text.summary import DEFAULT_SUMMARY_MAX_CHARS, summarize

DEFAULT_UNTITLED_TITLE = "Introduction"

_LINE_BREAK_RE = re.compile(r"\r?\n")


class ChapterSplitter:
    """Split raw manuscript text into chapter records."""

    def __init__(
        self,
        classifier: HeadingClassifier | None = None,
        untitled_title: str = DEFAULT_UNTITLED_TITLE,
        summary_max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
    ) -> None:
        """Initialize the splitter with heading rules and fallback title policy."""

        self._classifier = classifier or HeadingClassifier()
        self._untitled_title = untitled_title
        self._summary_max_chars = summary_max_chars

    def segment(self, manuscript: str) -> list[DraftChapter]:
        """Split a manuscript into draft chapters in detection order.

        Heading lines start a new chapter and are not part of any body. Text
        before the first heading, or the whole text when no heading exists,
        becomes a chapter under the untitled title. Chapters whose body is
        blank are dropped.
        """

        drafts: list[DraftChapter] = []
        current_title: str | None = None
        buffer: list[str] = []

        def flush() -> None:
            body = "\n".join(buffer).strip()
            if body:
                title = current_title if current_title is not None else self._untitled_title
                drafts.append(DraftChapter(position=len(drafts) + 1, title=title, body=body))
            buffer.clear()

        for line in _LINE_BREAK_RE.split(manuscript):
            match = self._classifier.classify(line)
            if match is None:
                buffer.append(line)
                continue
            flush()
            current_title = match.title
        flush()

        return drafts

    def parse(self, manuscript: str) -> list[ParsedChapter]:
        """Segment a manuscript and attach pass-unique slugs and summaries.

        Slugs are assigned in chapter order; a slug already taken earlier in
        the same pass gets `-2`, `-3`, ... appended until it is free.
        """

        used: set[str] = set()
        chapters: list[ParsedChapter] = []
        for draft in self.segment(manuscript):
            base = chapter_base_slug(draft.title, draft.position)
            slug = base
            suffix = 2
            while slug in used:
                slug = f"{base}-{suffix}"
                suffix += 1
            used.add(slug)
            chapters.append(
                ParsedChapter(
                    title=draft.title,
                    slug=slug,
                    description=summarize(draft.body, self._summary_max_chars),
                    content=draft.body,
                )
            )
        return chapters
