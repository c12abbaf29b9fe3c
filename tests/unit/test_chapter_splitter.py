"""Unit tests for manuscript segmentation and pass-unique slug assignment."""

from folio.io.chapter_splitter import ChapterSplitter
from folio.text.headings import HeadingClassifier


def test_parse_splits_markdown_headings_into_chapters() -> None:
    chapters = ChapterSplitter().parse("## Intro\nHello world.\n\n## Chapter Two\nMore text here.")

    assert [(c.slug, c.title, c.content) for c in chapters] == [
        ("intro", "Intro", "Hello world."),
        ("chapter-two", "Chapter Two", "More text here."),
    ]


def test_parse_suffixes_duplicate_titles_within_one_pass() -> None:
    chapters = ChapterSplitter().parse(
        "Chapter 1: Beginnings\nText A.\n\nChapter 1: Beginnings\nText B."
    )

    assert [c.title for c in chapters] == ["Chapter 1: Beginnings", "Chapter 1: Beginnings"]
    assert [c.slug for c in chapters] == ["chapter-1-beginnings", "chapter-1-beginnings-2"]
    assert [c.content for c in chapters] == ["Text A.", "Text B."]


def test_parse_skips_slugs_already_taken_by_suffixed_titles() -> None:
    """A title whose own slug looks like a suffix should push later duplicates further."""

    chapters = ChapterSplitter().parse("## X\none\n## X 2\ntwo\n## X\nthree")

    assert [c.slug for c in chapters] == ["x", "x-2", "x-3"]


def test_parse_uses_positional_slug_for_titles_without_slug_characters() -> None:
    chapters = ChapterSplitter().parse("## Intro\nA.\n## ???\nB.")

    assert [c.slug for c in chapters] == ["intro", "chapter-2"]


def test_segment_without_headings_returns_single_introduction() -> None:
    text = "\n\n  Just some prose.\n\nAnother paragraph.  \n"

    drafts = ChapterSplitter().segment(text)

    assert len(drafts) == 1
    assert drafts[0].title == "Introduction"
    assert drafts[0].body == text.strip()
    assert drafts[0].position == 1


def test_segment_untitled_title_is_configurable() -> None:
    drafts = ChapterSplitter(untitled_title="Chapter 1").segment("Plain text.")

    assert [d.title for d in drafts] == ["Chapter 1"]


def test_segment_returns_empty_for_blank_manuscript() -> None:
    assert ChapterSplitter().segment("") == []
    assert ChapterSplitter().segment(" \n\t\n ") == []


def test_segment_keeps_text_before_first_heading() -> None:
    drafts = ChapterSplitter().segment("Dedication line.\n\n## One\nBody one.")

    assert [(d.title, d.body) for d in drafts] == [
        ("Introduction", "Dedication line."),
        ("One", "Body one."),
    ]


def test_segment_drops_headings_without_body() -> None:
    """Back-to-back headings and a trailing heading should not produce chapters."""

    drafts = ChapterSplitter().segment("## A\n## B\nText.\n\n## C\n   \n")

    assert [(d.title, d.body) for d in drafts] == [("B", "Text.")]
    assert [d.position for d in drafts] == [1]


def test_segment_preserves_internal_paragraph_breaks() -> None:
    drafts = ChapterSplitter().segment("## A\n\n\nPara one.\n\n\nPara two.\n\n")

    assert drafts[0].body == "Para one.\n\n\nPara two."
    assert drafts[0].body.split("\n\n")[0] == "Para one."


def test_segment_normalizes_windows_line_endings() -> None:
    drafts = ChapterSplitter().segment("## A\r\nLine 1\r\nLine 2\r\n")

    assert drafts[0].body == "Line 1\nLine 2"


def test_segment_headingless_crlf_body_is_trimmed_input_with_lf_endings() -> None:
    text = "  First line.\r\n\r\nSecond paragraph.\r\n"

    drafts = ChapterSplitter().segment(text)

    assert len(drafts) == 1
    assert drafts[0].body == text.strip().replace("\r\n", "\n")


def test_segment_mixed_conventions_keeps_detection_order() -> None:
    text = (
        "PROLOGUE\n"
        "It began.\n"
        "Chapter 1 - Arrival\n"
        "They arrived.\n"
        "# Interlude\n"
        "A pause.\n"
        "THE RETURN\n"
        "They returned.\n"
        "Epilogue\n"
        "It ended.\n"
    )

    drafts = ChapterSplitter().segment(text)

    assert [d.title for d in drafts] == [
        "Prologue",
        "Chapter 1: Arrival",
        "Interlude",
        "THE RETURN",
        "Epilogue",
    ]
    assert [d.position for d in drafts] == [1, 2, 3, 4, 5]


def test_segment_loses_no_body_content() -> None:
    """Concatenated bodies should hold every non-heading word in order."""

    text = (
        "Opening words here.\n"
        "## First\n"
        "  alpha beta\n"
        "\n"
        "gamma\n"
        "CHAPTER 2\n"
        "delta\n"
        "## Empty\n"
        "## Last\n"
        "epsilon zeta\n"
    )
    classifier = HeadingClassifier()

    drafts = ChapterSplitter(classifier=classifier).segment(text)

    expected_words = [
        word
        for line in text.splitlines()
        if not classifier.is_heading(line)
        for word in line.split()
    ]
    assert " ".join(d.body for d in drafts).split() == expected_words


def test_parse_assigns_summaries_and_distinct_slugs() -> None:
    text = "\n".join(f"## Same\nBody {index}." for index in range(4))

    chapters = ChapterSplitter(summary_max_chars=40).parse(text)

    assert [c.slug for c in chapters] == ["same", "same-2", "same-3", "same-4"]
    assert len({c.slug for c in chapters}) == len(chapters)
    assert [c.description for c in chapters] == ["Body 0.", "Body 1.", "Body 2.", "Body 3."]
