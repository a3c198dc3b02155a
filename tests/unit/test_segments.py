"""Tests for reference segmentation and citation numbers."""

import pytest

from citeparse.extract.segments import (
    extract_citation_number,
    split_reference_segments,
    split_references,
    strip_leading_citation_number,
)

PEREC = "Perec, Georges. A Void. London: The Harvill Press, 1995. p.108."


def _assert_covers_source(reference: str, segments: list[str]) -> None:
    """Segments appear in the source left to right without overlapping."""
    pos = 0
    for segment in segments:
        found = reference.find(segment, pos)
        assert found >= 0, f"{segment!r} not found after position {pos}"
        pos = found + len(segment)


# ---------------------------------------------------------------------------
# split_references
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_split_references_skips_blank_lines() -> None:
    """Test multi-line input yields trimmed non-empty lines."""
    assert split_references("first ref\n\n   second ref  \n\t\n") == ["first ref", "second ref"]


@pytest.mark.unit
def test_split_references_empty_input() -> None:
    """Test empty input yields no references."""
    assert split_references("") == []


# ---------------------------------------------------------------------------
# split_reference_segments
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_segments_basic_book_reference() -> None:
    """Test sentence boundaries and glued page marker."""
    assert split_reference_segments(PEREC) == [
        "Perec, Georges",
        "A Void",
        "London: The Harvill Press, 1995. p.108",
    ]


@pytest.mark.unit
def test_segments_initials_followed_by_comma_do_not_break() -> None:
    """Test a period closing an initial before a comma is not a boundary."""
    assert split_reference_segments("Doe, J., Roe, K.") == ["Doe, J., Roe, K"]


@pytest.mark.unit
def test_segments_month_abbreviation_before_day() -> None:
    """Test "Jan. 5" keeps its period."""
    assert split_reference_segments("Published Jan. 5, 2001. Next part") == [
        "Published Jan. 5, 2001",
        "Next part",
    ]


@pytest.mark.unit
def test_segments_ignore_periods_inside_parentheses() -> None:
    """Test nested periods never split."""
    assert split_reference_segments("Title (ed. Smith). Next") == ["Title (ed. Smith)", "Next"]


@pytest.mark.unit
def test_segments_lowercase_continuation_does_not_break() -> None:
    """Test a period followed by lower-case text is not a boundary."""
    assert split_reference_segments("Vol. iv of the set. End") == ["Vol. iv of the set", "End"]


@pytest.mark.unit
def test_segments_trailing_span_without_period() -> None:
    """Test the final span is emitted without a terminal period."""
    assert split_reference_segments("First part. Second part") == ["First part", "Second part"]


@pytest.mark.unit
@pytest.mark.parametrize("reference", ["", "   ", "\t\n"])
def test_segments_empty_input(reference: str) -> None:
    """Test empty and whitespace-only input yields no segments."""
    assert split_reference_segments(reference) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "reference",
    [
        PEREC,
        "Doe, J. (2001). Title. Journal of Things, 42(3), 12-34.",
        "Smith, J. R. and Brown, K. A Study. Nature. 2020.",
        ". . . ((( ))) .. A.B.C. 12. x",
        "No punctuation at all",
    ],
)
def test_segments_cover_source_without_overlap(reference: str) -> None:
    """Test segments are non-empty and ordered, non-overlapping substrings."""
    segments = split_reference_segments(reference)

    assert all(segment.strip() == segment and segment for segment in segments)
    _assert_covers_source(reference, segments)


# ---------------------------------------------------------------------------
# Citation numbers
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("[12] Doe, J. Title.", "12"),
        ("(3) Doe, J. Title.", "3"),
        ("12. Doe, J. Title.", "12"),
        ("Doe, J. Title. 12.", None),
        ("[a] Doe", None),
        ("", None),
    ],
)
def test_extract_citation_number(reference: str, expected: str | None) -> None:
    """Test bracketed, parenthesized, and dotted citation numbers."""
    assert extract_citation_number(reference) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("[12] Doe, J. Title.", "Doe, J. Title."),
        ("12. Doe, J.", "Doe, J."),
        ("12] Doe, J.", "Doe, J."),
        ("1995 was a year", "1995 was a year"),
        ("  Plain  ", "Plain"),
    ],
)
def test_strip_leading_citation_number(reference: str, expected: str) -> None:
    """Test the leading marker is removed and other text is kept."""
    assert strip_leading_citation_number(reference) == expected
