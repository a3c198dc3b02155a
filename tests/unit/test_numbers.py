"""Tests for volume, issue, page, edition and genre extraction."""

import pytest

from citeparse.extract.dates import collect_year_tokens
from citeparse.extract.numbers import (
    extract_edition,
    extract_genre,
    extract_issue,
    extract_pages,
    extract_volume,
    find_page_range,
    parse_volume_issue_pair,
    trailing_page_token,
)

DOE_ARTICLE = "Doe, J. (2001). Title. Journal of Things, 42(3), 12-34."
KEYWORDED = "Doe, J. Title. Annals of X, vol. 12, no. 4, pp. 110-125, 2001."


# ---------------------------------------------------------------------------
# Volume and issue
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_volume_and_issue_from_parenthetical() -> None:
    """Test ``42(3)`` reads as volume 42, issue 3."""
    assert extract_volume(DOE_ARTICLE) == "42"
    assert extract_issue(DOE_ARTICLE) == "3"


@pytest.mark.unit
def test_volume_and_issue_from_keywords() -> None:
    """Test ``vol.`` and ``no.`` anchors."""
    assert extract_volume(KEYWORDED) == "12"
    assert extract_issue(KEYWORDED) == "4"


@pytest.mark.unit
def test_volume_keeps_part_suffix() -> None:
    """Test a trailing part number is folded into the volume."""
    reference = "Doe, J. Title. Phil. Trans., vol. 42, Part 2, 1-10."

    assert extract_volume(reference) == "42, Part 2"


@pytest.mark.unit
def test_volume_after_leading_year() -> None:
    """Test the short number following a leading year is the volume."""
    assert extract_volume("Smith, A. Results. Physica, 2001, 12, 118.") == "12"


@pytest.mark.unit
def test_no_volume_for_book() -> None:
    """Test books without numbering yield nothing."""
    perec = "Perec, Georges. A Void. London: The Harvill Press, 1995. p.108."

    assert extract_volume(perec) is None
    assert extract_issue(perec) is None


@pytest.mark.unit
@pytest.mark.parametrize(
    ("segment", "expected"),
    [
        ("Journal of Things, 42(3)", ("42", "3")),
        ("Nature (2001)", (None, None)),
        ("Journal, 7(no. 2)", ("7", None)),
        ("no parentheses", (None, None)),
        ("L'écriture et la différence (1 éd.)", (None, None)),
        ("Series 12, Collected essays (3)", ("12", None)),
    ],
)
def test_parse_volume_issue_pair(segment: str, expected: tuple[str | None, str | None]) -> None:
    """Test volume(issue) parsing from the first parenthetical."""
    assert parse_volume_issue_pair(segment) == expected


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("Perec, Georges. A Void. London: The Harvill Press, 1995. p.108.", "108"),
        (DOE_ARTICLE, "12-34"),
        (KEYWORDED, "110-125"),
        ("Smith, A. Results. Physica, 2001, 12, 118.", "118"),
        ("Doe, J. Title. Journal, 12, 34-56.", "34-56"),
        ("plain text", ""),
    ],
)
def test_extract_pages(reference: str, expected: str) -> None:
    """Test marker, year-first, range, and empty page resolution."""
    assert extract_pages(reference) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "reference",
    [
        "Annual report 1970/71.",
        "Doe, J. Things. London: Pub, 1995.",
        "Perec, Georges. A Void. London: The Harvill Press, 1995/96. p.108.",
    ],
)
def test_pages_never_repeat_a_date_token(reference: str) -> None:
    """Test pages and dates are disjoint."""
    pages = extract_pages(reference)

    assert pages not in collect_year_tokens(reference)


@pytest.mark.unit
def test_find_page_range_and_trailing_token() -> None:
    """Test the lower-level page helpers."""
    assert find_page_range("Journal 5, 123-145, 2001.") == "123-145"
    assert find_page_range("Journal 5, 12-34 2001.", years={"2001"}) == "12-34"
    assert find_page_range("Journal 5, 12-34 more text", years=set()) is None
    assert trailing_page_token("Some title, 2001, 1234.") == "1234"
    assert trailing_page_token("Some title, 12.") is None


# ---------------------------------------------------------------------------
# Edition and genre
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("Derrida, J. (c.1967). L'écriture et la différence (1 éd.). Paris: Éditions du Seuil.", "1"),
        ("Smith, J. Things. 2nd edition. London: Pub.", "2"),
        ("Smith, J. Things. London: Pub.", None),
    ],
)
def test_extract_edition(reference: str, expected: str | None) -> None:
    """Test edition numbers before the keyword."""
    assert extract_edition(reference) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("Doe, J. Title [PhD thesis]. MIT.", "PhD thesis"),
        ("[12] Doe, J. Title.", None),
        ("Doe, J. Title [ ].", None),
        ("Doe, J. Title.", None),
    ],
)
def test_extract_genre(reference: str, expected: str | None) -> None:
    """Test bracketed genres, ignoring a leading citation number."""
    assert extract_genre(reference) == expected
