"""Tests for venue-side resolution: imprint, journal, container, contributors, type."""

import pytest

from citeparse.extract.venue import (
    extract_collection_number,
    extract_collection_title,
    extract_container_title,
    extract_editor_list,
    extract_journal,
    extract_location_publisher,
    extract_note,
    extract_translator,
    is_location_segment,
    resolve_type,
    segment_journal_score,
    strip_container_prefix,
    strip_leading_date,
    strip_numeric_suffix,
    strip_trailing_location,
    strip_trailing_metadata,
)
from citeparse.gazetteer import MemoryGazetteer

PEREC = "Perec, Georges. A Void. London: The Harvill Press, 1995. p.108."
DERRIDA = "Derrida, J. (c.1967). L'écriture et la différence (1 éd.). Paris: Éditions du Seuil."
DOE_ARTICLE = "Doe, J. (2001). Title. Journal of Things, 42(3), 12-34."
COMPLEX = (
    "Smith, Alice. On heuristics for mixing metadata. Lecture Notes in "
    "Computer Science, 4050. Journal of Testing. Edited by Doe, J. "
    "(Note: Preprint release). doi:10.1000/test https://example.org."
)
WORKSHOP = "Doe, J. A paper. In Proceedings of the Workshop on Parsing, 12-20. Berlin."


# ---------------------------------------------------------------------------
# Location and publisher
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        (PEREC, ("London", "The Harvill Press")),
        (DERRIDA, ("Paris", "Éditions du Seuil")),
        ("Doe, J. Stats. New York: Wiley, 2001.", ("New York", "Wiley")),
        ("Doe, J. Title. Available at https://example.org/x.", ("", "")),
        ("Studies in the theory of everything: part two", ("", "")),
        (COMPLEX, ("", "")),
    ],
)
def test_extract_location_publisher(reference: str, expected: tuple[str, str]) -> None:
    """Test imprint split on the last non-URL colon."""
    assert extract_location_publisher(reference) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("segment", "expected"),
    [
        ("New York", True),
        ("Rio de Janeiro", True),
        ("the city", False),
        ("Paris and London", False),
        ("A Very Long Place Name", False),
    ],
)
def test_is_location_segment(segment: str, expected: bool) -> None:
    """Test place-name shape."""
    assert is_location_segment(segment) is expected


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_extract_journal_from_comma_part() -> None:
    """Test the journal is cut before volume and pages."""
    assert extract_journal(DOE_ARTICLE) == "Journal of Things"


@pytest.mark.unit
def test_extract_journal_skips_title_and_authors() -> None:
    """Test no journal is invented for a book reference."""
    assert extract_journal(PEREC) is None


@pytest.mark.unit
def test_extract_journal_complex_reference() -> None:
    """Test the journal segment wins over the collection segment."""
    assert extract_journal(COMPLEX) == "Journal of Testing"


@pytest.mark.unit
def test_segment_journal_score_uses_gazetteer(memory_gazetteer: MemoryGazetteer) -> None:
    """Test gazetteer-confirmed journal words add to the score."""
    assert segment_journal_score("Nature") == 0
    assert segment_journal_score("Nature", memory_gazetteer) == 2
    assert segment_journal_score("Journal of Things") >= 3


# ---------------------------------------------------------------------------
# Containers and collections
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_extract_container_title_from_conference_segment() -> None:
    """Test conference segment is cleaned of pages and the In prefix."""
    assert extract_container_title(WORKSHOP) == "Proceedings of the Workshop on Parsing"


@pytest.mark.unit
def test_extract_container_title_from_in_clause() -> None:
    """Test the venue after a sentence-initial In."""
    assert extract_container_title("Roe, K. A study. In The Big Handbook; London.") == "The Big Handbook"


@pytest.mark.unit
def test_extract_container_title_absent() -> None:
    """Test book references have no container."""
    assert extract_container_title(PEREC) is None


@pytest.mark.unit
def test_collection_title_and_number() -> None:
    """Test lecture-notes collections and the number that follows them."""
    assert extract_collection_title(COMPLEX) == "Lecture Notes in Computer Science"
    assert extract_collection_number(COMPLEX) == "4050"
    assert extract_collection_title(PEREC) is None
    assert extract_collection_number(PEREC) is None


@pytest.mark.unit
def test_strip_helpers() -> None:
    """Test venue cleaning helpers."""
    assert strip_numeric_suffix("Journal of Things, vol. 3") == "Journal of Things"
    assert strip_container_prefix("In Handbook") == "Handbook"
    assert strip_trailing_location("Proceedings of X, Berlin, Germany") == "Proceedings of X"
    assert strip_trailing_metadata("Journal of Things 42 123-145") == "Journal of Things 42"
    assert strip_leading_date("2001, Journal of Things") == "Journal of Things"
    assert strip_leading_date("Nature, 2001") == "Nature, 2001"


# ---------------------------------------------------------------------------
# Contributors and notes
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        (COMPLEX, ["Doe, J"]),
        ("Handbook. Edited by A. Smith and B. Jones. London: Pub.", ["A. Smith", "B. Jones"]),
        ("In Smith, J. (ed.) The Handbook.", ["Smith, J."]),
        (PEREC, []),
    ],
)
def test_extract_editor_list(reference: str, expected: list[str]) -> None:
    """Test editor keywords and the In ... (ed.) form."""
    assert extract_editor_list(reference) == expected


@pytest.mark.unit
def test_extract_translator() -> None:
    """Test translator names and journal abbreviations that look like keywords."""
    reference = "Perec, Georges. A Void. Translated by Gilbert Adair. London: Harvill, 1995."

    assert extract_translator(reference) == "Gilbert Adair"
    assert extract_translator("Doe, J. Codes. IEEE Trans. Inf. Theory, 12.") is None


@pytest.mark.unit
def test_extract_note() -> None:
    """Test the first parenthetical that mentions a note or report."""
    assert extract_note(COMPLEX) == "Note: Preprint release"
    assert extract_note("Title (Technical report 42). Pub.") == "Technical report 42"
    assert extract_note("Title (2001)") is None


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("Doe, J. Chapter 3 of Things.", "chapter"),
        (WORKSHOP, "paper-conference"),
        ("Doe, J. A study. PhD thesis, MIT, 2001.", "thesis"),
        ("Doe, J. A study. Technical Report 12, 2001.", "report"),
        (DOE_ARTICLE, "article-journal"),
        (PEREC, "book"),
        ("plain text", "book"),
    ],
)
def test_resolve_type(reference: str, expected: str) -> None:
    """Test type precedence without a gazetteer."""
    assert resolve_type(reference) == expected


@pytest.mark.unit
def test_resolve_type_gazetteer_journal(memory_gazetteer: MemoryGazetteer) -> None:
    """Test a gazetteer-confirmed journal word types the reference as article."""
    assert resolve_type("Doe, J. Nature. 2020.", memory_gazetteer) == "article"
    assert resolve_type("Doe, J. Nature. 2020.") != "article"
