"""Venue-side resolution: journal, container, collection, contributors, type.

Everything here is anchored either on segment shape (journal and conference
classifiers from :mod:`.shapes`) or on keyword anchors such as ``edited by``
and ``lecture notes``. The journal resolver never returns the span already
chosen as the title.
"""

import re

from ..gazetteer.base import Category, Gazetteer
from ._helpers import (
    CHAPTER_RE,
    REPORT_RE,
    THESIS_RE,
    clean_segment,
    is_digit,
    looks_like_family_with_initials,
    looks_like_initial_surname,
    looks_like_initials,
    looks_like_person_name,
    normalize_compare_value,
    parse_month_token,
    split_parts,
    strip_punct,
)
from .segments import split_reference_segments
from .shapes import (
    is_journal_candidate,
    looks_like_author_list,
    looks_like_journal_name,
    looks_like_short_journal,
    parse_page_range_token,
    parse_short_page_range_token,
    segment_has_page_range,
    segment_has_volume_marker,
    segment_has_year,
    segment_is_conference,
    segment_is_journal_like,
)
from .title import extract_title

_WORD_RE = re.compile(r"[^\W_]+")
_LOCATION_PARTICLES = frozenset({"de", "la", "of", "da", "del"})
_URL_COLON_PREFIXES = ("http", "https", "doi", "urn", "isbn", "issn", "ftp")
_METADATA_WORDS = frozenset({"pp", "pp.", "p.", "pages", "vol", "vol.", "no.", "issue"})
_SUFFIX_MARKERS = ("vol", "no", "issue", "part")

_COLLECTION_KEYWORDS = ("series", "collection", "notes", "symposium", "volume")
_EDITOR_KEYWORDS = ("edited by", "edited", "editors?", "eds")
_TRANSLATOR_KEYWORDS = ("translated by", "translator", "trans\\.")
_NOTE_KEYWORDS = ("note", "report", "deliverable", "volume")
_ED_ONLY = frozenset({"ed", "eds"})
_NAME_JOINERS = ("&", " and ", " AND ", " / ", "/", "|")


# ---------------------------------------------------------------------------
# Location and publisher
# ---------------------------------------------------------------------------


def extract_location_publisher(reference: str) -> tuple[str, str]:
    """Split ``Place: Publisher, Year`` around the last imprint colon.

    The location is the final full-stop-delimited span before the colon and
    is accepted only when it reads like a place name (at most three
    capitalized words or particles). The publisher is the text after the
    colon up to the first comma.

    Returns
    -------
    tuple[str, str]
        ``(location, publisher)``, both empty when no imprint is found.
    """
    pos = _imprint_colon(reference)
    if pos is None:
        return "", ""
    location_segment = reference[:pos].strip().rsplit(".", 1)[-1].strip()
    if not is_location_segment(location_segment):
        return "", ""
    publisher = reference[pos + 1 :].strip().split(",", 1)[0].strip().rstrip(".").strip()
    return clean_segment(location_segment), publisher


def extract_location(reference: str) -> str:
    return extract_location_publisher(reference)[0]


def extract_publisher(reference: str) -> str:
    return extract_location_publisher(reference)[1]


def _imprint_colon(reference: str) -> int | None:
    for match in reversed(list(re.finditer(":", reference))):
        pos = match.start()
        if reference[pos + 1 : pos + 3] == "//":
            continue
        words = reference[:pos].split()
        if words and words[-1].lower().endswith(_URL_COLON_PREFIXES):
            continue
        return pos
    return None


def is_location_segment(segment: str) -> bool:
    words = segment.split()
    if not 1 <= len(words) <= 3:
        return False
    lower = segment.lower()
    if " and " in lower or " in " in lower or " for " in lower:
        return False
    for word in words:
        trimmed = word.strip(",.")
        if not trimmed or trimmed.lower() in _LOCATION_PARTICLES:
            continue
        if not trimmed[0].isupper():
            return False
    return True


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------


def extract_journal(
    reference: str,
    gazetteer: Gazetteer | None = None,
    title: str | None = None,
) -> str | None:
    """Resolve the journal name of *reference*.

    Every segment that is not the title, an author list, or a bare person
    name is scored with ``segment_journal_score``; the first segment with the
    highest score wins. When nothing scores, the first comma-part of a
    comma-bearing segment shaped like a journal name is used.

    Parameters
    ----------
    reference : str
        One reference string.
    gazetteer : Gazetteer, optional
        When given, words confirmed as journals add to a segment's score.
    title : str, optional
        Pre-resolved title; computed with ``extract_title`` when omitted.

    Returns
    -------
    str | None
        Cleaned journal name, or None.
    """
    if title is None:
        title = extract_title(reference)
    title_norm = normalize_compare_value(title) or None
    segments = split_reference_segments(reference)

    best: tuple[int, str] | None = None
    for segment in segments:
        if not _is_journal_segment_candidate(segment, title_norm):
            continue
        score = segment_journal_score(segment, gazetteer)
        candidate = extract_journal_from_segment(segment, title_norm)
        if score == 0 and candidate is None:
            continue
        cleaned = _clean_journal(candidate if candidate is not None else strip_numeric_suffix(segment))
        if not cleaned:
            continue
        if best is None or max(score, 1) > best[0]:
            best = (max(score, 1), cleaned)
    if best is not None:
        return best[1]

    for segment in segments:
        if ":" in segment or ";" in segment or "&" in segment:
            continue
        candidate = segment.split(",", 1)[0].strip()
        if not candidate or any(looks_like_initials(token) for token in segment.split()):
            continue
        if title_norm and normalize_compare_value(candidate) == title_norm:
            continue
        if looks_like_author_list(candidate):
            continue
        if looks_like_journal_name(candidate) and "," in segment:
            return clean_segment(candidate)
    return None


def _is_journal_segment_candidate(segment: str, title_norm: str | None) -> bool:
    if ";" in segment or "&" in segment or ":" in segment:
        return False
    if title_norm and normalize_compare_value(segment) == title_norm:
        return False
    if looks_like_author_list(segment):
        return False
    return not (
        looks_like_person_name(segment)
        and not segment_has_year(segment)
        and not segment_has_volume_marker(segment)
        and not segment_has_page_range(segment)
    )


def _clean_journal(value: str) -> str:
    cleaned = strip_leading_date(clean_segment(value))
    cleaned = strip_trailing_metadata(cleaned)
    cleaned = strip_trailing_location(cleaned)
    return strip_container_prefix(cleaned)


def segment_journal_score(segment: str, gazetteer: Gazetteer | None = None) -> int:
    score = 0
    if segment_is_journal_like(segment):
        score += 3
    if looks_like_journal_name(segment):
        score += 1
    if any(part and is_journal_candidate(part) for part in split_parts(segment)):
        score += 2
    if segment.startswith(("J ", "J.")):
        score += 2
    if gazetteer is not None:
        score += 2 * sum(
            1 for word in _WORD_RE.findall(segment) if Category.JOURNAL in gazetteer.lookup(word)
        )
    return score


def extract_journal_from_segment(segment: str, title_norm: str | None) -> str | None:
    """First comma-part of *segment* that is journal-shaped.

    Parts carrying digits qualify once a trailing year or short number is
    stripped (``Nature 412`` becomes ``Nature``).
    """
    for part in split_parts(segment):
        if title_norm and normalize_compare_value(part) == title_norm:
            continue
        lower = part.lower()
        if any(marker in lower for marker in ("vol", "pp", "no.", "issue")):
            continue
        if any(is_digit(c) for c in part):
            stripped = strip_trailing_year_token(part) or strip_trailing_number_token(part)
            if stripped is not None and is_journal_candidate(stripped):
                return stripped
            continue
        if (
            looks_like_author_list(part)
            or looks_like_family_with_initials(part)
            or ("." in part and looks_like_initial_surname(part))
        ):
            continue
        if is_journal_candidate(part):
            return part
    return None


def strip_trailing_year_token(value: str) -> str | None:
    tokens = value.split()
    if len(tokens) < 2:
        return None
    last = tokens[-1]
    if len(last) != 4 or not (last.isascii() and last.isdigit()):
        return None
    if not 1800 <= int(last) <= 2099:
        return None
    return " ".join(tokens[:-1]) or None


def strip_trailing_number_token(value: str) -> str | None:
    tokens = value.split()
    if len(tokens) < 2:
        return None
    last = tokens[-1]
    if len(last) > 3 or not (last.isascii() and last.isdigit()):
        return None
    return " ".join(tokens[:-1]) or None


# ---------------------------------------------------------------------------
# Containers and collections
# ---------------------------------------------------------------------------


def extract_container_title(reference: str) -> str | None:
    """First conference-style segment, else the venue of an ``In ...`` clause."""
    for segment in split_reference_segments(reference):
        if segment_is_conference(segment):
            cleaned = clean_segment(strip_numeric_suffix(segment))
            cleaned = strip_trailing_location(strip_trailing_metadata(cleaned))
            return strip_container_prefix(cleaned)
    return extract_container_from_in_segment(reference)


def extract_collection_title(reference: str) -> str | None:
    """Series or collection name, anchored on ``lecture notes``, ``series`` and similar."""
    found = segment_after_keyword(reference, "lecture notes")
    if found is not None:
        return found

    for keyword in _COLLECTION_KEYWORDS:
        found = segment_after_keyword(reference, keyword)
        if found is not None and found.lower().rstrip(".") not in _ED_ONLY:
            return found

    for part in re.split(r"[,;()]", reference):
        part = part.strip()
        lower = part.lower()
        if part and any(re.search(rf"\b{keyword}\b", lower) for keyword in _COLLECTION_KEYWORDS):
            return clean_segment(part)
    return None


def extract_collection_number(reference: str) -> str | None:
    """First digit run that follows the collection title."""
    title = extract_collection_title(reference)
    if not title:
        return None
    match = re.search(re.escape(title), reference, re.IGNORECASE)
    if match is None:
        return None
    digits = re.search(r"[0-9]+", reference[match.end() :])
    return digits.group() if digits else None


def strip_numeric_suffix(segment: str) -> str:
    """Cut a trailing ``, vol. 3``/``(no. 2`` style suffix from a venue."""
    match = re.search(r"[0-9]", segment)
    if match:
        prefix = segment[: match.start()].strip()
        sep = max(prefix.rfind(","), prefix.rfind(";"), prefix.rfind("("))
        if sep >= 0:
            tail = prefix[sep + 1 :].lower()
            if not tail.strip() or any(marker in tail for marker in _SUFFIX_MARKERS):
                return prefix[:sep].strip()
    return segment.strip()


def strip_container_prefix(segment: str) -> str:
    trimmed = segment.strip()
    if trimmed.startswith(("In ", "in ")):
        return trimmed[3:].strip()
    return trimmed


def strip_trailing_location(segment: str) -> str:
    """Drop trailing comma-parts that read as place names (``, Berlin``)."""
    current = segment.strip()
    while True:
        before, comma, tail = current.rpartition(",")
        if not comma:
            return current.strip()
        tail = tail.strip()
        if tail and (any(is_digit(c) for c in tail) or len(tail.split()) > 4):
            return current.strip()
        if tail and not all(word[0].isupper() for word in tail.split()):
            return current.strip()
        current = before.strip()


def strip_trailing_metadata(segment: str) -> str:
    """Drop trailing page ranges, long numbers, and volume/page markers."""
    tokens = segment.split()
    while tokens:
        cleaned = tokens[-1].strip(",;()")
        if (
            not cleaned
            or parse_page_range_token(cleaned) is not None
            or parse_short_page_range_token(cleaned) is not None
            or (cleaned.isascii() and cleaned.isdigit() and len(cleaned) >= 3)
            or cleaned.lower() in _METADATA_WORDS
        ):
            tokens.pop()
            continue
        break
    return " ".join(tokens).rstrip(",;").strip()


def strip_leading_date(segment: str) -> str:
    """Drop a leading ``2001,`` or ``Jan 2001,`` comma-part."""
    trimmed = segment.strip()
    before, comma, after = trimmed.partition(",")
    if not comma:
        return trimmed
    for token in before.split():
        cleaned = strip_punct(token)
        if not cleaned:
            continue
        if parse_month_token(cleaned) is None and sum(1 for c in cleaned if is_digit(c)) < 4:
            return trimmed
    return after.strip()


def segment_after_keyword(reference: str, keyword: str) -> str | None:
    """Text from *keyword* up to the next ``.``/``,``/``;``/``:``, cleaned."""
    match = re.search(rf"\b{keyword}\b", reference, re.IGNORECASE)
    if match is None:
        return None
    return clean_segment(re.split(r"[.,;:]", reference[match.start() :], maxsplit=1)[0])


def find_in_segment_index(reference: str) -> int | None:
    """Position of an ``In`` clause that opens a sentence."""
    lower = reference.lower()
    if lower.startswith("in "):
        return 0
    for match in re.finditer(" in ", lower):
        if lower[: match.start()].rstrip().endswith((".", ";", ":")):
            return match.start()
    return None


def extract_container_from_in_segment(reference: str) -> str | None:
    in_pos = find_in_segment_index(reference)
    if in_pos is None:
        return None
    section = reference[in_pos + 3 :].lstrip()
    close = section.find(")")
    if close >= 0:
        section = section[close + 1 :]
    section = section.lstrip().lstrip(",;.").lstrip()
    if not section:
        return None
    segment = re.split(r"[.;]", section, maxsplit=1)[0].strip()
    if not segment:
        return None
    cleaned = strip_trailing_location(strip_trailing_metadata(clean_segment(segment)))
    return cleaned or None


# ---------------------------------------------------------------------------
# Contributors and notes
# ---------------------------------------------------------------------------


def names_after_keyword(reference: str, keyword: str) -> str | None:
    """Names following *keyword*, up to a parenthesis or the end of the sentence.

    Periods that close an initial (``Doe, J.``) do not end the name run.
    """
    match = re.search(rf"\b{keyword}(?!\w)", reference, re.IGNORECASE)
    if match is None:
        return None
    rest = re.split(r"[(;:]", reference[match.end() :], maxsplit=1)[0]
    for period in re.finditer(r"\.", rest):
        words = rest[: period.start()].split()
        if not words or not looks_like_initials(words[-1]):
            rest = rest[: period.start()]
            break
    names = clean_segment(rest)
    return names or None


def extract_editor(reference: str) -> str | None:
    """Editor names after ``edited by``/``editor``/``eds``, else from ``In X (ed.)``."""
    for keyword in _EDITOR_KEYWORDS:
        names = names_after_keyword(reference, keyword)
        if names is None:
            continue
        if strip_punct(names).lower() in _ED_ONLY or strip_punct(names).lower() == "by":
            continue
        return names
    return extract_editors_from_in_segment(reference)


def extract_editor_list(reference: str) -> list[str]:
    editors = extract_editor(reference)
    return split_editor_names(editors) if editors else []


def split_editor_names(editors: str) -> list[str]:
    for joiner in _NAME_JOINERS:
        editors = editors.replace(joiner, ";")
    return [piece.strip() for piece in editors.split(";") if piece.strip()]


def extract_editors_from_in_segment(reference: str) -> str | None:
    in_pos = find_in_segment_index(reference)
    if in_pos is None:
        return None
    after_in = reference[in_pos + 3 :]
    ed_pos = after_in.lower().find("(ed")
    if ed_pos < 0:
        return None
    return after_in[:ed_pos].strip().strip(",;").strip() or None


def extract_translator(reference: str) -> str | None:
    """Translator names after ``translated by``/``translator``/``trans.``.

    Names must be person-shaped, so journal abbreviations such as
    ``IEEE Trans. Inf. Theory`` never produce a translator.
    """
    for keyword in _TRANSLATOR_KEYWORDS:
        names = names_after_keyword(reference, keyword)
        if names is None:
            continue
        first = split_editor_names(names)[0] if split_editor_names(names) else ""
        if _looks_like_contributor(first):
            return names
    return None


def _looks_like_contributor(value: str) -> bool:
    return (
        looks_like_person_name(value)
        or looks_like_author_list(value)
        or looks_like_initial_surname(value)
        or looks_like_family_with_initials(value)
    )


def extract_note(reference: str) -> str | None:
    """First parenthetical mentioning a note, report, deliverable, or volume."""
    for match in re.finditer(r"\(([^)]*)\)", reference):
        segment = match.group(1).strip()
        if segment and any(keyword in segment.lower() for keyword in _NOTE_KEYWORDS):
            return clean_segment(segment)
    return None


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------


def resolve_type(reference: str, gazetteer: Gazetteer | None = None) -> str:
    """Classify *reference* into a CSL-style item type.

    Precedence: ``chapter`` keyword, gazetteer-confirmed journal word
    (``article``), conference segment (``paper-conference``), ``thesis``,
    ``report``, journal-shaped segment (``article-journal``), else ``book``.
    """
    if CHAPTER_RE.search(reference):
        return "chapter"
    if gazetteer is not None and any(
        Category.JOURNAL in gazetteer.lookup(word) for word in _WORD_RE.findall(reference)
    ):
        return "article"

    segments = split_reference_segments(reference)
    if any(segment_is_conference(segment) for segment in segments):
        return "paper-conference"
    if THESIS_RE.search(reference):
        return "thesis"
    if REPORT_RE.search(reference):
        return "report"
    if any(_segment_is_journal(segment) for segment in segments):
        return "article-journal"
    return "book"


def _segment_is_journal(segment: str) -> bool:
    if segment_is_journal_like(segment) or looks_like_journal_name(segment):
        return True
    return any(
        segment_is_journal_like(part) or looks_like_short_journal(part) or looks_like_journal_name(part)
        for part in split_parts(segment)
    )
