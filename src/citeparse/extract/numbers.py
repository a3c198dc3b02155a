"""Numeric field extractors: volume, issue, pages, edition, genre.

Keyword anchors (``vol.``, ``no.``, ``pp.``) are matched on word
boundaries, so ``Rev.`` never reads as a volume marker. Without a keyword,
segment shape decides: ``42(3)`` is volume 42, issue 3.
"""

import re

from ._helpers import (
    UNICODE_DASH_RE,
    is_digit,
    last_number_token,
    normalize_token,
    number_token,
    numeric_tokens,
    year_token_index,
)
from .dates import collect_year_tokens
from .segments import split_reference_segments, strip_leading_citation_number
from .shapes import (
    parse_page_range_token,
    parse_short_page_range_token,
    segment_has_page_marker,
    segment_has_page_range,
    segment_is_journal_like,
)

_VOLUME_RE = re.compile(r"\b(?:volume|vols?\.?|v\.)\s*([0-9]+)", re.IGNORECASE)
_ISSUE_RE = re.compile(r"\b(?:number|no\.|issue)\s*([0-9]+)", re.IGNORECASE)
_PART_RE = re.compile(r"\bpart\s+([^\W_]+)", re.IGNORECASE)
_TRAILING_PART_RE = re.compile(r"^\s*,?\s*part\s+([^\W_]+)", re.IGNORECASE)
_EDITION_KEYWORDS = (
    re.compile(r"\bedition\b", re.IGNORECASE),
    re.compile(r"\béd\.", re.IGNORECASE),
    re.compile(r"\bed\.", re.IGNORECASE),
    re.compile(r"\bédc", re.IGNORECASE),
)
_GENRE_RE = re.compile(r"\[([^\]]*)\]")
_PAGE_MARKER_RE = re.compile(r"^(pp\.|p\.)")
_BARE_PAGE_MARKERS = frozenset({"p", "pp", "p.", "pp."})
_SEGMENT_SKIP_MARKERS = ("part", "h.", "no.", "issue", "pp", "p.")


def _with_part(value: str, remainder: str) -> str:
    match = _TRAILING_PART_RE.match(remainder)
    if match:
        return f"{value}, Part {match.group(1)}"
    return value


# ---------------------------------------------------------------------------
# Volume and issue
# ---------------------------------------------------------------------------


def extract_volume(reference: str) -> str | None:
    """Volume from a ``vol.``/``volume`` keyword, else from segment shape.

    A trailing ``, Part N`` is kept as ``"42, Part 2"``.
    """
    cleaned = strip_leading_citation_number(reference)
    match = _VOLUME_RE.search(cleaned)
    if match:
        return _with_part(match.group(1), cleaned[match.end() :])

    for segment in split_reference_segments(cleaned):
        volume = extract_volume_from_segment(segment)
        if volume is not None:
            return volume

    numbers = numeric_tokens(cleaned)
    if (
        not segment_has_page_marker(cleaned)
        and not segment_has_page_range(cleaned)
        and year_token_index(numbers) == 0
        and len(numbers) > 1
        and len(numbers[1]) <= 3
    ):
        return numbers[1]
    return None


def extract_volume_from_segment(segment: str) -> str | None:
    journal_like = segment_is_journal_like(segment)
    if journal_like:
        volume = volume_from_segment_before_pages(segment)
        if volume is not None:
            return volume

    volume, _ = parse_volume_issue_pair(segment)
    if volume is not None:
        part = extract_part_suffix(segment)
        return f"{volume}, Part {part}" if part else volume

    if not journal_like:
        return None
    numbers = numeric_tokens(segment)
    if year_token_index(numbers) == 0 and len(numbers) > 1 and len(numbers[1]) <= 3:
        return numbers[1]
    value = last_number_token(segment)
    if value is not None and len(value) <= 3:
        return value
    return None


def volume_from_segment_before_pages(segment: str) -> str | None:
    """Last short bare number among the comma-parts that precede the page range."""
    parts = [part.strip() for part in segment.split(",") if part.strip()]
    if not parts:
        return None
    page_index = next(
        (
            idx
            for idx, part in enumerate(parts)
            if parse_page_range_token(part) is not None
            or parse_short_page_range_token(part) is not None
        ),
        None,
    )
    limit = page_index if page_index is not None else len(parts) - 1
    for part in reversed(parts[:limit]):
        lower = part.lower()
        if any(marker in lower for marker in _SEGMENT_SKIP_MARKERS):
            continue
        number = last_number_token(part)
        if number is not None and len(number) <= 3:
            return number
    return None


def extract_issue(reference: str) -> str | None:
    """Issue from ``no.``/``issue``/``number``, else a ``42(3)`` parenthetical."""
    match = _ISSUE_RE.search(reference)
    if match:
        return _with_part(match.group(1), reference[match.end() :])

    for segment in split_reference_segments(reference):
        issue = extract_issue_from_segment(segment)
        if issue is not None:
            return issue
    return None


def extract_issue_from_segment(segment: str) -> str | None:
    _, issue = parse_volume_issue_pair(segment)
    if issue is not None:
        return issue
    if "vol" in segment.lower():
        return None
    part = extract_part_suffix(segment)
    if part is None:
        return None
    before = segment[: segment.lower().find("part")]
    number = last_number_token(before)
    return f"{number}, Part {part}" if number is not None else None


def parse_volume_issue_pair(segment: str) -> tuple[str | None, str | None]:
    """Read ``volume(issue)`` from the first parenthetical of *segment*.

    Examples
    --------
        >>> parse_volume_issue_pair("Journal of Things, 42(3)")
        ('42', '3')
    """
    open_idx = segment.find("(")
    if open_idx < 0:
        return None, None
    close_idx = segment.find(")", open_idx + 1)
    if close_idx < 0:
        return None, None

    inside = segment[open_idx + 1 : close_idx]
    inside_lower = inside.lower()
    before = segment[:open_idx].rstrip()
    volume = last_number_token(before)
    issue = None
    # issue only when the parenthetical directly follows the volume number
    if (
        volume is not None
        and before[-1:].isdigit()
        and not any(marker in inside_lower for marker in ("vol", "part", "no."))
    ):
        digits = number_token(inside)
        if digits is not None and len(digits) <= 3:
            issue = digits
    return volume, issue


def extract_part_suffix(segment: str) -> str | None:
    match = _PART_RE.search(segment)
    return match.group(1) if match else None


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


def extract_pages(reference: str) -> str:
    """Page locator of *reference*, or ``""``.

    Candidates, in order: a ``p.``/``pp.`` marker (glued or followed by the
    range), the last number of a year-first run such as ``2001, 12, 118``,
    a free-standing page range, and a trailing bare number of three or more
    digits. Values that are date tokens are never pages.
    """
    years = set(collect_year_tokens(reference))
    for candidate in _page_candidates(reference, years):
        if candidate and candidate not in years:
            return candidate
    return ""


def _page_candidates(reference: str, years: set[str]):
    tokens = reference.split()
    for idx, token in enumerate(tokens):
        cleaned = token.strip(",;")
        marker = _PAGE_MARKER_RE.match(cleaned)
        if marker:
            remainder = cleaned[marker.end() :]
            if remainder:
                yield _page_value(remainder)
        if (marker or cleaned in _BARE_PAGE_MARKERS) and idx + 1 < len(tokens):
            yield _page_value(tokens[idx + 1])

    if not any(
        parse_page_range_token(token) or parse_short_page_range_token(token) for token in tokens
    ):
        yield pages_from_year_volume(reference)
    yield find_page_range(reference, years)
    yield trailing_page_token(reference)


def _page_value(token: str) -> str:
    found = parse_page_range_token(token) or parse_short_page_range_token(token)
    if found is not None:
        return found
    kept = "".join(c for c in token if is_digit(c) or c in "-–—")
    return UNICODE_DASH_RE.sub("-", kept).strip("-")


def pages_from_year_volume(reference: str) -> str | None:
    """Last number of a reference whose first number is the year."""
    numbers = numeric_tokens(strip_leading_citation_number(reference))
    if year_token_index(numbers) != 0 or len(numbers) < 2:
        return None
    candidate = numbers[-1]
    if candidate == numbers[1] or candidate == numbers[0]:
        return None
    return candidate


def find_page_range(reference: str, years: set[str] | None = None) -> str | None:
    """First dash range; short ranges only when a year follows or at the end."""
    if years is None:
        years = set(collect_year_tokens(reference))
    tokens = reference.split()
    for idx, token in enumerate(tokens):
        found = parse_page_range_token(token)
        if found is not None:
            return found
        found = parse_short_page_range_token(token)
        if found is None:
            continue
        year_after = any(candidate.strip(",;.") in years for candidate in tokens[idx + 1 :])
        if year_after or idx + 1 == len(tokens):
            return found
    return None


def trailing_page_token(reference: str) -> str | None:
    """Final bare number of three or more digits."""
    for token in reversed(reference.split()):
        cleaned = token.strip(",;.")
        if not cleaned:
            continue
        if len(cleaned) >= 3 and cleaned.isascii() and cleaned.isdigit():
            return cleaned
        return None
    return None


# ---------------------------------------------------------------------------
# Edition and genre
# ---------------------------------------------------------------------------


def extract_edition(reference: str) -> str | None:
    """Edition number before ``ed.``/``edition``, else the word that follows it."""
    for keyword in _EDITION_KEYWORDS:
        match = keyword.search(reference)
        if match is None:
            continue
        number = edition_number_before(reference, match.start())
        if number is not None:
            return number
        following = reference[match.end() :].split()
        edition = normalize_token(following[0].strip(",.()")) if following else ""
        return edition or None
    return None


def edition_number_before(reference: str, keyword_pos: int) -> str | None:
    words = reference[:keyword_pos].split()
    if not words:
        return None
    digits = "".join(c for c in words[-1].strip("(),") if is_digit(c))
    return digits or None


def extract_genre(reference: str) -> str | None:
    """First bracketed value; a leading ``[12]`` citation number is not a genre."""
    match = _GENRE_RE.search(reference)
    if match is None:
        return None
    value = match.group(1).strip()
    if not value or (match.start() == 0 and value.isascii() and value.isdigit()):
        return None
    return value
