"""Date decomposition.

Picks the most date-like segment, reads a structured or month-name date
from it, and then scans for year-like digit runs, completing short range
years (``1970/71``) from the previously resolved year.
"""

import re

from ._helpers import (
    ASCII_PUNCTUATION,
    DASHES,
    digits_of,
    has_dash,
    is_digit,
    parse_month_token,
    strip_punct,
)
from .segments import split_reference_segments
from .shapes import (
    is_page_marker,
    parse_page_range_token,
    segment_has_month,
    segment_has_page_marker,
    segment_has_page_range,
    segment_has_volume_marker,
    segment_has_year,
)

_DATE_SEPARATORS = "-/."
_RANGE_SEPARATORS = "/" + DASHES
_DEFAULT_CENTURY_PREFIX = {1: "1", 2: "19"}
_MIN_YEAR, _MAX_YEAR = 1500, 2100
_MONTH_YEAR_RANGE = range(1800, 2100)
_NON_SEPARATOR_PUNCT = "".join(c for c in ASCII_PUNCTUATION if c not in _DATE_SEPARATORS)


def collect_year_tokens(reference: str) -> list[str]:
    """Ordered date tokens for *reference*: ``YYYY[, MM[, DD]]`` then more years.

    Parameters
    ----------
    reference : str
        One reference string.

    Returns
    -------
    list[str]
        Distinct date tokens in discovery order, possibly empty.

    Examples
    --------
        >>> collect_year_tokens("Annual report 1970/71.")
        ['1970', '1971']
    """
    date_source = select_date_reference(reference)
    tokens = collect_numeric_date_parts(date_source)
    date_parts_found = bool(tokens)
    previous: str | None = None

    for candidate, after_separator in capture_year_like(date_source):
        if len(candidate) == 2 and int(candidate) <= 31:
            if not (after_separator and previous is not None):
                continue
        if date_parts_found and len(candidate) < 4:
            continue
        year = normalize_year_candidate(candidate, previous, after_separator)
        if year is None:
            continue
        if len(year) == 4 and not _MIN_YEAR <= int(year) <= _MAX_YEAR:
            continue
        if year == previous:
            continue
        previous = year
        if year not in tokens:
            tokens.append(year)

    return tokens


def select_date_reference(reference: str) -> str:
    """Highest-scoring segment by ``date_segment_score``; earliest wins ties."""
    best = None
    best_score = 0
    for segment in split_reference_segments(reference):
        score = date_segment_score(segment)
        if score > best_score:
            best_score = score
            best = segment
    return best if best is not None else reference


def date_segment_score(segment: str) -> int:
    score = 0
    if segment_has_year(segment):
        score += 3
    if segment_has_month(segment):
        score += 2
    if "(" in segment or ")" in segment:
        score += 1
    if segment_has_page_marker(segment):
        score -= 3
    if segment_has_page_range(segment):
        score -= 2
    if segment_has_volume_marker(segment):
        score -= 1
    return score


def capture_year_like(text: str) -> list[tuple[str, bool]]:
    """Digit runs of two or more that can be years.

    Each entry carries whether the run directly follows a range separator
    (``/`` or a dash). Runs that are page-range components are skipped: a
    4-digit run followed by a dash and at most two digits, or a run of at
    most two digits right after a dash.
    """
    runs = []
    for match in re.finditer(r"[0-9]+", text):
        digits = match.group()
        if len(digits) < 2:
            continue
        before = text[: match.start()].rstrip()
        prev = before[-1] if before else ""
        after = text[match.end() :].lstrip()
        next_char = after[:1]

        if next_char and next_char in DASHES:
            following = re.match(r"\s*([0-9]*)", after[1:]).group(1)
            if len(digits) == 4 and len(following) <= 2:
                continue
        if prev and prev in DASHES and len(digits) <= 2:
            continue
        runs.append((digits, bool(prev) and prev in _RANGE_SEPARATORS))
    return runs


def normalize_year_candidate(
    candidate: str, previous: str | None, allow_short: bool
) -> str | None:
    """Normalize a digit run to a 4-digit year.

    Runs of four or more digits keep their first four. Shorter runs are only
    completed when *allow_short* is set: the missing leading digits are
    borrowed from *previous*, or default to ``19`` when no earlier year
    exists (two-digit values of 31 or less are rejected in that case).
    """
    digits = digits_of(candidate)
    if len(digits) >= 4:
        return digits[:4]
    if len(digits) < 2 or not allow_short:
        return None

    prefix_len = 4 - len(digits)
    if previous is not None and len(previous) >= prefix_len:
        return previous[:prefix_len] + digits
    if len(digits) == 2 and int(digits) <= 31:
        return None
    return _DEFAULT_CENTURY_PREFIX[prefix_len] + digits


# ---------------------------------------------------------------------------
# Structured dates
# ---------------------------------------------------------------------------


def collect_numeric_date_parts(text: str) -> list[str]:
    """Year/month/day parts of a structured date in *text*, if any.

    A month-name date wins when a month token is present. Otherwise the first
    token with three or more digit groups separated by ``-``, ``/`` or ``.``
    is split into its groups (page markers and ranges are skipped).
    """
    if segment_has_month(text):
        month_parts = collect_month_name_parts(text)
        if month_parts is not None:
            return month_parts

    tokens = text.split()
    for idx, token in enumerate(tokens):
        if is_page_marker(token) or parse_page_range_token(token) is not None:
            continue
        if idx > 0 and is_page_marker(tokens[idx - 1]):
            continue
        trimmed = token.strip(_NON_SEPARATOR_PUNCT)
        if not trimmed or not any(sep in trimmed for sep in _DATE_SEPARATORS):
            continue
        pieces = re.findall(r"[0-9]+", trimmed)
        if len(pieces) >= 3:
            parts = []
            for piece_idx, piece in enumerate(pieces):
                if piece_idx == 0:
                    normalized = normalize_year_candidate(piece, None, False) or ""
                else:
                    normalized = piece
                if normalized:
                    parts.append(normalized)
            return parts

    return collect_month_name_parts(text) or []


def collect_month_name_parts(text: str) -> list[str] | None:
    """``[year, MM, DD?]`` from a month-name date such as ``5 Jan. 2001``.

    The year is searched backward from the month, then forward, within
    [1800, 2099]; tokens with dashes are never years here. The day is a 1-2
    digit token right after the month, else right before it.
    """
    tokens = [cleaned for cleaned in (strip_punct(token) for token in text.split()) if cleaned]
    month_index = next(
        (idx for idx, token in enumerate(tokens) if parse_month_token(token) is not None),
        None,
    )
    if month_index is None:
        return None
    month = parse_month_token(tokens[month_index])

    year = _find_month_year(reversed(tokens[:month_index]))
    if year is None:
        year = _find_month_year(tokens[month_index + 1 :])
    if year is None:
        return None

    day = None
    if month_index + 1 < len(tokens):
        day = extract_day_token(tokens[month_index + 1])
    if day is None and month_index > 0:
        day = extract_day_token(tokens[month_index - 1])

    parts = [year, f"{month:02d}"]
    if day is not None:
        parts.append(day)
    return parts


def _find_month_year(tokens) -> str | None:
    for token in tokens:
        if has_dash(token):
            continue
        digits = digits_of(token)
        if len(digits) >= 4 and int(digits[:4]) in _MONTH_YEAR_RANGE:
            return digits[:4]
    return None


def extract_day_token(token: str) -> str | None:
    """Leading one or two digits of *token* when it reads like a day."""
    if len(digits_of(token)) > 2 and not has_dash(token):
        return None
    day = ""
    for char in token:
        if is_digit(char):
            day += char
            if len(day) >= 2:
                break
        elif char in DASHES or day:
            break
    return day or None


# ---------------------------------------------------------------------------
# Circa
# ---------------------------------------------------------------------------


def detect_circa(reference: str) -> bool:
    """True for ``circa``, ``c. 1967``/``ca. 1967``, or a glued ``c.1967``."""
    tokens = reference.split()
    for idx, token in enumerate(tokens):
        trimmed = strip_punct(token).lower()
        if trimmed == "circa":
            return True
        if (
            trimmed in ("c", "ca")
            and any(c.islower() for c in token)
            and idx + 1 < len(tokens)
            and len(digits_of(tokens[idx + 1])) >= 4
        ):
            return True
        if trimmed.startswith("c") and len(digits_of(trimmed[1:])) >= 4:
            return True
    return False
