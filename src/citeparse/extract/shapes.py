"""Segment-shape classifiers.

Predicates that answer "does this segment look like X" for author lists,
journals, conferences, dates, and page ranges. Title, venue, author and
date resolution all consult the same predicates so that a segment is
classified consistently by every resolver.
"""

import re

from ._helpers import (
    ARTICLES,
    NAME_PARTICLES,
    is_digit,
    is_title_word,
    looks_like_given_name,
    looks_like_initials,
    normalize_author_component,
    parse_month_token,
    split_parts,
    strip_punct,
)

_CONFERENCE_KEYWORDS = ("conference", "symposium", "workshop", "meeting", "colloquium")
_STRONG_JOURNAL_RE = re.compile(
    r"journal|transactions|letters|\blett\b|review|\brev\.|annals|\bacta\b|\bacad|proc\.? natl",
    re.IGNORECASE,
)
_JOURNAL_LIKE_RE = re.compile(
    r"journal|\btrans\.|transactions|bulletin|letters|\blett\b|annals|review|\brev\."
    r"|\bacta\b|proc\.? natl|\bacad",
    re.IGNORECASE,
)
_SOCIETY_RE = re.compile(r"\b(ieee|acm)\b", re.IGNORECASE)
_SIG_RE = re.compile(r"\bSIG[A-Z]")
_SHORT_JOURNAL_WORDS = frozenset(
    {"j", "jr", "lett", "rev", "proc", "acad", "ann", "bull", "trans", "acta", "comm", "conf"}
)
_JOURNAL_NAME_PARTICLES = frozenset(
    {"of", "de", "la", "le", "du", "der", "van", "von", "the", "and"}
)
_PAGE_MARKERS = frozenset({"p", "p.", "pp", "pp.", "page", "pages"})
_VOLUME_MARKER_RE = re.compile(r"vol|no\.|issue|number", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Author lists
# ---------------------------------------------------------------------------


def looks_like_author_list(segment: str) -> bool:
    """True when *segment* reads like ``Family, Given`` or ``Family, I.``.

    Requires at least one comma, at most ten words, a first comma-part made
    only of capitalized words or name particles, and a second comma-part
    carrying a given-name or initials token.
    """
    trimmed = segment.strip()
    if "," not in trimmed or len(trimmed.split()) > 10:
        return False
    parts = split_parts(trimmed)
    if len(parts) < 2:
        return False
    if any(is_digit(c) for c in parts[1]):
        return False
    family_raw = parts[0].lower()
    if any(family_raw.startswith(article + " ") for article in ARTICLES):
        return False

    family_ok = all(
        normalize_author_component(token).lower() in NAME_PARTICLES or token[:1].isupper()
        for token in parts[0].split()
    )
    given_ok = any(
        looks_like_given_name(token) or looks_like_initials(token) for token in parts[1].split()
    )
    return family_ok and given_ok


# ---------------------------------------------------------------------------
# Containers: conferences and journals
# ---------------------------------------------------------------------------


def segment_is_container(segment: str) -> bool:
    return segment_is_conference(segment) or segment_is_journal_like(segment)


def segment_is_conference(segment: str) -> bool:
    """Conference-style venue; IEEE/ACM proceedings count as journals instead."""
    lower = segment.lower()
    if "presented at" in lower:
        return True
    if any(keyword in lower for keyword in _CONFERENCE_KEYWORDS):
        return True
    if "proceedings" in lower:
        return not _SOCIETY_RE.search(lower)
    if "proc." in lower:
        if _SOCIETY_RE.search(lower) or _STRONG_JOURNAL_RE.search(lower):
            return False
        return True
    return False


def segment_is_journal_like(segment: str) -> bool:
    """Journal-style venue by keyword, abbreviation, or society marker."""
    lower = segment.lower()
    if _JOURNAL_LIKE_RE.search(lower):
        return True
    if lower.startswith("proceedings of the") and _SOCIETY_RE.search(lower):
        return True
    if " J " in segment or ", J " in segment:
        return True
    if looks_like_short_journal(segment):
        return True
    if _starts_with_journal_abbreviation(segment):
        return True
    return bool(_SOCIETY_RE.search(lower) or _SIG_RE.search(segment))


def _starts_with_journal_abbreviation(segment: str) -> bool:
    """``J. Biol. Chem.``/``J Clin Invest``, but not a trailing initial like ``J. Title``."""
    trimmed = segment.strip()
    if not trimmed.startswith(("J ", "J.", "J-")):
        return False
    rest = [strip_punct(token) for token in trimmed[2:].split()]
    rest = [token for token in rest if token.isalpha()]
    if len(rest) < 2:
        return False
    return any(
        token[0].isupper() and (len(token) <= 5 or token.isupper()) for token in rest
    )


def looks_like_short_journal(segment: str) -> bool:
    """Abbreviated journal shape such as ``Phys. Rev.`` or ``Ann Bot``."""
    tokens = segment.split()
    if not 2 <= len(tokens) <= 4:
        return False
    if tokens[0].lower() in ARTICLES:
        return False
    if any(is_digit(c) for token in tokens for c in token):
        return False
    if ":" in segment:
        return False
    if any(token.lower() in _SHORT_JOURNAL_WORDS for token in tokens):
        return True
    has_abbrev = any(token.endswith(".") or all(c.isupper() for c in token) for token in tokens)
    return has_abbrev and all(len(token) <= 6 for token in tokens)


def looks_like_journal_name(segment: str) -> bool:
    """Two to six capitalized words, allowing joining particles."""
    if looks_like_author_list(segment) or ":" in segment:
        return False
    tokens = segment.split()
    if not 2 <= len(tokens) <= 6:
        return False
    if any(is_digit(c) for token in tokens for c in token):
        return False

    saw_title = False
    for token in tokens:
        cleaned = strip_punct(token)
        if not cleaned or cleaned.lower() in _JOURNAL_NAME_PARTICLES:
            continue
        if not is_title_word(cleaned):
            return False
        saw_title = True
    return saw_title


def is_journal_candidate(value: str) -> bool:
    return (
        segment_is_journal_like(value)
        or looks_like_short_journal(value)
        or looks_like_journal_name(value)
    )


# ---------------------------------------------------------------------------
# Dates, pages, volumes
# ---------------------------------------------------------------------------


def segment_has_year(segment: str) -> bool:
    """True when a digit run starts with a year in [1400, 2099]."""
    for run in re.findall(r"[0-9]{4,}", segment):
        if 1400 <= int(run[:4]) <= 2099:
            return True
    return False


def segment_has_month(segment: str) -> bool:
    return any(parse_month_token(strip_punct(token)) is not None for token in segment.split())


def is_page_marker(token: str) -> bool:
    """``p``, ``pp.``, ``pages`` or a glued ``p108``-style token."""
    lower = strip_punct(token).lower()
    if lower.startswith(("p.", "pp.")):
        return True
    rest = lower[1:]
    if lower.startswith("p") and rest and all(is_digit(c) for c in rest):
        return True
    return lower in _PAGE_MARKERS


def segment_has_page_marker(segment: str) -> bool:
    return any(is_page_marker(token) for token in segment.split())


def segment_has_volume_marker(segment: str) -> bool:
    return bool(_VOLUME_MARKER_RE.search(segment))


def segment_has_page_range(segment: str) -> bool:
    return any(parse_page_range_token(token) is not None for token in segment.split())


def _range_parts(token: str) -> list[str] | None:
    cleaned = "".join(c for c in token if is_digit(c) or c in "-–—")
    parts = [part for part in re.split(r"[-–—]", cleaned) if part]
    return parts if len(parts) == 2 else None


def parse_page_range_token(token: str) -> str | None:
    """Dash range that cannot be a year pair: ``123-145``, ``88-1024``.

    Rejects 4-digit/4-digit and 4-digit/2-digit pairs (year ranges) and
    short/short pairs (left to ``parse_short_page_range_token``).
    """
    if not any(dash in token for dash in "-–—"):
        return None
    parts = _range_parts(token)
    if parts is None:
        return None
    left, right = parts
    if len(left) < 2 or len(right) < 2:
        return None
    if len(left) == 4 and len(right) in (2, 4):
        return None
    if len(left) < 3 and len(right) < 3:
        return None
    return f"{left}-{right}"


def parse_short_page_range_token(token: str) -> str | None:
    """Explicitly short ranges: ``12-34``, ``1999-2000``, ``1203-10``."""
    if any(c.isalpha() for c in token):
        return None
    parts = _range_parts(token)
    if parts is None:
        return None
    left, right = parts
    if len(left) < 2 or len(right) < 2:
        return None
    if len(left) == 4 and len(right) in (2, 4):
        return f"{left}-{right}"
    if len(left) == 2 and len(right) == 2:
        return f"{left}-{right}"
    return None
