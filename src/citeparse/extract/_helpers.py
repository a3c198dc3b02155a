"""Helper functions and compiled patterns for reference extraction.

Shared string predicates used across the segment splitter, the author
decomposition, and the title/venue resolvers. Every function here is pure
and total over arbitrary ``str`` input.
"""

import re
import string

# Pre-compiled regex patterns
ASCII_DIGITS_RE = re.compile(r"[0-9]+")
UNICODE_DASH_RE = re.compile(r"[–—]")
CHAPTER_RE = re.compile(r"\bchapter\b|\bchap\.|\bch\.", re.IGNORECASE)
THESIS_RE = re.compile(r"\b(thesis|dissertation)\b", re.IGNORECASE)
REPORT_RE = re.compile(r"\breport\b", re.IGNORECASE)

ASCII_PUNCTUATION = string.punctuation
DASHES = "-–—"
OPEN_QUOTES = "\"“‘"
AUTHOR_TRIM_CHARS = ".,;:!?()[]"
SEGMENT_TRIM_CHARS = ",.;:"

ARTICLES = frozenset({"a", "an", "the"})
AUTHOR_SUFFIXES = frozenset({"jr", "sr", "ii", "iii", "iv"})
NAME_PARTICLES = frozenset(
    {
        "da",
        "de",
        "del",
        "der",
        "den",
        "di",
        "du",
        "la",
        "le",
        "van",
        "von",
        "al",
        "bin",
        "ibn",
    }
)

_MONTHS: dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "septembre": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}


# ---------------------------------------------------------------------------
# Character and token normalization
# ---------------------------------------------------------------------------


def is_digit(char: str) -> bool:
    """Return True for an ASCII digit (``str.isdigit`` also accepts superscripts)."""
    return "0" <= char <= "9"


def digits_of(text: str) -> str:
    """Keep only the ASCII digits of *text*."""
    return "".join(c for c in text if is_digit(c))


def has_dash(text: str) -> bool:
    return any(dash in text for dash in DASHES)


def strip_punct(token: str) -> str:
    """Trim ASCII punctuation from both ends of *token*."""
    return token.strip(ASCII_PUNCTUATION)


def normalize_token(token: str) -> str:
    """Lower-case *token* and keep only ASCII alphanumerics.

    This is the normalization shared by FieldTokens and the tagger.
    """
    return "".join(c for c in token if c.isascii() and c.isalnum()).lower()


def normalize_compare_value(value: str) -> str:
    """Normalize free text for equality comparison between segments."""
    kept = "".join(c for c in value.lower() if (c.isascii() and c.isalnum()) or c.isspace())
    return " ".join(kept.split())


def normalize_author_component(component: str) -> str:
    """Trim name punctuation from each word and collapse whitespace."""
    parts = (part.strip(AUTHOR_TRIM_CHARS) for part in component.split())
    return " ".join(part for part in parts if part)


def clean_segment(segment: str) -> str:
    """Trim separator punctuation and whitespace from a segment."""
    return segment.strip().strip(SEGMENT_TRIM_CHARS).strip()


def numeric_tokens(segment: str) -> list[str]:
    """Return every maximal run of ASCII digits in order."""
    return ASCII_DIGITS_RE.findall(segment)


def number_token(segment: str) -> str | None:
    """Return the digits of the first whitespace token that carries any."""
    for part in segment.split():
        trimmed = _trim_non_digits(part)
        if trimmed:
            return digits_of(trimmed)
    return None


def last_number_token(segment: str) -> str | None:
    """Return the last whitespace token that is purely digits once trimmed."""
    found = None
    for part in segment.split():
        trimmed = _trim_non_digits(part)
        if trimmed and all(is_digit(c) for c in trimmed):
            found = trimmed
    return found


def _trim_non_digits(token: str) -> str:
    start = 0
    end = len(token)
    while start < end and not is_digit(token[start]):
        start += 1
    while end > start and not is_digit(token[end - 1]):
        end -= 1
    return token[start:end]


def year_token_index(tokens: list[str]) -> int | None:
    """Index of the first 4-digit token in [1800, 2099], if any."""
    for idx, token in enumerate(tokens):
        if len(token) == 4 and token.isascii() and token.isdigit():
            if 1800 <= int(token) <= 2099:
                return idx
    return None


# ---------------------------------------------------------------------------
# Months
# ---------------------------------------------------------------------------


def month_number(token: str) -> int | None:
    """Map an English month name or abbreviation to 1-12."""
    return _MONTHS.get(token.lower().rstrip(".,"))


def parse_month_token(token: str) -> int | None:
    """Month number of *token*, reading only the part before any dash."""
    first = re.split(r"[-–—]", token, maxsplit=1)[0].strip()
    return month_number(first)


# ---------------------------------------------------------------------------
# Name-shape predicates
# ---------------------------------------------------------------------------


def looks_like_initials(value: str) -> bool:
    """True for initials such as ``J.``, ``JR``, ``J.-P.`` or ``A.B.C.``."""
    letters = [c for c in value if c.isalpha()]
    if not letters:
        return False
    all_upper = all(c.isupper() for c in letters)
    if len(letters) <= 2 and all_upper:
        return True
    if len(letters) <= 4 and all_upper and "." in value:
        return True
    return all(c.isupper() or c in "-." for c in value)


def looks_like_given_name(value: str) -> bool:
    if looks_like_initials(value):
        return True
    cleaned = strip_punct(value)
    return len(cleaned) >= 2 and cleaned[0].isupper()


def looks_like_given_token(value: str) -> bool:
    """Single-word given name or initials (no inner whitespace)."""
    if any(c.isspace() for c in value):
        return False
    cleaned = strip_punct(value)
    if not cleaned:
        return False
    if looks_like_initials(cleaned):
        return True
    return (
        len(cleaned) >= 2
        and cleaned[0].isupper()
        and all(c.isalpha() or c == "-" for c in cleaned)
    )


def is_particle_or_capitalized(token: str) -> bool:
    normalized = normalize_author_component(token).lower()
    return normalized in NAME_PARTICLES or token[:1].isupper()


def looks_like_family_with_initials(value: str) -> bool:
    """True for ``Family I.`` shapes, e.g. ``van Dijk T.A.``."""
    tokens = value.split()
    if len(tokens) < 2 or not looks_like_initials(tokens[-1]):
        return False
    return any(is_particle_or_capitalized(token) for token in tokens[:-1])


def looks_like_initial_surname(value: str) -> bool:
    """True for ``I. Family`` shapes, e.g. ``J. Smith``."""
    tokens = value.split()
    if len(tokens) < 2 or not looks_like_initials(tokens[0]):
        return False
    return is_title_word(tokens[-1])


def looks_like_person_name(value: str) -> bool:
    """Two to four capitalized words, not starting with an article."""
    tokens = value.split()
    if not 2 <= len(tokens) <= 4:
        return False
    if tokens[0].lower() in ARTICLES:
        return False
    return all(token[0].isupper() and any(c.islower() for c in token) for token in tokens)


def is_title_word(word: str) -> bool:
    """Capital letter followed by at least one lower-case letter."""
    return len(word) >= 2 and word[0].isupper() and any(c.islower() for c in word[1:])


def is_author_suffix(value: str) -> bool:
    return normalize_author_component(value).lower() in AUTHOR_SUFFIXES


def split_parts(segment: str, separator: str = ",") -> list[str]:
    """Split on *separator*, trim, and drop empty parts."""
    return [part.strip() for part in segment.split(separator) if part.strip()]
