"""Author-segment location and author decomposition.

Locating the author span is a fallback chain: numbered-citation handling,
comma+initials boundary detection, segment-shape classification, and finally
segment scoring. Decomposition then turns the chosen span into ordered
``Author(family, given)`` pairs.
"""

import re

from ..models import Author
from ._helpers import (
    ARTICLES,
    ASCII_PUNCTUATION,
    AUTHOR_SUFFIXES,
    NAME_PARTICLES,
    is_author_suffix,
    is_digit,
    is_title_word,
    looks_like_family_with_initials,
    looks_like_given_name,
    looks_like_given_token,
    looks_like_initial_surname,
    looks_like_initials,
    looks_like_person_name,
    normalize_author_component,
    parse_month_token,
    split_parts,
    strip_punct,
)
from .segments import (
    extract_citation_number,
    split_reference_segments,
    strip_leading_citation_number,
)
from .shapes import (
    looks_like_author_list,
    looks_like_short_journal,
    segment_has_year,
    segment_is_container,
    segment_is_journal_like,
)

_JOINERS = ("&", " and ", " AND ", " / ", "/", "|")
_PARENTHETICAL_RE = re.compile(r"\(([^)]*)\)?")
_DATE_QUALIFIERS = ("c.", "ca.", "circa", "ed", "éd")
_MAX_PARTICLE_BLOCK = 2


def _has_initials(text: str) -> bool:
    return any(looks_like_initials(token) for token in text.split())


def _rstrip_comma(text: str) -> str:
    return text.strip().rstrip(",")


def _is_date_month(tokens: list[str], idx: int) -> bool:
    """Month word at *idx* that reads as a date, not a given name (``Jan``, ``May``).

    After a comma a month word is a given name unless a number follows it.
    """
    if parse_month_token(strip_punct(tokens[idx])) is None:
        return False
    if idx == 0 or not tokens[idx - 1].endswith(","):
        return True
    following = tokens[idx + 1] if idx + 1 < len(tokens) else ""
    return any(is_digit(c) for c in following)


# ---------------------------------------------------------------------------
# Decomposition
# ---------------------------------------------------------------------------


def authors_for_reference(reference: str) -> list[Author]:
    """Resolve the ordered author list of *reference*.

    Falls back to a single-author parse of the raw author segment, then to
    the first full-stop-delimited span as a literal family name. Never
    raises; an empty list is a valid result.

    Parameters
    ----------
    reference : str
        One reference string.

    Returns
    -------
    list[Author]
        Authors in citation order.
    """
    # an unpunctuated run of words has no author boundary to find
    if not any(c in ASCII_PUNCTUATION or is_digit(c) for c in reference):
        return []

    authors = parse_authors(reference)
    if authors:
        return authors

    segment = extract_author_segment(reference)
    author = parse_author_chunk(segment)
    if author is not None:
        return [author]

    literal = segment.split(".", 1)[0].strip()
    if literal:
        return [Author(family=literal, given="")]
    return []


def parse_authors(reference: str) -> list[Author]:
    """Decompose the author segment of *reference* into authors."""
    segment = trim_author_segment(extract_author_segment(reference))
    for joiner in _JOINERS:
        segment = segment.replace(joiner, ";")

    authors: list[Author] = []
    for piece in segment.split(";"):
        piece = piece.strip()
        if not piece:
            continue
        for candidate in split_author_candidates(piece):
            author = parse_author_chunk(candidate)
            if author is not None:
                authors.append(author)
    return authors


def split_author_candidates(piece: str) -> list[str]:
    """Group the comma-parts of one joiner-free chunk into author chunks.

    Examples
    --------
        >>> split_author_candidates("Smith, J., Jones, K.")
        ['Smith, J.', 'Jones, K.']
        >>> split_author_candidates("King, Martin Luther, Jr.")
        ['King, Martin Luther, Jr.']
    """
    trimmed = piece.strip()
    if "," not in trimmed:
        return [trimmed]
    parts = split_parts(trimmed)
    if len(parts) < 2:
        return [trimmed]

    if all(looks_like_family_with_initials(part) for part in parts):
        return parts
    if all(looks_like_initial_surname(part) for part in parts):
        return parts

    if is_author_suffix(parts[-1]):
        if len(parts) == 3:
            return [trimmed]
        if len(parts) > 3 and looks_like_initials(parts[1]):
            grouped = [", ".join(parts[:3])]
            remainder = ", ".join(parts[3:])
            if remainder:
                grouped.extend(split_author_candidates(remainder))
            return grouped

    if len(parts) % 2 == 0 and all(
        looks_like_given_token(parts[idx + 1]) for idx in range(0, len(parts), 2)
    ):
        grouped = []
        for idx in range(0, len(parts), 2):
            family = parts[idx].lstrip("&").strip()
            if family.lower().startswith("and "):
                family = family[4:].strip()
            if family:
                grouped.append(f"{family}, {parts[idx + 1]}")
        if grouped:
            return grouped

    if len(parts) >= 3:
        return parts
    return [trimmed]


def parse_author_chunk(chunk: str) -> Author | None:
    """Split one author chunk into family and given names.

    With a comma, the text before the first comma is the family name. Without
    one, the last word is the family name (absorbing up to two preceding
    particles such as ``van`` or ``de la``), unless the last word is shaped
    like initials, in which case everything before it is the family name.

    Returns
    -------
    Author | None
        None for empty chunks, the literal ``et al``, or when both sides
        are empty after trimming.
    """
    trimmed = chunk.strip()
    if not trimmed or trimmed.rstrip(".").lower() == "et al":
        return None

    if "," in trimmed:
        parts = split_parts(trimmed)
        family = parts[0] if parts else ""
        given = " ".join(parts[1:])
    else:
        family, given = _split_uncommaed_name(trimmed.split())

    family = normalize_author_component(family)
    given = normalize_author_component(strip_et_al_suffix(given))
    if not family and not given:
        return None
    return Author(family=family, given=given)


def _split_uncommaed_name(tokens: list[str]) -> tuple[str, str]:
    suffix = None
    if tokens and normalize_author_component(tokens[-1]).lower() in AUTHOR_SUFFIXES:
        suffix = normalize_author_component(tokens.pop()).lower()
    if not tokens:
        return "", suffix or ""

    if len(tokens) >= 2 and looks_like_initials(tokens[-1]):
        family = " ".join(tokens[:-1])
        given_parts = [tokens[-1]]
    else:
        family_start = len(tokens) - 1
        while (
            family_start > 0
            and len(tokens) - 1 - family_start < _MAX_PARTICLE_BLOCK
            and _is_particle(tokens[family_start - 1])
        ):
            family_start -= 1
        family = " ".join(tokens[family_start:])
        given_parts = tokens[:family_start]

    if suffix:
        given_parts.append(suffix)
    return family, " ".join(given_parts)


def _is_particle(token: str) -> bool:
    cleaned = normalize_author_component(token)
    return bool(cleaned) and (cleaned.lower() in NAME_PARTICLES or cleaned.islower())


def strip_et_al_suffix(value: str) -> str:
    """Drop a trailing ``et al.`` from a given-name string."""
    parts = value.split()
    if len(parts) < 2:
        return value
    if parts[-2].rstrip(".").lower() == "et" and parts[-1].rstrip(".").lower() == "al":
        return " ".join(parts[:-2])
    return value


# ---------------------------------------------------------------------------
# Author-segment location
# ---------------------------------------------------------------------------


def extract_author_segment(reference: str) -> str:
    """Isolate the substring of *reference* that carries the author list.

    Parameters
    ----------
    reference : str
        One reference string, optionally numbered.

    Returns
    -------
    str
        The author span, possibly empty. Parenthetical dates are removed
        on the scoring fallback paths.
    """
    cleaned = strip_leading_citation_number(reference)
    if extract_citation_number(reference) is not None:
        numbered = _numbered_author_segment(cleaned)
        if numbered is not None:
            return numbered

    end = find_author_list_end_by_title(cleaned)
    if end is not None:
        candidate = cleaned[:end].strip()
        if candidate:
            return trim_author_segment(candidate)

    segments = split_reference_segments(cleaned)
    if segments and (
        looks_like_author_list(segments[0])
        or split_leading_author_by_comma(segments[0]) is not None
    ):
        return trim_author_segment(segments[0])

    and_pos = cleaned.find(" and ")
    if and_pos >= 0:
        period = cleaned.find(".", and_pos)
        if period >= 0:
            prefix = cleaned[:period].strip().rstrip(".")
            if prefix:
                return prefix

    first_period = cleaned.find(".")
    if first_period >= 0:
        prefix = cleaned[:first_period].strip()
        if not looks_like_author_list(prefix) and not looks_like_person_name(prefix):
            remainder = cleaned[first_period + 1 :].strip()
            next_period = remainder.find(".")
            if next_period >= 0:
                candidate = remainder[:next_period].strip()
                if "," in candidate and _has_initials(candidate):
                    return trim_author_segment(candidate)

    if len(segments) > 1:
        first = segments[0]
        if not looks_like_author_list(first) and not looks_like_person_name(first):
            for segment in segments[1:]:
                if "," in segment and _has_initials(segment):
                    return trim_author_segment(segment)

    if first_period > 0:
        prefix_segment = _author_from_leading_prefix(cleaned, first_period)
        if prefix_segment is not None:
            return prefix_segment

    leading = split_leading_author_by_comma(cleaned)
    if leading is not None:
        leading_segment = _author_from_leading_comma(cleaned, *leading)
        if leading_segment is not None:
            return leading_segment

    if not segments:
        return strip_parenthetical_date(cleaned.strip())

    index, segment = select_author_segment(segments)
    split = split_author_title_segment(segment)
    if split is not None and split[0]:
        return split[0]
    candidate = trim_author_segment(segment) or segments[index]
    return strip_parenthetical_date(candidate)


def _numbered_author_segment(cleaned: str) -> str | None:
    pos = cleaned.find(". ")
    if pos >= 0:
        candidate = cleaned[pos + 2 :].strip().rstrip(".")
        candidate = candidate.split(":", 1)[0].strip()
        end = find_author_list_end_by_title(candidate)
        if end is not None:
            candidate = candidate[:end].strip()
        if "," in candidate:
            return trim_author_segment(candidate)

    for segment in split_reference_segments(cleaned)[1:]:
        if looks_like_author_list(segment) or ("," in segment and _has_initials(segment)):
            return trim_author_segment_at_date(segment)
    return None


def _leading_tokens(text: str) -> list[str]:
    return [cleaned for cleaned in (strip_punct(token) for token in text.split()) if cleaned]


def _author_from_leading_prefix(cleaned: str, first_period: int) -> str | None:
    prefix = cleaned[:first_period].strip()
    if "," not in prefix and looks_like_person_name(prefix):
        return prefix
    if not looks_like_author_list(prefix):
        return None

    remainder = cleaned[first_period + 1 :].strip()
    if remainder_has_author_list(remainder):
        return None
    # "Smith, J. R. Title": the period cut after the first initial
    tokens = _leading_tokens(remainder)
    if tokens and looks_like_initials(tokens[0]) and tokens[0].lower() not in ARTICLES:
        expanded = f"{prefix} {tokens[0]}"
        if len(tokens) > 1 and looks_like_initials(tokens[1]) and tokens[1].lower() not in ARTICLES:
            expanded = f"{expanded} {tokens[1]}"
        return expanded
    return prefix


def _author_from_leading_comma(cleaned: str, author: str, remainder: str) -> str | None:
    if not remainder_has_author_list(remainder):
        tokens = _leading_tokens(remainder)
        if not _has_initials(author) and tokens and looks_like_given_name(tokens[0]):
            parts = [author, tokens[0]]
            if len(tokens) > 1 and looks_like_initials(tokens[1]):
                parts.append(tokens[1])
            return ", ".join(parts)
        return author

    before_journal = trim_author_segment_before_journal(cleaned)
    if before_journal is not None:
        return strip_parenthetical_date(before_journal)

    end = find_author_list_end(cleaned)
    if end is None:
        return None
    prefix = cleaned[:end].strip().rstrip(".")
    if not prefix:
        return None
    for trimmer in (trim_author_segment_before_journal, strip_trailing_journal_author_segment):
        trimmed = trimmer(prefix)
        if trimmed is not None:
            return strip_parenthetical_date(trimmed)
    return prefix


def find_author_list_end_by_title(reference: str) -> int | None:
    """Index of the period that closes an author list and opens a title.

    The period must follow comma-bearing text containing initials whose
    post-comma tail is at most two words, and must precede a capitalized
    title word (optionally after a single capital letter such as ``A``).
    """
    for idx, char in enumerate(reference):
        if char != ".":
            continue
        before = reference[:idx].strip()
        if "," not in before or not _has_initials(before):
            continue
        if len(before.rsplit(",", 1)[1].split()) > 2:
            continue
        words = reference[idx + 1 :].split()
        if not words:
            continue

        first = words[0]
        first_clean = strip_punct(first)
        if is_title_word(first_clean):
            return idx
        if (
            len(first_clean) == 1
            and "-" not in first
            and "." not in first
            and first_clean.isupper()
            and len(words) > 1
            and is_title_word(strip_punct(words[1]))
        ):
            return idx
    return None


def find_author_list_end(reference: str) -> int | None:
    """Index of the first period that plausibly ends a multi-author list."""
    for idx, char in enumerate(reference):
        if char != ".":
            continue
        after = reference[idx + 1 :].lstrip()
        if not after:
            return idx

        previous = reference[:idx].split()
        prev_token = previous[-1] if previous else ""
        token = after.split()[0]
        token_clean = strip_punct(token).lower()
        if not token_clean or token.endswith((",", ";")):
            continue
        if len(token_clean) == 4 and token_clean.isascii() and token_clean.isdigit():
            return idx
        if token_clean == "and":
            continue

        next_surname = token[0].isupper() and any(c.islower() for c in token)
        if looks_like_initials(prev_token) and next_surname:
            if after[len(token) :].lstrip().startswith(","):
                continue
            return idx
        if not looks_like_initials(token):
            return idx
    return None


def select_author_segment(segments: list[str]) -> tuple[int, str]:
    """Best-scoring of the first four segments; ties keep the earliest."""
    best_index = 0
    best_score = None
    for idx, segment in enumerate(segments[:4]):
        score = author_segment_score(segment)
        if best_score is None or score > best_score:
            best_score = score
            best_index = idx
    return best_index, segments[best_index] if segments else ""


def author_segment_score(segment: str) -> int:
    trimmed = segment.strip()
    if not trimmed:
        return -(2**31)
    lower = trimmed.lower()
    words = trimmed.split()
    comma_count = trimmed.count(",")
    initial_count = sum(1 for token in words if looks_like_initials(token))
    is_container = segment_is_container(trimmed)

    score = 0
    if is_container:
        score -= 4
    if ":" in trimmed:
        score -= 2
    if "proc." in lower:
        score -= 2
    if "(" in trimmed and ")" in trimmed and segment_has_year(trimmed):
        score += 2
    if " in " in lower:
        score -= 2
    if trimmed[0].isascii() and trimmed[0].isdigit():
        score -= 6
    if all((c.isascii() and c.isdigit()) or c in ",.-" for c in trimmed):
        score -= 6
    if comma_count >= 2 and is_container:
        score += 2
    if comma_count > 0:
        score += 2
    if comma_count >= 2:
        score += 1
    if " and " in trimmed or "&" in trimmed:
        score += 2
    if segment_has_year(trimmed):
        score -= 2
    if "http" in lower or "doi" in lower:
        score -= 2
    if initial_count >= 2:
        score += 2
    if comma_count >= 2 and initial_count >= 1:
        score += 4
    if any(parse_month_token(token) is not None for token in words):
        score -= 2
    if len(words) <= 6:
        score += 1
    elif len(words) >= 10:
        score -= 2
    if initial_count:
        score += 1
    if looks_like_person_name(trimmed):
        score += 2
    return score


# ---------------------------------------------------------------------------
# Segment trimming
# ---------------------------------------------------------------------------


def trim_author_segment(segment: str) -> str:
    """Cut trailing non-author material (dates, journals, volume markers)."""
    before_paren, paren, _ = segment.partition("(")
    if paren and segment_has_year(segment):
        return _rstrip_comma(before_paren)

    if ";" not in segment and "&" not in segment and " and " not in segment:
        before, period, after = segment.partition(".")
        following = after.lstrip()
        # "Doe, J., Roe, K." keeps going past the initial's period
        if period and not following.startswith(","):
            if following and not following[0].isupper():
                return _rstrip_comma(before)
            next_words = following.split()
            if next_words and not looks_like_initials(next_words[0]):
                return _rstrip_comma(before)

    before, comma, tail = segment.rpartition(",")
    tail = tail.strip()
    if (
        comma
        and tail
        and ";" not in segment
        and "&" not in segment
        and " and " not in tail
        and not all(looks_like_initials(token) for token in tail.split())
        and not looks_like_family_with_initials(tail)
        and not looks_like_person_name(tail)
        and not looks_like_initial_surname(tail)
        and segment_is_journal_like(tail)
    ):
        return _rstrip_comma(before)

    tokens = segment.split()
    for idx, token in enumerate(tokens):
        cleaned = strip_punct(token)
        lower = cleaned.lower()
        if idx > 0 and (_is_date_month(tokens, idx) or lower.startswith("vol") or lower == "pp"):
            return " ".join(tokens[:idx]).rstrip(",")

    match = re.search(r"[0-9]", segment)
    if match:
        prefix = segment[: match.start()].strip()
        if len(prefix) >= 3:
            return prefix.rstrip(",")
    return segment.strip()


def trim_author_segment_at_date(segment: str) -> str:
    """Cut *segment* before the first year, month, or circa marker."""
    tokens = segment.split()
    for idx, token in enumerate(tokens):
        cleaned = strip_punct(token)
        if not cleaned:
            continue
        is_year = len(cleaned) == 4 and cleaned.isascii() and cleaned.isdigit()
        is_date = is_year or _is_date_month(tokens, idx)
        if is_date:
            if idx > 0:
                return " ".join(tokens[:idx]).rstrip(",")
            break
        if idx > 0 and token.lower() in ("c.", "circa", "ca."):
            return " ".join(tokens[:idx]).rstrip(",")
    return trim_author_segment(segment)


def trim_author_segment_before_journal(reference: str) -> str | None:
    """Comma-parts up to the first journal-shaped part, once initials were seen."""
    parts: list[str] = []
    saw_initial = False
    for part in split_parts(reference):
        candidate = part.rstrip(".")
        if segment_is_journal_like(candidate) or looks_like_short_journal(candidate):
            if saw_initial and parts:
                return ", ".join(parts)
            return None
        if _has_initials(part):
            saw_initial = True
        parts.append(part)
    return None


def strip_trailing_journal_author_segment(segment: str) -> str | None:
    parts = split_parts(segment)
    if len(parts) < 2:
        return None
    last = parts[-1]
    if segment_is_journal_like(last) or looks_like_short_journal(last):
        return ", ".join(parts[:-1]) or None
    return None


def split_leading_author_by_comma(segment: str) -> tuple[str, str] | None:
    """Split ``Surname, rest`` or ``I. Surname, rest`` at the first comma."""
    before, comma, after = segment.partition(",")
    before = before.strip()
    after = after.strip()
    if not comma or not before or not after:
        return None
    tokens = before.split()
    initials_ok = all(looks_like_initials(token) for token in tokens[:-1])
    if initials_ok and tokens[-1][0].isupper():
        return before, after
    return None


def remainder_has_author_list(remainder: str) -> bool:
    """True when the text after a leading author still lists more authors."""
    snippet = remainder.split("(", 1)[0].strip().lstrip(",;").strip()
    if not snippet:
        return False
    if ";" in snippet or "&" in snippet or " and " in snippet:
        return True
    return looks_like_author_list(snippet) and _has_initials(snippet)


def split_author_title_segment(segment: str) -> tuple[str, str] | None:
    """Split ``Author (1999). Title`` around a year-bearing parenthetical."""
    open_idx = segment.find("(")
    if open_idx < 0:
        return None
    close_idx = segment.find(")", open_idx + 1)
    if close_idx < 0:
        return None
    inside = segment[open_idx + 1 : close_idx]
    if sum(1 for c in inside if c.isascii() and c.isdigit()) < 4:
        return None
    author = segment[:open_idx].strip().rstrip(",").strip()
    title = segment[close_idx + 1 :].lstrip().lstrip(".:;").strip()
    if not author or len(title) < 3:
        return None
    return author, title


def strip_parenthetical_date(segment: str) -> str:
    """Drop parentheticals that hold a qualified date, e.g. ``(c.1967)``."""

    def _replace(match: re.Match) -> str:
        contents = match.group(1)
        lower = contents.lower()
        has_digit = any(c.isascii() and c.isdigit() for c in contents)
        if has_digit and any(qualifier in lower for qualifier in _DATE_QUALIFIERS):
            return ""
        return f"({contents.strip()})"

    return _PARENTHETICAL_RE.sub(_replace, segment).strip()
