"""Title resolution.

The title is found by a fixed fallback chain. Each step is guarded by a
shape test and the first step that yields a candidate wins, so the order of
the steps below is significant on ambiguous input.
"""

import re

from ._helpers import (
    is_digit,
    looks_like_family_with_initials,
    looks_like_given_name,
    looks_like_initial_surname,
    looks_like_initials,
)
from .authors import (
    find_author_list_end_by_title,
    remainder_has_author_list,
    select_author_segment,
    split_author_title_segment,
    split_leading_author_by_comma,
)
from .segments import (
    extract_citation_number,
    split_reference_segments,
    strip_leading_citation_number,
)
from .shapes import (
    looks_like_author_list,
    segment_has_page_marker,
    segment_has_page_range,
    segment_has_volume_marker,
    segment_has_year,
    segment_is_container,
    segment_is_journal_like,
)

_PARENTHETICAL_RE = re.compile(r"\(([^)]*)\)?")
_EDITION_MARKERS = ("ed", "édition", "éd")
_TITLE_TRIM_CHARS = "\"'.“”‘’"


def extract_title(reference: str) -> str:
    """Resolve the title of *reference*.

    Steps, in order:

    1. Numbered citations: the first segment after the number, unless it
       is itself shaped like an author list.
    2. The text after an author-list/title boundary, up to the next
       sentence break.
    3. The segment following a leading author-list segment.
    4. The rest of a ``Surname, Title`` first segment.
    5. The text after an ``Author (Year)`` parenthetical.
    6. The segment adjacent to the best-scoring author segment, merged with
       the following segment when it is too short, replaced by the best
       non-noise segment when it looks like venue or metadata.

    Parameters
    ----------
    reference : str
        One reference string.

    Returns
    -------
    str
        The title, or ``""`` when nothing alphabetic qualifies.
    """
    cleaned = strip_leading_citation_number(reference)
    segments = split_reference_segments(cleaned)

    if (
        extract_citation_number(reference) is not None
        and segments
        and not looks_like_author_list(segments[0])
    ):
        return clean_title_segment(segments[0])

    end = find_author_list_end_by_title(cleaned)
    if end is not None:
        candidate = cleaned[end + 1 :].lstrip().split(". ", 1)[0].strip()
        if candidate:
            return clean_title_segment(candidate)

    if not segments:
        return ""

    first = segments[0]
    if len(segments) > 1 and (
        looks_like_author_list(first) or split_leading_author_by_comma(first) is not None
    ):
        candidate = segments[1]
        if (
            not segment_is_container(candidate)
            and not segment_has_year(candidate)
            and not segment_has_page_marker(candidate)
        ):
            return clean_title_segment(candidate)

    leading = split_leading_author_by_comma(first)
    if leading is not None and not remainder_has_author_list(leading[1]):
        title = _title_after_leading_author(leading[1], has_more_segments=len(segments) > 1)
        if title is not None:
            return clean_title_segment(title)

    split = split_author_title_segment(first)
    if split is not None and split[1]:
        return clean_title_segment(split[1])

    return _title_near_author_segment(segments)


def _title_after_leading_author(remainder: str, has_more_segments: bool) -> str | None:
    words = remainder.split()
    # a lone given name is not a title when a real title segment follows
    if has_more_segments and len(words) <= 1:
        return None
    if words and looks_like_initials(words[0]):
        return None
    first = remainder.split(",", 1)[0].strip()
    if first and not looks_like_author_list(first):
        return first
    return None


def _title_near_author_segment(segments: list[str]) -> str:
    author_index, author_segment = select_author_segment(segments)
    if author_index > 0:
        candidate_index = author_index - 1
    elif len(segments) > 1:
        candidate_index = 1
    else:
        candidate_index = 0
    if segments[candidate_index] == author_segment:
        candidate_index = 1 if len(segments) > 1 else 0
    candidate = segments[candidate_index]

    next_index = candidate_index + 1
    if (
        len(candidate.split()) < 3
        and next_index < len(segments)
        and next_index != author_index
        and _continues_title(segments[next_index])
    ):
        candidate = f"{candidate}. {segments[next_index]}"

    first = segments[0]
    if author_index == 0 and (
        len(candidate.split()) < 3 or ("," in first and segment_has_year(first))
    ):
        candidate = title_from_first_segment(first) or candidate

    if is_title_noise_segment(candidate):
        best = select_title_segment(segments) or select_title_from_segment(first)
        if best is None:
            return ""
        candidate = best

    if any(is_digit(c) for c in candidate) and len(candidate.split()) <= 2:
        candidate = select_title_from_segment(first) or candidate

    if not any(c.isalpha() for c in candidate):
        return ""
    return clean_title_segment(candidate)


def _continues_title(segment: str) -> bool:
    return (
        not segment_is_container(segment)
        and not segment_has_year(segment)
        and ":" not in segment
        and not any(is_digit(c) for c in segment)
    )


def clean_title_segment(segment: str) -> str:
    """Drop edition parentheticals and surrounding quotes and periods."""

    def _replace(match: re.Match) -> str:
        contents = match.group(1)
        if any(marker in contents.lower() for marker in _EDITION_MARKERS):
            return ""
        return f"({contents.strip()})"

    return _PARENTHETICAL_RE.sub(_replace, segment).strip(_TITLE_TRIM_CHARS).strip()


def is_title_noise_segment(segment: str) -> bool:
    """True for segments that read as venue, authors, or bare metadata."""
    lower = segment.lower()
    if segment_is_container(segment) or looks_like_author_list(segment):
        return True
    if segment_has_year(segment) and (
        segment_has_volume_marker(segment)
        or segment_has_page_range(segment)
        or segment_has_page_marker(segment)
    ):
        return True
    if any(marker in lower for marker in ("http", "doi", "ed.", "edition", "éd", "pp.", "pages")):
        return True
    if len(segment.split()) <= 1:
        return True
    return all(is_digit(c) or c == "," for c in segment)


def title_segment_score(segment: str, index: int) -> int | None:
    """Score a title candidate; None marks a noise segment."""
    if is_title_noise_segment(segment):
        return None
    word_count = len(segment.split())
    score = 0
    if index <= 1:
        score += 2
    if segment_has_year(segment):
        score -= 2
    if ":" in segment:
        score += 1
    if word_count >= 3:
        score += 2
    if word_count >= 8:
        score += 1
    return score


def select_title_segment(segments: list[str]) -> str | None:
    """Best non-noise segment by ``title_segment_score``; ties keep the earliest."""
    best = None
    best_score = None
    for idx, segment in enumerate(segments):
        trimmed = segment.strip()
        if not trimmed:
            continue
        score = title_segment_score(trimmed, idx)
        if score is not None and (best_score is None or score > best_score):
            best_score = score
            best = trimmed
    return best


def select_title_from_segment(segment: str) -> str | None:
    """First comma-part of *segment* that is not a name, venue, or number."""
    parts = [part.strip() for part in segment.split(",") if part.strip()]
    for idx, part in enumerate(parts):
        lower = part.lower()
        if lower in ("no", "no.", "and", "&") or lower.startswith("and "):
            continue
        if (
            idx == 0
            and len(parts) > 1
            and looks_like_given_name(parts[1])
            and len(part.split()) <= 2
        ):
            continue
        if (
            looks_like_author_list(part)
            or looks_like_family_with_initials(part)
            or looks_like_initial_surname(part)
            or segment_is_journal_like(part)
            or any(is_digit(c) for c in part)
        ):
            continue
        return part
    return None


def title_from_first_segment(segment: str) -> str | None:
    """Comma-part right after the year in ``Author, Year, Title, ...`` segments."""
    parts = [part.strip() for part in segment.split(",") if part.strip()]
    if len(parts) < 3:
        return None
    for idx, part in enumerate(parts):
        if sum(1 for c in part if is_digit(c)) >= 4:
            return parts[idx + 1] if idx + 1 < len(parts) else None
    return None
