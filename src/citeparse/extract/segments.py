"""Reference segmentation.

Splits a reference string into sentence-like segments along full stops,
skipping periods that belong to initials, month abbreviations, or text
nested in parentheses. Also owns the leading citation-number helpers,
since every resolver strips the number before segmenting.
"""

from ._helpers import OPEN_QUOTES, is_digit, parse_month_token


def split_references(text: str) -> list[str]:
    """Split a multi-line input into one reference per non-empty line.

    Parameters
    ----------
    text : str
        Raw input, typically a bibliography with one entry per line.

    Returns
    -------
    list[str]
        Trimmed, non-empty lines in input order.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


def split_reference_segments(reference: str) -> list[str]:
    """Split one reference into ordered, non-overlapping segments.

    A ``.`` is a boundary only outside parentheses, and only when the next
    non-space character is upper-case, a digit, an opening quote, or the
    end of the string. Periods after single-letter initials that continue
    an initial sequence, and periods after month names followed by a day,
    never break.

    Parameters
    ----------
    reference : str
        Single reference string.

    Returns
    -------
    list[str]
        Trimmed, non-empty segments, left to right.

    Examples
    --------
        >>> split_reference_segments("Perec, Georges. A Void. London: Harvill, 1995.")
        ['Perec, Georges', 'A Void', 'London: Harvill, 1995']
    """
    segments: list[str] = []
    last_start = 0
    depth = 0

    for idx, char in enumerate(reference):
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        if char != "." or depth > 0:
            continue
        if _is_initial_boundary(reference, idx):
            continue

        following = reference[idx + 1 :].lstrip()
        token = _token_before(reference, idx)
        if token and parse_month_token(token) is not None and following[:1] and is_digit(following[0]):
            continue

        if following:
            next_char = following[0]
            if not (next_char.isupper() or is_digit(next_char) or next_char in OPEN_QUOTES):
                continue

        segment = reference[last_start:idx].strip()
        if segment:
            segments.append(segment)
        last_start = idx + 1

    tail = reference[last_start:].strip()
    if tail:
        segments.append(tail)

    return segments


def _token_before(reference: str, idx: int) -> str:
    words = reference[:idx].split()
    return words[-1] if words else ""


def _is_initial_boundary(reference: str, idx: int) -> bool:
    """True when the period at *idx* closes a bare initial inside a name run."""
    token = _token_before(reference, idx)
    if len(token) != 1 or not token.isalpha():
        return False

    following = reference[idx + 1 :].lstrip()
    if len(following) < 2:
        return False
    next_char, after = following[0], following[1]
    if is_digit(next_char) or next_char in ";,":
        return True
    if next_char.isalpha() and after.islower():
        return True
    return next_char.isalpha() and after == "."


# ---------------------------------------------------------------------------
# Citation numbers
# ---------------------------------------------------------------------------


def extract_citation_number(reference: str) -> str | None:
    """Leading citation number: ``[12]``, ``(12)`` or ``12.``.

    Returns
    -------
    str | None
        The digits, or None when the reference is not numbered.
    """
    trimmed = reference.strip()
    if trimmed[:1] in ("[", "("):
        closer = "]" if trimmed[0] == "[" else ")"
        digits = _leading_digits(trimmed[1:])
        if digits and trimmed[1 + len(digits) : 2 + len(digits)] == closer:
            return digits
        return None

    digits = _leading_digits(trimmed)
    if digits and trimmed[len(digits) : len(digits) + 1] == ".":
        return digits
    return None


def strip_leading_citation_number(reference: str) -> str:
    """Remove a leading ``[N]``/``(N)``/``N.``/``N]`` marker when present."""
    trimmed = reference.strip()
    bracketed = _strip_bracketed_citation_number(trimmed)
    if bracketed is not None:
        return bracketed

    digits = _leading_digits(trimmed)
    if not digits:
        return trimmed
    remainder = trimmed[len(digits) :].lstrip()
    if remainder[:1] in (".", "]"):
        return remainder[1:].lstrip()
    return trimmed


def _strip_bracketed_citation_number(reference: str) -> str | None:
    if reference[:1] not in ("[", "("):
        return None
    digits = _leading_digits(reference[1:])
    if not digits:
        return None
    closer = reference[1 + len(digits) : 2 + len(digits)]
    if closer not in ("]", ")"):
        return None
    remainder = reference[2 + len(digits) :].lstrip()
    return remainder.lstrip(".").lstrip()


def _leading_digits(text: str) -> str:
    end = 0
    while end < len(text) and is_digit(text[end]):
        end += 1
    return text[:end]
