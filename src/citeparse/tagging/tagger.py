"""Token tagger: labels each whitespace token of a reference by field."""

from __future__ import annotations

from citeparse.extract._helpers import normalize_token, strip_punct
from citeparse.extract.identifiers import is_identifier_token
from citeparse.models import TaggedToken
from citeparse.tagging.field_tokens import FieldTokens

# first matching field wins; ties are resolved by this order alone
FIELD_PRIORITY: tuple[str, ...] = (
    "identifier",
    "author",
    "title",
    "journal",
    "container-title",
    "location",
    "publisher",
    "collection-title",
    "date",
    "editor",
    "translator",
    "note",
    "pages",
    "volume",
    "issue",
    "genre",
    "edition",
)
OTHER_LABEL = "other"


def tokenize_reference(reference: str) -> list[str]:
    """Whitespace token stream of one reference."""
    return reference.split()


def matches_field(normalized: str, values: set[str]) -> bool:
    """True when *normalized* is a field token or contains one of two or more characters."""
    if normalized in values:
        return True
    return any(len(value) >= 2 and value in normalized for value in values)


def tag_token(token: str, context: FieldTokens) -> str:
    """Label *token* with the first field in ``FIELD_PRIORITY`` that matches it.

    Parameters
    ----------
    token : str
        Raw whitespace token.
    context : FieldTokens
        Token index of the reference the token came from.

    Returns
    -------
    str
        Field label, or ``"other"``.
    """
    stripped = token.strip()
    normalized = normalize_token(stripped)

    if is_identifier_token(strip_punct(stripped)):
        return "identifier"
    if not normalized:
        return OTHER_LABEL
    for label in FIELD_PRIORITY:
        if matches_field(normalized, context.get(label)):
            return label
    return OTHER_LABEL


def tag_reference(reference: str, context: FieldTokens) -> list[TaggedToken]:
    return [
        TaggedToken(token=token, label=tag_token(token, context))
        for token in tokenize_reference(reference)
    ]
