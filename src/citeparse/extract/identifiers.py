"""Identifier extraction: DOI, URL, URN, ISBN and ISSN tokens."""

import re
from dataclasses import dataclass, field

from ._helpers import strip_punct

_BARE_DOI_RE = re.compile(r"^10\.[0-9]{4,9}/\S+$")
_SCHEME_RE = re.compile(r"^(?:doi[:.]|https?://|www\.|urn:|url:)", re.IGNORECASE)
# scheme markers that may sit behind a label glued to the token (at:https://...)
_EMBEDDED_RE = re.compile(r"://|doi\.org/|www\.|doi:|(?<![a-z])urn:", re.IGNORECASE)
_URL_RE = re.compile(r"(?:https?://|www\.)\S*", re.IGNORECASE)
_LABELED_VALUE_RE = re.compile(r"[^0-9Xx]*([0-9A-Za-z-]+)")


@dataclass
class IdentifierBuckets:
    """Identifier tokens of one reference, bucketed by scheme.

    Attributes
    ----------
    identifiers : list[str]
        Every identifier-bearing token, in reference order.
    doi : list[str]
    url : list[str]
    isbn : list[str]
        Cleaned ISBN values (alphanumerics and dashes).
    issn : list[str]
        Cleaned ISSN values (alphanumerics and dashes).
    """

    identifiers: list[str] = field(default_factory=list)
    doi: list[str] = field(default_factory=list)
    url: list[str] = field(default_factory=list)
    isbn: list[str] = field(default_factory=list)
    issn: list[str] = field(default_factory=list)


def is_identifier_token(token: str) -> bool:
    """True for tokens carrying a DOI, URL, URN, ISBN or ISSN.

    Scheme markers count at the start of the token or anywhere inside it
    (``dx.doi.org/10.1000/xyz``, ``at:https://example.org``); plain words
    such as ``Doing`` do not.
    """
    lower = token.lower()
    return (
        bool(_SCHEME_RE.match(token))
        or bool(_EMBEDDED_RE.search(token))
        or "isbn" in lower
        or "issn" in lower
        or bool(_BARE_DOI_RE.match(token))
    )


def extract_identifiers(reference: str) -> list[str]:
    """Identifier tokens of *reference* with surrounding punctuation trimmed.

    Examples
    --------
        >>> extract_identifiers("Title. doi:10.1000/xyz. https://example.org.")
        ['doi:10.1000/xyz', 'https://example.org']
    """
    tokens = (strip_punct(token) for token in reference.split())
    return [token for token in tokens if token and is_identifier_token(token)]


def bucket_identifiers(reference: str) -> IdentifierBuckets:
    """Sort identifier tokens into DOI, URL, ISBN and ISSN buckets.

    ISBN/ISSN labels without a value in the same token (``ISBN 0-14-...``)
    fall back to the value that follows the label in the reference.
    """
    buckets = IdentifierBuckets(identifiers=extract_identifiers(reference))
    for identifier in buckets.identifiers:
        lower = identifier.lower()
        if "isbn" in lower:
            value = clean_labeled_identifier(identifier, "isbn")
            if value:
                buckets.isbn.append(value)
        elif "issn" in lower:
            value = clean_labeled_identifier(identifier, "issn")
            if value:
                buckets.issn.append(value)
        elif _is_doi(identifier):
            buckets.doi.append(identifier)
        elif lower.startswith(("http", "www.", "url:")):
            buckets.url.append(identifier)
        else:
            url = _URL_RE.search(identifier)
            if url:
                buckets.url.append(url.group(0))

    if not buckets.isbn:
        isbn = extract_isbn(reference)
        if isbn:
            buckets.isbn.append(isbn)
    if not buckets.issn:
        issn = extract_issn(reference)
        if issn:
            buckets.issn.append(issn)
    return buckets


def clean_labeled_identifier(identifier: str, label: str) -> str:
    """Drop *label* and keep alphanumerics and dashes: ``ISBN:0-14`` -> ``0-14``."""
    pos = identifier.lower().find(label)
    value = identifier[pos + len(label) :] if pos >= 0 else identifier
    kept = "".join(c for c in value.strip() if (c.isascii() and c.isalnum()) or c == "-")
    return kept.strip("-")


def extract_labeled_identifier_value(reference: str, label: str) -> str | None:
    """Value that follows *label* anywhere in *reference*, starting at a digit or X."""
    pos = reference.lower().find(label)
    if pos < 0:
        return None
    match = _LABELED_VALUE_RE.match(reference, pos + len(label))
    if match is None:
        return None
    value = match.group(1).strip("-")
    return value or None


def extract_isbn(reference: str) -> str | None:
    return extract_labeled_identifier_value(reference, "isbn")


def extract_issn(reference: str) -> str | None:
    return extract_labeled_identifier_value(reference, "issn")


def _is_doi(identifier: str) -> bool:
    lower = identifier.lower()
    return (
        lower.startswith("doi")
        or "doi:" in lower
        or "doi.org/" in lower
        or bool(_BARE_DOI_RE.match(identifier))
    )
