"""Per-field token index used by the tagger.

Each field's resolved value is exploded into normalized tokens: the whole
value, its punctuation-delimited parts, and its words. Gazetteer hits on
the reference's words are merged into the matching field afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from citeparse.extract._helpers import normalize_token
from citeparse.extract.authors import extract_author_segment
from citeparse.extract.dates import collect_year_tokens
from citeparse.extract.identifiers import extract_identifiers
from citeparse.extract.numbers import (
    extract_edition,
    extract_genre,
    extract_issue,
    extract_pages,
    extract_volume,
)
from citeparse.extract.title import extract_title
from citeparse.extract.venue import (
    extract_collection_title,
    extract_container_title,
    extract_editor,
    extract_journal,
    extract_location_publisher,
    extract_note,
    extract_translator,
)
from citeparse.gazetteer.base import Category, Gazetteer

_PART_SEPARATORS_RE = re.compile(r"[,;:()*-]")
_NAME_SPLIT_RE = re.compile(r"&| and ")
_WORD_RE = re.compile(r"[^\W_]+")

# gazetteer category → field whose token set receives the hit
GAZETTEER_FIELDS: dict[Category, str] = {
    Category.NAME: "author",
    Category.PLACE: "location",
    Category.PUBLISHER: "publisher",
    Category.JOURNAL: "journal",
}


def tokens_from_segment(segment: str) -> set[str]:
    """Normalized tokens of *segment*: the whole value, its parts, and its words.

    Examples
    --------
        >>> sorted(tokens_from_segment("A Void"))
        ['a', 'avoid', 'void']
    """
    candidates = [segment]
    candidates.extend(_PART_SEPARATORS_RE.split(segment))
    candidates.extend(segment.split())
    tokens = {normalize_token(candidate) for candidate in candidates}
    tokens.discard("")
    return tokens


def tokens_from_authors(reference: str) -> set[str]:
    segment = extract_author_segment(reference)
    tokens = tokens_from_segment(segment)
    for name in _NAME_SPLIT_RE.split(segment):
        name = name.strip()
        if name and name.rstrip(".").lower() != "et al":
            tokens |= tokens_from_segment(name)
    return tokens


def _tokens(value: str | None) -> set[str]:
    return tokens_from_segment(value) if value else set()


@dataclass
class FieldTokens:
    """Normalized token sets per field label for one reference.

    Attributes
    ----------
    fields : dict[str, set[str]]
        Field label (``author``, ``container-title``, ...) to token set.
    """

    fields: dict[str, set[str]] = field(default_factory=dict)

    def get(self, label: str) -> set[str]:
        return self.fields.get(label, set())

    @classmethod
    def from_reference(cls, reference: str, gazetteer: Gazetteer | None = None) -> FieldTokens:
        """Build the token index of *reference*.

        Parameters
        ----------
        reference : str
            One reference string.
        gazetteer : Gazetteer, optional
            When given, journal resolution consults it and its hits are
            merged with ``apply_gazetteer``.

        Returns
        -------
        FieldTokens
            Index with one entry per field label.
        """
        title = extract_title(reference)
        location, publisher = extract_location_publisher(reference)
        tokens = cls(
            fields={
                "author": tokens_from_authors(reference),
                "title": _tokens(title),
                "journal": _tokens(extract_journal(reference, gazetteer, title=title)),
                "container-title": _tokens(extract_container_title(reference)),
                "location": _tokens(location),
                "publisher": _tokens(publisher),
                "collection-title": _tokens(extract_collection_title(reference)),
                "date": {normalize_token(year) for year in collect_year_tokens(reference)} - {""},
                "editor": _tokens(extract_editor(reference)),
                "translator": _tokens(extract_translator(reference)),
                "note": _tokens(extract_note(reference)),
                "pages": _tokens(extract_pages(reference)),
                "volume": _tokens(extract_volume(reference)),
                "issue": _tokens(extract_issue(reference)),
                "genre": _tokens(extract_genre(reference)),
                "edition": _tokens(extract_edition(reference)),
                "identifier": {
                    normalize_token(identifier) for identifier in extract_identifiers(reference)
                }
                - {""},
            }
        )
        if gazetteer is not None:
            tokens.apply_gazetteer(reference, gazetteer)
        return tokens

    def apply_gazetteer(self, reference: str, gazetteer: Gazetteer) -> None:
        """Merge gazetteer hits on the words of *reference* into their fields."""
        for word in _WORD_RE.findall(reference):
            for category in gazetteer.lookup(word):
                label = GAZETTEER_FIELDS.get(category)
                normalized = normalize_token(word)
                if label and normalized:
                    self.fields.setdefault(label, set()).add(normalized)

