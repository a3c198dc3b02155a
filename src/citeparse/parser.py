"""Reference assembler.

Runs every field extractor over a reference string and assembles the
results into a read-only ``Reference`` in a fixed field order. Assembly is
total: any string yields a record, and ``date``, ``title``, ``type``,
``location``, ``publisher`` and ``pages`` are always present.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from citeparse.engine.config import NormalizationHook, ParserConfig
from citeparse.extract.authors import authors_for_reference
from citeparse.extract.dates import collect_year_tokens, detect_circa
from citeparse.extract.identifiers import bucket_identifiers
from citeparse.extract.numbers import (
    extract_edition,
    extract_genre,
    extract_issue,
    extract_pages,
    extract_volume,
)
from citeparse.extract.segments import extract_citation_number, split_references
from citeparse.extract.title import extract_title
from citeparse.extract.venue import (
    extract_collection_number,
    extract_collection_title,
    extract_container_title,
    extract_editor_list,
    extract_journal,
    extract_location_publisher,
    extract_note,
    extract_translator,
    resolve_type,
)
from citeparse.gazetteer.base import Gazetteer
from citeparse.gazetteer.factory import create_gazetteer
from citeparse.models import FieldValue, Reference, TaggedToken
from citeparse.tagging.field_tokens import FieldTokens
from citeparse.tagging.tagger import tag_reference

logger = logging.getLogger(__name__)

__all__ = ["NormalizationHook", "Parser", "assemble_fields"]


def assemble_fields(reference: str, gazetteer: Gazetteer | None = None) -> dict[str, FieldValue]:
    """Resolve every field of *reference* in emission order.

    Parameters
    ----------
    reference : str
        One reference string.
    gazetteer : Gazetteer, optional
        Consulted for journal scoring and ``article`` typing.

    Returns
    -------
    dict[str, FieldValue]
        Insertion-ordered field map.
    """
    fields: dict[str, FieldValue] = {}

    authors = authors_for_reference(reference)
    if authors:
        fields["author"] = authors
    citation_number = extract_citation_number(reference)
    if citation_number:
        fields["citation-number"] = citation_number

    title = extract_title(reference)
    fields["title"] = [title]
    fields["type"] = resolve_type(reference, gazetteer)

    location, publisher = extract_location_publisher(reference)
    fields["location"] = [location]
    if location:
        fields["publisher-place"] = [location]
    fields["publisher"] = [publisher]

    container = extract_container_title(reference)
    journal = extract_journal(reference, gazetteer, title=title)
    if container is None and journal:
        container = journal
    if container:
        fields["container-title"] = [container]
    collection = extract_collection_title(reference)
    if collection:
        fields["collection-title"] = [collection]
        collection_number = extract_collection_number(reference)
        if collection_number:
            fields["collection-number"] = [collection_number]
    if journal:
        fields["journal"] = [journal]

    editors = extract_editor_list(reference)
    if editors:
        fields["editor"] = editors
    translator = extract_translator(reference)
    if translator:
        fields["translator"] = [translator]
    note = extract_note(reference)
    if note:
        fields["note"] = [note]

    identifiers = bucket_identifiers(reference)
    if identifiers.doi:
        fields["doi"] = identifiers.doi
    if identifiers.url:
        fields["url"] = identifiers.url
    if identifiers.identifiers:
        fields["identifier"] = identifiers.identifiers
    if identifiers.isbn:
        fields["isbn"] = identifiers.isbn
    if identifiers.issn:
        fields["issn"] = identifiers.issn

    for key, value in (
        ("volume", extract_volume(reference)),
        ("issue", extract_issue(reference)),
        ("edition", extract_edition(reference)),
        ("genre", extract_genre(reference)),
    ):
        if value:
            fields[key] = [value]

    fields["date"] = collect_year_tokens(reference) or [""]
    if detect_circa(reference):
        fields["date-circa"] = "true"
    fields["pages"] = [extract_pages(reference)]
    return fields


def _apply_hook(hook: NormalizationHook, fields: dict[str, FieldValue]) -> dict[str, FieldValue]:
    working = copy.deepcopy(fields)
    result = hook(working)
    updated = dict(result) if result is not None else working
    if set(updated) != set(fields):
        raise ValueError(
            f"Normalization hook {getattr(hook, '__name__', hook)!r} changed the field set: "
            f"{sorted(set(fields) ^ set(updated))}"
        )
    return {key: updated[key] for key in fields}


class Parser:
    """Citation-string parser.

    Parameters
    ----------
    config : ParserConfig, optional
        Gazetteer, batch, and hook configuration.
    gazetteer : Gazetteer, optional
        Pre-built gazetteer; overrides ``config.gazetteer`` when given.

    Examples
    --------
        >>> parser = Parser()
        >>> ref = parser.parse_one("Doe, J. (2001). Title. Journal of Things, 42(3), 12-34.")
        >>> ref["volume"], ref["issue"], ref["pages"]
        (['42'], ['3'], ['12-34'])
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        gazetteer: Gazetteer | None = None,
    ) -> None:
        self.config = config if config is not None else ParserConfig()
        self.gazetteer = gazetteer if gazetteer is not None else create_gazetteer(self.config.gazetteer)

    def parse_one(self, reference: str) -> Reference:
        """Parse one reference string into a ``Reference``."""
        fields = assemble_fields(reference, self.gazetteer)
        for hook in self.config.hooks:
            try:
                fields = _apply_hook(hook, fields)
            except ValueError as e:
                logger.warning("Rejected normalization hook result: %s", e)
        logger.debug("Parsed reference into %d fields", len(fields))
        return Reference(fields)

    def parse(self, refs: Iterable[str]) -> list[Reference]:
        """Parse references sequentially, preserving input order."""
        return [self.parse_one(reference) for reference in refs]

    def parse_batch(self, refs: Iterable[str], max_workers: int | None = None) -> list[Reference]:
        """Parse references on a thread pool, preserving input order.

        Parameters
        ----------
        refs : Iterable[str]
            Reference strings.
        max_workers : int | None, optional
            Pool size; defaults to ``config.max_workers``.

        Returns
        -------
        list[Reference]
            One record per input, in input order.
        """
        workers = max_workers if max_workers is not None else self.config.max_workers
        if workers is not None and workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {workers}")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.parse_one, refs))

    def label(self, text: str) -> list[list[TaggedToken]]:
        """Tag every whitespace token of every non-empty line of *text*.

        Returns
        -------
        list[list[TaggedToken]]
            One token list per reference line.
        """
        return [
            tag_reference(reference, FieldTokens.from_reference(reference, self.gazetteer))
            for reference in split_references(text)
        ]
