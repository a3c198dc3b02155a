"""Rule-driven field extraction for free-text citations.

Every function here is total: any string input yields a value or an
explicit "not found" (``None``, ``""`` or an empty list), never an
exception.

Main entry points:
- split_references / split_reference_segments: line and segment splitting
- authors_for_reference: ordered ``Author`` list
- collect_year_tokens / detect_circa: date tokens and circa flag
- extract_title, extract_journal, resolve_type: title and venue resolution
- extract_volume, extract_issue, extract_pages: numeric fields
- bucket_identifiers: DOI, URL, ISBN and ISSN values
"""

from citeparse.extract.authors import authors_for_reference, extract_author_segment
from citeparse.extract.dates import collect_year_tokens, detect_circa
from citeparse.extract.identifiers import (
    IdentifierBuckets,
    bucket_identifiers,
    extract_identifiers,
    is_identifier_token,
)
from citeparse.extract.numbers import (
    extract_edition,
    extract_genre,
    extract_issue,
    extract_pages,
    extract_volume,
)
from citeparse.extract.segments import (
    extract_citation_number,
    split_reference_segments,
    split_references,
    strip_leading_citation_number,
)
from citeparse.extract.title import extract_title
from citeparse.extract.venue import (
    extract_collection_number,
    extract_collection_title,
    extract_container_title,
    extract_editor,
    extract_editor_list,
    extract_journal,
    extract_location,
    extract_location_publisher,
    extract_note,
    extract_publisher,
    extract_translator,
    resolve_type,
)

__all__ = [
    # Segmentation
    "split_references",
    "split_reference_segments",
    "extract_citation_number",
    "strip_leading_citation_number",
    # Authors and dates
    "authors_for_reference",
    "extract_author_segment",
    "collect_year_tokens",
    "detect_circa",
    # Title and venue
    "extract_title",
    "extract_journal",
    "extract_container_title",
    "extract_collection_title",
    "extract_collection_number",
    "extract_editor",
    "extract_editor_list",
    "extract_translator",
    "extract_note",
    "extract_location",
    "extract_location_publisher",
    "extract_publisher",
    "resolve_type",
    # Numeric fields
    "extract_volume",
    "extract_issue",
    "extract_pages",
    "extract_edition",
    "extract_genre",
    # Identifiers
    "IdentifierBuckets",
    "bucket_identifiers",
    "extract_identifiers",
    "is_identifier_token",
]
