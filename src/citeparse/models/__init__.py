"""Shared data types for citeparse.

This package contains the record types produced by the parser and consumed
by the tagging layer, the API, and the CLI.
"""

from citeparse.models.records import (
    SCHEMA_VERSION,
    Author,
    FieldValue,
    Reference,
    TaggedToken,
)

__all__ = [
    # Schema version
    "SCHEMA_VERSION",
    # Record models
    "Author",
    "FieldValue",
    "Reference",
    "TaggedToken",
]
