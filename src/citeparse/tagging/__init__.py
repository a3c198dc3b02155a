"""Field-token index and token tagging."""

from citeparse.tagging.field_tokens import (
    GAZETTEER_FIELDS,
    FieldTokens,
    tokens_from_authors,
    tokens_from_segment,
)
from citeparse.tagging.tagger import (
    FIELD_PRIORITY,
    OTHER_LABEL,
    matches_field,
    tag_reference,
    tag_token,
    tokenize_reference,
)

__all__ = [
    "FIELD_PRIORITY",
    "GAZETTEER_FIELDS",
    "OTHER_LABEL",
    "FieldTokens",
    "matches_field",
    "tag_reference",
    "tag_token",
    "tokenize_reference",
    "tokens_from_authors",
    "tokens_from_segment",
]
