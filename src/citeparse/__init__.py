"""Rule-driven parsing of free-text bibliographic references.

This package provides:
- Data models (citeparse.models) — Reference, Author, TaggedToken
- Extraction (citeparse.extract) — pure field extractors
- Gazetteer (citeparse.gazetteer) — term lookup backends and seeding
- Tagging (citeparse.tagging) — FieldTokens index and token labelling
- Parser (citeparse.parser) — reference assembly and batch parsing
- Engine (citeparse.engine) — parser configuration
- Audit (citeparse.audit) — JSONL run logging
- CLI (citeparse.cli) — command-line interface
- Public API (citeparse.api) — high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from citeparse.api import (
    ParseError,
    label_references,
    parse_file,
    parse_reference,
    parse_references,
    write_jsonl,
)
from citeparse.engine import GazetteerConfig, ParserConfig
from citeparse.models import Author, Reference, TaggedToken
from citeparse.parser import Parser

__all__ = [
    "__version__",
    "__license__",
    "Author",
    "Reference",
    "TaggedToken",
    "Parser",
    "ParserConfig",
    "GazetteerConfig",
    "parse_reference",
    "parse_references",
    "parse_file",
    "label_references",
    "write_jsonl",
    "ParseError",
]
