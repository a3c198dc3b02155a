"""Public API for parsing citation strings.

This module provides the main public API for citeparse, enabling:
- Parsing single references, lists of references, and reference files
- Labelling the tokens of references by field
- Exporting parsed references to JSONL format
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from citeparse.engine.config import ParserConfig
from citeparse.extract.segments import split_references
from citeparse.models import Reference, TaggedToken
from citeparse.parser import Parser

__all__ = [
    "parse_reference",
    "parse_references",
    "parse_file",
    "label_references",
    "write_jsonl",
    "ParseError",
]


class ParseError(Exception):
    """Raised when an input file cannot be read."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


def _parser(parser: Parser | None, config: ParserConfig | None) -> Parser:
    return parser if parser is not None else Parser(config)


def parse_reference(
    reference: str,
    *,
    config: ParserConfig | None = None,
    parser: Parser | None = None,
) -> Reference:
    """Parse a single citation string.

    Parameters
    ----------
    reference : str
        Citation string.
    config : ParserConfig | None, optional
        Parser configuration; ignored when *parser* is given.
    parser : Parser | None, optional
        Reusable parser instance.

    Returns
    -------
    Reference
        Parsed field map.

    Examples
    --------
        >>> from citeparse import parse_reference
        >>> ref = parse_reference("Perec, Georges. A Void. London: The Harvill Press, 1995. p.108.")
        >>> ref["title"], ref["publisher"]
        (['A Void'], ['The Harvill Press'])
    """
    return _parser(parser, config).parse_one(reference)


def parse_references(
    references: Iterable[str],
    *,
    config: ParserConfig | None = None,
    parser: Parser | None = None,
    max_workers: int | None = None,
) -> list[Reference]:
    """Parse many citation strings on a thread pool, preserving order.

    Parameters
    ----------
    references : Iterable[str]
        Citation strings.
    config : ParserConfig | None, optional
        Parser configuration; ignored when *parser* is given.
    parser : Parser | None, optional
        Reusable parser instance.
    max_workers : int | None, optional
        Pool size; defaults to the parser configuration.

    Returns
    -------
    list[Reference]
        One record per input string.
    """
    return _parser(parser, config).parse_batch(references, max_workers=max_workers)


def read_references(path: str | Path) -> list[str]:
    """Read one reference per non-empty line of a UTF-8 text file.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ParseError
        If the file cannot be read or decoded.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Failed to read {file_path.name}: {e}", file=str(file_path)) from e

    return split_references(text)


def parse_file(
    path: str | Path,
    *,
    config: ParserConfig | None = None,
    parser: Parser | None = None,
    max_workers: int | None = None,
) -> list[Reference]:
    """Parse a file holding one citation per line.

    Parameters
    ----------
    path : str | Path
        Path to a UTF-8 text file; blank lines are skipped.
    config : ParserConfig | None, optional
        Parser configuration; ignored when *parser* is given.
    parser : Parser | None, optional
        Reusable parser instance.
    max_workers : int | None, optional
        Pool size for the batch parse.

    Returns
    -------
    list[Reference]
        Parsed references in file order.

    Raises
    ------
    ParseError
        If the file cannot be read or decoded.
    FileNotFoundError
        If file does not exist.

    Examples
    --------
        >>> from citeparse import parse_file
        >>> refs = parse_file("bibliography.txt")
        >>> print(f"Parsed {len(refs)} references")
    """
    references = read_references(path)
    return parse_references(references, config=config, parser=parser, max_workers=max_workers)


def label_references(
    text: str,
    *,
    config: ParserConfig | None = None,
    parser: Parser | None = None,
) -> list[list[TaggedToken]]:
    """Label every token of every reference line in *text*.

    Returns
    -------
    list[list[TaggedToken]]
        One tagged-token list per non-empty line.
    """
    return _parser(parser, config).label(text)


def write_jsonl(
    references: Iterable[Reference],
    path: str | Path,
) -> int:
    """Write references to a JSONL file, one object per line.

    Parameters
    ----------
    references : Iterable[Reference]
        Parsed references.
    path : str | Path
        Output path; parent directories are created.

    Returns
    -------
    int
        Number of references written.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with out_path.open("w", encoding="utf-8") as f:
        for reference in references:
            json.dump(reference.to_dict(), f, ensure_ascii=False, separators=(",", ":"))
            f.write("\n")
            count += 1
    return count
