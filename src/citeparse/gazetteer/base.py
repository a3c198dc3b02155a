"""Gazetteer contract: categories, term normalization, and seed loading.

A gazetteer classifies known terms (``Paris``, ``Nature``, ``Springer``)
into one or more categories. Parsing consumes it read-only through
``lookup``; ``import_terms`` and ``import_entries`` are setup-time
operations.
"""

from __future__ import annotations

import enum
import json
import unicodedata
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable


class GazetteerError(Exception):
    """Setup-time gazetteer failure (bad seed file, category, or bitmask)."""


class Category(enum.Flag):
    """Term categories; each member is one bit of the import bitmask."""

    PLACE = 1
    NAME = 2
    PUBLISHER = 4
    JOURNAL = 8

    @property
    def bit(self) -> int:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Category:
        """Resolve a case-insensitive category name such as ``"place"``.

        Raises
        ------
        GazetteerError
            If *name* is not a category.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name.lower() for member in cls)
            raise GazetteerError(f"Unknown category: {name!r}. Valid categories: {valid}") from None

    @classmethod
    def from_bits(cls, bits: int) -> frozenset[Category]:
        """Split a bitmask into its single-bit categories.

        Raises
        ------
        GazetteerError
            If *bits* is zero or carries bits outside the known categories.
        """
        if bits <= 0 or bits & ~ALL_BITS:
            raise GazetteerError(f"Invalid category bitmask: {bits}")
        return frozenset(member for member in cls if member.value & bits)


ALL_BITS = sum(member.value for member in Category)
_SINGLE_BITS = frozenset(member.value for member in Category)


def check_category(category: object) -> Category:
    if not isinstance(category, Category) or category.value not in _SINGLE_BITS:
        raise GazetteerError(f"Expected a single Category, got {category!r}")
    return category


def split_bits(bits: int) -> frozenset[Category]:
    """Categories of a stored bitmask; zero yields an empty set."""
    return frozenset(member for member in Category if member.value & bits)


def normalize_term(term: str) -> str:
    """Normalize a gazetteer term for storage and lookup.

    Applies NFKC, case folding, and accent stripping, then keeps only
    alphanumerics.

    Examples
    --------
        >>> normalize_term("Éditions du Seuil")
        'editionsduseuil'
        >>> normalize_term("  N.Y. ")
        'ny'
    """
    folded = unicodedata.normalize("NFKC", term).casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    return "".join(c for c in decomposed if c.isalnum() and not unicodedata.combining(c))


@runtime_checkable
class Gazetteer(Protocol):
    """Structural protocol every gazetteer backend satisfies."""

    def lookup(self, term: str) -> frozenset[Category]:
        """Categories of *term*; unknown terms and backend failures yield an empty set."""
        ...

    def import_terms(self, category: Category, terms: Iterable[str]) -> int:
        """Add *terms* under *category*; returns the number of terms stored."""
        ...

    def import_entries(self, entries: Iterable[tuple[str, int]]) -> int:
        """Add ``(term, bitmask)`` pairs; returns the number of terms stored."""
        ...


# ============================================================================
# Seed files
# ============================================================================


def iter_seed_entries(path: Path) -> Iterator[tuple[str, int]]:
    """Yield ``(term, bitmask)`` pairs from a JSON or TSV seed file.

    JSON seeds map category names to term lists::

        {"place": ["Paris", "London"], "journal": ["Nature"]}

    TSV seeds carry one ``term<TAB>category[,category]`` entry per line;
    blank lines and ``#`` comments are skipped.

    Raises
    ------
    GazetteerError
        If the file cannot be read or holds an invalid entry.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise GazetteerError(f"Cannot read seed file {path}: {e}") from e

    if Path(path).suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise GazetteerError(f"Invalid JSON in seed file {path}: {e}") from e
        if not isinstance(data, dict):
            raise GazetteerError(f"Seed file {path} must hold an object of category lists")
        for name, terms in data.items():
            bit = Category.from_name(name).bit
            if not isinstance(terms, list):
                raise GazetteerError(f"Category {name!r} in {path} must map to a list")
            for term in terms:
                yield str(term), bit
        return

    for line_num, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        term, sep, names = stripped.partition("\t")
        if not sep or not term.strip():
            raise GazetteerError(f"{path}:{line_num}: expected 'term<TAB>category'")
        bits = 0
        for name in names.split(","):
            bits |= Category.from_name(name).bit
        yield term.strip(), bits
