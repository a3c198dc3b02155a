"""In-memory gazetteer backend."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from citeparse.gazetteer.base import Category, check_category, normalize_term, split_bits


class MemoryGazetteer:
    """Gazetteer held in an immutable mapping of normalized term to bitmask.

    Lookups read the current mapping without locking. Imports build a new
    mapping under a lock and swap it in, so concurrent readers always see
    a complete snapshot.

    Parameters
    ----------
    entries : Iterable[tuple[str, int]], optional
        Initial ``(term, bitmask)`` pairs.
    """

    def __init__(self, entries: Iterable[tuple[str, int]] = ()) -> None:
        self._lock = threading.Lock()
        self._terms: Mapping[str, int] = MappingProxyType({})
        self.import_entries(entries)

    def __len__(self) -> int:
        return len(self._terms)

    def lookup(self, term: str) -> frozenset[Category]:
        key = normalize_term(term)
        if not key:
            return frozenset()
        return split_bits(self._terms.get(key, 0))

    def import_terms(self, category: Category, terms: Iterable[str]) -> int:
        bit = check_category(category).bit
        return self.import_entries((term, bit) for term in terms)

    def import_entries(self, entries: Iterable[tuple[str, int]]) -> int:
        """Merge ``(term, bitmask)`` pairs into the mapping.

        Returns
        -------
        int
            Number of non-empty terms merged.

        Raises
        ------
        GazetteerError
            If a bitmask is zero or carries unknown bits.
        """
        with self._lock:
            updated = dict(self._terms)
            count = 0
            for term, bits in entries:
                Category.from_bits(bits)
                key = normalize_term(term)
                if not key:
                    continue
                updated[key] = updated.get(key, 0) | bits
                count += 1
            self._terms = MappingProxyType(updated)
        return count

