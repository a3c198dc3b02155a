"""Term gazetteer consulted by the parser.

Main entry points:
- create_gazetteer: build a seeded backend from a GazetteerConfig
- MemoryGazetteer / SqliteGazetteer: the two backends
- Category / normalize_term: lookup vocabulary and term normalization
"""

from citeparse.gazetteer.base import (
    Category,
    Gazetteer,
    GazetteerError,
    iter_seed_entries,
    normalize_term,
)
from citeparse.gazetteer.factory import (
    GAZETTEER_REGISTRY,
    GazetteerConfig,
    create_gazetteer,
    default_seed_path,
)
from citeparse.gazetteer.memory import MemoryGazetteer
from citeparse.gazetteer.sqlite import SqliteGazetteer

__all__ = [
    # Contract
    "Category",
    "Gazetteer",
    "GazetteerError",
    "normalize_term",
    "iter_seed_entries",
    # Backends
    "MemoryGazetteer",
    "SqliteGazetteer",
    # Factory
    "GAZETTEER_REGISTRY",
    "GazetteerConfig",
    "create_gazetteer",
    "default_seed_path",
]
