"""Parser configuration."""

from citeparse.engine.config import NormalizationHook, ParserConfig
from citeparse.gazetteer.factory import GazetteerConfig

__all__ = [
    "GazetteerConfig",
    "NormalizationHook",
    "ParserConfig",
]
