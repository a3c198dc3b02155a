"""Parser configuration dataclass."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from citeparse.gazetteer.factory import GazetteerConfig
from citeparse.models import FieldValue

# receives a mutable copy of the field map; returns a replacement or None
NormalizationHook = Callable[[dict[str, FieldValue]], Mapping[str, FieldValue] | None]


@dataclass
class ParserConfig:
    """Configuration for a ``Parser``.

    Attributes
    ----------
    gazetteer : GazetteerConfig
        Backend and seeds of the gazetteer built by the parser.
    max_workers : int | None
        Thread-pool size for ``Parser.parse_batch``. If None, the
        executor's default is used.
    hooks : Sequence[NormalizationHook]
        Post-processors applied, in order, to every assembled record.
        Hooks may rewrite values but not add or remove fields.
    """

    gazetteer: GazetteerConfig = field(default_factory=GazetteerConfig)
    max_workers: int | None = None
    hooks: Sequence[NormalizationHook] = ()

    def __post_init__(self) -> None:
        """Validate."""
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

        if not isinstance(self.gazetteer, GazetteerConfig):
            raise ValueError(f"gazetteer must be a GazetteerConfig, got {type(self.gazetteer).__name__}")

        self.hooks = tuple(self.hooks)
        for hook in self.hooks:
            if not callable(hook):
                raise ValueError(f"hooks must be callables, got {hook!r}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "gazetteer": self.gazetteer.to_dict(),
            "max_workers": self.max_workers,
            "hooks": [getattr(hook, "__name__", repr(hook)) for hook in self.hooks],
        }
