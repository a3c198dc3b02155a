"""Registry-based factory for gazetteer backends.

New backends are added by extending ``GAZETTEER_REGISTRY``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

from citeparse.gazetteer.base import Gazetteer, iter_seed_entries
from citeparse.gazetteer.memory import MemoryGazetteer
from citeparse.gazetteer.sqlite import SqliteGazetteer

DEFAULT_SEED = "default_seed.json"


def _memory(config: GazetteerConfig) -> Gazetteer:
    return MemoryGazetteer()


def _sqlite(config: GazetteerConfig) -> Gazetteer:
    if config.path is None:
        raise ValueError("The sqlite gazetteer backend requires a path")
    return SqliteGazetteer(config.path)


# backend name → callable that builds an empty Gazetteer
GAZETTEER_REGISTRY: dict[str, Callable[[GazetteerConfig], Gazetteer]] = {
    "memory": _memory,
    "sqlite": _sqlite,
}


@dataclass(frozen=True)
class GazetteerConfig:
    """Declarative configuration for the parser's gazetteer.

    Attributes
    ----------
    backend : str
        Key in ``GAZETTEER_REGISTRY`` (``"memory"`` or ``"sqlite"``).
    path : Path | None
        Database file; required by the ``sqlite`` backend.
    seed_files : tuple[Path, ...]
        JSON or TSV seed files imported at construction.
    use_default_seed : bool
        Import the small seed bundled with the package.
    """

    backend: str = "memory"
    path: Path | None = None
    seed_files: tuple[Path, ...] = field(default_factory=tuple)
    use_default_seed: bool = True

    def __post_init__(self) -> None:
        """Validate backend and path."""
        if self.backend not in GAZETTEER_REGISTRY:
            valid = ", ".join(sorted(GAZETTEER_REGISTRY))
            raise ValueError(f"Unknown gazetteer backend: {self.backend!r}. Valid backends: {valid}")
        if self.backend == "sqlite" and self.path is None:
            raise ValueError("The sqlite gazetteer backend requires a path")
        if self.path is not None:
            object.__setattr__(self, "path", Path(self.path))
        object.__setattr__(self, "seed_files", tuple(Path(p) for p in self.seed_files))

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        return {
            "backend": self.backend,
            "path": str(self.path) if self.path is not None else None,
            "seed_files": [str(p) for p in self.seed_files],
            "use_default_seed": self.use_default_seed,
        }


def default_seed_path() -> Path:
    """Location of the seed file bundled with the package."""
    return Path(str(resources.files("citeparse.gazetteer") / "data" / DEFAULT_SEED))


def create_gazetteer(config: GazetteerConfig | None = None) -> Gazetteer:
    """Build and seed the gazetteer described by *config*.

    Parameters
    ----------
    config : GazetteerConfig, optional
        Backend configuration; defaults to a seeded in-memory gazetteer.

    Returns
    -------
    Gazetteer
        Ready-to-use gazetteer.

    Raises
    ------
    GazetteerError
        If a seed file is unreadable or invalid, or the backend fails to open.
    """
    if config is None:
        config = GazetteerConfig()
    gazetteer = GAZETTEER_REGISTRY[config.backend](config)

    seeds = list(config.seed_files)
    if config.use_default_seed:
        seeds.insert(0, default_seed_path())
    for seed in seeds:
        gazetteer.import_entries(iter_seed_entries(seed))
    return gazetteer
