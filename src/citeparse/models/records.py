"""Reference record data models for citeparse.

A parsed reference is an ordered, read-only mapping from CSL-style field
names to field values. Values are a scalar string, a list of strings, or a
list of ``Author`` pairs.
"""

from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Union

# Schema version of the JSON emitted by ``Reference.to_dict``
SCHEMA_VERSION = "1.0.0"


@dataclass(frozen=True)
class Author:
    """One author as a (family, given) pair.

    Attributes
    ----------
    family : str
        Family name, including absorbed particles (``van der Berg``).
    given : str
        Given names or initials; may be empty.
    """

    family: str
    given: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class TaggedToken:
    """Whitespace token of a reference with its field label.

    Attributes
    ----------
    token : str
        Raw token as it appears in the input.
    label : str
        Field label (``author``, ``title``, ...) or ``other``.
    """

    token: str
    label: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


FieldValue = Union[str, list[str], list[Author]]


class Reference(Mapping):
    """Read-only, insertion-ordered field map of one parsed reference.

    Parameters
    ----------
    fields : Mapping[str, FieldValue]
        Field values in emission order. The mapping is copied and list
        values are frozen to tuples; item access hands back fresh lists.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, FieldValue]) -> None:
        self._fields = MappingProxyType(
            {key: tuple(value) if isinstance(value, list) else value for key, value in fields.items()}
        )

    @property
    def fields(self) -> Mapping[str, str | tuple]:
        return self._fields

    def __getitem__(self, key: str) -> FieldValue:
        value = self._fields[key]
        return list(value) if isinstance(value, tuple) else value

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Reference({self.to_dict()!r})"

    def authors(self) -> list[Author]:
        """Author list, empty when no author was resolved."""
        value = self._fields.get("author", [])
        return [author for author in value if isinstance(author, Author)]

    def first(self, key: str, default: str = "") -> str:
        """First string of a list field, the scalar itself, or *default*."""
        value = self._fields.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            return value
        if value and isinstance(value[0], str):
            return value[0]
        return default

    def to_dict(self) -> dict[str, Any]:
        """Convert the reference to a JSON-serializable dictionary.

        Returns
        -------
        dict[str, Any]
            Field map with authors as ``{"family": ..., "given": ...}``.
        """
        output: dict[str, Any] = {}
        for key, value in self._fields.items():
            if isinstance(value, tuple):
                output[key] = [
                    item.to_dict() if isinstance(item, Author) else item for item in value
                ]
            else:
                output[key] = value
        return output
