"""
Immutable layered metadata for DocPipe documents.

A `Metadata` store holds a single read-only layer of key/value pairs and an
optional parent store that is consulted for keys missing locally. Stores are
never mutated: `set`, `with_items` and `merge` return a new store layered
over the current one.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional


class _Missing:
    """Sentinel type returned by `Metadata.lookup` for absent keys."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()


class Metadata(Mapping):
    """
    A read-only, case-sensitive mapping with parent fallback lookup.

    Args:
        items (Mapping, optional): The entries of this layer. They are copied,
            so later changes to the argument are not observed.
        parent (Metadata, optional): The store consulted for keys that are
            not present in this layer.
    """

    __slots__ = ("_items", "_parent")

    def __init__(
        self, items: Optional[Mapping] = None, parent: Optional["Metadata"] = None
    ):
        if parent is not None and not isinstance(parent, Metadata):
            raise TypeError(
                f"Metadata parent must be a Metadata store, got {type(parent).__name__}."
            )
        self._items = MappingProxyType(dict(items or {}))
        self._parent = parent

    @property
    def parent(self) -> Optional["Metadata"]:
        return self._parent

    def local_items(self) -> Mapping:
        """Returns a read-only view of this layer only."""
        return self._items

    def lookup(self, key: str) -> Any:
        """Returns the value for `key`, or `MISSING` if no layer defines it."""
        store = self
        while store is not None:
            if key in store._items:
                return store._items[key]
            store = store._parent
        return MISSING

    def __getitem__(self, key: str) -> Any:
        value = self.lookup(key)
        if value is MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key) -> bool:
        return self.lookup(key) is not MISSING

    def __iter__(self) -> Iterator[str]:
        seen = set()
        store = self
        while store is not None:
            for key in store._items:
                if key not in seen:
                    seen.add(key)
                    yield key
            store = store._parent

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Metadata({self.flatten()!r})"

    def set(self, key: str, value: Any) -> "Metadata":
        """Returns a new store in which `key` maps to `value`."""
        return Metadata({key: value}, parent=self)

    def with_items(self, mapping: Optional[Mapping] = None, **items) -> "Metadata":
        """Returns a new store layering all given entries over this one."""
        entries = dict(mapping or {})
        entries.update(items)
        if not entries:
            return self
        return Metadata(entries, parent=self)

    def merge(self, other: Mapping) -> "Metadata":
        """Returns a new store where entries of `other` win on key collision."""
        if isinstance(other, Metadata):
            other = other.flatten()
        return self.with_items(other)

    def flatten(self) -> dict:
        """Returns a plain dictionary snapshot of every visible entry."""
        return {key: self[key] for key in self}
