"""Immutable record wrapper over API JSON documents."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from replicate_sdk.client import Client


class FrozenDict(Mapping):
    """Read-only, hashable mapping."""

    __slots__ = ("_items", "_hash")

    def __init__(self, items: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_items", dict(items or {}))
        object.__setattr__(self, "_hash", None)

    def __getitem__(self, key: str) -> Any:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        if self._hash is None:
            object.__setattr__(self, "_hash", hash(frozenset(self._items.items())))
        return self._hash

    def __repr__(self) -> str:
        return f"FrozenDict({self._items!r})"

    def __setitem__(self, key: str, value: Any) -> None:
        raise TypeError("FrozenDict is immutable")

    def __delitem__(self, key: str) -> None:
        raise TypeError("FrozenDict is immutable")

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError("FrozenDict is immutable")


class FrozenList(tuple):
    """Tuple that still compares equal to the list it was frozen from."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, list):
            return list(self) == other
        return tuple.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    __hash__ = tuple.__hash__


def deep_freeze(obj: Any) -> Any:
    if isinstance(obj, (FrozenDict, FrozenList, Record)):
        return obj
    if isinstance(obj, Mapping):
        return FrozenDict({k: deep_freeze(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return FrozenList(deep_freeze(v) for v in obj)
    if isinstance(obj, (set, frozenset)):
        return frozenset(deep_freeze(v) for v in obj)
    return obj


def thaw(obj: Any) -> Any:
    if isinstance(obj, Record):
        return thaw(obj.data)
    if isinstance(obj, Mapping):
        return {k: thaw(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [thaw(v) for v in obj]
    return obj


class Record:
    """
    Base class for API records.

    `data` is deep-frozen at construction. Keys of `data` are readable as
    attributes (`prediction.id`); unknown names raise AttributeError. The
    owning client is kept by reference to issue follow-up calls.
    """

    def __init__(self, client: Client | None, params: Any) -> None:
        self.client = client
        self.data = deep_freeze(params)

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        if name.startswith("__"):
            raise AttributeError(name)
        data = self.__dict__.get("data")
        if isinstance(data, Mapping) and name in data:
            return data[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __dir__(self) -> list[str]:
        keys = list(self.data) if isinstance(self.data, Mapping) else []
        return sorted(set(super().__dir__()) | set(keys))

    def __getitem__(self, key: str) -> Any:
        if not isinstance(self.data, Mapping):
            raise KeyError(key)
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return isinstance(self.data, Mapping) and key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        if not isinstance(self.data, Mapping):
            return default
        return self.data.get(key, default)

    def to_dict(self) -> Any:
        """Mutable deep copy of `data`."""
        return thaw(self.data)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}:{id(self):#x} data={{...}}>"
