"""Insertion-ordered mapping with lazily deleted slots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator


class OrderedMap:
    """Map string keys to values, iterating in insertion order.

    Slots are appended and never compacted. ``_lookup`` points each live key
    at its latest slot; a slot is live only while the lookup still points at
    that exact index. Re-setting a key moves it to the end.
    """

    __slots__ = ("_keys", "_lookup", "_values")

    def __init__(self) -> None:
        self._keys: list[str] = []
        self._values: list[Any] = []
        self._lookup: dict[str, int] = {}

    def set(self, key: str, value: Any) -> None:
        self.delete(key)
        self._lookup[key] = len(self._keys)
        self._keys.append(key)
        self._values.append(value)

    def get(self, key: str, default: Any = None) -> Any:
        index = self._lookup.get(key)
        if index is None:
            return default
        return self._values[index]

    def delete(self, key: str) -> None:
        self._lookup.pop(key, None)

    def items(self) -> Iterator[tuple[str, Any]]:
        lookup = self._lookup
        values = self._values
        for index, key in enumerate(self._keys):
            if lookup.get(key) == index:
                yield key, values[index]

    def values(self) -> Iterator[Any]:
        for _, value in self.items():
            yield value

    def __getitem__(self, key: str) -> Any:
        return self._values[self._lookup[key]]

    def __contains__(self, key: object) -> bool:
        return key in self._lookup

    def __iter__(self) -> Iterator[str]:
        for key, _ in self.items():
            yield key

    def __len__(self) -> int:
        return len(self._lookup)

    def __repr__(self) -> str:
        return f"OrderedMap({list(self.items())!r})"
