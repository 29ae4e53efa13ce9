"""Immutable topping multiset keyed by canonical topping key."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping

from pizza.models import Pair, Topping
from pizza.toppings import from_key, key

logger = logging.getLogger(__name__)

# Entries whose key could not be decoded carry `None` instead of a Topping.
_Entry = tuple[Topping | None, int]


class Count:
    """
    Mapping from topping key to (topping, count).

    Every operation returns a new Count; the receiver is never changed, so
    participant views can be combined freely.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, _Entry] | None = None) -> None:
        self._entries: dict[str, _Entry] = dict(entries or {})

    @classmethod
    def empty(cls) -> Count:
        return cls()

    @classmethod
    def from_list(cls, pairs: Iterable[Pair]) -> Count:
        """Build from (topping, count) pairs; later duplicates win."""
        entries: dict[str, _Entry] = {}
        for topping, value in pairs:
            entries[key(topping)] = (topping, value)
        return cls(entries)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, int]) -> Count:
        """Build from already-encoded keys, e.g. rows read back from storage."""
        entries: dict[str, _Entry] = {}
        for raw_key, value in raw.items():
            topping = from_key(raw_key)
            if topping is None:
                logger.warning("undecodable topping key %r (count=%s) excluded from allocation", raw_key, value)
            entries[raw_key] = (topping, int(value))
        return cls(entries)

    def get(self, topping: Topping) -> int:
        entry = self._entries.get(key(topping))
        return entry[1] if entry is not None else 0

    def add(self, topping: Topping, delta: int) -> tuple[Count, int]:
        """Add `delta` to the topping's value and return the new Count and value."""
        value = self.get(topping) + delta
        return self.set(topping, value), value

    def set(self, topping: Topping, value: int) -> Count:
        entries = dict(self._entries)
        entries[key(topping)] = (topping, value)
        return Count(entries)

    def join(self, other: Count) -> Count:
        """Key-wise sum; toppings stored on this side win over `other`'s."""
        entries = dict(self._entries)
        for raw_key, (topping, value) in other._entries.items():
            mine = entries.get(raw_key)
            if mine is None:
                entries[raw_key] = (topping, value)
                continue
            entries[raw_key] = (mine[0] if mine[0] is not None else topping, mine[1] + value)
        return Count(entries)

    def filter(self, predicate: Callable[[Topping, int], bool]) -> Count:
        """Keep decodable entries matching `predicate`; undecodable ones carry through."""
        entries = {
            raw_key: (topping, value)
            for raw_key, (topping, value) in self._entries.items()
            if topping is None or predicate(topping, value)
        }
        return Count(entries)

    def filter_zeros(self) -> Count:
        """Drop zero entries, except plain toppings which stay selectable."""
        return self.filter(lambda topping, value: value != 0 or topping.is_plain)

    def keys(self) -> frozenset[Topping]:
        return frozenset(topping for topping, _ in self._entries.values() if topping is not None)

    def pairs(self) -> list[Pair]:
        """Decodable entries ordered by key."""
        return [
            (topping, value)
            for _, (topping, value) in sorted(self._entries.items())
            if topping is not None
        ]

    def undecodable(self) -> dict[str, int]:
        return {raw_key: value for raw_key, (topping, value) in sorted(self._entries.items()) if topping is None}

    def total(self) -> int:
        return sum(value for _, value in self.pairs())

    def to_mapping(self) -> dict[str, int]:
        return {raw_key: value for raw_key, (_, value) in sorted(self._entries.items())}

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Count):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Count({self.to_mapping()!r})"
