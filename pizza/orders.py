"""Per-participant order aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping

from pizza.count import Count
from pizza.data import menu_count
from pizza.models import Topping, UpdateEvent


@dataclass(frozen=True)
class OrderBook:
    """
    The host's own demand plus each guest's latest demand.

    Updates carry absolute values, so applying them is last-write-wins per
    (participant, topping). `version` increases with every applied update and
    lets callers drop plans computed from an older book.
    """

    host: Count = field(default_factory=Count.empty)
    guests: Mapping[str, Count] = field(default_factory=dict)
    version: int = 0

    def apply(self, event: UpdateEvent, version: int | None = None) -> OrderBook:
        if event.count < 0:
            raise ValueError(f"count must be non-negative, got {event.count}")
        guests = dict(self.guests)
        guests[event.participant_id] = guests.get(event.participant_id, Count.empty()).set(event.topping, event.count)
        return replace(self, guests=guests, version=self.version + 1 if version is None else version)

    def set_host(self, topping: Topping, value: int) -> OrderBook:
        if value < 0:
            raise ValueError(f"count must be non-negative, got {value}")
        return replace(self, host=self.host.set(topping, value), version=self.version + 1)

    def participant_count(self, participant_id: str) -> Count:
        return self.guests.get(participant_id, Count.empty())

    def participants(self) -> list[str]:
        return sorted(self.guests)

    def aggregate(self) -> Count:
        """Join every guest's Count and the host's onto the zeroed menu."""
        total = menu_count().join(self.host)
        for participant_id in self.participants():
            total = total.join(self.guests[participant_id])
        return total
