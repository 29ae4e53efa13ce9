"""Slice allocation: pack topping demand into whole pies."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pizza.count import Count
from pizza.models import Pair, PieConfig, Topping
from pizza.toppings import key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Division:
    """Result of one packing sweep."""

    pies: list[list[Pair]]
    remaining: Count
    leftovers: Count


@dataclass(frozen=True)
class PiePlan:
    """Full pies from both sweeps plus whatever neither sweep could place."""

    pies: list[list[Pair]]
    uncovered: Count

    def all_pies(self) -> list[list[Pair]]:
        """Packed pies followed by the uncovered residue as one extra pie, if any."""
        residue = [(topping, value) for topping, value in self.uncovered.pairs() if value > 0]
        if not residue:
            return list(self.pies)
        return [*self.pies, residue]


def divide(config: PieConfig, demand: Count) -> Division:
    """
    Pack `demand` (topping -> slices) into pies at part granularity.

    Only as many whole parts as fill complete pies are placed. Parts that
    would need a partially filled pie come back as `remaining` (in slices),
    and sub-part remainders come back as `leftovers`.
    """
    leftovers = Count.empty()
    parts: list[tuple[Topping, int]] = []
    for topping, slices in demand.pairs():
        if slices <= 0:
            continue
        whole, rest = divmod(slices, config.slices_per_part)
        if rest:
            leftovers = leftovers.set(topping, rest)
        if whole:
            parts.append((topping, whole))

    parts.sort(key=lambda item: (-item[1], key(item[0])))
    total_parts = sum(whole for _, whole in parts)
    placeable = (total_parts // config.parts_per_pie) * config.parts_per_pie

    pies: list[list[Pair]] = []
    current: list[Pair] = []
    room = config.parts_per_pie
    placed = 0
    remaining = Count.empty()
    for topping, whole in parts:
        todo = whole
        while todo and placed < placeable:
            take = min(todo, room)
            current.append((topping, take * config.slices_per_part))
            todo -= take
            room -= take
            placed += take
            if room == 0:
                pies.append(current)
                current = []
                room = config.parts_per_pie
        if todo:
            remaining = remaining.set(topping, todo * config.slices_per_part)

    logger.debug(
        "divide slices_per_part=%s parts_per_pie=%s parts=%s pies=%s remaining=%s leftovers=%s",
        config.slices_per_part,
        config.parts_per_pie,
        total_parts,
        len(pies),
        remaining.total(),
        leftovers.total(),
    )
    return Division(pies=pies, remaining=remaining, leftovers=leftovers)


def divide_all(config: PieConfig, demand: Count) -> PiePlan:
    """Pack at the configured granularity, then re-pack the residue slice by slice."""
    first = divide(config, demand)
    second = divide(config.single_slice(), first.remaining.join(first.leftovers))
    return PiePlan(pies=first.pies + second.pies, uncovered=second.remaining.join(second.leftovers))
