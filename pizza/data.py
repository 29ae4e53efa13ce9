"""Static topping catalog wrapped into typed values, plus label helpers."""

from __future__ import annotations

from dataclasses import dataclass

from pizza.constant import (
    BASE_TOPPING_NAMES,
    COMPOSITE_SEPARATOR,
    FALLBACK_COLOR,
    PRESET_COMPOSITES,
    TOPPING_META_BY_NAME as _TOPPING_META_BY_NAME_RAW,
)
from pizza.count import Count
from pizza.models import BaseTopping, Topping
from pizza.toppings import composite, from_base, key


@dataclass(frozen=True)
class ToppingMeta:
    """Display metadata for a base topping."""

    color: str
    print_label: str | None = None


TOPPING_META_BY_NAME: dict[str, ToppingMeta] = {
    name: ToppingMeta(
        color=str(meta["color"]),
        print_label=str(meta["print_label"]) if meta["print_label"] is not None else None,
    )
    for name, meta in _TOPPING_META_BY_NAME_RAW.items()
}

BASE_TOPPINGS: list[BaseTopping] = [BaseTopping(name) for name in BASE_TOPPING_NAMES]
MENU_TOPPINGS: list[Topping] = [from_base(base) for base in BASE_TOPPINGS] + [
    composite(*names) for names in PRESET_COMPOSITES
]

_BASE_RANK = {name: idx for idx, name in enumerate(BASE_TOPPING_NAMES)}


def topping_label(topping: Topping) -> str:
    """Human readable name, e.g. "Ham + Pineapple"."""
    return COMPOSITE_SEPARATOR.join(topping.names)


def print_label_for_topping(topping: Topping) -> str:
    """Compact label for printed tickets, e.g. "Ham/Pine"."""
    labels = []
    for name in topping.names:
        meta = TOPPING_META_BY_NAME.get(name)
        labels.append(meta.print_label if meta is not None and meta.print_label else name)
    return "/".join(labels)


def topping_color(topping: Topping) -> str:
    """Fill colour; composites take the colour of their first part."""
    meta = TOPPING_META_BY_NAME.get(topping.names[0])
    if meta is None:
        return FALLBACK_COLOR
    return meta.color


def parse_topping(text: str) -> Topping | None:
    """Parse "Ham + Pineapple" style input; blank parts are ignored."""
    names = [part.strip() for part in text.split(COMPOSITE_SEPARATOR.strip())]
    names = [name for name in names if name]
    if not names:
        return None
    return composite(*names)


def menu_count() -> Count:
    """Every menu topping at zero so it is always offered for selection."""
    return Count.from_list((topping, 0) for topping in MENU_TOPPINGS)


def ordered_toppings(count: Count) -> list[Topping]:
    """Plain catalog toppings in catalog order, then everything else by key."""

    def sort_key(topping: Topping) -> tuple[int, int, str]:
        if topping.is_plain and topping.names[0] in _BASE_RANK:
            return (0, _BASE_RANK[topping.names[0]], "")
        return (1, 0, key(topping))

    return sorted(count.keys(), key=sort_key)


def index_of_topping(toppings: list[Topping], topping: Topping) -> int | None:
    """Position of `topping` by Key, or None when it is not listed."""
    wanted = key(topping)
    for idx, candidate in enumerate(toppings):
        if key(candidate) == wanted:
            return idx
    return None
