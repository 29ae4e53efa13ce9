"""Canonical keys for composite toppings."""

from __future__ import annotations

import json

from pizza.models import BaseTopping, Topping


def key(topping: Topping) -> str:
    """Encode the ordered part names as a compact JSON array."""
    return json.dumps(list(topping.names), ensure_ascii=False, separators=(",", ":"))


def from_key(raw: str) -> Topping | None:
    """Decode a key produced by `key`, or return None for anything else."""
    try:
        names = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(names, list) or not names:
        return None
    if not all(isinstance(name, str) for name in names):
        return None

    topping = Topping(tuple(BaseTopping(name) for name in names))
    # Reject keys that decode but were not spelled the canonical way.
    if key(topping) != raw:
        return None
    return topping


def from_base(base: BaseTopping) -> Topping:
    return Topping((base,))


def plain(name: str) -> Topping:
    """Shorthand for a single-part topping."""
    return from_base(BaseTopping(name))


def composite(*names: str) -> Topping:
    return Topping(tuple(BaseTopping(name) for name in names))
