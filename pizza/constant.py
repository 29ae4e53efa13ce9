"""Editable static topping catalog."""

from __future__ import annotations

# Display order of plain toppings in the menu.
BASE_TOPPING_NAMES: list[str] = [
    "Margherita",
    "Pepperoni",
    "Mushroom",
    "Ham",
    "Salami",
    "Onion",
    "Olives",
    "Pineapple",
    "Jalapeno",
    "Four Cheese",
]

# Canonical topping metadata values consumed by pizza.data (which wraps these into ToppingMeta dataclass instances).
TOPPING_META_BY_NAME: dict[str, dict[str, str | None]] = {
    "Margherita": {"color": "#f2c14e", "print_label": "Marg"},
    "Pepperoni": {"color": "#b23a48", "print_label": "Pep"},
    "Mushroom": {"color": "#8d6e63", "print_label": "Mush"},
    "Ham": {"color": "#f19cbb", "print_label": None},
    "Salami": {"color": "#7b2d26", "print_label": "Sal"},
    "Onion": {"color": "#c3a6d8", "print_label": None},
    "Olives": {"color": "#2f3e46", "print_label": "Oliv"},
    "Pineapple": {"color": "#f6d55c", "print_label": "Pine"},
    "Jalapeno": {"color": "#5fbf72", "print_label": "Jal"},
    "Four Cheese": {"color": "#ffe8a3", "print_label": "4Ch"},
}

# Composite toppings offered in the menu alongside the plain ones.
PRESET_COMPOSITES: list[list[str]] = [
    ["Ham", "Pineapple"],
    ["Pepperoni", "Jalapeno"],
    ["Mushroom", "Onion", "Olives"],
]

FALLBACK_COLOR = "#9e9e9e"
UNCOVERED_STROKE_COLOR = "#ff4d4d"
COMPOSITE_SEPARATOR = " + "
