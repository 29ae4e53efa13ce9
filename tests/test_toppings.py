"""Canonical key encoding for composite toppings."""

import pytest

from pizza.models import BaseTopping, Topping
from pizza.toppings import composite, from_base, from_key, key, plain


def test_plain_round_trip() -> None:
    topping = plain("Pepperoni")
    assert from_key(key(topping)) == topping


def test_composite_round_trip_keeps_part_order() -> None:
    topping = composite("Ham", "Pineapple", "Jalapeño")
    decoded = from_key(key(topping))
    assert decoded == topping
    assert decoded is not None and decoded.names == ("Ham", "Pineapple", "Jalapeño")


def test_part_order_changes_identity() -> None:
    assert key(composite("Ham", "Pineapple")) != key(composite("Pineapple", "Ham"))


def test_names_with_separators_do_not_collide() -> None:
    assert key(composite("A + B")) != key(composite("A", "B"))
    assert key(composite('Quote"d')) != key(composite("Quote", "d"))


@pytest.mark.parametrize(
    "raw",
    [
        "Pepperoni",
        "",
        "[]",
        "[1]",
        '{"name":"Ham"}',
        '["Ham", "Pineapple"]',
        '["Ham",null]',
    ],
)
def test_from_key_rejects_foreign_strings(raw: str) -> None:
    assert from_key(raw) is None


def test_from_base_is_plain() -> None:
    topping = from_base(BaseTopping("Mushroom"))
    assert topping.is_plain
    assert topping == plain("Mushroom")
    assert not composite("Ham", "Pineapple").is_plain


def test_empty_topping_is_rejected() -> None:
    with pytest.raises(ValueError):
        Topping(())
