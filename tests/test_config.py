"""Configuration, catalog helpers and logging setup."""

import logging

import pytest

from pizza.config import PARTS_PER_PIE, SLICES_PER_PART, load_pie_config, resolve_db_path
from pizza.count import Count
from pizza.data import index_of_topping, ordered_toppings, parse_topping, print_label_for_topping, topping_color, topping_label
from pizza.constant import FALLBACK_COLOR
from pizza.logs import configure_logging
from pizza.models import ConfigError, PieConfig
from pizza.toppings import composite, plain


class TestPieConfig:
    def test_defaults(self) -> None:
        assert load_pie_config({}) == PieConfig(SLICES_PER_PART, PARTS_PER_PIE)

    def test_environment_overrides(self) -> None:
        config = load_pie_config({"PIZZA_SLICES_PER_PART": "3", "PIZZA_PARTS_PER_PIE": " 2 "})
        assert config == PieConfig(3, 2)
        assert config.slices_per_pie == 6

    @pytest.mark.parametrize("raw", ["0", "-2", "two", "1.5"])
    def test_bad_environment_values(self, raw: str) -> None:
        with pytest.raises(ConfigError):
            load_pie_config({"PIZZA_PARTS_PER_PIE": raw})

    def test_db_path_override(self) -> None:
        assert resolve_db_path({"PIZZA_DB_PATH": "/tmp/x.db"}) == "/tmp/x.db"
        assert resolve_db_path({}) == "data/pizza.db"


class TestCatalog:
    def test_labels(self) -> None:
        hawaii = composite("Ham", "Pineapple")
        assert topping_label(hawaii) == "Ham + Pineapple"
        assert print_label_for_topping(hawaii) == "Ham/Pine"
        assert print_label_for_topping(plain("Anchovy")) == "Anchovy"

    def test_colors(self) -> None:
        assert topping_color(composite("Pepperoni", "Ham")) == topping_color(plain("Pepperoni"))
        assert topping_color(plain("Anchovy")) == FALLBACK_COLOR

    def test_parse_topping(self) -> None:
        assert parse_topping("Ham + Pineapple") == composite("Ham", "Pineapple")
        assert parse_topping("  Mushroom ") == plain("Mushroom")
        assert parse_topping(" + ") is None
        assert parse_topping("Ham+Pineapple").names == ("Ham", "Pineapple")

    def test_index_of_topping_matches_by_key(self) -> None:
        rows = [plain("Margherita"), composite("Ham", "Pineapple")]
        assert index_of_topping(rows, composite("Ham", "Pineapple")) == 1
        assert index_of_topping(rows, composite("Pineapple", "Ham")) is None
        assert index_of_topping([], plain("Ham")) is None

    def test_plain_catalog_toppings_come_first(self) -> None:
        count = Count.from_list(
            [
                (composite("Ham", "Pineapple"), 2),
                (plain("Anchovy"), 1),
                (plain("Mushroom"), 0),
                (plain("Margherita"), 4),
            ]
        )
        assert ordered_toppings(count) == [
            plain("Margherita"),
            plain("Mushroom"),
            plain("Anchovy"),
            composite("Ham", "Pineapple"),
        ]


def test_configure_logging_writes_pizza_records(tmp_path) -> None:
    log_file = tmp_path / "logs" / "debug.log"
    handler = configure_logging(log_file)
    assert handler is not None
    try:
        logging.getLogger("pizza.test").info("hello pies")
        handler.flush()
    finally:
        logging.getLogger("pizza").removeHandler(handler)
        handler.close()
    assert "hello pies" in log_file.read_text(encoding="utf-8")
