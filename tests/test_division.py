"""Slice allocation."""

import pytest

from pizza.count import Count
from pizza.division import divide, divide_all
from pizza.models import ConfigError, PieConfig
from pizza.toppings import composite, plain

PEP = plain("Pepperoni")
MUSH = plain("Mushroom")
HAWAII = composite("Ham", "Pineapple")
EIGHT = PieConfig(slices_per_part=2, parts_per_pie=4)


def demand(**slices: int) -> Count:
    return Count.from_list((plain(name), value) for name, value in slices.items())


def slices_in(pie) -> int:
    return sum(value for _, value in pie)


class TestScenarios:
    def test_single_full_pie(self) -> None:
        plan = divide_all(EIGHT, Count.from_list([(PEP, 8)]))
        assert plan.pies == [[(PEP, 8)]]
        assert plan.uncovered.total() == 0
        assert plan.all_pies() == [[(PEP, 8)]]

    def test_two_toppings_share_one_pie(self) -> None:
        plan = divide_all(EIGHT, Count.from_list([(PEP, 5), (MUSH, 3)]))
        assert plan.pies == [[(PEP, 5), (MUSH, 3)]]
        assert len(plan.uncovered) == 0

    def test_overflow_goes_to_uncovered_pie(self) -> None:
        first = divide(EIGHT, Count.from_list([(PEP, 10)]))
        assert first.pies == [[(PEP, 8)]]
        assert first.remaining.get(PEP) == 2
        assert first.leftovers.total() == 0

        plan = divide_all(EIGHT, Count.from_list([(PEP, 10)]))
        assert plan.pies == [[(PEP, 8)]]
        assert plan.uncovered.get(PEP) == 2
        assert plan.all_pies() == [[(PEP, 8)], [(PEP, 2)]]

    def test_empty_demand(self) -> None:
        plan = divide_all(EIGHT, Count.empty())
        assert plan.pies == []
        assert len(plan.uncovered) == 0
        assert plan.all_pies() == []

    def test_sub_part_leftover(self) -> None:
        config = PieConfig(slices_per_part=3, parts_per_pie=1)
        first = divide(config, Count.from_list([(PEP, 4)]))
        assert first.pies == [[(PEP, 3)]]
        assert first.leftovers.get(PEP) == 1
        assert first.remaining.total() == 0

        plan = divide_all(config, Count.from_list([(PEP, 4)]))
        assert plan.all_pies() == [[(PEP, 3)], [(PEP, 1)]]


def test_topping_spans_pies_and_shares_the_last_one() -> None:
    config = PieConfig(slices_per_part=1, parts_per_pie=4)
    result = divide(config, Count.from_list([(PEP, 6), (MUSH, 2)]))
    assert result.pies == [[(PEP, 4)], [(PEP, 2), (MUSH, 2)]]
    assert result.remaining.total() == 0


def test_ties_are_broken_by_key() -> None:
    config = PieConfig(slices_per_part=1, parts_per_pie=4)
    result = divide(config, demand(B=4, A=4))
    assert result.pies == [[(plain("A"), 4)], [(plain("B"), 4)]]


def test_parts_beyond_the_last_full_pie_are_remaining() -> None:
    config = PieConfig(slices_per_part=1, parts_per_pie=4)
    result = divide(config, demand(A=3, B=2))
    assert result.pies == [[(plain("A"), 3), (plain("B"), 1)]]
    assert result.remaining.to_mapping() == Count.from_list([(plain("B"), 1)]).to_mapping()


def test_first_pass_places_whole_parts_only() -> None:
    result = divide(EIGHT, Count.from_list([(PEP, 5), (MUSH, 5), (HAWAII, 7)]))
    # Parts: Hawaii 3, Pepperoni 2, Mushroom 2 -> 7 parts, one full pie.
    assert [slices_in(pie) for pie in result.pies] == [8]
    assert result.pies[0] == [(HAWAII, 6), (MUSH, 2)]
    assert result.remaining.get(MUSH) == 2
    assert result.remaining.get(PEP) == 4
    assert result.leftovers.to_mapping() == Count.from_list([(PEP, 1), (MUSH, 1), (HAWAII, 1)]).to_mapping()


def test_zero_and_negative_demand_never_reach_a_pie() -> None:
    plan = divide_all(EIGHT, Count.from_list([(PEP, 8), (MUSH, 0), (HAWAII, -3)]))
    placed = {topping for pie in plan.all_pies() for topping, _ in pie}
    assert placed == {PEP}


@pytest.mark.parametrize(
    "config",
    [
        PieConfig(slices_per_part=1, parts_per_pie=1),
        PieConfig(slices_per_part=2, parts_per_pie=4),
        PieConfig(slices_per_part=3, parts_per_pie=2),
        PieConfig(slices_per_part=4, parts_per_pie=3),
    ],
)
@pytest.mark.parametrize(
    "slices",
    [
        {},
        {"A": 1},
        {"A": 17, "B": 3, "C": 9},
        {"A": 5, "B": 5, "C": 5, "D": 5, "E": 5},
        {"A": 0, "B": 23, "C": 1, "D": 12},
    ],
)
def test_conservation_and_capacity(config: PieConfig, slices: dict[str, int]) -> None:
    count = demand(**slices)
    plan = divide_all(config, count)

    placed = sum(slices_in(pie) for pie in plan.pies)
    assert placed + plan.uncovered.total() == count.total()
    assert sum(slices_in(pie) for pie in plan.all_pies()) == count.total()

    # Both sweeps only ever emit completely filled pies.
    for pie in plan.pies:
        assert slices_in(pie) == config.slices_per_pie
    assert plan.uncovered.total() < config.slices_per_pie


def test_allocation_is_deterministic() -> None:
    count = Count.from_list([(PEP, 13), (MUSH, 7), (HAWAII, 9), (plain("Olives"), 7)])
    assert divide_all(EIGHT, count) == divide_all(EIGHT, count)


@pytest.mark.parametrize("values", [(0, 4), (2, 0), (-1, 4), (2, -8)])
def test_invalid_config_fails_fast(values: tuple[int, int]) -> None:
    with pytest.raises(ConfigError):
        PieConfig(*values)


def test_non_integer_config_is_rejected() -> None:
    with pytest.raises(ConfigError):
        PieConfig(True, 4)  # type: ignore[arg-type]
    with pytest.raises(ConfigError):
        PieConfig(2.0, 4)  # type: ignore[arg-type]


def test_single_slice_keeps_capacity() -> None:
    assert EIGHT.single_slice() == PieConfig(slices_per_part=1, parts_per_pie=8)
    assert EIGHT.single_slice().slices_per_pie == EIGHT.slices_per_pie
