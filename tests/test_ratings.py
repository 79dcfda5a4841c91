import pytest

from gridiron_idle.catalog import ATTRIBUTE_KEYS, POSITIONS
from gridiron_idle.models import Attributes
from gridiron_idle.ratings import (
    POSITION_WEIGHTS,
    attribute_upgrade_cost,
    compute_rating,
    starting_attributes,
)


def test_every_position_weight_map_sums_to_one() -> None:
    assert set(POSITION_WEIGHTS) == set(POSITIONS)
    for position, weights in POSITION_WEIGHTS.items():
        assert sum(weights.values()) == pytest.approx(1.0), position
        assert set(weights) <= set(ATTRIBUTE_KEYS)


@pytest.mark.parametrize("position", POSITIONS)
def test_rating_is_clamped_for_extreme_attributes(position: str) -> None:
    floor_attrs = Attributes(**{key: 0 for key in ATTRIBUTE_KEYS})
    ceiling_attrs = Attributes(**{key: 99 for key in ATTRIBUTE_KEYS})
    assert compute_rating(floor_attrs, position) == 40
    assert compute_rating(ceiling_attrs, position) == 99


def test_unknown_position_rates_fifty() -> None:
    assert compute_rating(Attributes(), "K") == 50


def test_attribute_cost_strictly_increases_with_level() -> None:
    for attribute in ATTRIBUTE_KEYS:
        costs = [attribute_upgrade_cost(attribute, level) for level in range(40, 100)]
        assert all(later > earlier for earlier, later in zip(costs, costs[1:])), attribute


def test_attribute_cost_starts_at_base_cost() -> None:
    assert attribute_upgrade_cost("awareness", 40) == 20
    assert attribute_upgrade_cost("not_an_attribute", 40) == 15


def test_starting_attributes_give_position_head_start() -> None:
    attrs = starting_attributes("QB")
    assert attrs.throw_accuracy == 46
    assert attrs.throw_power == 44
    assert attrs.catching == 40
    assert compute_rating(attrs, "QB") > 40


def test_legacy_bonus_raises_every_starting_attribute() -> None:
    plain = starting_attributes("LB")
    boosted = starting_attributes("LB", legacy_bonus=4)
    for key in ATTRIBUTE_KEYS:
        assert boosted.get(key) - plain.get(key) == 4
    assert compute_rating(boosted, "LB") == compute_rating(plain, "LB") + 4


def test_rating_rounds_halves_up(monkeypatch) -> None:
    monkeypatch.setitem(POSITION_WEIGHTS, "QB", {"speed": 0.5, "stamina": 0.5})
    assert compute_rating(Attributes(speed=60, stamina=61), "QB") == 61
    assert compute_rating(Attributes(speed=62, stamina=63), "QB") == 63
    assert compute_rating(Attributes(speed=62, stamina=62), "QB") == 62
