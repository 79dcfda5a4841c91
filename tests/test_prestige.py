import pytest

from gridiron_idle.awards import CHAMPIONSHIP, LEAGUE_MVP, PRO_BOWL, AwardSystem
from gridiron_idle.models import RETIRED, REGULAR_SEASON
from gridiron_idle.prestige import PrestigeEngine
from gridiron_idle.state import create_new_game_state


def _veteran(seasons: int = 3):
    state = create_new_game_state("Veteran", "RB", now=0.0)
    state.season.season_number = seasons
    state.resources.money = 250_000.0
    return state


def test_retirement_requires_three_seasons() -> None:
    engine = PrestigeEngine()
    assert engine.can_retire(_veteran(seasons=2)) is False
    assert engine.can_retire(_veteran(seasons=3)) is True


def test_first_retirement_sets_legacy_bonuses() -> None:
    old = _veteran()
    new = PrestigeEngine().retire(old, "Rookie Two", "LB", now=50.0)
    legacy = new.legacy
    assert legacy.prestige_count == 1
    assert legacy.tp_multiplier == pytest.approx(1.2)
    assert legacy.money_multiplier == pytest.approx(1.15)
    assert legacy.starting_rating_bonus == 2


def test_retirement_starts_a_fresh_career() -> None:
    old = _veteran()
    new = PrestigeEngine().retire(old, "Rookie Two", "LB", now=50.0)
    assert new.player.name == "Rookie Two"
    assert new.player.position == "LB"
    assert new.player.attributes.catching == 42
    assert new.resources.money == 1000.0
    assert new.season.season_number == 1
    assert new.season.phase == REGULAR_SEASON
    assert new.purchased_upgrades == []
    assert new.last_save_time == 50.0
    assert old.season.phase == RETIRED


def test_retirement_records_career_and_archives_awards_once() -> None:
    old = _veteran()
    old.legacy.career_awards.append(PRO_BOWL)
    old.season.awards_earned.extend([PRO_BOWL, LEAGUE_MVP])
    new = PrestigeEngine().retire(old, "Next", "WR")
    assert new.legacy.career_awards == [PRO_BOWL, LEAGUE_MVP]
    record = new.legacy.retired_players[-1]
    assert record.name == "Veteran"
    assert record.position == "RB"
    assert record.seasons == 3
    assert record.awards == [PRO_BOWL, LEAGUE_MVP]


def test_rating_bonus_caps_at_ten() -> None:
    state = _veteran()
    engine = PrestigeEngine()
    for _ in range(7):
        state.season.season_number = 3
        state = engine.retire(state, "Again", "QB")
    assert state.legacy.prestige_count == 7
    assert state.legacy.starting_rating_bonus == 10
    assert state.legacy.tp_multiplier == pytest.approx(2.4)
    assert len(state.legacy.retired_players) == 7


def test_retire_rejects_unknown_position() -> None:
    state = _veteran()
    with pytest.raises(ValueError):
        PrestigeEngine().retire(state, "Kicker", "K")
    assert state.legacy.prestige_count == 0


def test_award_labels_and_career_listing() -> None:
    state = _veteran()
    state.legacy.career_awards.append(CHAMPIONSHIP)
    state.season.awards_earned.append(PRO_BOWL)
    awards = AwardSystem()
    assert awards.all_career_awards(state) == [CHAMPIONSHIP, PRO_BOWL]
    assert awards.label(CHAMPIONSHIP) == "Super Bowl Champion"
    assert awards.label("Unknown") == "Unknown"
