import math
import random

import pytest

from gridiron_idle.catalog import POSITIONS
from gridiron_idle.engine import MatchEngine, match_equip_bonus
from gridiron_idle.models import PurchasedUpgrade
from gridiron_idle.state import create_new_game_state


@pytest.mark.parametrize("position", POSITIONS)
def test_performance_bounds_and_score_consistency(position: str) -> None:
    engine = MatchEngine(random.Random(42))
    state = create_new_game_state("Bounds", position, now=0.0)
    for rating in (40, 70, 99):
        state.player.rating = rating
        for _ in range(200):
            result = engine.simulate_match(state)
            assert 0.0 <= result.performance_score <= 100.0
            if result.win:
                assert result.team_score > result.opponent_score
            else:
                assert result.opponent_score > result.team_score


def test_seeded_engines_are_deterministic() -> None:
    state = create_new_game_state("Seeded", "WR", now=0.0)
    first = MatchEngine(random.Random(7)).simulate_match(state)
    second = MatchEngine(random.Random(7)).simulate_match(state)
    assert first == second


def test_rewards_follow_performance() -> None:
    engine = MatchEngine(random.Random(3))
    state = create_new_game_state("Rewards", "RB", now=0.0)
    state.legacy.money_multiplier = 1.5
    result = engine.simulate_match(state)
    p = result.performance_score / 100
    assert result.xp_earned == math.floor(p * 100 * 2 + (50 if result.win else 10))
    assert result.money_earned == math.floor((result.performance_score * 500 + 50000.0) * 1.5)
    assert result.fame_earned == math.floor(result.performance_score * 0.5 + (5 if result.win else 0))


def test_pre_committed_opponent_is_used() -> None:
    state = create_new_game_state("Opp", "QB", now=0.0)
    state.season.current_opponent = "Packers"
    result = MatchEngine(random.Random(1)).simulate_match(state)
    assert result.opponent == "Packers"
    assert result.week == 1
    assert result.season == 1


def test_position_stat_lines() -> None:
    engine = MatchEngine(random.Random(5))
    qb = create_new_game_state("Arm", "QB", now=0.0)
    qb.player.rating = 99
    lb = create_new_game_state("Hitter", "LB", now=0.0)
    lb.player.rating = 99
    qb_stats = engine.simulate_match(qb).stats
    lb_stats = engine.simulate_match(lb).stats
    assert qb_stats.tackles == 0
    assert 0.0 <= qb_stats.completion_pct <= 1.0
    assert lb_stats.passing_yards == 0
    assert lb_stats.receptions == 0


def test_equipment_bonus_is_capped() -> None:
    state = create_new_game_state("Gear", "QB", now=0.0)
    state.purchased_upgrades.append(PurchasedUpgrade("cleats_basic", level=2))
    assert match_equip_bonus(state) == pytest.approx(3.0)
    state.purchased_upgrades.append(PurchasedUpgrade("elite_equipment", level=3))
    state.purchased_upgrades.append(PurchasedUpgrade("hof_preparation", level=1))
    assert match_equip_bonus(state) == pytest.approx(15.0)
