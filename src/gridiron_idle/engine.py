from __future__ import annotations

import math
import random

from .catalog import get_upgrade
from .config import MATCH_EQUIP_BONUS_CAP, OPPONENT_TEAM_NAMES
from .models import GameState, MatchResult, PlayerGameStats
from .ratings import RATING_MAX, RATING_MIN

# Win threshold climbs each season so long careers get genuinely harder.
BASE_WIN_THRESHOLD = 47.0
WIN_THRESHOLD_PER_SEASON = 2.0
WIN_JITTER = 7.5
NOISE_SCALE = 20.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def match_equip_bonus(state: GameState) -> float:
    bonus = 0.0
    for record in state.purchased_upgrades:
        definition = get_upgrade(record.upgrade_id)
        if definition is None or definition.effect.kind != "match_bonus":
            continue
        bonus += definition.effect.magnitude * record.level
    return min(MATCH_EQUIP_BONUS_CAP, bonus)


def pick_opponent(rng: random.Random) -> str:
    return rng.choice(OPPONENT_TEAM_NAMES)


def _generate_stats(position: str, performance: float, rng: random.Random) -> PlayerGameStats:
    p = performance / 100.0

    def span(low: float, high: float) -> float:
        return rng.uniform(low, high)

    stats = PlayerGameStats()
    if position == "QB":
        stats.passing_yards = math.floor(p * span(250, 400))
        stats.passing_tds = math.floor(p * span(1, 5))
        stats.interceptions = math.floor((1 - p) * span(0, 3))
        stats.completion_pct = min(1.0, p * span(0.85, 1.05))
        stats.rushing_yards = math.floor(p * span(0, 40))
    elif position == "RB":
        stats.rushing_yards = math.floor(p * span(60, 180))
        stats.rushing_tds = math.floor(p * span(0, 3))
        stats.receptions = math.floor(p * span(0, 6))
        stats.receiving_yards = math.floor(p * span(0, 50))
    elif position == "WR":
        stats.receptions = math.floor(p * span(3, 12))
        stats.receiving_yards = math.floor(p * span(40, 180))
        stats.receiving_tds = math.floor(p * span(0, 3))
    elif position == "TE":
        stats.receptions = math.floor(p * span(2, 9))
        stats.receiving_yards = math.floor(p * span(20, 120))
        stats.receiving_tds = math.floor(p * span(0, 2))
    elif position == "LB":
        stats.tackles = math.floor(p * span(4, 15))
        stats.sacks = math.floor(p * span(0, 2))
        stats.defensive_interceptions = 1 if rng.random() < p * 0.1 else 0
    elif position in {"CB", "S"}:
        stats.tackles = math.floor(p * span(2, 10))
        stats.defensive_interceptions = 1 if rng.random() < p * 0.2 else 0
        stats.sacks = 1 if rng.random() < p * 0.05 else 0
    return stats


class MatchEngine:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def simulate_match(self, state: GameState) -> MatchResult:
        rng = self.rng
        player = state.player
        season = state.season

        base_score = (player.rating - RATING_MIN) / (RATING_MAX - RATING_MIN) * 100.0
        # Sum of three uniforms: bounded, roughly bell-shaped noise in [-30, 30].
        noise = (rng.random() + rng.random() + rng.random() - 1.5) * NOISE_SCALE
        equip_bonus = match_equip_bonus(state)
        performance = _clamp(base_score + noise + equip_bonus, 0.0, 100.0)

        # Win decision and score magnitudes are drawn independently.
        win_threshold = BASE_WIN_THRESHOLD + season.season_number * WIN_THRESHOLD_PER_SEASON
        win_jitter = rng.uniform(-WIN_JITTER, WIN_JITTER)
        win = performance > win_threshold + win_jitter

        if win:
            team_score = rng.randint(21, 38)
            opponent_score = rng.randint(7, team_score - 1)
        else:
            team_score = rng.randint(7, 24)
            opponent_score = rng.randint(team_score + 1, team_score + 21)

        stats = _generate_stats(player.position, performance, rng)

        p = performance / 100.0
        money_multiplier = state.legacy.money_multiplier
        xp_earned = math.floor(p * 100 * 2 + (50 if win else 10))
        money_earned = math.floor((performance * 500 + state.contract.salary_per_game) * money_multiplier)
        fame_earned = math.floor(performance * 0.5 + (5 if win else 0))

        opponent = season.current_opponent or pick_opponent(rng)

        return MatchResult(
            week=season.current_week,
            season=season.season_number,
            opponent=opponent,
            stats=stats,
            team_score=team_score,
            opponent_score=opponent_score,
            win=win,
            xp_earned=xp_earned,
            money_earned=money_earned,
            fame_earned=fame_earned,
            performance_score=performance,
        )
