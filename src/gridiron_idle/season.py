from __future__ import annotations

import random

from .awards import (
    CHAMPIONSHIP,
    CHAMPIONSHIP_MVP,
    CHAMPIONSHIP_MVP_MIN_PERF,
    LEAGUE_MVP,
    MVP_MIN_AVG,
    MVP_MIN_WIN_PCT,
    PRO_BOWL,
    PRO_BOWL_MIN_AVG,
    ROOKIE_MIN_AVG,
    ROOKIE_OF_YEAR,
)
from .config import (
    GAME_DURATION_SECONDS,
    PLAYOFF_FINAL_ROUND,
    PLAYOFF_WIN_THRESHOLD,
    REGULAR_SEASON_WEEKS,
)
from .engine import MatchEngine, pick_opponent
from .models import OFF_SEASON, PLAYOFFS, REGULAR_SEASON, GameState, MatchResult, SeasonState
from .ratings import refresh_rating


class SeasonEngine:
    """
    Season/week state machine.

    RegularSeason -> Playoffs -> OffSeason, or RegularSeason -> OffSeason.
    OffSeason and Retired freeze the week timer. Only advance_to_next_season()
    moves a finished season back to RegularSeason.

    Caller-visible events are queued as plain strings; drain_notifications()
    hands them over and clears the queue.
    """

    def __init__(self, match_engine: MatchEngine | None = None, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.match_engine = match_engine or MatchEngine(self.rng)
        self._notifications: list[str] = []

    def _notify(self, state: GameState, message: str) -> None:
        if state.settings.notifications_enabled:
            self._notifications.append(message)

    def drain_notifications(self) -> list[str]:
        drained = self._notifications
        self._notifications = []
        return drained

    def tick(self, state: GameState, delta: float) -> MatchResult | None:
        season = state.season
        if not season.is_active:
            return None

        season.week_timer -= delta

        if not season.game_in_progress and 0 < season.week_timer <= GAME_DURATION_SECONDS:
            # Pre-commit the opponent so the name shown matches the one played.
            season.game_in_progress = True
            season.current_opponent = pick_opponent(self.rng)
            self._notify(state, f"Game in progress vs {season.current_opponent}...")

        if season.week_timer <= 0:
            result = self.advance_week(state)
            season.week_timer = state.settings.match_interval_seconds
            return result
        return None

    def advance_week(self, state: GameState) -> MatchResult | None:
        season = state.season
        season.game_in_progress = False

        if season.phase == REGULAR_SEASON:
            result = self.match_engine.simulate_match(state)
            self.apply_match_result(state, result)
            if result.win:
                season.wins += 1
            else:
                season.losses += 1
            outcome = "WIN" if result.win else "LOSS"
            self._notify(state, f"Game complete: {outcome} {result.score_line} vs {result.opponent}")

            season.current_opponent = None
            season.current_week += 1
            if season.current_week > REGULAR_SEASON_WEEKS:
                self._end_regular_season(state)
            return result

        if season.phase == PLAYOFFS:
            return self._advance_playoff_week(state)
        return None

    def apply_match_result(self, state: GameState, result: MatchResult) -> None:
        state.season.match_history.append(result)
        state.resources.money += result.money_earned
        state.resources.xp += result.xp_earned
        state.resources.fame += result.fame_earned
        state.player.total_xp += result.xp_earned
        state.player.fame += result.fame_earned

    def _end_regular_season(self, state: GameState) -> None:
        season = state.season
        self._evaluate_season_awards(state, season.wins / REGULAR_SEASON_WEEKS)
        state.resources.contract_tokens += 1

        if season.wins >= PLAYOFF_WIN_THRESHOLD:
            season.phase = PLAYOFFS
            season.playoff_round = 1
            self._notify(state, "Your team made the playoffs!")
        else:
            self.start_off_season(state)

    def _evaluate_season_awards(self, state: GameState, win_pct: float) -> None:
        season = state.season
        avg_perf = season.average_performance

        if avg_perf > PRO_BOWL_MIN_AVG:
            season.awards_earned.append(PRO_BOWL)
            self._notify(state, "You were selected to the Pro Bowl!")
        if avg_perf > MVP_MIN_AVG and win_pct >= MVP_MIN_WIN_PCT:
            season.awards_earned.append(LEAGUE_MVP)
            self._notify(state, "You won the League MVP award!")
        if season.season_number == 1 and avg_perf > ROOKIE_MIN_AVG:
            season.awards_earned.append(ROOKIE_OF_YEAR)
            self._notify(state, "You won Rookie of the Year!")

    def _advance_playoff_week(self, state: GameState) -> MatchResult:
        season = state.season
        current_round = season.playoff_round or 1
        result = self.match_engine.simulate_match(state)
        self.apply_match_result(state, result)
        season.current_opponent = None

        if not result.win:
            season.losses += 1
            self._notify(state, "Eliminated from the playoffs.")
            self.start_off_season(state)
            return result

        season.wins += 1
        if current_round >= PLAYOFF_FINAL_ROUND:
            season.awards_earned.append(CHAMPIONSHIP)
            self._notify(state, "YOU WON THE SUPER BOWL!")
            if result.performance_score > CHAMPIONSHIP_MVP_MIN_PERF:
                season.awards_earned.append(CHAMPIONSHIP_MVP)
                self._notify(state, "You were named Super Bowl MVP!")
            self.start_off_season(state)
        else:
            season.playoff_round = current_round + 1
            self._notify(state, f"Playoff win! Advancing to round {current_round + 1}")
        return result

    def start_off_season(self, state: GameState) -> None:
        season = state.season
        season.phase = OFF_SEASON
        season.game_in_progress = False
        season.current_opponent = None
        state.player.age += 1
        # Picks up permanent attribute bonuses bought during the season.
        refresh_rating(state.player)
        self._notify(state, f"Season {season.season_number} complete! Record: {season.record}")

    def advance_to_next_season(self, state: GameState) -> None:
        state.season = SeasonState(
            season_number=state.season.season_number + 1,
            week_timer=state.settings.match_interval_seconds,
        )
