"""
Catch-up for time spent away.

Offline progress goes through the same rate and advance_week functions as live ticking,
so a resumed career ends up where it would have been had it kept running, apart from
the reduced training efficiency and the capped window.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field

from .config import OFFLINE_CAP_HOURS, OFFLINE_MIN_SECONDS, OFFLINE_TP_EFFICIENCY
from .endorsements import EndorsementSystem
from .models import GameState, MatchResult
from .season import SeasonEngine
from .training import TrainingEngine


@dataclass(slots=True)
class OfflineSummary:
    tp_earned: float = 0.0
    money_earned: float = 0.0
    match_results: list[MatchResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    notifications: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.elapsed_seconds == 0.0


class OfflineEngine:
    def __init__(
        self,
        training: TrainingEngine | None = None,
        season: SeasonEngine | None = None,
        endorsements: EndorsementSystem | None = None,
    ) -> None:
        self.training = training or TrainingEngine()
        self.season = season or SeasonEngine()
        self.endorsements = endorsements or EndorsementSystem()

    def apply_offline_progress(self, state: GameState, now: float | None = None) -> OfflineSummary:
        now = time.time() if now is None else now
        elapsed = now - state.last_save_time

        if elapsed < OFFLINE_MIN_SECONDS:
            state.last_save_time = now
            state.last_tick_time = now
            return OfflineSummary()

        capped = min(elapsed, OFFLINE_CAP_HOURS * 3600.0)

        # Rates are snapshotted once; nothing can be bought while away.
        tp_earned = self.training.rate_per_second(state) * capped * OFFLINE_TP_EFFICIENCY
        state.resources.training_points += tp_earned

        money_earned = self.endorsements.rate(state) * capped
        state.resources.money += money_earned

        match_results: list[MatchResult] = []
        if state.season.is_active:
            match_results = self._replay_matches(state, capped)

        state.last_save_time = now
        state.last_tick_time = now

        return OfflineSummary(
            tp_earned=tp_earned,
            money_earned=money_earned,
            match_results=match_results,
            elapsed_seconds=capped,
            notifications=self.season.drain_notifications(),
        )

    def _replay_matches(self, state: GameState, seconds: float) -> list[MatchResult]:
        season = state.season
        interval = state.settings.match_interval_seconds

        if seconds < season.week_timer:
            season.week_timer -= seconds
            return []

        left = seconds - season.week_timer
        phase = season.phase
        results: list[MatchResult] = []

        result = self.season.advance_week(state)
        if result is not None:
            results.append(result)

        while season.phase == phase and left >= interval:
            left -= interval
            result = self.season.advance_week(state)
            if result is not None:
                results.append(result)

        # left is in [0, interval) unless a phase change cut the replay short.
        season.week_timer = max(0.0, interval - left)
        return results
