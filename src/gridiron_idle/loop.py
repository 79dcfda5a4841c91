from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from .config import MAX_DELTA_SECONDS
from .endorsements import EndorsementSystem
from .models import GameState, MatchResult
from .persistence import SaveManager
from .season import SeasonEngine
from .training import TrainingEngine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TickResult:
    delta: float
    match: MatchResult | None = None
    notifications: list[str] = field(default_factory=list)
    saved: bool = False


class GameLoop:
    """
    Drives every engine against one shared GameState.

    Each tick runs Training, then Season, then Endorsement, all synchronously.
    The delta is clamped so a stalled host cannot replay a long gap live; long
    gaps belong to OfflineEngine on resume.
    """

    def __init__(
        self,
        state: GameState,
        save_manager: SaveManager | None = None,
        *,
        training: TrainingEngine | None = None,
        season: SeasonEngine | None = None,
        endorsements: EndorsementSystem | None = None,
        on_notifications: Callable[[list[str]], None] | None = None,
    ) -> None:
        self.state = state
        self.save_manager = save_manager
        self.training = training or TrainingEngine()
        self.season = season or SeasonEngine()
        self.endorsements = endorsements or EndorsementSystem()
        self.on_notifications = on_notifications
        self._save_accumulator = 0.0

    def set_state(self, state: GameState) -> None:
        """Swap in a different career (new game, prestige)."""
        self.state = state
        self._save_accumulator = 0.0

    def tick(self, delta: float, now: float | None = None) -> TickResult:
        delta = max(0.0, min(delta, MAX_DELTA_SECONDS))
        state = self.state

        self.training.tick(state, delta)
        match = self.season.tick(state, delta)
        self.endorsements.tick(state, delta)
        state.last_tick_time = time.time() if now is None else now

        notifications = self.season.drain_notifications()
        if notifications and self.on_notifications is not None:
            self.on_notifications(notifications)

        saved = False
        self._save_accumulator += delta
        if self._save_accumulator >= state.settings.auto_save_interval_seconds:
            self._save_accumulator = 0.0
            if self.save_manager is not None:
                saved = self.save_manager.save(state, now=now)
                if saved:
                    logger.debug("Autosaved career to %s", self.save_manager.path)

        return TickResult(delta=delta, match=match, notifications=notifications, saved=saved)
