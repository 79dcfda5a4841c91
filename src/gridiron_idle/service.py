from __future__ import annotations

import logging
import os
import random
from dataclasses import asdict
from pathlib import Path
from threading import Lock
from typing import Any

from .awards import AwardSystem
from .catalog import POSITION_LABELS, POSITIONS, get_drill
from .contracts import ContractSystem
from .endorsements import EndorsementSystem
from .loop import GameLoop
from .models import OFF_SEASON, GameState, MatchResult
from .offline import OfflineEngine, OfflineSummary
from .persistence import SaveLoadError, SaveManager
from .prestige import PrestigeEngine
from .season import SeasonEngine
from .state import create_new_game_state
from .training import TrainingEngine
from .upgrades import CommandResult, UpgradeSystem

logger = logging.getLogger(__name__)

SAVE_PATH_ENV = "GRIDIRON_IDLE_SAVE"
DEFAULT_PLAYER_NAME = "Rookie"
DEFAULT_POSITION = "QB"
RECENT_MATCH_LIMIT = 5


def default_save_path() -> Path:
    override = os.environ.get(SAVE_PATH_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / "career_state.json"


def _command_payload(result: CommandResult) -> dict[str, Any]:
    return {"ok": result.success, "message": result.message}


def _match_payload(result: MatchResult) -> dict[str, Any]:
    payload = asdict(result)
    payload["score"] = result.score_line
    return payload


def _validate_position(position: str) -> str:
    position = position.upper().strip()
    if position not in POSITIONS:
        raise ValueError(f"Unknown position '{position}'")
    return position


class CareerService:
    """
    One career, its engines and its save file.

    Every public method mutates or reads the shared state; callers that serve
    concurrent requests must hold _lock around each call.
    """

    def __init__(self, save_path: str | Path | None = None, rng: random.Random | None = None) -> None:
        self.save_manager = SaveManager(save_path or default_save_path())
        self.rng = rng or random.Random()
        self.training = TrainingEngine()
        self.season = SeasonEngine(rng=self.rng)
        self.endorsements = EndorsementSystem()
        self.contracts = ContractSystem(self.rng)
        self.upgrades = UpgradeSystem(self.training)
        self.awards = AwardSystem()
        self.prestige = PrestigeEngine(self.awards)
        self.offline = OfflineEngine(self.training, self.season, self.endorsements)
        self.last_load_error = ""
        self.pending_notifications: list[str] = []
        self.last_offline_summary: OfflineSummary | None = None
        self._caught_up = False
        self.loop = GameLoop(
            self._load_or_create(),
            self.save_manager,
            training=self.training,
            season=self.season,
            endorsements=self.endorsements,
            on_notifications=self.pending_notifications.extend,
        )
        self._lock = Lock()

    @property
    def state(self) -> GameState:
        return self.loop.state

    def _load_or_create(self) -> GameState:
        try:
            state = self.save_manager.load()
        except SaveLoadError as exc:
            self.last_load_error = str(exc)
            logger.warning("Could not load %s: %s; starting a new career", self.save_manager.path, exc)
            state = None
        if state is not None:
            logger.info("Loaded career of %s (%s)", state.player.name, state.player.position)
            return state
        logger.info("Starting new career for %s (%s)", DEFAULT_PLAYER_NAME, DEFAULT_POSITION)
        return create_new_game_state(DEFAULT_PLAYER_NAME, DEFAULT_POSITION)

    def _persist(self) -> None:
        self.save_manager.save(self.state)

    def _command(self, result: CommandResult) -> dict[str, Any]:
        if result.success:
            self._persist()
        return _command_payload(result)

    def tick(self, delta: float, now: float | None = None) -> dict[str, Any]:
        if delta < 0:
            raise ValueError("delta must be non-negative")
        self._caught_up = True
        result = self.loop.tick(delta, now=now)
        return {
            "ok": True,
            "delta": result.delta,
            "match": _match_payload(result.match) if result.match is not None else None,
            "notifications": result.notifications,
            "saved": result.saved,
        }

    def resume(self, now: float | None = None) -> dict[str, Any]:
        """
        Apply time spent away since the last save, then persist the caught-up career.

        Catch-up runs at most once per session and never after a live tick.
        """
        if self._caught_up:
            summary = OfflineSummary()
        else:
            summary = self.offline.apply_offline_progress(self.state, now=now)
            self._caught_up = True
        self.last_offline_summary = summary
        self.pending_notifications.extend(summary.notifications)
        if not summary.is_empty:
            logger.info(
                "Applied %.0fs offline progress: %.1f TP, $%.0f, %d matches",
                summary.elapsed_seconds,
                summary.tp_earned,
                summary.money_earned,
                len(summary.match_results),
            )
            self._persist()
        return {
            "ok": True,
            "elapsed_seconds": summary.elapsed_seconds,
            "tp_earned": summary.tp_earned,
            "money_earned": summary.money_earned,
            "matches": [_match_payload(m) for m in summary.match_results],
            "notifications": summary.notifications,
        }

    def purchase_upgrade(self, upgrade_id: str) -> dict[str, Any]:
        return self._command(self.upgrades.purchase_upgrade(self.state, upgrade_id))

    def upgrade_attribute(self, attribute: str) -> dict[str, Any]:
        return self._command(self.upgrades.upgrade_attribute(self.state, attribute))

    def assign_drill(self, drill_id: str, slot_index: int | None = None) -> dict[str, Any]:
        return self._command(self.upgrades.assign_drill(self.state, drill_id, slot_index))

    def remove_drill(self, slot_index: int) -> dict[str, Any]:
        return self._command(self.upgrades.remove_drill(self.state, slot_index))

    def unlock_drill(self, drill_id: str) -> dict[str, Any]:
        return self._command(self.upgrades.unlock_drill(self.state, drill_id))

    def advance_season(self) -> dict[str, Any]:
        state = self.state
        if state.season.phase != OFF_SEASON:
            return _command_payload(CommandResult(False, "The current season is still being played."))

        renewed = self.contracts.process_season_end(state)
        self.season.advance_to_next_season(state)
        logger.info("Advanced %s to season %d", state.player.name, state.season.season_number)

        message = f"Season {state.season.season_number} begins!"
        if renewed is not None:
            message += (
                f" New {renewed.years_remaining}-year deal at ${renewed.salary_per_game:,.0f}/game"
                f" with a ${renewed.signing_bonus:,.0f} signing bonus."
            )
        if state.settings.notifications_enabled:
            self.pending_notifications.append(message)
        return self._command(CommandResult(True, message))

    def retire(self, new_name: str, new_position: str) -> dict[str, Any]:
        position = _validate_position(new_position)
        old = self.state
        if not self.prestige.can_retire(old):
            return _command_payload(CommandResult(False, "You can retire from Season 3 onwards."))

        state = self.prestige.retire(old, new_name, position)
        logger.info(
            "%s retired after %d seasons; prestige %d",
            old.player.name,
            old.season.season_number,
            state.legacy.prestige_count,
        )
        self.loop.set_state(state)
        return self._command(
            CommandResult(True, f"{old.player.name} retired. {new_name} begins a new career at {position}.")
        )

    def new_career(self, name: str, position: str) -> dict[str, Any]:
        """Throw away the current save, legacy included, and start over."""
        position = _validate_position(position)
        self.save_manager.clear()
        self.loop.set_state(create_new_game_state(name, position))
        self.pending_notifications.clear()
        logger.info("Starting new career for %s (%s)", name, position)
        return self._command(CommandResult(True, f"Welcome to the league, {name}!"))

    def drain_notifications(self) -> list[str]:
        drained = list(self.pending_notifications)
        self.pending_notifications.clear()
        return drained

    def snapshot(self) -> dict[str, Any]:
        state = self.state
        player = state.player
        season = state.season
        slots = []
        for idx, slot in enumerate(state.training.slots):
            if slot is None:
                slots.append({"slot_index": idx, "drill_id": None})
                continue
            drill = get_drill(slot.drill_id)
            slots.append(
                {
                    "slot_index": idx,
                    "drill_id": slot.drill_id,
                    "name": drill.name if drill is not None else slot.drill_id,
                    "target_attribute": drill.target_attribute if drill is not None else None,
                    "accumulated_tp": round(slot.accumulated_tp, 2),
                    "coach_multiplier": slot.coach_multiplier,
                }
            )
        return {
            "player": {
                "player_id": player.player_id,
                "name": player.name,
                "position": player.position,
                "position_label": POSITION_LABELS[player.position],
                "age": player.age,
                "rating": player.rating,
                "total_xp": player.total_xp,
                "fame": player.fame,
                "attributes": player.attributes.as_dict(),
            },
            "resources": asdict(state.resources),
            "rates": {
                "training_points_per_second": self.training.rate_per_second(state),
                "money_per_second": self.endorsements.rate(state),
            },
            "training": {"max_slots": state.training.max_slots, "slots": slots},
            "contract": asdict(state.contract),
            "season": {
                "season_number": season.season_number,
                "current_week": season.current_week,
                "phase": season.phase,
                "record": season.record,
                "playoff_round": season.playoff_round,
                "week_timer": round(season.week_timer, 2),
                "game_in_progress": season.game_in_progress,
                "current_opponent": season.current_opponent,
                "awards": [self.awards.label(a) for a in self.awards.season_awards(state)],
                "recent_matches": [_match_payload(m) for m in season.match_history[-RECENT_MATCH_LIMIT:]],
            },
            "legacy": {
                **asdict(state.legacy),
                "career_awards": [self.awards.label(a) for a in state.legacy.career_awards],
            },
            "settings": asdict(state.settings),
            "can_retire": self.prestige.can_retire(state),
            "unlocked_drills": list(state.unlocked_drills),
            "last_load_error": self.last_load_error,
        }

    def upgrade_catalog(self) -> list[dict[str, Any]]:
        return [
            {
                "id": status.definition.id,
                "name": status.definition.name,
                "description": status.definition.description,
                "category": status.definition.category,
                "currency": status.definition.currency,
                "level": status.current_level,
                "max_level": status.definition.max_level,
                "cost": status.cost,
                "locked": status.locked,
                "maxed": status.maxed,
                "can_afford": status.can_afford,
                "unlock_season": status.definition.unlock_season,
                "unlock_fame": status.definition.unlock_fame,
            }
            for status in self.upgrades.upgrade_statuses(self.state)
        ]

    def drill_catalog(self) -> list[dict[str, Any]]:
        return [
            {
                "id": status.definition.id,
                "name": status.definition.name,
                "drill_type": status.definition.drill_type,
                "target_attribute": status.definition.target_attribute,
                "base_rate": status.definition.base_rate,
                "cost": status.definition.cost,
                "unlock_season": status.definition.unlock_season,
                "unlocked": status.unlocked,
                "active": status.active,
                "season_locked": status.season_locked,
                "can_afford": status.can_afford,
            }
            for status in self.upgrades.drill_statuses(self.state)
        ]
