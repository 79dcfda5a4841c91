"""
Save-file format for a career.

A save is one JSON object shaped like GameState, with a top-level "version". Loading
always goes through migrate(), which upgrades older layouts in place and clears the
per-session match window so a restored career never resumes mid-game.
"""
from __future__ import annotations

import json
import logging
import shutil
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .catalog import ATTRIBUTE_KEYS, DEFENSE_POSITIONS, POSITIONS
from .config import MAX_TRAINING_SLOTS, SAVE_VERSION
from .models import (
    PHASES,
    REGULAR_SEASON,
    ActiveDrill,
    Attributes,
    Contract,
    GameSettings,
    GameState,
    LegacyState,
    MatchResult,
    Player,
    PlayerGameStats,
    PurchasedUpgrade,
    Resources,
    RetiredPlayerRecord,
    SeasonState,
    TrainingState,
)
from .ratings import refresh_rating

logger = logging.getLogger(__name__)

# Drills introduced with save version 2; defensive careers get them unlocked on upgrade.
V2_DEFENSE_DRILLS = ("tackle_circuit", "pursuit_drills")


class SaveLoadError(ValueError):
    """A save exists but cannot be turned into a GameState."""


def migrate(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise SaveLoadError("Invalid save data; expected a JSON object.")
    try:
        version = int(raw.get("version", 1) or 1)
    except (TypeError, ValueError) as exc:
        raise SaveLoadError(f"Invalid save version {raw.get('version')!r}.") from exc
    if version > SAVE_VERSION:
        raise SaveLoadError(f"Unsupported save version {version}; app supports up to {SAVE_VERSION}.")

    if version < 2:
        _migrate_v1_to_v2(raw)

    season = raw.get("season")
    if isinstance(season, dict):
        season["game_in_progress"] = False
        season["current_opponent"] = None

    raw["version"] = SAVE_VERSION
    return raw


def _migrate_v1_to_v2(raw: dict[str, Any]) -> None:
    player = raw.get("player")
    position = player.get("position") if isinstance(player, dict) else None
    if position not in DEFENSE_POSITIONS:
        return
    unlocked = list(raw.get("unlocked_drills") or [])
    for drill_id in V2_DEFENSE_DRILLS:
        if drill_id not in unlocked:
            unlocked.append(drill_id)
    raw["unlocked_drills"] = unlocked


def state_to_dict(state: GameState) -> dict[str, Any]:
    return asdict(state)


def _player_from_dict(raw: dict[str, Any]) -> Player:
    position = str(raw.get("position", ""))
    if position not in POSITIONS:
        raise SaveLoadError(f"Unknown position '{position}' in save.")
    raw_attrs = raw.get("attributes") or {}
    attributes = Attributes(**{key: int(raw_attrs.get(key, 40)) for key in ATTRIBUTE_KEYS})
    player = Player(
        name=str(raw.get("name", "")),
        position=position,
        attributes=attributes,
        age=int(raw.get("age", 22)),
        total_xp=int(raw.get("total_xp", 0)),
        fame=int(raw.get("fame", 0)),
    )
    if raw.get("player_id"):
        player.player_id = str(raw["player_id"])
    refresh_rating(player)
    return player


def _training_from_dict(raw: dict[str, Any]) -> TrainingState:
    slots: list[ActiveDrill | None] = []
    for idx, slot in enumerate(raw.get("slots") or []):
        if not isinstance(slot, dict) or not slot.get("drill_id"):
            slots.append(None)
            continue
        slots.append(
            ActiveDrill(
                slot_index=idx,
                drill_id=str(slot["drill_id"]),
                accumulated_tp=float(slot.get("accumulated_tp", 0.0)),
                coach_multiplier=float(slot.get("coach_multiplier", 1.0)),
            )
        )
    return TrainingState(max_slots=min(MAX_TRAINING_SLOTS, int(raw.get("max_slots", 3))), slots=slots)


def _match_from_dict(raw: dict[str, Any]) -> MatchResult:
    raw_stats = raw.get("stats") or {}
    stats = PlayerGameStats(
        **{name: raw_stats[name] for name in PlayerGameStats.__dataclass_fields__ if name in raw_stats}
    )
    return MatchResult(
        week=int(raw.get("week", 0)),
        season=int(raw.get("season", 0)),
        opponent=str(raw.get("opponent", "")),
        stats=stats,
        team_score=int(raw.get("team_score", 0)),
        opponent_score=int(raw.get("opponent_score", 0)),
        win=bool(raw.get("win", False)),
        xp_earned=int(raw.get("xp_earned", 0)),
        money_earned=int(raw.get("money_earned", 0)),
        fame_earned=int(raw.get("fame_earned", 0)),
        performance_score=float(raw.get("performance_score", 0.0)),
    )


def _season_from_dict(raw: dict[str, Any], match_interval: float) -> SeasonState:
    phase = str(raw.get("phase", REGULAR_SEASON))
    if phase not in PHASES:
        raise SaveLoadError(f"Unknown season phase '{phase}' in save.")
    playoff_round = raw.get("playoff_round")
    return SeasonState(
        season_number=int(raw.get("season_number", 1)),
        current_week=int(raw.get("current_week", 1)),
        phase=phase,
        wins=int(raw.get("wins", 0)),
        losses=int(raw.get("losses", 0)),
        playoff_round=int(playoff_round) if playoff_round is not None else None,
        match_history=[_match_from_dict(m) for m in raw.get("match_history") or [] if isinstance(m, dict)],
        awards_earned=[str(a) for a in raw.get("awards_earned") or []],
        week_timer=float(raw.get("week_timer", match_interval)),
        game_in_progress=bool(raw.get("game_in_progress", False)),
        current_opponent=raw.get("current_opponent"),
    )


def _legacy_from_dict(raw: dict[str, Any]) -> LegacyState:
    return LegacyState(
        prestige_count=int(raw.get("prestige_count", 0)),
        tp_multiplier=float(raw.get("tp_multiplier", 1.0)),
        money_multiplier=float(raw.get("money_multiplier", 1.0)),
        starting_rating_bonus=int(raw.get("starting_rating_bonus", 0)),
        career_awards=[str(a) for a in raw.get("career_awards") or []],
        retired_players=[
            RetiredPlayerRecord(
                name=str(r.get("name", "")),
                position=str(r.get("position", "")),
                rating=int(r.get("rating", 0)),
                seasons=int(r.get("seasons", 0)),
                awards=[str(a) for a in r.get("awards") or []],
            )
            for r in raw.get("retired_players") or []
            if isinstance(r, dict)
        ],
    )


def state_from_dict(raw: dict[str, Any]) -> GameState:
    """Build a GameState from a migrated payload, filling defaults for anything missing."""
    player = raw.get("player")
    if not isinstance(player, dict):
        raise SaveLoadError("Save has no player record.")

    try:
        raw_settings = raw.get("settings") or {}
        settings = GameSettings(
            auto_save_interval_seconds=float(raw_settings.get("auto_save_interval_seconds", 30.0)),
            match_interval_seconds=float(raw_settings.get("match_interval_seconds", 60.0)),
            notifications_enabled=bool(raw_settings.get("notifications_enabled", True)),
        )
        raw_resources = raw.get("resources") or {}
        raw_contract = raw.get("contract") or {}
        return GameState(
            player=_player_from_dict(player),
            resources=Resources(
                money=float(raw_resources.get("money", 1000.0)),
                training_points=float(raw_resources.get("training_points", 0.0)),
                fame=float(raw_resources.get("fame", 0.0)),
                contract_tokens=int(raw_resources.get("contract_tokens", 0)),
                xp=float(raw_resources.get("xp", 0.0)),
            ),
            training=_training_from_dict(raw.get("training") or {}),
            contract=Contract(
                years_remaining=int(raw_contract.get("years_remaining", 4)),
                salary_per_game=float(raw_contract.get("salary_per_game", 50000.0)),
                signing_bonus=float(raw_contract.get("signing_bonus", 500000.0)),
            ),
            season=_season_from_dict(raw.get("season") or {}, settings.match_interval_seconds),
            purchased_upgrades=[
                PurchasedUpgrade(
                    upgrade_id=str(p.get("upgrade_id", "")),
                    level=int(p.get("level", 1)),
                    purchased_at=float(p.get("purchased_at", 0.0)),
                )
                for p in raw.get("purchased_upgrades") or []
                if isinstance(p, dict) and p.get("upgrade_id")
            ],
            unlocked_drills=[str(d) for d in raw.get("unlocked_drills") or []],
            legacy=_legacy_from_dict(raw.get("legacy") or {}),
            settings=settings,
            version=int(raw.get("version", SAVE_VERSION)),
            last_save_time=float(raw.get("last_save_time", 0.0)),
            last_tick_time=float(raw.get("last_tick_time", 0.0)),
        )
    except SaveLoadError:
        raise
    except (AttributeError, TypeError, ValueError) as exc:
        raise SaveLoadError(f"Malformed save data ({exc}).") from exc


class SaveManager:
    """One career save on disk, with a .bak copy of the previous write."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.last_error = ""

    @property
    def backup_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".bak")

    def has_save(self) -> bool:
        return self.path.exists()

    def save(self, state: GameState, now: float | None = None) -> bool:
        """Best-effort snapshot. A failed write is logged and skipped, never retried here."""
        previous = state.last_save_time
        state.last_save_time = time.time() if now is None else now
        try:
            payload = json.dumps(state_to_dict(state), indent=2)
            self._write_with_backup(payload)
        except (OSError, TypeError, ValueError) as exc:
            state.last_save_time = previous
            self.last_error = f"Failed to save career ({exc})."
            logger.warning("Skipped save to %s: %s", self.path, exc)
            return False
        self.last_error = ""
        return True

    def _write_with_backup(self, payload: str) -> None:
        if self.path.exists():
            try:
                shutil.copy2(self.path, self.backup_path)
            except OSError:
                pass
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")

    def load(self) -> GameState | None:
        """None when there is no save; SaveLoadError when there is one we cannot use."""
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise SaveLoadError(f"Failed to read save ({exc}).") from exc
        return state_from_dict(migrate(raw))

    def clear(self) -> None:
        for path in (self.path, self.backup_path):
            try:
                path.unlink()
            except FileNotFoundError:
                pass
