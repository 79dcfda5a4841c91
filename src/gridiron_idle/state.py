from __future__ import annotations

import time

from .catalog import POSITIONS, starting_drill_ids
from .config import STARTING_TRAINING_SLOTS
from .models import ActiveDrill, GameState, LegacyState, Player, TrainingState
from .ratings import refresh_rating, starting_attributes


def create_player(name: str, position: str, legacy_bonus: int = 0) -> Player:
    player = Player(name=name, position=position, attributes=starting_attributes(position, legacy_bonus))
    refresh_rating(player)
    return player


def create_training(position: str) -> TrainingState:
    slots: list[ActiveDrill | None] = [
        ActiveDrill(slot_index=idx, drill_id=drill_id)
        for idx, drill_id in enumerate(starting_drill_ids(position)[:STARTING_TRAINING_SLOTS])
    ]
    return TrainingState(max_slots=STARTING_TRAINING_SLOTS, slots=slots)


def create_new_game_state(
    name: str,
    position: str,
    legacy: LegacyState | None = None,
    now: float | None = None,
) -> GameState:
    if position not in POSITIONS:
        raise ValueError(f"Unknown position '{position}'")
    legacy = legacy or LegacyState()
    now = time.time() if now is None else now
    return GameState(
        player=create_player(name, position, legacy.starting_rating_bonus),
        training=create_training(position),
        unlocked_drills=starting_drill_ids(position),
        legacy=legacy,
        last_save_time=now,
        last_tick_time=now,
    )
