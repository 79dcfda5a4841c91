"""
Position-weighted overall rating.
Single source of truth for a player's rating: a weighted average of attributes,
clamped to 40-99. Rating is never stored independently of the attributes.
"""
from __future__ import annotations

import math

from .catalog import ATTRIBUTE_KEYS
from .models import Attributes, Player

RATING_MIN = 40
RATING_MAX = 99
BASE_ATTRIBUTE = 40
HEAD_START_SCALE = 20
ATTRIBUTE_COST_GROWTH = 1.15

POSITION_WEIGHTS: dict[str, dict[str, float]] = {
    "QB": {
        "throw_accuracy": 0.30,
        "throw_power": 0.20,
        "awareness": 0.20,
        "mobility": 0.15,
        "speed": 0.10,
        "stamina": 0.05,
    },
    "WR": {
        "speed": 0.30,
        "catching": 0.30,
        "route_running": 0.25,
        "stamina": 0.10,
        "awareness": 0.05,
    },
    "TE": {
        "catching": 0.25,
        "strength": 0.20,
        "route_running": 0.20,
        "speed": 0.15,
        "stamina": 0.10,
        "awareness": 0.10,
    },
    "RB": {
        "speed": 0.25,
        "elusiveness": 0.25,
        "ball_carrying": 0.20,
        "strength": 0.15,
        "stamina": 0.10,
        "awareness": 0.05,
    },
    "LB": {
        "tackle": 0.30,
        "pursuit": 0.25,
        "strength": 0.20,
        "awareness": 0.15,
        "stamina": 0.10,
    },
    "CB": {
        "coverage": 0.35,
        "speed": 0.30,
        "awareness": 0.20,
        "tackle": 0.10,
        "stamina": 0.05,
    },
    "S": {
        "coverage": 0.25,
        "awareness": 0.25,
        "speed": 0.20,
        "tackle": 0.20,
        "stamina": 0.10,
    },
}

ATTRIBUTE_BASE_COSTS: dict[str, int] = {
    "speed": 15,
    "strength": 12,
    "stamina": 10,
    "awareness": 20,
    "throw_power": 14,
    "throw_accuracy": 18,
    "mobility": 13,
    "catching": 14,
    "route_running": 16,
    "ball_carrying": 13,
    "elusiveness": 15,
    "tackle": 13,
    "coverage": 16,
    "pursuit": 12,
}


def compute_rating(attributes: Attributes, position: str) -> int:
    """Weighted average of the position's attributes, rounded and clamped to 40-99."""
    weights = POSITION_WEIGHTS.get(position, {})
    total = 0.0
    weight_sum = 0.0
    for attr, weight in weights.items():
        total += attributes.get(attr, 50) * weight
        weight_sum += weight
    if weight_sum == 0:
        return 50
    # Halves round up.
    return math.floor(min(RATING_MAX, max(RATING_MIN, total / weight_sum)) + 0.5)


def refresh_rating(player: Player) -> int:
    player.rating = compute_rating(player.attributes, player.position)
    return player.rating


def starting_attributes(position: str, legacy_bonus: int = 0) -> Attributes:
    base = BASE_ATTRIBUTE + legacy_bonus
    attrs = Attributes(**{key: base for key in ATTRIBUTE_KEYS})
    # Position-relevant attributes get a small head start.
    for attr, weight in POSITION_WEIGHTS.get(position, {}).items():
        attrs.set(attr, round(base + weight * HEAD_START_SCALE))
    return attrs


def attribute_upgrade_cost(attribute: str, current_level: int) -> int:
    base = ATTRIBUTE_BASE_COSTS.get(attribute, 15)
    return math.floor(base * ATTRIBUTE_COST_GROWTH ** (current_level - BASE_ATTRIBUTE))
