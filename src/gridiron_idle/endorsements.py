from __future__ import annotations

from .catalog import get_upgrade
from .models import GameState


class EndorsementSystem:
    """Passive money from purchased endorsement deals."""

    def rate(self, state: GameState) -> float:
        per_second = 0.0
        for record in state.purchased_upgrades:
            definition = get_upgrade(record.upgrade_id)
            if definition is None or definition.effect.kind != "passive_income":
                continue
            per_second += definition.effect.magnitude * record.level
        return state.legacy.money_multiplier * per_second

    def tick(self, state: GameState, delta: float) -> float:
        earned = self.rate(state) * delta
        state.resources.money += earned
        return earned
