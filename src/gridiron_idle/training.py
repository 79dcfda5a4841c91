from __future__ import annotations

from .catalog import DrillDefinition, get_drill, get_upgrade
from .models import GameState


def global_multiplier(state: GameState) -> float:
    """Legacy TP multiplier scaled by every untargeted drill-multiplier upgrade."""
    bonus = 0.0
    for record in state.purchased_upgrades:
        definition = get_upgrade(record.upgrade_id)
        if definition is None:
            continue
        effect = definition.effect
        if effect.kind == "drill_multiplier" and effect.target_drill_type is None:
            bonus += effect.magnitude * record.level
    return state.legacy.tp_multiplier * (1.0 + bonus)


def coach_multiplier_for(state: GameState, drill: DrillDefinition) -> float:
    multiplier = 1.0
    for record in state.purchased_upgrades:
        definition = get_upgrade(record.upgrade_id)
        if definition is None:
            continue
        effect = definition.effect
        if effect.kind == "drill_multiplier" and effect.target_drill_type == drill.drill_type:
            multiplier += effect.magnitude * record.level
    return multiplier


class TrainingEngine:
    def tick(self, state: GameState, delta: float, efficiency: float = 1.0) -> float:
        """Accrue training points from every occupied slot. Returns the TP gained."""
        multiplier = global_multiplier(state)
        gained_total = 0.0
        for slot in state.training.active():
            drill = get_drill(slot.drill_id)
            if drill is None:
                continue
            rate = drill.base_rate * slot.coach_multiplier * multiplier
            gained = rate * delta * efficiency
            state.resources.training_points += gained
            slot.accumulated_tp += gained
            gained_total += gained
        return gained_total

    def recompute_coach_multipliers(self, state: GameState) -> None:
        # Cached per slot; callers must invoke this after an assignment or a coach purchase.
        for slot in state.training.active():
            drill = get_drill(slot.drill_id)
            if drill is None:
                continue
            slot.coach_multiplier = coach_multiplier_for(state, drill)

    def rate_per_second(self, state: GameState) -> float:
        multiplier = global_multiplier(state)
        total = 0.0
        for slot in state.training.active():
            drill = get_drill(slot.drill_id)
            if drill is None:
                continue
            total += drill.base_rate * slot.coach_multiplier * multiplier
        return total
