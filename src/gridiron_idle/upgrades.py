from __future__ import annotations

import time
from dataclasses import dataclass

from .catalog import (
    ATTRIBUTE_KEYS,
    DRILL_DEFINITIONS,
    UPGRADE_DEFINITIONS,
    DrillDefinition,
    UpgradeDefinition,
    get_drill,
    get_upgrade,
)
from .config import MAX_TRAINING_SLOTS
from .models import ActiveDrill, GameState, PurchasedUpgrade
from .ratings import attribute_upgrade_cost, refresh_rating
from .training import TrainingEngine

CURRENCY_LABELS = {"money": "money", "contract_tokens": "contract tokens"}


@dataclass(slots=True)
class CommandResult:
    success: bool
    message: str


@dataclass(slots=True)
class UpgradeStatus:
    definition: UpgradeDefinition
    current_level: int
    locked: bool
    maxed: bool
    cost: float
    can_afford: bool


@dataclass(slots=True)
class DrillStatus:
    definition: DrillDefinition
    unlocked: bool
    active: bool
    season_locked: bool
    can_afford: bool


class UpgradeSystem:
    """
    Spending side of the game: upgrades, attribute levels, drill slots.

    Every command returns a CommandResult and leaves the state untouched when it fails.
    Slot unlocks, attribute bonuses and drill multipliers are applied at purchase time;
    passive income and match bonuses are summed by their consumers when needed.
    """

    def __init__(self, training: TrainingEngine | None = None) -> None:
        self.training = training or TrainingEngine()

    def purchase_upgrade(self, state: GameState, upgrade_id: str, now: float | None = None) -> CommandResult:
        definition = get_upgrade(upgrade_id)
        if definition is None:
            return CommandResult(False, "Unknown upgrade.")
        if not definition.allows_position(state.player.position):
            return CommandResult(False, f"{definition.name} is not available for your position.")
        if state.season.season_number < definition.unlock_season:
            return CommandResult(False, f"Unlocks in Season {definition.unlock_season}.")
        if state.resources.fame < definition.unlock_fame:
            return CommandResult(False, f"Requires {definition.unlock_fame:g} fame.")

        record = state.purchase_for(upgrade_id)
        current_level = record.level if record is not None else 0
        if current_level >= definition.max_level:
            return CommandResult(False, "Already at max level.")

        cost = definition.cost_for_level(current_level)
        if state.resources.balance(definition.currency) < cost:
            return CommandResult(False, f"Not enough {CURRENCY_LABELS[definition.currency]}.")

        state.resources.debit(definition.currency, cost)
        stamp = time.time() if now is None else now
        if record is None:
            record = PurchasedUpgrade(upgrade_id=upgrade_id, level=1, purchased_at=stamp)
            state.purchased_upgrades.append(record)
        else:
            record.level += 1
            record.purchased_at = stamp

        self._apply_effect(state, definition)
        return CommandResult(True, f"Purchased {definition.name} (Level {record.level})!")

    def _apply_effect(self, state: GameState, definition: UpgradeDefinition) -> None:
        effect = definition.effect
        if effect.kind == "slot_unlock":
            state.training.max_slots = min(MAX_TRAINING_SLOTS, state.training.max_slots + int(effect.magnitude))
            state.training.resize()
        elif effect.kind == "attribute_bonus" and effect.target_attribute:
            attrs = state.player.attributes
            attrs.set(effect.target_attribute, attrs.get(effect.target_attribute) + int(effect.magnitude))
            refresh_rating(state.player)
        elif effect.kind == "drill_multiplier":
            self.training.recompute_coach_multipliers(state)
        # passive_income and match_bonus are read live.

    def upgrade_attribute(self, state: GameState, attribute: str) -> CommandResult:
        if attribute not in ATTRIBUTE_KEYS:
            return CommandResult(False, f"Unknown attribute '{attribute}'.")
        current_level = state.player.attributes.get(attribute)
        cost = attribute_upgrade_cost(attribute, current_level)
        if state.resources.training_points < cost:
            return CommandResult(False, f"Need {cost} TP to train {attribute}.")

        state.resources.training_points -= cost
        state.player.attributes.set(attribute, current_level + 1)
        refresh_rating(state.player)
        return CommandResult(True, f"{attribute} raised to {current_level + 1}. Rating {state.player.rating}.")

    def assign_drill(self, state: GameState, drill_id: str, slot_index: int | None = None) -> CommandResult:
        drill = get_drill(drill_id)
        if drill is None:
            return CommandResult(False, "Unknown drill.")
        if drill_id not in state.unlocked_drills:
            return CommandResult(False, f"{drill.name} is not unlocked yet.")
        if state.training.has_drill(drill_id):
            return CommandResult(False, f"{drill.name} is already running.")

        if slot_index is None:
            slot_index = state.training.first_free_slot()
            if slot_index is None:
                return CommandResult(False, "All training slots are full.")
        elif not 0 <= slot_index < len(state.training.slots):
            return CommandResult(False, f"Slot {slot_index} does not exist.")
        elif state.training.slots[slot_index] is not None:
            return CommandResult(False, f"Slot {slot_index} is occupied.")

        state.training.slots[slot_index] = ActiveDrill(slot_index=slot_index, drill_id=drill_id)
        self.training.recompute_coach_multipliers(state)
        return CommandResult(True, f"{drill.name} assigned to slot {slot_index}.")

    def remove_drill(self, state: GameState, slot_index: int) -> CommandResult:
        if not 0 <= slot_index < len(state.training.slots):
            return CommandResult(False, f"Slot {slot_index} does not exist.")
        slot = state.training.slots[slot_index]
        if slot is None:
            return CommandResult(False, f"Slot {slot_index} is already empty.")
        state.training.slots[slot_index] = None
        drill = get_drill(slot.drill_id)
        name = drill.name if drill is not None else slot.drill_id
        return CommandResult(True, f"{name} removed from slot {slot_index}.")

    def unlock_drill(self, state: GameState, drill_id: str) -> CommandResult:
        drill = get_drill(drill_id)
        if drill is None:
            return CommandResult(False, "Unknown drill.")
        if drill_id in state.unlocked_drills:
            return CommandResult(False, f"{drill.name} is already unlocked.")
        if state.season.season_number < drill.unlock_season:
            return CommandResult(False, f"Unlocks in Season {drill.unlock_season}.")
        if state.resources.money < drill.cost:
            return CommandResult(False, "Not enough money.")

        state.resources.money -= drill.cost
        state.unlocked_drills.append(drill_id)
        return CommandResult(True, f"Unlocked {drill.name}.")

    def upgrade_statuses(self, state: GameState) -> list[UpgradeStatus]:
        """Every upgrade the player's position can buy, with its current gate and price."""
        statuses: list[UpgradeStatus] = []
        for definition in UPGRADE_DEFINITIONS:
            if not definition.allows_position(state.player.position):
                continue
            level = state.upgrade_level(definition.id)
            cost = definition.cost_for_level(level)
            statuses.append(
                UpgradeStatus(
                    definition=definition,
                    current_level=level,
                    locked=(
                        state.season.season_number < definition.unlock_season
                        or state.resources.fame < definition.unlock_fame
                    ),
                    maxed=level >= definition.max_level,
                    cost=cost,
                    can_afford=state.resources.balance(definition.currency) >= cost,
                )
            )
        return statuses

    def available_upgrades(self, state: GameState) -> list[UpgradeStatus]:
        return [s for s in self.upgrade_statuses(state) if not s.locked and not s.maxed]

    def locked_upgrades(self, state: GameState) -> list[UpgradeStatus]:
        return [s for s in self.upgrade_statuses(state) if s.locked]

    def maxed_upgrades(self, state: GameState) -> list[UpgradeStatus]:
        return [s for s in self.upgrade_statuses(state) if s.maxed]

    def drill_statuses(self, state: GameState) -> list[DrillStatus]:
        return [
            DrillStatus(
                definition=drill,
                unlocked=drill.id in state.unlocked_drills,
                active=state.training.has_drill(drill.id),
                season_locked=state.season.season_number < drill.unlock_season,
                can_afford=state.resources.money >= drill.cost,
            )
            for drill in DRILL_DEFINITIONS
        ]
