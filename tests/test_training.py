import pytest

from gridiron_idle.endorsements import EndorsementSystem
from gridiron_idle.models import ActiveDrill, PurchasedUpgrade
from gridiron_idle.state import create_new_game_state
from gridiron_idle.training import TrainingEngine, global_multiplier


def _single_drill_state(drill_id: str = "sprint_track"):
    state = create_new_game_state("Trainee", "QB", now=0.0)
    state.training.slots = [ActiveDrill(slot_index=0, drill_id=drill_id), None, None]
    return state


def test_single_slot_tick_accrues_base_rate_times_delta() -> None:
    state = _single_drill_state()
    gained = TrainingEngine().tick(state, 2.0)
    assert gained == pytest.approx(1.0)
    assert state.resources.training_points == pytest.approx(1.0)
    assert state.training.slots[0].accumulated_tp == pytest.approx(1.0)


def test_offline_efficiency_scales_gain() -> None:
    state = _single_drill_state()
    TrainingEngine().tick(state, 4.0, efficiency=0.5)
    assert state.resources.training_points == pytest.approx(1.0)


def test_rate_per_second_sums_active_slots() -> None:
    state = create_new_game_state("Trainee", "QB", now=0.0)
    # sprint_track 0.5, weight_room_basic 0.4, film_study 0.35
    assert TrainingEngine().rate_per_second(state) == pytest.approx(1.25)


def test_global_multiplier_combines_legacy_and_untargeted_upgrades() -> None:
    state = _single_drill_state()
    state.legacy.tp_multiplier = 1.2
    state.purchased_upgrades.append(PurchasedUpgrade("nutrition_plan", level=2))
    state.purchased_upgrades.append(PurchasedUpgrade("speed_coach", level=1))
    assert global_multiplier(state) == pytest.approx(1.2 * 1.3)


def test_coach_multiplier_only_applies_to_matching_drill_type() -> None:
    state = create_new_game_state("Trainee", "QB", now=0.0)
    state.purchased_upgrades.append(PurchasedUpgrade("speed_coach", level=2))
    engine = TrainingEngine()
    engine.recompute_coach_multipliers(state)
    by_drill = {slot.drill_id: slot.coach_multiplier for slot in state.training.active()}
    assert by_drill["sprint_track"] == pytest.approx(1.5)
    assert by_drill["weight_room_basic"] == pytest.approx(1.0)


def test_endorsement_income_uses_money_multiplier() -> None:
    state = _single_drill_state()
    state.legacy.money_multiplier = 1.15
    state.purchased_upgrades.append(PurchasedUpgrade("local_sponsor", level=3))
    system = EndorsementSystem()
    assert system.rate(state) == pytest.approx(1.15 * 300 / 60)
    before = state.resources.money
    system.tick(state, 60.0)
    assert state.resources.money - before == pytest.approx(345.0)
