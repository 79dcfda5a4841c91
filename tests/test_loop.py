import random

import pytest

from gridiron_idle.loop import GameLoop
from gridiron_idle.persistence import SaveManager
from gridiron_idle.season import SeasonEngine
from gridiron_idle.state import create_new_game_state


def _loop(save_manager=None, **kwargs) -> GameLoop:
    state = create_new_game_state("Looper", "QB", now=0.0)
    return GameLoop(state, save_manager, season=SeasonEngine(rng=random.Random(21)), **kwargs)


def test_two_minutes_of_ticks_play_two_matches() -> None:
    loop = _loop()
    matches = 0
    for second in range(1, 121):
        if loop.tick(1.0, now=float(second)).match is not None:
            matches += 1
    assert matches == 2
    assert len(loop.state.season.match_history) == 2
    assert loop.state.season.current_week == 3
    assert loop.state.last_tick_time == 120.0


def test_delta_is_clamped_to_five_seconds() -> None:
    loop = _loop()
    result = loop.tick(3_600.0, now=1.0)
    assert result.delta == 5.0
    assert loop.state.season.week_timer == 55.0
    assert loop.state.season.match_history == []


def test_training_and_income_accrue_each_tick() -> None:
    loop = _loop()
    loop.tick(2.0, now=2.0)
    assert loop.state.resources.training_points == pytest.approx(2.5)


def test_notifications_reach_callback() -> None:
    received: list[list[str]] = []
    loop = _loop(on_notifications=received.append)
    for second in range(1, 61):
        loop.tick(1.0, now=float(second))
    assert received[0][0].startswith("Game in progress vs")
    assert received[-1][0].startswith("Game complete:")


def test_autosave_fires_on_interval(tmp_path) -> None:
    manager = SaveManager(tmp_path / "career.json")
    loop = _loop(manager)
    saves = [loop.tick(1.0, now=float(second)).saved for second in range(1, 61)]
    assert saves.count(True) == 2
    assert saves[29] is True
    assert manager.has_save()
    assert loop.state.last_save_time == 60.0


def test_failed_autosave_does_not_stop_simulation(tmp_path) -> None:
    manager = SaveManager(tmp_path)
    loop = _loop(manager)
    for second in range(1, 61):
        result = loop.tick(1.0, now=float(second))
        assert result.saved is False
    assert loop.state.season.games_played == 1
    assert manager.last_error


def test_set_state_swaps_career() -> None:
    loop = _loop()
    fresh = create_new_game_state("Next Up", "S", now=0.0)
    loop.set_state(fresh)
    loop.tick(1.0, now=1.0)
    assert loop.state is fresh
    assert fresh.season.week_timer == 59.0
