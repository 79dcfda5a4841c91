import random

from gridiron_idle.awards import CHAMPIONSHIP, CHAMPIONSHIP_MVP, LEAGUE_MVP, PRO_BOWL, ROOKIE_OF_YEAR
from gridiron_idle.models import OFF_SEASON, PLAYOFFS, REGULAR_SEASON, MatchResult, PlayerGameStats
from gridiron_idle.season import SeasonEngine
from gridiron_idle.state import create_new_game_state


class FixedMatchEngine:
    def __init__(self, win: bool, performance: float = 60.0) -> None:
        self.win = win
        self.performance = performance

    def simulate_match(self, state) -> MatchResult:
        return MatchResult(
            week=state.season.current_week,
            season=state.season.season_number,
            opponent=state.season.current_opponent or "Jets",
            stats=PlayerGameStats(),
            team_score=24 if self.win else 10,
            opponent_score=10 if self.win else 24,
            win=self.win,
            xp_earned=100,
            money_earned=1000,
            fame_earned=5,
            performance_score=self.performance,
        )


def _final_week_state(wins: int):
    state = create_new_game_state("Closer", "QB", now=0.0)
    state.season.current_week = 17
    state.season.wins = wins
    state.season.losses = 16 - wins
    return state


def test_week_17_with_nine_wins_reaches_playoffs() -> None:
    state = _final_week_state(wins=9)
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=False))
    engine.advance_week(state)
    assert state.season.phase == PLAYOFFS
    assert state.season.playoff_round == 1
    assert state.season.current_week == 18
    assert state.resources.contract_tokens == 1


def test_week_17_with_eight_wins_goes_to_off_season() -> None:
    state = _final_week_state(wins=8)
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=False))
    engine.advance_week(state)
    assert state.season.phase == OFF_SEASON
    assert state.season.playoff_round is None
    assert state.player.age == 23
    assert state.resources.contract_tokens == 1


def test_match_result_updates_record_and_resources() -> None:
    state = create_new_game_state("Earner", "QB", now=0.0)
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=True))
    result = engine.advance_week(state)
    assert result is not None
    assert state.season.record == "1-0"
    assert state.season.current_week == 2
    assert state.season.match_history == [result]
    assert state.resources.money == 2000.0
    assert state.resources.xp == 100
    assert state.player.total_xp == 100
    assert state.player.fame == 5


def test_dominant_rookie_season_earns_every_regular_season_award() -> None:
    state = create_new_game_state("Phenom", "QB", now=0.0)
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=True, performance=90.0))
    for _ in range(17):
        engine.advance_week(state)
    assert state.season.phase == PLAYOFFS
    assert state.season.awards_earned == [PRO_BOWL, LEAGUE_MVP, ROOKIE_OF_YEAR]


def test_average_season_earns_no_awards() -> None:
    state = create_new_game_state("Journeyman", "QB", now=0.0)
    state.season.season_number = 2
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=False, performance=60.0))
    for _ in range(17):
        engine.advance_week(state)
    assert state.season.phase == OFF_SEASON
    assert state.season.awards_earned == []


def test_winning_final_round_awards_championship() -> None:
    state = create_new_game_state("Champ", "QB", now=0.0)
    state.season.phase = PLAYOFFS
    state.season.playoff_round = 1
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=True, performance=80.0))
    engine.advance_week(state)
    assert state.season.playoff_round == 2
    engine.advance_week(state)
    assert state.season.playoff_round == 3
    engine.advance_week(state)
    assert state.season.phase == OFF_SEASON
    assert state.season.awards_earned == [CHAMPIONSHIP, CHAMPIONSHIP_MVP]


def test_championship_without_mvp_performance() -> None:
    state = create_new_game_state("Role Player", "QB", now=0.0)
    state.season.phase = PLAYOFFS
    state.season.playoff_round = 3
    SeasonEngine(match_engine=FixedMatchEngine(win=True, performance=75.0)).advance_week(state)
    assert state.season.awards_earned == [CHAMPIONSHIP]


def test_playoff_loss_ends_season() -> None:
    state = create_new_game_state("Bounced", "QB", now=0.0)
    state.season.phase = PLAYOFFS
    state.season.playoff_round = 2
    SeasonEngine(match_engine=FixedMatchEngine(win=False)).advance_week(state)
    assert state.season.phase == OFF_SEASON
    assert state.season.awards_earned == []


def test_tick_pre_selects_opponent_then_plays_against_it() -> None:
    state = create_new_game_state("Ticker", "QB", now=0.0)
    engine = SeasonEngine(rng=random.Random(11))

    assert engine.tick(state, 40.0) is None
    assert state.season.game_in_progress is False

    assert engine.tick(state, 5.0) is None
    assert state.season.game_in_progress is True
    opponent = state.season.current_opponent
    assert opponent is not None

    result = engine.tick(state, 15.0)
    assert result is not None
    assert result.opponent == opponent
    assert state.season.game_in_progress is False
    assert state.season.current_opponent is None
    assert state.season.current_week == 2
    assert state.season.week_timer == state.settings.match_interval_seconds

    messages = engine.drain_notifications()
    assert messages[0] == f"Game in progress vs {opponent}..."
    assert messages[1].startswith("Game complete:")
    assert engine.drain_notifications() == []


def test_off_season_freezes_timer() -> None:
    state = create_new_game_state("Resting", "QB", now=0.0)
    state.season.phase = OFF_SEASON
    state.season.week_timer = 12.0
    assert SeasonEngine().tick(state, 30.0) is None
    assert state.season.week_timer == 12.0
    assert state.season.match_history == []


def test_notifications_can_be_disabled() -> None:
    state = create_new_game_state("Quiet", "QB", now=0.0)
    state.settings.notifications_enabled = False
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=True))
    engine.advance_week(state)
    assert engine.drain_notifications() == []


def test_engines_do_not_share_notification_queues() -> None:
    state = create_new_game_state("Isolated", "QB", now=0.0)
    first = SeasonEngine(match_engine=FixedMatchEngine(win=True))
    second = SeasonEngine(match_engine=FixedMatchEngine(win=True))
    first.advance_week(state)
    assert second.drain_notifications() == []
    assert len(first.drain_notifications()) == 1


def test_advance_to_next_season_resets_season_fields() -> None:
    state = _final_week_state(wins=3)
    engine = SeasonEngine(match_engine=FixedMatchEngine(win=False))
    engine.advance_week(state)
    assert state.season.phase == OFF_SEASON

    engine.advance_to_next_season(state)
    assert state.season.season_number == 2
    assert state.season.phase == REGULAR_SEASON
    assert state.season.current_week == 1
    assert state.season.record == "0-0"
    assert state.season.match_history == []
    assert state.season.week_timer == state.settings.match_interval_seconds
