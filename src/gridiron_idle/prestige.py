from __future__ import annotations

from dataclasses import replace

from .awards import AwardSystem
from .catalog import POSITIONS
from .config import MIN_RETIREMENT_SEASON
from .models import RETIRED, GameState, LegacyState, RetiredPlayerRecord
from .state import create_new_game_state

TP_MULTIPLIER_PER_PRESTIGE = 0.2
MONEY_MULTIPLIER_PER_PRESTIGE = 0.15
RATING_BONUS_PER_PRESTIGE = 2
MAX_STARTING_RATING_BONUS = 10


def legacy_bonuses(prestige_count: int) -> tuple[float, float, int]:
    """(tp_multiplier, money_multiplier, starting_rating_bonus) for a prestige count."""
    return (
        1 + TP_MULTIPLIER_PER_PRESTIGE * prestige_count,
        1 + MONEY_MULTIPLIER_PER_PRESTIGE * prestige_count,
        min(MAX_STARTING_RATING_BONUS, RATING_BONUS_PER_PRESTIGE * prestige_count),
    )


class PrestigeEngine:
    def __init__(self, awards: AwardSystem | None = None) -> None:
        self.awards = awards or AwardSystem()

    def can_retire(self, state: GameState) -> bool:
        return state.season.season_number >= MIN_RETIREMENT_SEASON

    def retire(self, state: GameState, new_name: str, new_position: str, now: float | None = None) -> GameState:
        """
        End the current career and start the next one.

        The outgoing state is marked Retired; the returned state is a brand-new
        career that only inherits the legacy block.
        """
        if new_position not in POSITIONS:
            raise ValueError(f"Unknown position '{new_position}'")

        self.awards.archive_awards(state)
        old = state.legacy
        count = old.prestige_count + 1
        tp_multiplier, money_multiplier, rating_bonus = legacy_bonuses(count)

        legacy = LegacyState(
            prestige_count=count,
            tp_multiplier=tp_multiplier,
            money_multiplier=money_multiplier,
            starting_rating_bonus=rating_bonus,
            career_awards=list(old.career_awards),
            retired_players=[replace(r, awards=list(r.awards)) for r in old.retired_players],
        )
        legacy.retired_players.append(
            RetiredPlayerRecord(
                name=state.player.name,
                position=state.player.position,
                rating=state.player.rating,
                seasons=state.season.season_number,
                awards=list(state.season.awards_earned),
            )
        )

        state.season.phase = RETIRED
        state.season.game_in_progress = False
        return create_new_game_state(new_name, new_position, legacy=legacy, now=now)
