from __future__ import annotations

from .models import GameState

PRO_BOWL = "ProBowl"
LEAGUE_MVP = "MVP"
ROOKIE_OF_YEAR = "RookieOfYear"
CHAMPIONSHIP = "SuperBowlChamp"
CHAMPIONSHIP_MVP = "SuperBowlMVP"

AWARD_LABELS: dict[str, str] = {
    PRO_BOWL: "Pro Bowl",
    LEAGUE_MVP: "League MVP",
    ROOKIE_OF_YEAR: "Rookie of the Year",
    CHAMPIONSHIP: "Super Bowl Champion",
    CHAMPIONSHIP_MVP: "Super Bowl MVP",
}

PRO_BOWL_MIN_AVG = 70.0
MVP_MIN_AVG = 85.0
MVP_MIN_WIN_PCT = 0.7
ROOKIE_MIN_AVG = 55.0
CHAMPIONSHIP_MVP_MIN_PERF = 75.0


class AwardSystem:
    def season_awards(self, state: GameState) -> list[str]:
        return list(state.season.awards_earned)

    def all_career_awards(self, state: GameState) -> list[str]:
        return [*state.legacy.career_awards, *state.season.awards_earned]

    def archive_awards(self, state: GameState) -> list[str]:
        """Fold this season's awards into the legacy list; a kind is only recorded once."""
        added: list[str] = []
        for award in state.season.awards_earned:
            if award not in state.legacy.career_awards:
                state.legacy.career_awards.append(award)
                added.append(award)
        return added

    def label(self, award: str) -> str:
        return AWARD_LABELS.get(award, award)
