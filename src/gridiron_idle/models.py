from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4

from .config import (
    DEFAULT_AUTOSAVE_INTERVAL_SECONDS,
    DEFAULT_MATCH_INTERVAL_SECONDS,
    PLAYER_STARTING_AGE,
    SAVE_VERSION,
    STARTING_MONEY,
    STARTING_TRAINING_SLOTS,
)

REGULAR_SEASON = "RegularSeason"
PLAYOFFS = "Playoffs"
OFF_SEASON = "OffSeason"
RETIRED = "Retired"
ACTIVE_PHASES = {REGULAR_SEASON, PLAYOFFS}
PHASES = (REGULAR_SEASON, PLAYOFFS, OFF_SEASON, RETIRED)


@dataclass(slots=True)
class Attributes:
    """Every position carries the full attribute set; unweighted ones just don't count."""

    speed: int = 40
    strength: int = 40
    stamina: int = 40
    awareness: int = 40
    throw_power: int = 40
    throw_accuracy: int = 40
    mobility: int = 40
    catching: int = 40
    route_running: int = 40
    ball_carrying: int = 40
    elusiveness: int = 40
    tackle: int = 40
    coverage: int = 40
    pursuit: int = 40

    def get(self, key: str, default: int = 50) -> int:
        return getattr(self, key, default)

    def set(self, key: str, value: int) -> None:
        if not hasattr(self, key):
            raise KeyError(f"Unknown attribute '{key}'")
        setattr(self, key, value)

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


@dataclass(slots=True)
class Player:
    name: str
    position: str
    attributes: Attributes = field(default_factory=Attributes)
    player_id: str = field(default_factory=lambda: uuid4().hex[:8])
    age: int = PLAYER_STARTING_AGE
    rating: int = 50
    total_xp: int = 0
    fame: int = 0


@dataclass(slots=True)
class Resources:
    money: float = STARTING_MONEY
    training_points: float = 0.0
    fame: float = 0.0
    contract_tokens: int = 0
    xp: float = 0.0

    def balance(self, currency: str) -> float:
        if currency == "contract_tokens":
            return self.contract_tokens
        return self.money

    def debit(self, currency: str, amount: float) -> None:
        if currency == "contract_tokens":
            self.contract_tokens -= int(amount)
        else:
            self.money -= amount


@dataclass(slots=True)
class ActiveDrill:
    slot_index: int
    drill_id: str
    accumulated_tp: float = 0.0
    coach_multiplier: float = 1.0


@dataclass(slots=True)
class TrainingState:
    max_slots: int = STARTING_TRAINING_SLOTS
    slots: list[ActiveDrill | None] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.resize()

    def resize(self) -> None:
        while len(self.slots) < self.max_slots:
            self.slots.append(None)
        del self.slots[self.max_slots:]

    def active(self) -> list[ActiveDrill]:
        return [slot for slot in self.slots if slot is not None]

    def first_free_slot(self) -> int | None:
        for idx, slot in enumerate(self.slots):
            if slot is None:
                return idx
        return None

    def has_drill(self, drill_id: str) -> bool:
        return any(slot.drill_id == drill_id for slot in self.active())


@dataclass(slots=True)
class Contract:
    years_remaining: int = 4
    salary_per_game: float = 50000.0
    signing_bonus: float = 500000.0


@dataclass(slots=True)
class PlayerGameStats:
    # Offense
    passing_yards: int = 0
    passing_tds: int = 0
    interceptions: int = 0
    completion_pct: float = 0.0
    rushing_yards: int = 0
    rushing_tds: int = 0
    receptions: int = 0
    receiving_yards: int = 0
    receiving_tds: int = 0
    # Defense
    tackles: int = 0
    sacks: int = 0
    defensive_interceptions: int = 0


@dataclass(slots=True)
class MatchResult:
    week: int
    season: int
    opponent: str
    stats: PlayerGameStats
    team_score: int
    opponent_score: int
    win: bool
    xp_earned: int
    money_earned: int
    fame_earned: int
    performance_score: float

    @property
    def score_line(self) -> str:
        return f"{self.team_score}-{self.opponent_score}"


@dataclass(slots=True)
class SeasonState:
    season_number: int = 1
    current_week: int = 1
    phase: str = REGULAR_SEASON
    wins: int = 0
    losses: int = 0
    playoff_round: int | None = None
    match_history: list[MatchResult] = field(default_factory=list)
    awards_earned: list[str] = field(default_factory=list)
    week_timer: float = DEFAULT_MATCH_INTERVAL_SECONDS
    game_in_progress: bool = False
    current_opponent: str | None = None

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"

    @property
    def average_performance(self) -> float:
        if not self.match_history:
            return 0.0
        return sum(m.performance_score for m in self.match_history) / len(self.match_history)


@dataclass(slots=True)
class PurchasedUpgrade:
    upgrade_id: str
    level: int = 1
    purchased_at: float = 0.0


@dataclass(slots=True)
class RetiredPlayerRecord:
    name: str
    position: str
    rating: int
    seasons: int
    awards: list[str] = field(default_factory=list)


@dataclass(slots=True)
class LegacyState:
    prestige_count: int = 0
    tp_multiplier: float = 1.0
    money_multiplier: float = 1.0
    starting_rating_bonus: int = 0
    career_awards: list[str] = field(default_factory=list)
    retired_players: list[RetiredPlayerRecord] = field(default_factory=list)


@dataclass(slots=True)
class GameSettings:
    auto_save_interval_seconds: float = DEFAULT_AUTOSAVE_INTERVAL_SECONDS
    match_interval_seconds: float = DEFAULT_MATCH_INTERVAL_SECONDS
    notifications_enabled: bool = True


@dataclass(slots=True)
class GameState:
    player: Player
    resources: Resources = field(default_factory=Resources)
    training: TrainingState = field(default_factory=TrainingState)
    contract: Contract = field(default_factory=Contract)
    season: SeasonState = field(default_factory=SeasonState)
    purchased_upgrades: list[PurchasedUpgrade] = field(default_factory=list)
    unlocked_drills: list[str] = field(default_factory=list)
    legacy: LegacyState = field(default_factory=LegacyState)
    settings: GameSettings = field(default_factory=GameSettings)
    version: int = SAVE_VERSION
    last_save_time: float = 0.0
    last_tick_time: float = 0.0

    def purchase_for(self, upgrade_id: str) -> PurchasedUpgrade | None:
        for record in self.purchased_upgrades:
            if record.upgrade_id == upgrade_id:
                return record
        return None

    def upgrade_level(self, upgrade_id: str) -> int:
        record = self.purchase_for(upgrade_id)
        return record.level if record is not None else 0
