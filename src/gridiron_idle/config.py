"""Static simulation configuration constants."""

SAVE_VERSION = 2

REGULAR_SEASON_WEEKS = 17
# Seconds before kickoff during which a match shows as in progress.
GAME_DURATION_SECONDS = 17.0
PLAYOFF_WIN_THRESHOLD = 9
PLAYOFF_FINAL_ROUND = 3
PLAYER_STARTING_AGE = 22
MIN_RETIREMENT_SEASON = 3

MAX_DELTA_SECONDS = 5.0
MAX_TRAINING_SLOTS = 5
STARTING_TRAINING_SLOTS = 3
STARTING_MONEY = 1000.0

OFFLINE_MIN_SECONDS = 10.0
OFFLINE_CAP_HOURS = 8
OFFLINE_TP_EFFICIENCY = 0.5

DEFAULT_MATCH_INTERVAL_SECONDS = 60.0
DEFAULT_AUTOSAVE_INTERVAL_SECONDS = 30.0

MATCH_EQUIP_BONUS_CAP = 15.0

OPPONENT_TEAM_NAMES: tuple[str, ...] = (
    "Cardinals", "Falcons", "Ravens", "Bills", "Panthers", "Bears",
    "Bengals", "Browns", "Cowboys", "Broncos", "Lions", "Packers",
    "Texans", "Colts", "Jaguars", "Chiefs", "Raiders", "Chargers",
    "Rams", "Dolphins", "Vikings", "Patriots", "Saints", "Giants",
    "Jets", "Eagles", "Steelers", "49ers", "Seahawks", "Buccaneers",
    "Titans", "Commanders",
)
