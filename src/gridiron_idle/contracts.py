from __future__ import annotations

import math
import random

from .models import Contract, GameState

BASE_SALARY = 50000
SALARY_PER_SEASON = 25000
SALARY_PER_RATING_POINT = 5000
TOKEN_SALARY_BONUS = 20000
MAX_SALARY_UPLIFT = 0.2
MAX_SIGNING_UPLIFT = 0.3


class ContractSystem:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def generate_contract(self, season_number: int, rating: int, contract_tokens: int) -> Contract:
        base_salary = BASE_SALARY + season_number * SALARY_PER_SEASON + (rating - 40) * SALARY_PER_RATING_POINT
        token_bonus = contract_tokens * TOKEN_SALARY_BONUS
        salary = math.floor((base_salary + token_bonus) * (1 + self.rng.random() * MAX_SALARY_UPLIFT))
        signing_bonus = math.floor(base_salary * 2 * (1 + self.rng.random() * MAX_SIGNING_UPLIFT))
        return Contract(
            years_remaining=3 + min(2, rating // 80),
            salary_per_game=float(salary),
            signing_bonus=float(signing_bonus),
        )

    def process_season_end(self, state: GameState) -> Contract | None:
        """Burn a contract year. Returns the new deal when the old one ran out."""
        state.contract.years_remaining -= 1
        if state.contract.years_remaining > 0:
            return None

        renewed = self.generate_contract(
            state.season.season_number,
            state.player.rating,
            state.resources.contract_tokens,
        )
        state.resources.contract_tokens = 0
        state.resources.money += renewed.signing_bonus
        state.contract = renewed
        return renewed
