import random

from gridiron_idle.contracts import ContractSystem
from gridiron_idle.state import create_new_game_state


def test_generated_contract_scales_with_season_rating_and_tokens() -> None:
    system = ContractSystem(random.Random(8))
    for _ in range(50):
        contract = system.generate_contract(season_number=2, rating=80, contract_tokens=1)
        # base 300k, +20k per token, up to 20% salary and 30% bonus uplift
        assert 320_000 <= contract.salary_per_game <= 384_000
        assert 600_000 <= contract.signing_bonus <= 780_000
        assert contract.years_remaining == 4


def test_low_rating_gets_three_year_deal() -> None:
    contract = ContractSystem(random.Random(1)).generate_contract(1, 60, 0)
    assert contract.years_remaining == 3


def test_season_end_burns_a_year_without_renewal() -> None:
    state = create_new_game_state("Signed", "TE", now=0.0)
    state.resources.contract_tokens = 2
    assert ContractSystem(random.Random(2)).process_season_end(state) is None
    assert state.contract.years_remaining == 3
    assert state.resources.contract_tokens == 2
    assert state.resources.money == 1000.0


def test_expired_contract_renews_and_pays_signing_bonus() -> None:
    state = create_new_game_state("Free Agent", "TE", now=0.0)
    state.contract.years_remaining = 1
    state.resources.contract_tokens = 2
    renewed = ContractSystem(random.Random(3)).process_season_end(state)
    assert renewed is not None
    assert state.contract is renewed
    assert state.resources.contract_tokens == 0
    assert state.resources.money == 1000.0 + renewed.signing_bonus
