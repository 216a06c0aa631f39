import pytest

from reviewsim.core.exceptions import InsufficientBalance
from reviewsim.core.models import HaltReason
from reviewsim.engine.ledger import BalanceLedger


def test_stake_requirement_is_stake_times_reviews():
    assert BalanceLedger(base_stake=100, reviews_per_cycle=3).stake_requirement == 300


def test_affordability_is_inclusive():
    ledger = BalanceLedger(base_stake=100, reviews_per_cycle=3)
    assert ledger.can_afford(300)
    assert not ledger.can_afford(299.99)


def test_affordable_cycle_nets_out_to_reward():
    ledger = BalanceLedger(base_stake=100, reviews_per_cycle=3)
    assert ledger.settle(1000, 600) == 1600


@pytest.mark.parametrize("balance,reward", [
    (300, 0),
    (1000, 600),
    (1000, 0.1),
    (12345.678, 987.654321),
    (1e9, 1e-9),
])
def test_reserve_and_refund_matches_net_credit(balance, reward):
    ledger = BalanceLedger(base_stake=100, reviews_per_cycle=3)
    assert ledger.settle_with_reserve(balance, reward) == pytest.approx(
        ledger.settle(balance, reward), rel=1e-12
    )


def test_insufficient_balance_raises_with_details():
    ledger = BalanceLedger(base_stake=1000, reviews_per_cycle=3)
    with pytest.raises(InsufficientBalance) as exc:
        ledger.settle(1000, 600, cycle=1)
    assert exc.value.reason == HaltReason.INSUFFICIENT_BALANCE
    assert exc.value.cycle == 1
    assert exc.value.details == {"balance": 1000, "required": 3000}


def test_reserve_path_enforces_the_same_gate():
    ledger = BalanceLedger(base_stake=1000, reviews_per_cycle=3)
    with pytest.raises(InsufficientBalance):
        ledger.settle_with_reserve(1000, 600)


def test_zero_requirement_is_always_affordable():
    ledger = BalanceLedger(base_stake=0, reviews_per_cycle=5)
    assert ledger.settle(0, 10) == 10
