import random

import pytest

from reviewsim.core.config import EngineConfig
from reviewsim.core.exceptions import (
    InsufficientBalance,
    InvalidSystemState,
    InvalidWeightConfiguration,
    ReputationCeilingViolation,
)
from reviewsim.core.models import (
    HaltReason, LuckFactor, ReviewerProfile, RewardModel, SystemState, WeightConfig,
)
from reviewsim.core.presets import WEIGHT_SYSTEMS
from reviewsim.engine.guard import GuardRail
from reviewsim.engine.ledger import BalanceLedger
from reviewsim.engine.rewards import PoolReward, reference_profile
from reviewsim.engine.scoring import ScoreWeighting


CASUAL_WEIGHT = 0.40 * 0.2 + 0.40 * 0.5 + 0.10 * 0.5 + 0.05 * 0.2 + 0.05 * 0.1


def make_state(**overrides) -> SystemState:
    params = dict(total_reviewers=5, project_pool=1000, base_stake=100)
    params.update(overrides)
    return SystemState(**params)


def make_guard(weights=None, base_stake=100, reviews=3, config=None) -> GuardRail:
    config = config or EngineConfig()
    weighting = ScoreWeighting(weights or WEIGHT_SYSTEMS["current"], config=config)
    return GuardRail(config, weighting, BalanceLedger(base_stake, reviews))


# ── GuardRail ────────────────────────────────────────────────

def test_guard_passes_healthy_cycle():
    make_guard().check_cycle(1, make_state(), reputation=1.0, system_weight=1.7, balance=1000)


def test_guard_rejects_zero_total_stake():
    with pytest.raises(InvalidSystemState) as exc:
        make_guard().check_cycle(1, make_state(base_stake=0), 1.0, 1.7, 1000)
    assert exc.value.reason == HaltReason.INVALID_SYSTEM_STATE


def test_guard_rejects_reputation_above_ceiling():
    with pytest.raises(ReputationCeilingViolation) as exc:
        make_guard().check_cycle(4, make_state(), reputation=5.01, system_weight=1.7, balance=1000)
    assert exc.value.cycle == 4
    assert exc.value.details["max_reputation"] == 5.0


def test_guard_accepts_reputation_at_ceiling():
    make_guard().check_reputation(1, 5.0)


def test_guard_rejects_non_positive_system_weight():
    with pytest.raises(InvalidWeightConfiguration, match="system weight"):
        make_guard().check_cycle(1, make_state(), 1.0, system_weight=0.0, balance=1000)


def test_guard_rejects_unnormalized_weights():
    weights = WeightConfig(name="heavy", weights={"stake": 0.9, "reputation": 0.9})
    with pytest.raises(InvalidWeightConfiguration):
        make_guard(weights=weights).check_cycle(1, make_state(), 1.0, 1.7, 1000)


def test_guard_rejects_unaffordable_stake():
    with pytest.raises(InsufficientBalance):
        make_guard(base_stake=1000).check_cycle(1, make_state(base_stake=1000), 1.0, 1.7, 1000)


def test_guard_checks_run_in_order():
    # Both the system state and the balance are invalid; the system check fires first.
    guard = make_guard(base_stake=0)
    with pytest.raises(InvalidSystemState):
        guard.check_cycle(1, make_state(base_stake=0), 9.0, 0.0, -1)


# ── PoolReward ───────────────────────────────────────────────

def test_reference_profile_keeps_stake_and_holdings():
    profile = ReviewerProfile(stake=250, token_holdings=2500, reputation=1.5, review_timing=6)
    reference = reference_profile(profile, EngineConfig())
    assert reference.stake == 250
    assert reference.token_holdings == 2500
    assert reference.reputation == 1.0
    assert reference.review_timing == 12.0


def test_pool_share_reward_for_average_reviewer():
    rewards = PoolReward(make_state(), reviews_per_cycle=3)
    system_weight = rewards.system_weight(CASUAL_WEIGHT)
    reward, share = rewards.cycle_reward(CASUAL_WEIGHT, system_weight)
    assert share == pytest.approx(0.2)
    assert reward == pytest.approx(1000 * 0.2 * 3)


def test_pool_share_is_clamped_but_reported_raw():
    rewards = PoolReward(make_state(), reviews_per_cycle=3)
    reward, share = rewards.cycle_reward(1.0, 1.0)
    assert share == 1.0
    assert reward == pytest.approx(1000 * 0.40 * 3)

    reward, share = rewards.cycle_reward(0.001, 10.0)
    assert share == pytest.approx(0.0001)
    assert reward == pytest.approx(1000 * 0.01 * 3)


def test_zero_system_weight_share_falls_back_to_zero():
    rewards = PoolReward(make_state(), reviews_per_cycle=3)
    _, share = rewards.cycle_reward(0.5, 0.0)
    assert share == 0.0


def test_direct_weight_model():
    rewards = PoolReward(make_state(), reviews_per_cycle=3, model=RewardModel.DIRECT_WEIGHT)
    reward, _ = rewards.cycle_reward(CASUAL_WEIGHT, 5 * CASUAL_WEIGHT)
    assert reward == pytest.approx(1000 * CASUAL_WEIGHT / 5 * 3)


def test_luck_factor_is_bounded_and_seeded():
    luck = LuckFactor(low=0.5, high=1.5)
    base, _ = PoolReward(make_state(), 3).cycle_reward(CASUAL_WEIGHT, 5 * CASUAL_WEIGHT)

    draws = []
    for seed in (1, 1, 2):
        rewards = PoolReward(make_state(), 3, luck=luck, rng=random.Random(seed))
        reward, _ = rewards.cycle_reward(CASUAL_WEIGHT, 5 * CASUAL_WEIGHT)
        assert 0.5 * base <= reward <= 1.5 * base
        draws.append(reward)

    assert draws[0] == draws[1]
    assert draws[0] != draws[2]


def test_luck_bounds_must_be_ordered():
    with pytest.raises(ValueError):
        LuckFactor(low=1.5, high=0.5)
