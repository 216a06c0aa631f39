"""
Pool Reward - Sizing a Reviewer's Cut of the Project Pool

pool_share (canonical):
    system_weight = total_reviewers * weight of a reference reviewer
    share         = clamp(weight / system_weight, min_share, max_share)
    reward        = project_pool * share * reviews_per_cycle

direct_weight (archived):
    reward = project_pool * weight / total_reviewers * reviews_per_cycle

An optional luck factor scales the reward by a uniform draw from the
injected random source.
"""

import random
from typing import Optional, Tuple

from reviewsim.core.config import EngineConfig
from reviewsim.core.models import (
    LuckFactor, ReviewerProfile, RewardModel, SystemState,
)
from reviewsim.engine.scoring import safe_ratio


def reference_profile(profile: ReviewerProfile, config: EngineConfig) -> ReviewerProfile:
    """An average reviewer: same stake and holdings, reference reputation and timing."""
    return profile.model_copy(update={
        "reputation": config.reference_reputation,
        "review_timing": config.reference_review_time,
    })


class PoolReward:

    def __init__(
        self,
        state: SystemState,
        reviews_per_cycle: int,
        config: Optional[EngineConfig] = None,
        model: RewardModel = RewardModel.POOL_SHARE,
        luck: Optional[LuckFactor] = None,
        rng: Optional[random.Random] = None
    ):
        self.state = state
        self.reviews_per_cycle = reviews_per_cycle
        self.config = config or EngineConfig()
        self.model = model
        self.luck = luck
        self.rng = rng or random.Random()

    def system_weight(self, reference_weight: float) -> float:
        return self.state.total_reviewers * reference_weight

    def share_of_pool(self, weight: float, system_weight: float) -> float:
        return safe_ratio(weight, system_weight)

    def cycle_reward(self, weight: float, system_weight: float) -> Tuple[float, float]:
        """Returns (reward, unclamped share of pool weight)."""
        share = self.share_of_pool(weight, system_weight)

        if self.model == RewardModel.DIRECT_WEIGHT:
            per_review = self.state.project_pool * weight / self.state.total_reviewers
        else:
            clamped = max(self.config.min_pool_share, min(self.config.max_pool_share, share))
            per_review = self.state.project_pool * clamped

        reward = per_review * self.reviews_per_cycle
        if self.luck is not None:
            reward *= self.rng.uniform(self.luck.low, self.luck.high)
        return reward, share
