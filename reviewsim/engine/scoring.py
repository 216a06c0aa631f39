"""
Score Weighting - Reviewer Attribute Normalization

Turns a reviewer's raw attributes into one weighted score:

    score = sum(weight_i * subscore_i)

Each sub-score is a function of a ScoringContext clamped into [0, 1].
Weight configurations select sub-scores by name from a registry, so a
scheme can swap in its own sub-score functions without touching the
simulator. Every denominator has a fallback value; no sub-score ever
returns NaN or infinity.
"""

import math
import random
from statistics import median
from typing import Callable, Dict, Optional

from reviewsim.core.config import EngineConfig
from reviewsim.core.exceptions import InvalidWeightConfiguration
from reviewsim.core.models import ReviewerProfile, SystemState, WeightConfig


class ScoringContext:
    """Everything a sub-score function may read."""

    def __init__(
        self,
        profile: ReviewerProfile,
        state: SystemState,
        config: EngineConfig,
        rng: random.Random
    ):
        self.profile = profile
        self.state = state
        self.config = config
        self.rng = rng


SubScore = Callable[[ScoringContext], float]


def clamp_unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def safe_ratio(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    if denominator <= 0:
        return fallback
    return numerator / denominator


def time_scale(value: float, start: float, end: float, floor: float = 0.001) -> float:
    """1.0 for the first reviewer, `floor` for the last; never exactly zero."""
    span = end - start
    if span == 0:
        return 1.0
    scaled = 1 - ((value - start) / span)
    return max(floor, min(1.0, scaled))


def gaussian(x: float, amp: float = 1.0, gain: float = 0.02, center: float = 50.0) -> float:
    """C(x) = amp * e^(-gain * (x - center)^2)"""
    return amp * math.exp(-gain * (x - center) ** 2)


# ---------------------------------------------------------
# SUB-SCORES
# ---------------------------------------------------------

def stake_score(ctx: ScoringContext) -> float:
    return clamp_unit(safe_ratio(ctx.profile.stake, ctx.state.max_stake))


def reputation_score(ctx: ScoringContext) -> float:
    return clamp_unit(safe_ratio(ctx.profile.reputation, ctx.config.reputation_cap_divisor))


def ranking_score(ctx: ScoringContext) -> float:
    return clamp_unit(safe_ratio(ctx.profile.reputation, ctx.config.max_reputation))


def timing_score(ctx: ScoringContext) -> float:
    window = ctx.config.timing_window_hours
    return clamp_unit(1 - safe_ratio(ctx.profile.review_timing, window, fallback=1.0))


def scaled_timing_score(ctx: ScoringContext) -> float:
    return time_scale(
        ctx.profile.review_timing,
        0.0,
        ctx.config.timing_window_hours,
        floor=ctx.config.timing_floor,
    )


def holdings_score(ctx: ScoringContext) -> float:
    total = ctx.state.effective_total_holdings(ctx.profile.token_holdings)
    return clamp_unit(safe_ratio(ctx.profile.token_holdings, total))


def stake_ratio_score(ctx: ScoringContext) -> float:
    stake = ctx.profile.stake
    holdings = ctx.profile.token_holdings
    if holdings > 0:
        return clamp_unit(stake / holdings)
    return 1.0 if stake > 0 else 0.0


def impact_score(ctx: ScoringContext) -> float:
    # No impact metric exists yet; the community scheme draws a placeholder.
    return clamp_unit(ctx.rng.random())


def confidence_curve_score(ctx: ScoringContext) -> float:
    return clamp_unit(gaussian(ctx.profile.confidence))


def accuracy_score(ctx: ScoringContext) -> float:
    """
    A(x) = amp * e^(-gain * (vote - median(all votes))^2) / sum(peer votes)

    Zero when the reviewer has not voted or peers cast no positive votes.
    """
    vote = ctx.profile.vote
    peers = ctx.profile.peer_votes
    if vote is None or not peers:
        return 0.0
    closeness = gaussian(vote, center=median((vote, *peers)))
    return clamp_unit(safe_ratio(closeness, sum(peers)))


SUBSCORES: Dict[str, SubScore] = {
    "stake": stake_score,
    "staking": stake_score,
    "reputation": reputation_score,
    "community": reputation_score,
    "ranking": ranking_score,
    "timing": timing_score,
    "timing_scaled": scaled_timing_score,
    "holdings": holdings_score,
    "confidence": stake_ratio_score,
    "stake_ratio": stake_ratio_score,
    "impact": impact_score,
    "confidence_curve": confidence_curve_score,
    "accuracy": accuracy_score,
}


# ---------------------------------------------------------
# WEIGHTING
# ---------------------------------------------------------

class ScoreWeighting:
    """
    Weighted combination of named sub-scores.

    Args:
        weight_config: Named weights; names must resolve in the registry
        config: Engine constants
        rng: Random source for stochastic sub-scores
        subscores: Extra or overriding sub-score functions by name
    """

    def __init__(
        self,
        weight_config: WeightConfig,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        subscores: Optional[Dict[str, SubScore]] = None
    ):
        self.weight_config = weight_config
        self.config = config or EngineConfig()
        self.rng = rng or random.Random()
        self.subscores = {**SUBSCORES, **(subscores or {})}

    def validate(self, cycle: int = 0) -> None:
        """Raise InvalidWeightConfiguration unless every weight is known and they sum to 1."""
        unknown = sorted(set(self.weight_config.weights) - set(self.subscores))
        if unknown:
            raise InvalidWeightConfiguration(
                f"Weight system '{self.weight_config.name}' names unknown sub-scores: {unknown}",
                cycle=cycle,
                details={"unknown": unknown},
            )
        if not self.weight_config.is_normalized(self.config.weight_tolerance):
            raise InvalidWeightConfiguration(
                f"Weights of '{self.weight_config.name}' sum to "
                f"{self.weight_config.total():.12f}, expected 1.0",
                cycle=cycle,
                details={"total": self.weight_config.total()},
            )

    def subscores_for(self, profile: ReviewerProfile, state: SystemState) -> Dict[str, float]:
        ctx = ScoringContext(profile, state, self.config, self.rng)
        return {
            name: clamp_unit(self.subscores[name](ctx))
            for name in self.weight_config.weights
        }

    def score(self, profile: ReviewerProfile, state: SystemState) -> float:
        scores = self.subscores_for(profile, state)
        return sum(
            self.weight_config.weights[name] * value
            for name, value in scores.items()
        )

    def breakdown(self, profile: ReviewerProfile, state: SystemState) -> Dict:
        """Raw sub-scores, their weighted contributions and the final weight."""
        scores = self.subscores_for(profile, state)
        weighted = {
            name: self.weight_config.weights[name] * value
            for name, value in scores.items()
        }
        return {
            "weight_system": self.weight_config.name,
            "scores": scores,
            "weighted": weighted,
            "total": sum(weighted.values()),
        }
