import math
from typing import Optional, Tuple

from reviewsim.core.config import EngineConfig
from reviewsim.core.models import GrowthLaw


class ReputationGrowth:
    """
    Cycle-over-cycle reputation evolution.

    diminishing (canonical): growth = base_rate * reviews / sqrt(cycle)
    linear (historical):     growth = linear_rate * reviews

    reputation' = min(reputation * (1 + growth), max_reputation)
    """

    def __init__(
        self,
        reviews_per_cycle: int,
        config: Optional[EngineConfig] = None,
        law: GrowthLaw = GrowthLaw.DIMINISHING
    ):
        self.reviews_per_cycle = reviews_per_cycle
        self.config = config or EngineConfig()
        self.law = law

    def growth_rate(self, cycle: int) -> float:
        if self.law == GrowthLaw.LINEAR:
            return self.config.linear_growth_rate * self.reviews_per_cycle
        return self.config.base_growth_rate * self.reviews_per_cycle / math.sqrt(cycle)

    def advance(self, reputation: float, cycle: int) -> Tuple[float, float]:
        """Returns (new_reputation, growth_rate) for a 1-based cycle index."""
        growth = max(0.0, self.growth_rate(cycle))
        grown = reputation * (1 + growth)
        return min(grown, self.config.max_reputation), growth
