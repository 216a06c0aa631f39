"""
Cycle Simulator - Core Orchestration Engine

Projects a reviewer's balance and reputation over a fixed horizon of
review cycles. Each cycle:
1. Guard checks (total stake, reputation ceiling, weights, affordability)
2. Score the reviewer with the current reputation
3. Size the cycle reward against the project pool
4. Grow reputation
5. Settle the balance (stake affordability)
6. Emit a CycleRecord

A guard failure halts the run. The halting cycle is not recorded; the
records produced before it are returned alongside the halt reason.
"""

import math
import random
from typing import Dict, List, Optional

from reviewsim.core.config import EngineConfig
from reviewsim.core.exceptions import SimulationHalted
from reviewsim.core.models import (
    CycleRecord,
    GrowthLaw,
    Halt,
    LuckFactor,
    ReviewerProfile,
    RewardModel,
    RunStatus,
    SimulationInput,
    SimulationResult,
    SystemState,
    WeightConfig,
)
from reviewsim.core.presets import get_weight_system
from reviewsim.engine.guard import GuardRail
from reviewsim.engine.ledger import BalanceLedger
from reviewsim.engine.reputation import ReputationGrowth
from reviewsim.engine.rewards import PoolReward, reference_profile
from reviewsim.engine.scoring import ScoreWeighting, SubScore, safe_ratio


class CycleSimulator:
    """
    One projection run over the configured horizon.

    Holds no state between runs: run() rebuilds its accumulator from the
    inputs every time, so the same inputs and seed give the same records.
    """

    def __init__(
        self,
        profile: ReviewerProfile,
        state: SystemState,
        weight_config: WeightConfig,
        reviews_per_cycle: int,
        config: Optional[EngineConfig] = None,
        growth_law: GrowthLaw = GrowthLaw.DIMINISHING,
        reward_model: RewardModel = RewardModel.POOL_SHARE,
        luck: Optional[LuckFactor] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        subscores: Optional[Dict[str, SubScore]] = None,
        cycles: Optional[int] = None
    ):
        """
        Args:
            profile: Reviewer attributes at the start of the run
            state: System totals, constant for the run
            weight_config: Named weights combined by ScoreWeighting
            reviews_per_cycle: Reviews (and stakes) per cycle
            config: Engine constants
            growth_law: Reputation growth law (diminishing is canonical)
            reward_model: How the score is turned into a pool reward
            luck: Optional bounded random reward multiplier
            seed: Seed for the run's random source when rng is not given
            rng: Random source; reseeded from `seed` at the start of each run
            subscores: Extra or overriding sub-score functions by name
            cycles: Horizon override; defaults to config.horizon_cycles
        """
        self.profile = profile
        self.state = state
        self.weight_config = weight_config
        self.reviews_per_cycle = reviews_per_cycle
        self.config = config or EngineConfig()
        self.growth_law = growth_law
        self.reward_model = reward_model
        self.luck = luck
        self.seed = seed
        self.rng = rng or random.Random(seed)
        self.subscores = subscores
        self.horizon = cycles if cycles is not None else self.config.horizon_cycles

        self.weighting = ScoreWeighting(
            weight_config, config=self.config, rng=self.rng, subscores=subscores
        )
        self.ledger = BalanceLedger(state.base_stake, reviews_per_cycle)
        self.growth = ReputationGrowth(reviews_per_cycle, config=self.config, law=growth_law)
        self.rewards = PoolReward(
            state,
            reviews_per_cycle,
            config=self.config,
            model=reward_model,
            luck=luck,
            rng=self.rng,
        )
        self.guard = GuardRail(self.config, self.weighting, self.ledger)

    @classmethod
    def from_input(
        cls,
        params: SimulationInput,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        subscores: Optional[Dict[str, SubScore]] = None
    ) -> "CycleSimulator":
        weight_config = params.weight_config
        if isinstance(weight_config, str):
            weight_config = get_weight_system(weight_config)

        return cls(
            profile=params.to_profile(),
            state=params.to_system_state(),
            weight_config=weight_config,
            reviews_per_cycle=params.reviews_per_cycle,
            config=config,
            growth_law=params.growth_law,
            reward_model=params.reward_model,
            luck=params.luck,
            seed=params.seed,
            rng=rng,
            subscores=subscores,
            cycles=params.cycles,
        )

    # ---------------------------------------------------------
    # PUBLIC ENTRYPOINT
    # ---------------------------------------------------------

    def run(self) -> SimulationResult:
        if self.seed is not None:
            self.rng.seed(self.seed)

        records: List[CycleRecord] = []
        initial_balance = self.profile.token_holdings
        balance = initial_balance
        reputation = self.profile.reputation

        try:
            system_weight = self._system_weight()

            for cycle in range(1, self.horizon + 1):
                self.guard.check_cycle(cycle, self.state, reputation, system_weight, balance)

                weight = self.weighting.score(
                    self.profile.with_reputation(reputation), self.state
                )
                reward, share = self.rewards.cycle_reward(weight, system_weight)
                next_reputation, growth = self.growth.advance(reputation, cycle)
                balance = self.ledger.settle(balance, reward, cycle)
                reputation = next_reputation

                records.append(CycleRecord(
                    cycle=cycle,
                    days=self._days(cycle),
                    balance=balance,
                    reputation=reputation,
                    reward=reward,
                    roi=safe_ratio(balance - initial_balance, initial_balance) * 100,
                    growth_rate=growth,
                    weight=weight,
                    share_of_pool=share,
                ))

        except SimulationHalted as e:
            return SimulationResult(
                status=RunStatus.HALTED,
                records=tuple(records),
                halt=Halt(
                    reason=e.reason,
                    cycle=e.cycle,
                    message=e.message,
                    details=e.details,
                ),
            )

        return SimulationResult(status=RunStatus.COMPLETED, records=tuple(records))

    # ---------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------

    def _system_weight(self) -> float:
        """Aggregate weight of the pool, sized from a reference reviewer."""
        self.guard.check_system(1, self.state)
        self.weighting.validate(1)
        reference = reference_profile(self.profile, self.config)
        return self.rewards.system_weight(self.weighting.score(reference, self.state))

    def _days(self, cycle: int) -> int:
        return int(math.floor(cycle * self.config.cycle_length_days + 0.5))


def simulate(
    params: SimulationInput,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None
) -> SimulationResult:
    """Run a fresh projection for one set of inputs."""
    return CycleSimulator.from_input(params, config=config, rng=rng).run()
