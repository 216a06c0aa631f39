"""
Guard Rail - Pre-Commit Checks for Each Cycle

Checks, in order:
    (a) total stake in the system is positive
    (b) reputation has not passed the ceiling
    (c) weights are valid and the aggregate system weight is positive
    (d) the balance covers the cycle's stake requirement

Each failure raises a SimulationHalted subclass carrying its reason tag.
"""

from reviewsim.core.config import EngineConfig
from reviewsim.core.exceptions import (
    InvalidSystemState,
    InvalidWeightConfiguration,
    ReputationCeilingViolation,
)
from reviewsim.core.models import SystemState
from reviewsim.engine.ledger import BalanceLedger
from reviewsim.engine.scoring import ScoreWeighting


class GuardRail:

    def __init__(
        self,
        config: EngineConfig,
        weighting: ScoreWeighting,
        ledger: BalanceLedger
    ):
        self.config = config
        self.weighting = weighting
        self.ledger = ledger

    def check_system(self, cycle: int, state: SystemState) -> None:
        if not state.total_stake > 0:
            raise InvalidSystemState(
                f"Total stake must be positive, got {state.total_stake}",
                cycle=cycle,
                details={"total_stake": state.total_stake},
            )

    def check_reputation(self, cycle: int, reputation: float) -> None:
        if reputation > self.config.max_reputation:
            raise ReputationCeilingViolation(
                f"Reputation {reputation} exceeds ceiling {self.config.max_reputation}",
                cycle=cycle,
                details={"reputation": reputation, "max_reputation": self.config.max_reputation},
            )

    def check_weights(self, cycle: int, system_weight: float) -> None:
        self.weighting.validate(cycle)
        if not system_weight > 0:
            raise InvalidWeightConfiguration(
                f"Aggregate system weight must be positive, got {system_weight}",
                cycle=cycle,
                details={"system_weight": system_weight},
            )

    def check_cycle(
        self,
        cycle: int,
        state: SystemState,
        reputation: float,
        system_weight: float,
        balance: float
    ) -> None:
        self.check_system(cycle, state)
        self.check_reputation(cycle, reputation)
        self.check_weights(cycle, system_weight)
        self.check_affordability(cycle, balance)

    def check_affordability(self, cycle: int, balance: float) -> None:
        self.ledger.require(balance, cycle)
