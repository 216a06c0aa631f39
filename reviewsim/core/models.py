from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GrowthLaw(str, Enum):
    DIMINISHING = "diminishing"  # rate * reviews / sqrt(cycle)
    LINEAR = "linear"  # historical, cycle-independent


class RewardModel(str, Enum):
    POOL_SHARE = "pool_share"
    DIRECT_WEIGHT = "direct_weight"


class RunStatus(str, Enum):
    COMPLETED = "completed"
    HALTED = "halted"


class HaltReason(str, Enum):
    INSUFFICIENT_BALANCE = "insufficient_balance"
    INVALID_WEIGHT_CONFIGURATION = "invalid_weight_configuration"
    REPUTATION_CEILING_VIOLATION = "reputation_ceiling_violation"
    INVALID_SYSTEM_STATE = "invalid_system_state"


class ReviewerProfile(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    stake: float = Field(..., ge=0.0)
    token_holdings: float = Field(..., ge=0.0)
    reputation: float = Field(..., ge=0.0)
    review_timing: float = Field(..., ge=0.0, le=24.0, description="Hours, lower = earlier")
    confidence: float = Field(50.0, ge=0.0, le=100.0)
    vote: Optional[float] = None
    peer_votes: Tuple[float, ...] = ()

    def with_reputation(self, reputation: float) -> "ReviewerProfile":
        return self.model_copy(update={"reputation": reputation})


class SystemState(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    total_reviewers: int = Field(..., ge=1)
    project_pool: float = Field(..., ge=0.0)
    base_stake: float = Field(..., ge=0.0)
    total_holdings: Optional[float] = Field(None, ge=0.0)

    @property
    def total_stake(self) -> float:
        return self.base_stake * self.total_reviewers

    @property
    def max_stake(self) -> float:
        return self.total_stake

    def effective_total_holdings(self, token_holdings: float) -> float:
        """Supplied total, else every reviewer is assumed to hold as much as this one."""
        if self.total_holdings is not None:
            return self.total_holdings
        return token_holdings * self.total_reviewers


class WeightConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    weights: Dict[str, float]
    description: str = ""

    def total(self) -> float:
        return sum(self.weights.values())

    def is_normalized(self, tolerance: float = 1e-9) -> bool:
        if any(w < 0 for w in self.weights.values()):
            return False
        return abs(self.total() - 1.0) <= tolerance


class LuckFactor(BaseModel):
    """Bounded random reward multiplier."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    low: float = Field(0.8, ge=0.0)
    high: float = Field(1.2, ge=0.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "LuckFactor":
        if self.low > self.high:
            raise ValueError(f"luck bounds inverted: low={self.low} > high={self.high}")
        return self


class SimulationInput(BaseModel):
    """Parameters a caller tunes for one projection run."""
    model_config = ConfigDict(allow_inf_nan=False)

    base_stake: float = Field(..., ge=0.0)
    project_pool: float = Field(..., ge=0.0)
    reviews_per_cycle: int = Field(..., ge=0)
    total_reviewers: int = Field(..., ge=1)
    token_holdings: float = Field(..., ge=0.0)
    starting_reputation: float = Field(..., ge=0.0)
    avg_review_time: float = Field(..., ge=0.0, le=24.0)
    weight_config: Union[WeightConfig, str] = "current"
    total_holdings: Optional[float] = Field(None, ge=0.0)
    growth_law: GrowthLaw = GrowthLaw.DIMINISHING
    reward_model: RewardModel = RewardModel.POOL_SHARE
    luck: Optional[LuckFactor] = None
    seed: Optional[int] = None
    cycles: Optional[int] = Field(None, ge=0)

    def to_profile(self) -> ReviewerProfile:
        return ReviewerProfile(
            stake=self.base_stake,
            token_holdings=self.token_holdings,
            reputation=self.starting_reputation,
            review_timing=self.avg_review_time,
        )

    def to_system_state(self) -> SystemState:
        return SystemState(
            total_reviewers=self.total_reviewers,
            project_pool=self.project_pool,
            base_stake=self.base_stake,
            total_holdings=self.total_holdings,
        )


class CycleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    cycle: int
    days: int
    balance: float
    reputation: float
    reward: float
    roi: float
    growth_rate: float
    weight: float
    share_of_pool: Optional[float] = None


class Halt(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: HaltReason
    cycle: int
    message: str
    details: Dict[str, Any] = {}


class SimulationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: RunStatus
    records: Tuple[CycleRecord, ...] = ()
    halt: Optional[Halt] = None

    @property
    def completed(self) -> bool:
        return self.status == RunStatus.COMPLETED

    @property
    def halted(self) -> bool:
        return self.status == RunStatus.HALTED

    @property
    def final_record(self) -> Optional[CycleRecord]:
        return self.records[-1] if self.records else None

    def series(self, field: str) -> List[float]:
        """One column of the trajectory, in cycle order."""
        return [getattr(r, field) for r in self.records]
