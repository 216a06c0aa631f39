"""
API Schemas - Request/Response Models

Pydantic models for API validation and documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Optional

from reviewsim.core.models import (
    CycleRecord, GrowthLaw, Halt, LuckFactor, RewardModel, RunStatus,
)


class SimulationRequest(BaseModel):
    """Parameters for one projection run; unset fields fall back to the preset."""
    preset: Optional[str] = Field(None, description="Scenario to start from (casual/dedicated/professional)")
    weight_system: str = Field("current", description="Named weight system")
    base_stake: Optional[float] = Field(None, ge=0.0, description="Stake per review")
    project_pool: Optional[float] = Field(None, ge=0.0, description="Reward pool per review")
    reviews_per_cycle: Optional[int] = Field(None, ge=0)
    total_reviewers: Optional[int] = Field(None, ge=1)
    token_holdings: Optional[float] = Field(None, ge=0.0, description="Starting balance")
    starting_reputation: Optional[float] = Field(None, ge=0.0)
    avg_review_time: Optional[float] = Field(None, ge=0.0, le=24.0, description="Hours (0 = first)")
    total_holdings: Optional[float] = Field(None, ge=0.0)
    growth_law: GrowthLaw = GrowthLaw.DIMINISHING
    reward_model: RewardModel = RewardModel.POOL_SHARE
    luck: Optional[LuckFactor] = None
    seed: Optional[int] = None
    cycles: Optional[int] = Field(None, ge=0, le=1000)


class SimulationResponse(BaseModel):
    """Projection series and terminal status."""
    status: RunStatus
    cycles_completed: int
    records: List[CycleRecord]
    halt: Optional[Halt] = None


class ScoreRequest(BaseModel):
    """Inputs for a single review weight breakdown."""
    weight_system: str = "current"
    stake: float = Field(..., ge=0.0)
    token_holdings: float = Field(..., ge=0.0)
    reputation: float = Field(..., ge=0.0)
    review_timing: float = Field(..., ge=0.0, le=24.0)
    confidence: float = Field(50.0, ge=0.0, le=100.0)
    vote: Optional[float] = None
    peer_votes: List[float] = Field(default=[])
    total_reviewers: int = Field(5, ge=1)
    base_stake: Optional[float] = Field(None, ge=0.0, description="Defaults to stake")
    total_holdings: Optional[float] = Field(None, ge=0.0)
    seed: Optional[int] = None


class ScoreResponse(BaseModel):
    """Raw sub-scores, weighted contributions and final weight."""
    weight_system: str
    scores: Dict[str, float]
    weighted: Dict[str, float]
    total: float


class WeightSystemResponse(BaseModel):
    name: str
    weights: Dict[str, float]
    description: str


class PresetResponse(BaseModel):
    name: str
    label: str
    description: str
    params: Dict[str, float]
