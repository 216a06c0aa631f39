"""
API Routes - REST Endpoints for Reviewsim

Provides endpoints for:
- Projection runs over the review-cycle horizon
- Single review weight breakdowns
- Built-in weight systems and preset scenarios
"""

import random

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError
from typing import List

from reviewsim.core.exceptions import UnknownPreset
from reviewsim.core.models import ReviewerProfile, SimulationInput, SystemState
from reviewsim.core.presets import (
    PRESET_SCENARIOS, WEIGHT_SYSTEMS, get_weight_system, load_preset,
)
from reviewsim.engine.scoring import ScoreWeighting
from reviewsim.engine.simulator import simulate
from reviewsim.api.schemas import (
    PresetResponse,
    ScoreRequest,
    ScoreResponse,
    SimulationRequest,
    SimulationResponse,
    WeightSystemResponse,
)
import reviewsim.api.server as server


router = APIRouter(prefix="/api/v1", tags=["reviewsim"])


def _build_input(request: SimulationRequest) -> SimulationInput:
    overrides = request.model_dump(
        exclude={"preset", "weight_system"},
        exclude_none=True,
    )
    overrides["weight_config"] = get_weight_system(request.weight_system)

    if request.preset:
        return load_preset(request.preset, **overrides)
    return SimulationInput(**overrides)


@router.post("/simulate", response_model=SimulationResponse)
def run_simulation(request: SimulationRequest):
    """
    Project balance and reputation over the review-cycle horizon.

    A halted run is not an HTTP error: the partial series comes back
    with status "halted" and the structured halt reason.
    """
    try:
        params = _build_input(request)
    except UnknownPreset as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        )

    result = simulate(params, config=server.config.engine)

    return SimulationResponse(
        status=result.status,
        cycles_completed=len(result.records),
        records=list(result.records),
        halt=result.halt,
    )


@router.post("/score", response_model=ScoreResponse)
def score_review(request: ScoreRequest):
    """Weight breakdown for one review, before and after applying weights."""
    try:
        weight_config = get_weight_system(request.weight_system)
    except UnknownPreset as e:
        raise HTTPException(status_code=404, detail=str(e))

    profile = ReviewerProfile(
        stake=request.stake,
        token_holdings=request.token_holdings,
        reputation=request.reputation,
        review_timing=request.review_timing,
        confidence=request.confidence,
        vote=request.vote,
        peer_votes=tuple(request.peer_votes),
    )
    state = SystemState(
        total_reviewers=request.total_reviewers,
        project_pool=0.0,
        base_stake=request.base_stake if request.base_stake is not None else request.stake,
        total_holdings=request.total_holdings,
    )
    weighting = ScoreWeighting(
        weight_config,
        config=server.config.engine,
        rng=random.Random(request.seed),
    )
    return ScoreResponse(**weighting.breakdown(profile, state))


@router.get("/weight-systems", response_model=List[WeightSystemResponse])
def list_weight_systems():
    return [
        WeightSystemResponse(
            name=system.name,
            weights=system.weights,
            description=system.description
        )
        for system in WEIGHT_SYSTEMS.values()
    ]


@router.get("/presets", response_model=List[PresetResponse])
def list_presets():
    return [
        PresetResponse(
            name=name,
            label=preset["label"],
            description=preset["description"],
            params=preset["params"]
        )
        for name, preset in PRESET_SCENARIOS.items()
    ]
