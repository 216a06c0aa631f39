"""
Built-in weight systems and reviewer scenarios.
"""

from typing import Dict

from reviewsim.core.exceptions import UnknownPreset
from reviewsim.core.models import SimulationInput, WeightConfig


WEIGHT_SYSTEMS: Dict[str, WeightConfig] = {
    "current": WeightConfig(
        name="current",
        weights={
            "reputation": 0.40,
            "stake": 0.40,
            "timing": 0.10,
            "holdings": 0.05,
            "confidence": 0.05,
        },
        description="Current on-chain scheme. Emphasizes reputation and stake equally.",
    ),
    "community": WeightConfig(
        name="community",
        weights={
            "community": 0.50,
            "impact": 0.25,
            "staking": 0.15,
            "ranking": 0.10,
        },
        description="Community proposal emphasizing direct participation and project impact.",
    ),
}


PRESET_SCENARIOS: Dict[str, dict] = {
    "casual": {
        "label": "Casual Reviewer",
        "description": "A part-time reviewer doing a few reviews per cycle",
        "params": dict(
            base_stake=100, project_pool=1000, reviews_per_cycle=3, total_reviewers=5,
            token_holdings=1000, starting_reputation=1.0, avg_review_time=12,
        ),
    },
    "dedicated": {
        "label": "Dedicated Reviewer",
        "description": "An active reviewer with higher stakes and faster response",
        "params": dict(
            base_stake=250, project_pool=1000, reviews_per_cycle=8, total_reviewers=5,
            token_holdings=2500, starting_reputation=1.5, avg_review_time=6,
        ),
    },
    "professional": {
        "label": "Professional Reviewer",
        "description": "Full-time reviewer with maximum engagement",
        "params": dict(
            base_stake=500, project_pool=1000, reviews_per_cycle=10, total_reviewers=5,
            token_holdings=5000, starting_reputation=2.0, avg_review_time=1,
        ),
    },
}


def get_weight_system(name: str) -> WeightConfig:
    try:
        return WEIGHT_SYSTEMS[name]
    except KeyError:
        raise UnknownPreset(f"Unknown weight system: {name}")


def load_preset(name: str, **overrides) -> SimulationInput:
    """Build a SimulationInput from a named scenario, applying overrides on top."""
    if name not in PRESET_SCENARIOS:
        raise UnknownPreset(f"Unknown preset scenario: {name}")
    params = {**PRESET_SCENARIOS[name]["params"], **overrides}
    return SimulationInput(**params)
