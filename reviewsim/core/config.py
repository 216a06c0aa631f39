"""
Configuration Management for Reviewsim

Centralized configuration with environment variable support.
The engine only ever receives an EngineConfig instance; environment
variables are read by the outer layers (API server, demo runner).
"""

import os
from pydantic import BaseModel


class EngineConfig(BaseModel):
    """Simulation engine constants."""
    max_reputation: float = 5.0
    base_growth_rate: float = 0.02  # diminishing law: rate * reviews / sqrt(cycle)
    linear_growth_rate: float = 0.05  # historical linear law
    horizon_cycles: int = 73  # one year
    cycle_length_days: float = 2.84
    min_pool_share: float = 0.01
    max_pool_share: float = 0.40
    weight_tolerance: float = 1e-9
    reputation_cap_divisor: float = 2.0
    reference_reputation: float = 1.0
    reference_review_time: float = 12.0
    timing_window_hours: float = 24.0
    timing_floor: float = 0.001


class APIConfig(BaseModel):
    """API server configuration."""
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list = ["*"]


class ReviewsimConfig(BaseModel):
    """Master configuration for Reviewsim."""
    engine: EngineConfig = EngineConfig()
    api: APIConfig = APIConfig()

    @classmethod
    def from_env(cls) -> "ReviewsimConfig":
        """Load configuration from environment variables."""
        return cls(
            engine=EngineConfig(
                max_reputation=float(os.getenv("REVIEWSIM_MAX_REPUTATION", 5.0)),
                base_growth_rate=float(os.getenv("REVIEWSIM_BASE_GROWTH_RATE", 0.02)),
                horizon_cycles=int(os.getenv("REVIEWSIM_HORIZON_CYCLES", 73)),
                cycle_length_days=float(os.getenv("REVIEWSIM_CYCLE_LENGTH_DAYS", 2.84)),
            ),
            api=APIConfig(
                host=os.getenv("API_HOST", "0.0.0.0"),
                port=int(os.getenv("API_PORT", 8000)),
                debug=os.getenv("DEBUG", "false").lower() == "true",
            )
        )
