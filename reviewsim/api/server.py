"""
FastAPI Server - REST API for Reviewsim

Exposes the reward & reputation simulation engine to a presentation
layer (sliders, charts, preset pickers). The server only translates
requests; every number comes from the engine.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from reviewsim.core.config import ReviewsimConfig
from reviewsim.core.presets import PRESET_SCENARIOS, WEIGHT_SYSTEMS


# ----------------------------------------------------
# Global State
# ----------------------------------------------------

config: ReviewsimConfig = ReviewsimConfig()


# ----------------------------------------------------
# FastAPI Lifecycle
# ----------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    global config

    config = ReviewsimConfig.from_env()

    print("\n" + "="*60)
    print("🚀 Reviewsim Engine - Starting...")
    print("="*60)
    print(f"   Horizon: {config.engine.horizon_cycles} cycles "
          f"({config.engine.cycle_length_days} days each)")
    print(f"   Reputation ceiling: {config.engine.max_reputation}")
    print(f"   Weight systems: {', '.join(WEIGHT_SYSTEMS)}")
    print(f"   Presets: {', '.join(PRESET_SCENARIOS)}")
    print("✅ Reviewsim Ready\n")

    yield

    print("🛑 Shutting down Reviewsim...")


# ----------------------------------------------------
# FastAPI App
# ----------------------------------------------------

app = FastAPI(
    title="Reviewsim Engine",
    description="Reviewer reward and reputation projections",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"service": "Reviewsim Engine", "status": "operational"}


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "engine": {
            "horizon_cycles": config.engine.horizon_cycles,
            "max_reputation": config.engine.max_reputation,
            "weight_systems": len(WEIGHT_SYSTEMS),
            "presets": len(PRESET_SCENARIOS),
        },
    }


# ----------------------------------------------------
# Include Routes
# ----------------------------------------------------

from reviewsim.api import routes
app.include_router(routes.router)
