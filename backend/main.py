"""
FastAPI application for the Points Projection engine
Exposes projections and calibration profiles over REST
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from functools import lru_cache
import logging
import os

from backend.core.projection_config import PROFILES, ProjectionConfig
from backend.core.projection_engine import project
from backend.services.projection_profiles import available_profiles, load_projection_config
from backend.schemas import (
    ProfileListResponse,
    ProjectionConfigResponse,
    ProjectionRequest,
    ProjectionResponse,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0"


@lru_cache(maxsize=None)
def get_config(profile: str) -> ProjectionConfig:
    """Load a profile once per process; env overrides are read on first use."""
    return load_projection_config(profile)


def _config_or_404(profile: str) -> ProjectionConfig:
    if profile not in PROFILES:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown profile {profile!r}; available: {', '.join(available_profiles())}",
        )
    return get_config(profile)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("🚀 Starting Points Projection API")
    # Warm the default profile so calibration warnings surface at boot.
    get_config("default")
    yield
    logger.info("🛑 Points Projection API stopped")


app = FastAPI(
    title="Points Projection API",
    description="Line/average blend with capped contextual multipliers",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Health check"""
    return {
        "app": "Points Projection API",
        "version": APP_VERSION,
        "status": "operational",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# ============================================================================
# PROJECTIONS
# ============================================================================

@app.get("/api/projections/profiles", response_model=ProfileListResponse)
async def list_profiles():
    return ProfileListResponse(profiles=available_profiles())


@app.get("/api/projections/config", response_model=ProjectionConfigResponse)
async def get_projection_config(profile: str = Query("default")):
    """Return the calibration a profile resolves to, with its warnings."""
    cfg = _config_or_404(profile)
    return ProjectionConfigResponse(
        profile=profile,
        config=cfg.to_dict(),
        warnings=cfg.calibration_warnings(),
    )


@app.post("/api/projections", response_model=ProjectionResponse)
async def create_projection(
    request: ProjectionRequest,
    profile: str = Query("default"),
):
    """Project a player's points for one game."""
    cfg = _config_or_404(profile)
    inputs = request.to_inputs()
    result = project(cfg, inputs)

    logger.info(
        "Projected %s: base=%.2f mult=%.4f%s → %.2f (profile=%s)",
        inputs.player_name,
        result.base_points,
        result.final_multiplier,
        " (capped)" if result.was_capped else "",
        result.projection,
        profile,
    )

    return ProjectionResponse(
        player_name=inputs.player_name,
        profile=profile,
        was_capped=result.was_capped,
        multipliers=result.multipliers(),
        **result.to_dict(),
    )
