"""
Pydantic request/response schemas for the Points Projection API.

Requests are shape-checked only (types and presence).  Numeric ranges are
deliberately left unvalidated: the engine accepts any float and the
caller owns data quality.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from backend.core.projection_engine import PlayerInputs


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

class ProjectionRequest(BaseModel):
    """Payload for POST /api/projections."""

    player_name: str = Field(..., description='e.g. "Devin Booker"')

    # Core
    player_line: float = Field(..., description="Sportsbook points line")
    season_avg: float = Field(..., description="Season points per game")

    # Context
    is_home: bool
    game_total_ou: float = Field(..., description="Game over/under total")
    team_total_ou: float = Field(..., description="Team over/under total")
    opp_pts_allowed_vs_pos: float = Field(
        ..., description="Opponent points allowed per game to the player's position"
    )

    # Optional extras
    recent_avg: Optional[float] = Field(
        None, description="Last-N scoring average; omit to use season_avg"
    )
    season_avg_minutes: float
    expected_minutes: float
    matchup_pace: float = Field(..., description="Projected possessions per team")
    is_back_to_back: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "player_name": "Devin Booker",
                "player_line": 25.0,
                "season_avg": 23.0,
                "is_home": True,
                "game_total_ou": 229.0,
                "team_total_ou": 114.5,
                "opp_pts_allowed_vs_pos": 23.0,
                "recent_avg": 23.0,
                "season_avg_minutes": 32.0,
                "expected_minutes": 32.0,
                "matchup_pace": 99.5,
                "is_back_to_back": False,
            }
        }
    }

    def to_inputs(self) -> PlayerInputs:
        return PlayerInputs(**self.model_dump())


class ProjectionResponse(BaseModel):
    """Response schema for a computed projection."""

    player_name: str
    profile: str

    base_points: float
    mult_home_away: float
    mult_game_total: float
    mult_team_total: float
    mult_def_vs_pos: float
    mult_recent_form: float
    mult_minutes_trend: float
    mult_pace: float
    mult_b2b: float
    uncapped_multiplier: float
    final_multiplier: float
    projection: float

    was_capped: bool
    multipliers: Dict[str, float]


# ---------------------------------------------------------------------------
# Calibration
# ---------------------------------------------------------------------------

class ProfileListResponse(BaseModel):
    profiles: List[str]


class ProjectionConfigResponse(BaseModel):
    """Active calibration values plus any soft convention breaches."""

    profile: str
    config: Dict[str, float]
    warnings: List[str]
