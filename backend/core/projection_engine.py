"""Points projection engine — line/average blend times capped adjustments.

Every function here is **pure**: no I/O, no logging, no side effects.

The projection is computed in two stages:

1. **Base**: a linear blend of the sportsbook points line and the player's
   season scoring average.
2. **Adjustments**: eight multiplicative factors (home/away, game total,
   team total, defense vs position, recent form, minutes trend, pace,
   back-to-back).  Their product is clamped to
   ``[mult_min, mult_max]`` before it is applied to the base.

Most factors share one shape: ``1 + weight × (value − baseline) / baseline``.
:func:`relative_deviation` and :func:`scaled_multiplier` carry that shape and
its guard: a non-positive denominator or a zero weight yields the neutral
multiplier 1.0 instead of a division error.  Guards are per factor; tripping
one never disables another.

Inputs are **not** range-checked.  Negative minutes or averages flow through
the arithmetic unchanged; validation is the caller's responsibility.

Run tests with::

    pytest tests/test_projection_engine.py -v
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from backend.core.projection_config import FACTOR_NAMES, ProjectionConfig

#: The multiplier every disabled or neutral factor evaluates to.
NEUTRAL: float = 1.0


# ---------------------------------------------------------------------------
# Data transfer objects
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PlayerInputs:
    """Everything the engine needs for one player-game.

    ``recent_avg`` falls back to ``season_avg`` when omitted, which
    neutralises the recent-form factor.

    Attributes:
        player_name: Identifier for display only.  Not used in the math.
        player_line: Sportsbook points line.
        season_avg: Season points per game.
        is_home: True when the player's team is at home.
        game_total_ou: Game over/under total.
        team_total_ou: Team over/under total.
        opp_pts_allowed_vs_pos: Opponent points allowed per game to the
            player's position.
        recent_avg: Last-N games scoring average.
        season_avg_minutes: Season minutes per game.
        expected_minutes: Expected minutes tonight.
        matchup_pace: Projected possessions per team for this game.
        is_back_to_back: True on the second night of a back-to-back.
    """

    player_name: str
    player_line: float
    season_avg: float
    is_home: bool
    game_total_ou: float
    team_total_ou: float
    opp_pts_allowed_vs_pos: float
    season_avg_minutes: float
    expected_minutes: float
    matchup_pace: float
    is_back_to_back: bool = False
    recent_avg: Optional[float] = None

    def __post_init__(self) -> None:
        if self.recent_avg is None:
            self.recent_avg = self.season_avg


@dataclass(frozen=True, slots=True)
class ProjectionResult:
    """Output of :func:`project`: the projection and every intermediate term."""

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

    @property
    def was_capped(self) -> bool:
        """True when the clamp moved the combined multiplier."""
        return self.final_multiplier != self.uncapped_multiplier

    def multipliers(self) -> Dict[str, float]:
        """The eight adjustment factors keyed by name, in application order."""
        return {name: getattr(self, f"mult_{name}") for name in FACTOR_NAMES}

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Guard helpers
# ---------------------------------------------------------------------------


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def relative_deviation(value: float, baseline: float) -> float:
    """``(value − baseline) / baseline``, or 0.0 when ``baseline <= 0``."""
    if baseline <= 0.0:
        return 0.0
    return (value - baseline) / baseline


def scaled_multiplier(weight: float, value: float, baseline: float) -> float:
    """``1 + weight × relative_deviation``.

    Exactly 1.0 when the weight is zero or the baseline is non-positive; the
    weight is never touched once the denominator guard fires.
    """
    if weight == 0.0 or baseline <= 0.0:
        return NEUTRAL
    return NEUTRAL + weight * relative_deviation(value, baseline)


# ---------------------------------------------------------------------------
# Base and adjustment factors
# ---------------------------------------------------------------------------


def base_points(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    return cfg.w_base_line * inputs.player_line + cfg.w_base_season_avg * inputs.season_avg


def home_away_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    # Binary flag; no magnitude scaling and no disable threshold.
    delta = cfg.w_home_away if inputs.is_home else -cfg.w_home_away
    return NEUTRAL + delta


def game_total_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    return scaled_multiplier(cfg.w_game_total, inputs.game_total_ou, cfg.league_avg_game_total)


def team_total_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    return scaled_multiplier(cfg.w_team_total, inputs.team_total_ou, cfg.league_avg_team_total)


def defense_vs_pos_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    """Opponent leaks more than baseline to this position → boost; less → cut."""
    return scaled_multiplier(
        cfg.w_def_vs_pos, inputs.opp_pts_allowed_vs_pos, cfg.league_base_pts_allowed_pos
    )


def recent_form_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    # Season average is the denominator: a player averaging <= 0 has no
    # meaningful relative form.
    return scaled_multiplier(cfg.w_recent_form, inputs.recent_avg, inputs.season_avg)


def minutes_trend_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    return scaled_multiplier(
        cfg.w_minutes_trend, inputs.expected_minutes, inputs.season_avg_minutes
    )


def pace_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    return scaled_multiplier(cfg.w_pace, inputs.matchup_pace, cfg.league_avg_pace)


def b2b_multiplier(cfg: ProjectionConfig, inputs: PlayerInputs) -> float:
    if not inputs.is_back_to_back or cfg.w_b2b_penalty <= 0.0:
        return NEUTRAL
    # Flat penalty, independent of any input magnitude.
    return NEUTRAL - cfg.w_b2b_penalty


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def project(cfg: ProjectionConfig, inputs: PlayerInputs) -> ProjectionResult:
    """Project a player's points for one game.

    Args:
        cfg: Calibration to apply.
        inputs: Fully-populated player/game inputs.

    Returns:
        A fresh :class:`ProjectionResult`.  Never raises on numeric input;
        every degenerate denominator resolves to a neutral factor.

    Examples::

        >>> cfg = ProjectionConfig.default()
        >>> res = project(cfg, PlayerInputs(
        ...     player_name="Example", player_line=25.0, season_avg=23.0,
        ...     is_home=True, game_total_ou=229.0, team_total_ou=114.5,
        ...     opp_pts_allowed_vs_pos=23.0, season_avg_minutes=32.0,
        ...     expected_minutes=32.0, matchup_pace=99.5))
        >>> round(res.projection, 3)
        25.168
    """
    base = base_points(cfg, inputs)

    factors = (
        home_away_multiplier(cfg, inputs),
        game_total_multiplier(cfg, inputs),
        team_total_multiplier(cfg, inputs),
        defense_vs_pos_multiplier(cfg, inputs),
        recent_form_multiplier(cfg, inputs),
        minutes_trend_multiplier(cfg, inputs),
        pace_multiplier(cfg, inputs),
        b2b_multiplier(cfg, inputs),
    )
    uncapped = math.prod(factors)
    final = clamp(uncapped, cfg.mult_min, cfg.mult_max)

    return ProjectionResult(
        base_points=base,
        mult_home_away=factors[0],
        mult_game_total=factors[1],
        mult_team_total=factors[2],
        mult_def_vs_pos=factors[3],
        mult_recent_form=factors[4],
        mult_minutes_trend=factors[5],
        mult_pace=factors[6],
        mult_b2b=factors[7],
        uncapped_multiplier=uncapped,
        final_multiplier=final,
        projection=base * final,
    )
