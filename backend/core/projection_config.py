"""Projection calibration — every tunable weight and baseline in one place.

This module is the **registry** for the constants the points projection
depends on.  Nowhere else in the codebase should blend weights, league
baselines, or multiplier caps be hard-coded.

Architecture
------------
:class:`ProjectionConfig` is a frozen dataclass passed explicitly into
:func:`~backend.core.projection_engine.project`.  There is no module-level
singleton, so several calibration profiles can coexist in one process and
be tested side by side.

Typical usage::

    from backend.core.projection_config import ProjectionConfig

    cfg = ProjectionConfig.default()

    # Override a single constant for a custom calibration:
    from dataclasses import replace
    custom_cfg = replace(cfg, w_team_total=0.15)

    # Knock out one adjustment for an A/B comparison:
    no_pace = cfg.without("pace")
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Callable, Dict, Final, List, Tuple

#: Multiplier names in application order.  Shared by the engine's output
#: record, the console report, and the API schema.
FACTOR_NAMES: Final[Tuple[str, ...]] = (
    "home_away",
    "game_total",
    "team_total",
    "def_vs_pos",
    "recent_form",
    "minutes_trend",
    "pace",
    "b2b",
)

#: Factor name → sensitivity-weight field on :class:`ProjectionConfig`.
FACTOR_WEIGHT_FIELDS: Final[Dict[str, str]] = {
    "home_away": "w_home_away",
    "game_total": "w_game_total",
    "team_total": "w_team_total",
    "def_vs_pos": "w_def_vs_pos",
    "recent_form": "w_recent_form",
    "minutes_trend": "w_minutes_trend",
    "pace": "w_pace",
    "b2b": "w_b2b_penalty",
}

#: Default tolerance for the blend-weights-sum-to-one convention.
BLEND_SUM_TOLERANCE: Final[float] = 0.01


@dataclass(frozen=True)
class ProjectionConfig:
    """Immutable calibration bundle for the points projection.

    All fields default to the house calibration so a bare
    ``ProjectionConfig()`` is always usable.  Override via
    :func:`dataclasses.replace` for one-off tweaks.

    Attributes:
        --- Base blend ---
        w_base_line: Weight on the sportsbook points line.
        w_base_season_avg: Weight on the player's season scoring average.
            The two blend weights should sum to ~1.0.  This is a calibration
            convention, reported by :meth:`calibration_warnings`, never
            enforced.

        --- Sensitivity weights (multiplicative adjustments) ---
        w_home_away: Flat bump at home, flat cut on the road.
        w_game_total: Light sensitivity to game O/U vs league baseline.
        w_team_total: Moderate sensitivity to team O/U vs league baseline.
        w_def_vs_pos: Sensitivity to points the opponent allows to the
            player's position vs league baseline.
        w_recent_form: Last-N average vs season average.  ``0.0`` disables.
        w_minutes_trend: Expected minutes vs season minutes.  ``0.0`` disables.
        w_pace: Matchup pace vs league pace.  ``0.0`` disables.
        w_b2b_penalty: Flat cut on the second night of a back-to-back.
            ``<= 0.0`` disables.

        --- League baselines ---
        league_avg_game_total: Average combined game O/U.
        league_avg_team_total: Average single-team O/U.
        league_avg_pace: Possessions per team per game, approx.
        league_base_pts_allowed_pos: Average points allowed to a position.

        --- Caps ---
        mult_min: Floor on the combined multiplier.
        mult_max: Ceiling on the combined multiplier.
    """

    # Base blend
    w_base_line: float = 0.60
    w_base_season_avg: float = 0.40

    # Sensitivity weights
    w_home_away: float = 0.04       # +4% home, -4% away
    w_game_total: float = 0.06      # light
    w_team_total: float = 0.12      # moderate
    w_def_vs_pos: float = 0.14
    w_recent_form: float = 0.08
    w_minutes_trend: float = 0.10
    w_pace: float = 0.06
    w_b2b_penalty: float = 0.03     # up to 3% off on a B2B

    # League baselines
    league_avg_game_total: float = 229.0
    league_avg_team_total: float = 114.5
    league_avg_pace: float = 99.5
    league_base_pts_allowed_pos: float = 23.0

    # Caps on the combined multiplier
    mult_min: float = 0.70
    mult_max: float = 1.40

    def __post_init__(self) -> None:
        if self.mult_min > self.mult_max:
            raise ValueError(
                f"mult_min={self.mult_min} exceeds mult_max={self.mult_max}; "
                "the multiplier clamp would be empty."
            )

    # ------------------------------------------------------------------ #
    #  Named constructors                                                  #
    # ------------------------------------------------------------------ #

    @classmethod
    def default(cls) -> ProjectionConfig:
        """Return the house calibration."""
        return cls()

    @classmethod
    def lines_only(cls) -> ProjectionConfig:
        """Return a control profile with every adjustment switched off.

        Every multiplier evaluates to exactly 1.0, so the projection equals
        the line / season-average blend.  Useful as a baseline when judging
        whether the adjustments earn their keep.
        """
        return replace(cls(), **{f: 0.0 for f in FACTOR_WEIGHT_FIELDS.values()})

    # ------------------------------------------------------------------ #
    #  Convenience accessors                                               #
    # ------------------------------------------------------------------ #

    def without(self, factor: str) -> ProjectionConfig:
        """Return a copy with one adjustment's sensitivity weight zeroed.

        Args:
            factor: One of :data:`FACTOR_NAMES`.

        Raises:
            ValueError: If ``factor`` is not a known multiplier name.
        """
        try:
            weight_field = FACTOR_WEIGHT_FIELDS[factor]
        except KeyError:
            raise ValueError(
                f"Unknown factor {factor!r}; expected one of {', '.join(FACTOR_NAMES)}"
            ) from None
        return replace(self, **{weight_field: 0.0})

    @property
    def blend_weight_sum(self) -> float:
        return self.w_base_line + self.w_base_season_avg

    def calibration_warnings(self, tolerance: float = BLEND_SUM_TOLERANCE) -> List[str]:
        """List soft calibration-convention breaches.

        These never block a projection; callers decide whether to log,
        display, or ignore them.
        """
        warnings: List[str] = []
        if abs(self.blend_weight_sum - 1.0) > tolerance:
            warnings.append(
                f"Blend weights sum to {self.blend_weight_sum:.4f} "
                f"(w_base_line={self.w_base_line}, "
                f"w_base_season_avg={self.w_base_season_avg}); expected ~1.0"
            )
        for name, weight_field in FACTOR_WEIGHT_FIELDS.items():
            value = getattr(self, weight_field)
            if value < 0.0:
                warnings.append(
                    f"{weight_field}={value} is negative; the {name} "
                    "adjustment will move projections the wrong way"
                )
        return warnings

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


#: Named calibration profiles available to the CLI, API, and dashboard.
PROFILES: Final[Dict[str, Callable[[], ProjectionConfig]]] = {
    "default": ProjectionConfig.default,
    "lines_only": ProjectionConfig.lines_only,
}
