"""
Terminal collaborator for the points projection.

Collects a :class:`PlayerInputs` from interactive prompts and renders a
:class:`ProjectionResult` as a plain-text report.  No range validation is
applied to anything the user types; only values that cannot be parsed at
all are rejected.
"""

import logging
from typing import Callable, Optional

from backend.core.projection_config import ProjectionConfig
from backend.core.projection_engine import PlayerInputs, ProjectionResult

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]

_TRUE_WORDS = {"y", "yes", "true", "t"}
_FALSE_WORDS = {"n", "no", "false", "f"}

# Report labels, in multiplier order.
_FACTOR_LABELS = {
    "home_away": "Home/Away",
    "game_total": "Game Total (OU)",
    "team_total": "Team Total (OU)",
    "def_vs_pos": "Def vs Position",
    "recent_form": "Recent Form",
    "minutes_trend": "Minutes Trend",
    "pace": "Pace",
    "b2b": "Back-to-Back",
}


class InputError(ValueError):
    """Raised when console input cannot be parsed."""


def parse_float(raw: str, field_name: str) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        raise InputError(f"{field_name}: expected a number, got {raw!r}") from None


def parse_flag(raw: str, field_name: str) -> bool:
    """Parse a yes/no answer.  Integers follow C truthiness (non-zero = yes)."""
    text = raw.strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    try:
        return int(text) != 0
    except ValueError:
        raise InputError(f"{field_name}: expected 1/0 or yes/no, got {raw!r}") from None


def _ask(read: Reader, prompt: str, field_name: str) -> str:
    try:
        return read(prompt)
    except EOFError:
        raise InputError(f"{field_name}: input ended before a value was entered") from None


def collect_inputs(read: Optional[Reader] = None) -> Optional[PlayerInputs]:
    """
    Prompt for every input field in order.

    Returns ``None`` when the player name cannot be read (end of input);
    the caller should exit cleanly without projecting.

    Raises:
        InputError: A later field is missing or unparseable.
    """
    if read is None:
        read = input

    try:
        player_name = read("Player name: ").rstrip("\n")
    except EOFError:
        logger.debug("No player name on input; nothing to project")
        return None

    def num(prompt: str, field_name: str) -> float:
        return parse_float(_ask(read, prompt, field_name), field_name)

    def flag(prompt: str, field_name: str) -> bool:
        return parse_flag(_ask(read, prompt, field_name), field_name)

    player_line = num("Sportsbook line (points): ", "player_line")
    season_avg = num("Season avg points: ", "season_avg")
    is_home = flag("Is home? (1=yes, 0=no): ", "is_home")
    game_total_ou = num("Game total O/U: ", "game_total_ou")
    team_total_ou = num("Team total O/U: ", "team_total_ou")
    opp_pts_allowed_vs_pos = num(
        "Opponent points allowed to this position (per game): ", "opp_pts_allowed_vs_pos"
    )
    # Entering the season values again neutralises the optional extras.
    recent_avg = num("Recent avg points (last N; enter season avg to ignore): ", "recent_avg")
    season_avg_minutes = num("Season avg minutes: ", "season_avg_minutes")
    expected_minutes = num("Expected minutes this game: ", "expected_minutes")
    matchup_pace = num("Matchup pace (possessions per team): ", "matchup_pace")
    is_back_to_back = flag("Back-to-back? (1=yes, 0=no): ", "is_back_to_back")

    return PlayerInputs(
        player_name=player_name,
        player_line=player_line,
        season_avg=season_avg,
        is_home=is_home,
        game_total_ou=game_total_ou,
        team_total_ou=team_total_ou,
        opp_pts_allowed_vs_pos=opp_pts_allowed_vs_pos,
        recent_avg=recent_avg,
        season_avg_minutes=season_avg_minutes,
        expected_minutes=expected_minutes,
        matchup_pace=matchup_pace,
        is_back_to_back=is_back_to_back,
    )


def format_report(
    inputs: PlayerInputs,
    result: ProjectionResult,
    cfg: ProjectionConfig,
) -> str:
    lines = [
        "",
        f"Projection for {inputs.player_name}",
        f"Base points (blend): {result.base_points:.2f}",
        "Multipliers:",
    ]
    for name, value in result.multipliers().items():
        lines.append(f"  {_FACTOR_LABELS[name]:<18}: {value:.4f}")
    lines.extend([
        f"Uncapped Multiplier : {result.uncapped_multiplier:.4f}",
        f"Final Multiplier    : {result.final_multiplier:.4f}  "
        f"(capped to [{cfg.mult_min:.2f}, {cfg.mult_max:.2f}])",
        f"Projected Points    : {result.projection:.2f}",
        "",
    ])
    return "\n".join(lines)
