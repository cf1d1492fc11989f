"""
project_points.py — Interactive points projection for a single player.

Prompts for the sportsbook line, season average, and game context, then
prints the blended base, each adjustment multiplier, and the capped
projection.

Usage
-----
  python scripts/project_points.py                        # house calibration
  python scripts/project_points.py --profile lines_only   # adjustments off
  python scripts/project_points.py --json                 # machine-readable output

Calibration can be nudged with PROJ_* environment variables (or a .env
file), e.g.  PROJ_W_TEAM_TOTAL=0.15.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure the project root (one level up from scripts/) is on sys.path so that
# `from backend.xxx import ...` resolves correctly when the script is run
# directly (e.g.  python scripts/project_points.py).
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger("project_points")


def main() -> int:
    from backend.core.projection_engine import project
    from backend.services.console import InputError, collect_inputs, format_report
    from backend.services.projection_profiles import (
        available_profiles,
        load_projection_config,
    )

    parser = argparse.ArgumentParser(
        description="Project an NBA player's points from line, average, and context."
    )
    parser.add_argument(
        "--profile",
        default="default",
        choices=available_profiles(),
        help="Calibration profile to apply (default: %(default)s).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON instead of the text report.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        inputs = collect_inputs()
    except InputError as exc:
        logger.error("Invalid input: %s", exc)
        return 1

    if inputs is None:
        return 0

    try:
        cfg = load_projection_config(args.profile)
    except ValueError as exc:
        logger.error("Invalid calibration: %s", exc)
        return 1

    result = project(cfg, inputs)

    if args.json:
        payload = {"player_name": inputs.player_name, "profile": args.profile}
        payload.update(result.to_dict())
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(inputs, result, cfg))
    return 0


if __name__ == "__main__":
    sys.exit(main())
