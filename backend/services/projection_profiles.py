"""
Calibration profile loading.

Resolves a named :class:`ProjectionConfig` profile and layers environment
overrides on top, so a calibration can be nudged without a code change::

    PROJ_W_TEAM_TOTAL=0.15
    PROJ_LEAGUE_AVG_PACE=100.2

Variables are read from the process environment after ``load_dotenv()``
has merged any ``.env`` file in the working directory.  Calibration
convention breaches (e.g. blend weights not summing to ~1.0) are logged
but never block a projection.
"""

import logging
import os
from dataclasses import fields, replace
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

from backend.core.projection_config import PROFILES, ProjectionConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROJ_"


def available_profiles() -> List[str]:
    return sorted(PROFILES)


def resolve_profile(profile: str) -> ProjectionConfig:
    """Return the base config for ``profile`` without environment overrides."""
    try:
        factory = PROFILES[profile]
    except KeyError:
        raise ValueError(
            f"Unknown profile {profile!r}; available: {', '.join(available_profiles())}"
        ) from None
    return factory()


def _env_overrides(env: Mapping[str, str]) -> Dict[str, float]:
    overrides: Dict[str, float] = {}
    for f in fields(ProjectionConfig):
        key = f"{ENV_PREFIX}{f.name.upper()}"
        raw = env.get(key)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[f.name] = float(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a number", key, raw)
    return overrides


def load_projection_config(
    profile: str = "default",
    env: Optional[Mapping[str, str]] = None,
) -> ProjectionConfig:
    """
    Build the active calibration.

    Args:
        profile: Name in :data:`~backend.core.projection_config.PROFILES`.
        env: Variable mapping to read overrides from.  Defaults to
            ``os.environ`` (after ``.env`` has been loaded).

    Raises:
        ValueError: Unknown profile, or overrides that leave
            ``mult_min > mult_max``.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    cfg = resolve_profile(profile)

    overrides = _env_overrides(env)
    if overrides:
        for name, value in sorted(overrides.items()):
            logger.info("Calibration override %s = %.4f (profile=%s)", name, value, profile)
        cfg = replace(cfg, **overrides)

    for warning in cfg.calibration_warnings():
        logger.warning("Calibration check (%s): %s", profile, warning)

    return cfg
