"""Runtime configuration for :mod:`page_setup`.

Settings are read from the environment so the command line tool can be
pointed at a printer profile file without repeating options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import UnknownUnitError
from .units import Unit

LOGGER = logging.getLogger("page_setup.config")

# Two lengths closer than this (in points) are treated as equal when a
# printer's answer is compared with the requested page.
COMPARISON_TOLERANCE = 0.1

DEFAULT_UNIT = Unit.MILLIMETER

UNIT_ENV_VAR = "PAGE_SETUP_UNIT"
PROFILES_ENV_VAR = "PAGE_SETUP_PROFILES"
TOLERANCE_ENV_VAR = "PAGE_SETUP_TOLERANCE"


@dataclass(frozen=True)
class Settings:
    """Effective configuration values."""

    unit: Unit = DEFAULT_UNIT
    profiles_path: Optional[Path] = None
    tolerance: float = COMPARISON_TOLERANCE


def _unit_from_env() -> Unit:
    value = os.getenv(UNIT_ENV_VAR)
    if value is None or not value.strip():
        return DEFAULT_UNIT
    try:
        return Unit.parse(value)
    except UnknownUnitError:
        LOGGER.warning("Ignoring %s=%r: not a known unit", UNIT_ENV_VAR, value)
        return DEFAULT_UNIT


def _tolerance_from_env() -> float:
    value = os.getenv(TOLERANCE_ENV_VAR)
    if value is None or not value.strip():
        return COMPARISON_TOLERANCE
    try:
        tolerance = float(value)
    except ValueError:
        LOGGER.warning("Ignoring %s=%r: not a number", TOLERANCE_ENV_VAR, value)
        return COMPARISON_TOLERANCE
    if tolerance <= 0:
        LOGGER.warning("Ignoring %s=%r: must be positive", TOLERANCE_ENV_VAR, value)
        return COMPARISON_TOLERANCE
    return tolerance


def load_settings() -> Settings:
    """Build :class:`Settings` from ``PAGE_SETUP_*`` environment variables."""

    profiles = os.getenv(PROFILES_ENV_VAR)
    profiles_path = Path(profiles).expanduser() if profiles and profiles.strip() else None
    return Settings(
        unit=_unit_from_env(),
        profiles_path=profiles_path,
        tolerance=_tolerance_from_env(),
    )
