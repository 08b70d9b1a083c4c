"""Metric categorisation tables."""

from .ladders import (
    Direction,
    ThresholdLadder,
    HRV_LADDER,
    SLEEP_QUALITY_LADDER,
    STRESS_LADDER,
    RECOVERY_STATUS_LADDER,
    ENERGY_LADDER,
)

__all__ = [
    "Direction",
    "ThresholdLadder",
    "HRV_LADDER",
    "SLEEP_QUALITY_LADDER",
    "STRESS_LADDER",
    "RECOVERY_STATUS_LADDER",
    "ENERGY_LADDER",
]
