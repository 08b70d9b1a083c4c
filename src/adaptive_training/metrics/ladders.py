"""Threshold ladders for categorising wearable metrics.

A ladder is an ordered list of boundaries, each mapping to a category,
plus a fallback category for values past the last boundary. Every real
input lands on exactly one step.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Sequence, Tuple, TypeVar

from ..models.insights import EnergyLevel, StatusLevel, StressLevel


L = TypeVar("L")


class Direction(str, Enum):
    AT_LEAST = "at_least"  # value >= bound, bounds descending
    AT_MOST = "at_most"    # value <= bound, bounds ascending


@dataclass(frozen=True)
class ThresholdLadder(Generic[L]):
    """Ordered boundary table consulted top to bottom."""
    steps: Tuple[Tuple[float, L], ...]
    fallback: L
    direction: Direction = Direction.AT_LEAST

    def __post_init__(self):
        bounds = [bound for bound, _ in self.steps]
        expected = sorted(bounds, reverse=self.direction == Direction.AT_LEAST)
        if bounds != expected or len(set(bounds)) != len(bounds):
            raise ValueError(f"Ladder bounds out of order for {self.direction.value}: {bounds}")

    def classify(self, value: float) -> L:
        """Return the category for a value."""
        for bound, label in self.steps:
            if self.direction == Direction.AT_LEAST and value >= bound:
                return label
            if self.direction == Direction.AT_MOST and value <= bound:
                return label
        return self.fallback

    @property
    def bounds(self) -> Sequence[float]:
        return [bound for bound, _ in self.steps]


HRV_LADDER = ThresholdLadder(
    steps=(
        (70, StatusLevel.OPTIMAL),
        (60, StatusLevel.GOOD),
        (50, StatusLevel.FAIR),
        (40, StatusLevel.POOR),
    ),
    fallback=StatusLevel.CRITICAL,
)

SLEEP_QUALITY_LADDER = ThresholdLadder(
    steps=(
        (85, StatusLevel.OPTIMAL),
        (75, StatusLevel.GOOD),
        (60, StatusLevel.FAIR),
        (45, StatusLevel.POOR),
    ),
    fallback=StatusLevel.CRITICAL,
)

STRESS_LADDER = ThresholdLadder(
    steps=(
        (30, StressLevel.LOW),
        (50, StressLevel.MODERATE),
        (75, StressLevel.HIGH),
    ),
    fallback=StressLevel.EXTREME,
    direction=Direction.AT_MOST,
)

RECOVERY_STATUS_LADDER = ThresholdLadder(
    steps=(
        (85, StatusLevel.OPTIMAL),
        (70, StatusLevel.GOOD),
        (50, StatusLevel.FAIR),
        (30, StatusLevel.POOR),
    ),
    fallback=StatusLevel.CRITICAL,
)

ENERGY_LADDER = ThresholdLadder(
    steps=(
        (80, EnergyLevel.HIGH),
        (65, EnergyLevel.MODERATE),
        (50, EnergyLevel.LOW),
    ),
    fallback=EnergyLevel.VERY_LOW,
)
