"""
Biometric insight engine.

Turns a wearable snapshot into a categorical InsightVector:
- HRV, sleep, stress and recovery status via threshold ladders
- A 0-100 recovery score weighted across five markers
- Training readiness and energy level
- Flags for which parts of training need adjusting
"""

from typing import Any, Dict, Optional, Union
import logging

from .base import BaseService
from ..config import Settings
from ..metrics.ladders import (
    ENERGY_LADDER,
    HRV_LADDER,
    RECOVERY_STATUS_LADDER,
    SLEEP_QUALITY_LADDER,
    STRESS_LADDER,
)
from ..models.insights import (
    ELEVATED_STRESS,
    LOW_STATUSES,
    InsightVector,
    StatusLevel,
    StressLevel,
    TrainingReadiness,
)
from ..models.wearables import BloodPressure, WearableSnapshot, load_snapshot
from ..utils import round_half_up


# Recovery score weights (max points per component, sum = 100)
HRV_WEIGHT = 30
RHR_WEIGHT = 20
SLEEP_WEIGHT = 25
STRESS_WEIGHT = 15
BP_WEIGHT = 10

HRV_REFERENCE_MS = 70
RHR_REFERENCE_BPM = 60
RHR_PENALTY_PER_BPM = 0.5

# Readiness / flag thresholds on the recovery score
READY_MIN_SCORE = 75
REST_BELOW_SCORE = 50
RPE_ADJUST_BELOW = 60
VOLUME_ADJUST_BELOW = 55
INTENSITY_ADJUST_BELOW = 65

GLUCOSE_TIME_IN_RANGE_MIN = 70
HYDRATION_LEVEL_MIN = 75


def blood_pressure_points(bp: BloodPressure) -> int:
    """10 for optimal, 5 for elevated, 0 otherwise."""
    if bp.systolic < 120 and bp.diastolic < 80:
        return BP_WEIGHT
    if bp.systolic < 140 and bp.diastolic < 90:
        return BP_WEIGHT // 2
    return 0


def recovery_score_components(snapshot: WearableSnapshot) -> Dict[str, float]:
    """Per-marker contributions to the recovery score."""
    recovery = snapshot.recovery
    hrv_score = min(100, recovery.hrv / HRV_REFERENCE_MS * HRV_WEIGHT)
    rhr_score = max(
        0,
        RHR_WEIGHT - max(0, recovery.resting_heart_rate - RHR_REFERENCE_BPM) * RHR_PENALTY_PER_BPM,
    )
    sleep_score = snapshot.sleep.quality / 100 * SLEEP_WEIGHT
    stress_score = STRESS_WEIGHT - recovery.stress / 100 * STRESS_WEIGHT
    bp_score = blood_pressure_points(snapshot.vitals.blood_pressure)
    return {
        "hrv": hrv_score,
        "resting_heart_rate": rhr_score,
        "sleep": sleep_score,
        "stress": stress_score,
        "blood_pressure": bp_score,
    }


def determine_readiness(
    recovery_score: int,
    stress_level: StressLevel,
    sleep_quality: StatusLevel,
) -> TrainingReadiness:
    """Ready needs a strong score, low stress and decent sleep."""
    if (
        recovery_score >= READY_MIN_SCORE
        and stress_level == StressLevel.LOW
        and sleep_quality not in LOW_STATUSES
    ):
        return TrainingReadiness.READY
    if recovery_score < REST_BELOW_SCORE or stress_level == StressLevel.EXTREME:
        return TrainingReadiness.REST
    return TrainingReadiness.CAUTION


class BiometricInsightEngine(BaseService):
    """Derives InsightVectors from wearable snapshots."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)

    def calculate_recovery_score(
        self, snapshot: Union[WearableSnapshot, Dict[str, Any]]
    ) -> int:
        """
        Weighted composite recovery score.

        Components:
        - HRV: hrv/70 * 30, capped at 100
        - Resting HR: 20 minus 0.5 per bpm above 60, floored at 0
        - Sleep quality: quality/100 * 25
        - Stress: 15 - stress/100 * 15
        - Blood pressure: 10 optimal, 5 elevated, 0 otherwise

        Returns:
            Rounded score clamped to 0-100
        """
        snapshot = load_snapshot(snapshot)
        total = sum(recovery_score_components(snapshot).values())
        # HRV above the reference can push the raw sum past 100
        return max(0, min(100, round_half_up(total)))

    def analyze(self, snapshot: Union[WearableSnapshot, Dict[str, Any]]) -> InsightVector:
        """Categorise a snapshot into an InsightVector."""
        snapshot = load_snapshot(snapshot)
        recovery = snapshot.recovery
        sleep = snapshot.sleep
        vitals = snapshot.vitals

        hrv_status = HRV_LADDER.classify(recovery.hrv)
        sleep_quality = SLEEP_QUALITY_LADDER.classify(sleep.quality)
        stress_level = STRESS_LADDER.classify(recovery.stress)

        score = self.calculate_recovery_score(snapshot)
        recovery_status = RECOVERY_STATUS_LADDER.classify(score)
        readiness = determine_readiness(score, stress_level, sleep_quality)

        energy_avg = (score + sleep.quality + (100 - recovery.stress)) / 3
        energy_level = ENERGY_LADDER.classify(energy_avg)

        stress_elevated = stress_level in ELEVATED_STRESS
        insights = InsightVector(
            hrv_status=hrv_status,
            sleep_quality=sleep_quality,
            stress_level=stress_level,
            recovery_status=recovery_status,
            training_readiness=readiness,
            energy_level=energy_level,
            rpe_adjustment_needed=score < RPE_ADJUST_BELOW,
            volume_adjustment_needed=score < VOLUME_ADJUST_BELOW,
            intensity_adjustment_needed=score < INTENSITY_ADJUST_BELOW or stress_elevated,
            rest_adjustment_needed=sleep_quality in LOW_STATUSES or stress_elevated,
            nutrition_adjustment_needed=(
                vitals.glucose.time_in_range < GLUCOSE_TIME_IN_RANGE_MIN
                or vitals.hydration.level < HYDRATION_LEVEL_MIN
            ),
            recovery_score=score,
        )
        self.logger.debug(
            f"Snapshot analyzed: score={score} readiness={readiness.value} "
            f"stress={stress_level.value}"
        )
        return insights
