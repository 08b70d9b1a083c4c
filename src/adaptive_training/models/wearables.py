"""Wearable snapshot models.

A snapshot is one synced reading from a wearable (Garmin, Oura, WHOOP...).
Only a handful of fields drive the insight engine; the rest are carried so
that full device payloads validate unchanged.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import Field, ValidationError as PydanticValidationError

from .base import CamelModel
from ..exceptions import SnapshotValidationError


class WearableSource(str, Enum):
    """Supported wearable vendors."""
    GARMIN = "garmin"
    APPLE = "apple"
    FITBIT = "fitbit"
    OURA = "oura"
    WHOOP = "whoop"


# =============================================================================
# Sleep / Activity
# =============================================================================

class SleepData(CamelModel):
    """Last night's sleep."""

    duration: float = Field(0, ge=0, description="Minutes asleep")
    quality: float = Field(..., ge=0, le=100, description="Sleep quality 0-100")
    deep_sleep: float = Field(0, ge=0)
    rem_sleep: float = Field(0, ge=0)
    light_sleep: float = Field(0, ge=0)
    wake_times: int = 0
    bedtime: Optional[str] = None
    wake_time: Optional[str] = None
    sleep_efficiency: Optional[float] = None
    sleep_latency: Optional[float] = None


class HeartRateZoneMinutes(CamelModel):
    """Minutes spent in each heart rate zone."""

    zone1: float = 0
    zone2: float = 0
    zone3: float = 0
    zone4: float = 0
    zone5: float = 0


class ActivityData(CamelModel):
    """Daily activity summary."""

    steps: int = 0
    calories: float = 0
    active_minutes: float = 0
    workout_type: Optional[str] = None
    workout_duration: Optional[float] = None
    vo2max: Optional[float] = None
    training_load: Optional[float] = None
    lactate_threshold: Optional[float] = None
    max_heart_rate: Optional[float] = None
    zones: HeartRateZoneMinutes = Field(default_factory=HeartRateZoneMinutes)


# =============================================================================
# Recovery / Vitals
# =============================================================================

class RecoveryData(CamelModel):
    """Autonomic recovery markers."""

    hrv: float = Field(..., ge=0, description="Heart rate variability (ms)")
    resting_heart_rate: float = Field(..., ge=0)
    readiness: Optional[float] = None
    stress: float = Field(..., ge=0, le=100)
    recovery_score: Optional[float] = None  # vendor score, not used by the engine
    autonomic_balance: Optional[float] = None


class BloodPressure(CamelModel):
    systolic: float
    diastolic: float
    pulse: Optional[float] = None
    timestamp: Optional[str] = None


class GlucoseData(CamelModel):
    current: Optional[float] = None
    average24h: Optional[float] = None
    time_in_range: float = Field(100, ge=0, le=100, description="% of time in range")
    variability: Optional[float] = None
    timestamp: Optional[str] = None


class Electrolytes(CamelModel):
    sodium: Optional[float] = None
    potassium: Optional[float] = None
    magnesium: Optional[float] = None


class HydrationData(CamelModel):
    level: float = Field(100, ge=0, le=100)
    electrolytes: Electrolytes = Field(default_factory=Electrolytes)


class TemperatureData(CamelModel):
    body: Optional[float] = None
    skin: Optional[float] = None
    variance: Optional[float] = None


class InflammationData(CamelModel):
    crp: Optional[float] = None
    il6: Optional[float] = None
    score: Optional[float] = None


class VitalsData(CamelModel):
    """Vital signs block."""

    blood_pressure: BloodPressure
    glucose: GlucoseData = Field(default_factory=GlucoseData)
    temperature: TemperatureData = Field(default_factory=TemperatureData)
    hydration: HydrationData = Field(default_factory=HydrationData)
    inflammation: InflammationData = Field(default_factory=InflammationData)


# =============================================================================
# Performance / Snapshot
# =============================================================================

class PowerOutput(CamelModel):
    ftp: Optional[float] = None
    critical: Optional[float] = None
    anaerobic: Optional[float] = None


class PerformanceData(CamelModel):
    """Vendor performance estimates."""

    fitness_age: Optional[float] = None
    recovery_time: Optional[float] = None  # hours
    training_readiness: Optional[float] = None
    metabolic_efficiency: Optional[float] = None
    power_output: PowerOutput = Field(default_factory=PowerOutput)
    cognitive_load: Optional[float] = None


class WearableSnapshot(CamelModel):
    """A complete wearable reading."""

    source: Optional[WearableSource] = None
    sleep: SleepData
    activity: ActivityData = Field(default_factory=ActivityData)
    recovery: RecoveryData
    vitals: VitalsData
    performance: PerformanceData = Field(default_factory=PerformanceData)
    last_sync: Optional[str] = None


def load_snapshot(data: Union[Dict[str, Any], WearableSnapshot]) -> WearableSnapshot:
    """Validate a raw payload into a WearableSnapshot."""
    if isinstance(data, WearableSnapshot):
        return data
    try:
        return WearableSnapshot.model_validate(data)
    except PydanticValidationError as e:
        raise SnapshotValidationError(
            "Invalid wearable snapshot payload",
            errors=e.errors(include_url=False, include_context=False),
        ) from e
