"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import List, Tuple

import pytest

from adaptive_training.config import Settings
from adaptive_training.models import ProgressionPlan, WorkoutPlan, load_plan


FIXED_NOW = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def build_snapshot(
    hrv: float = 65,
    resting_heart_rate: float = 58,
    sleep_quality: float = 85,
    stress: float = 45,
    systolic: float = 118,
    diastolic: float = 78,
    time_in_range: float = 85,
    hydration: float = 88,
) -> dict:
    """Full wearable payload in camelCase, as a device sync would send it."""
    return {
        "source": "oura",
        "sleep": {
            "duration": 480,
            "quality": sleep_quality,
            "deepSleep": 120,
            "remSleep": 90,
            "lightSleep": 270,
            "wakeTimes": 1,
            "bedtime": "22:30",
            "wakeTime": "06:30",
            "sleepEfficiency": 92,
            "sleepLatency": 15,
        },
        "activity": {
            "steps": 8500,
            "calories": 2500,
            "activeMinutes": 90,
            "workoutType": "strength",
            "workoutDuration": 60,
            "vo2max": 50,
            "trainingLoad": 75,
            "lactateThreshold": 160,
            "maxHeartRate": 185,
            "zones": {"zone1": 30, "zone2": 25, "zone3": 20, "zone4": 10, "zone5": 5},
        },
        "recovery": {
            "hrv": hrv,
            "restingHeartRate": resting_heart_rate,
            "readiness": 82,
            "stress": stress,
            "recoveryScore": 78,
            "autonomicBalance": 1.2,
        },
        "vitals": {
            "bloodPressure": {"systolic": systolic, "diastolic": diastolic, "pulse": 58},
            "glucose": {
                "current": 95,
                "average24h": 92,
                "timeInRange": time_in_range,
                "variability": 8,
            },
            "temperature": {"body": 36.8, "skin": 33.2, "variance": 0.3},
            "hydration": {
                "level": hydration,
                "electrolytes": {"sodium": 140, "potassium": 4.2, "magnesium": 0.8},
            },
            "inflammation": {"crp": 0.5, "il6": 1.2, "score": 85},
        },
        "performance": {
            "fitnessAge": 28,
            "recoveryTime": 24,
            "trainingReadiness": 82,
            "metabolicEfficiency": 88,
            "powerOutput": {"ftp": 220, "critical": 320, "anaerobic": 650},
            "cognitiveLoad": 45,
        },
        "lastSync": "2025-03-01T07:00:00Z",
    }


@pytest.fixture
def snapshot_factory():
    """Build snapshot payloads with selected markers overridden."""
    return build_snapshot


@pytest.fixture
def optimal_snapshot() -> dict:
    """Healthy reading: recovery score 87, moderate stress."""
    return build_snapshot()


@pytest.fixture
def critical_snapshot() -> dict:
    """Exhausted reading: low HRV, extreme stress, poor sleep."""
    return build_snapshot(hrv=25, stress=90, sleep_quality=30)


@pytest.fixture
def plan_payload() -> dict:
    """Two-day plan with three exercises, camelCase keys."""
    return {
        "id": "test-plan-1",
        "name": "Test Workout Plan",
        "description": "A test workout plan for unit testing",
        "focus": ["strength", "hypertrophy"],
        "days": [
            {
                "day": 1,
                "focus": "Upper Body",
                "exercises": [
                    {"name": "Bench Press", "sets": 3, "reps": "8-12", "rest": 90, "equipment": "barbell"},
                    {"name": "Bent Over Row", "sets": 3, "reps": "8-12", "rest": 90, "equipment": "barbell"},
                ],
            },
            {
                "day": 2,
                "focus": "Lower Body",
                "exercises": [
                    {"name": "Squat", "sets": 3, "reps": "6-10", "rest": 120, "equipment": "barbell"},
                ],
            },
        ],
        "duration": 60,
        "createdAt": "2025-02-01T08:00:00+00:00",
        "updatedAt": "2025-02-01T08:00:00+00:00",
        "difficulty": "intermediate",
        "equipment": ["barbell", "dumbbells"],
        "estimatedCalories": 300,
    }


@pytest.fixture
def sample_plan(plan_payload) -> WorkoutPlan:
    return load_plan(plan_payload)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


class FakePlanStore:
    """Records writes instead of persisting them."""

    def __init__(self):
        self.plans: List[Tuple[str, WorkoutPlan]] = []
        self.progression: List[ProgressionPlan] = []

    def update_workout_plan(self, plan_id: str, plan: WorkoutPlan) -> None:
        self.plans.append((plan_id, plan))

    def add_progression_plan(self, entry: ProgressionPlan) -> None:
        self.progression.append(entry)


class FailingPlanStore(FakePlanStore):
    def update_workout_plan(self, plan_id: str, plan: WorkoutPlan) -> None:
        raise RuntimeError("database is locked")


@pytest.fixture
def plan_store() -> FakePlanStore:
    return FakePlanStore()


@pytest.fixture
def failing_plan_store() -> FailingPlanStore:
    return FailingPlanStore()
