"""Insight, recommendation and action models derived from wearable data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, ValidationError as PydanticValidationError

from .base import CamelModel
from .plans import ProgressionPlan, WorkoutPlan
from ..exceptions import ContextValidationError


# =============================================================================
# Enums
# =============================================================================

class StatusLevel(str, Enum):
    """Five-step status scale shared by HRV, sleep and recovery."""
    OPTIMAL = "optimal"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class StressLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EXTREME = "extreme"


class TrainingReadiness(str, Enum):
    READY = "ready"
    CAUTION = "caution"
    REST = "rest"


class EnergyLevel(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    VERY_LOW = "veryLow"


LOW_STATUSES = (StatusLevel.POOR, StatusLevel.CRITICAL)
ELEVATED_STRESS = (StressLevel.HIGH, StressLevel.EXTREME)


# =============================================================================
# Insight Vector
# =============================================================================

@dataclass
class InsightVector:
    """Categorical summary of a wearable snapshot."""
    hrv_status: StatusLevel
    sleep_quality: StatusLevel
    stress_level: StressLevel
    recovery_status: StatusLevel
    training_readiness: TrainingReadiness
    energy_level: EnergyLevel
    rpe_adjustment_needed: bool
    volume_adjustment_needed: bool
    intensity_adjustment_needed: bool
    rest_adjustment_needed: bool
    nutrition_adjustment_needed: bool
    recovery_score: int = 0  # 0-100 composite

    @property
    def stress_elevated(self) -> bool:
        return self.stress_level in ELEVATED_STRESS

    def to_dict(self) -> dict:
        return {
            "hrvStatus": self.hrv_status.value,
            "sleepQuality": self.sleep_quality.value,
            "stressLevel": self.stress_level.value,
            "recoveryStatus": self.recovery_status.value,
            "trainingReadiness": self.training_readiness.value,
            "energyLevel": self.energy_level.value,
            "rpeAdjustmentNeeded": self.rpe_adjustment_needed,
            "volumeAdjustmentNeeded": self.volume_adjustment_needed,
            "intensityAdjustmentNeeded": self.intensity_adjustment_needed,
            "restAdjustmentNeeded": self.rest_adjustment_needed,
            "nutritionAdjustmentNeeded": self.nutrition_adjustment_needed,
            "recoveryScore": self.recovery_score,
        }


# =============================================================================
# Context
# =============================================================================

class TrainingContext(CamelModel):
    """What the caller knows about the athlete beyond the snapshot."""

    active_workout: Optional[WorkoutPlan] = None
    recovery_status: Optional[Dict[str, Any]] = None
    progression_plans: List[ProgressionPlan] = Field(default_factory=list)
    nutrition_data: Optional[Dict[str, Any]] = None
    user_habits: List[Dict[str, Any]] = Field(default_factory=list)


def load_context(data: Union[Dict[str, Any], TrainingContext, None]) -> TrainingContext:
    """Validate a raw payload into a TrainingContext. None yields an empty context."""
    if data is None:
        return TrainingContext()
    if isinstance(data, TrainingContext):
        return data
    try:
        return TrainingContext.model_validate(data)
    except PydanticValidationError as e:
        raise ContextValidationError(
            "Invalid training context payload",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


# =============================================================================
# Recommendations / Risks / Adjustments
# =============================================================================

@dataclass
class RecommendationBundle:
    training: List[str] = field(default_factory=list)
    recovery: List[str] = field(default_factory=list)
    nutrition: List[str] = field(default_factory=list)
    lifestyle: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "training": list(self.training),
            "recovery": list(self.recovery),
            "nutrition": list(self.nutrition),
            "lifestyle": list(self.lifestyle),
        }


@dataclass
class RiskAssessment:
    immediate: List[str] = field(default_factory=list)    # today / tomorrow
    short_term: List[str] = field(default_factory=list)   # next week
    long_term: List[str] = field(default_factory=list)    # months

    def to_dict(self) -> dict:
        return {
            "immediate": list(self.immediate),
            "shortTerm": list(self.short_term),
            "longTerm": list(self.long_term),
        }


@dataclass
class PlanAdjustments:
    """Context data adjusted (or passed through) in response to insights."""
    workout: Optional[WorkoutPlan] = None
    nutrition: Optional[Dict[str, Any]] = None
    progression: Optional[List[ProgressionPlan]] = None

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {}
        if self.workout is not None:
            result["workout"] = self.workout.to_dict()
        if self.nutrition is not None:
            result["nutrition"] = self.nutrition
        if self.progression is not None:
            result["progression"] = [p.to_dict() for p in self.progression]
        return result


@dataclass
class WearableInterpretation:
    insights: InsightVector
    recommendations: RecommendationBundle
    adjustments: PlanAdjustments
    risk_assessment: RiskAssessment

    def to_dict(self) -> dict:
        return {
            "insights": self.insights.to_dict(),
            "recommendations": self.recommendations.to_dict(),
            "adjustments": self.adjustments.to_dict(),
            "riskAssessment": self.risk_assessment.to_dict(),
        }


# =============================================================================
# Action Bundle
# =============================================================================

@dataclass
class RestRecommendation:
    should_rest: bool
    reason: str
    duration: Optional[str] = None  # "day", "weekend", "week"

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {"shouldRest": self.should_rest, "reason": self.reason}
        if self.duration is not None:
            result["duration"] = self.duration
        return result


@dataclass
class PercentageAdjustment:
    """A volume or intensity change expressed as a signed percentage."""
    should_adjust: bool
    percentage: int
    reason: str

    def to_dict(self) -> dict:
        return {
            "shouldAdjust": self.should_adjust,
            "percentage": self.percentage,
            "reason": self.reason,
        }


@dataclass
class NutrientChange:
    increase: bool
    reason: str

    def to_dict(self) -> dict:
        return {"increase": self.increase, "reason": self.reason}


@dataclass
class NutritionAdjustment:
    should_adjust: bool
    carbs: Optional[NutrientChange] = None
    protein: Optional[NutrientChange] = None
    fats: Optional[NutrientChange] = None
    hydration: Optional[NutrientChange] = None

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {"shouldAdjust": self.should_adjust}
        for name in ("carbs", "protein", "fats", "hydration"):
            change = getattr(self, name)
            if change is not None:
                result[name] = change.to_dict()
        return result


@dataclass
class RPEModification:
    should_modify: bool
    target_rpe: int
    reason: str

    def to_dict(self) -> dict:
        return {
            "shouldModify": self.should_modify,
            "targetRPE": self.target_rpe,
            "reason": self.reason,
        }


@dataclass
class ActionBundle:
    """Concrete decisions for today's training."""
    rest_recommendation: RestRecommendation
    volume_adjustment: PercentageAdjustment
    intensity_adjustment: PercentageAdjustment
    nutrition_adjustment: NutritionAdjustment
    rpe_modification: RPEModification

    def to_dict(self) -> dict:
        return {
            "restRecommendation": self.rest_recommendation.to_dict(),
            "volumeAdjustment": self.volume_adjustment.to_dict(),
            "intensityAdjustment": self.intensity_adjustment.to_dict(),
            "nutritionAdjustment": self.nutrition_adjustment.to_dict(),
            "rpeModification": self.rpe_modification.to_dict(),
        }
