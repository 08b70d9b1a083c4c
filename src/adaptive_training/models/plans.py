"""Workout plan models and the records produced when a plan is modified."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import (
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_serializer,
    field_validator,
)

from .base import CamelModel, to_camel
from ..exceptions import PlanValidationError


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


# =============================================================================
# Enums
# =============================================================================

class ModificationType(str, Enum):
    """Kinds of plan modification a request can ask for."""
    EXERCISE_CHANGE = "exercise_change"
    LOAD_REDUCTION = "load_reduction"
    LOAD_INCREASE = "load_increase"
    INTENSITY_CHANGE = "intensity_change"
    VOLUME_CHANGE = "volume_change"
    NONE = "none"


class AdjustmentType(str, Enum):
    """Dimension a progression adjustment acts on."""
    WEIGHT = "weight"
    VOLUME = "volume"      # also recorded for exercise swaps
    INTENSITY = "intensity"
    DELOAD = "deload"


# =============================================================================
# Plan Models
# =============================================================================

class Exercise(CamelModel):
    """A single prescribed exercise. Load lives in notes, never as a weight."""

    name: str
    sets: int = Field(..., ge=1)
    reps: str = Field(..., description="Rep range, e.g. '8-12'")
    rest: int = Field(..., ge=0, description="Rest between sets in seconds")
    equipment: str = ""
    notes: Optional[str] = None

    def add_note(self, note: str) -> None:
        """Append a note, separated from existing notes by ' | '."""
        if self.notes:
            self.notes += f" | {note}"
        else:
            self.notes = note


class DayPlan(CamelModel):
    """One training day of a plan."""

    day: int
    focus: str = ""
    exercises: List[Exercise] = Field(default_factory=list)


class WorkoutPlan(CamelModel):
    """A structured multi-day workout plan."""

    id: str
    name: str
    description: str = ""
    focus: List[str] = Field(default_factory=list)
    days: List[DayPlan] = Field(default_factory=list)
    duration: int = Field(0, description="Session duration in minutes")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    difficulty: str = "intermediate"
    equipment: List[str] = Field(default_factory=list)
    estimated_calories: Optional[int] = None

    def iter_exercises(self) -> Iterator[Exercise]:
        """Yield every exercise in day order."""
        for day in self.days:
            yield from day.exercises

    @property
    def exercise_count(self) -> int:
        """Total number of exercises across all days."""
        return sum(len(day.exercises) for day in self.days)


def load_plan(data: Union[Dict[str, Any], WorkoutPlan]) -> WorkoutPlan:
    """Validate a raw payload into a WorkoutPlan."""
    if isinstance(data, WorkoutPlan):
        return data
    try:
        return WorkoutPlan.model_validate(data)
    except PydanticValidationError as e:
        raise PlanValidationError(
            "Invalid workout plan payload",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


# =============================================================================
# Modification Records
# =============================================================================

@dataclass
class ModificationRequest:
    """
    A typed intent to change a workout plan.

    `value` is a signed percentage. Unknown type strings are kept as-is and
    treated as no-ops by the mutation engine.
    """
    type: Union[ModificationType, str] = ModificationType.NONE
    exercise_name: Optional[str] = None
    value: Optional[float] = None
    details: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.type, str) and not isinstance(self.type, ModificationType):
            try:
                self.type = ModificationType(self.type)
            except ValueError:
                pass

    @property
    def is_none(self) -> bool:
        """True when the request asks for nothing recognised."""
        return not isinstance(self.type, ModificationType) or self.type == ModificationType.NONE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModificationRequest":
        return cls(
            type=data.get("type", ModificationType.NONE),
            exercise_name=data.get("exerciseName", data.get("exercise_name")),
            value=data.get("value"),
            details=data.get("details"),
        )

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {
            "type": self.type.value if isinstance(self.type, ModificationType) else self.type,
        }
        if self.exercise_name is not None:
            result["exerciseName"] = self.exercise_name
        if self.value is not None:
            result["value"] = self.value
        if self.details is not None:
            result["details"] = self.details
        return result


@dataclass
class ProgressionAdjustment:
    """One recorded change to a single exercise."""
    exercise_name: str
    adjustment_type: AdjustmentType
    value: float  # signed percentage
    reason: str
    confidence: float  # 0-1
    applied: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressionAdjustment":
        return cls(
            exercise_name=data.get("exerciseName", data.get("exercise_name", "")),
            adjustment_type=AdjustmentType(data.get("adjustmentType", data.get("adjustment_type"))),
            value=data.get("value", 0),
            reason=data.get("reason", ""),
            confidence=data.get("confidence", 0),
            applied=data.get("applied", True),
        )

    def to_dict(self) -> dict:
        return {
            "exerciseName": self.exercise_name,
            "adjustmentType": self.adjustment_type.value,
            "value": self.value,
            "reason": self.reason,
            "confidence": self.confidence,
            "applied": self.applied,
        }


@dataclass
class ImpactAnalysis:
    """How a mutation touches the plan and the rest of the system."""
    affected_exercises: List[str] = field(default_factory=list)
    ecosystem_impact: List[str] = field(default_factory=list)
    coherence_maintained: bool = True

    def to_dict(self) -> dict:
        return {
            "affectedExercises": list(self.affected_exercises),
            "ecosystemImpact": list(self.ecosystem_impact),
            "coherenceMaintained": self.coherence_maintained,
        }


@dataclass
class ModificationResult:
    """Output of a single plan mutation."""
    modified_plan: WorkoutPlan
    adjustments: List[ProgressionAdjustment]
    impact_analysis: ImpactAnalysis

    def to_dict(self) -> dict:
        return {
            "modifiedPlan": self.modified_plan.to_dict(),
            "adjustments": [a.to_dict() for a in self.adjustments],
            "impactAnalysis": self.impact_analysis.to_dict(),
        }


class ProgressionPlan(CamelModel):
    """Progression entry handed to the persistence port."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    exercise_name: str
    current_weight: float = 0
    recommended_weight: float = 0
    next_phase: str = "accumulation"
    adjustments: List[ProgressionAdjustment] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)

    @field_validator("adjustments", mode="before")
    @classmethod
    def _parse_adjustments(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [
                ProgressionAdjustment.from_dict(item) if isinstance(item, dict) else item
                for item in value
            ]
        return value

    @field_serializer("adjustments")
    def _serialize_adjustments(self, adjustments: List[ProgressionAdjustment]) -> List[dict]:
        return [a.to_dict() for a in adjustments]
