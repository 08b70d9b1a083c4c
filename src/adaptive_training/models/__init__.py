"""Data models for the adaptive training engine."""

from .base import CamelModel, to_camel

from .plans import (
    # Enums
    ModificationType,
    AdjustmentType,
    # Plan models
    Exercise,
    DayPlan,
    WorkoutPlan,
    ProgressionPlan,
    # Modification records
    ModificationRequest,
    ProgressionAdjustment,
    ImpactAnalysis,
    ModificationResult,
    load_plan,
)

from .wearables import (
    WearableSource,
    SleepData,
    ActivityData,
    RecoveryData,
    VitalsData,
    PerformanceData,
    WearableSnapshot,
    load_snapshot,
)

from .insights import (
    # Enums
    StatusLevel,
    StressLevel,
    TrainingReadiness,
    EnergyLevel,
    # Insight / context
    InsightVector,
    TrainingContext,
    load_context,
    # Outputs
    RecommendationBundle,
    RiskAssessment,
    PlanAdjustments,
    WearableInterpretation,
    RestRecommendation,
    PercentageAdjustment,
    NutrientChange,
    NutritionAdjustment,
    RPEModification,
    ActionBundle,
)

__all__ = [
    "CamelModel",
    "to_camel",
    "ModificationType",
    "AdjustmentType",
    "Exercise",
    "DayPlan",
    "WorkoutPlan",
    "ProgressionPlan",
    "ModificationRequest",
    "ProgressionAdjustment",
    "ImpactAnalysis",
    "ModificationResult",
    "load_plan",
    "WearableSource",
    "SleepData",
    "ActivityData",
    "RecoveryData",
    "VitalsData",
    "PerformanceData",
    "WearableSnapshot",
    "load_snapshot",
    "StatusLevel",
    "StressLevel",
    "TrainingReadiness",
    "EnergyLevel",
    "InsightVector",
    "TrainingContext",
    "load_context",
    "RecommendationBundle",
    "RiskAssessment",
    "PlanAdjustments",
    "WearableInterpretation",
    "RestRecommendation",
    "PercentageAdjustment",
    "NutrientChange",
    "NutritionAdjustment",
    "RPEModification",
    "ActionBundle",
]
