"""Adaptive training adjustment engine.

Parses free-text requests into modification intents, derives insights from
wearable snapshots, mutates workout plans coherently and synthesizes
recommendations and concrete actions.
"""

from adaptive_training.config import Settings, get_settings
from adaptive_training.exceptions import (
    AdaptiveTrainingError,
    ErrorCode,
    PersistenceError,
    PlanValidationError,
    SnapshotValidationError,
    ContextValidationError,
)
from adaptive_training.models import (
    ModificationType,
    AdjustmentType,
    Exercise,
    DayPlan,
    WorkoutPlan,
    ModificationRequest,
    ProgressionAdjustment,
    ImpactAnalysis,
    ModificationResult,
    WearableSnapshot,
    InsightVector,
    TrainingContext,
    ActionBundle,
    load_plan,
    load_snapshot,
    load_context,
)
from adaptive_training.services import (
    IntentParser,
    BiometricInsightEngine,
    PlanMutationEngine,
    RecommendationSynthesizer,
    TrainingAdjustmentService,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "AdaptiveTrainingError",
    "ErrorCode",
    "PersistenceError",
    "PlanValidationError",
    "SnapshotValidationError",
    "ContextValidationError",
    "ModificationType",
    "AdjustmentType",
    "Exercise",
    "DayPlan",
    "WorkoutPlan",
    "ModificationRequest",
    "ProgressionAdjustment",
    "ImpactAnalysis",
    "ModificationResult",
    "WearableSnapshot",
    "InsightVector",
    "TrainingContext",
    "ActionBundle",
    "load_plan",
    "load_snapshot",
    "load_context",
    "IntentParser",
    "BiometricInsightEngine",
    "PlanMutationEngine",
    "RecommendationSynthesizer",
    "TrainingAdjustmentService",
]
