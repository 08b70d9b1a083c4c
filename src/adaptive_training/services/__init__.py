"""Engine services for adaptive training adjustments."""

from .base import BaseService, PlanStore
from .intent_parser import IntentParser, IntentRule, DEFAULT_RULES
from .biometrics import BiometricInsightEngine
from .plan_mutation import PlanMutationEngine
from .recommendations import RecommendationSynthesizer
from .adjustment_service import RequestOutcome, TrainingAdjustmentService

__all__ = [
    # Base classes
    "BaseService",
    "PlanStore",
    # Engines
    "IntentParser",
    "IntentRule",
    "DEFAULT_RULES",
    "BiometricInsightEngine",
    "PlanMutationEngine",
    "RecommendationSynthesizer",
    # Facade
    "RequestOutcome",
    "TrainingAdjustmentService",
]
