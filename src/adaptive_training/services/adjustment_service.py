"""
Training adjustment service.

Wires the two entry paths into the engine:
- free text -> IntentParser -> PlanMutationEngine
- wearable snapshot -> BiometricInsightEngine -> RecommendationSynthesizer

and hands results to the persistence collaborator when asked to.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
import logging

from .base import BaseService, PlanStore
from .biometrics import BiometricInsightEngine
from .intent_parser import IntentParser
from .plan_mutation import PlanMutationEngine
from .recommendations import RecommendationSynthesizer
from ..config import Settings
from ..exceptions import PersistenceError
from ..models.insights import ActionBundle, TrainingContext, WearableInterpretation
from ..models.plans import (
    ModificationRequest,
    ModificationResult,
    ProgressionAdjustment,
    ProgressionPlan,
    WorkoutPlan,
)
from ..models.wearables import WearableSnapshot


@dataclass
class RequestOutcome:
    """A parsed user request and the plan change it produced."""
    request: ModificationRequest
    result: ModificationResult

    @property
    def changed(self) -> bool:
        return not self.request.is_none

    def to_dict(self) -> dict:
        return {
            "request": self.request.to_dict(),
            **self.result.to_dict(),
        }


class TrainingAdjustmentService(BaseService):
    """
    Entry point for adaptive training adjustments.

    All engines are injectable; defaults share this service's settings and
    logger. The service holds no state between calls.
    """

    def __init__(
        self,
        store: Optional[PlanStore] = None,
        parser: Optional[IntentParser] = None,
        mutation_engine: Optional[PlanMutationEngine] = None,
        insight_engine: Optional[BiometricInsightEngine] = None,
        synthesizer: Optional[RecommendationSynthesizer] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)
        self.store = store
        self.parser = parser or IntentParser(settings=self.settings, logger=logger)
        self.mutation_engine = mutation_engine or PlanMutationEngine(
            settings=self.settings, logger=logger
        )
        self.insight_engine = insight_engine or BiometricInsightEngine(
            settings=self.settings, logger=logger
        )
        self.synthesizer = synthesizer or RecommendationSynthesizer(
            insight_engine=self.insight_engine,
            mutation_engine=self.mutation_engine,
            settings=self.settings,
            logger=logger,
        )

    def handle_request(
        self,
        text: str,
        plan: Union[WorkoutPlan, Dict[str, Any]],
    ) -> RequestOutcome:
        """Classify a user request and apply it to a copy of the plan."""
        request = self.parser.classify(text)
        result = self.mutation_engine.mutate(plan, request)
        return RequestOutcome(request=request, result=result)

    def interpret_wearable_data(
        self,
        user_id: str,
        snapshot: Union[WearableSnapshot, Dict[str, Any]],
        context: Union[TrainingContext, Dict[str, Any], None] = None,
    ) -> WearableInterpretation:
        return self.synthesizer.interpret(user_id, snapshot, context)

    def translate_to_actions(
        self,
        user_id: str,
        snapshot: Union[WearableSnapshot, Dict[str, Any]],
        context: Union[TrainingContext, Dict[str, Any], None] = None,
    ) -> ActionBundle:
        return self.synthesizer.translate_to_actions(user_id, snapshot, context)

    def save_modified_plan(
        self,
        user_id: str,
        plan_id: str,
        modified_plan: WorkoutPlan,
        adjustments: List[ProgressionAdjustment],
    ) -> List[ProgressionPlan]:
        """
        Persist a modified plan and one progression entry per adjustment.

        Weights and phase are placeholders until the store supplies history.

        Returns:
            The progression entries written

        Raises:
            PersistenceError: No store is configured or the store failed
        """
        if self.store is None:
            raise PersistenceError("No plan store configured", plan_id=plan_id)

        entries = [
            ProgressionPlan(
                exercise_name=adjustment.exercise_name,
                current_weight=0,
                recommended_weight=0,
                next_phase="accumulation",
                adjustments=[adjustment],
                notes=[f"Ajuste en tiempo real aplicado: {adjustment.reason}"],
            )
            for adjustment in adjustments
        ]

        try:
            self.store.update_workout_plan(plan_id, modified_plan)
            for entry in entries:
                self.store.add_progression_plan(entry)
        except Exception as e:
            self.logger.error(f"Failed to save modified plan {plan_id}: {e}")
            raise PersistenceError(
                "Failed to save modified plan", plan_id=plan_id, original_error=e
            ) from e

        self.logger.info(f"Plan {plan_id} modified for user {user_id}")
        return entries
