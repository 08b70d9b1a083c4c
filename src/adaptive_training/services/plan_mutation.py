"""
Plan mutation engine.

Applies a ModificationRequest to a workout plan while keeping the plan
structurally coherent. The caller's plan is never touched: every call works
on a deep copy and returns fresh adjustment records.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union
import logging

from .base import BaseService
from ..config import Settings
from ..models.plans import (
    AdjustmentType,
    ImpactAnalysis,
    ModificationRequest,
    ModificationResult,
    ModificationType,
    ProgressionAdjustment,
    WorkoutPlan,
    load_plan,
    utcnow,
)
from ..utils import round_half_up


# Magnitudes used when a request carries no (or a zero) value
DEFAULT_LOAD_REDUCTION_PCT = 10
DEFAULT_LOAD_INCREASE_PCT = 5
DEFAULT_INTENSITY_PCT = 5
DEFAULT_VOLUME_PCT = 10

EXERCISE_SWAP_CONFIDENCE = 0.9
LOAD_CONFIDENCE = 0.95
INTENSITY_CONFIDENCE = 0.9
VOLUME_CONFIDENCE = 0.85

MAGNITUDE_TYPES = (
    ModificationType.LOAD_REDUCTION,
    ModificationType.LOAD_INCREASE,
    ModificationType.INTENSITY_CHANGE,
    ModificationType.VOLUME_CHANGE,
)

PROGRESSION_RESYNC_NOTE = (
    "Los ajustes de progresión se actualizarán automáticamente basados en las modificaciones."
)
EXTRA_RECOVERY_NOTE = (
    "El aumento de carga/intensidad/volumen puede requerir más tiempo de recuperación."
)
EXTRA_CALORIES_NOTE = (
    "El aumento de volumen/intensidad puede requerir un mayor aporte calórico."
)
EASIER_RECOVERY_NOTE = (
    "La reducción de carga/intensidad/volumen puede facilitar la recuperación."
)
WEARABLE_REEVALUATION_NOTE = (
    "Las métricas de wearables se reevaluarán en base a las nuevas exigencias."
)


def format_pct(value: float, signed: bool = True) -> str:
    """Render a percentage without a trailing '.0' for whole numbers."""
    number = int(value) if float(value).is_integer() else value
    if signed and value > 0:
        return f"+{number}"
    return f"{number}"


def effective_percentage(request: ModificationRequest) -> Optional[float]:
    """Signed percentage a request resolves to, or None for non-magnitude types."""
    value = request.value or 0
    if request.type == ModificationType.LOAD_REDUCTION:
        return -abs(value or DEFAULT_LOAD_REDUCTION_PCT)
    if request.type == ModificationType.LOAD_INCREASE:
        return abs(value or DEFAULT_LOAD_INCREASE_PCT)
    if request.type == ModificationType.INTENSITY_CHANGE:
        return value or DEFAULT_INTENSITY_PCT
    if request.type == ModificationType.VOLUME_CHANGE:
        return value or DEFAULT_VOLUME_PCT
    return None


class PlanMutationEngine(BaseService):
    """Mutates workout plans according to modification requests."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(settings=settings, logger=logger)
        self._clock = clock

    def mutate(
        self,
        plan: Union[WorkoutPlan, Dict[str, Any]],
        request: Union[ModificationRequest, Dict[str, Any]],
        day_index: int = 0,
        exercise_index: int = 0,
    ) -> ModificationResult:
        """
        Apply a modification request to a copy of the plan.

        Args:
            plan: Plan to modify (left untouched)
            request: What to change
            day_index: Day holding the exercise to swap (exercise_change only)
            exercise_index: Position of the exercise to swap within that day

        Returns:
            ModificationResult with the modified plan, one adjustment per
            affected exercise, and the impact analysis
        """
        original = load_plan(plan)
        if isinstance(request, dict):
            request = ModificationRequest.from_dict(request)

        modified = original.model_copy(deep=True)
        adjustments: List[ProgressionAdjustment] = []
        affected: List[str] = []
        pct = effective_percentage(request)

        if request.type == ModificationType.EXERCISE_CHANGE:
            self._apply_exercise_change(
                modified, request, day_index, exercise_index, affected, adjustments
            )
        elif request.type in (ModificationType.LOAD_REDUCTION, ModificationType.LOAD_INCREASE):
            self._apply_annotated_change(
                modified, pct, AdjustmentType.WEIGHT, affected, adjustments
            )
        elif request.type == ModificationType.INTENSITY_CHANGE:
            self._apply_annotated_change(
                modified, pct, AdjustmentType.INTENSITY, affected, adjustments
            )
        elif request.type == ModificationType.VOLUME_CHANGE:
            self._apply_volume_change(modified, pct, affected, adjustments)
        elif request.type != ModificationType.NONE:
            self.logger.warning(f"Unknown modification type '{request.type}', plan left unchanged")

        impact = ImpactAnalysis(
            affected_exercises=affected,
            ecosystem_impact=self.analyze_ecosystem_impact(request, pct),
            coherence_maintained=self.ensure_global_coherence(modified, original),
        )
        if not impact.coherence_maintained:
            self.logger.warning(
                f"Plan {original.id} lost structural coherence after {request.to_dict()['type']}"
            )
        self.logger.debug(
            f"Plan {original.id} mutated: {len(adjustments)} adjustments, "
            f"{len(affected)} exercises affected"
        )
        return ModificationResult(
            modified_plan=modified,
            adjustments=adjustments,
            impact_analysis=impact,
        )

    def _apply_exercise_change(
        self,
        plan: WorkoutPlan,
        request: ModificationRequest,
        day_index: int,
        exercise_index: int,
        affected: List[str],
        adjustments: List[ProgressionAdjustment],
    ) -> None:
        """Swap one exercise, the first of the first day by default."""
        if not 0 <= day_index < len(plan.days):
            return
        exercises = plan.days[day_index].exercises
        if not 0 <= exercise_index < len(exercises):
            return

        exercise = exercises[exercise_index]
        original_name = exercise.name
        exercise.name = request.exercise_name or f"Variación de {original_name}"
        exercise.add_note(
            f"Modificado en tiempo real: {request.details or 'Cambio de ejercicio solicitado'}"
        )
        affected.append(original_name)
        # Swaps are recorded as volume adjustments with no numeric change
        adjustments.append(ProgressionAdjustment(
            exercise_name=original_name,
            adjustment_type=AdjustmentType.VOLUME,
            value=0,
            reason=f"Ejercicio cambiado a {exercise.name}",
            confidence=EXERCISE_SWAP_CONFIDENCE,
            applied=True,
        ))

    def _apply_annotated_change(
        self,
        plan: WorkoutPlan,
        pct: float,
        adjustment_type: AdjustmentType,
        affected: List[str],
        adjustments: List[ProgressionAdjustment],
    ) -> None:
        """Load and intensity changes: annotate every exercise, no field changes."""
        if adjustment_type == AdjustmentType.WEIGHT:
            increase, decrease = "Aumento de carga solicitado", "Reducción de carga solicitada"
            note_label, confidence = "Carga ajustada", LOAD_CONFIDENCE
        else:
            increase, decrease = "Aumento de intensidad solicitado", "Reducción de intensidad solicitada"
            note_label, confidence = "Intensidad ajustada", INTENSITY_CONFIDENCE

        for exercise in plan.iter_exercises():
            affected.append(exercise.name)
            reason = (
                f"{increase} ({format_pct(pct, signed=False)}%)" if pct > 0
                else f"{decrease} ({format_pct(abs(pct), signed=False)}%)"
            )
            adjustments.append(ProgressionAdjustment(
                exercise_name=exercise.name,
                adjustment_type=adjustment_type,
                value=pct,
                reason=reason,
                confidence=confidence,
                applied=True,
            ))
            exercise.add_note(f"{note_label} en tiempo real: {format_pct(pct)}%")

    def _apply_volume_change(
        self,
        plan: WorkoutPlan,
        pct: float,
        affected: List[str],
        adjustments: List[ProgressionAdjustment],
    ) -> None:
        """Scale set counts by the percentage, never below one set."""
        for exercise in plan.iter_exercises():
            current_sets = exercise.sets
            new_sets = max(1, round_half_up(current_sets * (1 + pct / 100)))
            exercise.sets = new_sets
            affected.append(exercise.name)

            reason = (
                f"Aumento de volumen solicitado ({format_pct(pct, signed=False)}%)" if pct > 0
                else f"Reducción de volumen solicitada ({format_pct(abs(pct), signed=False)}%)"
            )
            adjustments.append(ProgressionAdjustment(
                exercise_name=exercise.name,
                adjustment_type=AdjustmentType.VOLUME,
                value=pct,
                reason=reason,
                confidence=VOLUME_CONFIDENCE,
                applied=True,
            ))
            exercise.add_note(
                f"Volumen ajustado en tiempo real: {format_pct(pct)}% "
                f"({current_sets} → {new_sets} sets)"
            )

    def analyze_ecosystem_impact(
        self,
        request: ModificationRequest,
        pct: Optional[float] = None,
    ) -> List[str]:
        """Cross-module notes describing what else the change touches."""
        if pct is None:
            pct = effective_percentage(request)

        notes = [PROGRESSION_RESYNC_NOTE]
        if request.type in MAGNITUDE_TYPES and pct is not None:
            if pct > 0:
                notes.append(EXTRA_RECOVERY_NOTE)
                notes.append(EXTRA_CALORIES_NOTE)
            elif pct < 0:
                notes.append(EASIER_RECOVERY_NOTE)
        notes.append(WEARABLE_REEVALUATION_NOTE)
        return notes

    def ensure_global_coherence(
        self,
        modified: WorkoutPlan,
        original: WorkoutPlan,
    ) -> bool:
        """
        Backfill scalar plan fields and check the day/exercise structure.

        Emptied focus, equipment or duration are restored from the original.
        Days or exercises are never fabricated: a plan with no days, or a day
        with no exercises, is reported as incoherent but still returned.
        Refreshes updated_at.
        """
        if not modified.focus:
            modified.focus = list(original.focus)
        if not modified.equipment:
            modified.equipment = list(original.equipment)
        if not modified.duration or modified.duration <= 0:
            modified.duration = original.duration
        modified.updated_at = self._clock()

        if not modified.days:
            return False
        return all(day.exercises for day in modified.days)
