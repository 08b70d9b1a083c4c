"""
Recommendation synthesizer.

Turns an InsightVector into:
- Recommendation lists (training, recovery, nutrition, lifestyle)
- A risk assessment (immediate, short term, long term)
- Plan adjustments, realised through the PlanMutationEngine
- An ActionBundle of concrete numeric decisions

Recommendation and risk rules are independent: each one checks its own
insight fields and any number of them can fire for the same snapshot.
"""

from typing import Any, Callable, Dict, Optional, Tuple, Union
import logging

from .base import BaseService
from .biometrics import GLUCOSE_TIME_IN_RANGE_MIN, HYDRATION_LEVEL_MIN, BiometricInsightEngine
from .plan_mutation import PlanMutationEngine
from ..config import Settings
from ..models.insights import (
    LOW_STATUSES,
    ActionBundle,
    EnergyLevel,
    InsightVector,
    NutrientChange,
    NutritionAdjustment,
    PercentageAdjustment,
    PlanAdjustments,
    RecommendationBundle,
    RestRecommendation,
    RiskAssessment,
    RPEModification,
    StatusLevel,
    StressLevel,
    TrainingContext,
    TrainingReadiness,
    WearableInterpretation,
    load_context,
)
from ..models.plans import ModificationRequest, ModificationType
from ..models.wearables import WearableSnapshot, load_snapshot


InsightRule = Tuple[str, Callable[[InsightVector], bool], str]


RECOMMENDATION_RULES: Tuple[InsightRule, ...] = (
    # Training
    ("training", lambda i: i.training_readiness == TrainingReadiness.REST,
     "Programa un día completo de descanso para permitir la recuperación"),
    ("training", lambda i: i.training_readiness == TrainingReadiness.CAUTION,
     "Entrena con moderación y reduce la intensidad en un 15-20%"),
    ("training", lambda i: i.intensity_adjustment_needed,
     "Considera reducir la intensidad del entrenamiento"),
    ("training", lambda i: i.volume_adjustment_needed,
     "Reduce el volumen de entrenamiento en un 20-25%"),
    ("training", lambda i: i.rpe_adjustment_needed,
     "Ajusta tu RPE objetivo a 1-2 puntos por debajo de lo normal"),
    # Recovery
    ("recovery", lambda i: i.sleep_quality not in (StatusLevel.OPTIMAL, StatusLevel.GOOD),
     "Prioriza dormir 7-9 horas para mejorar la recuperación"),
    ("recovery", lambda i: i.hrv_status in LOW_STATUSES,
     "Practica respiración diafragmática para mejorar la variabilidad cardíaca"),
    ("recovery", lambda i: i.stress_elevated,
     "Incorpora técnicas de manejo del estrés como meditación o yoga"),
    # Nutrition
    ("nutrition", lambda i: i.nutrition_adjustment_needed,
     "Optimiza la composición de comidas y el momento de las ingestas"),
    # Lifestyle
    ("lifestyle", lambda i: i.energy_level in (EnergyLevel.LOW, EnergyLevel.VERY_LOW),
     "Considera reducir las actividades no esenciales para conservar energía"),
)

RISK_RULES: Tuple[InsightRule, ...] = (
    ("immediate", lambda i: i.training_readiness == TrainingReadiness.REST,
     "Riesgo de sobreentrenamiento si se entrena hoy"),
    ("immediate", lambda i: i.energy_level == EnergyLevel.VERY_LOW,
     "Riesgo de lesiones por fatiga extrema"),
    ("short_term", lambda i: i.hrv_status in LOW_STATUSES,
     "Riesgo de sobreentrenamiento en los próximos días"),
    ("short_term", lambda i: i.sleep_quality in LOW_STATUSES,
     "Rendimiento comprometido en los próximos entrenamientos"),
    ("long_term", lambda i: i.stress_elevated,
     "Riesgo de burnout o sobreentrenamiento crónico"),
)

# First match wins
REST_REASONS: Tuple[Tuple[Callable[[InsightVector], bool], str], ...] = (
    (lambda i: i.energy_level == EnergyLevel.VERY_LOW,
     "Nivel de energía extremadamente bajo"),
    (lambda i: i.hrv_status == StatusLevel.CRITICAL,
     "HRV críticamente bajo indicando estrés fisiológico elevado"),
    (lambda i: i.stress_level == StressLevel.EXTREME,
     "Nivel de estrés extremo"),
    (lambda i: i.sleep_quality == StatusLevel.CRITICAL,
     "Calidad de sueño críticamente baja"),
)
DEFAULT_REST_REASON = "Recomendación de descanso basada en múltiples métricas"


def rest_reason(insights: InsightVector) -> str:
    """Most pressing reason to rest, in priority order."""
    for predicate, reason in REST_REASONS:
        if predicate(insights):
            return reason
    return DEFAULT_REST_REASON


class RecommendationSynthesizer(BaseService):
    """Synthesizes recommendations, risks and actions from insights."""

    def __init__(
        self,
        insight_engine: Optional[BiometricInsightEngine] = None,
        mutation_engine: Optional[PlanMutationEngine] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)
        self.insight_engine = insight_engine or BiometricInsightEngine(
            settings=self.settings, logger=logger
        )
        self.mutation_engine = mutation_engine or PlanMutationEngine(
            settings=self.settings, logger=logger
        )

    def generate_recommendations(
        self,
        insights: InsightVector,
        context: Optional[TrainingContext] = None,
    ) -> RecommendationBundle:
        """Collect every recommendation whose rule fires."""
        bundle = RecommendationBundle()
        for category, predicate, message in RECOMMENDATION_RULES:
            if predicate(insights):
                getattr(bundle, category).append(message)
        return bundle

    def assess_risks(self, insights: InsightVector) -> RiskAssessment:
        """Collect every risk whose rule fires."""
        risks = RiskAssessment()
        for bucket, predicate, message in RISK_RULES:
            if predicate(insights):
                getattr(risks, bucket).append(message)
        return risks

    def build_synthetic_request(self, insights: InsightVector) -> ModificationRequest:
        """
        Pick the single plan change the insights call for.

        Priority: intensity and volume both flagged, then intensity alone,
        then volume alone; otherwise no change.
        """
        settings = self.settings
        if insights.intensity_adjustment_needed and insights.volume_adjustment_needed:
            return ModificationRequest(
                type=ModificationType.INTENSITY_CHANGE,
                value=settings.combined_intensity_reduction_pct,
                details="Reducing intensity due to poor recovery metrics",
            )
        if insights.intensity_adjustment_needed:
            return ModificationRequest(
                type=ModificationType.INTENSITY_CHANGE,
                value=settings.intensity_reduction_pct,
                details="Reducing intensity due to elevated stress or poor HRV",
            )
        if insights.volume_adjustment_needed:
            return ModificationRequest(
                type=ModificationType.VOLUME_CHANGE,
                value=settings.volume_reduction_pct,
                details="Reducing volume due to poor recovery metrics",
            )
        return ModificationRequest(type=ModificationType.NONE)

    def generate_adjustments(
        self,
        insights: InsightVector,
        context: Union[TrainingContext, Dict[str, Any], None] = None,
    ) -> PlanAdjustments:
        """
        Adjust the active plan and pass through context data that needs review.

        Nutrition and progression data are returned unchanged when flagged.
        """
        context = load_context(context)
        adjustments = PlanAdjustments()

        request = self.build_synthetic_request(insights)
        if context.active_workout is not None and not request.is_none:
            result = self.mutation_engine.mutate(context.active_workout, request)
            adjustments.workout = result.modified_plan
            self.logger.debug(
                f"Active plan {context.active_workout.id} adjusted from wearable insights: "
                f"{request.type.value} {request.value}%"
            )

        # TODO: derive macro targets from glucose/hydration instead of passing data through
        if context.nutrition_data is not None and insights.nutrition_adjustment_needed:
            adjustments.nutrition = context.nutrition_data

        if context.progression_plans:
            adjustments.progression = list(context.progression_plans)

        return adjustments

    def translate_to_actions(
        self,
        user_id: str,
        snapshot: Union[WearableSnapshot, Dict[str, Any]],
        context: Union[TrainingContext, Dict[str, Any], None] = None,
    ) -> ActionBundle:
        """Concrete rest/volume/intensity/nutrition/RPE decisions for today."""
        snapshot = load_snapshot(snapshot)
        insights = self.insight_engine.analyze(snapshot)
        settings = self.settings

        should_rest = insights.training_readiness == TrainingReadiness.REST
        rest = RestRecommendation(
            should_rest=should_rest,
            reason=rest_reason(insights),
            duration="day" if should_rest else None,
        )

        volume = PercentageAdjustment(
            should_adjust=insights.volume_adjustment_needed,
            percentage=settings.volume_reduction_pct if insights.volume_adjustment_needed else 0,
            reason=(
                "Volumen reducido debido a métricas de recuperación insuficientes"
                if insights.volume_adjustment_needed
                else "No se requiere ajuste de volumen"
            ),
        )

        if insights.intensity_adjustment_needed:
            intensity_pct = (
                settings.high_stress_intensity_reduction_pct
                if insights.stress_elevated
                else settings.intensity_reduction_pct
            )
        else:
            intensity_pct = 0
        intensity = PercentageAdjustment(
            should_adjust=insights.intensity_adjustment_needed,
            percentage=intensity_pct,
            reason=(
                "Intensidad reducida debido a estrés elevado o HRV bajo"
                if insights.intensity_adjustment_needed
                else "No se requiere ajuste de intensidad"
            ),
        )

        vitals = snapshot.vitals
        nutrition = NutritionAdjustment(should_adjust=insights.nutrition_adjustment_needed)
        if vitals.glucose.time_in_range < GLUCOSE_TIME_IN_RANGE_MIN:
            nutrition.carbs = NutrientChange(
                increase=True,
                reason="Optimizar disponibilidad de glucosa para entrenamiento",
            )
        if vitals.hydration.level < HYDRATION_LEVEL_MIN:
            nutrition.hydration = NutrientChange(
                increase=True,
                reason="Aumentar ingesta de agua para mejorar hidratación",
            )

        rpe = RPEModification(
            should_modify=insights.rpe_adjustment_needed,
            target_rpe=(
                settings.target_rpe_reduced
                if insights.rpe_adjustment_needed
                else settings.target_rpe_standard
            ),
            reason=(
                "RPE reducido para aliviar carga fisiológica"
                if insights.rpe_adjustment_needed
                else "RPE objetivo estándar"
            ),
        )

        self.logger.debug(
            f"Actions for user {user_id}: rest={should_rest} "
            f"volume={volume.percentage}% intensity={intensity.percentage}%"
        )
        return ActionBundle(
            rest_recommendation=rest,
            volume_adjustment=volume,
            intensity_adjustment=intensity,
            nutrition_adjustment=nutrition,
            rpe_modification=rpe,
        )

    def interpret(
        self,
        user_id: str,
        snapshot: Union[WearableSnapshot, Dict[str, Any]],
        context: Union[TrainingContext, Dict[str, Any], None] = None,
    ) -> WearableInterpretation:
        """Full pass: insights, recommendations, adjustments and risks."""
        context = load_context(context)
        insights = self.insight_engine.analyze(snapshot)
        interpretation = WearableInterpretation(
            insights=insights,
            recommendations=self.generate_recommendations(insights, context),
            adjustments=self.generate_adjustments(insights, context),
            risk_assessment=self.assess_risks(insights),
        )
        self.logger.debug(
            f"Wearable data interpreted for user {user_id}: "
            f"readiness={insights.training_readiness.value}"
        )
        return interpretation
