"""Tests for the recommendation synthesizer."""

import pytest

from adaptive_training.config import Settings
from adaptive_training.exceptions import ContextValidationError
from adaptive_training.models import (
    EnergyLevel,
    InsightVector,
    ModificationType,
    StatusLevel,
    StressLevel,
    TrainingReadiness,
)
from adaptive_training.services.biometrics import BiometricInsightEngine
from adaptive_training.services.recommendations import (
    DEFAULT_REST_REASON,
    RecommendationSynthesizer,
    rest_reason,
)


@pytest.fixture
def synthesizer():
    return RecommendationSynthesizer()


@pytest.fixture
def analyze():
    return BiometricInsightEngine().analyze


def make_insights(**overrides) -> InsightVector:
    """Nominal insights with selected fields overridden."""
    values = dict(
        hrv_status=StatusLevel.GOOD,
        sleep_quality=StatusLevel.GOOD,
        stress_level=StressLevel.LOW,
        recovery_status=StatusLevel.GOOD,
        training_readiness=TrainingReadiness.READY,
        energy_level=EnergyLevel.HIGH,
        rpe_adjustment_needed=False,
        volume_adjustment_needed=False,
        intensity_adjustment_needed=False,
        rest_adjustment_needed=False,
        nutrition_adjustment_needed=False,
        recovery_score=80,
    )
    values.update(overrides)
    return InsightVector(**values)


class TestRecommendations:
    """Tests for recommendation lists."""

    def test_nominal_reading(self, synthesizer, analyze, optimal_snapshot):
        bundle = synthesizer.generate_recommendations(analyze(optimal_snapshot))
        assert bundle.training == [
            "Entrena con moderación y reduce la intensidad en un 15-20%"
        ]
        assert bundle.recovery == []
        assert bundle.nutrition == []
        assert bundle.lifestyle == []

    def test_ready_has_no_training_advice(self, synthesizer):
        bundle = synthesizer.generate_recommendations(make_insights())
        assert bundle.to_dict() == {
            "training": [], "recovery": [], "nutrition": [], "lifestyle": [],
        }

    def test_critical_reading(self, synthesizer, analyze, critical_snapshot):
        bundle = synthesizer.generate_recommendations(analyze(critical_snapshot))

        assert bundle.training[0] == (
            "Programa un día completo de descanso para permitir la recuperación"
        )
        assert len(bundle.training) == 4
        assert len(bundle.recovery) == 3
        assert bundle.lifestyle == [
            "Considera reducir las actividades no esenciales para conservar energía"
        ]

    def test_rules_fire_independently(self, synthesizer):
        """Readiness and intensity advice can both appear."""
        bundle = synthesizer.generate_recommendations(make_insights(
            training_readiness=TrainingReadiness.CAUTION,
            intensity_adjustment_needed=True,
        ))
        assert len(bundle.training) == 2

    def test_nutrition(self, synthesizer):
        bundle = synthesizer.generate_recommendations(
            make_insights(nutrition_adjustment_needed=True)
        )
        assert bundle.nutrition == [
            "Optimiza la composición de comidas y el momento de las ingestas"
        ]

    def test_fair_sleep_recommends_more_sleep(self, synthesizer):
        bundle = synthesizer.generate_recommendations(
            make_insights(sleep_quality=StatusLevel.FAIR)
        )
        assert bundle.recovery == ["Prioriza dormir 7-9 horas para mejorar la recuperación"]


class TestRiskAssessment:
    """Tests for risk buckets."""

    def test_nominal_reading_has_no_risks(self, synthesizer, analyze, optimal_snapshot):
        risks = synthesizer.assess_risks(analyze(optimal_snapshot))
        assert risks.immediate == []
        assert risks.short_term == []
        assert risks.long_term == []

    def test_critical_reading(self, synthesizer, analyze, critical_snapshot):
        risks = synthesizer.assess_risks(analyze(critical_snapshot))
        assert risks.immediate == [
            "Riesgo de sobreentrenamiento si se entrena hoy",
            "Riesgo de lesiones por fatiga extrema",
        ]
        assert len(risks.short_term) == 2
        assert risks.long_term == ["Riesgo de burnout o sobreentrenamiento crónico"]

    def test_high_stress_long_term_only(self, synthesizer):
        risks = synthesizer.assess_risks(make_insights(stress_level=StressLevel.HIGH))
        assert risks.immediate == []
        assert risks.short_term == []
        assert len(risks.long_term) == 1

    def test_to_dict_keys(self, synthesizer):
        assert set(synthesizer.assess_risks(make_insights()).to_dict()) == {
            "immediate", "shortTerm", "longTerm",
        }


class TestSyntheticRequest:
    """Tests for the plan change derived from insights."""

    def test_combined(self, synthesizer, analyze, critical_snapshot):
        request = synthesizer.build_synthetic_request(analyze(critical_snapshot))
        assert request.type == ModificationType.INTENSITY_CHANGE
        assert request.value == -15

    def test_intensity_only(self, synthesizer, analyze, snapshot_factory):
        """Stress 60 is high, score stays at 85."""
        request = synthesizer.build_synthetic_request(analyze(snapshot_factory(stress=60)))
        assert request.type == ModificationType.INTENSITY_CHANGE
        assert request.value == -10

    def test_volume_only(self, synthesizer):
        request = synthesizer.build_synthetic_request(
            make_insights(volume_adjustment_needed=True)
        )
        assert request.type == ModificationType.VOLUME_CHANGE
        assert request.value == -20

    def test_none(self, synthesizer):
        assert synthesizer.build_synthetic_request(make_insights()).is_none

    def test_values_from_settings(self):
        synthesizer = RecommendationSynthesizer(
            settings=Settings(combined_intensity_reduction_pct=-25)
        )
        request = synthesizer.build_synthetic_request(make_insights(
            intensity_adjustment_needed=True,
            volume_adjustment_needed=True,
        ))
        assert request.value == -25


class TestAdjustments:
    """Tests for plan adjustments against a context."""

    def test_adjusts_active_workout(self, synthesizer, analyze, critical_snapshot, plan_payload):
        context = {"activeWorkout": plan_payload}
        adjustments = synthesizer.generate_adjustments(analyze(critical_snapshot), context)

        workout = adjustments.workout
        assert workout is not None
        assert workout.days[0].exercises[0].notes == "Intensidad ajustada en tiempo real: -15%"
        assert "notes" not in plan_payload["days"][0]["exercises"][0]

    def test_no_change_leaves_workout_unset(self, synthesizer, analyze, optimal_snapshot, plan_payload):
        adjustments = synthesizer.generate_adjustments(
            analyze(optimal_snapshot), {"activeWorkout": plan_payload}
        )
        assert adjustments.workout is None

    def test_no_active_workout(self, synthesizer, analyze, critical_snapshot):
        adjustments = synthesizer.generate_adjustments(analyze(critical_snapshot), None)
        assert adjustments.workout is None
        assert adjustments.to_dict() == {}

    def test_nutrition_passed_through_when_flagged(self, synthesizer, analyze, snapshot_factory):
        nutrition = {"calories": 2500, "protein": 160}
        adjustments = synthesizer.generate_adjustments(
            analyze(snapshot_factory(time_in_range=60)), {"nutritionData": nutrition}
        )
        assert adjustments.nutrition == nutrition

    def test_nutrition_ignored_when_not_flagged(self, synthesizer, analyze, optimal_snapshot):
        adjustments = synthesizer.generate_adjustments(
            analyze(optimal_snapshot), {"nutritionData": {"calories": 2500}}
        )
        assert adjustments.nutrition is None

    def test_progression_passed_through(self, synthesizer, analyze, optimal_snapshot):
        context = {"progressionPlans": [{"exerciseName": "Squat", "currentWeight": 100}]}
        adjustments = synthesizer.generate_adjustments(analyze(optimal_snapshot), context)

        assert len(adjustments.progression) == 1
        assert adjustments.progression[0].exercise_name == "Squat"
        assert adjustments.to_dict()["progression"][0]["currentWeight"] == 100

    def test_invalid_context(self, synthesizer):
        with pytest.raises(ContextValidationError):
            synthesizer.generate_adjustments(make_insights(), {"activeWorkout": {"name": "x"}})


class TestActions:
    """Tests for the action bundle."""

    def test_nominal_reading(self, synthesizer, optimal_snapshot):
        actions = synthesizer.translate_to_actions("user-1", optimal_snapshot)

        assert actions.rest_recommendation.should_rest is False
        assert actions.rest_recommendation.reason == DEFAULT_REST_REASON
        assert actions.rest_recommendation.duration is None
        assert actions.volume_adjustment.should_adjust is False
        assert actions.volume_adjustment.percentage == 0
        assert actions.intensity_adjustment.percentage == 0
        assert actions.nutrition_adjustment.should_adjust is False
        assert actions.nutrition_adjustment.carbs is None
        assert actions.rpe_modification.should_modify is False
        assert actions.rpe_modification.target_rpe == 7

    def test_critical_reading(self, synthesizer, critical_snapshot):
        actions = synthesizer.translate_to_actions("user-1", critical_snapshot)

        assert actions.rest_recommendation.should_rest is True
        assert actions.rest_recommendation.reason == "Nivel de energía extremadamente bajo"
        assert actions.rest_recommendation.duration == "day"
        assert actions.volume_adjustment.percentage == -20
        assert actions.intensity_adjustment.percentage == -15
        assert actions.rpe_modification.target_rpe == 6

    def test_extreme_stress_reason(self, synthesizer, snapshot_factory):
        actions = synthesizer.translate_to_actions("user-1", snapshot_factory(stress=85))
        assert actions.rest_recommendation.should_rest is True
        assert actions.rest_recommendation.reason == "Nivel de estrés extremo"
        assert actions.intensity_adjustment.percentage == -15

    def test_nutrition_changes(self, synthesizer, snapshot_factory):
        actions = synthesizer.translate_to_actions(
            "user-1", snapshot_factory(time_in_range=60, hydration=70)
        )
        nutrition = actions.nutrition_adjustment
        assert nutrition.should_adjust is True
        assert nutrition.carbs.increase is True
        assert nutrition.hydration.increase is True
        assert nutrition.protein is None
        assert nutrition.fats is None

    def test_to_dict(self, synthesizer, optimal_snapshot):
        data = synthesizer.translate_to_actions("user-1", optimal_snapshot).to_dict()
        assert set(data) == {
            "restRecommendation",
            "volumeAdjustment",
            "intensityAdjustment",
            "nutritionAdjustment",
            "rpeModification",
        }
        assert data["rpeModification"]["targetRPE"] == 7
        assert "duration" not in data["restRecommendation"]

    def test_settings_injection(self, critical_snapshot):
        synthesizer = RecommendationSynthesizer(
            settings=Settings(volume_reduction_pct=-30, target_rpe_reduced=5)
        )
        actions = synthesizer.translate_to_actions("user-1", critical_snapshot)
        assert actions.volume_adjustment.percentage == -30
        assert actions.rpe_modification.target_rpe == 5


class TestRestReason:
    """Tests for rest reason priority."""

    def test_critical_hrv_before_stress(self):
        insights = make_insights(
            hrv_status=StatusLevel.CRITICAL, stress_level=StressLevel.EXTREME
        )
        assert rest_reason(insights).startswith("HRV críticamente bajo")

    def test_critical_sleep(self):
        insights = make_insights(sleep_quality=StatusLevel.CRITICAL)
        assert rest_reason(insights) == "Calidad de sueño críticamente baja"

    def test_default(self):
        assert rest_reason(make_insights()) == DEFAULT_REST_REASON


class TestInterpret:
    """Tests for the full interpretation pass."""

    def test_full_pass(self, synthesizer, critical_snapshot, plan_payload):
        interpretation = synthesizer.interpret(
            "user-1", critical_snapshot, {"activeWorkout": plan_payload}
        )
        assert interpretation.insights.training_readiness == TrainingReadiness.REST
        assert interpretation.recommendations.training
        assert interpretation.adjustments.workout is not None
        assert interpretation.risk_assessment.immediate

        data = interpretation.to_dict()
        assert set(data) == {"insights", "recommendations", "adjustments", "riskAssessment"}
        assert data["adjustments"]["workout"]["id"] == "test-plan-1"

    def test_without_context(self, synthesizer, optimal_snapshot):
        interpretation = synthesizer.interpret("user-1", optimal_snapshot)
        assert interpretation.adjustments.to_dict() == {}
