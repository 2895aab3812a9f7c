"""
Figures shown on the daily overview: burn vs. target, BMI, macro grams.
"""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.intake import intake_for_day, remaining_calories
from core.models.health import HealthMetrics
from core.models.nutrition import NutritionRecommendation
from core.models.user import UserProfile
from core.nutrition_calc import bmi, bmi_category, calorie_progress


class DashboardSummary(BaseModel):
    resting_calories: float
    active_calories: float
    total_burned: float
    steps: int
    calorie_target: float
    progress: float
    consumed_calories: float
    remaining_calories: float
    protein_grams: float
    carbs_grams: float
    fat_grams: float
    bmi: float
    bmi_category: str
    health_authorized: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def build_dashboard(
    profile: UserProfile,
    metrics: HealthMetrics,
    rec: NutritionRecommendation,
    today: date | None = None,
) -> DashboardSummary:
    today = today or date.today()
    burned = metrics.total_burned
    consumed = intake_for_day(profile.meal_records, today)["calories"]
    value = bmi(profile.weight, profile.height)
    return DashboardSummary(
        resting_calories=metrics.resting_calories,
        active_calories=metrics.active_calories,
        total_burned=burned,
        steps=metrics.steps,
        calorie_target=rec.calorie_target,
        progress=calorie_progress(burned, rec.calorie_target),
        consumed_calories=consumed,
        remaining_calories=remaining_calories(consumed, rec.calorie_target),
        protein_grams=rec.protein_grams,
        carbs_grams=rec.carbs_grams,
        fat_grams=rec.fat_grams,
        bmi=value,
        bmi_category=bmi_category(value),
        health_authorized=metrics.is_authorized,
    )
