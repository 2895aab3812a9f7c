"""
core/recommendation.py
────────────────────────────────────────────────────────────────────────
Rule-table nutrition advice.

  • `recommend(profile)`  → calorie target + macro split + note
  • `meal_plan(rec)`      → breakfast / lunch / dinner / snack suggestions
  • `meal_for_hour(...)`  → the suggestion matching a clock hour

The split is decided in two ordered stages:

  1. override by the most recent workout (or by goal when there is none)
  2. additive delta by dietary preference

Stage 2 is *not* re-normalised, so the three percentages may drift off
1.0 (e.g. lowCarb on top of a low-carb branch). That drift is kept.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from core.models.meal import MealSuggestion, MealType
from core.models.nutrition import NutritionRecommendation
from core.models.user import DietaryPreference, FitnessGoal, UserProfile, WorkoutType
from core.nutrition_calc import NutritionalCalculator

_LOG = logging.getLogger(__name__)

DEFAULT_TITLE = "Today's Nutrition Advice"
PLANT_PROTEIN_NOTE = (
    ". Include a variety of plant protein sources such as soy products, quinoa and nuts"
)


@dataclass(frozen=True)
class _Advice:
    title: str
    protein: float
    carbs: float
    fat: float
    note: str


_BASELINE = _Advice(DEFAULT_TITLE, 0.25, 0.45, 0.30, "")

_WORKOUT_ADVICE: Dict[WorkoutType, _Advice] = {
    WorkoutType.strength: _Advice(
        "Post-Strength-Training Nutrition", 0.35, 0.45, 0.20,
        "Increase protein to support muscle recovery, paired with fast-absorbing carbohydrates",
    ),
    WorkoutType.cardio: _Advice(
        "Post-Cardio Nutrition", 0.25, 0.55, 0.20,
        "Replenish carbohydrates, with moderate protein to aid recovery",
    ),
    WorkoutType.hiit: _Advice(
        "Post-HIIT Nutrition", 0.30, 0.50, 0.20,
        "Balance carbohydrates and protein to support muscle recovery and refuel energy",
    ),
    WorkoutType.yoga: _Advice(
        "Post-Flexibility-Training Nutrition", 0.25, 0.50, 0.25,
        "Keep intake balanced and favour anti-inflammatory foods",
    ),
    WorkoutType.flexibility: _Advice(
        "Post-Flexibility-Training Nutrition", 0.25, 0.50, 0.25,
        "Keep intake balanced and favour anti-inflammatory foods",
    ),
}

# used only when the latest workout is `none`
_GOAL_ADVICE: Dict[FitnessGoal, _Advice] = {
    FitnessGoal.lose: _Advice(
        "Weight-Loss Nutrition", 0.35, 0.35, 0.30,
        "Raise protein, keep carbohydrates in check and avoid heavy carbohydrates in the evening",
    ),
    FitnessGoal.gain: _Advice(
        "Muscle-Gain Nutrition", 0.30, 0.50, 0.20,
        "Raise total calories moderately while getting enough protein and carbohydrates",
    ),
    FitnessGoal.maintain: _Advice(
        "Weight-Maintenance Nutrition", _BASELINE.protein, _BASELINE.carbs, _BASELINE.fat,
        "Keep a balanced diet with plenty of variety",
    ),
}

# (protein, carbs, fat) deltas
_PREFERENCE_DELTAS: Dict[DietaryPreference, Tuple[float, float, float]] = {
    DietaryPreference.high_protein: (0.05, -0.05, 0.0),
    DietaryPreference.low_carb: (0.05, -0.10, 0.05),
}

_PLANT_BASED = frozenset({DietaryPreference.vegetarian, DietaryPreference.vegan})


# ──────────────────────────── advice ────────────────────────────
def _select_advice(profile: UserProfile) -> _Advice:
    workout = profile.latest_workout
    if workout in _WORKOUT_ADVICE:
        return _WORKOUT_ADVICE[workout]
    return _GOAL_ADVICE[profile.fitness_goal]


def recommend(
    profile: UserProfile,
    calc: NutritionalCalculator | None = None,
) -> NutritionRecommendation:
    calc = calc or NutritionalCalculator()
    advice = _select_advice(profile)

    protein, carbs, fat = advice.protein, advice.carbs, advice.fat
    note = advice.note

    pref = profile.dietary_preference
    if pref in _PLANT_BASED:
        note += PLANT_PROTEIN_NOTE
    elif pref in _PREFERENCE_DELTAS:
        d_protein, d_carbs, d_fat = _PREFERENCE_DELTAS[pref]
        protein += d_protein
        carbs += d_carbs
        fat += d_fat

    rec = NutritionRecommendation(
        title=advice.title,
        calorie_target=calc.calorie_target(profile),
        protein_percentage=protein,
        carbs_percentage=carbs,
        fat_percentage=fat,
        special_note=note,
    )
    _LOG.debug(
        "advice=%r workout=%s pref=%s split=%.2f/%.2f/%.2f",
        advice.title, profile.latest_workout.value, pref.value, protein, carbs, fat,
    )
    return rec


# ──────────────────────────── meal plan ────────────────────────────
_Predicate = Callable[[NutritionRecommendation], bool]
# first matching (predicate, items) of a group wins; None always matches
_Group = Tuple[Tuple[Optional[_Predicate], Tuple[str, ...]], ...]

CARBS_HIGH = 0.4
PROTEIN_HIGH = 0.3
FAT_HIGH = 0.3


def _carbs_high(r: NutritionRecommendation) -> bool:
    return r.carbs_percentage >= CARBS_HIGH


def _protein_high(r: NutritionRecommendation) -> bool:
    return r.protein_percentage >= PROTEIN_HIGH


def _fat_high(r: NutritionRecommendation) -> bool:
    return r.fat_percentage >= FAT_HIGH


_MEAL_TABLE: Tuple[Tuple[MealType, float, str, Tuple[_Group, ...]], ...] = (
    (MealType.breakfast, 0.25, "Breakfast suggestion", (
        ((_carbs_high, ("Whole-grain bread or oatmeal",)),
         (None, ("Protein shake or Greek yogurt",))),
        ((_protein_high, ("Protein source (eggs, tofu or Greek yogurt)",)),),
    )),
    (MealType.lunch, 0.35, "Lunch suggestion", (
        ((None, ("Protein source (lean meat, legumes or fish)",)),),
        ((_carbs_high, ("Whole grains or potatoes",)),),
        ((None, ("Vegetable salad",)),),
    )),
    (MealType.dinner, 0.30, "Dinner suggestion", (
        ((None, ("Protein source (fish, chicken or legumes)",)),),
        ((_carbs_high, ("Moderate whole grains", "Vegetables")),
         (None, ("Low-carb vegetables",))),
    )),
    (MealType.snack, 0.10, "Snack suggestion", (
        ((_protein_high, ("High-protein snack (Greek yogurt, protein bar)",)),
         (_fat_high, ("Healthy fats (nuts, avocado)",)),
         (None, ("Fruit and a few nuts",))),
    )),
)


def _items(rec: NutritionRecommendation, groups: Tuple[_Group, ...]) -> List[str]:
    out: List[str] = []
    for group in groups:
        for predicate, items in group:
            if predicate is None or predicate(rec):
                out.extend(items)
                break
    return out


def meal_plan(rec: NutritionRecommendation) -> List[MealSuggestion]:
    return [
        MealSuggestion(
            type=meal_type,
            calories=rec.calorie_target * fraction,
            description=description,
            food_items=_items(rec, groups),
        )
        for meal_type, fraction, description, groups in _MEAL_TABLE
    ]


def meal_type_for_hour(hour: int) -> MealType:
    if hour < 10:
        return MealType.breakfast
    if hour < 14:
        return MealType.lunch
    if hour < 19:
        return MealType.dinner
    return MealType.snack


def meal_for_hour(plan: List[MealSuggestion], hour: int) -> MealSuggestion | None:
    wanted = meal_type_for_hour(hour)
    return next((m for m in plan if m.type == wanted), None)


# ──────────────────────────── facade ────────────────────────────
class NutritionRecommender:
    """Holds the calculator so callers can inject one; otherwise stateless."""

    def __init__(self, calc: NutritionalCalculator | None = None) -> None:
        self._calc = calc or NutritionalCalculator()

    @property
    def calc(self) -> NutritionalCalculator:
        return self._calc

    def recommend(self, profile: UserProfile) -> NutritionRecommendation:
        return recommend(profile, self._calc)

    def meal_plan(self, rec: NutritionRecommendation) -> List[MealSuggestion]:
        return meal_plan(rec)
