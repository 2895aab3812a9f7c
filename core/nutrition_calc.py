"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Pure arithmetic used by the recommendation engine and the dashboard:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity-factor multiplier)
3. Calorie target for the three goal branches
4. Gram ↔ kcal conversion
5. BMI + category, daily burn progress

Nothing here raises on zero input; divisions are clamped instead.
"""

from __future__ import annotations

import math

from core.models.user import ActivityLevel, FitnessGoal, Gender, UserProfile


PROTEIN_KCAL_PER_G = 4.0
CARBS_KCAL_PER_G = 4.0
FAT_KCAL_PER_G = 9.0

ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.light: 1.375,
    ActivityLevel.moderate: 1.55,
    ActivityLevel.active: 1.725,
    ActivityLevel.very_active: 1.9,
}

# Only male gets +5; "other" shares the female constant.
_BMR_SEX_CONSTANT: dict[Gender, float] = {
    Gender.male: 5.0,
    Gender.female: -161.0,
    Gender.other: -161.0,
}

_GOAL_MULTIPLIER: dict[FitnessGoal, float] = {
    FitnessGoal.lose: 0.8,
    FitnessGoal.maintain: 1.0,
    FitnessGoal.gain: 1.1,
}

# (upper bound exclusive, label)
_BMI_BANDS: tuple[tuple[float, str], ...] = (
    (18.5, "underweight"),
    (24.0, "normal"),
    (28.0, "overweight"),
)


# ──────────────────────────────────────────────────────────────────────
#  BMR / TDEE / target
# ──────────────────────────────────────────────────────────────────────
def bmr(weight: float, height: float, age: int, gender: Gender) -> float:
    base = 10 * weight + 6.25 * height - 5 * age
    return base + _BMR_SEX_CONSTANT[gender]


def activity_factor(level: ActivityLevel) -> float:
    return ACTIVITY_FACTORS[level]


def tdee(bmr_kcal: float, factor: float) -> float:
    return bmr_kcal * factor


def calorie_target(tdee_kcal: float, goal: FitnessGoal) -> float:
    return tdee_kcal * _GOAL_MULTIPLIER[goal]


# ──────────────────────────────────────────────────────────────────────
#  Conversions
# ──────────────────────────────────────────────────────────────────────
def grams_from_calories(calories: float, kcal_per_gram: float) -> float:
    if kcal_per_gram <= 0:
        return 0.0
    return calories / kcal_per_gram


def bmi(weight: float, height: float) -> float:
    """kg / m²; 0 when there is no usable height yet."""
    if height <= 0 or weight <= 0:
        return 0.0
    metres = height / 100
    return weight / (metres * metres)


def bmi_category(value: float) -> str:
    if value <= 0:
        return "unknown"
    for upper, label in _BMI_BANDS:
        if value < upper:
            return label
    return "obese"


def calorie_progress(burned: float, target: float) -> float:
    """Share of the daily target already burned, clamped to [0, 1]."""
    if target <= 0:
        return 0.0
    ratio = burned / target
    if not math.isfinite(ratio) or ratio <= 0:
        return 0.0
    return min(ratio, 1.0)


# ──────────────────────────────────────────────────────────────────────
#  Profile-level calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionalCalculator:
    """Source-of-truth for kcal figures; recomputed from the profile on every call."""

    def bmr(self, p: UserProfile) -> float:
        return bmr(p.weight, p.height, p.age, p.gender)

    def tdee(self, p: UserProfile) -> float:
        return tdee(self.bmr(p), activity_factor(p.activity_level))

    def calorie_target(self, p: UserProfile) -> float:
        return calorie_target(self.tdee(p), p.fitness_goal)
