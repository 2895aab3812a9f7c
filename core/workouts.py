"""
Raw recorded activity → training bucket used to bias the macro split.

Activity names are matched after lower-casing and stripping spaces,
dashes and underscores, so "Traditional Strength Training",
"traditional_strength_training" and "traditionalStrengthTraining"
all land in the same bucket. Anything unknown is `WorkoutType.none`.
"""
from __future__ import annotations

import re

from core.models.user import WorkoutType

_WORKOUT_BUCKETS: dict[str, WorkoutType] = {
    # strength
    "traditionalstrengthtraining": WorkoutType.strength,
    "functionalstrengthtraining": WorkoutType.strength,
    "crosstraining": WorkoutType.strength,
    # cardio
    "running": WorkoutType.cardio,
    "cycling": WorkoutType.cardio,
    "swimming": WorkoutType.cardio,
    "walking": WorkoutType.cardio,
    "hiking": WorkoutType.cardio,
    # intervals
    "highintensityintervaltraining": WorkoutType.hiit,
    "hiit": WorkoutType.hiit,
    # mind / body
    "yoga": WorkoutType.yoga,
    "mindandbody": WorkoutType.yoga,
    "flexibility": WorkoutType.flexibility,
}

_SEPARATORS = re.compile(r"[\s_\-]+")


def _normalise(raw: str) -> str:
    return _SEPARATORS.sub("", raw or "").lower()


def classify_workout(raw_activity_type: str | None) -> WorkoutType:
    return _WORKOUT_BUCKETS.get(_normalise(raw_activity_type or ""), WorkoutType.none)
