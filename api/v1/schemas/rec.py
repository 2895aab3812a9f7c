# api/v1/schemas/rec.py
from __future__ import annotations
from typing import List

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from core.models.meal import MealSuggestion
from core.models.nutrition import NutritionRecommendation
from core.models.user import WorkoutType


class RecResponse(BaseModel):
    recommendation: NutritionRecommendation
    meal_plan: List[MealSuggestion]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CurrentMealResponse(BaseModel):
    hour: int
    meal: MealSuggestion


class WorkoutIn(BaseModel):
    """Either a raw activity name (classified server-side) or a bucket."""

    activity_type: str | None = None
    workout_type: WorkoutType | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="after")
    def _one_of(self) -> "WorkoutIn":
        if self.activity_type is None and self.workout_type is None:
            raise ValueError("send activityType or workoutType")
        return self


class WorkoutOut(BaseModel):
    workout_type: WorkoutType
    changed: bool
    recent_workouts: List[WorkoutType]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
