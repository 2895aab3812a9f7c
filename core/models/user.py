from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .meal import MealRecord

RECENT_WORKOUTS_CAP = 5


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class FitnessGoal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "veryActive"


class DietaryPreference(str, Enum):
    normal = "normal"
    vegetarian = "vegetarian"
    vegan = "vegan"
    pescatarian = "pescatarian"
    gluten_free = "glutenFree"
    dairy_free = "dairyFree"
    low_carb = "lowCarb"
    high_protein = "highProtein"


class WorkoutType(str, Enum):
    none = "none"
    cardio = "cardio"
    strength = "strength"
    hiit = "hiit"
    yoga = "yoga"
    flexibility = "flexibility"


class UserProfile(BaseModel):
    """
    The single on-device profile.

    Serialised with camelCase keys (`fitnessGoal`, `isProfileSetup`, ...).
    Mutating a field never persists anything; callers hand the profile to
    `services.profile_store.ProfileStore.save` once a batch of edits is done.
    """

    weight: float = Field(70.0, gt=0)
    height: float = Field(175.0, gt=0)
    age: int = Field(30, gt=0)
    gender: Gender = Gender.male
    fitness_goal: FitnessGoal = FitnessGoal.maintain
    activity_level: ActivityLevel = ActivityLevel.moderate
    dietary_preference: DietaryPreference = DietaryPreference.normal
    recent_workouts: List[WorkoutType] = Field(
        default_factory=lambda: [WorkoutType.none]
    )
    meal_records: List[MealRecord] = Field(default_factory=list)
    is_profile_setup: bool = False

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    # ---------------------------------------------------------------- #
    @property
    def latest_workout(self) -> WorkoutType:
        return self.recent_workouts[0] if self.recent_workouts else WorkoutType.none

    def push_recent_workout(self, workout: WorkoutType) -> bool:
        """Put `workout` at the head; returns False when it already is the head."""
        if self.recent_workouts and self.recent_workouts[0] == workout:
            return False
        self.recent_workouts.insert(0, workout)
        del self.recent_workouts[RECENT_WORKOUTS_CAP:]
        return True

    def add_meal_record(self, record: MealRecord) -> None:
        self.meal_records.append(record)

    def sorted_meal_records(self) -> List[MealRecord]:
        return sorted(self.meal_records, key=lambda m: m.timestamp, reverse=True)
