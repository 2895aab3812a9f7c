from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models.user import (
    ActivityLevel,
    DietaryPreference,
    FitnessGoal,
    Gender,
)


class ProfileUpdate(BaseModel):
    """Partial update; only the fields sent are applied."""

    weight: float | None = Field(None, gt=0)
    height: float | None = Field(None, gt=0)
    age: int | None = Field(None, gt=0)
    gender: Gender | None = None
    fitness_goal: FitnessGoal | None = None
    activity_level: ActivityLevel | None = None
    dietary_preference: DietaryPreference | None = None
    is_profile_setup: bool | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileState(BaseModel):
    state: Literal["onboarding", "main"]
    is_profile_setup: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
