from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class MealRecord(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    calories: float = Field(..., ge=0)
    protein: float = Field(0.0, ge=0)   # grams
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    timestamp: datetime = Field(default_factory=datetime.now)
    type: MealType

    model_config = ConfigDict(frozen=True)

    @field_validator("timestamp")
    @classmethod
    def _local_naive(cls, ts: datetime) -> datetime:
        # aware input (e.g. "...Z" from the API) is stored as local wall time
        if ts.tzinfo is not None:
            return ts.astimezone().replace(tzinfo=None)
        return ts


class MealSuggestion(BaseModel):
    type: MealType
    calories: float
    description: str
    food_items: List[str]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
