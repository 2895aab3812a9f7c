from __future__ import annotations
import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models.meal import MealRecord, MealType


class MealRecordIn(BaseModel):
    name: str = Field(..., min_length=1)
    calories: float = Field(..., ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    timestamp: dt.datetime | None = None
    type: MealType

    def to_record(self) -> MealRecord:
        # no timestamp → MealRecord stamps "now"
        return MealRecord(**self.model_dump(exclude_none=True))


class DailyTotalOut(BaseModel):
    date: dt.date
    meals: int
    calories: float
    protein: float
    carbs: float
    fat: float

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
