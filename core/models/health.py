from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WorkoutSample(BaseModel):
    """One recorded workout as the health source reports it."""

    activity_type: str = Field(..., description="running, traditionalStrengthTraining, yoga, ...")
    start: datetime
    end: datetime
    duration_seconds: float = Field(0.0, ge=0)
    energy_kcal: Optional[float] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthMetrics(BaseModel):
    """Today's snapshot. Zero means "no data yet", never an error."""

    is_authorized: bool = False
    resting_calories: float = 0.0
    active_calories: float = 0.0
    steps: int = 0
    weight: float = 0.0
    height: float = 0.0
    workouts: List[WorkoutSample] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def total_burned(self) -> float:
        return self.resting_calories + self.active_calories
