"""Re-export individual schema modules for easy imports."""

from .profile import ProfileUpdate, ProfileState
from .meal import MealRecordIn, DailyTotalOut
from .rec import RecResponse, CurrentMealResponse, WorkoutIn, WorkoutOut

__all__ = [
    "ProfileUpdate",
    "ProfileState",
    "MealRecordIn",
    "DailyTotalOut",
    "RecResponse",
    "CurrentMealResponse",
    "WorkoutIn",
    "WorkoutOut",
]
