from __future__ import annotations

from fastapi import APIRouter, Depends, status

from api.v1.deps import get_store
from api.v1.schemas import WorkoutIn, WorkoutOut
from core.workouts import classify_workout
from services.profile_store import ProfileStore

router = APIRouter()


@router.post("", response_model=WorkoutOut, status_code=status.HTTP_200_OK)
async def push_workout(
    body: WorkoutIn,
    store: ProfileStore = Depends(get_store),
) -> WorkoutOut:
    workout = body.workout_type or classify_workout(body.activity_type)
    async with store.edit() as profile:
        changed = profile.push_recent_workout(workout)
    return WorkoutOut(
        workout_type=workout,
        changed=changed,
        recent_workouts=profile.recent_workouts,
    )
