# api/v1/meals.py
from __future__ import annotations
from fastapi import APIRouter, Depends, status

from api.v1.deps import get_store
from api.v1.schemas import DailyTotalOut, MealRecordIn
from core.intake import daily_totals_records
from core.models.meal import MealRecord
from services.profile_store import ProfileStore

router = APIRouter()


@router.get(
    "",
    response_model=list[MealRecord],
    summary="List logged meals, newest first",
)
async def list_meals(store: ProfileStore = Depends(get_store)) -> list[MealRecord]:
    profile = await store.load()
    return profile.sorted_meal_records()


@router.post(
    "",
    response_model=MealRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Log a meal",
)
async def add_meal(
    body: MealRecordIn,
    store: ProfileStore = Depends(get_store),
) -> MealRecord:
    record = body.to_record()
    await store.add_meal_record(record)
    return record


@router.get(
    "/daily",
    response_model=list[DailyTotalOut],
    summary="Per-day totals of the meal log, newest day first",
)
async def list_daily_totals(store: ProfileStore = Depends(get_store)) -> list[DailyTotalOut]:
    profile = await store.load()
    return [DailyTotalOut.model_validate(row) for row in daily_totals_records(profile.meal_records)]
