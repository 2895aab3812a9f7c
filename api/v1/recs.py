# api/v1/recs.py
from __future__ import annotations
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.deps import get_store
from api.v1.schemas import CurrentMealResponse, RecResponse
from core.models.meal import MealSuggestion
from core.models.nutrition import NutritionRecommendation
from core.recommendation import meal_for_hour, meal_plan, recommend
from services.profile_store import ProfileStore

router = APIRouter()


@router.get("", response_model=RecResponse, status_code=status.HTTP_200_OK)
async def get_recommendation(store: ProfileStore = Depends(get_store)) -> RecResponse:
    profile = await store.load()
    rec = recommend(profile)
    return RecResponse(recommendation=rec, meal_plan=meal_plan(rec))


@router.get("/advice", response_model=NutritionRecommendation)
async def get_advice(store: ProfileStore = Depends(get_store)) -> NutritionRecommendation:
    return recommend(await store.load())


@router.get("/plan", response_model=list[MealSuggestion])
async def get_meal_plan(store: ProfileStore = Depends(get_store)) -> list[MealSuggestion]:
    return meal_plan(recommend(await store.load()))


@router.get("/now", response_model=CurrentMealResponse)
async def get_current_meal(
    hour: int | None = Query(None, ge=0, le=23, description="defaults to the server clock"),
    store: ProfileStore = Depends(get_store),
) -> CurrentMealResponse:
    hour = datetime.now().hour if hour is None else hour
    plan = meal_plan(recommend(await store.load()))
    meal = meal_for_hour(plan, hour)
    if meal is None:
        raise HTTPException(status_code=404, detail="No suggestion for this hour")
    return CurrentMealResponse(hour=hour, meal=meal)
