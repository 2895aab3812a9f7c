# api/v1/router.py
from fastapi import APIRouter

from . import dashboard, meals, profile, recs, workouts

api_router = APIRouter()

api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["Workouts"])
api_router.include_router(recs.router, prefix="/recommendations", tags=["Recommendations"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
