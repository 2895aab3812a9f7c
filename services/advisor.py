"""
services/advisor.py
────────────────────────────────────────────────────────────────────────
Glue between the health adapter, the profile store and the rule engine.

`refresh()`:
  1. fetch every metric (joined before anything else happens)
  2. copy positive weight / height into the profile, push the newest
     classified workout
  3. save once if something changed (inside `ProfileStore.edit`, so a
     meal logged meanwhile is not overwritten)
  4. recompute advice + meal plan from the updated profile
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from pydantic import BaseModel

from core.models.health import HealthMetrics
from core.models.meal import MealSuggestion
from core.models.nutrition import NutritionRecommendation
from core.models.user import UserProfile
from core.recommendation import NutritionRecommender
from core.workouts import classify_workout
from services.health import HealthMetricsAdapter
from services.profile_store import ProfileStore

_LOG = logging.getLogger(__name__)


class AdvisorSnapshot(BaseModel):
    profile: UserProfile
    metrics: HealthMetrics
    recommendation: NutritionRecommendation
    meal_plan: List[MealSuggestion]


def apply_health_metrics(profile: UserProfile, metrics: HealthMetrics) -> bool:
    """Mutates `profile` in place; returns True when anything changed."""
    changed = False
    if metrics.weight > 0 and metrics.weight != profile.weight:
        profile.weight = metrics.weight
        changed = True
    if metrics.height > 0 and metrics.height != profile.height:
        profile.height = metrics.height
        changed = True
    if metrics.workouts:
        latest = classify_workout(metrics.workouts[0].activity_type)
        changed = profile.push_recent_workout(latest) or changed
    return changed


class NutritionAdvisor:
    def __init__(
        self,
        store: ProfileStore,
        adapter: HealthMetricsAdapter,
        recommender: NutritionRecommender | None = None,
    ) -> None:
        self._store = store
        self._adapter = adapter
        self._recommender = recommender or NutritionRecommender()

    def _snapshot(self, profile: UserProfile, metrics: HealthMetrics) -> AdvisorSnapshot:
        rec = self._recommender.recommend(profile)
        return AdvisorSnapshot(
            profile=profile,
            metrics=metrics,
            recommendation=rec,
            meal_plan=self._recommender.meal_plan(rec),
        )

    async def current(self) -> AdvisorSnapshot:
        """Advice from the stored profile only; the health source is not touched."""
        profile = await self._store.load()
        return self._snapshot(profile, HealthMetrics(is_authorized=self._adapter.is_authorized))

    async def refresh(self, now: datetime | None = None) -> AdvisorSnapshot:
        metrics = await self._adapter.fetch_all(now)

        async with self._store.edit() as profile:
            if apply_health_metrics(profile, metrics):
                _LOG.info(
                    "profile synced from health data (weight=%.1f height=%.1f workout=%s)",
                    profile.weight, profile.height, profile.latest_workout.value,
                )

        return self._snapshot(profile, metrics)
