from __future__ import annotations

from fastapi import APIRouter, Depends

from api.v1.deps import get_adapter, get_advisor, get_store
from core.dashboard import DashboardSummary, build_dashboard
from core.recommendation import recommend
from services.advisor import NutritionAdvisor
from services.health import HealthMetricsAdapter
from services.profile_store import ProfileStore

router = APIRouter()


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    store: ProfileStore = Depends(get_store),
    adapter: HealthMetricsAdapter = Depends(get_adapter),
) -> DashboardSummary:
    """Read-only view: metrics are fetched, the profile is left untouched."""
    metrics = await adapter.fetch_all()
    profile = await store.load()
    return build_dashboard(profile, metrics, recommend(profile))


@router.post("/refresh", response_model=DashboardSummary)
async def refresh_dashboard(
    advisor: NutritionAdvisor = Depends(get_advisor),
) -> DashboardSummary:
    """Fetch metrics, sync weight / height / latest workout into the profile, recompute."""
    snap = await advisor.refresh()
    return build_dashboard(snap.profile, snap.metrics, snap.recommendation)
