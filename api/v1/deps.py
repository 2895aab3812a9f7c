# api/v1/deps.py
from __future__ import annotations

from fastapi import Depends

from services.advisor import NutritionAdvisor
from services.db import sessionmaker
from services.health import HealthMetricsAdapter, SqlHealthSource
from services.profile_store import ProfileStore

# one store and one adapter per process: the store's edit lock and the
# authorization state must survive between requests
_STORE: ProfileStore | None = None
_ADAPTER: HealthMetricsAdapter | None = None


async def get_store() -> ProfileStore:
    global _STORE
    if _STORE is None:
        _STORE = ProfileStore(await sessionmaker())
    return _STORE


async def get_adapter() -> HealthMetricsAdapter:
    global _ADAPTER
    if _ADAPTER is None:
        _ADAPTER = HealthMetricsAdapter(SqlHealthSource(await sessionmaker()))
    return _ADAPTER


async def get_advisor(
    store: ProfileStore = Depends(get_store),
    adapter: HealthMetricsAdapter = Depends(get_adapter),
) -> NutritionAdvisor:
    return NutritionAdvisor(store, adapter)
