from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Dict, List

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from core.models.health import WorkoutSample
from services.db import Base
from services.health import HealthDataSource, HealthKind


class FakeHealthSource(HealthDataSource):
    """
    In-memory source. `values` maps HealthKind → number, an Exception
    instance (raised) or the string "slow" (sleeps past any sane timeout).
    """

    def __init__(
        self,
        values: Dict[HealthKind, Any] | None = None,
        workouts: List[WorkoutSample] | None = None,
        granted: bool = True,
        available: bool = True,
    ) -> None:
        self.values = values or {}
        self.workout_list = workouts or []
        self.granted = granted
        self.available = available
        self.calls: List[str] = []

    async def is_available(self) -> bool:
        return self.available

    async def request_authorization(self) -> bool:
        self.calls.append("authorize")
        if isinstance(self.granted, Exception):
            raise self.granted
        return self.granted

    async def _value(self, kind: HealthKind) -> Any:
        self.calls.append(kind.value)
        v = self.values.get(kind)
        if isinstance(v, Exception):
            raise v
        if v == "slow":
            await asyncio.sleep(5)
        return v

    async def cumulative_sum(self, kind, start, end):
        return await self._value(kind)

    async def latest_quantity(self, kind):
        return await self._value(kind)

    async def workouts(self, start, end, limit):
        self.calls.append("workouts")
        v = self.values.get(HealthKind.workout)
        if isinstance(v, Exception):
            raise v
        return list(self.workout_list)


def workout(activity: str, end: datetime, minutes: int = 30) -> WorkoutSample:
    return WorkoutSample(
        activity_type=activity,
        start=end.replace(minute=0),
        end=end,
        duration_seconds=minutes * 60,
    )


@pytest.fixture
def fake_source_cls():
    return FakeHealthSource


@pytest.fixture
def make_workout():
    return workout


@pytest_asyncio.fixture
async def sessions(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'calometer-test.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(eng, expire_on_commit=False)
    await eng.dispose()


@pytest_asyncio.fixture
async def broken_sessions(tmp_path):
    """Sessions on a database without tables: every query fails."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield async_sessionmaker(eng, expire_on_commit=False)
    await eng.dispose()
