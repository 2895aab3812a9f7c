"""
services/health.py
────────────────────────────────────────────────────────────────────────
Health-data boundary.

`HealthDataSource` is what a device bridge implements; `SqlHealthSource`
reads samples imported into `health_samples` (see scripts/import_health.py).

`HealthMetricsAdapter.fetch_all()` runs the six reads concurrently and
joins them before returning one `HealthMetrics` snapshot, so callers only
ever mutate the profile after every fetch has settled. A read that fails
or times out is logged and reported as zero / empty; it never blocks or
fails the others.
"""
from __future__ import annotations

import abc
import asyncio
import logging
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Awaitable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from config import settings
from core.models.health import HealthMetrics, WorkoutSample
from services.db import HealthSample

_LOG = logging.getLogger(__name__)


class HealthKind(str, Enum):
    basal_energy = "basalEnergyBurned"
    active_energy = "activeEnergyBurned"
    step_count = "stepCount"
    body_mass = "bodyMass"
    height = "height"
    workout = "workout"


# ──────────────────────────── sources ────────────────────────────
class HealthDataSource(abc.ABC):
    async def is_available(self) -> bool:
        return True

    @abc.abstractmethod
    async def request_authorization(self) -> bool: ...

    @abc.abstractmethod
    async def cumulative_sum(
        self, kind: HealthKind, start: datetime, end: datetime
    ) -> float | None:
        """Sum of samples starting inside [start, end]; None when there are none."""

    @abc.abstractmethod
    async def latest_quantity(self, kind: HealthKind) -> float | None: ...

    @abc.abstractmethod
    async def workouts(
        self, start: datetime, end: datetime, limit: int
    ) -> List[WorkoutSample]:
        """Workouts starting inside [start, end], newest end date first."""


class SqlHealthSource(HealthDataSource):
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        access_granted: bool | None = None,
    ) -> None:
        self._sessions = sessions
        self._granted = settings.health_access_granted if access_granted is None else access_granted

    async def request_authorization(self) -> bool:
        return self._granted

    async def cumulative_sum(self, kind, start, end):
        q = select(func.sum(HealthSample.value)).where(
            HealthSample.kind == kind.value,
            HealthSample.start_at >= start,
            HealthSample.start_at <= end,
        )
        async with self._sessions() as db:
            return (await db.execute(q)).scalar_one_or_none()

    async def latest_quantity(self, kind):
        q = (
            select(HealthSample.value)
            .where(HealthSample.kind == kind.value)
            .order_by(HealthSample.end_at.desc())
            .limit(1)
        )
        async with self._sessions() as db:
            return (await db.execute(q)).scalar_one_or_none()

    async def workouts(self, start, end, limit):
        q = (
            select(HealthSample)
            .where(
                HealthSample.kind == HealthKind.workout.value,
                HealthSample.start_at >= start,
                HealthSample.start_at <= end,
            )
            .order_by(HealthSample.end_at.desc())
            .limit(limit)
        )
        async with self._sessions() as db:
            rows = (await db.execute(q)).scalars().all()
        return [
            WorkoutSample(
                activity_type=r.activity_type or "",
                start=r.start_at,
                end=r.end_at,
                duration_seconds=max(r.value or 0.0, 0.0),
                energy_kcal=r.energy_kcal,
            )
            for r in rows
        ]


# ──────────────────────────── adapter ────────────────────────────
def _quantity(value: Any) -> float:
    """None / NaN / inf / negative → 0.0 ("no data yet")."""
    if value is None:
        return 0.0
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(out) or out < 0:
        return 0.0
    return out


class HealthMetricsAdapter:
    def __init__(
        self,
        source: HealthDataSource,
        timeout_s: float | None = None,
        lookback_days: int | None = None,
        workout_limit: int | None = None,
    ) -> None:
        self._source = source
        self._timeout = timeout_s or settings.health_fetch_timeout_s
        self._lookback = timedelta(days=lookback_days or settings.workout_lookback_days)
        self._limit = workout_limit or settings.workout_limit
        self._authorized: bool | None = None   # None = never asked

    @property
    def is_authorized(self) -> bool:
        return bool(self._authorized)

    async def authorize(self) -> bool:
        if not await self._source.is_available():
            _LOG.info("health data is not available on this source")
            self._authorized = False
            return False
        try:
            self._authorized = bool(await self._source.request_authorization())
        except Exception as exc:
            _LOG.warning("health authorization failed: %s", exc)
            self._authorized = False
        if not self._authorized:
            _LOG.info("health access denied – metrics stay at zero")
        return self._authorized

    async def fetch_all(self, now: datetime | None = None) -> HealthMetrics:
        if self._authorized is None:
            await self.authorize()
        if not self._authorized:
            return HealthMetrics(is_authorized=False)

        now = now or datetime.now()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        src = self._source

        resting, active, steps, weight, height, workouts = await asyncio.gather(
            self._guard("restingCalories", src.cumulative_sum(HealthKind.basal_energy, start_of_day, now)),
            self._guard("activeCalories", src.cumulative_sum(HealthKind.active_energy, start_of_day, now)),
            self._guard("steps", src.cumulative_sum(HealthKind.step_count, start_of_day, now)),
            self._guard("weight", src.latest_quantity(HealthKind.body_mass)),
            self._guard("height", src.latest_quantity(HealthKind.height)),
            self._guard("workouts", src.workouts(now - self._lookback, now, self._limit)),
        )

        recent = sorted(workouts or [], key=lambda w: w.end, reverse=True)[: self._limit]
        metrics = HealthMetrics(
            is_authorized=True,
            resting_calories=_quantity(resting),
            active_calories=_quantity(active),
            steps=int(_quantity(steps)),
            weight=_quantity(weight),
            height=_quantity(height),
            workouts=recent,
        )
        _LOG.debug(
            "health metrics: rest=%.0f active=%.0f steps=%d workouts=%d",
            metrics.resting_calories, metrics.active_calories, metrics.steps, len(recent),
        )
        return metrics

    async def _guard(self, name: str, fetch: Awaitable[Any]) -> Any:
        try:
            return await asyncio.wait_for(fetch, self._timeout)
        except asyncio.TimeoutError:
            _LOG.warning("health fetch %s timed out after %.1fs", name, self._timeout)
        except Exception as exc:
            _LOG.warning("health fetch %s failed: %s", name, exc)
        return None
