"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup (SQLite via aiosqlite unless DATABASE_URL says otherwise)
* `kv_store`       – one serialized record per fixed key (the profile lives here)
* `health_samples` – imported health data read by `services.health.SqlHealthSource`
* Session helpers used by routers / scripts
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from sqlalchemy import DateTime, Float, String, Text, func
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None
_SESSIONS: async_sessionmaker[AsyncSession] | None = None


def _create_engine(url: str | None = None) -> AsyncEngine:
    return create_async_engine(url or settings.database_url, pool_pre_ping=True)


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = _create_engine()
    return _ENGINE


async def sessionmaker() -> async_sessionmaker[AsyncSession]:
    global _SESSIONS
    if _SESSIONS is None:
        _SESSIONS = async_sessionmaker(await engine(), expire_on_commit=False)
    return _SESSIONS


# ───────── declarative base ──────────────────────────────────────────
class Base(AsyncAttrs, DeclarativeBase):
    pass


class KeyValue(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class HealthSample(Base):
    """
    kind ∈ basalEnergyBurned | activeEnergyBurned | stepCount | bodyMass | height | workout

    Quantity rows use `value`; workout rows use `activity_type`, `value`
    (duration in seconds) and optionally `energy_kcal`.
    """

    __tablename__ = "health_samples"

    id: Mapped[int] = mapped_column(primary_key=True)
    kind: Mapped[str] = mapped_column(String(32), index=True)
    value: Mapped[float] = mapped_column(Float, default=0.0)
    start_at: Mapped[datetime] = mapped_column(DateTime)
    end_at: Mapped[datetime] = mapped_column(DateTime, index=True)
    activity_type: Mapped[str | None] = mapped_column(String(64))
    energy_kcal: Mapped[float | None] = mapped_column(Float)


async def init_models(eng: AsyncEngine | None = None) -> None:
    eng = eng or await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── session helpers ───────────────────────────────────────────
@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    factory = await sessionmaker()
    async with factory() as session:
        yield session
