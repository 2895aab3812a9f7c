"""
Centralised settings loader.

Every value can be overridden through the environment or a local `.env`
file (names are case-insensitive: `DATABASE_URL`, `PROFILE_KEY`, ...).
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / storage ──────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///./calometer.db"
    profile_key: str = "UserProfile"

    # ─── health data source ─────────────────────────────────────────
    health_access_granted: bool = True
    health_fetch_timeout_s: float = Field(5.0, gt=0)
    workout_lookback_days: int = Field(7, ge=1)
    workout_limit: int = Field(10, ge=1)

    # allow unrelated env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()


settings: _Settings = _cached()
