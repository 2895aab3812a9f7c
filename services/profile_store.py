"""
services/profile_store.py
────────────────────────────────────────────────────────────────────────
Load / save the single `UserProfile` as one JSON record in `kv_store`.

Failure policy
--------------
* load  – missing row, bad JSON or a record that no longer validates
          → built-in defaults (logged, never raised)
* save  – database errors are logged and reported as `False`
* edit  – load → mutate → save under one lock, so overlapping requests
          never overwrite each other's changes
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from config import settings
from core.models.meal import MealRecord
from core.models.user import UserProfile, WorkoutType
from services.db import KeyValue

_LOG = logging.getLogger(__name__)


def encode_profile(profile: UserProfile) -> str:
    return profile.model_dump_json(by_alias=True)


def decode_profile(raw: str | bytes) -> UserProfile:
    """Raises ValidationError on corrupt input; `ProfileStore.load` catches it."""
    return UserProfile.model_validate_json(raw)


class ProfileStore:
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        key: str | None = None,
    ) -> None:
        self._sessions = sessions
        self._key = key or settings.profile_key
        self._lock = asyncio.Lock()

    @property
    def key(self) -> str:
        return self._key

    # ─────────────────────────────── read ─────────────────────────── #
    async def load(self) -> UserProfile:
        try:
            async with self._sessions() as db:
                row = await db.get(KeyValue, self._key)
        except SQLAlchemyError as exc:
            _LOG.warning("profile load failed (%s) – using defaults", exc)
            return UserProfile()

        if row is None:
            _LOG.debug("no stored profile under %r – using defaults", self._key)
            return UserProfile()

        try:
            return decode_profile(row.value)
        except ValidationError as exc:
            _LOG.warning(
                "stored profile under %r is corrupt (%d errors) – using defaults",
                self._key, exc.error_count(),
            )
            return UserProfile()

    # ─────────────────────────────── write ────────────────────────── #
    async def save(self, profile: UserProfile) -> bool:
        payload = encode_profile(profile)
        try:
            async with self._sessions() as db:
                await db.merge(KeyValue(key=self._key, value=payload))
                await db.commit()
        except SQLAlchemyError:
            _LOG.exception("profile save failed – keeping in-memory state")
            return False
        return True

    # ─────────────────────────── mutations ────────────────────────── #
    @asynccontextmanager
    async def edit(self) -> AsyncIterator[UserProfile]:
        """
        Yield the stored profile for in-place edits and save it on exit,
        only when the block actually changed it. Edits are serialized per
        store; an exception inside the block discards them.
        """
        async with self._lock:
            profile = await self.load()
            before = encode_profile(profile)
            yield profile
            if encode_profile(profile) != before:
                await self.save(profile)

    async def add_meal_record(self, record: MealRecord) -> UserProfile:
        async with self.edit() as profile:
            profile.add_meal_record(record)
        return profile

    async def push_recent_workout(self, workout: WorkoutType) -> bool:
        """Returns whether the head changed; nothing is saved when it did not."""
        async with self.edit() as profile:
            changed = profile.push_recent_workout(workout)
        return changed
