from __future__ import annotations

from fastapi import APIRouter, Depends, status

from api.v1.deps import get_store
from api.v1.schemas import ProfileState, ProfileUpdate
from core.models.user import UserProfile
from services.profile_store import ProfileStore

router = APIRouter()


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=UserProfile, status_code=status.HTTP_200_OK)
async def get_profile(store: ProfileStore = Depends(get_store)) -> UserProfile:
    return await store.load()


@router.get("/state", response_model=ProfileState)
async def get_state(store: ProfileStore = Depends(get_store)) -> ProfileState:
    profile = await store.load()
    return ProfileState(
        state="main" if profile.is_profile_setup else "onboarding",
        is_profile_setup=profile.is_profile_setup,
    )


# ───────────────────────── update ───────────────────────────
@router.put("", response_model=UserProfile, status_code=status.HTTP_200_OK)
async def update_profile(
    body: ProfileUpdate,
    store: ProfileStore = Depends(get_store),
) -> UserProfile:
    # one save for the whole batch
    async with store.edit() as profile:
        for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(profile, field, value)
    return profile
