"""
Profile endpoints.

Profiles are readable by anyone; only their owner may change them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import Profile, User
from careerconnect.core.database.repositories import OtherUserInfoRepository, ProfileRepository
from careerconnect.core.models.io.profiles import OtherUserInfoRead, ProfileRead, ProfileUpdate
from careerconnect.server.auth import get_current_user

router = APIRouter(tags=["profiles"])


@router.get(
    "/user/{user_id}",
    response_model=ProfileRead,
    summary="Get Profile",
    responses={404: {"description": "Profile not found"}},
)
async def get_profile(user_id: int, session: AsyncSession = Depends(get_session)) -> ProfileRead:
    profile = await ProfileRepository(session).get_by_user(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return ProfileRead.model_validate(profile)


@router.put(
    "/user/{user_id}",
    response_model=ProfileRead,
    summary="Update Profile",
    description="Update the caller's own profile, creating it when missing.",
    responses={403: {"description": "Profile belongs to another user"}},
)
async def update_profile(
    user_id: int,
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileRead:
    if user.id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    repo = ProfileRepository(session)
    profile = await repo.get_by_user(user_id) or Profile(user_id=user_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    return ProfileRead.model_validate(await repo.update(profile))


@router.get(
    "/user/{user_id}/user-info",
    response_model=OtherUserInfoRead,
    summary="Get Applicant Info",
    description="Extra form answers collected from the user's applications.",
    responses={404: {"description": "No info stored"}},
)
async def get_user_info(user_id: int, session: AsyncSession = Depends(get_session)) -> OtherUserInfoRead:
    info = await OtherUserInfoRepository(session).get_by_user(user_id)
    if info is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User info not found")
    return OtherUserInfoRead(user_id=info.user_id, data=info.get_data(), updated_at=info.updated_at)
