"""
Committee member management.

Members are plain user rows carrying a JSON list of committee roles; they do
not need a password.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.database.repositories import UserRepository
from careerconnect.core.models.io.profiles import MemberCreate, MemberRead, MemberUpdate
from careerconnect.server.auth import require_admin

router = APIRouter(tags=["users"], dependencies=[Depends(require_admin)])

DEFAULT_ROLES = ["MEMBER"]


def _to_read(user: User) -> MemberRead:
    return MemberRead(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=user.get_roles_list(),
        image=user.image,
        created_at=user.created_at,
    )


@router.get(
    "",
    response_model=List[MemberRead],
    summary="List Members",
    description="Filter by name substring and by any of a comma separated list of roles.",
)
async def list_members(
    name: Optional[str] = None,
    roles: Optional[str] = None,
    skip: int = Query(0, ge=0),
    take: Optional[int] = Query(None, ge=1),
    session: AsyncSession = Depends(get_session),
) -> List[MemberRead]:
    role_list = [r.strip() for r in roles.split(",") if r.strip()] if roles else None
    users = await UserRepository(session).list_members(name=name, roles=role_list, skip=skip, take=take)
    return [_to_read(user) for user in users]


@router.post(
    "",
    response_model=MemberRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Member",
    responses={400: {"description": "Name and email are required"}, 409: {"description": "Email in use"}},
)
async def create_member(payload: MemberCreate, session: AsyncSession = Depends(get_session)) -> MemberRead:
    if not payload.name or not payload.email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name and email are required")
    repo = UserRepository(session)
    email = payload.email.strip().lower()
    if await repo.get_by_email(email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
    user = User(name=payload.name, email=email, image=payload.image)
    user.set_roles_list(payload.roles or DEFAULT_ROLES)
    return _to_read(await repo.create(user))


@router.put(
    "/{user_id}",
    response_model=MemberRead,
    summary="Update Member",
    responses={400: {"description": "roles must be a list"}, 404: {"description": "User not found"}},
)
async def update_member(
    user_id: int, payload: MemberUpdate, session: AsyncSession = Depends(get_session)
) -> MemberRead:
    changes = payload.model_dump(exclude_unset=True)
    if "roles" in changes and not isinstance(changes["roles"], list):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="roles must be an array")
    repo = UserRepository(session)
    user = await repo.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if "roles" in changes:
        user.set_roles_list([str(r) for r in changes.pop("roles")])
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
    for key, value in changes.items():
        if value is not None:
            setattr(user, key, value)
    return _to_read(await repo.update(user))


@router.delete("/{user_id}", summary="Delete Member", responses={404: {"description": "User not found"}})
async def delete_member(user_id: int, session: AsyncSession = Depends(get_session)):
    if not await UserRepository(session).delete(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return {"success": True}
