"""
Address book of the current user.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.database.repositories import AddressRepository
from careerconnect.core.models.io.addresses import AddressCreate, AddressRead, AddressUpdate
from careerconnect.server.auth import get_current_user
from careerconnect.server.services.addresses import AddressService

router = APIRouter(tags=["addresses"])


@router.get(
    "",
    response_model=List[AddressRead],
    summary="List Addresses",
    description="Active addresses, primary first, then newest first.",
)
async def list_addresses(
    user: User = Depends(get_current_user), session: AsyncSession = Depends(get_session)
) -> List[AddressRead]:
    return [AddressRead.model_validate(a) for a in await AddressRepository(session).list_active(user.id)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Address",
    description="Marking the new address primary clears the flag on the others.",
)
async def create_address(
    payload: AddressCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    address = await AddressService(session).create(user, payload)
    return {"address": AddressRead.model_validate(address)}


@router.put("/{address_id}", summary="Update Address", responses={404: {"description": "Address not found"}})
async def update_address(
    address_id: int,
    payload: AddressUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    address = await AddressService(session).update(user, address_id, payload)
    return {"address": AddressRead.model_validate(address)}


@router.delete("/{address_id}", summary="Delete Address", responses={404: {"description": "Address not found"}})
async def delete_address(
    address_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await AddressService(session).deactivate(user, address_id)
    return {"success": True}
