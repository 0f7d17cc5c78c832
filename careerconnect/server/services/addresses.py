"""
Address service: at most one primary address per user.

Setting an address as primary clears the flag on the user's other addresses
in the same transaction.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.entities import Address, User
from careerconnect.core.database.repositories import AddressRepository
from careerconnect.core.errors import NotFoundError
from careerconnect.core.models.io.addresses import AddressCreate, AddressUpdate


class AddressService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.addresses = AddressRepository(session)

    async def create(self, user: User, payload: AddressCreate) -> Address:
        address = Address(**payload.model_dump(), user_id=user.id)
        try:
            if address.is_primary:
                await self.addresses.unset_primary(user.id)
            await self.addresses.stage(address)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(address)
        return address

    async def update(self, user: User, address_id: int, payload: AddressUpdate) -> Address:
        address = await self.addresses.get_owned(address_id, user.id)
        if address is None or not address.is_active:
            raise NotFoundError("Address not found")
        changes = payload.model_dump(exclude_unset=True)
        try:
            if changes.get("is_primary"):
                await self.addresses.unset_primary(user.id, except_id=address.id)
            for key, value in changes.items():
                if value is not None:
                    setattr(address, key, value)
            await self.addresses.stage(address)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(address)
        return address

    async def deactivate(self, user: User, address_id: int) -> None:
        address = await self.addresses.get_owned(address_id, user.id)
        if address is None or not address.is_active:
            raise NotFoundError("Address not found")
        address.is_active = False
        address.is_primary = False
        await self.addresses.update(address)
