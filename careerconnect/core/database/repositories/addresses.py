"""
Address repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.addresses import Address
from .base import SQLModelRepository


class AddressRepository(SQLModelRepository[Address]):
    """Repository for user addresses."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Address)

    async def list_active(self, user_id: int) -> List[Address]:
        """Active addresses of a user, primary first, then newest first."""
        stmt = (
            select(Address)
            .where(Address.user_id == user_id, Address.is_active == True)  # noqa: E712
            .order_by(Address.is_primary.desc(), Address.created_at.desc(), Address.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_owned(self, address_id: int, user_id: int) -> Optional[Address]:
        stmt = select(Address).where(Address.id == address_id, Address.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def unset_primary(self, user_id: int, except_id: Optional[int] = None) -> None:
        """Clear the primary flag on the user's addresses inside the current transaction."""
        stmt = update(Address).where(Address.user_id == user_id, Address.is_primary == True)  # noqa: E712
        if except_id is not None:
            stmt = stmt.where(Address.id != except_id)
        await self.session.execute(stmt.values(is_primary=False))
