"""
User, profile and token repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Type, TypeVar, Union

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.users import OtherUserInfo, PasswordResetToken, Profile, User, VerificationToken
from .base import QueryBuilder, SQLModelRepository

TokenType = TypeVar("TokenType", VerificationToken, PasswordResetToken)


class UserRepository(SQLModelRepository[User]):
    """Repository for login accounts and committee members."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_members(
        self,
        name: Optional[str] = None,
        roles: Optional[List[str]] = None,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> List[User]:
        """List users for the committee screen.

        Args:
            name: Case-insensitive substring of the user's name
            roles: Keep users holding at least one of these committee roles
            skip: Number of records to skip
            take: Maximum number of records to return
        """
        stmt = select(User).order_by(User.created_at.desc())
        stmt = QueryBuilder.apply_search(stmt, [User.name], name)
        if roles:
            # roles are stored as a JSON array; match the quoted role name
            stmt = stmt.where(or_(*[User.roles.contains(f'"{role}"') for role in roles]))
        stmt = QueryBuilder.apply_pagination(stmt, take, skip)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ProfileRepository(SQLModelRepository[Profile]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)

    async def get_by_user(self, user_id: int) -> Optional[Profile]:
        result = await self.session.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()


class OtherUserInfoRepository(SQLModelRepository[OtherUserInfo]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, OtherUserInfo)

    async def get_by_user(self, user_id: int) -> Optional[OtherUserInfo]:
        result = await self.session.execute(select(OtherUserInfo).where(OtherUserInfo.user_id == user_id))
        return result.scalar_one_or_none()


class TokenRepository:
    """Shared access to the one-time token tables.

    Both verification and password reset tokens have the same shape; the
    entity class picks the table.
    """

    def __init__(self, session: AsyncSession, model: Type[TokenType]) -> None:
        self.session = session
        self.model = model

    async def replace(self, email: str, token: str, expires: datetime) -> Union[VerificationToken, PasswordResetToken]:
        """Delete any token issued to ``email`` and store a new one."""
        await self.session.execute(delete(self.model).where(self.model.email == email))
        entity = self.model(email=email, token=token, expires=expires)
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_valid(self, token: str) -> Optional[Union[VerificationToken, PasswordResetToken]]:
        """Return the token row if it exists and has not expired."""
        stmt = select(self.model).where(self.model.token == token, self.model.expires > utc_now())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Union[VerificationToken, PasswordResetToken]]:
        result = await self.session.execute(select(self.model).where(self.model.email == email))
        return result.scalars().first()

    async def consume(self, entity: Union[VerificationToken, PasswordResetToken]) -> None:
        await self.session.delete(entity)
        await self.session.flush()
