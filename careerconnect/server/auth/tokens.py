"""
One-time tokens for email verification and password reset.

Tokens are random uuid4 strings valid for ``TOKEN_EXPIRE_HOURS`` (one hour by
default). Issuing a new token for an email removes any earlier one.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.base import utc_now
from careerconnect.core.database.entities import PasswordResetToken, VerificationToken
from careerconnect.core.database.repositories import TokenRepository
from careerconnect.server.core.config import settings


def _expiry():
    return utc_now() + timedelta(hours=settings.auth.token_expire_hours)


async def generate_verification_token(session: AsyncSession, email: str) -> VerificationToken:
    repo = TokenRepository(session, VerificationToken)
    return await repo.replace(email, str(uuid.uuid4()), _expiry())


async def generate_password_reset_token(session: AsyncSession, email: str) -> PasswordResetToken:
    repo = TokenRepository(session, PasswordResetToken)
    return await repo.replace(email, str(uuid.uuid4()), _expiry())


async def get_verification_token(session: AsyncSession, token: str) -> Optional[VerificationToken]:
    return await TokenRepository(session, VerificationToken).get_valid(token)


async def get_password_reset_token(session: AsyncSession, token: str) -> Optional[PasswordResetToken]:
    return await TokenRepository(session, PasswordResetToken).get_valid(token)
