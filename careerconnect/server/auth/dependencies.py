"""
FastAPI authentication dependencies.

Usage:
    @router.get("/protected")
    async def protected_route(user: User = Depends(get_current_user)):
        ...
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.database.repositories import UserRepository
from careerconnect.core.errors import AuthenticationError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.domain import UserRole

from .security import decode_access_token

logger = get_logger(__name__)

ADMIN_ROLE = "ADMIN"

# auto_error is off so a missing header becomes 401 rather than 403
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Resolve the bearer token to a stored user or answer 401."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized()

    try:
        claims = decode_access_token(credentials.credentials)
        user_id = int(claims["sub"])
    except (AuthenticationError, ValueError) as exc:
        logger.warning(f"JWT validation failed: {exc}")
        raise _unauthorized()

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        logger.warning(f"Token for unknown user {user_id}")
        raise _unauthorized()
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> Optional[User]:
    """Like ``get_current_user`` but an absent or invalid token yields ``None``."""
    if credentials is None:
        return None
    try:
        return await get_current_user(credentials, session)
    except HTTPException:
        return None


async def require_recruiter(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.RECRUITER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden - Recruiter access required")
    return user


def is_admin(user: User) -> bool:
    """Committee administrators carry ``ADMIN`` in their committee roles."""
    return ADMIN_ROLE in user.get_roles_list()


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not is_admin(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden - Admin access required")
    return user
