"""
Password hashing and access token helpers.

Passwords are hashed with werkzeug's salted PBKDF2/scrypt helpers. Access
tokens are HS256 JWTs signed with ``JWT_SECRET_KEY`` carrying the user id as
``sub`` and the account role as ``role``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from careerconnect.core.errors import AuthenticationError
from careerconnect.server.core.config import settings


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def create_access_token(subject: Any, role: str, expires_minutes: Optional[int] = None) -> str:
    """Sign a token for ``subject`` (the user id) valid for ``expires_minutes``."""
    auth = settings.auth
    minutes = expires_minutes if expires_minutes is not None else auth.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    claims = {"sub": str(subject), "role": role, "exp": expire}
    return jwt.encode(claims, auth.jwt_secret_key, algorithm=auth.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify ``token`` and return its claims.

    Raises:
        AuthenticationError: If the signature is wrong, the token expired or ``sub`` is missing.
    """
    auth = settings.auth
    try:
        claims = jwt.decode(token, auth.jwt_secret_key, algorithms=[auth.jwt_algorithm])
    except JWTError as exc:
        raise AuthenticationError(f"Invalid token: {exc}") from exc
    if not claims.get("sub"):
        raise AuthenticationError("Invalid token: missing user ID")
    return claims
