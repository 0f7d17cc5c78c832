"""Authentication: password hashing, JWT access tokens, one-time tokens and FastAPI dependencies."""

from .dependencies import get_current_user, get_current_user_optional, is_admin, require_admin, require_recruiter
from .security import create_access_token, decode_access_token, hash_password, verify_password

__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_current_user_optional",
    "hash_password",
    "is_admin",
    "require_admin",
    "require_recruiter",
    "verify_password",
]
