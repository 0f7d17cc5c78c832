"""
User account entity models.

This module contains the entities behind authentication and people
management: accounts, applicant profiles, extra applicant information, and
one-time tokens for email verification and password reset.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Field

from careerconnect.core.models.domain import UserRole

from ..base import Base, load_json, utc_now

DEFAULT_MEMBER_ROLES = ["MEMBER"]


class User(Base, table=True):
    """Login account.

    ``role`` drives authorization for the recruiting API. ``roles`` is the list
    of committee roles (e.g. ``MEMBER``, ``ADMIN``, ``BENDAHARA``) used by the
    Qurban committee management screens.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = Field(default=None)
    password_hash: Optional[str] = Field(default=None)
    role: UserRole = Field(default=UserRole.APPLICANT)
    roles: str = Field(default='["MEMBER"]', description="JSON array of committee roles")
    email_verified: Optional[datetime] = Field(default=None)
    image: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def get_roles_list(self) -> List[str]:
        return load_json(self.roles, [])

    def set_roles_list(self, roles: List[str]) -> None:
        self.roles = json.dumps(roles)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class Profile(Base, table=True):
    """Applicant / recruiter profile, one per user.

    Table: profiles
    """

    __tablename__ = "profiles"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, unique=True)
    full_name: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    location: Optional[str] = Field(default=None)
    linkedin: Optional[str] = Field(default=None)
    resume_url: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)
    avatar_url: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class OtherUserInfo(Base, table=True):
    """Free-form applicant answers that have no dedicated profile column.

    Table: other_user_info
    """

    __tablename__ = "other_user_info"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, unique=True)
    data: str = Field(default="{}", description="JSON object of extra form answers")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def get_data(self) -> Dict[str, Any]:
        return load_json(self.data, {})

    def set_data(self, data: Dict[str, Any]) -> None:
        self.data = json.dumps(data)


class VerificationToken(Base, table=True):
    """One-time email verification token.

    Table: verification_tokens
    """

    __tablename__ = "verification_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True)
    token: str = Field(index=True, unique=True)
    expires: datetime


class PasswordResetToken(Base, table=True):
    """One-time password reset token.

    Table: password_reset_tokens
    """

    __tablename__ = "password_reset_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True)
    token: str = Field(index=True, unique=True)
    expires: datetime
