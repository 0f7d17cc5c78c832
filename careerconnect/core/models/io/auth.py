"""
Authentication I/O models.

Request fields are optional at the schema level so the routes can answer
missing values with the exact 400 messages clients rely on.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .profiles import ProfileRead


class SignUpRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = Field(default=None, description="'recruiter' or 'job_seeker'")
    name: Optional[str] = None


class SignInRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    """Public view of an account."""

    id: int
    email: str
    name: Optional[str] = None
    role: str

    class Config:
        from_attributes = True


class SignUpResponse(BaseModel):
    user: UserRead


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class MeResponse(BaseModel):
    user: UserRead
    profile: Optional[ProfileRead] = None


class VerifyEmailRequest(BaseModel):
    token: Optional[str] = None


class PasswordResetRequest(BaseModel):
    email: Optional[str] = None


class PasswordResetConfirm(BaseModel):
    token: Optional[str] = None
    password: Optional[str] = Field(default=None, description="New password")
