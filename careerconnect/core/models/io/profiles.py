"""
Profile, applicant info and committee member I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ProfileRead(BaseModel):
    id: int
    user_id: int
    full_name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    resume_url: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    resume_url: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class OtherUserInfoRead(BaseModel):
    user_id: int
    data: Dict[str, Any] = Field(default_factory=dict)
    updated_at: datetime


class MemberRead(BaseModel):
    """Committee member listing entry."""

    id: int
    name: Optional[str] = None
    email: str
    roles: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    created_at: datetime


class MemberCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    roles: Optional[List[str]] = None
    image: Optional[str] = None


class MemberUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    roles: Optional[Any] = Field(default=None, description="Must be a list of role names when given")
    image: Optional[str] = None
