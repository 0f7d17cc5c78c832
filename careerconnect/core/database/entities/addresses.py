"""
Address entity model.

Users keep several shipping/contact addresses; exactly one active address per
user may be flagged as primary.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Address(Base, table=True):
    """User address. Deleting an address only deactivates it.

    Table: addresses
    """

    __tablename__ = "addresses"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    label: Optional[str] = Field(default=None)
    recipient_name: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    street: str
    city: str
    province: Optional[str] = Field(default=None)
    postal_code: Optional[str] = Field(default=None)
    country: str = Field(default="Indonesia")
    is_primary: bool = Field(default=False)
    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})
