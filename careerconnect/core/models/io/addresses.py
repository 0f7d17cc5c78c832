"""
Address I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AddressRead(BaseModel):
    id: int
    user_id: int
    label: Optional[str] = None
    recipient_name: Optional[str] = None
    phone: Optional[str] = None
    street: str
    city: str
    province: Optional[str] = None
    postal_code: Optional[str] = None
    country: str
    is_primary: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AddressCreate(BaseModel):
    label: Optional[str] = None
    recipient_name: Optional[str] = None
    phone: Optional[str] = None
    street: str
    city: str
    province: Optional[str] = None
    postal_code: Optional[str] = None
    country: str = "Indonesia"
    is_primary: bool = False


class AddressUpdate(BaseModel):
    label: Optional[str] = None
    recipient_name: Optional[str] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    is_primary: Optional[bool] = None
