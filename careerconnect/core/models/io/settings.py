"""
Site settings, custom groups and image I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from careerconnect.core.models.domain import AnimalGroupType


class SettingRead(BaseModel):
    id: int
    key: str
    value: str
    updated_at: datetime

    class Config:
        from_attributes = True


class SettingUpsert(BaseModel):
    key: Optional[str] = None
    value: Optional[Any] = None


class SettingsBulkUpdate(BaseModel):
    settings: Optional[Dict[str, Any]] = None


class GroupSizeUpdate(BaseModel):
    items_per_group: Optional[Any] = None


class CustomGroupRead(BaseModel):
    id: int
    name: str
    description: str
    item_count: int
    animal_type: AnimalGroupType
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class CustomGroupCreate(BaseModel):
    name: Optional[str] = None
    description: str = ""
    item_count: Optional[int] = None
    animal_type: Optional[AnimalGroupType] = None
    is_active: bool = True


class CustomGroupUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    item_count: Optional[int] = None
    animal_type: Optional[AnimalGroupType] = None
    is_active: Optional[bool] = None


class LogoSettings(BaseModel):
    logo_image: Optional[str] = None
    logo_title: Optional[str] = None


class ImageRead(BaseModel):
    id: int
    url: str
    alt: Optional[str] = None
    related_id: str
    related_type: str
    created_at: datetime

    class Config:
        from_attributes = True


class SelectedImages(BaseModel):
    ids: List[str]
