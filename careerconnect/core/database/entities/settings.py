"""
Site settings entity models.

Key/value settings drive the public landing page (logo, hero images, carousel)
and the Qurban dashboard (animal group size). Custom groups and uploaded
images are stored alongside them.
The Itikaf registry keeps its quotas and attendance window in a single row.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field

from careerconnect.core.models.domain import AnimalGroupType

from ..base import Base, utc_now


class Setting(Base, table=True):
    """Single key/value setting. Values are always stored as text.

    Table: settings
    """

    __tablename__ = "settings"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(index=True, unique=True)
    value: str = Field(sa_column=Column(Text, nullable=False))

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class CustomGroup(Base, table=True):
    """Named animal group with a fixed capacity.

    Table: custom_groups
    """

    __tablename__ = "custom_groups"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: str = Field(default="")
    item_count: int
    animal_type: AnimalGroupType = Field(default=AnimalGroupType.ALL)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Image(Base, table=True):
    """Uploaded image attached to another record (hero banner, transaction receipt, ...).

    Table: images
    """

    __tablename__ = "images"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    url: str
    alt: Optional[str] = Field(default=None)
    related_id: str = Field(index=True)
    related_type: str = Field(index=True)

    created_at: datetime = Field(default_factory=utc_now)


class ItikafSetting(Base, table=True):
    """Itikaf registration quotas and the nightly attendance window.

    Only one row exists; it is created with defaults on first read.
    Times are ``HH:MM`` in the configured Itikaf timezone.

    Table: itikaf_settings
    """

    __tablename__ = "itikaf_settings"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    local_quota: int = Field(default=100)
    free_quota: int = Field(default=100)
    woman_ratio: str = Field(default="40%")
    registration_open_date: date
    registration_closed_date: date
    itikaf_start_date: date
    attendance_open_time: str = Field(default="08:00")
    attendance_close_time: str = Field(default="22:00")

    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})
