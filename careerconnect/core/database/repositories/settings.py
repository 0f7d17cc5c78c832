"""
Settings, custom group and image repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.settings import CustomGroup, Image, ItikafSetting, Setting
from .base import SQLModelRepository


class SettingRepository(SQLModelRepository[Setting]):
    """Key/value settings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Setting)

    async def list_all(self) -> List[Setting]:
        result = await self.session.execute(select(Setting).order_by(Setting.key))
        return list(result.scalars().all())

    async def get_by_key(self, key: str) -> Optional[Setting]:
        result = await self.session.execute(select(Setting).where(Setting.key == key))
        return result.scalar_one_or_none()

    async def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        setting = await self.get_by_key(key)
        return setting.value if setting is not None else default

    async def stage_upsert(self, key: str, value: str) -> Setting:
        """Insert or update ``key`` inside the current transaction; the caller commits."""
        setting = await self.get_by_key(key)
        if setting is None:
            setting = Setting(key=key, value=value)
        else:
            setting.value = value
            setting.updated_at = utc_now()
        return await self.stage(setting)

    async def upsert(self, key: str, value: str) -> Setting:
        setting = await self.stage_upsert(key, value)
        await self.session.commit()
        await self.session.refresh(setting)
        return setting


class CustomGroupRepository(SQLModelRepository[CustomGroup]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CustomGroup)

    async def list_all(self) -> List[CustomGroup]:
        result = await self.session.execute(select(CustomGroup).order_by(CustomGroup.created_at, CustomGroup.id))
        return list(result.scalars().all())


class ImageRepository(SQLModelRepository[Image]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Image)

    async def list_related(self, related_id: Optional[str], related_type: str) -> List[Image]:
        stmt = select(Image).where(Image.related_type == related_type)
        if related_id is not None:
            stmt = stmt.where(Image.related_id == related_id)
        result = await self.session.execute(stmt.order_by(Image.created_at.desc(), Image.id.desc()))
        return list(result.scalars().all())


class ItikafSettingRepository(SQLModelRepository[ItikafSetting]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ItikafSetting)

    async def get_current(self) -> Optional[ItikafSetting]:
        result = await self.session.execute(select(ItikafSetting).order_by(ItikafSetting.id).limit(1))
        return result.scalar_one_or_none()
