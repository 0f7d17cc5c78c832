"""
Settings service for writes that span several rows.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.repositories import SettingRepository
from careerconnect.core.errors import ValidationFailedError
from careerconnect.server.core.constant import MAX_ITEMS_PER_GROUP

from .hewan import ITEMS_PER_GROUP_KEY, HewanService

logger = logging.getLogger(__name__)


def setting_text(value: Any) -> str:
    """Settings are stored as text; booleans keep the lower-case JSON spelling."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingsService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.settings = SettingRepository(session)

    async def bulk_upsert(self, values: Dict[str, Any]) -> int:
        """Upsert every key in one transaction; nothing is written if any upsert fails."""
        try:
            for key, value in values.items():
                await self.settings.stage_upsert(key, setting_text(value))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"Bulk updated {len(values)} settings")
        return len(values)

    async def update_group_size(self, items_per_group: Any) -> Dict[str, int]:
        """Store the new group size and relabel every animal accordingly."""
        try:
            size = int(items_per_group)
        except (TypeError, ValueError):
            raise ValidationFailedError("items_per_group must be a number")
        if not 1 <= size <= MAX_ITEMS_PER_GROUP:
            raise ValidationFailedError(f"items_per_group must be between 1 and {MAX_ITEMS_PER_GROUP}")

        try:
            await self.settings.stage_upsert(ITEMS_PER_GROUP_KEY, str(size))
            renamed = await HewanService(self.session).rename_groups(size)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return {"items_per_group": size, "renamed": renamed}
