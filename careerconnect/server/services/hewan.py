"""
Sacrificial animal service.

Animals of one kind (sapi / domba) are split into groups of
``itemsPerGroup`` in registration order and labelled ``A-1``, ``A-2``, ...
Changing the group size relabels every animal.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.base import utc_now
from careerconnect.core.database.entities import Hewan
from careerconnect.core.database.repositories import HewanRepository, SettingRepository, TipeHewanRepository
from careerconnect.core.errors import NotFoundError, ValidationFailedError
from careerconnect.core.grouping import group_index, hewan_label
from careerconnect.core.models.domain import HewanStatus, JenisHewan
from careerconnect.core.models.io.qurban import HewanMetaEntry
from careerconnect.server.core.constant import DEFAULT_ITEMS_PER_GROUP

logger = logging.getLogger(__name__)

ITEMS_PER_GROUP_KEY = "itemsPerGroup"


class HewanService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.hewan = HewanRepository(session)
        self.tipe = TipeHewanRepository(session)
        self.settings = SettingRepository(session)

    async def items_per_group(self) -> int:
        raw = await self.settings.get_value(ITEMS_PER_GROUP_KEY)
        try:
            value = int(raw) if raw is not None else DEFAULT_ITEMS_PER_GROUP
        except ValueError:
            logger.warning(f"Ignoring malformed {ITEMS_PER_GROUP_KEY} setting: {raw!r}")
            value = DEFAULT_ITEMS_PER_GROUP
        return value if value >= 1 else DEFAULT_ITEMS_PER_GROUP

    async def list_hewan(
        self,
        jenis: JenisHewan,
        page: int,
        page_size: int,
        group: Optional[str] = None,
        items_per_group: int = 50,
    ) -> Tuple[List[Hewan], int]:
        """Page through animals of a kind, optionally restricted to one group.

        A group is the slice of ``items_per_group`` animals at its position in
        registration order, so ``group="B"`` with 50 per group covers animals
        51 to 100.
        """
        total_kind = await self.hewan.count_by_jenis(jenis)
        if not group:
            offset = (page - 1) * page_size
            return await self.hewan.list_window(jenis, offset, page_size), total_kind

        try:
            index = group_index(group)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc
        group_start = index * items_per_group
        group_end = min(group_start + items_per_group, total_kind)
        total = max(0, group_end - group_start)

        offset = group_start + (page - 1) * page_size
        limit = min(page_size, group_end - offset)
        if limit <= 0:
            return [], total
        return await self.hewan.list_window(jenis, offset, limit), total

    async def next_labels(self, jenis: JenisHewan, count: int) -> List[str]:
        """Labels for ``count`` animals about to be registered after the existing ones."""
        per_group = await self.items_per_group()
        existing = await self.hewan.count_by_jenis(jenis)
        return [hewan_label(existing + i, per_group) for i in range(count)]

    async def rename_groups(self, items_per_group: int) -> int:
        """Relabel every animal for a new group size. Staged only; the caller commits.

        Changed rows first move to a placeholder label so no intermediate flush
        collides with a label another animal still holds.

        Returns:
            Number of animals whose label changed.
        """
        renamed = 0
        for jenis in JenisHewan:
            changed: List[Tuple[Hewan, str]] = []
            for position, hewan in enumerate(await self.hewan.all_by_jenis(jenis)):
                label = hewan_label(position, items_per_group)
                if hewan.hewan_id != label:
                    changed.append((hewan, label))
            for hewan, _ in changed:
                hewan.hewan_id = f"~{hewan.id}"
                await self.hewan.stage(hewan)
            for hewan, label in changed:
                hewan.hewan_id = label
                await self.hewan.stage(hewan)
            renamed += len(changed)
        logger.info(f"Relabelled {renamed} animals for {items_per_group} per group")
        return renamed

    async def _get(self, jenis: JenisHewan, hewan_id: str) -> Hewan:
        hewan = await self.hewan.get_by_label(jenis, hewan_id)
        if hewan is None:
            raise NotFoundError("Hewan not found")
        return hewan

    async def set_inventory(self, jenis: JenisHewan, hewan_id: str, on_inventory: bool) -> Hewan:
        hewan = await self._get(jenis, hewan_id)
        hewan.on_inventory = on_inventory
        if on_inventory:
            hewan.status = HewanStatus.DIINVENTORY
        return await self.hewan.update(hewan)

    async def set_received(self, jenis: JenisHewan, hewan_id: str, received: bool) -> Hewan:
        hewan = await self._get(jenis, hewan_id)
        hewan.received = received
        if received:
            hewan.status = HewanStatus.TERDISTRIBUSI
        return await self.hewan.update(hewan)

    async def update_status(self, jenis: JenisHewan, hewan_id: str, status: HewanStatus, slaughtered: bool) -> Hewan:
        hewan = await self._get(jenis, hewan_id)
        hewan.status = status
        if slaughtered and not hewan.slaughtered:
            hewan.slaughtered_at = utc_now()
        elif not slaughtered:
            hewan.slaughtered_at = None
        hewan.slaughtered = slaughtered
        return await self.hewan.update(hewan)

    async def meta(self, jenis: Optional[JenisHewan] = None) -> Dict[str, HewanMetaEntry]:
        """Per animal type: registered, target and slaughtered counts."""
        types = await self.tipe.list_all(jenis)
        counts = await self.tipe.hewan_counts(t.id for t in types)
        return {
            t.nama: HewanMetaEntry(total=counts[t.id][0], target=t.target, slaughtered=counts[t.id][1])
            for t in types
        }

    async def set_target(self, type_id: int, target) -> None:
        try:
            value = int(target)
        except (TypeError, ValueError):
            raise ValidationFailedError("Target must be a number")
        tipe = await self.tipe.get_by_id(type_id)
        if tipe is None:
            raise NotFoundError("Tipe hewan not found")
        tipe.target = value
        await self.tipe.update(tipe)
