"""Unit tests for animal grouping in the hewan and settings services."""

import pytest

from careerconnect.core.errors import ValidationFailedError
from careerconnect.core.models.domain import JenisHewan
from careerconnect.server.services.hewan import ITEMS_PER_GROUP_KEY, HewanService
from careerconnect.server.services.settings import SettingsService, setting_text


class TestItemsPerGroup:
    async def test_default(self, session):
        assert await HewanService(session).items_per_group() == 100

    @pytest.mark.parametrize("raw,expected", [("25", 25), ("oops", 100), ("0", 100)])
    async def test_stored_value(self, session, raw, expected):
        service = HewanService(session)
        await service.settings.upsert(ITEMS_PER_GROUP_KEY, raw)
        assert await service.items_per_group() == expected


class TestListHewan:
    async def test_group_window(self, session, seed_hewan):
        await seed_hewan(7, per_group=3)
        service = HewanService(session)

        rows, total = await service.list_hewan(JenisHewan.SAPI, page=1, page_size=10, group="B", items_per_group=3)
        assert total == 3
        assert [h.hewan_id for h in rows] == ["B-1", "B-2", "B-3"]

        rows, total = await service.list_hewan(JenisHewan.SAPI, page=1, page_size=10, group="C", items_per_group=3)
        assert (total, [h.hewan_id for h in rows]) == (1, ["C-1"])

    async def test_page_inside_group(self, session, seed_hewan):
        await seed_hewan(6, per_group=6)
        rows, total = await HewanService(session).list_hewan(
            JenisHewan.SAPI, page=2, page_size=4, group="A", items_per_group=6
        )
        assert total == 6
        assert [h.hewan_id for h in rows] == ["A-5", "A-6"]

    async def test_group_beyond_animals(self, session, seed_hewan):
        await seed_hewan(2)
        rows, total = await HewanService(session).list_hewan(
            JenisHewan.SAPI, page=1, page_size=10, group="D", items_per_group=50
        )
        assert (rows, total) == ([], 0)

    async def test_invalid_group(self, session):
        with pytest.raises(ValidationFailedError):
            await HewanService(session).list_hewan(JenisHewan.SAPI, 1, 10, group="1", items_per_group=50)

    async def test_next_labels_follow_existing(self, session, seed_hewan):
        await seed_hewan(3, per_group=2)
        service = HewanService(session)
        await service.settings.upsert(ITEMS_PER_GROUP_KEY, "2")
        assert await service.next_labels(JenisHewan.SAPI, 2) == ["B-2", "C-1"]
        assert await service.next_labels(JenisHewan.DOMBA, 1) == ["A-1"]


class TestGroupSize:
    async def test_relabels_each_kind_separately(self, session, seed_hewan):
        await seed_hewan(3, per_group=50)
        await seed_hewan(2, jenis=JenisHewan.DOMBA, per_group=50)

        result = await SettingsService(session).update_group_size("2")

        assert result == {"items_per_group": 2, "renamed": 1}
        labels = [h.hewan_id for h in await HewanService(session).hewan.all_by_jenis(JenisHewan.SAPI)]
        assert labels == ["A-1", "A-2", "B-1"]
        assert await HewanService(session).items_per_group() == 2

    async def test_relabel_onto_labels_still_held(self, session, seed_hewan):
        await seed_hewan(3, per_group=2)

        result = await SettingsService(session).update_group_size(1)

        assert result == {"items_per_group": 1, "renamed": 2}
        labels = [h.hewan_id for h in await HewanService(session).hewan.all_by_jenis(JenisHewan.SAPI)]
        assert labels == ["A-1", "B-1", "C-1"]

    @pytest.mark.parametrize("value", [0, 101, "many", None])
    async def test_rejects_invalid_size(self, session, value):
        with pytest.raises(ValidationFailedError):
            await SettingsService(session).update_group_size(value)


@pytest.mark.parametrize("value,expected", [(True, "true"), (False, "false"), (50, "50"), ("x", "x")])
def test_setting_text(value, expected):
    assert setting_text(value) == expected
