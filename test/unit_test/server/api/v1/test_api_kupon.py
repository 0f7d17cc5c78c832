"""Unit tests for meat coupon generation."""

import pytest


@pytest.fixture(autouse=True)
def _signed_in(signed_in_client):
    """Requests in this module come from a committee admin."""


class TestKupon:
    async def test_generate_and_list(self, client):
        response = await client.post("/api/v1/kupon/generate", json={"total_kupon": 3, "kupon_per_mudhohi": 2})
        assert response.json() == {"success": True, "message": "3 kupon berhasil dibuat", "kupon_per_mudhohi": 2}

        listed = (await client.get("/api/v1/kupon")).json()
        assert listed["success"] is True
        assert [k["kupon_id"] for k in listed["data"]] == ["KPN-0001", "KPN-0002", "KPN-0003"]
        assert {k["status"] for k in listed["data"]} == {"DISIMPAN"}

    async def test_generate_skips_existing_codes(self, client):
        await client.post("/api/v1/kupon/generate", json={"total_kupon": 2})
        response = await client.post("/api/v1/kupon/generate", json={"total_kupon": 4})
        assert response.status_code == 200
        listed = (await client.get("/api/v1/kupon")).json()["data"]
        assert len(listed) == 4

    async def test_total_must_be_positive(self, client):
        response = await client.post("/api/v1/kupon/generate", json={"total_kupon": 0})
        assert response.status_code == 400
        assert response.json()["detail"] == "Total kupon harus lebih dari 0"

    async def test_total_is_capped(self, client):
        response = await client.post("/api/v1/kupon/generate", json={"total_kupon": 40000})
        assert response.status_code == 400
        assert response.json()["detail"] == "Total kupon tidak boleh lebih dari 9999"
        assert (await client.get("/api/v1/kupon")).json()["data"] == []
