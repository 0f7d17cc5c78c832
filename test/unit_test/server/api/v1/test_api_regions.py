"""Unit tests for the public region lookups."""


class TestWilayahSearch:
    async def test_scored_results(self, client, region_files):
        response = await client.get("/api/v1/wilayah/search", params={"q": "bekasi", "limit": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [r["nama"] for r in body["data"]] == ["BEKASI BARAT", "KOTA BEKASI"]
        assert body["data"][0]["kode"] == "32.75.01"
        assert body["meta"] == {"query": "bekasi", "limit": 5, "total": 2}

    async def test_short_query_returns_empty_list(self, client, region_files):
        assert (await client.get("/api/v1/wilayah/search", params={"q": "j"})).json() == []
        assert (await client.get("/api/v1/wilayah/search")).json() == []

    async def test_missing_data_file(self, client, region_files):
        region_files["wilayah"].unlink()
        response = await client.get("/api/v1/wilayah/search", params={"q": "bekasi"})
        assert response.status_code == 503
        assert response.json()["detail"] == "Wilayah data is not available"


class TestCountries:
    async def test_list(self, client, region_files):
        response = await client.get("/api/v1/countries")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "total": 2,
            "data": [
                {"code": "ID", "name": "Indonesia", "dial": "62", "flagUrl": "https://flags.test/id.svg"},
                {"code": "MY", "name": "Malaysia", "dial": "", "flagUrl": "https://flags.test/my.png"},
            ],
        }
