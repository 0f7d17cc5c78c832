"""Unit tests for the meat product flow endpoints."""

import pytest
import pytest_asyncio


@pytest.fixture(autouse=True)
def _signed_in(signed_in_client):
    """Requests in this module come from a committee admin."""


@pytest_asyncio.fixture
async def daging(client) -> dict:
    response = await client.post(
        "/api/v1/products", json={"nama": "Daging Sapi 1kg", "jenis_hewan": "SAPI", "target_paket": 100}
    )
    assert response.status_code == 201
    return response.json()


async def log(client, produk_id, event, place, value):
    return await client.post(
        "/api/v1/products/log", json={"produk_id": produk_id, "event": event, "place": place, "value": value}
    )


class TestProducts:
    async def test_create_and_filter(self, client, daging):
        await client.post("/api/v1/products", json={"nama": "Kepala Sapi", "jenis_produk": "KEPALA"})
        assert daging["di_timbang"] == 0
        kepala = await client.get("/api/v1/products", params={"jenis": "KEPALA"})
        assert [p["nama"] for p in kepala.json()] == ["Kepala Sapi"]
        assert len((await client.get("/api/v1/products")).json()) == 2


class TestProductLog:
    async def test_events_move_place_counters(self, client, daging):
        produk_id = daging["id"]
        assert (await log(client, produk_id, "menambahkan", "PENYEMBELIHAN", 30)).status_code == 201
        await log(client, produk_id, "memindahkan", "PENYEMBELIHAN", 10)
        await log(client, produk_id, "menambahkan", "DISTRIBUSI", 4)

        [produk] = (await client.get("/api/v1/products")).json()
        assert produk["di_timbang"] == 20
        assert produk["sdh_diserahkan"] == 4
        assert produk["di_inventori"] == 0

    async def test_counter_never_negative(self, client, daging):
        await log(client, daging["id"], "memindahkan", "INVENTORY", 5)
        [produk] = (await client.get("/api/v1/products")).json()
        assert produk["di_inventori"] == 0

    async def test_invalid_payloads(self, client, daging):
        assert (await log(client, None, "menambahkan", "INVENTORY", 1)).status_code == 400
        bad_event = await log(client, daging["id"], "hapus", "INVENTORY", 1)
        assert bad_event.json()["detail"] == "Invalid event: hapus"
        bad_place = await log(client, daging["id"], "menambahkan", "GUDANG", 1)
        assert bad_place.json()["detail"] == "Invalid place: GUDANG"
        assert (await log(client, 999, "menambahkan", "INVENTORY", 1)).status_code == 404

    async def test_list_logs(self, client, daging):
        await log(client, daging["id"], "menambahkan", "PENYEMBELIHAN", 3)
        await log(client, daging["id"], "menambahkan", "INVENTORY", 2)
        logs = await client.get("/api/v1/product-logs", params={"place": "INVENTORY"})
        assert [(entry["event"], entry["value"]) for entry in logs.json()] == [("menambahkan", 2)]
        assert len((await client.get("/api/v1/product-logs", params={"limit": 1})).json()) == 1


class TestShipments:
    async def test_send_and_receive(self, client, daging, applicant_headers):
        sent = await client.post(
            "/api/v1/shipments",
            json={"products": [{"produk_id": daging["id"], "jumlah": 12}], "catatan": "Truk 1"},
            headers=applicant_headers,
        )
        assert sent.status_code == 201
        shipment = sent.json()
        assert shipment["status"] == "DIKIRIM"
        assert shipment["products"] == [{"produk_id": daging["id"], "jumlah": 12}]

        pending = await client.get("/api/v1/shipments", params={"pending": True})
        assert [s["id"] for s in pending.json()] == [shipment["id"]]

        received = await client.post(
            f"/api/v1/shipments/{shipment['id']}", json=[{"produk_id": daging["id"], "jumlah": 10}]
        )
        assert received.status_code == 200
        assert received.json()["status"] == "DITERIMA"
        assert received.json()["waktu_terima"] is not None

        [produk] = (await client.get("/api/v1/products")).json()
        assert produk["di_inventori"] == 10
        assert (await client.get("/api/v1/shipments", params={"pending": True})).json() == []

    async def test_send_requires_products(self, client, applicant_headers):
        empty = await client.post("/api/v1/shipments", json={"products": []}, headers=applicant_headers)
        assert empty.status_code == 400
        unknown = await client.post(
            "/api/v1/shipments", json={"products": [{"produk_id": 999, "jumlah": 1}]}, headers=applicant_headers
        )
        assert unknown.status_code == 404
        assert unknown.json()["detail"] == "Produk not found: 999"

    async def test_receive_validates_body(self, client, daging, applicant_headers):
        sent = await client.post(
            "/api/v1/shipments",
            json={"products": [{"produk_id": daging["id"], "jumlah": 1}]},
            headers=applicant_headers,
        )
        url = f"/api/v1/shipments/{sent.json()['id']}"
        not_a_list = await client.post(url, json={"produk_id": daging["id"], "jumlah": 1})
        assert not_a_list.json()["detail"] == "Body must be a list of products"
        negative = await client.post(url, json=[{"produk_id": daging["id"], "jumlah": -1}])
        assert negative.status_code == 400
        missing = await client.post("/api/v1/shipments/999", json=[])
        assert missing.status_code == 404

    async def test_shipment_is_received_once(self, client, daging, applicant_headers):
        sent = await client.post(
            "/api/v1/shipments",
            json={"products": [{"produk_id": daging["id"], "jumlah": 5}]},
            headers=applicant_headers,
        )
        url = f"/api/v1/shipments/{sent.json()['id']}"
        items = [{"produk_id": daging["id"], "jumlah": 5}]

        assert (await client.post(url, json=items)).status_code == 200
        again = await client.post(url, json=items)
        assert again.status_code == 409
        assert again.json()["detail"] == "Shipment already received"

        [produk] = (await client.get("/api/v1/products")).json()
        assert produk["di_inventori"] == 5


class TestErrorLogs:
    async def test_moving_more_than_recorded(self, client, daging):
        await log(client, daging["id"], "menambahkan", "INVENTORY", 3)
        await log(client, daging["id"], "memindahkan", "INVENTORY", 3)
        assert (await client.get("/api/v1/error-logs")).json() == []

        await log(client, daging["id"], "memindahkan", "INVENTORY", 5)
        [entry] = (await client.get("/api/v1/error-logs")).json()
        assert entry["produk_id"] == daging["id"]
        assert entry["event"] == "memindahkan"
        assert entry["note"] == "INVENTORY: moved out 5 but only 0 recorded"

    async def test_shipment_quantity_mismatch(self, client, daging, applicant_headers):
        sent = await client.post(
            "/api/v1/shipments",
            json={"products": [{"produk_id": daging["id"], "jumlah": 12}]},
            headers=applicant_headers,
        )
        shipment_id = sent.json()["id"]
        await client.post(f"/api/v1/shipments/{shipment_id}", json=[{"produk_id": daging["id"], "jumlah": 10}])

        [entry] = (await client.get("/api/v1/error-logs")).json()
        assert entry["produk_id"] == daging["id"]
        assert entry["event"] == "shipment"
        assert entry["note"] == f"Shipment {shipment_id}: sent 12, received 10"

    async def test_matching_shipment_logs_nothing(self, client, daging, applicant_headers):
        sent = await client.post(
            "/api/v1/shipments",
            json={"products": [{"produk_id": daging["id"], "jumlah": 4}]},
            headers=applicant_headers,
        )
        await client.post(f"/api/v1/shipments/{sent.json()['id']}", json=[{"produk_id": daging["id"], "jumlah": 4}])
        assert (await client.get("/api/v1/error-logs")).json() == []

    async def test_newest_first(self, client, daging):
        for place in ("PENYEMBELIHAN", "INVENTORY", "DISTRIBUSI"):
            await log(client, daging["id"], "memindahkan", place, 1)
        entries = (await client.get("/api/v1/error-logs")).json()
        assert [e["note"].split(":")[0] for e in entries] == ["DISTRIBUSI", "INVENTORY", "PENYEMBELIHAN"]
        assert len((await client.get("/api/v1/error-logs", params={"limit": 2})).json()) == 2
        assert (await client.get("/api/v1/error-logs", params={"limit": 0})).status_code == 422
