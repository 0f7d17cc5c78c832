"""Unit tests for the address book endpoints."""

BASE = "/api/v1/address"


def address(**overrides) -> dict:
    payload = {"label": "Home", "street": "Jl. Merdeka 1", "city": "Bogor", "postal_code": "16111"}
    payload.update(overrides)
    return payload


class TestAddresses:
    async def test_create_defaults_country(self, client, applicant_headers):
        response = await client.post(BASE, json=address(), headers=applicant_headers)
        assert response.status_code == 201
        created = response.json()["address"]
        assert created["country"] == "Indonesia"
        assert created["is_active"] is True

    async def test_single_primary(self, client, applicant_headers):
        first = (await client.post(BASE, json=address(is_primary=True), headers=applicant_headers)).json()
        second = (
            await client.post(BASE, json=address(label="Office", is_primary=True), headers=applicant_headers)
        ).json()

        listed = (await client.get(BASE, headers=applicant_headers)).json()
        assert [a["id"] for a in listed] == [second["address"]["id"], first["address"]["id"]]
        assert [a["is_primary"] for a in listed] == [True, False]

        await client.put(
            f"{BASE}/{first['address']['id']}", json={"is_primary": True}, headers=applicant_headers
        )
        listed = (await client.get(BASE, headers=applicant_headers)).json()
        assert [a["label"] for a in listed if a["is_primary"]] == ["Home"]

    async def test_update_fields(self, client, applicant_headers):
        created = (await client.post(BASE, json=address(), headers=applicant_headers)).json()["address"]
        response = await client.put(f"{BASE}/{created['id']}", json={"city": "Depok"}, headers=applicant_headers)
        assert response.status_code == 200
        assert response.json()["address"]["city"] == "Depok"
        assert response.json()["address"]["street"] == "Jl. Merdeka 1"

    async def test_delete_is_soft(self, client, applicant_headers):
        created = (await client.post(BASE, json=address(), headers=applicant_headers)).json()["address"]
        response = await client.delete(f"{BASE}/{created['id']}", headers=applicant_headers)
        assert response.json() == {"success": True}
        assert (await client.get(BASE, headers=applicant_headers)).json() == []

        again = await client.put(f"{BASE}/{created['id']}", json={"city": "x"}, headers=applicant_headers)
        assert again.status_code == 404

    async def test_other_users_addresses_are_hidden(self, client, applicant_headers, recruiter_headers):
        created = (await client.post(BASE, json=address(), headers=applicant_headers)).json()["address"]
        assert (await client.get(BASE, headers=recruiter_headers)).json() == []
        response = await client.delete(f"{BASE}/{created['id']}", headers=recruiter_headers)
        assert response.status_code == 404

    async def test_requires_authentication(self, client):
        assert (await client.get(BASE)).status_code == 401
