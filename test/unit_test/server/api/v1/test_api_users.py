"""Unit tests for committee member management."""

import pytest


@pytest.fixture(autouse=True)
def _signed_in(signed_in_client):
    """Requests in this module come from a committee admin."""


async def create_member(client, **payload):
    return await client.post("/api/v1/users", json=payload)


class TestMembers:
    async def test_create_defaults_roles(self, client):
        response = await create_member(client, name="Ahmad", email="Ahmad@Example.com")
        assert response.status_code == 201
        assert response.json()["email"] == "ahmad@example.com"
        assert response.json()["roles"] == ["MEMBER"]

    async def test_create_requires_name_and_email(self, client):
        response = await create_member(client, name="Ahmad")
        assert response.status_code == 400

    async def test_duplicate_email(self, client):
        await create_member(client, name="Ahmad", email="ahmad@example.com")
        response = await create_member(client, name="Other", email="AHMAD@example.com")
        assert response.status_code == 409

    async def test_filter_by_name_and_roles(self, client):
        await create_member(client, name="Ahmad", email="ahmad@example.com", roles=["ADMIN"])
        await create_member(client, name="Budi", email="budi@example.com", roles=["PANITIA", "MEMBER"])
        await create_member(client, name="Citra", email="citra@example.com")

        by_role = await client.get("/api/v1/users", params={"roles": "ADMIN,PANITIA"})
        assert sorted(u["name"] for u in by_role.json()) == ["Admin", "Ahmad", "Budi"]

        by_name = await client.get("/api/v1/users", params={"name": "cit"})
        assert [u["name"] for u in by_name.json()] == ["Citra"]

        paged = await client.get("/api/v1/users", params={"take": 2})
        assert len(paged.json()) == 2

    async def test_update(self, client):
        member = (await create_member(client, name="Ahmad", email="ahmad@example.com")).json()
        response = await client.put(f"/api/v1/users/{member['id']}", json={"roles": ["ADMIN"], "name": "Ahmad S"})
        assert response.status_code == 200
        assert response.json()["roles"] == ["ADMIN"]
        assert response.json()["name"] == "Ahmad S"

    async def test_update_rejects_non_list_roles(self, client):
        member = (await create_member(client, name="Ahmad", email="ahmad@example.com")).json()
        response = await client.put(f"/api/v1/users/{member['id']}", json={"roles": "ADMIN"})
        assert response.status_code == 400

    async def test_update_and_delete_unknown(self, client):
        assert (await client.put("/api/v1/users/999", json={"name": "x"})).status_code == 404
        assert (await client.delete("/api/v1/users/999")).status_code == 404

    async def test_delete(self, client):
        member = (await create_member(client, name="Ahmad", email="ahmad@example.com")).json()
        response = await client.delete(f"/api/v1/users/{member['id']}")
        assert response.json() == {"success": True}
        remaining = (await client.get("/api/v1/users")).json()
        assert [u["email"] for u in remaining] == ["admin@example.com"]
