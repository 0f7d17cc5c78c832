"""Unit tests for the job posting endpoints."""

import pytest_asyncio

from careerconnect.core.database.entities import InfoField
from careerconnect.core.models.domain import UserRole

BASE = "/api/v1/jobs"


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Engineer",
        "description": "Build APIs",
        "employment_type": "FULL_TIME",
        "number_of_candidates": 2,
        "department": "Engineering",
        "location": "Jakarta",
        "salary_min": 10_000_000,
        "salary_max": 15_000_000,
        "status": "ACTIVE",
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def info_fields(session):
    fields = [
        InfoField(key="full_name", label="Full Name", is_default=True),
        InfoField(key="phone", label="Phone Number", field_type="tel", is_default=True),
        InfoField(key="portfolio", label="Portfolio URL", field_type="url"),
    ]
    session.add_all(fields)
    await session.commit()
    for field in fields:
        await session.refresh(field)
    return fields


class TestCreateJob:
    async def test_create_with_form_fields(self, client, recruiter_headers, info_fields):
        full_name, phone, portfolio = info_fields
        payload = job_payload(
            application_form_fields=[
                {"field_id": phone.id, "field_state": "optional", "sort_order": 2},
                {"field_id": full_name.id, "field_state": "mandatory", "sort_order": 1},
                {"field_id": portfolio.id, "field_state": "off", "sort_order": 3},
            ]
        )
        response = await client.post(f"{BASE}/recruiter", json=payload, headers=recruiter_headers)
        assert response.status_code == 201
        job = response.json()
        assert job["slug"] == "backend-engineer"
        assert job["salary_display"] == "Rp 10.000.000 - Rp 15.000.000"

        fields = await client.get(f"{BASE}/{job['id']}/form-fields")
        assert [f["field_name"] for f in fields.json()] == ["full_name", "phone"]

    async def test_missing_required_field(self, client, recruiter_headers):
        response = await client.post(
            f"{BASE}/recruiter", json=job_payload(description=None), headers=recruiter_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required field: description"

    async def test_duplicate_title(self, client, recruiter_headers):
        await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        response = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        assert response.status_code == 409

    async def test_applicants_cannot_create_jobs(self, client, applicant_headers):
        response = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=applicant_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Forbidden - Recruiter access required"

    async def test_requires_authentication(self, client):
        response = await client.post(f"{BASE}/recruiter", json=job_payload())
        assert response.status_code == 401


class TestPublicJobs:
    async def test_only_active_jobs_are_listed(self, client, recruiter_headers):
        await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        await client.post(
            f"{BASE}/recruiter", json=job_payload(title="Draft Role", status="DRAFT"), headers=recruiter_headers
        )

        response = await client.get(BASE)
        assert response.status_code == 200
        body = response.json()
        assert [j["title"] for j in body["jobs"]] == ["Backend Engineer"]
        assert body["pagination"]["total_count"] == 1
        assert body["pagination"]["has_next_page"] is False

    async def test_search_and_filters(self, client, recruiter_headers):
        await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        await client.post(
            f"{BASE}/recruiter",
            json=job_payload(title="Designer", department="Design", location="Bandung", employment_type="CONTRACT"),
            headers=recruiter_headers,
        )

        by_search = await client.get(BASE, params={"search": "backend"})
        assert [j["title"] for j in by_search.json()["jobs"]] == ["Backend Engineer"]

        by_location = await client.get(BASE, params={"location": "band"})
        assert [j["title"] for j in by_location.json()["jobs"]] == ["Designer"]

        by_type = await client.get(BASE, params={"employment_type": "CONTRACT"})
        assert [j["title"] for j in by_type.json()["jobs"]] == ["Designer"]

    async def test_pagination(self, client, recruiter_headers):
        for i in range(3):
            await client.post(f"{BASE}/recruiter", json=job_payload(title=f"Role {i}"), headers=recruiter_headers)
        response = await client.get(BASE, params={"page": 2, "limit": 2})
        pagination = response.json()["pagination"]
        assert len(response.json()["jobs"]) == 1
        assert pagination["total_pages"] == 2
        assert pagination["has_prev_page"] is True

    async def test_detail_hides_draft_jobs(self, client, recruiter_headers):
        created = await client.post(
            f"{BASE}/recruiter", json=job_payload(status="DRAFT"), headers=recruiter_headers
        )
        response = await client.get(f"{BASE}/{created.json()['id']}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found or no longer available"

    async def test_detail_lists_visible_fields_in_order(self, client, recruiter_headers, info_fields):
        full_name, phone, _ = info_fields
        created = await client.post(
            f"{BASE}/recruiter",
            json=job_payload(
                application_form_fields=[
                    {"field_id": phone.id, "field_state": "optional", "sort_order": 1},
                    {"field_id": full_name.id, "field_state": "mandatory", "sort_order": 2},
                ]
            ),
            headers=recruiter_headers,
        )
        response = await client.get(f"{BASE}/{created.json()['id']}")
        assert response.status_code == 200
        fields = response.json()["form_fields"]
        assert [(f["field_name"], f["field_state"]) for f in fields] == [
            ("phone", "optional"),
            ("full_name", "mandatory"),
        ]


class TestRecruiterJobs:
    async def test_lists_own_jobs_in_any_status(self, client, recruiter_headers, make_user, auth_headers):
        other = await make_user(email="other@example.com", role=UserRole.RECRUITER)
        other_headers = auth_headers(other)
        await client.post(f"{BASE}/recruiter", json=job_payload(status="DRAFT"), headers=recruiter_headers)
        await client.post(f"{BASE}/recruiter", json=job_payload(title="Theirs"), headers=other_headers)

        response = await client.get(f"{BASE}/recruiter", headers=recruiter_headers)
        assert [j["title"] for j in response.json()["jobs"]] == ["Backend Engineer"]

        drafts = await client.get(f"{BASE}/recruiter", params={"status": "ACTIVE"}, headers=recruiter_headers)
        assert drafts.json()["jobs"] == []


class TestUpdateDeleteJob:
    async def test_salary_min_only_sets_max(self, client, recruiter_headers):
        created = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        response = await client.put(
            f"{BASE}/{created.json()['id']}", json={"salary_min": 7_000_000}, headers=recruiter_headers
        )
        assert response.status_code == 200
        assert response.json()["salary_min"] == 7_000_000
        assert response.json()["salary_max"] == 7_000_000

    async def test_only_author_may_update(self, client, recruiter_headers, applicant_headers):
        created = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        response = await client.put(
            f"{BASE}/{created.json()['id']}", json={"title": "Hijacked"}, headers=applicant_headers
        )
        assert response.status_code == 403

    async def test_update_unknown_job(self, client, recruiter_headers):
        response = await client.put(f"{BASE}/999", json={"title": "x"}, headers=recruiter_headers)
        assert response.status_code == 404

    async def test_delete(self, client, recruiter_headers):
        created = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        job_id = created.json()["id"]
        response = await client.delete(f"{BASE}/{job_id}", headers=recruiter_headers)
        assert response.json() == {"success": True}
        assert (await client.get(f"{BASE}/{job_id}")).status_code == 404


class TestFormFieldConfig:
    async def test_add_field_creates_catalogue_entry(self, client, recruiter_headers):
        created = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        job_id = created.json()["id"]
        response = await client.post(
            f"{BASE}/{job_id}/form-fields",
            json={"field_key": "github_url", "field_type": "url", "field_state": "mandatory", "sort_order": 5},
            headers=recruiter_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["field_name"] == "github_url"
        assert body["label"] == "Github Url"
        assert body["display_order"] == 5

        catalogue = await client.get("/api/v1/info-fields", headers=recruiter_headers)
        assert "github_url" in [f["key"] for f in catalogue.json()]

    async def test_adding_twice_conflicts(self, client, recruiter_headers):
        created = await client.post(f"{BASE}/recruiter", json=job_payload(), headers=recruiter_headers)
        job_id = created.json()["id"]
        body = {"field_key": "github_url", "field_state": "optional", "sort_order": 1}
        await client.post(f"{BASE}/{job_id}/form-fields", json=body, headers=recruiter_headers)
        response = await client.post(f"{BASE}/{job_id}/form-fields", json=body, headers=recruiter_headers)
        assert response.status_code == 409
