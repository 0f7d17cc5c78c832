"""Unit tests for applying to jobs and reviewing applications."""

import pytest_asyncio
from sqlmodel import select

from careerconnect.core.database.entities import InfoField, OtherUserInfo, Profile
from careerconnect.core.models.domain import UserRole


@pytest_asyncio.fixture
async def job_id(client, session, recruiter_headers) -> int:
    full_name = InfoField(key="full_name", label="Full Name", is_default=True)
    phone = InfoField(key="phone", label="Phone Number", field_type="phone")
    portfolio = InfoField(key="portfolio", label="Portfolio URL", field_type="url")
    session.add_all([full_name, phone, portfolio])
    await session.commit()

    response = await client.post(
        "/api/v1/jobs/recruiter",
        json={
            "title": "Data Analyst",
            "description": "Crunch numbers",
            "employment_type": "FULL_TIME",
            "number_of_candidates": 1,
            "status": "ACTIVE",
            "application_form_fields": [
                {"field_id": full_name.id, "field_state": "mandatory", "sort_order": 1},
                {"field_id": phone.id, "field_state": "optional", "sort_order": 2},
                {"field_id": portfolio.id, "field_state": "optional", "sort_order": 3},
            ],
        },
        headers=recruiter_headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


def answers(**overrides) -> dict:
    form = {"full_name": "Siti Aminah", "phone": "081234567890"}
    form.update(overrides)
    return {"cover_letter": "Hire me", "form_responses": form}


class TestApply:
    async def test_apply_updates_profile_and_counter(self, client, session, job_id, applicant, applicant_headers):
        response = await client.post(
            f"/api/v1/jobs/{job_id}/apply",
            json=answers(skills="SQL"),
            headers=applicant_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["source"] == "website"
        assert body["applicant"]["email"] == "applicant@example.com"
        assert body["form_responses"]["full_name"] == "Siti Aminah"

        profile = (await session.execute(select(Profile).where(Profile.user_id == applicant.id))).scalar_one()
        assert profile.phone == "081234567890"
        info = (
            await session.execute(select(OtherUserInfo).where(OtherUserInfo.user_id == applicant.id))
        ).scalar_one()
        assert info.get_data()["skills"] == "SQL"
        assert "phone" not in info.get_data()

        job = await client.get(f"/api/v1/jobs/{job_id}")
        assert job.json()["job"]["applications_count"] == 1

    async def test_missing_mandatory_field(self, client, job_id, applicant_headers):
        response = await client.post(
            f"/api/v1/jobs/{job_id}/apply",
            json={"form_responses": {"phone": "081234567890"}},
            headers=applicant_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required field: Full Name"

    async def test_malformed_value(self, client, job_id, applicant_headers):
        response = await client.post(
            f"/api/v1/jobs/{job_id}/apply",
            json=answers(portfolio="not a url"),
            headers=applicant_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Portfolio URL: Invalid URL"

    async def test_apply_twice_conflicts(self, client, job_id, applicant_headers):
        await client.post(f"/api/v1/jobs/{job_id}/apply", json=answers(), headers=applicant_headers)
        response = await client.post(f"/api/v1/jobs/{job_id}/apply", json=answers(), headers=applicant_headers)
        assert response.status_code == 409

    async def test_unknown_job(self, client, applicant_headers):
        response = await client.post("/api/v1/jobs/404/apply", json=answers(), headers=applicant_headers)
        assert response.status_code == 404

    async def test_my_applications(self, client, job_id, applicant_headers):
        await client.post(f"/api/v1/jobs/{job_id}/apply", json=answers(), headers=applicant_headers)
        response = await client.get("/api/v1/applications", headers=applicant_headers)
        assert response.status_code == 200
        [mine] = response.json()
        assert mine["job"]["title"] == "Data Analyst"


class TestReview:
    @pytest_asyncio.fixture
    async def application_id(self, client, job_id, applicant_headers) -> int:
        response = await client.post(f"/api/v1/jobs/{job_id}/apply", json=answers(), headers=applicant_headers)
        return response.json()["id"]

    async def test_list_and_filter(self, client, job_id, application_id, recruiter_headers):
        response = await client.get(f"/api/v1/jobs/{job_id}/applications", headers=recruiter_headers)
        body = response.json()
        assert [a["id"] for a in body["applications"]] == [application_id]
        assert body["pagination"]["total_count"] == 1

        searched = await client.get(
            f"/api/v1/jobs/{job_id}/applications", params={"search": "nobody"}, headers=recruiter_headers
        )
        assert searched.json()["applications"] == []

    async def test_other_users_cannot_list(self, client, job_id, applicant_headers):
        response = await client.get(f"/api/v1/jobs/{job_id}/applications", headers=applicant_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found or access denied"

    async def test_update_status_and_rating(self, client, job_id, application_id, recruiter_headers):
        response = await client.patch(
            f"/api/v1/jobs/{job_id}/applications/{application_id}",
            json={"status": "UNDER_REVIEW", "rating": 4},
            headers=recruiter_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "UNDER_REVIEW"
        assert response.json()["rating"] == 4
        assert response.json()["status_updated_at"] is not None

    async def test_update_rejects_non_author(self, client, job_id, application_id, make_user, auth_headers):
        other = await make_user(email="other@example.com", role=UserRole.RECRUITER)
        response = await client.patch(
            f"/api/v1/jobs/{job_id}/applications/{application_id}",
            json={"status": "ACCEPTED"},
            headers=auth_headers(other),
        )
        assert response.status_code == 403

    async def test_bulk_update_leaves_notes(self, client, job_id, application_id, recruiter_headers):
        response = await client.patch(
            f"/api/v1/jobs/{job_id}/applications/bulk",
            json={"application_ids": [application_id], "status": "REJECTED", "note": "Position filled"},
            headers=recruiter_headers,
        )
        assert response.status_code == 200
        assert response.json()["updated"] == 1

        notes = await client.get(
            f"/api/v1/jobs/{job_id}/applications/{application_id}/notes", headers=recruiter_headers
        )
        assert [n["content"] for n in notes.json()] == ["Position filled"]

    async def test_bulk_update_requires_ids(self, client, job_id, recruiter_headers):
        response = await client.patch(
            f"/api/v1/jobs/{job_id}/applications/bulk", json={"status": "REJECTED"}, headers=recruiter_headers
        )
        assert response.status_code == 400

    async def test_bulk_update_unknown_ids(self, client, job_id, application_id, recruiter_headers):
        response = await client.patch(
            f"/api/v1/jobs/{job_id}/applications/bulk",
            json={"application_ids": [application_id, 999], "status": "REJECTED"},
            headers=recruiter_headers,
        )
        assert response.status_code == 403

    async def test_add_note(self, client, job_id, application_id, recruiter_headers):
        empty = await client.post(
            f"/api/v1/jobs/{job_id}/applications/{application_id}/notes",
            json={"content": "  "},
            headers=recruiter_headers,
        )
        assert empty.status_code == 400

        created = await client.post(
            f"/api/v1/jobs/{job_id}/applications/{application_id}/notes",
            json={"content": "Strong SQL", "is_internal": False},
            headers=recruiter_headers,
        )
        assert created.status_code == 201
        assert created.json()["is_internal"] is False

    async def test_analytics_and_candidates(self, client, job_id, application_id, recruiter_headers):
        analytics = await client.get(f"/api/v1/jobs/{job_id}/analytics", headers=recruiter_headers)
        body = analytics.json()
        assert body["total_applications"] == 1
        assert body["status_breakdown"] == {"PENDING": 1}
        assert body["applications_by_source"] == {"website": 1}

        candidates = await client.get(f"/api/v1/jobs/{job_id}/candidates", headers=recruiter_headers)
        assert [c["applicant"]["name"] for c in candidates.json()] == ["Test User"]
