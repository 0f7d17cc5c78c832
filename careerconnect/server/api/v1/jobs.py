"""
Job posting endpoints.

The public job board lists ACTIVE jobs only. Recruiters manage their own
postings under ``/jobs/recruiter`` and configure which catalogue fields the
application form asks for.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.database.repositories import (
    ApplicationRepository,
    JobFormFieldRepository,
    JobRepository,
)
from careerconnect.core.models.io import Pagination
from careerconnect.core.models.io.applications import ApplicationRead
from careerconnect.core.models.io.jobs import (
    FormFieldRead,
    JobCreate,
    JobDetailResponse,
    JobFormFieldCreate,
    JobListResponse,
    JobRead,
    JobUpdate,
)
from careerconnect.server.auth import get_current_user, require_recruiter
from careerconnect.server.services.applications import application_to_read
from careerconnect.server.services.jobs import JobService, form_field_to_read, job_to_read, visible_form_fields

router = APIRouter(tags=["jobs"])


@router.get(
    "",
    response_model=JobListResponse,
    summary="List Public Jobs",
    description="List ACTIVE jobs, newest first, with optional search and filters.",
    response_description="A page of jobs with pagination metadata.",
)
async def list_jobs(
    search: Optional[str] = None,
    location: Optional[str] = None,
    employment_type: Optional[str] = None,
    department: Optional[str] = None,
    company_id: Optional[int] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
) -> JobListResponse:
    """
    Public job board.

    - **search**: case-insensitive match on title, description or department.
    - **location** / **department**: substring filters.
    - **employment_type** / **company_id**: exact filters.
    """
    jobs, total = await JobRepository(session).list_public(
        page,
        limit,
        search=search,
        location=location,
        employment_type=employment_type,
        department=department,
        company_id=company_id,
    )
    counts = await JobService(session).candidate_counts(jobs)
    return JobListResponse(
        jobs=[job_to_read(job, counts.get(job.id, 0)) for job in jobs],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/recruiter",
    response_model=JobListResponse,
    summary="List Own Jobs",
    description="List the calling recruiter's jobs in any status.",
    responses={401: {"description": "Not authenticated"}, 403: {"description": "Not a recruiter"}},
)
async def list_recruiter_jobs(
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(require_recruiter),
    session: AsyncSession = Depends(get_session),
) -> JobListResponse:
    """``status=all`` (or no status) returns every posting."""
    jobs, total = await JobRepository(session).list_by_author(
        user.id, page, limit, status=status_filter, search=search
    )
    counts = await JobService(session).candidate_counts(jobs)
    return JobListResponse(
        jobs=[job_to_read(job, counts.get(job.id, 0)) for job in jobs],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "/recruiter",
    response_model=JobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job",
    description="Create a job posting together with its application form configuration.",
    responses={
        400: {"description": "Missing required field"},
        409: {"description": "A job with this title already exists"},
    },
)
async def create_job(
    payload: JobCreate,
    user: User = Depends(require_recruiter),
    session: AsyncSession = Depends(get_session),
) -> JobRead:
    job = await JobService(session).create_job(user, payload)
    return job_to_read(job, 0)


@router.get(
    "/{job_id}",
    response_model=JobDetailResponse,
    summary="Get Job",
    description="Public job detail with the fields the application form shows.",
    responses={404: {"description": "Job not found or no longer available"}},
)
async def get_job(job_id: int, session: AsyncSession = Depends(get_session)) -> JobDetailResponse:
    job = await JobRepository(session).get_active(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found or no longer available")
    rows = await JobFormFieldRepository(session).list_for_job(job.id, visible_only=True)
    counts = await JobService(session).candidate_counts([job])
    return JobDetailResponse(job=job_to_read(job, counts.get(job.id, 0)), form_fields=visible_form_fields(rows))


@router.put(
    "/{job_id}",
    response_model=JobRead,
    summary="Update Job",
    description="Partially update a job. Only its author may do so.",
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Not the author"},
        404: {"description": "Job not found"},
    },
)
async def update_job(
    job_id: int,
    payload: JobUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> JobRead:
    """When only ``salary_min`` is given, ``salary_max`` is set to the same value."""
    job = await JobService(session).update_job(job_id, user, payload)
    return job_to_read(job)


@router.delete(
    "/{job_id}",
    summary="Delete Job",
    description="Delete a job with its applications, notes and form configuration.",
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Not the author"},
        404: {"description": "Job not found"},
    },
)
async def delete_job(
    job_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await JobService(session).delete_job(job_id, user)
    return {"success": True}


@router.get(
    "/{job_id}/form-fields",
    response_model=List[FormFieldRead],
    summary="Get Form Field Configuration",
    description="All form fields configured on a job, in display order.",
)
async def get_form_fields(job_id: int, session: AsyncSession = Depends(get_session)) -> List[FormFieldRead]:
    rows = await JobFormFieldRepository(session).list_for_job(job_id)
    return [form_field_to_read(config, field) for config, field in rows]


@router.post(
    "/{job_id}/form-fields",
    response_model=FormFieldRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Form Field",
    description="Attach a catalogue field to a job, creating it in the catalogue when the key is new.",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Job not found"},
        409: {"description": "Field already added"},
    },
)
async def add_form_field(
    job_id: int,
    payload: JobFormFieldCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> FormFieldRead:
    return await JobService(session).add_form_field(job_id, user, payload)


@router.get(
    "/{job_id}/candidates",
    response_model=List[ApplicationRead],
    summary="List Candidates",
    description="All applications of a job with their applicant. Only the author may see them.",
    responses={403: {"description": "Not the author"}, 404: {"description": "Job not found"}},
)
async def list_candidates(
    job_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> List[ApplicationRead]:
    job = await JobService(session).get_owned_job(job_id, user)
    rows = await ApplicationRepository(session).list_with_applicants(job.id)
    return [application_to_read(application, applicant) for application, applicant in rows]
