"""
Application endpoints.

Applicants submit applications and list their own; recruiters review the
applications of the jobs they authored.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.database.repositories import ApplicationRepository, UserRepository
from careerconnect.core.models.io import Pagination
from careerconnect.core.models.io.applications import (
    ApplicationAnalytics,
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationRead,
    ApplicationUpdate,
    BulkStatusResponse,
    BulkStatusUpdate,
    MyApplicationRead,
    NoteCreate,
    NoteRead,
)
from careerconnect.server.auth import get_current_user
from careerconnect.server.services.applications import ApplicationService, application_to_read
from careerconnect.server.services.jobs import job_to_read

router = APIRouter(tags=["applications"])


@router.post(
    "/jobs/{job_id}/apply",
    response_model=ApplicationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Apply To Job",
    description="Submit an application. Mandatory form fields must be answered.",
    responses={
        400: {"description": "Missing or invalid form answer"},
        404: {"description": "Job not found or not accepting applications"},
        409: {"description": "Already applied"},
    },
)
async def apply(
    job_id: int,
    payload: ApplicationCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ApplicationRead:
    """
    Apply to an ACTIVE job.

    Profile fields answered on the form (phone, location, linkedin, resume_url)
    are copied to the applicant's profile; everything else is kept as extra
    applicant info.
    """
    application = await ApplicationService(session).apply(job_id, user, payload)
    return application_to_read(application, user)


@router.get(
    "/applications",
    response_model=List[MyApplicationRead],
    summary="List My Applications",
    description="The caller's own applications with the job each one belongs to.",
)
async def list_my_applications(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> List[MyApplicationRead]:
    rows = await ApplicationRepository(session).list_by_applicant(user.id)
    return [
        MyApplicationRead(**application_to_read(application).model_dump(), job=job_to_read(job))
        for application, job in rows
    ]


@router.get(
    "/jobs/{job_id}/applications",
    response_model=ApplicationListResponse,
    summary="List Job Applications",
    description="Filtered, sorted and paged applications of a job the caller authored.",
    responses={404: {"description": "Job not found or access denied"}},
)
async def list_job_applications(
    job_id: int,
    status_filter: Optional[str] = Query(None, alias="status"),
    source: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "applied_at",
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ApplicationListResponse:
    rows, total = await ApplicationService(session).list_for_job(
        job_id,
        user,
        page=page,
        limit=limit,
        status=status_filter,
        source=source,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return ApplicationListResponse(
        applications=[application_to_read(application, applicant) for application, applicant in rows],
        pagination=Pagination.build(page, limit, total),
    )


@router.patch(
    "/jobs/{job_id}/applications/bulk",
    response_model=BulkStatusResponse,
    summary="Bulk Update Status",
    description="Move several applications to one status, optionally leaving an internal note on each.",
    responses={
        400: {"description": "application_ids and status are required"},
        403: {"description": "Some applications not found or access denied"},
        404: {"description": "Job not found or access denied"},
    },
)
async def bulk_update_status(
    job_id: int,
    payload: BulkStatusUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> BulkStatusResponse:
    updated = await ApplicationService(session).bulk_update(job_id, user, payload)
    return BulkStatusResponse(updated=len(updated), applications=[application_to_read(a) for a in updated])


@router.get(
    "/jobs/{job_id}/applications/{application_id}",
    response_model=ApplicationRead,
    summary="Get Application",
    responses={404: {"description": "Job or application not found"}},
)
async def get_application(
    job_id: int,
    application_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ApplicationRead:
    application = await ApplicationService(session).get(job_id, application_id, user)
    applicant = await UserRepository(session).get_by_id(application.applicant_id)
    return application_to_read(application, applicant)


@router.patch(
    "/jobs/{job_id}/applications/{application_id}",
    response_model=ApplicationRead,
    summary="Review Application",
    description="Update the status, rating or recruiter notes of an application.",
    responses={403: {"description": "Not the job's author"}, 404: {"description": "Not found"}},
)
async def update_application(
    job_id: int,
    application_id: int,
    payload: ApplicationUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ApplicationRead:
    application = await ApplicationService(session).update(job_id, application_id, user, payload)
    return application_to_read(application)


@router.get(
    "/jobs/{job_id}/applications/{application_id}/notes",
    response_model=List[NoteRead],
    summary="List Notes",
    description="Notes left on an application, newest first.",
)
async def list_notes(
    job_id: int,
    application_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> List[NoteRead]:
    notes = await ApplicationService(session).list_notes(job_id, application_id, user)
    return [NoteRead.model_validate(note) for note in notes]


@router.post(
    "/jobs/{job_id}/applications/{application_id}/notes",
    response_model=NoteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Note",
    responses={400: {"description": "Note content is required"}},
)
async def add_note(
    job_id: int,
    application_id: int,
    payload: NoteCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> NoteRead:
    note = await ApplicationService(session).add_note(job_id, application_id, user, payload)
    return NoteRead.model_validate(note)


@router.get(
    "/jobs/{job_id}/analytics",
    response_model=ApplicationAnalytics,
    summary="Application Analytics",
    description="Totals, status and source breakdowns and the number of applications in the last 7 days.",
)
async def analytics(
    job_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ApplicationAnalytics:
    return await ApplicationService(session).analytics(job_id, user)
