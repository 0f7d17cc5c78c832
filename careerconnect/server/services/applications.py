"""
Application service.

Submitting an application touches several tables (application, profile,
extra applicant info, job counter) and is done in one transaction. Recruiter
review operations live here as well.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.base import utc_now
from careerconnect.core.database.entities import Application, ApplicationNote, Job, OtherUserInfo, Profile, User
from careerconnect.core.database.repositories import (
    ApplicationNoteRepository,
    ApplicationRepository,
    JobFormFieldRepository,
    JobRepository,
    OtherUserInfoRepository,
    ProfileRepository,
)
from careerconnect.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from careerconnect.core.form_helpers import FormFieldSpec
from careerconnect.core.models.domain import ApplicationStatus, FieldState
from careerconnect.core.models.io.applications import (
    ApplicantRead,
    ApplicationAnalytics,
    ApplicationCreate,
    ApplicationRead,
    ApplicationUpdate,
    BulkStatusUpdate,
    NoteCreate,
)
from careerconnect.core.validation import validate_form_data, validate_form_field

logger = logging.getLogger(__name__)

# Form answers copied onto the applicant's profile
PROFILE_FIELDS = ("phone", "location", "linkedin", "resume_url")

RECENT_WINDOW = timedelta(days=7)


def application_to_read(application: Application, applicant: Optional[User] = None) -> ApplicationRead:
    return ApplicationRead(
        id=application.id,
        job_id=application.job_id,
        applicant_id=application.applicant_id,
        status=application.status,
        source=application.source,
        cover_letter=application.cover_letter,
        resume_url=application.resume_url,
        form_responses=application.get_form_responses(),
        rating=application.rating,
        recruiter_notes=application.recruiter_notes,
        applied_at=application.applied_at,
        status_updated_at=application.status_updated_at,
        applicant=(
            ApplicantRead(id=applicant.id, name=applicant.name, email=applicant.email) if applicant else None
        ),
    )


class ApplicationService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.jobs = JobRepository(session)
        self.applications = ApplicationRepository(session)
        self.notes = ApplicationNoteRepository(session)

    async def _owned_job(self, job_id: int, user: User) -> Job:
        job = await self.jobs.get_owned(job_id, user.id)
        if job is None:
            raise NotFoundError("Job not found or access denied")
        return job

    async def apply(self, job_id: int, applicant: User, payload: ApplicationCreate) -> Application:
        """Submit ``applicant``'s application to an active job.

        Raises:
            NotFoundError: The job does not exist or is not accepting applications.
            ConflictError: The applicant already applied.
            ValidationFailedError: A mandatory form field is missing or a value is malformed.
        """
        job = await self.jobs.get_active(job_id)
        if job is None:
            raise NotFoundError("Job not found or not accepting applications")
        if await self.applications.get_by_job_and_applicant(job_id, applicant.id):
            raise ConflictError("You have already applied to this job")

        responses = dict(payload.form_responses)
        rows = await JobFormFieldRepository(self.session).list_for_job(job_id, visible_only=True)
        specs = [
            FormFieldSpec(
                id=str(config.id),
                name=field.key,
                label=field.label,
                type=field.field_type,
                required=config.field_state == FieldState.mandatory,
                order=config.sort_order,
                visibility=config.field_state.value,
            )
            for config, field in rows
        ]
        checked = validate_form_data(responses, specs)
        if not checked["valid"]:
            missing = next(spec for spec in specs if spec.name in checked["errors"])
            raise ValidationFailedError(f"Missing required field: {missing.label}")
        for spec in specs:
            valid, error = validate_form_field(responses.get(spec.name), spec.type, spec.required)
            if not valid:
                raise ValidationFailedError(f"{spec.label}: {error}")

        application = Application(
            job_id=job_id,
            applicant_id=applicant.id,
            status=ApplicationStatus.PENDING,
            source=payload.source or "website",
            cover_letter=payload.cover_letter,
            resume_url=payload.resume_url or responses.get("resume_url"),
        )
        application.set_form_responses(responses)

        try:
            await self.applications.stage(application)
            await self._update_profile(applicant, responses)
            await self._upsert_other_info(applicant, responses)
            job.applications_count = (job.applications_count or 0) + 1
            await self.jobs.stage(job)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(application)
        logger.info(f"User {applicant.id} applied to job {job_id}")
        return application

    async def _update_profile(self, applicant: User, responses: Dict) -> None:
        profiles = ProfileRepository(self.session)
        profile = await profiles.get_by_user(applicant.id)
        if profile is None:
            profile = Profile(user_id=applicant.id, full_name=applicant.name)
        for name in PROFILE_FIELDS:
            if responses.get(name):
                setattr(profile, name, responses[name])
        await profiles.stage(profile)

    async def _upsert_other_info(self, applicant: User, responses: Dict) -> None:
        repo = OtherUserInfoRepository(self.session)
        info = await repo.get_by_user(applicant.id)
        if info is None:
            info = OtherUserInfo(user_id=applicant.id)
        extra = {key: value for key, value in responses.items() if key not in PROFILE_FIELDS}
        info.set_data({**info.get_data(), **extra})
        await repo.stage(info)

    async def list_for_job(self, job_id: int, user: User, **filters):
        await self._owned_job(job_id, user)
        return await self.applications.list_for_job(job_id, **filters)

    async def get(self, job_id: int, application_id: int, user: User) -> Application:
        await self._owned_job(job_id, user)
        application = await self.applications.get_for_job(job_id, application_id)
        if application is None:
            raise NotFoundError("Application not found")
        return application

    async def update(self, job_id: int, application_id: int, user: User, payload: ApplicationUpdate) -> Application:
        job = await self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.author_id != user.id:
            raise ForbiddenError("Forbidden")
        application = await self.applications.get_for_job(job_id, application_id)
        if application is None:
            raise NotFoundError("Application not found")

        changes = payload.model_dump(exclude_unset=True)
        if "status" in changes and changes["status"] is not None:
            application.status = changes["status"]
            application.status_updated_at = utc_now()
        if "rating" in changes:
            application.rating = changes["rating"]
        if "recruiter_notes" in changes:
            application.recruiter_notes = changes["recruiter_notes"]
        return await self.applications.update(application)

    async def bulk_update(self, job_id: int, user: User, payload: BulkStatusUpdate) -> List[Application]:
        if not payload.application_ids or payload.status is None:
            raise ValidationFailedError("application_ids and status are required")
        await self._owned_job(job_id, user)

        wanted = set(payload.application_ids)
        found = await self.applications.list_by_ids(job_id, list(wanted))
        if len(found) != len(wanted):
            raise ForbiddenError("Some applications not found or access denied")

        now = utc_now()
        try:
            for application in found:
                application.status = payload.status
                application.status_updated_at = now
                await self.applications.stage(application)
                if payload.note:
                    await self.notes.stage(
                        ApplicationNote(
                            application_id=application.id,
                            author_id=user.id,
                            content=payload.note,
                            is_internal=True,
                        )
                    )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"Bulk updated {len(found)} applications of job {job_id} to {payload.status.value}")
        return found

    async def analytics(self, job_id: int, user: User) -> ApplicationAnalytics:
        await self._owned_job(job_id, user)
        breakdown = await self.applications.status_breakdown(job_id)
        return ApplicationAnalytics(
            total_applications=sum(breakdown.values()),
            status_breakdown=breakdown,
            recent_applications=await self.applications.count_since(job_id, utc_now() - RECENT_WINDOW),
            applications_by_source=await self.applications.source_breakdown(job_id),
            average_response_time=None,
            conversion_rate=None,
        )

    async def list_notes(self, job_id: int, application_id: int, user: User) -> List[ApplicationNote]:
        application = await self.get(job_id, application_id, user)
        return await self.notes.list_for_application(application.id)

    async def add_note(self, job_id: int, application_id: int, user: User, payload: NoteCreate) -> ApplicationNote:
        if not payload.content or not payload.content.strip():
            raise ValidationFailedError("Note content is required")
        application = await self.get(job_id, application_id, user)
        note = ApplicationNote(
            application_id=application.id,
            author_id=user.id,
            content=payload.content.strip(),
            is_internal=payload.is_internal,
        )
        return await self.notes.create(note)
