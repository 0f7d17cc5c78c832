"""
Job posting service.

Owns the multi-step writes around a job (creating it with its form field
configuration, deleting it with everything hanging off it) and the shaping of
form field configuration for the public job page.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.entities import InfoField, Job, JobFormField, User
from careerconnect.core.database.repositories import (
    ApplicationNoteRepository,
    ApplicationRepository,
    InfoFieldRepository,
    JobFormFieldRepository,
    JobRepository,
)
from careerconnect.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from careerconnect.core.form_helpers import FormFieldSpec, filter_form_fields, slugify, sort_form_fields
from careerconnect.core.formatters import salary_display
from careerconnect.core.models.domain import FieldState
from careerconnect.core.models.io.jobs import (
    FormFieldRead,
    JobCreate,
    JobFormFieldCreate,
    JobRead,
    JobUpdate,
)

logger = logging.getLogger(__name__)

REQUIRED_JOB_FIELDS = ("title", "employment_type", "description", "number_of_candidates")


def job_to_read(job: Job, candidate_count: Optional[int] = None) -> JobRead:
    read = JobRead.model_validate(job)
    read.salary_display = salary_display(job.salary_min, job.salary_max, job.salary_currency)
    read.candidate_count = candidate_count
    return read


def form_field_to_read(config: JobFormField, field: InfoField) -> FormFieldRead:
    return FormFieldRead(
        id=config.id,
        field_id=field.id,
        field_name=field.key,
        label=field.label,
        field_type=field.field_type,
        field_state=config.field_state,
        display_order=config.sort_order,
        placeholder=field.placeholder,
        options=field.get_options_list(),
    )


def visible_form_fields(rows: List[Tuple[JobFormField, InfoField]]) -> List[FormFieldRead]:
    """Fields an applicant sees: mandatory and optional ones, in display order."""
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
    visible = filter_form_fields(specs, FieldState.mandatory.value) + filter_form_fields(
        specs, FieldState.optional.value
    )
    by_id = {str(config.id): (config, field) for config, field in rows}
    return [form_field_to_read(*by_id[spec.id]) for spec in sort_form_fields(visible)]


class JobService:
    """Recruiter-side job operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.jobs = JobRepository(session)
        self.form_fields = JobFormFieldRepository(session)
        self.info_fields = InfoFieldRepository(session)

    async def get_owned_job(self, job_id: int, user: User) -> Job:
        """Load a job the caller may edit: 404 when missing, 403 for someone else's job."""
        job = await self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.author_id != user.id:
            raise ForbiddenError("Forbidden")
        return job

    async def create_job(self, author: User, payload: JobCreate) -> Job:
        for name in REQUIRED_JOB_FIELDS:
            value = getattr(payload, name)
            if value is None or value == "":
                raise ValidationFailedError(f"Missing required field: {name}")

        slug = slugify(payload.title)
        if await self.jobs.get_by_slug(slug):
            raise ConflictError("A job with this title already exists")

        data = payload.model_dump(exclude={"application_form_fields"})
        job = Job(**data, slug=slug, author_id=author.id)
        try:
            await self.jobs.stage(job)
            for field in payload.application_form_fields:
                if field.field_state == FieldState.off:
                    continue
                await self.form_fields.stage(
                    JobFormField(
                        job_id=job.id,
                        field_id=field.field_id,
                        field_state=field.field_state,
                        sort_order=field.sort_order,
                    )
                )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(job)
        logger.info(f"Created job {job.id} ({job.slug}) for recruiter {author.id}")
        return job

    async def update_job(self, job_id: int, user: User, payload: JobUpdate) -> Job:
        job = await self.get_owned_job(job_id, user)
        changes = payload.model_dump(exclude_unset=True)
        if "salary_min" in changes and changes.get("salary_max") is None:
            changes["salary_max"] = changes["salary_min"]
        for key, value in changes.items():
            setattr(job, key, value)
        return await self.jobs.update(job)

    async def delete_job(self, job_id: int, user: User) -> None:
        job = await self.get_owned_job(job_id, user)
        applications = ApplicationRepository(self.session)
        notes = ApplicationNoteRepository(self.session)
        try:
            for application, _ in await applications.list_with_applicants(job.id):
                for note in await notes.list_for_application(application.id):
                    await notes.remove(note)
                await applications.remove(application)
            for config, _ in await self.form_fields.list_for_job(job.id):
                await self.form_fields.remove(config)
            await self.jobs.remove(job)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"Deleted job {job_id}")

    async def add_form_field(self, job_id: int, user: User, payload: JobFormFieldCreate) -> FormFieldRead:
        """Attach a catalogue field to a job, creating the catalogue entry when the key is new."""
        job = await self.get_owned_job(job_id, user)
        if not payload.field_key:
            raise ValidationFailedError("Missing required field: field_key")

        try:
            field = await self.info_fields.get_by_key(payload.field_key)
            if field is None:
                field = await self.info_fields.stage(
                    InfoField(
                        key=payload.field_key,
                        label=payload.label or payload.field_key.replace("_", " ").title(),
                        field_type=payload.field_type,
                    )
                )
            if await self.form_fields.get_for_job(job.id, field.id):
                raise ConflictError("Field already added to this job")
            config = await self.form_fields.stage(
                JobFormField(
                    job_id=job.id,
                    field_id=field.id,
                    field_state=payload.field_state,
                    sort_order=payload.sort_order,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return form_field_to_read(config, field)

    async def candidate_counts(self, jobs: List[Job]) -> Dict[int, int]:
        return await self.jobs.candidate_counts(job.id for job in jobs)
