"""
Recruiting repositories: jobs, form fields, applications and notes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from careerconnect.core.models.domain import ApplicationStatus, FieldState, JobStatus

from ..entities.jobs import Application, ApplicationNote, Company, InfoField, Job, JobFormField
from ..entities.users import User
from .base import QueryBuilder, SQLModelRepository

APPLICATION_SORT_COLUMNS = {
    "applied_at": Application.applied_at,
    "status": Application.status,
    "rating": Application.rating,
    "updated_at": Application.updated_at,
}


class CompanyRepository(SQLModelRepository[Company]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Company)

    async def list_all(self) -> List[Company]:
        result = await self.session.execute(select(Company).order_by(Company.name))
        return list(result.scalars().all())


class JobRepository(SQLModelRepository[Job]):
    """Repository for job postings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Job)

    async def get_by_slug(self, slug: str) -> Optional[Job]:
        result = await self.session.execute(select(Job).where(Job.slug == slug))
        return result.scalar_one_or_none()

    async def get_active(self, job_id: int) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id, Job.status == JobStatus.ACTIVE)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned(self, job_id: int, author_id: int) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id, Job.author_id == author_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_public(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        location: Optional[str] = None,
        employment_type: Optional[str] = None,
        department: Optional[str] = None,
        company_id: Optional[int] = None,
    ) -> Tuple[List[Job], int]:
        """Active jobs matching the public job board filters, newest first."""
        stmt = select(Job).where(Job.status == JobStatus.ACTIVE)
        stmt = QueryBuilder.apply_search(stmt, [Job.title, Job.description, Job.department], search)
        stmt = QueryBuilder.apply_search(stmt, [Job.location], location)
        stmt = QueryBuilder.apply_search(stmt, [Job.department], department)
        stmt = QueryBuilder.apply_filters(stmt, Job, {"employment_type": employment_type, "company_id": company_id})
        stmt = stmt.order_by(Job.created_at.desc(), Job.id.desc())
        return await self.paginate(stmt, page, limit)

    async def list_by_author(
        self,
        author_id: int,
        page: int,
        limit: int,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Job], int]:
        """A recruiter's own jobs; ``status="all"`` disables the status filter."""
        stmt = select(Job).where(Job.author_id == author_id)
        if status and status != "all":
            stmt = stmt.where(Job.status == status)
        stmt = QueryBuilder.apply_search(stmt, [Job.title, Job.department, Job.location], search)
        stmt = stmt.order_by(Job.created_at.desc(), Job.updated_at.desc())
        return await self.paginate(stmt, page, limit)

    async def candidate_counts(self, job_ids: Iterable[int]) -> Dict[int, int]:
        ids = list(job_ids)
        if not ids:
            return {}
        stmt = (
            select(Application.job_id, func.count(Application.id))
            .where(Application.job_id.in_(ids))
            .group_by(Application.job_id)
        )
        result = await self.session.execute(stmt)
        return {job_id: count for job_id, count in result.all()}


class InfoFieldRepository(SQLModelRepository[InfoField]):
    """Catalogue of application form fields."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, InfoField)

    async def get_by_key(self, key: str) -> Optional[InfoField]:
        result = await self.session.execute(select(InfoField).where(InfoField.key == key))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[InfoField]:
        result = await self.session.execute(select(InfoField).order_by(InfoField.id))
        return list(result.scalars().all())


class JobFormFieldRepository(SQLModelRepository[JobFormField]):
    """Per-job form field configuration joined with the catalogue."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, JobFormField)

    async def list_for_job(
        self, job_id: int, visible_only: bool = False
    ) -> List[Tuple[JobFormField, InfoField]]:
        stmt = (
            select(JobFormField, InfoField)
            .join(InfoField, InfoField.id == JobFormField.field_id)
            .where(JobFormField.job_id == job_id)
            .order_by(JobFormField.sort_order, JobFormField.id)
        )
        if visible_only:
            stmt = stmt.where(JobFormField.field_state.in_([FieldState.mandatory, FieldState.optional]))
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def get_for_job(self, job_id: int, field_id: int) -> Optional[JobFormField]:
        stmt = select(JobFormField).where(JobFormField.job_id == job_id, JobFormField.field_id == field_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class ApplicationRepository(SQLModelRepository[Application]):
    """Repository for candidate applications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Application)

    async def get_for_job(self, job_id: int, application_id: int) -> Optional[Application]:
        stmt = select(Application).where(Application.id == application_id, Application.job_id == job_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_job_and_applicant(self, job_id: int, applicant_id: int) -> Optional[Application]:
        stmt = select(Application).where(Application.job_id == job_id, Application.applicant_id == applicant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_job(
        self,
        job_id: int,
        page: int,
        limit: int,
        status: Optional[str] = None,
        source: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "applied_at",
        sort_order: str = "desc",
    ) -> Tuple[List[Tuple[Application, User]], int]:
        """Applications of a job with their applicant, filtered, sorted and paged."""
        stmt = (
            select(Application, User)
            .join(User, User.id == Application.applicant_id)
            .where(Application.job_id == job_id)
        )
        stmt = QueryBuilder.apply_filters(stmt, Application, {"status": status, "source": source})
        stmt = QueryBuilder.apply_search(stmt, [User.name, User.email, Application.cover_letter], search)

        column = APPLICATION_SORT_COLUMNS.get(sort_by, Application.applied_at)
        stmt = stmt.order_by(column.asc() if sort_order == "asc" else column.desc(), Application.id.desc())

        total = await self.count(stmt)
        stmt = QueryBuilder.apply_pagination(stmt, limit, (page - 1) * limit)
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()], total

    async def list_by_applicant(self, applicant_id: int) -> List[Tuple[Application, Job]]:
        stmt = (
            select(Application, Job)
            .join(Job, Job.id == Application.job_id)
            .where(Application.applicant_id == applicant_id)
            .order_by(Application.applied_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def list_by_ids(self, job_id: int, application_ids: List[int]) -> List[Application]:
        stmt = select(Application).where(Application.job_id == job_id, Application.id.in_(application_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_with_applicants(self, job_id: int) -> List[Tuple[Application, User]]:
        stmt = (
            select(Application, User)
            .join(User, User.id == Application.applicant_id)
            .where(Application.job_id == job_id)
            .order_by(Application.applied_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def status_breakdown(self, job_id: int) -> Dict[str, int]:
        stmt = (
            select(Application.status, func.count(Application.id))
            .where(Application.job_id == job_id)
            .group_by(Application.status)
        )
        result = await self.session.execute(stmt)
        return {ApplicationStatus(status).value: count for status, count in result.all()}

    async def source_breakdown(self, job_id: int) -> Dict[str, int]:
        stmt = (
            select(Application.source, func.count(Application.id))
            .where(Application.job_id == job_id)
            .group_by(Application.source)
        )
        result = await self.session.execute(stmt)
        breakdown: Dict[str, int] = {}
        for source, count in result.all():
            key = source or "unknown"
            breakdown[key] = breakdown.get(key, 0) + count
        return breakdown

    async def count_since(self, job_id: int, since: datetime) -> int:
        stmt = select(Application).where(Application.job_id == job_id, Application.applied_at >= since)
        return await self.count(stmt)


class ApplicationNoteRepository(SQLModelRepository[ApplicationNote]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApplicationNote)

    async def list_for_application(self, application_id: int) -> List[ApplicationNote]:
        stmt = (
            select(ApplicationNote)
            .where(ApplicationNote.application_id == application_id)
            .order_by(ApplicationNote.created_at.desc(), ApplicationNote.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
