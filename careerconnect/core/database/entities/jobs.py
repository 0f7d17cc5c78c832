"""
Recruiting entity models.

This module contains the database entities for job postings and the
applications candidates submit to them, plus the catalogue of application
form fields recruiters can switch on per job.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, Text, UniqueConstraint
from sqlmodel import Field

from careerconnect.core.models.domain import (
    ApplicationStatus,
    EmploymentType,
    FieldState,
    JobStatus,
)

from ..base import Base, load_json, utc_now


class Company(Base, table=True):
    """Hiring company shown on job cards.

    Table: companies
    """

    __tablename__ = "companies"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    logo: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)


class Job(Base, table=True):
    """Job posting.

    Table: jobs
    """

    __tablename__ = "jobs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    slug: str = Field(index=True, unique=True)
    description: str = Field(sa_column=Column(Text, nullable=False))
    department: Optional[str] = Field(default=None, index=True)
    location: Optional[str] = Field(default=None)
    remote_policy: str = Field(default="onsite")
    salary_min: Optional[int] = Field(default=None)
    salary_max: Optional[int] = Field(default=None)
    salary_currency: str = Field(default="IDR")
    employment_type: EmploymentType = Field(index=True)
    status: JobStatus = Field(default=JobStatus.DRAFT, index=True)
    requirements: Optional[str] = Field(default=None)
    experience_level: Optional[str] = Field(default=None)
    education_level: Optional[str] = Field(default=None)
    number_of_candidates: int = Field(default=1)
    applications_count: int = Field(default=0)

    author_id: int = Field(foreign_key="users.id", index=True)
    company_id: Optional[int] = Field(default=None, foreign_key="companies.id", index=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Job(id={self.id}, slug={self.slug}, status={self.status})"


class InfoField(Base, table=True):
    """Catalogue entry for an application form field (full name, email, ...).

    Table: info_fields
    """

    __tablename__ = "info_fields"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(index=True, unique=True)
    label: str
    field_type: str = Field(default="text")
    placeholder: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    options: Optional[str] = Field(default=None, description="JSON array of choices for select fields")
    is_default: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)

    def get_options_list(self) -> List[Any]:
        return load_json(self.options, [])

    def set_options_list(self, options: Optional[List[Any]]) -> None:
        self.options = json.dumps(options) if options is not None else None


class JobFormField(Base, table=True):
    """Per-job state of a catalogue field.

    Table: job_form_fields
    """

    __tablename__ = "job_form_fields"
    __table_args__ = (
        UniqueConstraint("job_id", "field_id", name="uq_job_form_fields_job_field"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", index=True)
    field_id: int = Field(foreign_key="info_fields.id", index=True)
    field_state: FieldState = Field(default=FieldState.optional)
    sort_order: int = Field(default=0)


class Application(Base, table=True):
    """A candidate's application to a job.

    Table: applications
    """

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", index=True)
    applicant_id: int = Field(foreign_key="users.id", index=True)
    status: ApplicationStatus = Field(default=ApplicationStatus.PENDING, index=True)
    source: Optional[str] = Field(default="website")
    cover_letter: Optional[str] = Field(default=None, sa_column=Column(Text))
    resume_url: Optional[str] = Field(default=None)
    form_responses: str = Field(default="{}", description="JSON object of form answers")
    rating: Optional[int] = Field(default=None)
    recruiter_notes: Optional[str] = Field(default=None)

    applied_at: datetime = Field(default_factory=utc_now, index=True)
    status_updated_at: Optional[datetime] = Field(default=None)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def get_form_responses(self) -> Dict[str, Any]:
        return load_json(self.form_responses, {})

    def set_form_responses(self, responses: Dict[str, Any]) -> None:
        self.form_responses = json.dumps(responses)


class ApplicationNote(Base, table=True):
    """Recruiter note attached to an application.

    Table: application_notes
    """

    __tablename__ = "application_notes"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    application_id: int = Field(foreign_key="applications.id", index=True)
    author_id: int = Field(foreign_key="users.id")
    content: str = Field(sa_column=Column(Text, nullable=False))
    is_internal: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)
