"""
Job posting and application form I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from careerconnect.core.models.domain import EmploymentType, FieldState, JobStatus

from .common import Pagination


class JobRead(BaseModel):
    """Schema for reading a job posting."""

    id: int
    title: str
    slug: str
    description: str
    department: Optional[str] = None
    location: Optional[str] = None
    remote_policy: str
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: str
    salary_display: Optional[str] = Field(default=None, description="Human readable salary range")
    employment_type: EmploymentType
    status: JobStatus
    requirements: Optional[str] = None
    experience_level: Optional[str] = None
    education_level: Optional[str] = None
    number_of_candidates: int
    applications_count: int
    candidate_count: Optional[int] = Field(default=None, description="Applications received so far")
    author_id: int
    company_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class JobFormFieldInput(BaseModel):
    field_id: int
    field_state: FieldState = FieldState.optional
    sort_order: int = 0


class JobCreate(BaseModel):
    """Schema for a recruiter creating a job. Required fields are checked by the route."""

    title: Optional[str] = None
    description: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    number_of_candidates: Optional[int] = None
    department: Optional[str] = None
    location: Optional[str] = None
    remote_policy: str = "onsite"
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: str = "IDR"
    status: JobStatus = JobStatus.DRAFT
    requirements: Optional[str] = None
    experience_level: Optional[str] = None
    education_level: Optional[str] = None
    company_id: Optional[int] = None
    application_form_fields: List[JobFormFieldInput] = Field(default_factory=list)


class JobUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    remote_policy: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    status: Optional[JobStatus] = None
    requirements: Optional[str] = None
    experience_level: Optional[str] = None
    education_level: Optional[str] = None
    number_of_candidates: Optional[int] = None
    company_id: Optional[int] = None


class JobListResponse(BaseModel):
    jobs: List[JobRead]
    pagination: Pagination


class FormFieldRead(BaseModel):
    """A catalogue field as configured on one job."""

    id: int
    field_id: int
    field_name: str
    label: str
    field_type: str
    field_state: FieldState
    display_order: int
    placeholder: Optional[str] = None
    options: List[Any] = Field(default_factory=list)


class JobDetailResponse(BaseModel):
    job: JobRead
    form_fields: List[FormFieldRead]


class JobFormFieldCreate(BaseModel):
    field_key: Optional[str] = None
    label: Optional[str] = None
    field_type: str = "text"
    field_state: FieldState = FieldState.optional
    sort_order: int = 0


class InfoFieldRead(BaseModel):
    id: int
    key: str
    label: str
    field_type: str
    placeholder: Optional[str] = None
    description: Optional[str] = None
    options: List[Any] = Field(default_factory=list)
    is_default: bool


class InfoFieldCreate(BaseModel):
    key: Optional[str] = None
    label: Optional[str] = None
    field_type: str = "text"
    placeholder: Optional[str] = None
    description: Optional[str] = None
    options: Optional[List[Any]] = None
    is_default: bool = False


class CompanyRead(BaseModel):
    id: int
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True
