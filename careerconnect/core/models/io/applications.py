"""
Job application I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from careerconnect.core.models.domain import ApplicationStatus

from .common import Pagination
from .jobs import JobRead


class ApplicantRead(BaseModel):
    id: int
    name: Optional[str] = None
    email: str


class ApplicationRead(BaseModel):
    id: int
    job_id: int
    applicant_id: int
    status: ApplicationStatus
    source: Optional[str] = None
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    form_responses: Dict[str, Any] = Field(default_factory=dict)
    rating: Optional[int] = None
    recruiter_notes: Optional[str] = None
    applied_at: datetime
    status_updated_at: Optional[datetime] = None
    applicant: Optional[ApplicantRead] = None


class MyApplicationRead(ApplicationRead):
    job: JobRead


class ApplicationCreate(BaseModel):
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    source: Optional[str] = None
    form_responses: Dict[str, Any] = Field(default_factory=dict)


class ApplicationUpdate(BaseModel):
    status: Optional[ApplicationStatus] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    recruiter_notes: Optional[str] = None


class BulkStatusUpdate(BaseModel):
    application_ids: Optional[List[int]] = None
    status: Optional[ApplicationStatus] = None
    note: Optional[str] = None


class BulkStatusResponse(BaseModel):
    updated: int
    applications: List[ApplicationRead]


class NoteCreate(BaseModel):
    content: Optional[str] = None
    is_internal: bool = True


class NoteRead(BaseModel):
    id: int
    application_id: int
    author_id: int
    content: str
    is_internal: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ApplicationAnalytics(BaseModel):
    total_applications: int
    status_breakdown: Dict[str, int]
    recent_applications: int
    applications_by_source: Dict[str, int]
    average_response_time: Optional[float] = None
    conversion_rate: Optional[float] = None


class ApplicationListResponse(BaseModel):
    applications: List[ApplicationRead]
    pagination: Pagination
