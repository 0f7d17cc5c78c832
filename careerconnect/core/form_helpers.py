"""
Helpers for configurable application forms and URL slugs.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from pydantic import BaseModel


class FormFieldSpec(BaseModel):
    """A rendered form field as shown to applicants."""

    id: str
    name: str
    label: str
    type: str = "text"
    required: bool = False
    order: int = 0
    visibility: Optional[str] = None


def filter_form_fields(fields: Iterable[FormFieldSpec], visibility: str) -> List[FormFieldSpec]:
    return [field for field in fields if field.visibility == visibility]


def sort_form_fields(fields: Iterable[FormFieldSpec]) -> List[FormFieldSpec]:
    """Return a new list ordered by ``order``; ties keep their input order."""
    return sorted(fields, key=lambda field: field.order)


def slugify(title: str) -> str:
    """Build a URL slug from a job title.

    >>> slugify("  Senior Backend Engineer (Python)! ")
    'senior-backend-engineer-python'
    """
    slug = title.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")
