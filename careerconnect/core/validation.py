"""
Field-level validation helpers for user submitted forms.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Tuple
from urllib.parse import urlparse

from careerconnect.core.form_helpers import FormFieldSpec

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-+()]{10,}$")


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email or ""))


def validate_phone_number(phone: str) -> bool:
    return bool(PHONE_PATTERN.match(re.sub(r"\s", "", phone or "")))


def validate_url(url: str) -> bool:
    """Accept absolute URLs only; ``example.com`` without a scheme is rejected."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def validate_form_field(value: Any, field_type: str, required: bool) -> Tuple[bool, Optional[str]]:
    """Validate a single value against its field type.

    Returns:
        ``(valid, error)`` where ``error`` is None for valid values.
    """
    if required and not value:
        return False, "This field is required"
    if not value:
        return True, None

    text = str(value)
    if field_type == "email" and not validate_email(text):
        return False, "Invalid email address"
    if field_type == "phone" and not validate_phone_number(text):
        return False, "Invalid phone number"
    if field_type == "url" and not validate_url(text):
        return False, "Invalid URL"
    return True, None


def validate_form_data(data: dict[str, Any], fields: Iterable[FormFieldSpec]) -> dict[str, Any]:
    """Check that every required field has a value.

    Returns:
        ``{"valid": bool, "errors": {field_name: message}}``
    """
    errors: dict[str, str] = {}
    for field in fields:
        if field.required and not data.get(field.name):
            errors[field.name] = f"{field.label} is required"
    return {"valid": not errors, "errors": errors}
