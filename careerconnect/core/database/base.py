"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the format stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def load_json(raw: str | None, default: Any) -> Any:
    """Decode a JSON text column, returning ``default`` for empty or broken values."""
    try:
        return json.loads(raw) if raw else default
    except (json.JSONDecodeError, TypeError):
        return default
