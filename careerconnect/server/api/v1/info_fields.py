"""
Application form field catalogue.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import InfoField
from careerconnect.core.database.repositories import InfoFieldRepository
from careerconnect.core.models.io.jobs import InfoFieldCreate, InfoFieldRead
from careerconnect.server.auth import get_current_user

router = APIRouter(tags=["info-fields"], dependencies=[Depends(get_current_user)])


def _to_read(field: InfoField) -> InfoFieldRead:
    return InfoFieldRead(
        id=field.id,
        key=field.key,
        label=field.label,
        field_type=field.field_type,
        placeholder=field.placeholder,
        description=field.description,
        options=field.get_options_list(),
        is_default=field.is_default,
    )


@router.get("", response_model=List[InfoFieldRead], summary="List Form Fields")
async def list_info_fields(session: AsyncSession = Depends(get_session)) -> List[InfoFieldRead]:
    return [_to_read(field) for field in await InfoFieldRepository(session).list_all()]


@router.post(
    "",
    response_model=InfoFieldRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Form Field",
    description="Add a field to the catalogue. Keys are unique.",
    responses={400: {"description": "key and label are required"}, 409: {"description": "Duplicate key"}},
)
async def create_info_field(payload: InfoFieldCreate, session: AsyncSession = Depends(get_session)) -> InfoFieldRead:
    if not payload.key or not payload.label:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="key and label are required")
    repo = InfoFieldRepository(session)
    if await repo.get_by_key(payload.key):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A field with this key already exists")
    field = InfoField(
        key=payload.key,
        label=payload.label,
        field_type=payload.field_type or "text",
        placeholder=payload.placeholder,
        description=payload.description,
        is_default=payload.is_default,
    )
    field.set_options_list(payload.options)
    return _to_read(await repo.create(field))
