"""
Company directory used by the job board filters.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.repositories import CompanyRepository
from careerconnect.core.models.io.jobs import CompanyRead
from careerconnect.server.auth import get_current_user

router = APIRouter(tags=["companies"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[CompanyRead], summary="List Companies", description="All companies by name.")
async def list_companies(session: AsyncSession = Depends(get_session)) -> List[CompanyRead]:
    return [CompanyRead.model_validate(c) for c in await CompanyRepository(session).list_all()]
