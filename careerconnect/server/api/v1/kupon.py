"""
Meat coupon endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import Kupon
from careerconnect.core.database.repositories import KuponRepository
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.domain import KuponStatus
from careerconnect.core.models.io.qurban import KuponGenerate, KuponRead
from careerconnect.server.auth import get_current_user
from careerconnect.server.core.constant import MAX_KUPON

router = APIRouter(tags=["kupon"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


def kupon_code(number: int) -> str:
    return f"KPN-{number:04d}"


@router.get("", summary="List Kupon")
async def list_kupon(session: AsyncSession = Depends(get_session)):
    kupon = await KuponRepository(session).list_all()
    return {"success": True, "data": [KuponRead.model_validate(k) for k in kupon]}


@router.post(
    "/generate",
    summary="Generate Kupon",
    description="Create coupons KPN-0001 up to the requested number. Existing codes are left alone.",
    responses={400: {"description": f"Total kupon must be between 1 and {MAX_KUPON}"}},
)
async def generate_kupon(payload: KuponGenerate, session: AsyncSession = Depends(get_session)):
    if not payload.total_kupon or payload.total_kupon <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Total kupon harus lebih dari 0")
    if payload.total_kupon > MAX_KUPON:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Total kupon tidak boleh lebih dari {MAX_KUPON}"
        )

    repo = KuponRepository(session)
    codes = [kupon_code(i) for i in range(1, payload.total_kupon + 1)]
    existing = await repo.existing_codes(codes)
    try:
        session.add_all(Kupon(kupon_id=code, status=KuponStatus.DISIMPAN) for code in codes if code not in existing)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info(f"Generated {len(codes) - len(existing)} kupon, skipped {len(existing)} existing")
    return {
        "success": True,
        "message": f"{payload.total_kupon} kupon berhasil dibuat",
        "kupon_per_mudhohi": payload.kupon_per_mudhohi,
    }
