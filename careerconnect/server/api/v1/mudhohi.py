"""
Sponsor (mudhohi) endpoints, including the Google Sheets bulk import.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.database.repositories import MudhohiRepository, UserRepository
from careerconnect.core.errors import SheetsApiError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.domain import PaymentStatus
from careerconnect.core.models.io import QurbanPagination
from careerconnect.core.models.io.qurban import MudhohiCreate, PaymentUpdate, PembayaranRead, SheetImportRequest
from careerconnect.integrations import GoogleSheetsClient, rows_to_records
from careerconnect.server.auth import get_current_user
from careerconnect.server.core.constant import MUDHOHI_SHEET_HEADERS
from careerconnect.server.services.deps import get_sheets_client
from careerconnect.server.services.mudhohi import MudhohiService, mudhohi_to_read

router = APIRouter(tags=["mudhohi"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.get(
    "/mudhohi",
    summary="List Mudhohi",
    description="Sponsors with their payment and animals, newest first.",
)
async def list_mudhohi(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    status_filter: Optional[PaymentStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    """
    - **status**: payment status filter.
    - **search**: matches the sponsor name, the dedicatee or the dash code.
    """
    data, total = await MudhohiService(session).list_page(
        page, page_size, status_filter.value if status_filter else None, search
    )
    return {"data": data, "pagination": QurbanPagination.build(page, page_size, total)}


@router.post(
    "/mudhohi",
    status_code=status.HTTP_201_CREATED,
    summary="Register Mudhohi",
    description="Register a sponsor with its payment and the animals it pays for, in one transaction.",
    responses={400: {"description": "Nama pengqurban is required"}, 404: {"description": "Tipe hewan not found"}},
)
async def create_mudhohi(
    payload: MudhohiCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    user_id = payload.user_id or user.id
    mudhohi, payment, hewan = await MudhohiService(session).create(payload, user_id=user_id)
    return {
        "success": True,
        "message": "Mudhohi berhasil didaftarkan",
        "data": mudhohi_to_read(mudhohi, payment, hewan),
    }


@router.get("/mudhohi/count", summary="Count Mudhohi")
async def count_mudhohi(session: AsyncSession = Depends(get_session)):
    return {"count": await MudhohiRepository(session).count()}


@router.patch(
    "/mudhohi/{mudhohi_id}/payment",
    response_model=PembayaranRead,
    summary="Update Payment",
    responses={400: {"description": "Invalid payment status"}, 404: {"description": "Payment not found"}},
)
async def update_payment(
    mudhohi_id: int, payload: PaymentUpdate, session: AsyncSession = Depends(get_session)
) -> PembayaranRead:
    payment = await MudhohiService(session).update_payment(mudhohi_id, payload)
    return PembayaranRead.model_validate(payment)


@router.get(
    "/sheet-templates/mudhohi",
    summary="Mudhohi Sheet Template",
    description="Header row expected by the Google Sheets import.",
)
async def sheet_template():
    return {"headers": MUDHOHI_SHEET_HEADERS}


@router.post(
    "/import-googlesheets",
    summary="Import Mudhohi From Google Sheets",
    description="Register one sponsor per row of a spreadsheet tab. Rows that fail are reported, not fatal.",
    responses={
        400: {"description": "sheet_id and user_id are required"},
        404: {"description": "User or sheet not found"},
        502: {"description": "Google Sheets API failure"},
    },
)
async def import_googlesheets(
    payload: SheetImportRequest,
    session: AsyncSession = Depends(get_session),
    sheets: GoogleSheetsClient = Depends(get_sheets_client),
):
    if not payload.sheet_id or payload.user_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="sheet_id and user_id are required")
    if await UserRepository(session).get_by_id(payload.user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    try:
        values = await sheets.get_values(payload.sheet_id, payload.sheet_name or "Sheet1")
    except SheetsApiError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        raise
    records = rows_to_records(values)
    results = await MudhohiService(session).import_records(records, payload.user_id)
    logger.info(f"Sheet import of {payload.sheet_id}: {results.success} ok, {results.failed} failed")
    return {
        "success": True,
        "message": f"Import selesai: {results.success} berhasil, {results.failed} gagal",
        "results": results,
    }
