"""
Itikaf registry endpoints: participants, nightly attendance, settings and
statistics. Participant data is read from and written to Google Sheets.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import User
from careerconnect.core.models.io.itikaf import (
    AttendanceMark,
    ItikafSettingRead,
    ItikafSettingUpdate,
    ParticipantCreate,
    ParticipantRead,
)
from careerconnect.integrations import GoogleSheetsClient
from careerconnect.server.auth import get_current_user, is_admin, require_admin
from careerconnect.server.core.config import settings
from careerconnect.server.services.deps import get_sheets_client
from careerconnect.server.services.itikaf import ItikafService

router = APIRouter(tags=["itikaf"], dependencies=[Depends(get_current_user)])

SHEET_ERRORS: Dict[Union[int, str], Dict[str, Any]] = {
    502: {"description": "Google Sheets API failure"},
    503: {"description": "Itikaf spreadsheets not configured"},
}


def get_itikaf_service(
    session: AsyncSession = Depends(get_session),
    sheets: GoogleSheetsClient = Depends(get_sheets_client),
) -> ItikafService:
    return ItikafService(session, sheets, settings.integrations)


def _own_record(user: User, nama: str) -> None:
    """Participants sign in under their registered name; admins may act for anyone."""
    if user.name != nama and not is_admin(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.get("/participants", response_model=List[ParticipantRead], summary="List Participants", responses=SHEET_ERRORS)
async def list_participants(service: ItikafService = Depends(get_itikaf_service)):
    return await service.list_participants()


@router.post(
    "/participants/add",
    status_code=status.HTTP_201_CREATED,
    summary="Register Participant",
    description="Append an online registration, and any family members, to the registration sheet.",
    responses={400: {"description": "Missing or invalid field"}, **SHEET_ERRORS},
)
async def add_participant(payload: ParticipantCreate, service: ItikafService = Depends(get_itikaf_service)):
    return await service.add_participant(payload)


@router.delete(
    "/participants/{participant_id}/delete",
    summary="Delete Participant",
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "No participant on that row"}, **SHEET_ERRORS},
)
async def delete_participant(participant_id: int, service: ItikafService = Depends(get_itikaf_service)):
    """``participant_id`` is the row number returned by the participant list."""
    await service.delete_participant(participant_id)
    return {"message": "Participant deleted successfully"}


@router.post(
    "/attendance/{nama}",
    summary="Mark Attendance",
    description="Record tonight's attendance for a participant while the attendance window is open.",
    responses={
        400: {"description": "check is required"},
        403: {"description": "Attendance window closed, or another participant's record"},
        404: {"description": "Participant not on the attendance sheet"},
        409: {"description": "Today is outside the Itikaf nights"},
        **SHEET_ERRORS,
    },
)
async def mark_attendance(
    nama: str,
    payload: AttendanceMark,
    user: User = Depends(get_current_user),
    service: ItikafService = Depends(get_itikaf_service),
):
    _own_record(user, nama)
    if payload.check is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="check is required")
    return await service.mark_attendance(nama, payload.check)


@router.get(
    "/attendance/history/{nama}",
    summary="Attendance History",
    responses={403: {"description": "Another participant's record"}, 404: {"description": "Participant not found"}},
)
async def attendance_history(
    nama: str,
    user: User = Depends(get_current_user),
    service: ItikafService = Depends(get_itikaf_service),
) -> Dict[str, str]:
    _own_record(user, nama)
    return await service.attendance_history(nama)


@router.get("/settings", response_model=ItikafSettingRead, summary="Get Itikaf Settings")
async def get_settings(service: ItikafService = Depends(get_itikaf_service)):
    return ItikafSettingRead.model_validate(await service.get_settings())


@router.put(
    "/settings",
    response_model=ItikafSettingRead,
    summary="Update Itikaf Settings",
    dependencies=[Depends(require_admin)],
    responses={400: {"description": "Missing field or bad time format"}},
)
async def update_settings(payload: ItikafSettingUpdate, service: ItikafService = Depends(get_itikaf_service)):
    return ItikafSettingRead.model_validate(await service.update_settings(payload))


@router.get("/statistics", summary="Participant Statistics", responses=SHEET_ERRORS)
async def statistics(service: ItikafService = Depends(get_itikaf_service)):
    return await service.statistics()


@router.get(
    "/statistics/detailed",
    summary="Detailed Statistics",
    description="Registration, family, location and per-night attendance counts.",
    responses=SHEET_ERRORS,
)
async def detailed_statistics(service: ItikafService = Depends(get_itikaf_service)):
    return await service.detailed_statistics()


@router.get(
    "/statistics/export",
    summary="Export Participants",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}, **SHEET_ERRORS},
)
async def export_statistics(service: ItikafService = Depends(get_itikaf_service)) -> Response:
    return Response(
        content=await service.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=participant_statistics.csv"},
    )
