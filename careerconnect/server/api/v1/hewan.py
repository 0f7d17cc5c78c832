"""
Sacrificial animal endpoints.

Animals are addressed by their group label (``A-1``). Status changes come
from the slaughter, inventory and distribution screens.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import TipeHewan
from careerconnect.core.database.repositories import TipeHewanRepository
from careerconnect.core.models.domain import JenisHewan
from careerconnect.core.models.io import QurbanPagination
from careerconnect.core.models.io.qurban import (
    HewanInventoryUpdate,
    HewanMetaEntry,
    HewanMetaUpdate,
    HewanRead,
    HewanReceivedUpdate,
    HewanStatusUpdate,
    TipeHewanCreate,
    TipeHewanRead,
    TipeHewanUpdate,
)
from careerconnect.server.auth import get_current_user
from careerconnect.server.services.hewan import HewanService

router = APIRouter(tags=["hewan"], dependencies=[Depends(get_current_user)])


def _parse_jenis(value: Optional[str], default: Optional[JenisHewan] = None) -> Optional[JenisHewan]:
    if not value:
        return default
    try:
        return JenisHewan(value.upper())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid jenis hewan: {value}")


@router.get(
    "",
    summary="List Hewan",
    description="Page through the animals of one kind, optionally within one group.",
    responses={400: {"description": "Invalid type or group"}},
)
async def list_hewan(
    type: str = "sapi",
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=500),
    group: Optional[str] = None,
    items_per_group: int = Query(50, ge=1),
    session: AsyncSession = Depends(get_session),
):
    """
    - **type**: ``sapi`` or ``domba``.
    - **group**: group letter; the group covers ``items_per_group`` animals in registration order.
    """
    jenis = _parse_jenis(type)
    rows, total = await HewanService(session).list_hewan(jenis, page, page_size, group, items_per_group)
    return {
        "data": [HewanRead.model_validate(h) for h in rows],
        "pagination": QurbanPagination.build(page, page_size, total),
    }


@router.post("/inventory", response_model=HewanRead, summary="Set Inventory Flag")
async def set_inventory(payload: HewanInventoryUpdate, session: AsyncSession = Depends(get_session)) -> HewanRead:
    if not payload.hewan_id or payload.jenis is None or payload.on_inventory is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="hewan_id, jenis and on_inventory are required"
        )
    hewan = await HewanService(session).set_inventory(payload.jenis, payload.hewan_id, payload.on_inventory)
    return HewanRead.model_validate(hewan)


@router.post("/received", response_model=HewanRead, summary="Set Received Flag")
async def set_received(payload: HewanReceivedUpdate, session: AsyncSession = Depends(get_session)) -> HewanRead:
    if not payload.hewan_id or payload.jenis is None or payload.received is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="hewan_id, jenis and received are required")
    hewan = await HewanService(session).set_received(payload.jenis, payload.hewan_id, payload.received)
    return HewanRead.model_validate(hewan)


@router.post(
    "/status",
    response_model=HewanRead,
    summary="Update Status",
    description="Set the processing status and slaughtered flag of an animal, addressed by kind and label.",
    responses={400: {"description": "Missing field"}, 404: {"description": "Hewan not found"}},
)
async def update_status(payload: HewanStatusUpdate, session: AsyncSession = Depends(get_session)) -> HewanRead:
    if not payload.hewan_id or payload.jenis is None or payload.status is None or payload.slaughtered is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="hewan_id, jenis, status and slaughtered are required"
        )
    hewan = await HewanService(session).update_status(
        payload.jenis, payload.hewan_id, payload.status, payload.slaughtered
    )
    return HewanRead.model_validate(hewan)


@router.get(
    "/meta",
    response_model=Dict[str, HewanMetaEntry],
    summary="Hewan Meta",
    description="Registered, target and slaughtered counts per animal type.",
    responses={400: {"description": "Invalid jenis"}},
)
async def get_meta(jenis: Optional[str] = None, session: AsyncSession = Depends(get_session)):
    return await HewanService(session).meta(_parse_jenis(jenis))


@router.post(
    "/meta",
    summary="Set Target",
    responses={400: {"description": "Target must be a number"}, 404: {"description": "Tipe hewan not found"}},
)
async def set_target(payload: HewanMetaUpdate, session: AsyncSession = Depends(get_session)):
    await HewanService(session).set_target(payload.type_id, payload.target)
    return {"success": True}


@router.get("/types", response_model=List[TipeHewanRead], summary="List Tipe Hewan")
async def list_types(jenis: Optional[str] = None, session: AsyncSession = Depends(get_session)) -> List[TipeHewanRead]:
    return [TipeHewanRead.model_validate(t) for t in await TipeHewanRepository(session).list_all(_parse_jenis(jenis))]


@router.post(
    "/types",
    response_model=TipeHewanRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Tipe Hewan",
    responses={409: {"description": "Name already used"}},
)
async def create_type(payload: TipeHewanCreate, session: AsyncSession = Depends(get_session)) -> TipeHewanRead:
    repo = TipeHewanRepository(session)
    if await repo.get_by_nama(payload.nama):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tipe hewan already exists")
    return TipeHewanRead.model_validate(await repo.create(TipeHewan(**payload.model_dump())))


@router.put("/types/{type_id}", response_model=TipeHewanRead, summary="Update Tipe Hewan")
async def update_type(
    type_id: int, payload: TipeHewanUpdate, session: AsyncSession = Depends(get_session)
) -> TipeHewanRead:
    repo = TipeHewanRepository(session)
    tipe = await repo.get_by_id(type_id)
    if tipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tipe hewan not found")
    if payload.jenis is not None and payload.jenis != tipe.jenis:
        total, _ = (await repo.hewan_counts([type_id]))[type_id]
        if total:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="Cannot change jenis of a tipe with registered hewan"
            )
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None or key == "harga_kolektif":
            setattr(tipe, key, value)
    return TipeHewanRead.model_validate(await repo.update(tipe))


@router.delete(
    "/types/{type_id}",
    summary="Delete Tipe Hewan",
    responses={404: {"description": "Tipe hewan not found"}, 409: {"description": "Animals of this type exist"}},
)
async def delete_type(type_id: int, session: AsyncSession = Depends(get_session)):
    repo = TipeHewanRepository(session)
    if await repo.get_by_id(type_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tipe hewan not found")
    total, _ = (await repo.hewan_counts([type_id]))[type_id]
    if total:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tipe hewan is still used by registered hewan")
    await repo.delete(type_id)
    return {"success": True}
