"""
Distribution batches and their recipients.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import Distribusi, Penerima
from careerconnect.core.database.repositories import DistribusiRepository, PenerimaRepository
from careerconnect.core.models.io import QurbanPagination
from careerconnect.core.models.io.qurban import (
    DistribusiCreate,
    DistribusiRead,
    DistribusiUpdate,
    PenerimaCreate,
    PenerimaDistribusiUpdate,
    PenerimaRead,
    PenerimaUpdate,
)
from careerconnect.server.auth import get_current_user
from careerconnect.server.services.products import DistributionService

router = APIRouter(tags=["distribusi"], dependencies=[Depends(get_current_user)])


def _distribusi_read(batch: Distribusi, penerima_count: int = 0) -> DistribusiRead:
    return DistribusiRead(
        id=batch.id,
        kategori=batch.kategori,
        target=batch.target,
        realisasi=batch.realisasi,
        penerima_count=penerima_count,
    )


def penerima_read(penerima: Penerima) -> PenerimaRead:
    data = penerima.model_dump(exclude={"produk_distribusi", "updated_at"})
    return PenerimaRead(**data, produk_distribusi=penerima.get_produk_distribusi())


@router.get("/distribusi", response_model=List[DistribusiRead], summary="List Distribution Batches")
async def list_distribusi(session: AsyncSession = Depends(get_session)) -> List[DistribusiRead]:
    rows = await DistribusiRepository(session).list_with_counts()
    return [_distribusi_read(batch, count) for batch, count in rows]


@router.post(
    "/distribusi",
    response_model=DistribusiRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Distribution Batch",
)
async def create_distribusi(payload: DistribusiCreate, session: AsyncSession = Depends(get_session)) -> DistribusiRead:
    batch = Distribusi(kategori=payload.kategori, target=payload.target, realisasi=0)
    return _distribusi_read(await DistribusiRepository(session).create(batch))


@router.patch(
    "/distribusi/{distribusi_id}",
    response_model=DistribusiRead,
    summary="Update Batch Target",
    responses={400: {"description": "Target harus lebih dari 0"}, 404: {"description": "Distribusi not found"}},
)
async def update_distribusi(
    distribusi_id: int, payload: DistribusiUpdate, session: AsyncSession = Depends(get_session)
) -> DistribusiRead:
    if payload.target is None or payload.target <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Target harus lebih dari 0")
    repo = DistribusiRepository(session)
    batch = await repo.get_by_id(distribusi_id)
    if batch is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Distribusi not found")
    batch.target = payload.target
    return _distribusi_read(await repo.update(batch))


@router.get("/penerima", summary="List Recipients")
async def list_penerima(
    distribusi_id: Optional[int] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
):
    rows, total = await PenerimaRepository(session).list_page(distribusi_id, page, page_size)
    return {"data": [penerima_read(p) for p in rows], "pagination": QurbanPagination.build(page, page_size, total)}


@router.post(
    "/penerima",
    response_model=PenerimaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Recipient",
    description="Add a recipient to a batch and count it towards the batch's realisation.",
    responses={404: {"description": "Distribusi not found"}},
)
async def create_penerima(payload: PenerimaCreate, session: AsyncSession = Depends(get_session)) -> PenerimaRead:
    return penerima_read(await DistributionService(session).add_penerima(payload))


@router.put(
    "/penerima/{penerima_id}",
    response_model=PenerimaRead,
    summary="Update Recipient",
    responses={404: {"description": "Penerima not found"}},
)
async def update_penerima(
    penerima_id: int, payload: PenerimaUpdate, session: AsyncSession = Depends(get_session)
) -> PenerimaRead:
    repo = PenerimaRepository(session)
    penerima = await repo.get_by_id(penerima_id)
    if penerima is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Penerima not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(penerima, key, value)
    return penerima_read(await repo.update(penerima))


@router.put(
    "/penerima/{penerima_id}/distribusi",
    response_model=PenerimaRead,
    summary="Hand Over Products",
    description="Mark a recipient as served and count the handed products as delivered.",
    responses={404: {"description": "Penerima or produk not found"}, 409: {"description": "Already received"}},
)
async def distribute_to_penerima(
    penerima_id: int, payload: PenerimaDistribusiUpdate, session: AsyncSession = Depends(get_session)
) -> PenerimaRead:
    penerima = await DistributionService(session).hand_over(penerima_id, payload.produk_qurban, payload.diterima_oleh)
    return penerima_read(penerima)
