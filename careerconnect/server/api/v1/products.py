"""
Meat product endpoints: product catalogue, movement log, counter anomalies
and shipments to the inventory.
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import ProdukHewan, Shipment, User
from careerconnect.core.database.repositories import (
    ErrorLogRepository,
    ProductLogRepository,
    ProdukHewanRepository,
    ShipmentRepository,
)
from careerconnect.core.models.domain import JenisProduk
from careerconnect.core.models.io.qurban import (
    ErrorLogRead,
    ProdukHewanCreate,
    ProdukHewanRead,
    ProdukQuantity,
    ProductLogCreate,
    ProductLogRead,
    ShipmentCreate,
    ShipmentRead,
)
from careerconnect.server.auth import get_current_user
from careerconnect.server.services.products import ProductService

router = APIRouter(tags=["products"], dependencies=[Depends(get_current_user)])

_quantities = TypeAdapter(List[ProdukQuantity])


def shipment_read(shipment: Shipment) -> ShipmentRead:
    return ShipmentRead(
        id=shipment.id,
        status=shipment.status,
        catatan=shipment.catatan,
        products=shipment.get_products_list(),
        waktu_kirim=shipment.waktu_kirim,
        waktu_terima=shipment.waktu_terima,
    )


@router.get("/products", response_model=List[ProdukHewanRead], summary="List Products")
async def list_products(
    jenis: Optional[JenisProduk] = None, session: AsyncSession = Depends(get_session)
) -> List[ProdukHewanRead]:
    products = await ProdukHewanRepository(session).list_all(jenis.value if jenis else None)
    return [ProdukHewanRead.model_validate(p) for p in products]


@router.post(
    "/products", response_model=ProdukHewanRead, status_code=status.HTTP_201_CREATED, summary="Create Product"
)
async def create_product(payload: ProdukHewanCreate, session: AsyncSession = Depends(get_session)) -> ProdukHewanRead:
    produk = await ProdukHewanRepository(session).create(ProdukHewan(**payload.model_dump()))
    return ProdukHewanRead.model_validate(produk)


@router.post(
    "/products/log",
    response_model=ProductLogRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log Product Movement",
    description="Record a movement and apply it to the counter of the place where it happened.",
    responses={400: {"description": "Missing or invalid field"}, 404: {"description": "Produk not found"}},
)
async def log_product(payload: ProductLogCreate, session: AsyncSession = Depends(get_session)) -> ProductLogRead:
    """
    - **event**: ``menambahkan`` adds ``value``; ``memindahkan`` subtracts it.
    - **place**: ``PENYEMBELIHAN``, ``INVENTORY`` or ``DISTRIBUSI``.
    """
    return ProductLogRead.model_validate(await ProductService(session).log_event(payload))


@router.get("/product-logs", response_model=List[ProductLogRead], summary="List Product Logs")
async def list_product_logs(
    produk_id: Optional[int] = None,
    place: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
) -> List[ProductLogRead]:
    logs = await ProductLogRepository(session).list_recent(produk_id, place, limit)
    return [ProductLogRead.model_validate(log) for log in logs]


@router.get(
    "/error-logs",
    response_model=List[ErrorLogRead],
    summary="List Error Logs",
    description="Product counter anomalies, newest first.",
)
async def list_error_logs(
    limit: int = Query(100, ge=1, le=1000), session: AsyncSession = Depends(get_session)
) -> List[ErrorLogRead]:
    return [ErrorLogRead.model_validate(e) for e in await ErrorLogRepository(session).list_recent(limit)]


@router.get("/shipments", response_model=List[ShipmentRead], summary="List Shipments")
async def list_shipments(pending: bool = False, session: AsyncSession = Depends(get_session)) -> List[ShipmentRead]:
    """``pending=true`` keeps only shipments not yet received."""
    return [shipment_read(s) for s in await ShipmentRepository(session).list_all(pending_only=pending)]


@router.post(
    "/shipments",
    response_model=ShipmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send Shipment",
    responses={
        400: {"description": "Products are required"},
        401: {"description": "Not authenticated"},
        404: {"description": "Produk not found"},
    },
)
async def create_shipment(
    payload: ShipmentCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ShipmentRead:
    shipment = await ProductService(session).create_shipment(payload.products, payload.catatan)
    return shipment_read(shipment)


@router.post(
    "/shipments/{shipment_id}",
    response_model=ShipmentRead,
    summary="Receive Shipment",
    description="Mark a shipment as received and add the received quantities to the inventory.",
    responses={
        400: {"description": "Body must be a list of products"},
        404: {"description": "Not found"},
        409: {"description": "Shipment already received"},
    },
)
async def receive_shipment(
    shipment_id: int,
    payload: Any = Body(None),
    session: AsyncSession = Depends(get_session),
) -> ShipmentRead:
    if not isinstance(payload, list):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Body must be a list of products")
    try:
        items = _quantities.validate_python(payload)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid product list: {e.errors()[0]['msg']}")
    shipment = await ProductService(session).receive_shipment(shipment_id, items)
    return shipment_read(shipment)
