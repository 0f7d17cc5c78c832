"""
Meat product flow: slaughter place -> inventory -> recipients.

Each product keeps three counters. A log event at a place moves the counter
that belongs to that place: ``menambahkan`` (adding) increases it and
``memindahkan`` (moving out) decreases it. Shipments move quantities into the
inventory, and handing packages to a recipient moves them to ``sdh_diserahkan``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.base import utc_now
from careerconnect.core.database.entities import ErrorLog, Penerima, ProductLog, ProdukHewan, Shipment
from careerconnect.core.database.repositories import (
    DistribusiRepository,
    ErrorLogRepository,
    PenerimaRepository,
    ProductLogRepository,
    ProdukHewanRepository,
    ShipmentRepository,
)
from careerconnect.core.errors import ConflictError, NotFoundError, ValidationFailedError
from careerconnect.core.models.domain import ProductLogEvent, ProductLogPlace, ShipmentStatus
from careerconnect.core.models.io.qurban import PenerimaCreate, ProdukQuantity, ProductLogCreate

logger = logging.getLogger(__name__)

PLACE_COUNTERS: Dict[ProductLogPlace, str] = {
    ProductLogPlace.PENYEMBELIHAN: "di_timbang",
    ProductLogPlace.INVENTORY: "di_inventori",
    ProductLogPlace.DISTRIBUSI: "sdh_diserahkan",
}


def apply_event(produk: ProdukHewan, event: ProductLogEvent, place: ProductLogPlace, value: int) -> int:
    """Move the counter for ``place`` and return its new value. Counters never drop below zero."""
    counter = PLACE_COUNTERS[place]
    current = getattr(produk, counter) or 0
    updated = current + value if event == ProductLogEvent.menambahkan else max(0, current - value)
    setattr(produk, counter, updated)
    return updated


class ProductService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.products = ProdukHewanRepository(session)
        self.logs = ProductLogRepository(session)
        self.shipments = ShipmentRepository(session)
        self.errors = ErrorLogRepository(session)

    async def _products_for(self, items: List[ProdukQuantity]) -> Dict[int, ProdukHewan]:
        products = await self.products.get_many(item.produk_id for item in items)
        missing = sorted({item.produk_id for item in items} - set(products))
        if missing:
            raise NotFoundError(f"Produk not found: {', '.join(str(m) for m in missing)}")
        return products

    async def log_event(self, payload: ProductLogCreate) -> ProductLog:
        if payload.produk_id is None or not payload.event:
            raise ValidationFailedError("produk_id and event are required")
        try:
            event = ProductLogEvent(payload.event)
        except ValueError:
            raise ValidationFailedError(f"Invalid event: {payload.event}")
        try:
            place = ProductLogPlace(payload.place)
        except ValueError:
            raise ValidationFailedError(f"Invalid place: {payload.place}")

        produk = await self.products.get_by_id(payload.produk_id)
        if produk is None:
            raise NotFoundError("Produk not found")

        available = getattr(produk, PLACE_COUNTERS[place]) or 0
        try:
            apply_event(produk, event, place, payload.value)
            await self.products.stage(produk)
            if event == ProductLogEvent.memindahkan and payload.value > available:
                logger.warning(f"Produk {produk.id} at {place.value}: moved out {payload.value} of {available}")
                await self.errors.stage(
                    ErrorLog(
                        produk_id=produk.id,
                        event=event.value,
                        note=f"{place.value}: moved out {payload.value} but only {available} recorded",
                    )
                )
            log = await self.logs.stage(
                ProductLog(
                    produk_id=produk.id,
                    event=event.value,
                    place=place.value,
                    value=payload.value,
                    note=payload.note,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return log

    async def create_shipment(self, items: Optional[List[ProdukQuantity]], catatan: Optional[str]) -> Shipment:
        if not items:
            raise ValidationFailedError("Products are required")
        await self._products_for(items)
        shipment = Shipment(status=ShipmentStatus.DIKIRIM, catatan=catatan)
        shipment.set_products_list([item.model_dump() for item in items])
        return await self.shipments.create(shipment)

    async def receive_shipment(self, shipment_id: int, items: List[ProdukQuantity]) -> Shipment:
        """Mark a shipment received and add the received quantities to the inventory.

        A shipment is received once; a second attempt is a conflict.
        """
        shipment = await self.shipments.get_by_id(shipment_id)
        if shipment is None:
            raise NotFoundError("Shipment not found")
        if shipment.status == ShipmentStatus.DITERIMA:
            raise ConflictError("Shipment already received")
        products = await self._products_for(items)
        sent = {int(p["produk_id"]): int(p.get("jumlah") or 0) for p in shipment.get_products_list()}
        received = {item.produk_id: item.jumlah for item in items}
        known = await self.products.get_many(set(sent) | set(received))
        try:
            for item in items:
                produk = products[item.produk_id]
                produk.di_inventori = (produk.di_inventori or 0) + item.jumlah
                await self.products.stage(produk)
            for produk_id in sorted(set(sent) | set(received)):
                if sent.get(produk_id, 0) != received.get(produk_id, 0):
                    logger.warning(f"Shipment {shipment_id} quantity mismatch for produk {produk_id}")
                    await self.errors.stage(
                        ErrorLog(
                            produk_id=produk_id if produk_id in known else None,
                            event="shipment",
                            note=(
                                f"Shipment {shipment_id}: sent {sent.get(produk_id, 0)}, "
                                f"received {received.get(produk_id, 0)}"
                            ),
                        )
                    )
            shipment.status = ShipmentStatus.DITERIMA
            shipment.waktu_terima = utc_now()
            await self.shipments.stage(shipment)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"Shipment {shipment_id} received with {len(items)} product lines")
        return shipment


class DistributionService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.distribusi = DistribusiRepository(session)
        self.penerima = PenerimaRepository(session)
        self.products = ProdukHewanRepository(session)

    async def add_penerima(self, payload: PenerimaCreate) -> Penerima:
        """Register a recipient and count it towards its batch's realisation."""
        batch = await self.distribusi.get_by_id(payload.distribusi_id)
        if batch is None:
            raise NotFoundError("Distribusi not found")
        try:
            penerima = await self.penerima.stage(Penerima(**payload.model_dump()))
            batch.realisasi = (batch.realisasi or 0) + 1
            await self.distribusi.stage(batch)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(penerima)
        return penerima

    async def hand_over(
        self, penerima_id: int, items: List[ProdukQuantity], diterima_oleh: Optional[str] = None
    ) -> Penerima:
        penerima = await self.penerima.get_by_id(penerima_id)
        if penerima is None:
            raise NotFoundError("Penerima not found")
        if penerima.received:
            raise ConflictError("Penerima already received the products")
        products = await self.products.get_many(item.produk_id for item in items)
        missing = sorted({item.produk_id for item in items} - set(products))
        if missing:
            raise NotFoundError(f"Produk not found: {', '.join(str(m) for m in missing)}")

        try:
            for item in items:
                produk = products[item.produk_id]
                produk.sdh_diserahkan = (produk.sdh_diserahkan or 0) + item.jumlah
                await self.products.stage(produk)
            penerima.received = True
            penerima.waktu_terima = utc_now()
            if diterima_oleh:
                penerima.diterima_oleh = diterima_oleh
            penerima.set_produk_distribusi([item.model_dump() for item in items])
            await self.penerima.stage(penerima)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(penerima)
        return penerima
