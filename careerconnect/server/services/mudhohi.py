"""
Sponsor (mudhohi) service.

Registering a sponsor creates the sponsor, its payment record and the animals
it pays for in a single transaction. Spreadsheet imports register one sponsor
per row and report per-row failures instead of aborting.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.entities import Hewan, Mudhohi, Pembayaran
from careerconnect.core.database.repositories import (
    HewanRepository,
    MudhohiRepository,
    PembayaranRepository,
    TipeHewanRepository,
)
from careerconnect.core.errors import NotFoundError, ValidationFailedError
from careerconnect.core.models.domain import CaraBayar, PaymentStatus
from careerconnect.core.models.io.qurban import (
    HewanRead,
    MudhohiCreate,
    MudhohiRead,
    PaymentUpdate,
    PembayaranRead,
    SheetImportResults,
)

from .hewan import HewanService

logger = logging.getLogger(__name__)

_TRUTHY = {"ya", "yes", "true", "1", "y", "v"}


def mudhohi_to_read(
    mudhohi: Mudhohi, payment: Optional[Pembayaran] = None, hewan: Optional[List[Hewan]] = None
) -> MudhohiRead:
    return MudhohiRead(
        **mudhohi.model_dump(exclude={"updated_at"}),
        payment=PembayaranRead.model_validate(payment) if payment else None,
        hewan=[HewanRead.model_validate(h) for h in hewan or []],
    )


def _flag(value: Any) -> bool:
    return str(value).strip().lower() in _TRUTHY


def _enum_or_default(enum_cls, value: Any, default):
    text = str(value or "").strip().upper().replace(" ", "_")
    try:
        return enum_cls(text)
    except ValueError:
        return default


class MudhohiService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.mudhohi = MudhohiRepository(session)
        self.payments = PembayaranRepository(session)
        self.hewan = HewanRepository(session)
        self.tipe = TipeHewanRepository(session)

    async def _dash_code(self, requested: Optional[str] = None) -> str:
        if requested and not await self.mudhohi.dash_code_exists(requested):
            return requested
        while True:
            code = f"QRB-{uuid.uuid4().hex[:8].upper()}"
            if not await self.mudhohi.dash_code_exists(code):
                return code

    async def create(self, payload: MudhohiCreate, user_id: Optional[int] = None, dash_code: Optional[str] = None):
        """Register a sponsor with its payment and animals.

        Returns:
            ``(mudhohi, pembayaran, hewan)`` after commit.
        """
        if not payload.nama_pengqurban or not payload.nama_pengqurban.strip():
            raise ValidationFailedError("Nama pengqurban is required")

        tipe = None
        if payload.tipe_id is not None:
            tipe = await self.tipe.get_by_id(payload.tipe_id)
            if tipe is None:
                raise NotFoundError("Tipe hewan not found")

        code = await self._dash_code(dash_code)
        mudhohi = Mudhohi(
            user_id=payload.user_id or user_id,
            nama_pengqurban=payload.nama_pengqurban.strip(),
            nama_peruntukan=payload.nama_peruntukan,
            alamat=payload.alamat,
            email=payload.email,
            phone=payload.phone,
            pesan_khusus=payload.pesan_khusus,
            keterangan=payload.keterangan,
            potong_sendiri=payload.potong_sendiri,
            ambil_daging=payload.ambil_daging,
            dash_code=code,
            barcode=code,
        )

        unit_price = 0
        if tipe is not None:
            unit_price = tipe.harga_kolektif if payload.is_kolektif and tipe.harga_kolektif else tipe.harga

        created: List[Hewan] = []
        try:
            await self.mudhohi.stage(mudhohi)
            payment = await self.payments.stage(
                Pembayaran(
                    mudhohi_id=mudhohi.id,
                    tipe_id=tipe.id if tipe else None,
                    cara_bayar=payload.cara_bayar,
                    payment_status=payload.payment_status,
                    quantity=payload.quantity,
                    is_kolektif=payload.is_kolektif,
                    total_amount=unit_price * payload.quantity,
                    dibayarkan=payload.dibayarkan,
                    kode_resi=payload.kode_resi,
                )
            )
            if tipe is not None:
                labels = await HewanService(self.session).next_labels(tipe.jenis, payload.quantity)
                for label in labels:
                    created.append(
                        await self.hewan.stage(
                            Hewan(
                                hewan_id=label,
                                tipe_id=tipe.id,
                                jenis=tipe.jenis,
                                mudhohi_id=mudhohi.id,
                                is_kolektif=payload.is_kolektif,
                            )
                        )
                    )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"Registered mudhohi {mudhohi.id} ({code}) with {len(created)} hewan")
        return mudhohi, payment, created

    async def list_page(self, page: int, page_size: int, status: Optional[str], search: Optional[str]):
        rows, total = await self.mudhohi.list_page(page, page_size, status, search)
        hewan = await self.hewan.list_for_mudhohi(m.id for m, _ in rows)
        by_owner: Dict[int, List[Hewan]] = {}
        for h in hewan:
            by_owner.setdefault(h.mudhohi_id, []).append(h)
        return [mudhohi_to_read(m, p, by_owner.get(m.id)) for m, p in rows], total

    async def update_payment(self, mudhohi_id: int, payload: PaymentUpdate) -> Pembayaran:
        try:
            status = PaymentStatus(payload.payment_status)
        except ValueError:
            raise ValidationFailedError("Invalid payment status")
        payment = await self.payments.get_by_mudhohi(mudhohi_id)
        if payment is None:
            raise NotFoundError("Payment not found")
        payment.payment_status = status
        if payload.dibayarkan is not None:
            payment.dibayarkan = payload.dibayarkan
        if payload.kode_resi is not None:
            payment.kode_resi = payload.kode_resi
        return await self.payments.update(payment)

    async def import_records(self, records: List[Dict[str, Any]], user_id: int) -> SheetImportResults:
        """Register one sponsor per spreadsheet record (keys are normalized headers)."""
        results = SheetImportResults()
        for row_number, record in enumerate(records, start=2):
            try:
                payload = await self._payload_from_record(record, user_id)
                await self.create(payload, user_id=user_id, dash_code=str(record.get("kode_dash") or "").strip() or None)
                results.success += 1
            except (ValidationFailedError, NotFoundError, ValueError) as exc:
                results.failed += 1
                message = getattr(exc, "message", str(exc))
                results.errors.append(f"Row {row_number}: {message}")
                logger.warning(f"Sheet import row {row_number} failed: {message}")
        return results

    async def _payload_from_record(self, record: Dict[str, Any], user_id: int) -> MudhohiCreate:
        tipe_id = None
        jenis_hewan = str(record.get("jenis_hewan") or "").strip()
        if jenis_hewan:
            tipe = await self.tipe.get_by_nama(jenis_hewan)
            if tipe is None:
                raise ValidationFailedError(f"Unknown jenis hewan '{jenis_hewan}'")
            tipe_id = tipe.id
        quantity_raw = str(record.get("jumlah_hewan") or "1").strip() or "1"
        return MudhohiCreate(
            nama_pengqurban=str(record.get("nama_pengqurban") or "").strip() or None,
            nama_peruntukan=record.get("nama_peruntukan") or None,
            alamat=record.get("alamat") or None,
            pesan_khusus=record.get("pesan_khusus") or None,
            keterangan=record.get("keterangan") or None,
            potong_sendiri=_flag(record.get("potong_sendiri")),
            ambil_daging=_flag(record.get("ambil_daging")),
            user_id=user_id,
            tipe_id=tipe_id,
            quantity=int(quantity_raw),
            cara_bayar=_enum_or_default(CaraBayar, record.get("cara_bayar"), CaraBayar.TRANSFER),
            payment_status=_enum_or_default(
                PaymentStatus, record.get("status_pembayaran"), PaymentStatus.BELUM_BAYAR
            ),
        )
