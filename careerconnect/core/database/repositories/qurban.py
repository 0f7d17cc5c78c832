"""
Qurban administration repositories.

Built on the shared SQLModel repository; each class adds the queries the
Qurban dashboard needs (paging by animal kind, sponsor search, meta counts).
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from careerconnect.core.models.domain import JenisHewan, ShipmentStatus

from ..entities.qurban import (
    Distribusi,
    ErrorLog,
    Hewan,
    Kupon,
    Mudhohi,
    Pembayaran,
    Penerima,
    ProductLog,
    ProdukHewan,
    Shipment,
    TipeHewan,
)
from .base import QueryBuilder, SQLModelRepository


class TipeHewanRepository(SQLModelRepository[TipeHewan]):
    """Animal types and their per-type counters."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TipeHewan)

    async def list_all(self, jenis: Optional[JenisHewan] = None) -> List[TipeHewan]:
        stmt = select(TipeHewan).order_by(TipeHewan.id)
        if jenis is not None:
            stmt = stmt.where(TipeHewan.jenis == jenis)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_nama(self, nama: str) -> Optional[TipeHewan]:
        stmt = select(TipeHewan).where(func.lower(TipeHewan.nama) == nama.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def hewan_counts(self, tipe_ids: Iterable[int]) -> Dict[int, Tuple[int, int]]:
        """Map tipe id to ``(total animals, slaughtered animals)``."""
        ids = list(tipe_ids)
        if not ids:
            return {}
        stmt = (
            select(Hewan.tipe_id, Hewan.slaughtered, func.count(Hewan.id))
            .where(Hewan.tipe_id.in_(ids))
            .group_by(Hewan.tipe_id, Hewan.slaughtered)
        )
        result = await self.session.execute(stmt)
        counts: Dict[int, Tuple[int, int]] = {tipe_id: (0, 0) for tipe_id in ids}
        for tipe_id, slaughtered, count in result.all():
            total, done = counts[tipe_id]
            counts[tipe_id] = (total + count, done + (count if slaughtered else 0))
        return counts


class HewanRepository(SQLModelRepository[Hewan]):
    """Individual animals, always queried by kind (sapi / domba)."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Hewan)

    def _by_jenis(self, jenis: JenisHewan):
        return select(Hewan).where(Hewan.jenis == jenis)

    async def get_by_label(self, jenis: JenisHewan, hewan_id: str) -> Optional[Hewan]:
        stmt = self._by_jenis(jenis).where(Hewan.hewan_id == hewan_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_window(self, jenis: JenisHewan, offset: int, limit: int) -> List[Hewan]:
        """Animals of a kind at registration positions ``[offset, offset + limit)``."""
        stmt = self._by_jenis(jenis).order_by(Hewan.created_at, Hewan.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def all_by_jenis(self, jenis: JenisHewan) -> List[Hewan]:
        """Every animal of a kind in registration order."""
        result = await self.session.execute(self._by_jenis(jenis).order_by(Hewan.created_at, Hewan.id))
        return list(result.scalars().all())

    async def count_by_jenis(self, jenis: JenisHewan) -> int:
        return await self.count(self._by_jenis(jenis))

    async def list_for_mudhohi(self, mudhohi_ids: Iterable[int]) -> List[Hewan]:
        ids = list(mudhohi_ids)
        if not ids:
            return []
        result = await self.session.execute(select(Hewan).where(Hewan.mudhohi_id.in_(ids)).order_by(Hewan.id))
        return list(result.scalars().all())

    async def created_between(self, start: datetime, end: datetime) -> List[Tuple[Hewan, TipeHewan]]:
        stmt = (
            select(Hewan, TipeHewan)
            .join(TipeHewan, TipeHewan.id == Hewan.tipe_id)
            .where(Hewan.created_at >= start, Hewan.created_at < end)
            .order_by(Hewan.created_at)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


class MudhohiRepository(SQLModelRepository[Mudhohi]):
    """Sponsors with their payment."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Mudhohi)

    async def list_page(
        self,
        page: int,
        page_size: int,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Tuple[Mudhohi, Optional[Pembayaran]]], int]:
        stmt = select(Mudhohi, Pembayaran).join(Pembayaran, Pembayaran.mudhohi_id == Mudhohi.id, isouter=True)
        if status:
            stmt = stmt.where(Pembayaran.payment_status == status)
        stmt = QueryBuilder.apply_search(
            stmt, [Mudhohi.nama_pengqurban, Mudhohi.nama_peruntukan, Mudhohi.dash_code], search
        )
        stmt = stmt.order_by(Mudhohi.created_at.desc(), Mudhohi.id.desc())

        total = await self.count(stmt)
        stmt = QueryBuilder.apply_pagination(stmt, page_size, (page - 1) * page_size)
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()], total

    async def dash_code_exists(self, dash_code: str) -> bool:
        result = await self.session.execute(select(Mudhohi.id).where(Mudhohi.dash_code == dash_code))
        return result.first() is not None


class PembayaranRepository(SQLModelRepository[Pembayaran]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Pembayaran)

    async def get_by_mudhohi(self, mudhohi_id: int) -> Optional[Pembayaran]:
        result = await self.session.execute(select(Pembayaran).where(Pembayaran.mudhohi_id == mudhohi_id))
        return result.scalar_one_or_none()


class ProdukHewanRepository(SQLModelRepository[ProdukHewan]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProdukHewan)

    async def list_all(self, jenis_produk: Optional[str] = None) -> List[ProdukHewan]:
        stmt = select(ProdukHewan).order_by(ProdukHewan.id)
        if jenis_produk:
            stmt = stmt.where(ProdukHewan.jenis_produk == jenis_produk)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_many(self, ids: Iterable[int]) -> Dict[int, ProdukHewan]:
        wanted = list(ids)
        if not wanted:
            return {}
        result = await self.session.execute(select(ProdukHewan).where(ProdukHewan.id.in_(wanted)))
        return {produk.id: produk for produk in result.scalars().all()}


class ProductLogRepository(SQLModelRepository[ProductLog]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProductLog)

    async def list_recent(
        self, produk_id: Optional[int] = None, place: Optional[str] = None, limit: int = 50
    ) -> List[ProductLog]:
        stmt = select(ProductLog)
        stmt = QueryBuilder.apply_filters(stmt, ProductLog, {"produk_id": produk_id, "place": place})
        stmt = stmt.order_by(ProductLog.timestamp.desc(), ProductLog.id.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ErrorLogRepository(SQLModelRepository[ErrorLog]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ErrorLog)

    async def list_recent(self, limit: int = 100) -> List[ErrorLog]:
        stmt = select(ErrorLog).order_by(ErrorLog.timestamp.desc(), ErrorLog.id.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ShipmentRepository(SQLModelRepository[Shipment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Shipment)

    async def list_all(self, pending_only: bool = False) -> List[Shipment]:
        stmt = select(Shipment).order_by(Shipment.waktu_kirim.desc(), Shipment.id.desc())
        if pending_only:
            stmt = stmt.where(Shipment.status == ShipmentStatus.DIKIRIM)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class DistribusiRepository(SQLModelRepository[Distribusi]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Distribusi)

    async def list_with_counts(self) -> List[Tuple[Distribusi, int]]:
        """Every batch with the number of recipients registered in it."""
        counts = (
            select(Penerima.distribusi_id, func.count(Penerima.id).label("jumlah"))
            .group_by(Penerima.distribusi_id)
            .subquery()
        )
        stmt = (
            select(Distribusi, func.coalesce(counts.c.jumlah, 0))
            .join(counts, counts.c.distribusi_id == Distribusi.id, isouter=True)
            .order_by(Distribusi.id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], int(row[1])) for row in result.all()]


class PenerimaRepository(SQLModelRepository[Penerima]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Penerima)

    async def list_page(
        self, distribusi_id: Optional[int], page: int, page_size: int
    ) -> Tuple[List[Penerima], int]:
        stmt = select(Penerima)
        stmt = QueryBuilder.apply_filters(stmt, Penerima, {"distribusi_id": distribusi_id})
        stmt = stmt.order_by(Penerima.created_at.desc(), Penerima.id.desc())
        return await self.paginate(stmt, page, page_size)


class KuponRepository(SQLModelRepository[Kupon]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Kupon)

    async def list_all(self) -> List[Kupon]:
        result = await self.session.execute(select(Kupon).order_by(Kupon.kupon_id))
        return list(result.scalars().all())

    async def existing_codes(self, codes: Iterable[str]) -> Set[str]:
        wanted = list(codes)
        if not wanted:
            return set()
        result = await self.session.execute(select(Kupon.kupon_id).where(Kupon.kupon_id.in_(wanted)))
        return set(result.scalars().all())
