"""
Qurban administration I/O models.

Covers animal types and animals, sponsors and payments, coupons, distribution
batches with recipients, products with their movement logs, and shipments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from careerconnect.core.models.domain import (
    CaraBayar,
    HewanStatus,
    JenisHewan,
    JenisProduk,
    KuponStatus,
    PaymentStatus,
    ShipmentStatus,
)


# ---------------------------------------------------------------------------
# Animal types and animals
# ---------------------------------------------------------------------------


class TipeHewanRead(BaseModel):
    id: int
    nama: str
    icon: Optional[str] = None
    target: int
    harga: int
    harga_kolektif: Optional[int] = None
    jenis: JenisHewan
    keterangan: Optional[str] = None

    class Config:
        from_attributes = True


class TipeHewanCreate(BaseModel):
    nama: str = Field(min_length=1)
    icon: Optional[str] = None
    target: int = Field(default=0, ge=0)
    harga: int = Field(default=0, ge=0)
    harga_kolektif: Optional[int] = Field(default=None, ge=0)
    jenis: JenisHewan = JenisHewan.SAPI
    keterangan: Optional[str] = None


class TipeHewanUpdate(BaseModel):
    nama: Optional[str] = None
    icon: Optional[str] = None
    target: Optional[int] = Field(default=None, ge=0)
    harga: Optional[int] = Field(default=None, ge=0)
    harga_kolektif: Optional[int] = Field(default=None, ge=0)
    jenis: Optional[JenisHewan] = None
    keterangan: Optional[str] = None


class HewanRead(BaseModel):
    id: int
    hewan_id: str
    tipe_id: int
    jenis: JenisHewan
    mudhohi_id: Optional[int] = None
    status: HewanStatus
    slaughtered: bool
    slaughtered_at: Optional[datetime] = None
    on_inventory: bool
    received: bool
    is_kolektif: bool
    created_at: datetime

    class Config:
        from_attributes = True


class HewanInventoryUpdate(BaseModel):
    hewan_id: Optional[str] = None
    jenis: Optional[JenisHewan] = None
    on_inventory: Optional[bool] = None


class HewanReceivedUpdate(BaseModel):
    hewan_id: Optional[str] = None
    jenis: Optional[JenisHewan] = None
    received: Optional[bool] = None


class HewanStatusUpdate(BaseModel):
    hewan_id: Optional[str] = None
    jenis: Optional[JenisHewan] = None
    status: Optional[HewanStatus] = None
    slaughtered: Optional[bool] = None


class HewanMetaUpdate(BaseModel):
    type_id: int
    target: Any


class HewanMetaEntry(BaseModel):
    total: int
    target: int
    slaughtered: int


# ---------------------------------------------------------------------------
# Sponsors and payments
# ---------------------------------------------------------------------------


class PembayaranRead(BaseModel):
    id: int
    mudhohi_id: int
    tipe_id: Optional[int] = None
    cara_bayar: CaraBayar
    payment_status: PaymentStatus
    quantity: int
    is_kolektif: bool
    total_amount: int
    dibayarkan: int
    kode_resi: Optional[str] = None
    updated_at: datetime

    class Config:
        from_attributes = True


class MudhohiRead(BaseModel):
    id: int
    user_id: Optional[int] = None
    nama_pengqurban: str
    nama_peruntukan: Optional[str] = None
    alamat: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    pesan_khusus: Optional[str] = None
    keterangan: Optional[str] = None
    potong_sendiri: bool
    ambil_daging: bool
    sudah_ambil_daging: bool
    dash_code: str
    barcode: Optional[str] = None
    created_at: datetime
    payment: Optional[PembayaranRead] = None
    hewan: List[HewanRead] = Field(default_factory=list)


class MudhohiCreate(BaseModel):
    nama_pengqurban: Optional[str] = None
    nama_peruntukan: Optional[str] = None
    alamat: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    pesan_khusus: Optional[str] = None
    keterangan: Optional[str] = None
    potong_sendiri: bool = False
    ambil_daging: bool = False
    user_id: Optional[int] = None
    tipe_id: Optional[int] = None
    quantity: int = Field(default=1, ge=1)
    is_kolektif: bool = False
    cara_bayar: CaraBayar = CaraBayar.TRANSFER
    payment_status: PaymentStatus = PaymentStatus.BELUM_BAYAR
    dibayarkan: int = Field(default=0, ge=0)
    kode_resi: Optional[str] = None


class PaymentUpdate(BaseModel):
    payment_status: Optional[str] = None
    dibayarkan: Optional[int] = Field(default=None, ge=0)
    kode_resi: Optional[str] = None


class SheetImportRequest(BaseModel):
    sheet_id: Optional[str] = None
    sheet_name: str = "Sheet1"
    user_id: Optional[int] = None


class SheetImportResults(BaseModel):
    success: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------


class KuponRead(BaseModel):
    id: int
    kupon_id: str
    status: KuponStatus
    mudhohi_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class KuponGenerate(BaseModel):
    total_kupon: Optional[int] = None
    kupon_per_mudhohi: Optional[int] = None


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------


class DistribusiRead(BaseModel):
    id: int
    kategori: str
    target: int
    realisasi: int
    penerima_count: int = 0


class DistribusiCreate(BaseModel):
    kategori: str = Field(min_length=1)
    target: int = Field(default=0, ge=0)


class DistribusiUpdate(BaseModel):
    target: Optional[int] = None


class ProdukQuantity(BaseModel):
    produk_id: int
    jumlah: int = Field(ge=0)


class PenerimaRead(BaseModel):
    id: int
    distribusi_id: int
    kupon_id: Optional[int] = None
    nama: str
    diterima_oleh: Optional[str] = None
    no_identitas: Optional[str] = None
    alamat: Optional[str] = None
    telepon: Optional[str] = None
    keterangan: Optional[str] = None
    jenis_penerima: Optional[str] = None
    received: bool
    waktu_terima: Optional[datetime] = None
    produk_distribusi: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime


class PenerimaCreate(BaseModel):
    distribusi_id: int
    nama: str = Field(min_length=1)
    kupon_id: Optional[int] = None
    diterima_oleh: Optional[str] = None
    no_identitas: Optional[str] = None
    alamat: Optional[str] = None
    telepon: Optional[str] = None
    keterangan: Optional[str] = None
    jenis_penerima: Optional[str] = None


class PenerimaUpdate(BaseModel):
    nama: Optional[str] = None
    kupon_id: Optional[int] = None
    diterima_oleh: Optional[str] = None
    no_identitas: Optional[str] = None
    alamat: Optional[str] = None
    telepon: Optional[str] = None
    keterangan: Optional[str] = None
    jenis_penerima: Optional[str] = None
    received: Optional[bool] = None


class PenerimaDistribusiUpdate(BaseModel):
    produk_qurban: List[ProdukQuantity] = Field(default_factory=list)
    diterima_oleh: Optional[str] = None


# ---------------------------------------------------------------------------
# Products, logs and shipments
# ---------------------------------------------------------------------------


class ProdukHewanRead(BaseModel):
    id: int
    nama: str
    tipe_id: Optional[int] = None
    jenis_hewan: Optional[JenisHewan] = None
    jenis_produk: JenisProduk
    berat: Optional[float] = None
    avg_prod_per_hewan: int
    target_paket: int
    di_timbang: int
    di_inventori: int
    sdh_diserahkan: int

    class Config:
        from_attributes = True


class ProdukHewanCreate(BaseModel):
    nama: str = Field(min_length=1)
    tipe_id: Optional[int] = None
    jenis_hewan: Optional[JenisHewan] = None
    jenis_produk: JenisProduk = JenisProduk.DAGING
    berat: Optional[float] = None
    avg_prod_per_hewan: int = Field(default=1, ge=0)
    target_paket: int = Field(default=0, ge=0)


class ProductLogCreate(BaseModel):
    produk_id: Optional[int] = None
    event: Optional[str] = None
    place: Optional[str] = None
    value: int = Field(default=0, ge=0)
    note: Optional[str] = None


class ProductLogRead(BaseModel):
    id: int
    produk_id: int
    event: str
    place: str
    value: int
    note: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True


class ErrorLogRead(BaseModel):
    id: int
    produk_id: Optional[int] = None
    event: str
    note: str
    timestamp: datetime

    class Config:
        from_attributes = True


class ShipmentCreate(BaseModel):
    products: Optional[List[ProdukQuantity]] = None
    catatan: Optional[str] = None


class ShipmentRead(BaseModel):
    id: int
    status: ShipmentStatus
    catatan: Optional[str] = None
    products: List[Dict[str, Any]] = Field(default_factory=list)
    waktu_kirim: datetime
    waktu_terima: Optional[datetime] = None
