"""
Qurban administration entity models.

This module contains the entities used to run a mosque's Qurban (sacrifice)
season: animal types and individual animals, sponsors (mudhohi) and their
payments, meat products with their movement log, shipments to the inventory,
distribution batches with their recipients, and paper coupons.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from careerconnect.core.models.domain import (
    CaraBayar,
    HewanStatus,
    JenisHewan,
    JenisProduk,
    KuponStatus,
    PaymentStatus,
    ShipmentStatus,
)

from ..base import Base, load_json, utc_now


class TipeHewan(Base, table=True):
    """Animal type offered to sponsors, e.g. "Sapi A" at a given price.

    Table: tipe_hewan
    """

    __tablename__ = "tipe_hewan"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    nama: str = Field(index=True, unique=True)
    icon: Optional[str] = Field(default=None)
    target: int = Field(default=0)
    harga: int = Field(default=0)
    harga_kolektif: Optional[int] = Field(default=None)
    jenis: JenisHewan = Field(default=JenisHewan.SAPI, index=True)
    keterangan: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Mudhohi(Base, table=True):
    """Sponsor performing the sacrifice.

    Table: mudhohi
    """

    __tablename__ = "mudhohi"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    nama_pengqurban: str = Field(index=True)
    nama_peruntukan: Optional[str] = Field(default=None)
    alamat: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    pesan_khusus: Optional[str] = Field(default=None)
    keterangan: Optional[str] = Field(default=None)
    potong_sendiri: bool = Field(default=False)
    ambil_daging: bool = Field(default=False)
    sudah_ambil_daging: bool = Field(default=False)
    dash_code: str = Field(index=True, unique=True)
    barcode: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Pembayaran(Base, table=True):
    """Payment of one mudhohi.

    Table: pembayaran
    """

    __tablename__ = "pembayaran"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    mudhohi_id: int = Field(foreign_key="mudhohi.id", index=True, unique=True)
    tipe_id: Optional[int] = Field(default=None, foreign_key="tipe_hewan.id")
    cara_bayar: CaraBayar = Field(default=CaraBayar.TRANSFER)
    payment_status: PaymentStatus = Field(default=PaymentStatus.BELUM_BAYAR, index=True)
    quantity: int = Field(default=1)
    is_kolektif: bool = Field(default=False)
    total_amount: int = Field(default=0)
    dibayarkan: int = Field(default=0)
    kode_resi: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Hewan(Base, table=True):
    """Individual sacrificial animal.

    ``hewan_id`` is the human readable batch label (``A-1``, ``A-2``, ...)
    regenerated whenever the group size setting changes.
    Labels are numbered per kind, so ``jenis`` is copied from the animal's
    type and the pair is unique.

    Table: hewan
    """

    __tablename__ = "hewan"
    __table_args__ = (
        UniqueConstraint("jenis", "hewan_id", name="uq_hewan_jenis_label"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    hewan_id: str = Field(index=True)
    tipe_id: int = Field(foreign_key="tipe_hewan.id", index=True)
    jenis: JenisHewan = Field(index=True)
    mudhohi_id: Optional[int] = Field(default=None, foreign_key="mudhohi.id", index=True)
    status: HewanStatus = Field(default=HewanStatus.TERDAFTAR)
    slaughtered: bool = Field(default=False)
    slaughtered_at: Optional[datetime] = Field(default=None)
    on_inventory: bool = Field(default=False)
    received: bool = Field(default=False)
    is_kolektif: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class ProdukHewan(Base, table=True):
    """Product obtained from the animals (meat packs, heads, skins, ...).

    The three counters track how many units were weighed at the slaughter
    place, are in the inventory, and were handed to recipients.

    Table: produk_hewan
    """

    __tablename__ = "produk_hewan"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    nama: str
    tipe_id: Optional[int] = Field(default=None, foreign_key="tipe_hewan.id")
    jenis_hewan: Optional[JenisHewan] = Field(default=None)
    jenis_produk: JenisProduk = Field(default=JenisProduk.DAGING, index=True)
    berat: Optional[float] = Field(default=None)
    avg_prod_per_hewan: int = Field(default=1)
    target_paket: int = Field(default=0)
    di_timbang: int = Field(default=0)
    di_inventori: int = Field(default=0)
    sdh_diserahkan: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class ProductLog(Base, table=True):
    """Movement of a product between places.

    Table: product_logs
    """

    __tablename__ = "product_logs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    produk_id: int = Field(foreign_key="produk_hewan.id", index=True)
    event: str
    place: str = Field(index=True)
    value: int = Field(default=0)
    note: Optional[str] = Field(default=None)

    timestamp: datetime = Field(default_factory=utc_now, index=True)


class ErrorLog(Base, table=True):
    """Product counter anomaly kept for the committee to reconcile.

    Written when a move-out asks for more than a counter holds, or when a
    shipment arrives with a different quantity than was sent.

    Table: error_logs
    """

    __tablename__ = "error_logs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    produk_id: Optional[int] = Field(default=None, foreign_key="produk_hewan.id", index=True)
    event: str
    note: str

    timestamp: datetime = Field(default_factory=utc_now, index=True)


class Shipment(Base, table=True):
    """Batch of products sent from the slaughter place to the inventory.

    Table: shipments
    """

    __tablename__ = "shipments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    status: ShipmentStatus = Field(default=ShipmentStatus.DIKIRIM, index=True)
    catatan: Optional[str] = Field(default=None)
    products: str = Field(default="[]", description="JSON array of {produk_id, jumlah}")
    waktu_kirim: datetime = Field(default_factory=utc_now)
    waktu_terima: Optional[datetime] = Field(default=None)

    def get_products_list(self) -> List[Dict[str, Any]]:
        return load_json(self.products, [])

    def set_products_list(self, products: List[Dict[str, Any]]) -> None:
        self.products = json.dumps(products)


class Distribusi(Base, table=True):
    """Distribution batch (category of recipients) with its target.

    Table: distribusi
    """

    __tablename__ = "distribusi"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    kategori: str
    target: int = Field(default=0)
    realisasi: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Penerima(Base, table=True):
    """Recipient inside a distribution batch.

    Table: penerima
    """

    __tablename__ = "penerima"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    distribusi_id: int = Field(foreign_key="distribusi.id", index=True)
    kupon_id: Optional[int] = Field(default=None, foreign_key="kupon.id")
    nama: str
    diterima_oleh: Optional[str] = Field(default=None)
    no_identitas: Optional[str] = Field(default=None)
    alamat: Optional[str] = Field(default=None)
    telepon: Optional[str] = Field(default=None)
    keterangan: Optional[str] = Field(default=None)
    jenis_penerima: Optional[str] = Field(default=None)
    received: bool = Field(default=False)
    waktu_terima: Optional[datetime] = Field(default=None)
    produk_distribusi: str = Field(default="[]", description="JSON array of {produk_id, jumlah}")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def get_produk_distribusi(self) -> List[Dict[str, Any]]:
        return load_json(self.produk_distribusi, [])

    def set_produk_distribusi(self, items: List[Dict[str, Any]]) -> None:
        self.produk_distribusi = json.dumps(items)


class Kupon(Base, table=True):
    """Paper coupon redeemable for a meat share.

    Table: kupon
    """

    __tablename__ = "kupon"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    kupon_id: str = Field(index=True, unique=True)
    status: KuponStatus = Field(default=KuponStatus.DISIMPAN, index=True)
    mudhohi_id: Optional[int] = Field(default=None, foreign_key="mudhohi.id")

    created_at: datetime = Field(default_factory=utc_now)
