"""Domain enums for recruiting and Qurban administration."""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Recruiting
# ---------------------------------------------------------------------------


class UserRole(str, Enum):
    """Account role used for authorization."""

    RECRUITER = "RECRUITER"
    APPLICANT = "APPLICANT"


class JobStatus(str, Enum):
    """Publication state of a job posting. Only ACTIVE jobs are public."""

    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    INACTIVE = "INACTIVE"


class EmploymentType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    FREELANCE = "FREELANCE"
    INTERNSHIP = "INTERNSHIP"


class RemotePolicy(str, Enum):
    ONSITE = "onsite"
    REMOTE = "remote"
    HYBRID = "hybrid"


class ApplicationStatus(str, Enum):
    """Review state of a candidate application."""

    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"


class FieldState(str, Enum):
    """Visibility of an application form field for one job."""

    mandatory = "mandatory"
    optional = "optional"
    off = "off"


# ---------------------------------------------------------------------------
# Qurban administration
# ---------------------------------------------------------------------------


class JenisHewan(str, Enum):
    """Kind of sacrificial animal."""

    SAPI = "SAPI"  # cattle
    DOMBA = "DOMBA"  # sheep / goat


class HewanStatus(str, Enum):
    TERDAFTAR = "TERDAFTAR"  # registered
    SIAP_SEMBELIH = "SIAP_SEMBELIH"
    DISEMBELIH = "DISEMBELIH"  # slaughtered
    DITIMBANG = "DITIMBANG"  # weighed
    DIINVENTORY = "DIINVENTORY"
    TERDISTRIBUSI = "TERDISTRIBUSI"


class PaymentStatus(str, Enum):
    BELUM_BAYAR = "BELUM_BAYAR"
    MENUNGGU_KONFIRMASI = "MENUNGGU_KONFIRMASI"
    LUNAS = "LUNAS"
    BATAL = "BATAL"


class CaraBayar(str, Enum):
    TUNAI = "TUNAI"
    TRANSFER = "TRANSFER"


class JenisProduk(str, Enum):
    DAGING = "DAGING"
    KEPALA = "KEPALA"
    KAKI = "KAKI"
    KULIT = "KULIT"
    JEROAN = "JEROAN"
    LAINNYA = "LAINNYA"


class ProductLogEvent(str, Enum):
    menambahkan = "menambahkan"  # add to the place's counter
    memindahkan = "memindahkan"  # take out of the place's counter


class ProductLogPlace(str, Enum):
    PENYEMBELIHAN = "PENYEMBELIHAN"
    INVENTORY = "INVENTORY"
    DISTRIBUSI = "DISTRIBUSI"


class ShipmentStatus(str, Enum):
    DIKIRIM = "DIKIRIM"  # sent, awaiting receipt
    DITERIMA = "DITERIMA"  # received at the inventory


class KuponStatus(str, Enum):
    DISIMPAN = "DISIMPAN"  # in stock
    DIBAGIKAN = "DIBAGIKAN"  # handed out
    DIKEMBALIKAN = "DIKEMBALIKAN"  # redeemed


class AnimalGroupType(str, Enum):
    """Scope of a custom animal group."""

    HEWAN_BESAR = "HEWAN_BESAR"
    HEWAN_KECIL = "HEWAN_KECIL"
    ALL = "ALL"


class TransactionType(str, Enum):
    PEMASUKAN = "PEMASUKAN"  # income
    PENGELUARAN = "PENGELUARAN"  # expense
