"""
Repository layer organized by business domain.

Repositories wrap an ``AsyncSession`` and expose the queries each API area
needs. Single-row writes commit immediately; multi-step writes go through
``stage``/``remove`` and are committed by the calling service.
"""

from .addresses import AddressRepository
from .base import AsyncBaseRepository, QueryBuilder, SQLModelRepository, total_pages
from .jobs import (
    ApplicationNoteRepository,
    ApplicationRepository,
    CompanyRepository,
    InfoFieldRepository,
    JobFormFieldRepository,
    JobRepository,
)
from .keuangan import BudgetRepository, TransactionCategoryRepository, TransactionRepository
from .qurban import (
    DistribusiRepository,
    ErrorLogRepository,
    HewanRepository,
    KuponRepository,
    MudhohiRepository,
    PembayaranRepository,
    PenerimaRepository,
    ProductLogRepository,
    ProdukHewanRepository,
    ShipmentRepository,
    TipeHewanRepository,
)
from .settings import CustomGroupRepository, ImageRepository, ItikafSettingRepository, SettingRepository
from .users import OtherUserInfoRepository, ProfileRepository, TokenRepository, UserRepository

__all__ = [
    "AddressRepository",
    "ApplicationNoteRepository",
    "ApplicationRepository",
    "AsyncBaseRepository",
    "BudgetRepository",
    "CompanyRepository",
    "CustomGroupRepository",
    "DistribusiRepository",
    "ErrorLogRepository",
    "HewanRepository",
    "ImageRepository",
    "InfoFieldRepository",
    "ItikafSettingRepository",
    "JobFormFieldRepository",
    "JobRepository",
    "KuponRepository",
    "MudhohiRepository",
    "OtherUserInfoRepository",
    "PembayaranRepository",
    "PenerimaRepository",
    "ProductLogRepository",
    "ProdukHewanRepository",
    "ProfileRepository",
    "QueryBuilder",
    "SQLModelRepository",
    "SettingRepository",
    "ShipmentRepository",
    "TipeHewanRepository",
    "TokenRepository",
    "TransactionCategoryRepository",
    "TransactionRepository",
    "UserRepository",
    "total_pages",
]
