"""
Database entity models organized by business domain.

Importing this package registers every table on ``Base.metadata``.
"""

from .addresses import Address
from .jobs import Application, ApplicationNote, Company, InfoField, Job, JobFormField
from .keuangan import Budget, Transaction, TransactionCategory
from .qurban import (
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
from .settings import CustomGroup, Image, ItikafSetting, Setting
from .users import OtherUserInfo, PasswordResetToken, Profile, User, VerificationToken

__all__ = [
    "Address",
    "Application",
    "ApplicationNote",
    "Budget",
    "Company",
    "CustomGroup",
    "Distribusi",
    "ErrorLog",
    "Hewan",
    "Image",
    "InfoField",
    "ItikafSetting",
    "Job",
    "JobFormField",
    "Kupon",
    "Mudhohi",
    "OtherUserInfo",
    "PasswordResetToken",
    "Pembayaran",
    "Penerima",
    "ProductLog",
    "ProdukHewan",
    "Profile",
    "Setting",
    "Shipment",
    "TipeHewan",
    "Transaction",
    "TransactionCategory",
    "User",
    "VerificationToken",
]
