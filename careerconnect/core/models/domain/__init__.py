"""Domain enums for CareerConnect."""

from .enums import (
    AnimalGroupType,
    ApplicationStatus,
    CaraBayar,
    EmploymentType,
    FieldState,
    HewanStatus,
    JenisHewan,
    JenisProduk,
    JobStatus,
    KuponStatus,
    PaymentStatus,
    ProductLogEvent,
    ProductLogPlace,
    RemotePolicy,
    ShipmentStatus,
    TransactionType,
    UserRole,
)

__all__ = [
    "AnimalGroupType",
    "ApplicationStatus",
    "CaraBayar",
    "EmploymentType",
    "FieldState",
    "HewanStatus",
    "JenisHewan",
    "JenisProduk",
    "JobStatus",
    "KuponStatus",
    "PaymentStatus",
    "ProductLogEvent",
    "ProductLogPlace",
    "RemotePolicy",
    "ShipmentStatus",
    "TransactionType",
    "UserRole",
]
