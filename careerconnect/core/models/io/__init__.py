"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: pagination envelopes
- auth, profiles: accounts, profiles and committee members
- jobs, applications: recruiting
- addresses, settings: user addresses and site settings
- qurban, keuangan: Qurban administration and bookkeeping
- itikaf: Itikaf registration, attendance and statistics
- integrations: data returned by third-party services
"""

from .common import Pagination, QurbanPagination

__all__ = [
    "Pagination",
    "QurbanPagination",
]
