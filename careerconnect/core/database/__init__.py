"""
Centralized database layer for CareerConnect.

Structure:
- entities/: Database entity models organized by business domain
- repositories/: Data access layer organized by business domain
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, create_all)
"""

from .base import Base
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
]
