"""Test configuration for database unit tests.

Provides an in-memory SQLite engine and session with every table created,
plus small factories for rows most repository tests need.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from careerconnect.core.database import entities  # noqa: F401
from careerconnect.core.database.base import Base
from careerconnect.core.database.entities import Hewan, TipeHewan, User
from careerconnect.core.models.domain import JenisHewan


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    maker = async_sessionmaker(bind=in_memory_engine, class_=AsyncSession, expire_on_commit=False)

    async with maker() as session:
        yield session


@pytest.fixture
def add_user(in_memory_session: AsyncSession):
    async def _add(email: str, name: str = "User", roles: str = '["MEMBER"]') -> User:
        user = User(email=email, name=name, roles=roles)
        in_memory_session.add(user)
        await in_memory_session.commit()
        return user

    return _add


@pytest.fixture
def add_hewan(in_memory_session: AsyncSession):
    """Create a type named ``nama`` of kind ``jenis`` with ``count`` animals."""

    async def _add(nama: str, jenis: JenisHewan, count: int, slaughtered: int = 0) -> TipeHewan:
        tipe = TipeHewan(nama=nama, jenis=jenis, harga=1_000_000)
        in_memory_session.add(tipe)
        await in_memory_session.flush()
        for i in range(count):
            hewan = Hewan(hewan_id=f"{nama}-{i + 1}", tipe_id=tipe.id, jenis=jenis, slaughtered=i < slaughtered)
            in_memory_session.add(hewan)
        await in_memory_session.commit()
        return tipe

    return _add
