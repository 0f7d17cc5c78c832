import json
from typing import AsyncGenerator, Awaitable, Callable, Dict, Optional
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import select
from sqlmodel.pool import StaticPool

from careerconnect.core.database import entities  # noqa: F401
from careerconnect.core.database.base import Base
from careerconnect.core.database.entities import User
from careerconnect.core.models.domain import UserRole
from careerconnect.integrations import EmailClient, LocalBlobStorage
from careerconnect.server.auth import create_access_token, hash_password

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with maker() as session:
        yield session


@pytest.fixture
def storage(tmp_path) -> LocalBlobStorage:
    return LocalBlobStorage(tmp_path / "uploads")


@pytest.fixture
def email_outbox() -> list:
    """Messages the fake email client was asked to send."""
    return []


class RecordingEmailClient(EmailClient):
    def __init__(self, outbox: list) -> None:
        super().__init__(None, development=True)
        self.outbox = outbox

    async def send(self, to: str, subject: str, html: str) -> None:
        self.outbox.append({"to": to, "subject": subject, "html": html})


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, storage, email_outbox) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from careerconnect.core.database import get_session
    from careerconnect.server.main import app
    from careerconnect.server.services.deps import get_email_client, get_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_email_client] = lambda: RecordingEmailClient(email_outbox)

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("careerconnect.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory persisting a user with a known password (``secret123``)."""

    async def _make(
        email: str = "applicant@example.com",
        role: UserRole = UserRole.APPLICANT,
        name: Optional[str] = "Test User",
        password: str = "secret123",
    ) -> User:
        user = User(email=email, name=name, role=role, password_hash=hash_password(password))
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make


def _auth_headers(user: User) -> Dict[str, str]:
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)
    return {"Authorization": f"Bearer {create_access_token(user.id, role)}"}


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Build a bearer header for any user."""
    return _auth_headers


@pytest_asyncio.fixture
async def applicant(make_user) -> User:
    return await make_user()


@pytest_asyncio.fixture
async def recruiter(make_user) -> User:
    return await make_user(email="recruiter@example.com", role=UserRole.RECRUITER, name="Recruiter")


@pytest.fixture
def applicant_headers(applicant) -> Dict[str, str]:
    return _auth_headers(applicant)


@pytest.fixture
def recruiter_headers(recruiter) -> Dict[str, str]:
    return _auth_headers(recruiter)


@pytest.fixture
def seed_hewan(session: AsyncSession):
    """Factory registering ``count`` animals of a new type, labelled after the ones of its kind."""
    from careerconnect.core.database.entities import Hewan, TipeHewan
    from careerconnect.core.grouping import hewan_label
    from careerconnect.core.models.domain import JenisHewan

    async def _seed(count: int, jenis: JenisHewan = JenisHewan.SAPI, per_group: int = 50, nama: Optional[str] = None):
        tipe = TipeHewan(nama=nama or f"{jenis.value.title()} Test", jenis=jenis, harga=21_000_000, target=10)
        session.add(tipe)
        await session.flush()
        existing = await session.scalar(select(func.count()).select_from(Hewan).where(Hewan.jenis == jenis))
        animals = [
            Hewan(hewan_id=hewan_label(existing + i, per_group), tipe_id=tipe.id, jenis=jenis) for i in range(count)
        ]
        session.add_all(animals)
        await session.commit()
        return tipe, animals

    return _seed


@pytest_asyncio.fixture
async def admin(make_user, session: AsyncSession) -> User:
    """Committee member holding the ``ADMIN`` role."""
    user = await make_user(email="admin@example.com", name="Admin")
    user.set_roles_list(["MEMBER", "ADMIN"])
    await session.commit()
    return user


@pytest.fixture
def admin_headers(admin) -> Dict[str, str]:
    return _auth_headers(admin)


@pytest.fixture
def signed_in_client(client, admin_headers) -> AsyncClient:
    """The test client carrying an admin bearer token on every request."""
    client.headers.update(admin_headers)
    return client


WILAYAH = [
    {"kode": "32", "nama": "JAWA BARAT", "tipe": "provinsi"},
    {"kode": "32.75", "nama": "KOTA BEKASI", "tipe": "kabupaten"},
    {"kode": "32.75.01", "nama": "BEKASI BARAT", "tipe": "kecamatan"},
    {"kode": "32.75.01.1001", "nama": "JAKASAMPURNA", "tipe": "desa"},
    {"kode": "31", "nama": "DKI JAKARTA", "tipe": "provinsi"},
]

COUNTRIES = [
    {
        "alpha2Code": "ID",
        "name": "Indonesia",
        "callingCodes": ["62"],
        "flags": {"svg": "https://flags.test/id.svg", "png": "https://flags.test/id.png"},
    },
    {"alpha2Code": "MY", "name": "Malaysia", "callingCodes": [], "flags": {"png": "https://flags.test/my.png"}},
]


@pytest.fixture
def region_files(tmp_path, monkeypatch):
    """Point the region lookups at small JSON fixtures."""
    from careerconnect.core import regions
    from careerconnect.server.core.config import settings

    wilayah = tmp_path / "wilayah.json"
    wilayah.write_text(json.dumps(WILAYAH), encoding="utf-8")
    countries = tmp_path / "countries.json"
    countries.write_text(json.dumps(COUNTRIES), encoding="utf-8")

    monkeypatch.setattr(settings, "wilayah_data_path", str(wilayah))
    monkeypatch.setattr(settings, "countries_data_path", str(countries))
    regions.clear_cache()
    yield {"wilayah": wilayah, "countries": countries}
    regions.clear_cache()
