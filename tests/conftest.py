"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Cheap bcrypt and a known signing secret in tests
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_JWT_SECRET"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.link_builder import LinkBuilder
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import ADMIN_ROLE, TokenUser
from infrastructure.database.models import Base

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_BASE_URL = "http://test.local"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def link_builder() -> LinkBuilder:
    return LinkBuilder(TEST_BASE_URL)


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def admin_operator() -> TokenUser:
    return TokenUser(subject="ops", role=ADMIN_ROLE)


@pytest.fixture
def admin_headers(auth_provider: JWTAuthProvider, admin_operator: TokenUser) -> dict[str, str]:
    """Authorization headers carrying a valid admin token."""
    return {"Authorization": f"Bearer {auth_provider.create_token(admin_operator)}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the real app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    link_builder: LinkBuilder,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses a fresh in-memory SQLite database
    - Overrides the auth provider so test tokens validate
    - Builds every service on a UoW factory bound to the test session
    - Roots edit/scan links at TEST_BASE_URL
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_admin_service,
        get_credential_service,
        get_link_builder,
        get_profile_service,
        get_public_profile_service,
        get_qr_service,
    )
    from domain.entities.qr import QRRenderOptions
    from domain.services.admin_service import AdminService
    from domain.services.credential_service import CredentialService
    from domain.services.profile_service import ProfileService
    from domain.services.public_profile_service import PublicProfileService
    from domain.services.qr_service import QRCodeService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from infrastructure.qr.qrcode_renderer import QRCodeRenderer
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    credentials = CredentialService(test_uow_factory)
    profiles = ProfileService(test_uow_factory, credential_service=credentials)
    qr_codes = QRCodeService(
        test_uow_factory,
        links=link_builder,
        renderer=QRCodeRenderer(),
        default_options=QRRenderOptions(box_size=2, border=1),
    )
    public = PublicProfileService(test_uow_factory, links=link_builder)
    admin = AdminService(profiles, qr_codes)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_link_builder] = lambda: link_builder
    app.dependency_overrides[get_credential_service] = lambda: credentials
    app.dependency_overrides[get_profile_service] = lambda: profiles
    app.dependency_overrides[get_qr_service] = lambda: qr_codes
    app.dependency_overrides[get_public_profile_service] = lambda: public
    app.dependency_overrides[get_admin_service] = lambda: admin

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def create_user(api_client: AsyncClient, admin_headers: dict[str, str]):
    """Provision a user through the admin API and return the response payload."""

    async def _create(username: str = "alice", password: str = "secret1") -> dict:
        response = await api_client.post(
            "/api/v1/admin/users",
            json={"username": username, "password": password},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
