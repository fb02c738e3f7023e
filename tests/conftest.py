"""
Test configuration and fixtures for the real estate marketplace API.
Provides settings, database and service fixtures, test data factories, and image helpers.
"""

import io
import uuid
import pytest
from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator, Dict, Any, Optional
from fastapi import UploadFile
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import Headers

from app.config import Settings
from app.context import ServiceContext
from app.database import Database
from app.main import create_app
from app.models.admin import Admin
from app.models.property import Property
from app.repositories.property import PropertyRepository
from app.services.auth import AuthService
from app.services.property import PropertyService
from app.services.transaction import TransactionService


TEST_PASSWORD = "testpassword123"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Isolated settings: a file-backed SQLite database and upload directory per test."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        jwt_secret_key="test-secret-key-for-the-marketplace-suite",
        bcrypt_rounds=4,
        max_file_size=64 * 1024,
    )


@pytest.fixture
def context(settings: Settings) -> ServiceContext:
    return ServiceContext.from_settings(settings)


@pytest.fixture
async def database(context: ServiceContext) -> AsyncGenerator[Database, None]:
    """Create the schema for a test and dispose of the engine afterwards."""
    await context.database.create_tables()
    yield context.database
    await context.database.drop_tables()
    await context.database.close()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.session() as session:
        yield session


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession, context: ServiceContext) -> AuthService:
    return AuthService(db_session, context.hasher, context.tokens)


@pytest.fixture
def property_service(db_session: AsyncSession, context: ServiceContext) -> PropertyService:
    return PropertyService(db_session, context.assets)


@pytest.fixture
def transaction_service(db_session: AsyncSession) -> TransactionService:
    return TransactionService(db_session)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Test client running the full application lifespan against the test database."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


# Image helpers
def make_image_bytes(image_format: str = "PNG", size=(8, 8), color: str = "red") -> bytes:
    """Encode a small solid-colour image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=image_format)
    return buffer.getvalue()


def make_upload(
    content: Optional[bytes] = None,
    filename: str = "house.png",
    content_type: str = "image/png"
) -> UploadFile:
    """Build an UploadFile the way FastAPI hands one to a route."""
    if content is None:
        content = make_image_bytes()
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


# Test data factories
class AdminFactory:
    """Factory for creating test administrators."""

    @staticmethod
    def create_admin_data(
        name: str = "Test Admin",
        email: Optional[str] = None,
        password: str = TEST_PASSWORD
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "email": email or f"admin{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_admin(auth_service: AuthService, **overrides) -> Admin:
        """Register a test administrator through the service."""
        data = AdminFactory.create_admin_data(**overrides)
        return await auth_service.register(data["name"], data["email"], data["password"])


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_fields(
        title: str = "Test Property",
        property_type: Optional[str] = "villa",
        price: str = "1500.00",
        eth_price: str = "0.75",
        address: str = "Jl. Test 1, Jakarta",
        description: str = "A beautiful test property"
    ) -> Dict[str, Any]:
        """Fields as submitted by the admin form."""
        return {
            "title": title,
            "type": property_type,
            "price": price,
            "ethPrice": eth_price,
            "address": address,
            "description": description,
        }

    @staticmethod
    async def create_property(
        db_session: AsyncSession,
        title: str = "Test Property",
        price: Decimal = Decimal("1500.00"),
        eth_price: Decimal = Decimal("0.75"),
        image: Optional[str] = None
    ) -> Property:
        """Insert a property directly through the repository."""
        return await PropertyRepository(db_session).create({
            "title": title,
            "property_type": "house",
            "price": price,
            "eth_price": eth_price,
            "address": "Jl. Test 1, Jakarta",
            "description": "A beautiful test property",
            "image": image,
        })


# Common test fixtures
@pytest.fixture
async def test_admin(auth_service: AuthService) -> Admin:
    """Create a test administrator."""
    return await AdminFactory.create_admin(auth_service, name="Alice", email="alice@example.com")


@pytest.fixture
async def test_property(db_session: AsyncSession) -> Property:
    """Create a test property."""
    return await PropertyFactory.create_property(db_session)


# API helpers
def register_and_login(client: TestClient, email: str = "alice@example.com", password: str = TEST_PASSWORD) -> str:
    """Register an administrator over HTTP and return a bearer token."""
    client.post("/api/register", json={"name": "Alice", "email": email, "password": password})
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def auth_headers(client: TestClient) -> Dict[str, str]:
    """Authorization headers for a freshly registered administrator."""
    return {"Authorization": f"Bearer {register_and_login(client)}"}
