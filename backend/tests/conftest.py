"""
Test Configuration — Fixtures for async DB, test client, and mock data.

Each test gets a fresh in-memory SQLite database. Every request opens its own
session on it, the same way the API does against Postgres.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from api.deps import get_db
from api.main import app
from core.security import hash_password
from db.models import Driver, Route, Shipment, User, Vehicle, utcnow
from db.session import Database

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

XLSX_BYTES = b"PK\x03\x04 fake workbook bytes"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
async def test_database():
    """Create a test database and build all tables."""
    database = Database(TEST_DATABASE_URL)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def test_db(test_database):
    """A session for arranging and inspecting rows directly."""
    async with test_database.sessionmaker() as session:
        yield session


@pytest.fixture
async def client(test_database):
    """Create an async test client with dependency overrides."""

    async def override_get_db():
        async with test_database.sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def xlsx_bytes():
    return XLSX_BYTES


@pytest.fixture
def xlsx_upload():
    """Build a multipart ``files`` mapping for the spreadsheet field."""

    def _make(filename: str = "manifest.xlsx", content: bytes = XLSX_BYTES):
        return {"file_data": (filename, content, XLSX_MIME)}

    return _make


@pytest.fixture
async def seeded_db(test_db):
    """Seed the test DB with one row of each entity."""
    user = User(
        email="coordinator@example.com",
        password=hash_password("coordinator123"),
        role="coordinator",
        full_name="Coordinator User",
    )
    driver = Driver(name="Maria Santos", license_number="D67890", vehicle_assigned="Van 2", status="Active")
    vehicle = Vehicle(id="TRK-001", type="Truck", plate_number="ABC-1234", status="Active")
    parked = Vehicle(id="PCK-003", type="Pickup", plate_number="LMN-9012", status="Maintenance")
    route = Route(id="RT-001", address="123 Harbor Road", drop_point="Warehouse A")

    stamp = utcnow()
    shipment = Shipment(
        name="March manifest",
        description="Inbound containers",
        status="incomplete",
        created_at=stamp,
        updated_at=stamp,
        created_by="Jane",
        updated_by="Jane",
        file_name="march.xlsx",
        file_data=XLSX_BYTES,
    )
    test_db.add_all([user, driver, vehicle, parked, route, shipment])
    await test_db.commit()

    return {
        "user": user,
        "driver": driver,
        "vehicle": vehicle,
        "parked_vehicle": parked,
        "route": route,
        "shipment": shipment,
    }
