"""Pytest configuration and fixtures for Grain Broker tests.

Every test gets its own in-memory SQLite database with foreign keys
enabled, so cascades and integrity failures behave as on PostgreSQL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import uuid
from datetime import timedelta
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import grainbroker.models  # noqa: F401  register tables on Base.metadata
from grainbroker.database import Base, build_engine
from grainbroker.main import app
from grainbroker.models import Customer, Order, Supplier
from grainbroker.persistence import GrainBrokerContext, get_context

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ── Test Database Setup ──────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database with the full schema."""
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_context(session_factory) -> AsyncGenerator[GrainBrokerContext, None]:
    """Persistence context for service-level tests."""
    async with session_factory() as session:
        yield GrainBrokerContext(session)


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Test client whose requests each get a context on the test database."""

    async def override_get_context():
        async with session_factory() as session:
            yield GrainBrokerContext(session)

    app.dependency_overrides[get_context] = override_get_context

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Data Fixtures ───────────────────────────────────────────

@pytest_asyncio.fixture
async def customer(session_factory) -> Customer:
    """A committed customer."""
    async with session_factory() as session:
        customer = Customer(id=uuid.uuid4(), location="Chicago, IL")
        session.add(customer)
        await session.commit()
        return customer


@pytest_asyncio.fixture
async def supplier(session_factory) -> Supplier:
    """A committed supplier."""
    async with session_factory() as session:
        supplier = Supplier(id=uuid.uuid4(), location="Des Moines, IA")
        session.add(supplier)
        await session.commit()
        return supplier


def _make_order(customer_id: uuid.UUID, supplier_id: uuid.UUID, /, **overrides) -> Order:
    fields = {
        "id": uuid.uuid4(),
        "order_date": timedelta(hours=10, minutes=30),
        "purchase_order": uuid.uuid4(),
        "customer_id": customer_id,
        "supplier_id": supplier_id,
        "order_req_amt_ton": 100,
        "supplied_amt_ton": 95,
        "cost_of_delivery": Decimal("5000.00"),
    }
    fields.update(overrides)
    return Order(**fields)


def _order_payload(customer_id, supplier_id, **overrides) -> dict:
    payload = {
        "orderDate": "10:30:00",
        "purchaseOrder": str(uuid.uuid4()),
        "customerId": str(customer_id),
        "supplierId": str(supplier_id),
        "orderReqAmtTon": 100,
        "suppliedAmtTon": 95,
        "costOfDelivery": 5000.00,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_order():
    """Build an unsaved Order with valid defaults; keyword overrides win."""
    return _make_order


@pytest.fixture
def order_payload():
    """Build a camelCase Order request body with valid defaults."""
    return _order_payload


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Service and persistence tests")
    config.addinivalue_line("markers", "api: HTTP endpoint tests")
