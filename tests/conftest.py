"""
Storefront Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite) with the
       full schema; the FastAPI app is pointed at it through a dependency
       override, so HTTP tests and repository tests see the same data.

Fixture Hierarchy (all function-scoped):
    ├── engine:           in-memory async engine with tables created
    ├── session_factory:  sessionmaker bound to that engine
    ├── db_session:       one session for seeding/asserting
    ├── mock_db_session:  AsyncMock session for store-failure tests
    ├── users:            user_one, user_two (role user) and admin, in that order
    ├── tokens:           bearer headers for each seeded user
    └── test_client:      httpx AsyncClient over ASGITransport
"""

import os

# Must be set before storefront.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-real-0123456789abcdef"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, AsyncGenerator, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import storefront.models  # noqa: E402,F401
from storefront.database import Base, get_db_session  # noqa: E402
from storefront.repositories import ProductRepository, UserRepository  # noqa: E402
from storefront.security import create_access_token  # noqa: E402

PASSWORD = "password1"


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    # StaticPool: one connection, so every session sees the same memory DB
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

def product_data(**overrides: Any) -> Dict[str, Any]:
    data = {
        "name": "Espresso Beans",
        "avatar_url": "https://cdn.shopmail.com/img/espresso.png",
        "rating": 4,
        "quantity": 120,
        "price": 18.5,
        "disabled": False,
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_product_data():
    return product_data


@pytest.fixture
def sample_product_data() -> Dict[str, Any]:
    return product_data()


@pytest_asyncio.fixture
async def products(db_session):
    """Three stored products: Foo, Bar, Baz (inserted in that order)."""
    repository = ProductRepository(db_session)
    return [
        await repository.create(product_data(name="Foo", rating=3, price=30.0)),
        await repository.create(product_data(name="Bar", rating=5, price=10.0, disabled=True)),
        await repository.create(product_data(name="Baz", rating=1, price=20.0)),
    ]


@pytest_asyncio.fixture
async def users(db_session):
    repository = UserRepository(db_session)
    return {
        "user_one": await repository.create(
            {"name": "Alice Moreau", "email": "alice@shopmail.com", "password": PASSWORD}
        ),
        "user_two": await repository.create(
            {"name": "Bruno Silva", "email": "bruno@shopmail.com", "password": PASSWORD}
        ),
        "admin": await repository.create(
            {"name": "Carla Admin", "email": "carla@shopmail.com", "password": PASSWORD, "role": "admin"}
        ),
    }


@pytest.fixture
def tokens(users) -> Dict[str, Dict[str, str]]:
    return {
        key: {"Authorization": f"Bearer {create_access_token(user.id)}"}
        for key, user in users.items()
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app, with sessions from the test engine.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from storefront.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
