"""Shared fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bpm_core.data.models import Base
from bpm_core.domain.entities import Department, Role, User
from bpm_core.infrastructure.adapters.persistence import InMemoryStore, InMemoryUnitOfWork


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def store() -> InMemoryStore:
    """Committed in-memory state with one department, role, active and inactive user."""
    store = InMemoryStore()
    store.seed("departments", Department("Human Resources"))
    store.seed("roles", Role("Manager"))
    store.seed("users", User("alice", department_id=1))
    store.seed("users", User("bob", is_active=False))
    return store


@pytest.fixture
def uow(store: InMemoryStore) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(store)


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
