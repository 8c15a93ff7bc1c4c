"""Settings loading, logging setup and database bootstrap."""

import logging

import pytest
from sqlalchemy import inspect

from bpm_core.data.uow import create_uow
from bpm_core.domain.entities import Department
from bpm_core.infrastructure.database import create_engine, get_session_factory, init_database
from bpm_core.infrastructure.logging import configure_logging
from bpm_core.settings import DatabaseSettings, LoggingSettings, get_app_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()


def test_database_settings_defaults(monkeypatch):
    monkeypatch.delenv("BPM_DB_DATABASE_URL", raising=False)
    settings = DatabaseSettings(_env_file=None)

    assert settings.database_url.startswith("postgresql+asyncpg://")
    assert settings.pool_size == 10
    assert settings.echo_sql is False


def test_env_prefix_overrides(monkeypatch):
    monkeypatch.setenv("BPM_DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("BPM_DB_POOL_SIZE", "3")
    monkeypatch.setenv("BPM_LOG_LEVEL", "debug")

    settings = get_app_settings()

    assert settings.database.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.database.pool_size == 3
    assert settings.logging.level == "debug"
    assert get_app_settings() is settings


def test_configure_logging_sets_level():
    configure_logging(LoggingSettings(level="warning"))

    logger = logging.getLogger("bpm_core")
    assert logger.level == logging.WARNING
    assert logger.handlers


@pytest.mark.asyncio
async def test_init_database_creates_tables():
    engine = create_engine(DatabaseSettings(database_url="sqlite+aiosqlite:///:memory:"))
    try:
        await init_database(engine)

        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert {"processes", "process_steps", "process_executions"} <= set(tables)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_session_factory_round_trip(test_engine):
    factory = get_session_factory(test_engine)

    async with create_uow(factory) as uow:
        await uow.departments.insert(Department("Finance"))
        await uow.commit()

    async with create_uow(factory) as uow:
        assert [d.name for d in await uow.departments.get_all()] == ["Finance"]
