# -*- coding: utf-8 -*-
"""
Общие фикстуры для тестирования
"""

import os

# Настройки должны быть заданы до импорта приложения
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("MINIO_ENDPOINT", "http://localhost:9000")
os.environ.setdefault("MINIO_ACCESS_KEY", "test-access-key")
os.environ.setdefault("MINIO_SECRET_KEY", "test-secret-key")
os.environ.setdefault("IS_DEMO", "false")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,  # noqa: E402
                                    create_async_engine)
from sqlalchemy.pool import StaticPool  # noqa: E402

from taskhub.clients.database_client import get_db  # noqa: E402
from taskhub.domain.models import Base  # noqa: E402
from taskhub.main import app  # noqa: E402
from taskhub.service.avatars import get_avatar_storage  # noqa: E402
from taskhub.service.users import get_demo_mode  # noqa: E402
from tests.fixtures import InMemoryAvatarStorage  # noqa: E402

# Тестовая база данных в памяти
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def test_engine():
    """Создать тестовый движок БД."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    # Создаем таблицы
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Создать тестовую сессию БД."""
    async_session_maker = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def avatar_storage():
    """Хранилище аватаров в памяти, фиксирующее записи и удаления."""
    return InMemoryAvatarStorage()


@pytest.fixture
def demo_mode():
    """Значение флага демо-режима для API тестов (меняется внутри теста)."""
    return {"enabled": False}


@pytest_asyncio.fixture
async def async_client(test_session, avatar_storage, demo_mode):
    """Создать асинхронный тестовый клиент для API."""

    def override_get_db():
        return test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_avatar_storage] = lambda: avatar_storage
    app.dependency_overrides[get_demo_mode] = lambda: demo_mode["enabled"]
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client
    app.dependency_overrides.clear()
