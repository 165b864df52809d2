"""Pytest configuration for all tests."""

import os

os.environ.setdefault("WRAPPEDUP_ENVIRONMENT", "testing")
os.environ.setdefault("WRAPPEDUP_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("WRAPPEDUP_LOG_FORMAT", "console")

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from wrappedup.domain.entities.user import Email, User, Username  # noqa: E402
from wrappedup.infrastructure.persistence import models  # noqa: E402, F401
from wrappedup.infrastructure.persistence.database import Base  # noqa: E402


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
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


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user():
    """Factory for domain users with a placeholder password hash."""

    def _make_user(
        username: str = "reader",
        email: str = "reader@example.com",
        password_hash: str = "$argon2id$placeholder",
        enabled: bool = True,
    ) -> User:
        user = User.create_new(Username(username), Email(email), password_hash)
        if not enabled:
            user.disable()
        return user

    return _make_user
