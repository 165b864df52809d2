"""Fixtures for API tests."""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wrappedup.infrastructure.api.app import create_app
from wrappedup.infrastructure.persistence.database import get_db_session


@pytest_asyncio.fixture
async def app(session_maker):
    """Application wired to the in-memory test database."""
    application = create_app()

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
