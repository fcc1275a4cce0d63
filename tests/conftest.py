"""Shared fixtures: an in-memory SQLite database behind the real repositories."""
from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    create_schema,
)

SQLITE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture()
async def session() -> AsyncGenerator[AsyncSession, None]:
    engine = build_engine(SQLITE_URL)
    await create_schema(engine)
    session_factory = build_session_factory(engine)
    async with session_factory() as db_session:
        yield db_session
    await engine.dispose()
