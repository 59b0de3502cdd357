"""
Pytest configuration for villa tests
"""
import os
import sys
from pathlib import Path

import pytest

# Ensure villa is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Must be set before villa.core.config is imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEASONAL_PRICING_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402


def _make_engine(tmp_path):
    return create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'villa-test.db'}")


@pytest.fixture
async def session_factory(tmp_path):
    """Fresh SQLite file with all tables, one per test"""
    from villa.database import Base
    import villa.models  # noqa: F401

    engine = _make_engine(tmp_path)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def client(tmp_path, monkeypatch):
    """TestClient bound to a throwaway database; startup creates the tables"""
    from fastapi.testclient import TestClient

    from villa import database
    from villa.main import app

    engine = _make_engine(tmp_path)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(
        database,
        "AsyncSessionLocal",
        async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession),
    )

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_booking_payload():
    """Request body for POST /bookings"""
    return {
        "guestName": "Test Guest",
        "email": "Guest@Example.com",
        "phone": "+1-555-0100",
        "checkIn": "2025-09-15",
        "checkOut": "2025-09-18",
        "guests": 2,
        "specialRequests": "Late arrival",
    }
