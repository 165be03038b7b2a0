"""
HeroDex Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── mock_db_session: AsyncMock session for pure unit tests
    ├── engine: in-memory SQLite (aiosqlite) with every table created
    ├── session_factory / db_session: sessions bound to that engine
    ├── heroes: a small catalog with known stats (dict name → Hero)
    ├── many_heroes: 25 generated heroes for pagination scenarios
    └── test_client: HTTPX AsyncClient wired to a fresh app whose
        get_db_session dependency uses the in-memory engine
"""

import os

# Override settings BEFORE any herodex import; herodex.config builds its
# singleton at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

from typing import AsyncGenerator, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from herodex.database import Base, get_db_session
from herodex.models import Comment, Hero  # noqa: F401  (registers tables)


# name, gender, race, (intelligence, strength, speed, durability, power, combat)
HERO_ROWS = [
    ("Batman", "Male", "Human", (100, 26, 27, 50, 47, 100)),
    ("Black Widow", "Female", "Human", (75, 13, 33, 30, 36, 100)),
    ("Flash", "Male", "Human", (63, 10, 100, 50, 68, 32)),
    ("Quicksilver", "Male", "Mutant", (63, 28, 100, 55, 62, 56)),
    ("Superman", "Male", "Kryptonian", (94, 100, 100, 100, 100, 85)),
    ("Wonder Woman", "Female", "Amazon", (88, 100, 79, 100, 100, 100)),
    ("flamebird", "Female", None, (38, 18, 33, 30, 36, 56)),
]


def make_hero(name, gender=None, race=None, stats=(50, 50, 50, 50, 50, 50)) -> Hero:
    intelligence, strength, speed, durability, power, combat = stats
    return Hero(
        name=name,
        gender=gender,
        race=race,
        intelligence=intelligence,
        strength=strength,
        speed=speed,
        durability=durability,
        power=power,
        combat=combat,
    )


# ══════════════════════════════════════════════════════════════════════════
# Mock Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.get.return_value = None
        await comment_service.create_comment(mock_db_session, str(uuid4()), "hi")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite engine with the full schema.

    StaticPool keeps a single connection, so every session of the test
    sees the same in-memory database.
    """
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


@pytest_asyncio.fixture
async def heroes(session_factory) -> Dict[str, Hero]:
    """The HERO_ROWS catalog, committed. Returns name → Hero."""
    rows = [make_hero(name, gender, race, stats) for name, gender, race, stats in HERO_ROWS]
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()
    return {hero.name: hero for hero in rows}


@pytest_asyncio.fixture
async def many_heroes(session_factory) -> List[Hero]:
    """25 heroes named 'Hero 01' … 'Hero 25'."""
    rows = [make_hero(f"Hero {i:02d}") for i in range(1, 26)]
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()
    return rows


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(session_factory):
    """A fresh application whose sessions come from the in-memory engine."""
    from herodex.main import create_app

    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    raise_app_exceptions=False: Starlette re-raises unhandled errors after
    the fallback handler has sent its 500, and tests want the response.

    Usage:
        async def test_heroes(test_client):
            response = await test_client.get("/heroes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
