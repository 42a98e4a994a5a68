"""
Test infrastructure for the Blog API.

Strategy
--------
- SQLite in-memory via aiosqlite eliminates the need for a running Postgres
  instance in CI, keeping the suite fast and self-contained.
- StaticPool forces all async tasks to share the same in-memory database
  connection, which is required because SQLite in-memory databases are
  connection-scoped; a new connection would see an empty database.
- ``PRAGMA foreign_keys=ON`` is issued on connect so SQLite enforces the
  foreign keys (and ON DELETE CASCADE) the way Postgres does.
- The app's get_db dependency is overridden so every test-time request uses
  the test session factory rather than the production one.
- All tables are created fresh before each test and dropped after.
"""
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base, get_db
from app.main import app, create_app
from app.middleware import install_query_counter
from app.models import Article, Comment, User

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)


@event.listens_for(engine_test.sync_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override — replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------

def as_json(row: dict) -> dict:
    """Render a seeded row the way the API serialises it (datetimes as ISO 8601)."""
    return {k: v.isoformat() if isinstance(v, datetime) else v for k, v in row.items()}


# ---------------------------------------------------------------------------
# Sample rows
# ---------------------------------------------------------------------------

def make_users() -> list[dict]:
    return [
        {"id": 1, "name": "Ada", "writer": True, "admin": True, "password": "ada-pw",
         "date_created": datetime(2029, 1, 22, 16, 28, 32)},
        {"id": 2, "name": "Brook", "writer": True, "admin": False, "password": "brook-pw",
         "date_created": datetime(2029, 1, 23, 9, 0, 0)},
        {"id": 3, "name": "Cato", "writer": False, "admin": False, "password": "cato-pw",
         "date_created": datetime(2029, 1, 24, 12, 30, 0)},
    ]


def make_articles() -> list[dict]:
    return [
        {"id": 1, "title": "First post", "content": "Hello there",
         "modified": datetime(2029, 2, 1, 8, 0, 0), "authorid": 1},
        {"id": 2, "title": "old", "content": "Second body",
         "modified": datetime(2029, 2, 2, 8, 0, 0), "authorid": 2},
        {"id": 3, "title": "Third post", "content": "Third body",
         "modified": datetime(2029, 2, 3, 8, 0, 0), "authorid": 1},
    ]


def make_comments() -> list[dict]:
    return [
        {"id": 1, "content": "Nice", "articleid": 1, "commentorid": 2,
         "date_created": datetime(2029, 3, 1, 10, 0, 0)},
        {"id": 2, "content": "Agreed", "articleid": 1, "commentorid": 3,
         "date_created": datetime(2029, 3, 2, 10, 0, 0)},
        {"id": 3, "content": "Hmm", "articleid": 2, "commentorid": 1,
         "date_created": datetime(2029, 3, 3, 10, 0, 0)},
    ]


async def _insert(model, rows: list[dict]) -> None:
    async with async_session_test() as session:
        session.add_all(model(**row) for row in rows)
        await session.commit()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that need to interact with the
    database directly (e.g. seeding data, asserting ORM state).
    """
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def seed_users() -> list[dict]:
    rows = make_users()
    await _insert(User, rows)
    return rows


@pytest_asyncio.fixture
async def seed_articles(seed_users) -> list[dict]:
    rows = make_articles()
    await _insert(Article, rows)
    return rows


@pytest_asyncio.fixture
async def seed_comments(seed_articles) -> list[dict]:
    rows = make_comments()
    await _insert(Comment, rows)
    return rows


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def build_client():
    """
    Return a factory building a client around a fresh app made from the
    given Settings.  Unhandled exceptions are turned into responses rather
    than re-raised, so 500 payloads can be asserted on.
    """
    def _build(settings: Settings, overrides: dict | None = None) -> AsyncClient:
        test_app = create_app(settings)
        test_app.dependency_overrides[get_db] = override_get_db
        test_app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=test_app, raise_app_exceptions=False)
        return AsyncClient(transport=transport, base_url="http://test")

    return _build
