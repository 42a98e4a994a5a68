"""
Database plumbing for the users, articles and comments tables.

One async engine per process; each request gets its own AsyncSession via
``get_db``, which commits when the handler returns and rolls back when it
raises.  Services only flush, so a create, update or delete is visible to
later requests once ``get_db`` has committed.
"""
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.middleware import install_query_counter

# Tests swap in their own engine by overriding get_db (see tests/conftest.py).
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# Feed the per-request SQL statement count into the access log.
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
