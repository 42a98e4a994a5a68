"""
Generic table service — the five statements every resource needs.

Design notes
------------
- A service instance is bound to one ``AsyncSession`` at construction
  time; the router obtains it through a FastAPI dependency, so tests can
  substitute a double without touching module state.
- Every statement is built from SQLAlchemy expressions, so all values are
  sent as bound parameters.
- Service methods flush but do not commit; the transaction boundary is
  owned by the ``get_db`` dependency in the router layer.
- Rows are returned as plain dicts keyed by column name.
"""
import logging
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Ids are 32-bit INTEGER primary keys; nothing outside this range can exist.
MIN_ID = 1
MAX_ID = 2_147_483_647


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def row_to_dict(row: Base) -> dict[str, Any]:
    """Serialise an ORM instance to a plain dict of its column values."""
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TableService(Generic[ModelT]):
    model: ClassVar[type[Base]]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_all(self) -> list[dict]:
        """Return every row ordered by primary key (ascending)."""
        q = select(self.model).order_by(self.model.id.asc())
        result = await self.db.execute(q)
        return [row_to_dict(r) for r in result.scalars().all()]

    async def get_by_id(self, row_id: int) -> dict | None:
        """Return the row for *row_id*, or None when it does not exist."""
        if not MIN_ID <= row_id <= MAX_ID:
            return None
        q = select(self.model).where(self.model.id == row_id)
        result = await self.db.execute(q)
        row = result.scalar_one_or_none()
        return row_to_dict(row) if row is not None else None

    async def insert(self, fields: dict) -> dict:
        """
        Insert a row built from *fields* and return it as stored.

        The refresh picks up the generated id and any server-side
        defaults such as the creation timestamp.
        """
        row = self.model(**fields)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        logger.debug("Inserted %s id=%s", self.model.__tablename__, row.id)
        return row_to_dict(row)

    async def update(self, row_id: int, fields: dict) -> None:
        """Set exactly the columns in *fields* on the row for *row_id*."""
        q = update(self.model).where(self.model.id == row_id).values(**fields)
        await self.db.execute(q)
        await self.db.flush()
        logger.debug(
            "Updated %s id=%s fields=%s", self.model.__tablename__, row_id, sorted(fields)
        )

    async def delete(self, row_id: int) -> None:
        """Delete the row for *row_id*."""
        q = delete(self.model).where(self.model.id == row_id)
        await self.db.execute(q)
        await self.db.flush()
        logger.debug("Deleted %s id=%s", self.model.__tablename__, row_id)
