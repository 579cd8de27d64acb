"""
Base service layer: the repository contract and its asyncpg implementation
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Type, TypeVar

import asyncpg
from pydantic import BaseModel

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)

# Identity columns are BIGINT
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class Repository(ABC, Generic[EntityT]):
    """Storage for one entity type, keyed by a generated integer identity"""

    @abstractmethod
    async def save(self, entity: EntityT) -> EntityT:
        """Insert when ``entity.id`` is unset, otherwise overwrite the row with that id"""

    @abstractmethod
    async def update(self, entity: EntityT) -> Optional[EntityT]:
        """Overwrite the existing row with ``entity.id``; ``None`` when no such row is stored"""

    @abstractmethod
    async def find_by_id(self, entity_id: int) -> Optional[EntityT]:
        """Return the stored entity or ``None``"""

    @abstractmethod
    async def find_all(self) -> List[EntityT]:
        """Return every stored entity"""

    @abstractmethod
    async def exists_by_id(self, entity_id: int) -> bool:
        """Check whether a row with this id is stored"""

    @abstractmethod
    async def delete_by_id(self, entity_id: int) -> bool:
        """Remove the row; returns False when there was nothing to remove"""

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every row and return how many were removed"""


class BaseService(Repository[EntityT]):
    """Repository over a single PostgreSQL table.

    Subclasses set ``table_name`` and ``model``. The model supplies the
    row mapping through ``from_record`` / ``to_record``; the identity
    column is always ``id``, a BIGINT.
    """

    table_name: str = ""
    model: Type[EntityT]

    def __init__(self, pool: asyncpg.Pool):
        if not self.table_name:
            raise ValueError(f"{type(self).__name__} does not define table_name")
        self.pool = pool
        logger.info(f"BaseService initialized for table: {self.table_name}")

    async def save(self, entity: EntityT) -> EntityT:
        record = entity.to_record()
        columns = list(record.keys())
        params: List[Any] = list(record.values())

        if entity.id is None:
            placeholders = [f"${i}" for i in range(1, len(columns) + 1)]
            query = f"""
                INSERT INTO {self.table_name} ({', '.join(columns)})
                VALUES ({', '.join(placeholders)})
                RETURNING *
            """
            row = await self._fetchrow(query, *params)
        else:
            if not self._id_in_range(entity.id):
                raise ValueError(f"id {entity.id} is outside the BIGINT range")
            placeholders = [f"${i}" for i in range(1, len(columns) + 2)]
            updates = ", ".join(f"{column} = EXCLUDED.{column}" for column in columns)
            query = f"""
                INSERT INTO {self.table_name} (id, {', '.join(columns)})
                VALUES ({', '.join(placeholders)})
                ON CONFLICT (id) DO UPDATE SET {updates}
                RETURNING *
            """
            row = await self._upsert(query, entity.id, *params)

        if not row:
            raise RuntimeError(f"Save on {self.table_name} returned no row")
        return self.model.from_record(row)

    async def update(self, entity: EntityT) -> Optional[EntityT]:
        if not self._id_in_range(entity.id):
            return None
        record = entity.to_record()
        assignments = ", ".join(
            f"{column} = ${i}" for i, column in enumerate(record.keys(), start=2)
        )
        query = f"UPDATE {self.table_name} SET {assignments} WHERE id = $1 RETURNING *"
        row = await self._fetchrow(query, entity.id, *record.values())
        return self.model.from_record(row) if row else None

    async def find_by_id(self, entity_id: int) -> Optional[EntityT]:
        if not self._id_in_range(entity_id):
            return None
        row = await self._fetchrow(f"SELECT * FROM {self.table_name} WHERE id = $1", entity_id)
        return self.model.from_record(row) if row else None

    async def find_all(self) -> List[EntityT]:
        rows = await self._fetch(f"SELECT * FROM {self.table_name} ORDER BY id")
        return [self.model.from_record(row) for row in rows]

    async def exists_by_id(self, entity_id: int) -> bool:
        if not self._id_in_range(entity_id):
            return False
        return bool(await self._fetchval(
            f"SELECT EXISTS (SELECT 1 FROM {self.table_name} WHERE id = $1)", entity_id
        ))

    async def delete_by_id(self, entity_id: int) -> bool:
        if not self._id_in_range(entity_id):
            return False
        status = await self._execute(f"DELETE FROM {self.table_name} WHERE id = $1", entity_id)
        return self._affected_rows(status) > 0

    async def delete_all(self) -> int:
        status = await self._execute(f"DELETE FROM {self.table_name}")
        return self._affected_rows(status)

    @staticmethod
    def _id_in_range(entity_id: Optional[int]) -> bool:
        # No BIGINT row can hold an id outside this range
        return entity_id is not None and MIN_ID <= entity_id <= MAX_ID

    @staticmethod
    def _affected_rows(status: str) -> int:
        # asyncpg returns the command tag, e.g. "DELETE 3"
        return int(status.split()[-1]) if status else 0

    # Direct SQL execution helpers

    async def _upsert(self, query: str, *params: Any) -> Optional[asyncpg.Record]:
        """Insert with an explicit id, then move the identity sequence past the largest id"""
        sequence = f"pg_get_serial_sequence('{self.table_name}', 'id')"
        # Only ever moves forward; other sessions may hold values past MAX(id)
        sync_sequence = f"""
            SELECT setval({sequence}, GREATEST(
                (SELECT MAX(id) FROM {self.table_name}),
                COALESCE(pg_sequence_last_value({sequence}::regclass), 1)
            ))
        """
        logger.info(f"Executing UPSERT: {query.strip()}")
        logger.info(f"Parameters: {list(params)}")
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                try:
                    row = await conn.fetchrow(query, *params)
                    await conn.execute(sync_sequence)
                    return row
                except asyncpg.PostgresError as e:
                    logger.error(f"Database error on {self.table_name}: {e}")
                    raise RuntimeError(f"Database query failed: {str(e)}") from e

    async def _fetch(self, query: str, *params: Any) -> List[asyncpg.Record]:
        logger.info(f"Executing query: {query.strip()}")
        async with self.pool.acquire() as conn:
            try:
                return await conn.fetch(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error on {self.table_name}: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}") from e

    async def _fetchrow(self, query: str, *params: Any) -> Optional[asyncpg.Record]:
        logger.info(f"Executing query: {query.strip()}")
        logger.info(f"Parameters: {list(params)}")
        async with self.pool.acquire() as conn:
            try:
                return await conn.fetchrow(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error on {self.table_name}: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}") from e

    async def _fetchval(self, query: str, *params: Any) -> Any:
        logger.info(f"Executing query: {query.strip()}")
        logger.info(f"Parameters: {list(params)}")
        async with self.pool.acquire() as conn:
            try:
                return await conn.fetchval(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error on {self.table_name}: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}") from e

    async def _execute(self, query: str, *params: Any) -> str:
        logger.info(f"Executing: {query}")
        logger.info(f"Parameters: {list(params)}")
        async with self.pool.acquire() as conn:
            try:
                return await conn.execute(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error on {self.table_name}: {e}")
                raise RuntimeError(f"Database statement failed: {str(e)}") from e
