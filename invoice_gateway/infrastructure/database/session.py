"""Database client wrapping a pooled SQLAlchemy async engine"""

from typing import Any, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql import Executable

from invoice_gateway.config import Settings


class Database:
    """
    Explicitly constructed handle on the connection pool.

    Created by the process entry point and passed to every query function.
    Each call checks a connection out of the pool for a single round trip, so
    concurrent calls run on separate connections.
    """

    def __init__(self, url: str, **engine_options: Any):
        self.engine: AsyncEngine = create_async_engine(url, **engine_options)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a pooled client: pre-ping connections, recycle after an hour"""
        return cls(
            settings.database_url,
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle_seconds,
        )

    async def fetch_all(self, statement: Executable) -> List[Mapping[str, Any]]:
        """Execute a statement and return every row as a column mapping"""
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            return list(result.mappings().all())

    async def fetch_one(self, statement: Executable) -> Optional[Mapping[str, Any]]:
        """Execute a statement and return the first row, or None"""
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            return result.mappings().first()

    async def dispose(self) -> None:
        """Close all pooled connections"""
        await self.engine.dispose()
