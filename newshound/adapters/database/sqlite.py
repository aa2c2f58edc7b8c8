"""SQLite database adapter.

Implements DatabasePort using SQLite with aiosqlite for async access.
Keeps a small pool of connections that is drained by close_pool().
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from newshound.core.ports import DatabasePort

logger = logging.getLogger(__name__)


class SQLiteDatabase(DatabasePort):
    """Read-only SQLite access for the built-in sources."""

    def __init__(self, db_path: str, pool_size: int = 5):
        """Initialize SQLite adapter with connection pooling.

        Args:
            db_path: Path to the application's SQLite database file.
            pool_size: Number of connections to keep in the pool.
        """
        self.db_path = Path(db_path)
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._pool_size = pool_size

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a connection from the pool or open a new one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        conn = await aiosqlite.connect(str(self.db_path))
        conn.row_factory = aiosqlite.Row
        return conn

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Return a connection to the pool."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close_pool(self) -> None:
        """Close all pooled connections."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    def placeholder(self, index: int) -> str:
        """SQLite uses qmark placeholders."""
        return "?"

    @classmethod
    def _adapt(cls, value: Any) -> Any:
        """Convert datetimes to the naive UTC text stored in SQLite columns."""
        if isinstance(value, datetime):
            return cls.to_utc_naive(value).isoformat(sep=" ")
        return value

    async def fetch_all(self, query: str, *params: Any) -> list[dict[str, Any]]:
        """Run a query and return all rows as dictionaries."""
        adapted = tuple(self._adapt(p) for p in params)
        conn = await self._get_connection()
        try:
            cursor = await conn.execute(query, adapted)
            rows = await cursor.fetchall()
            await cursor.close()
        finally:
            await self._return_connection(conn)
        return [dict(row) for row in rows]
