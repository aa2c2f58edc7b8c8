"""PostgreSQL database adapter.

Implements DatabasePort using PostgreSQL with asyncpg for async access.
Connections come from a lazily created asyncpg pool that lives until
close_pool() is called.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import asyncpg

from newshound.core.ports import DatabasePort

logger = logging.getLogger(__name__)


class PostgreSQLDatabase(DatabasePort):
    """Read-only PostgreSQL access for the built-in sources."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "postgres",
        user: str = "postgres",
        password: str = "",
        pool_size: int = 10,
    ):
        """Initialize PostgreSQL adapter with connection pooling.

        Args:
            host: PostgreSQL server hostname.
            port: PostgreSQL server port.
            database: Database name.
            user: Database user.
            password: Database password.
            pool_size: Maximum number of connections in the pool.
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self._pool: asyncpg.Pool | None = None
        self._pool_lock = asyncio.Lock()
        self._pool_size = pool_size

    async def _init_pool(self) -> None:
        """Create the connection pool on first use."""
        async with self._pool_lock:
            if self._pool is not None:
                return

            self._pool = await asyncpg.create_pool(
                host=self.host,
                port=self.port,
                database=self.database,
                user=self.user,
                password=self.password,
                min_size=1,
                max_size=self._pool_size,
            )
            logger.debug(
                f"Created PostgreSQL pool for {self.host}:{self.port}/{self.database}",
                extra={"pool_size": self._pool_size},
            )

    async def close_pool(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    def placeholder(self, index: int) -> str:
        """asyncpg uses numbered placeholders."""
        return f"${index}"

    def naive_utc_placeholder(self, index: int) -> str:
        """Bind as timestamptz, then take the UTC wall-clock time."""
        return f"(${index}::timestamptz AT TIME ZONE 'UTC')"

    @staticmethod
    def _adapt(value: Any) -> Any:
        """Bind datetimes as aware values; naive ones are taken as UTC.

        asyncpg encodes naive datetimes for timestamptz parameters in the
        host's local zone, so they never reach the driver.
        """
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    async def fetch_all(self, query: str, *params: Any) -> list[dict[str, Any]]:
        """Run a query and return all rows as dictionaries."""
        await self._init_pool()

        async with self._pool.acquire() as conn:
            records = await conn.fetch(query, *(self._adapt(p) for p in params))
        return [dict(record) for record in records]
