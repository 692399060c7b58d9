"""PostgreSQL access over an asyncpg pool."""

from __future__ import annotations

import asyncio
import ssl
from pathlib import Path
from typing import Any, Sequence

import asyncpg

from agentic_search.core.config import PostgresConfig, parse_connection_string
from agentic_search.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_POOL_MIN = 1
DEFAULT_POOL_MAX = 10


class PostgresDatabase:
    """Thin wrapper around an asyncpg pool with TLS verification against a CA file."""

    def __init__(
        self,
        connection: str,
        ssl_ca: Path,
        min_size: int = DEFAULT_POOL_MIN,
        max_size: int = DEFAULT_POOL_MAX,
        command_timeout: float | None = 60.0,
    ) -> None:
        self._params = parse_connection_string(connection)
        self.ssl_ca = ssl_ca.expanduser()
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: PostgresConfig, **kwargs: Any) -> "PostgresDatabase":
        return cls(config.connection, config.ssl_ca, **kwargs)

    @property
    def database(self) -> str:
        return self._params["database"]

    async def connect(self) -> asyncpg.Pool:
        if self._pool is None:
            async with self._lock:
                if self._pool is None:
                    logger.info(
                        "Creating PostgreSQL connection pool for %s:%s/%s",
                        self._params["host"],
                        self._params["port"],
                        self.database,
                    )
                    self._pool = await asyncpg.create_pool(
                        host=self._params["host"],
                        port=self._params["port"],
                        user=self._params["user"],
                        password=self._params["password"],
                        database=self.database,
                        ssl=self._ssl_context(),
                        min_size=self.min_size,
                        max_size=self.max_size,
                        command_timeout=self.command_timeout,
                    )
        return self._pool

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def fetch(self, sql: str, params: Sequence[Any] | None = None) -> list[asyncpg.Record]:
        pool = await self.connect()
        async with pool.acquire() as conn:
            return await conn.fetch(sql, *(params or []))

    def _ssl_context(self) -> ssl.SSLContext:
        return ssl.create_default_context(cafile=str(self.ssl_ca))


__all__ = ["PostgresDatabase"]
