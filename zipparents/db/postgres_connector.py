"""PostgreSQL database connector."""
from typing import Any, Dict, List, Optional

import asyncpg

from zipparents.config import settings
from zipparents.logger import logger


class PostgresConnector:
    """Gère un pool de connexions asynchrone à PostgreSQL à partir de l'URL."""

    def __init__(self, database_url: str, max_size: int = settings.DATABASE_POOL_MAX_SIZE):
        self.database_url = database_url
        self.max_size = max_size
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self):
        """Initialise le pool de connexions."""
        self._pool = await asyncpg.create_pool(
            dsn=self.database_url,
            max_size=self.max_size,
        )
        logger.info("asyncpg pool initialised (max_size={max_size})", max_size=self.max_size)

    async def execute_query(self, sql: str, *args) -> List[Dict[str, Any]]:
        """Exécute une requête SQL avec des paramètres variables."""
        if not self._pool:
            raise ConnectionError("Connection pool not initialized. Call .connect() first.")

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(sql, *args)
            return [dict(row) for row in rows]

    async def close(self):
        """Ferme le pool de connexions proprement."""
        if self._pool:
            await self._pool.close()
            self._pool = None
