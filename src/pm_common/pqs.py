"""PqsClient — async access to the Participant Query Store.

PQS materializes active ledger contracts into Postgres and exposes them through
``active('<Module>:<Template>')`` table functions with a JSONB ``payload``
column. This client only runs parameterized read queries; it knows nothing
about templates or payload shapes.

Every call checks out its own connection, so callers may run several queries
concurrently. Each call is bounded by PQS_QUERY_TIMEOUT_SECONDS.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Row, TextClause, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from config.settings import settings
from src.pm_common.errors import LedgerStoreTimeoutError, LedgerStoreUnavailableError

logger = logging.getLogger(__name__)

_PING_SQL = text("SELECT 1")


class PqsClient:
    def __init__(self, engine: AsyncEngine, timeout_seconds: float | None = None) -> None:
        self._engine = engine
        self._timeout = (
            timeout_seconds if timeout_seconds is not None
            else settings.PQS_QUERY_TIMEOUT_SECONDS
        )

    async def fetch_all(
        self, sql: TextClause, params: dict[str, Any], operation: str
    ) -> Sequence[Row[Any]]:
        """Run one query and return all rows.

        Raises:
            LedgerStoreTimeoutError: query did not finish within the timeout.
            LedgerStoreUnavailableError: connection or driver failure.
        """
        try:
            async with asyncio.timeout(self._timeout):
                async with self._engine.connect() as conn:
                    result = await conn.execute(sql, params)
                    return result.fetchall()
        except TimeoutError:
            logger.warning("PQS query timed out: op=%s timeout=%ss", operation, self._timeout)
            raise LedgerStoreTimeoutError(operation, self._timeout) from None
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("PQS query failed: op=%s error=%s", operation, type(exc).__name__)
            raise LedgerStoreUnavailableError(operation) from exc

    async def ping(self) -> None:
        await self.fetch_all(_PING_SQL, {}, "ping")

    async def dispose(self) -> None:
        await self._engine.dispose()
