"""Async engine for the PQS (Participant Query Store) database.

Read-only: PQS owns the schema. Each query checks out its own pooled
connection so independent queries can run concurrently.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from config.settings import settings


def create_pqs_engine(url: str | None = None) -> AsyncEngine:
    return create_async_engine(
        url or settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
    )
