"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.
On PostgreSQL the pgvector extension is enabled first.

Dependencies: sqlalchemy, docqa.configs
System role: Database schema initialization

Usage:
    python -m docqa.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from docqa.boundary.db.base import Base
from docqa.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from docqa.boundary.db.models.document_model import DocumentModel  # noqa: F401
from docqa.boundary.db.models.chunk_model import ChunkModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Engine to use (configured engine if None)

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()

    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)

    logger.info("All tables created successfully")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
