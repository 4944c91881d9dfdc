"""
Database configuration and session management.

This module contains the SQLAlchemy engine and the pooled async session
factory. The dataset is maintained by an external ingestion process; this
service only reads from it.
"""

from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from airsense.config import settings

database_url = settings.SQLALCHEMY_DATABASE_URI
if database_url.startswith("postgresql://"):
    database_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

if database_url.startswith("sqlite"):
    engine_options = {}
else:
    engine_options = {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }

# Create async engine
engine = create_async_engine(
    database_url,
    echo=False,
    **engine_options,
)

# Create async session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Failures of the data source itself. Connection errors raised by the driver
# before a statement runs are plain OSErrors, not SQLAlchemy errors.
DATA_SOURCE_ERRORS = (SQLAlchemyError, OSError)

# Base class for all database models
Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency function to get a database session.

    One session per request; the underlying pooled connection is returned
    on every exit path, including validation and not-found errors raised
    by the route after the session was opened.
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


async def ping(db: AsyncSession) -> None:
    """Run the lightest possible query to keep the data source awake."""
    await db.execute(text("SELECT 1"))

