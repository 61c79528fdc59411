import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy import event

from iptv_catalog.models import Base

logger = logging.getLogger(__name__)

# Engine and session factory - initialized in init_db() during startup
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_session_factory(engine):
    """Create async session factory from engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def _create_engine(database_path: str) -> AsyncEngine:
    """Create the aiosqlite engine for a file path or ':memory:'"""
    if database_path == ":memory:":
        # A single shared connection, otherwise every checkout sees an empty database
        return create_async_engine(
            "sqlite+aiosqlite://",
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{database_path}",
        echo=False,
        pool_pre_ping=True,
        connect_args={"timeout": 30, "check_same_thread": False},
    )

    def configure_sqlite(dbapi_conn, _):
        """Configure SQLite connection parameters"""
        cursor = dbapi_conn.cursor()
        # WAL lets readers keep their snapshot while a catalog replace is in flight
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute("PRAGMA synchronous = NORMAL")
        cursor.close()

    event.listen(engine.sync_engine, "connect", configure_sqlite)
    return engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory (initialized in init_db)"""
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() during startup.")
    return _session_factory


async def init_db(database_path: str) -> async_sessionmaker[AsyncSession]:
    """Initialize database schema and engine"""
    global _engine, _session_factory

    logger.info(f"Initializing database at {database_path}")

    _engine = _create_engine(database_path)

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    _session_factory = _create_session_factory(_engine)

    logger.info("Database initialized successfully")
    return _session_factory


async def close_db() -> None:
    """Close database connections on shutdown"""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        logger.info("Database connections closed")
    _engine = None
    _session_factory = None


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """
    Provide an async session wrapped in a transaction (commit on success, rollback on error).

    Args:
        session_factory: Factory to open the session from; defaults to the one built by init_db().
    """
    factory = session_factory or get_session_factory()

    async with factory() as session:
        async with session.begin():
            yield session
