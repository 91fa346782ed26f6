"""
Database connection and session management for Recipe Vault.

This module provides:
- Async database engine creation and configuration
- Session factory for units of work
- Database initialization (create tables)
- SQLite pragmas (foreign keys, WAL mode)
- Dialect-specific INSERT constructs for conditional writes

The engine is process-wide: it is created once at service start
(initialize_app_database) and disposed once at service stop
(close_connections). Every operation borrows a connection through
session_scope() and returns it when the scope exits.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging

from sqlalchemy import event, inspect
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..models.base import Base
from ..utils.config import get_config

# Configure logging
logger = logging.getLogger(__name__)

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_SessionFactory: Optional[async_sessionmaker] = None

_INSERT_CONSTRUCTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """
    Set SQLite pragmas on connection.

    Called for every new DBAPI connection. Foreign key enforcement is what
    makes linking to a missing recipe fail instead of leaving a dangling row.
    """
    cursor = dbapi_connection.cursor()

    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")

    cursor.close()


def create_database_engine(database_url: Optional[str] = None, echo: bool = False) -> AsyncEngine:
    """
    Create and configure the async database engine.

    Args:
        database_url: Optional database URL. If None, uses config default.
        echo: If True, log all SQL statements (useful for debugging)

    Returns:
        Configured SQLAlchemy AsyncEngine
    """
    config = get_config()
    if database_url is None:
        database_url = config.database_url
        echo = echo or config.echo_sql

    logger.info(f"Creating database engine: {database_url}")

    if ":memory:" in database_url or "mode=memory" in database_url:
        # For in-memory databases (testing), every borrow must see the same database
        engine = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif database_url.startswith("sqlite"):
        engine = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": config.db_timeout},
        )
    else:
        engine = create_async_engine(
            database_url,
            echo=echo,
            pool_size=config.db_pool_size,
            pool_recycle=config.db_pool_recycle,
            pool_pre_ping=True,
        )

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)

    return engine


async def init_database(engine: Optional[AsyncEngine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Safe to call multiple times - existing tables won't be recreated.

    Args:
        engine: Optional engine to use. If None, uses global engine.
    """
    if engine is None:
        engine = get_engine()

    logger.info("Initializing database tables")

    # Import all models to ensure they're registered with Base
    from ..models import ingredient, recipe, user_recipe  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized successfully")


def get_engine(force_recreate: bool = False) -> AsyncEngine:
    """
    Get the global database engine.

    Args:
        force_recreate: If True, recreate the engine even if one exists

    Returns:
        Database engine
    """
    global _engine

    if _engine is None or force_recreate:
        _engine = create_database_engine()

    return _engine


def get_session_factory() -> async_sessionmaker:
    """
    Get the global session factory.

    Returns:
        Session factory (async_sessionmaker)
    """
    global _SessionFactory

    if _SessionFactory is None:
        engine = get_engine()
        _SessionFactory = async_sessionmaker(bind=engine, expire_on_commit=False)

    return _SessionFactory


def get_session() -> AsyncSession:
    """
    Create a new database session.

    Prefer session_scope(); a bare session must be closed by the caller.
    """
    session_factory = get_session_factory()
    return session_factory()


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """
    Provide a transactional scope (one unit of work) for database operations.

    This context manager handles session lifecycle automatically:
    - Borrows a connection through a new session
    - Commits on success
    - Rolls back on exception, then re-raises
    - Always closes the session, returning the connection to the pool

    Yields:
        Database session

    Example:
        async with session_scope() as session:
            session.add(Ingredient(id="7", name="Salt"))
            # Commit happens automatically if no exception
    """
    session = get_session()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


def dialect_insert(session: AsyncSession, model):
    """
    Return the dialect-specific INSERT construct for a model.

    Both supported dialects provide on_conflict_do_update() and
    on_conflict_do_nothing(), which the upsert and link paths rely on.

    Raises:
        NotImplementedError: If the bound engine uses another dialect
    """
    dialect_name = session.bind.dialect.name
    try:
        insert = _INSERT_CONSTRUCTS[dialect_name]
    except KeyError:
        raise NotImplementedError(f"Conditional inserts are not supported on '{dialect_name}'")
    return insert(model)


async def verify_database() -> bool:
    """
    Verify that the database is accessible and has tables.

    Returns:
        True if database is valid, False otherwise
    """
    expected_tables = {"recipes", "ingredients", "recipe_ingredients", "user_recipes"}
    try:
        engine = get_engine()
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        return expected_tables.issubset(tables)
    except Exception as e:
        logger.error(f"Database verification failed: {e}")
        return False


async def reset_database(confirm: bool = False) -> None:
    """
    Drop all tables and recreate the database.

    WARNING: This will delete all data!

    Args:
        confirm: Must be True to actually reset. Safety check.

    Raises:
        ValueError: If confirm is not True
    """
    if not confirm:
        raise ValueError("Must pass confirm=True to reset database. This will delete all data!")

    logger.warning("RESETTING DATABASE - ALL DATA WILL BE LOST")

    engine = get_engine()

    from ..models import ingredient, recipe, user_recipe  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("All tables dropped")
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables recreated")


async def close_connections() -> None:
    """
    Dispose the shared connection pool.

    Call once at service stop, never from an individual operation.
    """
    global _engine, _SessionFactory

    _SessionFactory = None

    if _engine is not None:
        await _engine.dispose()
        _engine = None

    logger.info("Database connections closed")


async def initialize_app_database() -> None:
    """
    Initialize the application database.

    Main entry point at service start: creates the engine (and the database
    file, for SQLite) and any missing tables.
    """
    config = get_config()
    config.ensure_directories()

    if not config.database_exists():
        logger.info(f"Creating new database at: {config.database_path}")
    else:
        logger.info(f"Using database: {config.database_url}")

    engine = get_engine()
    await init_database(engine)

    if await verify_database():
        logger.info("Database initialized and verified successfully")
    else:
        logger.warning("Database verification failed - tables may not exist")
