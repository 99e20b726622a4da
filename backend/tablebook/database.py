"""
TableBook Backend — Database Pool Management
==============================================

What:  The `Database` handle: async SQLAlchemy engine (connection pool), session
       factory, scoped session acquisition, startup diagnostic and disposal.
How:   One `Database` is constructed in the application lifespan, stored on
       `app.state.database`, and injected into route handlers through the
       `get_database` dependency. Nothing here is a module-level singleton, so
       tests build their own handle against a throwaway database.
When:  Constructed at startup; sessions are acquired per request; disposed at shutdown.

Connection Pooling Strategy:
    pool_size + max_overflow bound the number of open connections. When the
    pool is exhausted, `session()` suspends until a connection is returned or
    pool_timeout elapses. pool_pre_ping catches connections dropped by the
    server; pool_recycle retires long-lived ones.

Error Mapping:
    `session()` is the single place data-access exceptions are translated.
    Anything SQLAlchemy or the driver raises becomes a DatabaseError via
    `map_database_error`; services stay free of try/except blocks.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from tablebook.exceptions import map_database_error

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


class Database:
    """
    Explicitly constructed handle around the process-wide connection pool.

    Lifecycle:
        1. Created once by the lifespan handler (or a test fixture)
        2. `session()` acquires and releases one pooled connection per request
        3. `dispose()` closes every pooled connection at shutdown
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
        pool_pre_ping: bool = True,
        require_ssl: bool = False,
        echo: bool = False,
    ):
        connect_args: Dict[str, Any] = {}
        if require_ssl:
            # asyncpg: negotiate TLS, fail if the server refuses it
            connect_args["ssl"] = "require"

        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=3600,
            connect_args=connect_args,
            echo=echo,
        )

        # expire_on_commit=False: returned ORM objects stay readable after commit,
        # once the connection has already gone back to the pool
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        # Filled in by the startup diagnostic
        self.server_version: Optional[str] = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Scoped acquisition of one pooled connection.

        How it works:
            1. Creates a session (the connection is checked out on first use)
            2. Yields it to the service, which executes its statement
            3. On success: commits
            4. On a data-access error: rolls back, raises DatabaseError
            5. On any other error (e.g. NotFoundError): rolls back, re-raises
            6. Always: closes the session, returning the connection to the pool

        Example usage in a service:
            async with db.session() as session:
                result = await session.execute(select(Booking))
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except (SQLAlchemyError, OSError) as e:
            await session.rollback()
            raise map_database_error(e) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def log_server_version(self) -> Optional[str]:
        """
        Startup diagnostic: logs the database engine's version string.

        Best-effort: failures are logged and swallowed, so an unreachable
        database never prevents the server from starting.

        Returns:
            The version string, or None if the probe failed.
        """
        try:
            async with self.engine.connect() as conn:
                version = (await conn.execute(text("SELECT version()"))).scalar()
        except Exception:
            logger.exception("Database version probe failed")
            return None

        logger.info("Database server version: %s", version)
        self.server_version = version
        return version

    async def ping(self) -> bool:
        """Executes SELECT 1; used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the pool handle owned by the running app.

    Example usage in a route:
        @router.get("/reservation")
        async def list_reservations(db: Database = Depends(get_database)):
            ...
    """
    return request.app.state.database
