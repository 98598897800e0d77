"""Database Session Manager — bounded async connection pool with scoped borrows.

Invariants:
    - One manager per process, built at startup and passed in explicitly (no module global)
    - session() checks a connection out eagerly and always returns it, on every exit path
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Pool is a queue pool, fixed-size by default (max_overflow=0); waiting past pool_timeout is PoolExhaustedError
    - All SQLAlchemy exceptions mapped to core/errors.py types

Design Decisions:
    - expire_on_commit=False: records stay readable after the borrow ends
    - Malformed URLs fail in __init__ as ConfigurationError; reachability is checked by ping()
      during startup so a dead database aborts the process instead of the first request
    - SQLite connections get PRAGMA foreign_keys=ON so tests see the same FK behaviour as PostgreSQL
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    ArgumentError, IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from hackerclone.core.errors import (
    ConfigurationError, ConstraintViolationError, HackerCloneError,
    PoolExhaustedError, StoreFailureError,
)
from hackerclone.db.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseSessionManager:
    """Owns the async engine and its connection pool."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
    ):
        if not database_url:
            raise ConfigurationError("DATABASE_URL is not set", setting="database_url")
        try:
            self.engine = create_async_engine(
                database_url,
                poolclass=AsyncAdaptedQueuePool,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        except (ArgumentError, ImportError) as e:
            raise ConfigurationError(
                f"Invalid DATABASE_URL: {e}", setting="database_url",
            ) from e
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.pool_timeout = pool_timeout
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Borrow a pooled connection wrapped in a session; roll back on exception."""
        session = self._session_factory()
        try:
            await session.connection()
            yield session
        except HackerCloneError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise ConstraintViolationError("Integrity constraint violated") from e
        except PoolTimeoutError as e:
            logger.error(f"DB pool exhausted after {self.pool_timeout}s")
            raise PoolExhaustedError(self.pool_timeout) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StoreFailureError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StoreFailureError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StoreFailureError("Database operation failed", "unknown") from e
        finally:
            await session.close()

    def checked_out(self) -> int:
        """Connections currently borrowed from the pool."""
        return self.engine.sync_engine.pool.checkedout()

    async def ping(self) -> None:
        """Round-trip to the database; raises StoreFailureError when unreachable."""
        async with self.session() as db:
            await db.execute(text("SELECT 1"))

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.ping()
            return True
        except HackerCloneError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def create_schema(self) -> None:
        """Create all tables. Tests and local development only; production uses alembic."""
        import hackerclone.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
