"""Database Session Manager - async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py)
    - A version mismatch on a versioned document maps to ConcurrencyError, never StorageError
    - A unique-constraint hit maps to the caller-supplied error when one is given

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - commit_or_raise() is shared by the repositories so request-scoped sessions
      handed out by get_db get the same error mapping as db_manager.session()
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy import text

from devconnect.core.errors import ConcurrencyError, DevConnectError, StorageError

logger = logging.getLogger(__name__)


async def commit_or_raise(
    db: AsyncSession,
    operation: str,
    on_integrity: Callable[[], DevConnectError] | None = None,
) -> None:
    """Commit the unit of work, translating driver failures into domain errors.

    on_integrity builds the error raised when a constraint rejects the write
    (a lost check-then-insert race); without it the failure is a StorageError.
    """
    try:
        await db.commit()
    except StaleDataError as e:
        await db.rollback()
        logger.warning(
            f"Concurrent update rejected: {e}", extra={"operation": operation},
        )
        raise ConcurrencyError(
            "Document was modified by another request, reload and try again",
        )
    except IntegrityError as e:
        await db.rollback()
        if on_integrity is None:
            logger.error(
                f"DB integrity error during {operation}: {e}", extra={"operation": operation},
            )
            raise StorageError(operation)
        error = on_integrity()
        logger.warning(
            f"Constraint rejected {operation}: {e}",
            extra={"operation": operation, "error_code": error.code},
        )
        raise error
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"DB error during {operation}: {e}", extra={"operation": operation},
        )
        raise StorageError(operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except StaleDataError as e:
            await session.rollback()
            logger.warning(f"DB stale data: {e}")
            raise ConcurrencyError("Document was modified by another request")
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise StorageError("commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StorageError("execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StorageError("query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageError("unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
