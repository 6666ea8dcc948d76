"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from src.oilpress_admin.runtime.config.config_data import ConfigData
from src.oilpress_admin.runtime.context import get_config


def engine_options(config: ConfigData) -> dict[str, Any]:
    """Keyword arguments for ``create_engine`` under ``config``."""
    db = config.database
    options: dict[str, Any] = {"echo": db.echo}

    if db.is_sqlite:
        # Requests are served from a thread pool
        options["connect_args"] = {"check_same_thread": False, "timeout": 20}
        if config.app.environment == "production":
            logger.warning("SQLite in production; point DATABASE_URL at PostgreSQL instead")
        return options

    options.update(
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
        pool_pre_ping=True,
    )
    return options


class DbSessionService:
    """Owns the engine; hands out sessions for requests, scripts and tests."""

    def __init__(self, engine: Engine | None = None):
        """
        Args:
            engine: Pre-built engine to use instead of one from configuration
        """
        if engine is None:
            config = get_config()
            logger.info(
                "Creating database engine ({}, environment {})",
                "sqlite" if config.database.is_sqlite else "pooled",
                config.app.environment,
            )
            engine = create_engine(config.database.url, **engine_options(config))
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_all(self) -> None:
        """Create the document table if it does not exist yet."""
        # Registers the table on SQLModel.metadata
        from src.oilpress_admin.entities.core._base import DocumentTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database tables ready")

    def get_session(self) -> Session:
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on any error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error("Database transaction failed: {}: {}", type(e).__name__, e)
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False
        return True

    def dispose(self) -> None:
        self._engine.dispose()
