"""
Database engine and session management
"""

import logging
import time
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import Engine, create_engine, event, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from magento_storefront.config import get_config
from magento_storefront.infrastructure.database.models import Base
from magento_storefront.infrastructure.logging.logger_config import PerformanceLogger
from magento_storefront.infrastructure.utilities.constants import (
    DatabaseSettings,
    PerformanceSettings,
)
from magento_storefront.infrastructure.utilities.exceptions import StorageError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the engine and the session factory"""

    def __init__(self, database_url: Optional[str] = None, environment: Optional[str] = None):
        if database_url is None or environment is None:
            config = get_config()
            database_url = database_url or config.database_url
            environment = environment or config.environment
        self.database_url = database_url
        self.environment = environment
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """Create database engine with environment-specific settings"""
        engine_kwargs: dict[str, Any] = {"echo": False}

        if self.database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": DatabaseSettings.SQLITE_TIMEOUT_SECONDS,
            }
            if ":memory:" in self.database_url or self.database_url == "sqlite://":
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
            else:
                database_path = make_url(self.database_url).database
                if database_path:
                    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
        else:
            if self.environment == "production":
                pool_size = DatabaseSettings.PRODUCTION_POOL_SIZE
                max_overflow = DatabaseSettings.PRODUCTION_MAX_OVERFLOW
            else:
                pool_size = DatabaseSettings.DEVELOPMENT_POOL_SIZE
                max_overflow = DatabaseSettings.DEVELOPMENT_MAX_OVERFLOW
            engine_kwargs.update(
                {
                    "pool_size": pool_size,
                    "max_overflow": max_overflow,
                    "pool_recycle": DatabaseSettings.POOL_RECYCLE_SECONDS,
                    "pool_pre_ping": True,
                }
            )

        engine = create_engine(self.database_url, **engine_kwargs)
        self._setup_engine_events(engine)
        return engine

    def _setup_engine_events(self, engine: Engine) -> None:
        """Log slow statements"""

        @event.listens_for(engine, "before_cursor_execute")
        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            context._query_start_time = time.time()

        @event.listens_for(engine, "after_cursor_execute")
        def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            total_time_ms = (time.time() - context._query_start_time) * 1000
            if total_time_ms > PerformanceSettings.SLOW_QUERY_THRESHOLD_MS:
                self.logger.warning(
                    "🐢 SLOW QUERY: %.1fms %s", total_time_ms, statement[:200]
                )

    def get_session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.get_engine(), expire_on_commit=False)
        return self._session_factory

    def get_session(self) -> Session:
        return self.get_session_factory()()

    def create_tables(self) -> None:
        """Create all database tables"""
        try:
            with PerformanceLogger("create_tables", self.logger):
                Base.metadata.create_all(self.get_engine())
            self.logger.info("✅ Database tables created successfully")
        except SQLAlchemyError as e:
            self.logger.error("💥 Failed to create database tables: %s", e, exc_info=True)
            raise StorageError(f"Failed to create database tables: {e}", "create_tables") from e

    def close(self) -> None:
        """Close database connections"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None
        self.logger.info("Database connections closed")


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get global database manager instance"""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def reset_db_manager() -> None:
    global _db_manager
    if _db_manager is not None:
        _db_manager.close()
    _db_manager = None
