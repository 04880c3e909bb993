"""
Database handle for the Intersect memory store.
Owns the engine, the session factory and the lock that serializes every store operation.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config.settings import settings
from core import get_logger, DatabaseException, StoreNotInitializedError
from memory.models import (
    Base,
    UserProfile,
    DEFAULT_INSTINCT_WEIGHT,
    DEFAULT_LOGIC_WEIGHT,
    DEFAULT_PSYCHE_WEIGHT,
    utcnow,
)

logger = get_logger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith(":memory:") or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"))


class Database:
    """
    Explicitly constructed store handle shared by every memory component.

    Every session holds one lock for its whole lifetime, so reads and writes
    are fully serialized. Sessions commit on success and roll back on any
    failure, which makes each ``with db.get_session()`` block one transaction.
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False):
        self.url = url or settings.DATABASE_URL
        self.echo = echo
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def initialize(self) -> "Database":
        """Create the engine, all tables and the singleton profile row."""
        if self.is_initialized:
            return self

        engine_kwargs = {"echo": self.echo}
        if self.url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if _is_memory_sqlite(self.url):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True  # Verify connections before using

        self.engine = create_engine(self.url, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        Base.metadata.create_all(bind=self.engine)

        with self.get_session() as session:
            if session.query(UserProfile).count() == 0:
                now = utcnow()
                # Default weights: Logic 50%, Psyche 30%, Instinct 20%
                session.add(
                    UserProfile(
                        instinct_weight=DEFAULT_INSTINCT_WEIGHT,
                        logic_weight=DEFAULT_LOGIC_WEIGHT,
                        psyche_weight=DEFAULT_PSYCHE_WEIGHT,
                        total_messages=0,
                        created_at=now,
                        updated_at=now,
                    )
                )
                logger.info("Created default user profile")

        logger.info("Database initialized", url=self.url.split("@")[-1])
        return self

    def close(self) -> None:
        """Dispose of the engine; the handle is unusable until initialize() again."""
        with self._lock:
            if self.engine is not None:
                self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
        logger.info("Database closed")

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """
        Context manager for database sessions.
        Holds the store lock, commits on success and rolls back on any failure.

        Raises:
            StoreNotInitializedError: If the handle is not initialized
            DatabaseException: Wrapping any SQLAlchemy error raised in the block
                or on commit
        """
        with self._lock:
            if self.SessionLocal is None:
                raise StoreNotInitializedError("call Database.initialize() first")
            session = self.SessionLocal()
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Database operation failed", error=str(e))
                raise DatabaseException(f"Database operation failed: {e}") from e
            except Exception as e:
                session.rollback()
                logger.error("Session rolled back", error=str(e))
                raise
            finally:
                session.close()

    def __enter__(self) -> "Database":
        return self.initialize()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
