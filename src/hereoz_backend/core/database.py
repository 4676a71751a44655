"""Engine and session management."""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
import structlog

from .config import settings

logger = structlog.get_logger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine suited to the URL's backend.

    PostgreSQL gets a bounded QueuePool. An in-memory SQLite database is
    pinned to one connection so every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **options)

    return create_engine(
        database_url,
        echo=echo,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle_seconds,
        pool_pre_ping=True,
    )


class DatabaseManager:
    """Owns the process-wide engine and session factory."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    def initialize(self) -> None:
        if self.engine is not None:
            return

        self.engine = build_engine(self.database_url, echo=settings.log_level.upper() == "DEBUG")
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Database engine initialized", dialect=self.engine.dialect.name)

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
            logger.info("Database engine closed")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """One session per unit of work.

        Commits when the block exits cleanly and rolls back when it raises.
        Services commit their own writes, so the final commit is usually a
        no-op.
        """
        if self.SessionLocal is None:
            self.initialize()

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error("Database health check failed", error=str(e))
            return False
        return True


db_manager = DatabaseManager(settings.database_url)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""
    with db_manager.get_session() as session:
        yield session


def init_db() -> None:
    """Connect and apply pending migrations."""
    from .migration import init_database
    init_database()


def close_db() -> None:
    db_manager.close()
