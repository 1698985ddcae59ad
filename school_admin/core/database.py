from contextlib import contextmanager
from typing import Generator, Iterator
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from .config import settings
from .exceptions import PersistenceException
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the given URL.

    SQLite (used for local runs and tests) gets a single shared connection when
    in-memory; every other backend gets the pooled configuration from settings.
    """
    if url.startswith("sqlite"):
        in_memory = url in ("sqlite://", "sqlite:///:memory:")
        engine = create_engine(
            url,
            echo=echo,
            poolclass=StaticPool if in_memory else None,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,

        # Connection pool settings
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,

        # Test connection before using (detect disconnects)
        pool_pre_ping=True,

        echo=echo,

        connect_args={
            "connect_timeout": 10,  # seconds
        }
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO_SQL)


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

# Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE SESSION DEPENDENCY
# =============================================================================

def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI endpoints.

    Usage in endpoints:
        @router.get("/students/")
        def list_students(db: Session = Depends(get_db)):
            ...

    One session per request, closed after the response even if an error occurs.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def storage_errors(db: Session, action: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into PersistenceException.

    The session is rolled back so it can be reused by the caller.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}")
        raise PersistenceException(f"Failed to {action}") from e


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables(bind: Engine = None):
    """
    Create all database tables defined in models.

    Only for development and tests; production schema goes through Alembic.
    """
    # Register every model on Base.metadata
    from school_admin.models import course, student, teacher  # noqa: F401

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully")


def drop_database_tables(bind: Engine = None):
    """
    Drop all database tables.

    This deletes all data. Development and tests only.
    """
    logger.warning("Dropping all database tables...")
    Base.metadata.drop_all(bind=bind or engine)
    logger.info("Database tables dropped")


def check_database_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False


# =============================================================================
# INITIALIZATION
# =============================================================================

def init_db():
    """
    Initialize database.
    Run this when starting the application.
    """
    logger.info("Initializing database...")

    if not check_database_connection():
        raise PersistenceException("Cannot connect to database")

    # Local SQLite runs have no migrations applied
    if settings.DEBUG or settings.is_sqlite:
        create_database_tables()

    logger.info("Database initialized successfully")
