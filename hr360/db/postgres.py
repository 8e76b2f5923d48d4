from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager

from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger

settings = get_settings()
logger = get_logger("hr360.db")

_url = settings.database_url_resolved

# Connection pool sizing only applies to server databases;
# SQLite (tests, local demo) uses its default pool.
if _url.startswith("sqlite"):
    engine = create_engine(
        _url,
        connect_args={"check_same_thread": False},
        echo=settings.debug
    )
else:
    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    engine = create_engine(
        _url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug  # Log SQL queries in debug mode
    )

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM applicants"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_schema():
    """Create all tables that don't exist yet."""
    from hr360.db.tables import metadata
    metadata.create_all(engine)


def test_postgres_connection() -> bool:
    """
    Test if the relational store is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False
