"""
Database session management (SQLAlchemy)
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from periodic_calendar.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.get_sqlalchemy_url()
        _engine = create_engine(url, pool_pre_ping=True)
    return _engine


def get_session_factory():
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Session:
    """
    FastAPI dependency - opens a session and always closes it

    Usage:
        @router.get("/entries")
        def list_entries(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Health check - verifies the database answers a trivial query

    Raises:
        sqlalchemy.exc.OperationalError: if the database is unreachable
    """
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
