"""
WaveTech Workshop: Core database layer.

Provides the SQLAlchemy engine, session factory, and the FastAPI
get_db dependency. The local preference store lives in this database.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from core.config import settings
from core.base import Base  # Single Base instance shared across all models

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str):
    """Build an engine for a SQLite URL.

    In-memory databases share one connection (StaticPool) so every session
    sees the same tables; file databases use WAL like the production setup.
    """
    if database_url in _MEMORY_URLS:
        return create_engine(
            database_url,
            echo=settings.debug,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    db_engine = create_engine(
        database_url,
        echo=settings.debug,
        poolclass=NullPool,
        connect_args={"check_same_thread": False},
    )
    with db_engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.execute(text("PRAGMA busy_timeout=5000"))
    return db_engine


engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for database sessions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create all tables that are not there yet."""
    import core.models  # noqa: F401  (registers Preference on Base)

    Base.metadata.create_all(bind=bind or engine)
