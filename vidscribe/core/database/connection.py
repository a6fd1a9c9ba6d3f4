# File: vidscribe/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from vidscribe.core.config.settings import settings
from vidscribe.core.database.base import Base


def build_engine(url: str) -> Engine:
    """
    Creates an engine for the given URL.
    check_same_thread=False is needed for SQLite because sessions are used
    from worker threads (asyncio.to_thread).
    """
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": 30}
    else:
        connect_args = {}

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args
    )


if settings.DATABASE_URL.startswith("sqlite"):
    settings.ensure_dirs()

engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Creates all registered tables. Safe to call repeatedly."""
    # Register feature tables on the shared Base
    import vidscribe.features.transcription_cache.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
