# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy against any supported URL (PostgreSQL/MySQL in production,
SQLite for local runs and tests). All models are auto-imported here
so create_tables() creates every table in one call.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings


def build_engine(url: str):
    """Pooled engine for server databases, single-file/in-memory engine for SQLite."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)
    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.user import User, Admin                 # noqa
    from app.models.alert_type import AlertType             # noqa
    from app.models.georeference import Georeference        # noqa
    from app.models.siren import Siren                      # noqa
    from app.models.alert import Alert                      # noqa

    Base.metadata.create_all(bind=bind or engine)
