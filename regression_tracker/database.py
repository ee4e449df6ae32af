"""
Database configuration and initialization for the Regression Tracker.

Uses SQLite as the default storage backend with SQLAlchemy ORM. Every
collection of records lives in a single row of the ``collections`` table.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

# SQLite database URL - file-based storage, overridable from the environment
DATABASE_URL = os.environ.get(
    "REGRESSION_TRACKER_DATABASE_URL", "sqlite:///./regression_tracker.db"
)


def build_engine(database_url: str = DATABASE_URL):
    """Create an engine, enabling SQLite-specific settings where they apply."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, echo=False)


engine = build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def init_db(bind=None):
    """
    Initialize the database by creating all tables.

    This function should be called before the first store operation to
    ensure the schema exists. It will create tables if they don't exist.
    """
    # Import models so their tables are registered on the metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
