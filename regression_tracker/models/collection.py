"""
Stored collection model.

Each named collection (folders, scripts, projects, imported scripts,
issues) is persisted as one JSON array in a single row, so replacing a
collection is a single-row write.
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredCollection(Base):
    """
    SQLAlchemy model for keyed record collections.

    Attributes:
        key: Namespace key of the collection (e.g. ``regression_folders``)
        payload: JSON text of the whole record array
        updated_at: Timestamp of the last replace
    """
    __tablename__ = "collections"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, default="[]")
    updated_at: Mapped[datetime] = mapped_column(default=_utcnow, onupdate=_utcnow)
