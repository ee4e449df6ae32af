"""
Models package for the Regression Tracker.

Exports all SQLAlchemy models for database operations.
"""

from .collection import StoredCollection

__all__ = [
    "StoredCollection",
]
