"""
Regression Tracker - application entry point

Builds a workspace for the UI layer: the folder tree, the script catalog,
user projects with imported scripts, and per-project issues.
"""

import logging
from typing import Optional

from .database import init_db
from .services.collection_store import CollectionStore, SqlCollectionStore
from .workspace import RegressionWorkspace

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a basic stream handler for the application loggers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_workspace(store: Optional[CollectionStore] = None) -> RegressionWorkspace:
    """
    Create a workspace.

    Without an explicit store the workspace uses the configured database,
    creating its schema first.
    """
    if store is None:
        init_db()
        store = SqlCollectionStore()
    return RegressionWorkspace(store)
