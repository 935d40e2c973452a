"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from bikeflip.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DEFAULT_DB_DIR = Path.home() / ".bikeflip"
DB_PATH_ENV = "BIKEFLIP_DB_PATH"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance for the ledger.

    Args:
        database_path: Path to the SQLite file. If None, the BIKEFLIP_DB_PATH
            environment variable is used, then ~/.bikeflip/bikeflip.db.
            A leading "~" is expanded.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        DEFAULT_DB_DIR.mkdir(exist_ok=True)
        path = DEFAULT_DB_DIR / "bikeflip.db"
    else:
        path = Path(database_path).expanduser()

    logger.debug("Using ledger database %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
