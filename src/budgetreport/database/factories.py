"""Factories for database instances."""

import os
from pathlib import Path
from typing import Optional

from budgetreport.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "BUDGETREPORT_DB_PATH"
DEFAULT_DB_FILE = Path.home() / ".budgetreport" / "budgetreport.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file: explicit path, then BUDGETREPORT_DB_PATH, then the default."""
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    return Path(chosen).expanduser() if chosen else DEFAULT_DB_FILE


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database.

    Args:
        database_path: Path to the database file. Falls back to the
            BUDGETREPORT_DB_PATH environment variable, then to
            ~/.budgetreport/budgetreport.db

    Returns:
        SQLAlchemyDatabase for the file; missing parent directories are created
    """
    path = resolve_database_path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
