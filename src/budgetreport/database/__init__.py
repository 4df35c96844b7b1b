"""Persistence for budgetreport: abstract interface plus SQLAlchemy backend."""

from budgetreport.database.base import Database
from budgetreport.database.factories import create_sqlite_database, resolve_database_path
from budgetreport.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_sqlite_database", "resolve_database_path"]
