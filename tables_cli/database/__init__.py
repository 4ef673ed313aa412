"""Database introspection module for tables-cli.

This module provides dialect-agnostic schema introspection with
specific implementations for PostgreSQL and MySQL.
"""

from ..config import Settings
from ..errors import ConfigurationError
from .models import Column, Table
from .base import Database, GeneralDatabase, collapse_constraint_rows
from .postgresql import PostgreSQL
from .mysql import MySQL

# Database implementations by settings.db_type
DATABASES = {
    "pg": PostgreSQL,
    "mysql": MySQL,
}


def new_database(settings: Settings) -> Database:
    """Create the database implementation for the configured type.

    Raises:
        ConfigurationError: If the database type is not supported
    """
    try:
        database_class = DATABASES[settings.db_type]
    except KeyError:
        raise ConfigurationError(
            f"type of database {settings.db_type!r} not supported",
            details={"db_type": settings.db_type},
        )
    return database_class(settings)


__all__ = [
    # Data models
    "Column",
    "Table",
    # Base classes
    "Database",
    "GeneralDatabase",
    "collapse_constraint_rows",
    # Dialects
    "PostgreSQL",
    "MySQL",
    "DATABASES",
    "new_database",
]
