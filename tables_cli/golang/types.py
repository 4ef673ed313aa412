"""Mapping of database column types to Go types."""

from dataclasses import dataclass
from typing import Optional

from ..database import Column, Database

# Boolean type names are the same for the supported databases
BOOLEAN_DATATYPES = ("boolean", "bool")


@dataclass(frozen=True)
class GoType:
    """A Go field type and the package it has to import, if any."""
    name: str
    import_path: Optional[str] = None


SQL_PACKAGE = "database/sql"
TIME_PACKAGE = "time"


def map_column_type(database: Database, column: Column) -> GoType:
    """Pick the Go type of a column.

    Nullable columns map to the database/sql Null* wrappers. Columns of an
    unknown type fall back to sql.RawBytes.
    """
    nullable = database.is_nullable(column)

    if database.is_string(column) or database.is_text(column):
        return GoType("sql.NullString", SQL_PACKAGE) if nullable else GoType("string")

    if database.is_integer(column):
        return GoType("sql.NullInt64", SQL_PACKAGE) if nullable else GoType("int")

    if database.is_float(column):
        return GoType("sql.NullFloat64", SQL_PACKAGE) if nullable else GoType("float64")

    if database.is_temporal(column):
        return GoType("sql.NullTime", SQL_PACKAGE) if nullable else GoType("time.Time", TIME_PACKAGE)

    if column.data_type in BOOLEAN_DATATYPES:
        return GoType("sql.NullBool", SQL_PACKAGE) if nullable else GoType("bool")

    return GoType("sql.RawBytes", SQL_PACKAGE)
