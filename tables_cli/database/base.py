"""Abstract base class for database introspection and the helpers shared by all dialects."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from ..config import Settings
from ..errors import ConnectionError, QueryError
from .models import Column, Table

logger = logging.getLogger(__name__)

# Name of the server-side prepared statement for the column query
COLUMNS_STATEMENT = "tables_cli_columns"


class GeneralDatabase:
    """Connection lifecycle and generic checks shared by the dialects.

    Every dialect owns one instance and delegates to it instead of
    inheriting from it.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.connection = None
        # Nothing to catch until a driver is loaded by connect()
        self.driver_error: Any = ()
        self.columns_statement_prepared = False

    def connect(self, open_connection: Callable[[], Any], driver_error: Type[BaseException]):
        """Open the connection unless one is already open.

        Args:
            open_connection: Callable returning a DB-API connection
            driver_error: Base exception class of the driver

        Returns:
            The live connection
        """
        if self.connection is not None:
            return self.connection

        self.driver_error = driver_error
        try:
            self.connection = open_connection()
        except driver_error as e:
            raise ConnectionError(
                f"could not connect to {self.settings.db_type} database "
                f"{self.settings.db_name!r} at {self.settings.host}:{self.settings.port}: {e}",
                details={
                    "db_type": self.settings.db_type,
                    "host": self.settings.host,
                    "port": self.settings.port,
                    "db_name": self.settings.db_name,
                    "user": self.settings.user,
                },
            ) from e

        logger.debug("Connected to %s database %s", self.settings.db_type, self.settings.db_name)
        return self.connection

    def close(self):
        """Close the connection; prepared statements die with the session."""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
        self.columns_statement_prepared = False

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None, fetch: bool = True) -> List[Tuple]:
        """Execute a statement and return its rows.

        Driver errors are raised unchanged; the dialects wrap them with
        the context of the failing operation.
        """
        if self.connection is None:
            raise ConnectionError("not connected to the database, call connect() first")

        cursor = self.connection.cursor()
        try:
            if params is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, params)
            if not fetch:
                return []
            return list(cursor.fetchall())
        finally:
            cursor.close()

    def is_string_in_slice(self, value: str, values: Sequence[str]) -> bool:
        """Check whether value is one of values."""
        return value in values


class Database(ABC):
    """Abstract base class for the supported database dialects.

    Subclasses implement the catalog queries and declare the type
    vocabulary of their dialect.
    """

    # Override in subclasses with the dialect's data type names
    STRING_DATATYPES: Tuple[str, ...] = ()
    TEXT_DATATYPES: Tuple[str, ...] = ()
    INTEGER_DATATYPES: Tuple[str, ...] = ()
    FLOAT_DATATYPES: Tuple[str, ...] = ()
    TEMPORAL_DATATYPES: Tuple[str, ...] = ()

    # Substring of the column default marking an auto increment column
    AUTO_INCREMENT_MARKER: str = ""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._general = GeneralDatabase(settings)

    @abstractmethod
    def connection_string(self) -> str:
        """Build the connection string from the settings."""
        pass

    @abstractmethod
    def connect(self):
        """Establish the connection to the database.

        Raises:
            ConnectionError: If the driver cannot connect or authenticate
        """
        pass

    @abstractmethod
    def list_tables(self, schema: Optional[str] = None) -> List[Table]:
        """Get all base tables of a schema, ordered by name.

        Args:
            schema: Schema name (defaults to the configured schema)

        Raises:
            QueryError: If the catalog query fails
        """
        pass

    @abstractmethod
    def prepare_column_query(self):
        """Prepare the column metadata query once for the whole run.

        Raises:
            QueryError: If the statement cannot be prepared
        """
        pass

    @abstractmethod
    def fetch_columns(self, table: Table, schema: Optional[str] = None) -> None:
        """Populate table.columns in ordinal order.

        Args:
            table: Table to fetch the columns for
            schema: Schema name (defaults to the configured schema)

        Raises:
            QueryError: If the query fails; table.columns stays empty
        """
        pass

    def close(self):
        """Close the database connection."""
        self._general.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def is_primary_key(self, column: Column) -> bool:
        """Check if the column belongs to the primary key."""
        return column.constraint_type is not None and "PRIMARY KEY" in column.constraint_type

    def is_auto_increment(self, column: Column) -> bool:
        """Check if the column's default marks it as auto increment."""
        if not self.AUTO_INCREMENT_MARKER or column.default_value is None:
            return False
        return self.AUTO_INCREMENT_MARKER in column.default_value

    def is_nullable(self, column: Column) -> bool:
        return column.is_nullable

    def is_string(self, column: Column) -> bool:
        return self._general.is_string_in_slice(column.data_type, self.STRING_DATATYPES)

    def is_text(self, column: Column) -> bool:
        return self._general.is_string_in_slice(column.data_type, self.TEXT_DATATYPES)

    def is_integer(self, column: Column) -> bool:
        return self._general.is_string_in_slice(column.data_type, self.INTEGER_DATATYPES)

    def is_float(self, column: Column) -> bool:
        return self._general.is_string_in_slice(column.data_type, self.FLOAT_DATATYPES)

    def is_temporal(self, column: Column) -> bool:
        return self._general.is_string_in_slice(column.data_type, self.TEMPORAL_DATATYPES)

    def _schema(self, schema: Optional[str]) -> str:
        return schema if schema is not None else self.settings.db_schema

    def _select_tables(self, sql: str, schema: str) -> List[Table]:
        """Run a table listing query whose only parameter is the schema."""
        try:
            rows = self._general.execute(sql, (schema,))
        except self._general.driver_error as e:
            logger.debug("Table listing failed for schema %r:\n%s", schema, sql)
            raise QueryError(
                f"could not list tables of schema {schema!r}: {e}",
                schema=schema,
            ) from e

        return [Table(name=row[0]) for row in rows]

    def _attach_columns(self, table: Table, schema: str, run_query: Callable[[], List[Tuple]]) -> None:
        """Run the prepared column query and attach its result to the table.

        The table is left without columns unless the query succeeds.
        """
        if not self._general.columns_statement_prepared:
            table.columns = []
            raise QueryError(
                "column query is not prepared, call prepare_column_query() first",
                schema=schema,
                table=table.name,
            )

        try:
            rows = run_query()
        except self._general.driver_error as e:
            table.columns = []
            logger.debug("Column query failed for table %r in schema %r", table.name, schema)
            raise QueryError(
                f"could not fetch columns of table {table.name!r} in schema {schema!r}: {e}",
                schema=schema,
                table=table.name,
            ) from e

        table.columns = collapse_constraint_rows([Column.from_catalog_row(row) for row in rows])
        logger.debug("Fetched %d columns for table %s", len(table.columns), table.name)


def collapse_constraint_rows(columns: List[Column]) -> List[Column]:
    """Reduce the catalog rows to one column per ordinal position.

    The column query joins the constraint tables, so a column taking part
    in several constraints shows up once per constraint. The primary key
    row wins, then the row with the smallest constraint name; a row without
    constraint only remains when the column has no constraint at all.
    """
    by_position: Dict[int, Column] = {}
    for column in columns:
        current = by_position.get(column.ordinal_position)
        if current is None or _constraint_rank(column) < _constraint_rank(current):
            by_position[column.ordinal_position] = column

    return [by_position[position] for position in sorted(by_position)]


def _constraint_rank(column: Column) -> Tuple[int, str]:
    if column.constraint_type is None:
        return (2, "")
    if "PRIMARY KEY" in column.constraint_type:
        return (0, column.constraint_name or "")
    return (1, column.constraint_name or "")
