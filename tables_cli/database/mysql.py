"""MySQL database introspection."""

import logging
from typing import Optional, List
from urllib.parse import quote, unquote, urlsplit

from ..errors import QueryError
from .base import COLUMNS_STATEMENT, Database
from .models import Table

logger = logging.getLogger(__name__)


TABLES_QUERY = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_type = 'BASE TABLE'
    AND table_schema = %s
    ORDER BY table_name
"""

# MySQL reports auto increment in the extra column; such columns never
# have a default, so extra takes the place of the default value.
COLUMNS_QUERY = """
    SELECT
        c.ordinal_position,
        c.column_name,
        c.data_type,
        CASE WHEN c.extra LIKE '%auto_increment%' THEN c.extra ELSE c.column_default END,
        c.is_nullable,
        c.character_maximum_length,
        c.numeric_precision,
        tc.constraint_name,
        tc.constraint_type
    FROM information_schema.columns AS c
        LEFT JOIN information_schema.key_column_usage AS kcu ON c.table_name = kcu.table_name
        AND c.table_schema = kcu.table_schema
        AND c.column_name = kcu.column_name
        LEFT JOIN information_schema.table_constraints AS tc ON c.table_name = tc.table_name
        AND c.table_schema = tc.table_schema
        AND kcu.constraint_name = tc.constraint_name
    WHERE c.table_name = ?
    AND c.table_schema = ?
    ORDER BY c.ordinal_position, tc.constraint_name
"""


class MySQL(Database):
    """Introspects MySQL schemas through PyMySQL."""

    STRING_DATATYPES = (
        "char",
        "varchar",
        "binary",
        "varbinary",
    )

    TEXT_DATATYPES = (
        "text",
        "tinytext",
        "mediumtext",
        "longtext",
        "blob",
        "tinyblob",
        "mediumblob",
        "longblob",
    )

    INTEGER_DATATYPES = (
        "tinyint",
        "smallint",
        "mediumint",
        "int",
        "bigint",
    )

    FLOAT_DATATYPES = (
        "numeric",
        "decimal",
        "float",
        "real",
        "double",
        "double precision",
    )

    TEMPORAL_DATATYPES = (
        "time",
        "timestamp",
        "date",
        "datetime",
        "year",
    )

    AUTO_INCREMENT_MARKER = "auto_increment"

    def connection_string(self) -> str:
        """Build a mysql:// URL from the settings."""
        s = self.settings
        return (
            f"mysql://{quote(s.user, safe='')}:{quote(s.password, safe='')}"
            f"@{s.host}:{s.port}/{s.db_name}"
        )

    def connect(self):
        """Connect to MySQL."""
        try:
            import pymysql
        except ImportError:
            raise ImportError(
                "PyMySQL is required for MySQL databases. "
                "Install it with: pip install PyMySQL"
            )

        url = urlsplit(self.connection_string())
        return self._general.connect(
            lambda: pymysql.connect(
                host=url.hostname,
                port=url.port,
                user=unquote(url.username or ""),
                password=unquote(url.password or ""),
                database=url.path.lstrip("/"),
            ),
            pymysql.Error,
        )

    def list_tables(self, schema: Optional[str] = None) -> List[Table]:
        """Get all base tables of the schema, ordered by name."""
        return self._select_tables(TABLES_QUERY, self._schema(schema))

    def prepare_column_query(self):
        """Prepare the column query as a server-side statement."""
        if self._general.columns_statement_prepared:
            return

        try:
            self._general.execute(f"PREPARE {COLUMNS_STATEMENT} FROM %s", (COLUMNS_QUERY,), fetch=False)
        except self._general.driver_error as e:
            raise QueryError(f"could not prepare column query: {e}", schema=self.settings.db_schema) from e

        self._general.columns_statement_prepared = True
        logger.debug("Prepared statement %s", COLUMNS_STATEMENT)

    def fetch_columns(self, table: Table, schema: Optional[str] = None) -> None:
        """Fetch the columns of a table with the prepared statement."""
        schema = self._schema(schema)

        def run_query():
            # Prepared statements take their arguments from user variables
            self._general.execute(
                "SET @tables_cli_table = %s, @tables_cli_schema = %s",
                (table.name, schema),
                fetch=False,
            )
            return self._general.execute(
                f"EXECUTE {COLUMNS_STATEMENT} USING @tables_cli_table, @tables_cli_schema"
            )

        self._attach_columns(table, schema, run_query)
