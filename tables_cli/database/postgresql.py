"""PostgreSQL database introspection."""

import logging
from typing import Optional, List

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

COLUMNS_QUERY = """
    SELECT
        ic.ordinal_position,
        ic.column_name,
        ic.data_type,
        ic.column_default,
        ic.is_nullable,
        ic.character_maximum_length,
        ic.numeric_precision,
        itc.constraint_name,
        itc.constraint_type
    FROM information_schema.columns AS ic
        LEFT JOIN information_schema.key_column_usage AS ikcu ON ic.table_name = ikcu.table_name
        AND ic.table_schema = ikcu.table_schema
        AND ic.column_name = ikcu.column_name
        LEFT JOIN information_schema.table_constraints AS itc ON ic.table_name = itc.table_name
        AND ic.table_schema = itc.table_schema
        AND ikcu.constraint_name = itc.constraint_name
    WHERE ic.table_name = $1
    AND ic.table_schema = $2
    ORDER BY ic.ordinal_position, itc.constraint_name
"""


class PostgreSQL(Database):
    """Introspects PostgreSQL schemas through psycopg2."""

    STRING_DATATYPES = (
        "character varying",
        "varchar",
        "character",
        "char",
    )

    TEXT_DATATYPES = (
        "text",
    )

    INTEGER_DATATYPES = (
        "smallint",
        "integer",
        "bigint",
        "smallserial",
        "serial",
        "bigserial",
    )

    FLOAT_DATATYPES = (
        "numeric",
        "decimal",
        "real",
        "double precision",
    )

    TEMPORAL_DATATYPES = (
        "time",
        "timestamp",
        "time with time zone",
        "timestamp with time zone",
        "time without time zone",
        "timestamp without time zone",
        "date",
    )

    # Serial columns default to nextval('<sequence>'::regclass)
    AUTO_INCREMENT_MARKER = "nextval"

    def connection_string(self) -> str:
        """Build the libpq DSN for psycopg2.

        Values are quoted by psycopg2 where libpq needs it, so an empty
        password or one containing spaces or quotes stays a single value.
        """
        from psycopg2.extensions import make_dsn

        s = self.settings
        return make_dsn(
            host=s.host,
            port=s.port,
            user=s.user,
            dbname=s.db_name,
            password=s.password,
            sslmode="disable",
        )

    def connect(self):
        """Connect to PostgreSQL."""
        try:
            import psycopg2
        except ImportError:
            raise ImportError(
                "psycopg2 is required for PostgreSQL databases. "
                "Install it with: pip install psycopg2-binary"
            )

        return self._general.connect(
            lambda: psycopg2.connect(self.connection_string()),
            psycopg2.Error,
        )

    def list_tables(self, schema: Optional[str] = None) -> List[Table]:
        """Get all base tables of the schema, ordered by name."""
        return self._select_tables(TABLES_QUERY, self._schema(schema))

    def prepare_column_query(self):
        """Prepare the column query as a server-side statement."""
        if self._general.columns_statement_prepared:
            return

        try:
            self._general.execute(
                f"PREPARE {COLUMNS_STATEMENT} (text, text) AS {COLUMNS_QUERY}",
                fetch=False,
            )
        except self._general.driver_error as e:
            raise QueryError(f"could not prepare column query: {e}", schema=self.settings.db_schema) from e

        self._general.columns_statement_prepared = True
        logger.debug("Prepared statement %s", COLUMNS_STATEMENT)

    def fetch_columns(self, table: Table, schema: Optional[str] = None) -> None:
        """Fetch the columns of a table with the prepared statement."""
        schema = self._schema(schema)
        self._attach_columns(
            table,
            schema,
            lambda: self._general.execute(f"EXECUTE {COLUMNS_STATEMENT} (%s, %s)", (table.name, schema)),
        )
