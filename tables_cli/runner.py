"""Runs one generation: introspect the schema and tag every column."""

import logging
from typing import List

from .config import Settings
from .database import Database, Table
from .tagger import effective_taggers

logger = logging.getLogger(__name__)


def run(settings: Settings, database: Database) -> List[Table]:
    """Introspect the configured schema and attach the tags to all columns.

    The connection is opened here and always closed before returning.
    Any ConnectionError or QueryError aborts the whole run, so the result
    never contains a table with partially fetched columns.

    Args:
        settings: Verified settings
        database: Database implementation for settings.db_type

    Returns:
        Tables of the schema in name order, columns in ordinal order
    """
    taggers = effective_taggers(settings)

    database.connect()
    try:
        tables = database.list_tables(settings.db_schema)
        logger.info("Found %d tables in schema %s", len(tables), settings.db_schema)

        database.prepare_column_query()

        for table in tables:
            database.fetch_columns(table, settings.db_schema)
            for column in table.columns:
                column.tags = [tagger.generate_tag(database, column, settings) for tagger in taggers]
            logger.debug("Tagged %d columns of table %s", len(table.columns), table.name)
    finally:
        database.close()

    return tables
