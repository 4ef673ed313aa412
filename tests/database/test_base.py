"""Tests for the shared database helpers."""

import pytest

from tables_cli.config import Settings
from tables_cli.database import Column, GeneralDatabase, collapse_constraint_rows, new_database, PostgreSQL, MySQL
from tables_cli.errors import ConfigurationError, ConnectionError
from tests.fixtures import MockConnection, MockDriverError, catalog_row


def _column(position, name="col", constraint_name=None, constraint_type=None):
    return Column.from_catalog_row(
        catalog_row(position, name, "integer", constraint_name=constraint_name, constraint_type=constraint_type)
    )


class TestCollapseConstraintRows:
    """Tests for reducing joined constraint rows to one column each."""

    def test_single_rows_unchanged(self):
        columns = [_column(1, "id"), _column(2, "name"), _column(3, "age")]

        result = collapse_constraint_rows(columns)

        assert [c.name for c in result] == ["id", "name", "age"]

    def test_primary_key_wins(self):
        columns = [
            _column(1, "id", "a_unique", "UNIQUE"),
            _column(1, "id", "z_pkey", "PRIMARY KEY"),
            _column(1, "id", "b_fkey", "FOREIGN KEY"),
        ]

        result = collapse_constraint_rows(columns)

        assert len(result) == 1
        assert result[0].constraint_type == "PRIMARY KEY"
        assert result[0].constraint_name == "z_pkey"

    def test_smallest_constraint_name_wins_without_primary_key(self):
        columns = [
            _column(2, "user_id", "orders_user_id_fkey", "FOREIGN KEY"),
            _column(2, "user_id", "orders_user_id_key", "UNIQUE"),
        ]

        result = collapse_constraint_rows(columns)

        assert result[0].constraint_name == "orders_user_id_fkey"

    def test_result_independent_of_row_order(self):
        rows = [
            _column(1, "id", "t_unique", "UNIQUE"),
            _column(1, "id", "t_fkey", "FOREIGN KEY"),
        ]

        assert collapse_constraint_rows(rows) == collapse_constraint_rows(list(reversed(rows)))

    def test_constrained_row_beats_unconstrained(self):
        columns = [_column(1, "id"), _column(1, "id", "t_key", "UNIQUE")]

        result = collapse_constraint_rows(columns)

        assert result[0].constraint_type == "UNIQUE"

    def test_ordinal_order_strictly_increasing(self):
        columns = [
            _column(1, "a"),
            _column(2, "b", "x_key", "UNIQUE"),
            _column(2, "b", "x_pkey", "PRIMARY KEY"),
            _column(3, "c"),
        ]

        positions = [c.ordinal_position for c in collapse_constraint_rows(columns)]

        assert positions == [1, 2, 3]

    def test_empty(self):
        assert collapse_constraint_rows([]) == []


class TestGeneralDatabase:
    """Tests for the connection lifecycle helper."""

    def test_connect_stores_connection(self, pg_settings):
        connection = MockConnection()
        general = GeneralDatabase(pg_settings)

        result = general.connect(lambda: connection, MockDriverError)

        assert result is connection
        assert general.connection is connection
        assert general.driver_error is MockDriverError

    def test_connect_reuses_open_connection(self, pg_settings):
        general = GeneralDatabase(pg_settings)
        first = general.connect(lambda: MockConnection(), MockDriverError)

        second = general.connect(lambda: MockConnection(), MockDriverError)

        assert second is first

    def test_connect_failure_raises_connection_error(self, pg_settings):
        general = GeneralDatabase(pg_settings)

        def refuse():
            raise MockDriverError("connection refused")

        with pytest.raises(ConnectionError) as exc_info:
            general.connect(refuse, MockDriverError)

        assert "connection refused" in exc_info.value.message
        assert exc_info.value.details["host"] == "127.0.0.1"
        assert exc_info.value.details["port"] == 5432
        assert isinstance(exc_info.value.__cause__, MockDriverError)
        assert general.connection is None

    def test_execute_requires_connection(self, pg_settings):
        general = GeneralDatabase(pg_settings)

        with pytest.raises(ConnectionError, match="not connected"):
            general.execute("SELECT 1")

    def test_execute_returns_rows(self, pg_settings):
        connection = MockConnection()
        connection.add_response(r"SELECT 1", [(1,)])
        general = GeneralDatabase(pg_settings)
        general.connect(lambda: connection, MockDriverError)

        assert general.execute("SELECT 1") == [(1,)]
        assert connection.executed == [("SELECT 1", None)]

    def test_close(self, pg_settings):
        connection = MockConnection()
        general = GeneralDatabase(pg_settings)
        general.connect(lambda: connection, MockDriverError)
        general.columns_statement_prepared = True

        general.close()

        assert connection.closed
        assert general.connection is None
        assert general.columns_statement_prepared is False

    def test_close_without_connection(self, pg_settings):
        GeneralDatabase(pg_settings).close()

    def test_is_string_in_slice(self, pg_settings):
        general = GeneralDatabase(pg_settings)

        assert general.is_string_in_slice("text", ["varchar", "text"])
        assert not general.is_string_in_slice("Text", ["varchar", "text"])


class TestNewDatabase:
    """Tests for the database factory."""

    def test_postgres(self, pg_settings):
        assert isinstance(new_database(pg_settings), PostgreSQL)

    def test_mysql(self, mysql_settings):
        assert isinstance(new_database(mysql_settings), MySQL)

    def test_unsupported(self, tmp_path):
        settings = Settings(db_type="sqlite", output_file_path=str(tmp_path))

        with pytest.raises(ConfigurationError):
            new_database(settings)

    def test_context_manager_closes(self, pg_settings):
        connection = MockConnection()

        with new_database(pg_settings) as database:
            database._general.connect(lambda: connection, MockDriverError)

        assert connection.closed
