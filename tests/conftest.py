"""Shared pytest fixtures for tables-cli tests."""

import os

import pytest

from tables_cli.config import Settings
from tables_cli.database import Column, MySQL, PostgreSQL, Table
from tests.fixtures import MockConnection, MockDriverError, catalog_row


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep TABLES_* variables of the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("TABLES_"):
            monkeypatch.delenv(name)


@pytest.fixture
def pg_settings(tmp_path):
    """Verified settings for a PostgreSQL run writing into tmp_path."""
    return Settings(db_type="pg", db_schema="public", output_file_path=str(tmp_path)).verify()


@pytest.fixture
def mysql_settings(tmp_path):
    """Verified settings for a MySQL run writing into tmp_path."""
    return Settings(
        db_type="mysql",
        user="root",
        db_name="shop",
        db_schema="shop",
        output_file_path=str(tmp_path),
    ).verify()


@pytest.fixture
def mock_connection():
    """A fresh mock connection for each test."""
    return MockConnection()


@pytest.fixture
def postgres(pg_settings, mock_connection):
    """PostgreSQL database connected to the mock connection."""
    database = PostgreSQL(pg_settings)
    database._general.connect(lambda: mock_connection, MockDriverError)
    return database


@pytest.fixture
def mysql(mysql_settings, mock_connection):
    """MySQL database connected to the mock connection."""
    database = MySQL(mysql_settings)
    database._general.connect(lambda: mock_connection, MockDriverError)
    return database


@pytest.fixture
def shop_catalog():
    """Column rows of a small PostgreSQL shop schema, by table name."""
    return {
        "orders": [
            catalog_row(1, "id", "integer", "nextval('orders_id_seq'::regclass)", "NO",
                        numeric_precision=32, constraint_name="orders_pkey", constraint_type="PRIMARY KEY"),
            catalog_row(2, "user_id", "integer", None, "NO",
                        numeric_precision=32, constraint_name="orders_user_id_fkey", constraint_type="FOREIGN KEY"),
            catalog_row(3, "total", "numeric", None, "YES", numeric_precision=10),
            catalog_row(4, "created_at", "timestamp without time zone", "now()", "NO"),
        ],
        "users": [
            catalog_row(1, "id", "serial", "nextval('users_id_seq'::regclass)", "NO",
                        numeric_precision=32, constraint_name="users_pkey", constraint_type="PRIMARY KEY"),
            catalog_row(2, "email", "character varying", None, "NO", character_maximum_length=255,
                        constraint_name="users_email_key", constraint_type="UNIQUE"),
            catalog_row(3, "nickName", "text", None, "YES"),
        ],
    }


@pytest.fixture
def shop_connection(mock_connection, shop_catalog):
    """Mock connection answering the table and column queries of the shop schema."""
    mock_connection.add_response(r"information_schema\.tables", [("orders",), ("users",)])
    mock_connection.add_response(r"^PREPARE", [])
    mock_connection.add_response(r"^EXECUTE", lambda params: shop_catalog[params[0]])
    return mock_connection


@pytest.fixture
def id_column():
    """Serial primary key column."""
    return Column(
        ordinal_position=1,
        name="id",
        data_type="serial",
        default_value="nextval('t_id_seq')",
        is_nullable=False,
        constraint_name="t_pkey",
        constraint_type="PRIMARY KEY",
    )


@pytest.fixture
def email_column():
    """Non-nullable varchar(255) column."""
    return Column(
        ordinal_position=2,
        name="email",
        data_type="character varying",
        is_nullable=False,
        character_maximum_length=255,
    )


@pytest.fixture
def sample_table(id_column, email_column):
    return Table(name="user_account", columns=[id_column, email_column])
