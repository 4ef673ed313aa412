"""Test fixtures package."""

from .mock_connection import MockConnection, MockCursor, MockDriverError, catalog_row

__all__ = [
    "MockConnection",
    "MockCursor",
    "MockDriverError",
    "catalog_row",
]
