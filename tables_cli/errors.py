"""Error types for tables-cli."""

from typing import Any, Dict, List, Optional


class TablesError(Exception):
    """Base exception for tables-cli errors.

    ``details`` holds the context of the failure (database type, schema,
    table, offending setting) for verbose reporting.
    """

    def __init__(self, message: str, code: str = "TABLES_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def context_lines(self) -> List[str]:
        """Render the details as ``key: value`` lines, passwords masked."""
        lines = []
        for key, value in self.details.items():
            if key == "password" and value:
                value = "***"
            lines.append(f"{key}: {value!r}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TablesError):
    """Invalid or unsupported settings, raised before any database I/O."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class ConnectionError(TablesError):
    """Error opening or authenticating the database connection."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class QueryError(TablesError):
    """A catalog query failed.

    Carries the schema and, for column queries, the table the query was
    issued for.
    """

    def __init__(
        self,
        message: str,
        schema: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if schema is not None:
            details["schema"] = schema
        if table is not None:
            details["table"] = table
        super().__init__(message, code="QUERY_ERROR", details=details)
        self.schema = schema
        self.table = table
