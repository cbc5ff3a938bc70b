"""
Database type enumeration for driver-specific parameter handling.

Maps each supported database to its DB-API driver conventions: the
placeholder style used in SQL text and how binary parameters are
wrapped before being handed to the driver.
"""

from enum import Enum

import psycopg2


class DatabaseType(str, Enum):
    """
    Enumeration of supported database types.

    Inherits from str for JSON serialization compatibility and
    easy comparison with string values.
    """

    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"
    UNKNOWN = "unknown"

    @classmethod
    def from_cursor(cls, cursor) -> "DatabaseType":
        """
        Detect database type from cursor class name.

        Args:
            cursor: Database cursor object

        Returns:
            DatabaseType enum value
        """
        cursor_class = type(cursor)
        cursor_name = f"{cursor_class.__module__}.{cursor_class.__name__}".lower()

        if "psycopg" in cursor_name or "postgres" in cursor_name:
            return cls.POSTGRESQL
        elif "pyodbc" in cursor_name or "odbc" in cursor_name:
            return cls.SQLSERVER
        else:
            return cls.UNKNOWN

    @property
    def placeholder(self) -> str:
        """Positional parameter placeholder for this driver's paramstyle."""
        if self == DatabaseType.POSTGRESQL:
            return "%s"
        return "?"

    def quote_identifier(self, identifier: str) -> str:
        """
        Quote identifier based on database type.

        Embedded quote characters are doubled.
        """
        if self == DatabaseType.POSTGRESQL:
            return '"' + identifier.replace('"', '""') + '"'
        elif self == DatabaseType.SQLSERVER:
            return "[" + identifier.replace("]", "]]") + "]"
        else:
            return identifier

    def wrap_binary(self, data: bytes):
        """
        Wrap bytes for binding as a binary parameter.

        psycopg2 needs an explicit Binary adapter to send bytea; pyodbc
        binds bytes as varbinary directly.
        """
        if self == DatabaseType.POSTGRESQL:
            return psycopg2.Binary(data)
        return data
