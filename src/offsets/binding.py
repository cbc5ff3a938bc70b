"""
Statement binding for incremental offsets.

Statement is the capability an offset needs from the query layer: bind a
64-bit integer or a byte sequence at a 1-based parameter position.
ParameterBinder implements it on top of a DB-API cursor (pyodbc for SQL
Server, psycopg2 for PostgreSQL).
"""

import logging
from typing import Any, Protocol

from src.utils.database_types import DatabaseType

from .errors import BindError, describe

logger = logging.getLogger(__name__)

_UNBOUND = object()


class Statement(Protocol):
    """Positional parameter binding capability."""

    def bind_long(self, position: int, value: int) -> None: ...

    def bind_bytes(self, position: int, value: bytes) -> None: ...


class ParameterBinder:
    """
    Collects positional parameters for a parameterized query.

    DB-API drivers take parameters as a sequence at execute time, so the
    binder holds one slot per placeholder and fills them by position.

    Usage:
        binder = ParameterBinder(
            "SELECT * FROM orders WHERE id > ? ORDER BY id",
            slot_count=1,
            db_type=DatabaseType.SQLSERVER,
        )
        last_offset.bind(binder, 1)
        binder.execute(cursor)
    """

    def __init__(
        self,
        sql: str,
        slot_count: int,
        db_type: DatabaseType = DatabaseType.SQLSERVER,
    ):
        """
        Initialize binder

        Args:
            sql: Parameterized SQL text using the driver's placeholder style
            slot_count: Number of positional parameters in sql
            db_type: Database the statement will run against
        """
        if slot_count < 0:
            raise ValueError(f"slot_count must be non-negative, got {slot_count}")

        self.sql = sql
        self.slot_count = slot_count
        self.db_type = db_type
        self._slots: list[Any] = [_UNBOUND] * slot_count
        self._closed = False

    @classmethod
    def for_cursor(cls, cursor, sql: str, slot_count: int) -> "ParameterBinder":
        """
        Build a binder for the driver behind cursor.

        Args:
            cursor: pyodbc or psycopg2 cursor the statement will run on
            sql: Parameterized SQL text
            slot_count: Number of positional parameters in sql
        """
        db_type = DatabaseType.from_cursor(cursor)
        if db_type == DatabaseType.UNKNOWN:
            logger.warning(
                f"Unrecognized cursor {type(cursor).__name__}, binding with '?' placeholders"
            )
        return cls(sql, slot_count, db_type=db_type)

    @property
    def closed(self) -> bool:
        return self._closed

    def bind_long(self, position: int, value: int) -> None:
        """Bind a signed 64-bit integer at position."""
        index = self._slot_index(position)
        self._slots[index] = int(value)

    def bind_bytes(self, position: int, value: bytes) -> None:
        """Bind a byte sequence at position."""
        index = self._slot_index(position)
        self._slots[index] = self.db_type.wrap_binary(bytes(value))

    def parameters(self) -> tuple:
        """
        Bound parameters in position order.

        Raises:
            BindError: If the binder is closed or a slot is still unbound
        """
        self._check_open()

        for index, slot in enumerate(self._slots):
            if slot is _UNBOUND:
                raise BindError(f"Parameter {index + 1} is not bound", position=index + 1)

        return tuple(self._slots)

    def execute(self, cursor):
        """
        Execute the statement on a DB-API cursor.

        Driver errors propagate unchanged.

        Args:
            cursor: pyodbc or psycopg2 cursor

        Returns:
            The cursor, for fetching results
        """
        params = self.parameters()
        logger.debug(f"Executing statement with {len(params)} parameter(s)")
        cursor.execute(self.sql, params)
        return cursor

    def clear(self) -> None:
        """Unbind all parameters so the statement can be reused."""
        self._check_open()
        self._slots = [_UNBOUND] * self.slot_count

    def close(self) -> None:
        """Release the binder; further binds fail with BindError."""
        self._closed = True
        self._slots = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _check_open(self) -> None:
        if self._closed:
            logger.error("Attempted to use a closed statement")
            raise BindError("Statement is closed")

    def _slot_index(self, position: int) -> int:
        """Validate a 1-based position and return its slot index."""
        self._check_open()

        if isinstance(position, bool) or not isinstance(position, int):
            raise BindError(
                f"Parameter position must be an int, got {type(position).__name__}",
                position=position,
            )

        if not 1 <= position <= self.slot_count:
            logger.error(
                f"Parameter position {describe(position)} out of range 1..{self.slot_count}"
            )
            raise BindError(
                f"Parameter position {describe(position)} out of range 1..{self.slot_count}",
                position=position,
            )

        return position - 1


def resume_predicate(column: str, db_type: DatabaseType = DatabaseType.SQLSERVER) -> str:
    """
    WHERE-clause fragment that resumes a scan after the last offset.

    The fragment has one placeholder, bound with IncrementalValue.bind.

    Args:
        column: Tracked column name
        db_type: Database the statement will run against

    Returns:
        e.g. '[id] > ?' for SQL Server, '"id" > %s' for PostgreSQL
    """
    return f"{db_type.quote_identifier(column)} > {db_type.placeholder}"
