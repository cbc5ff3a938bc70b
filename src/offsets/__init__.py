"""
Incremental offset values for change-tracking sources.

Captures the tracked-column value of the last processed row, binds it
into the next poll's query, and renders it for durable offset storage.

Components:
- values: IntegralValue and OpaqueValue offset variants
- classifier: raw column value and stored offset classification
- binding: Statement protocol and DB-API ParameterBinder
- observers: optional diagnostic hooks
- config: environment-driven diagnostic settings

Usage:
    from src.offsets import ParameterBinder, classify, restore, resume_predicate

    last_offset = restore(stored_offset)
    sql = f"SELECT id, name FROM orders WHERE {resume_predicate('id')} ORDER BY id"
    with ParameterBinder.for_cursor(cursor, sql, slot_count=1) as binder:
        last_offset.bind(binder, 1)
        binder.execute(cursor)
        last_offset = classify(cursor.fetchall()[-1][0]) or last_offset
    offset_storage.save(last_offset.render())
"""

from .binding import ParameterBinder, Statement, resume_predicate
from .classifier import classify, restore
from .config import OffsetSettings, configure_from_env
from .errors import (
    BindError,
    DecodeError,
    IntegralRangeError,
    OffsetValueError,
    UnsupportedTypeError,
)
from .observers import (
    LoggingObserver,
    SpanEventObserver,
    ValueObserver,
    clear_observers,
    register_observer,
    unregister_observer,
)
from .values import IncrementalValue, IntegralValue, OpaqueValue

__version__ = "1.0.0"
__all__ = [
    "IncrementalValue",
    "IntegralValue",
    "OpaqueValue",
    "classify",
    "restore",
    "Statement",
    "ParameterBinder",
    "resume_predicate",
    "OffsetValueError",
    "UnsupportedTypeError",
    "DecodeError",
    "IntegralRangeError",
    "BindError",
    "ValueObserver",
    "LoggingObserver",
    "SpanEventObserver",
    "register_observer",
    "unregister_observer",
    "clear_observers",
    "OffsetSettings",
    "configure_from_env",
]
