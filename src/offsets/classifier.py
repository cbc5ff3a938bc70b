"""
Classification of raw tracked-column values into incremental offsets.

classify() is the single place where the runtime shape of a raw column
value decides which offset variant represents it. restore() does the
same for values read back from offset storage at startup.
"""

import logging
import math
import numbers
from decimal import Decimal
from typing import Any

from opentelemetry import trace
from prometheus_client import Counter

from src.utils.tracing import trace_operation

from .errors import IntegralRangeError, OffsetValueError, UnsupportedTypeError
from .values import INT64_MAX, INT64_MIN, IncrementalValue, IntegralValue, OpaqueValue

logger = logging.getLogger(__name__)

# Largest adjusted() exponent a Decimal within 64 bits can have
_INT64_DIGITS = 18


# Metrics
OFFSET_CLASSIFICATIONS = Counter(
    "incremental_offset_classifications_total",
    "Raw tracked-column values classified into offsets",
    ["outcome"],  # absent, integral, opaque, error
)


def classify(raw: Any) -> IncrementalValue | None:
    """
    Map a raw tracked-column value to its offset representation.

    Classification order:
    1. None -> None (no offset recorded yet)
    2. real number -> IntegralValue, truncated toward zero
    3. bytes, bytearray, memoryview -> OpaqueValue (copied)
    4. str -> OpaqueValue decoded from base64

    Booleans and complex numbers are not offsets.

    Args:
        raw: Value read from the tracked column of a result row

    Returns:
        IncrementalValue, or None if raw is None

    Raises:
        UnsupportedTypeError: If raw has no offset representation
        IntegralRangeError: If a number is non-finite or outside 64 bits
        DecodeError: If a string is not valid base64
    """
    if raw is None:
        OFFSET_CLASSIFICATIONS.labels(outcome="absent").inc()
        return None

    try:
        value = _classify_present(raw)
    except OffsetValueError:
        OFFSET_CLASSIFICATIONS.labels(outcome="error").inc()
        raise

    OFFSET_CLASSIFICATIONS.labels(outcome=value.kind).inc()
    return value


def restore(stored: Any) -> IncrementalValue | None:
    """
    Rebuild an offset from the form written to offset storage.

    Numbers were written by IntegralValue.render() and strings by
    OpaqueValue.render(); nothing else is a valid stored offset.

    Args:
        stored: Value read back from offset storage

    Returns:
        IncrementalValue, or None if nothing was stored

    Raises:
        UnsupportedTypeError: If stored is neither an int nor a str
        IntegralRangeError: If a stored number is outside 64 bits
        DecodeError: If a stored string is not valid base64
    """
    with trace_operation(
        "restore_incremental_value",
        kind=trace.SpanKind.INTERNAL,
        stored_type=type(stored).__name__,
    ):
        if stored is None:
            logger.debug("No stored offset, starting from the beginning")
            return None

        if isinstance(stored, int) and not isinstance(stored, bool):
            value = IntegralValue(stored)
        elif isinstance(stored, str):
            value = OpaqueValue.from_text(stored)
        else:
            logger.error(f"Stored offset has unsupported type: {type(stored).__name__}")
            raise UnsupportedTypeError(stored)

        logger.info(f"Restored {value.kind} offset from storage")
        return value


def _classify_present(raw: Any) -> IncrementalValue:
    """Classify a non-null raw value."""
    if isinstance(raw, bool):
        raise UnsupportedTypeError(raw)

    if isinstance(raw, (numbers.Real, Decimal)):
        return IntegralValue(_truncate(raw))

    if isinstance(raw, (bytes, bytearray, memoryview)):
        return OpaqueValue(raw)

    if isinstance(raw, str):
        return OpaqueValue.from_text(raw)

    logger.error(f"Cannot classify offset of type {type(raw).__name__}")
    raise UnsupportedTypeError(raw)


def _truncate(number: numbers.Real | Decimal) -> int:
    """Drop the fractional part of a number, rounding toward zero."""
    if isinstance(number, int):
        return number

    # Range checks run before int() so huge exponents never expand
    if isinstance(number, Decimal):
        if not number.is_finite() or number.adjusted() > _INT64_DIGITS:
            raise IntegralRangeError(number)
    elif isinstance(number, float):
        if not math.isfinite(number) or not INT64_MIN <= number < INT64_MAX + 1:
            raise IntegralRangeError(number)

    return int(number)
