"""
Error taxonomy for incremental offset values.

All errors derive from OffsetValueError so callers can catch the whole
family, while the standard-library bases (TypeError, ValueError) keep
them usable with generic handlers.
"""

from typing import Any

_MAX_DESCRIBED_LENGTH = 200


def describe(value: Any) -> str:
    """
    Bounded repr of a value for error messages.

    Integers too large to print in full are described by bit length, and
    reprs that cannot be built (int string conversion limit) or are too
    long are shortened, so building an error message never raises.
    """
    if isinstance(value, int) and not isinstance(value, bool) and value.bit_length() > 128:
        return f"<{type(value).__name__} of {value.bit_length()} bits>"

    try:
        text = repr(value)
    except ValueError:
        return f"<unprintable {type(value).__name__}>"

    if len(text) > _MAX_DESCRIBED_LENGTH:
        return text[:_MAX_DESCRIBED_LENGTH] + "..."
    return text


class OffsetValueError(Exception):
    """Base class for incremental offset value errors."""


class UnsupportedTypeError(OffsetValueError, TypeError):
    """Raw value does not match any recognized offset kind."""

    def __init__(self, value: Any):
        self.value_type = type(value)
        super().__init__(
            f"Unsupported value (type): {describe(value)} ({self.value_type.__qualname__})"
        )


class DecodeError(OffsetValueError, ValueError):
    """Textual offset is not valid base64."""

    def __init__(self, text: str, reason: str):
        self.text = text
        super().__init__(f"Invalid base64 offset {describe(text)}: {reason}")


class IntegralRangeError(OffsetValueError, ValueError):
    """Numeric offset cannot be represented as a signed 64-bit integer."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Numeric offset {describe(value)} is outside the signed 64-bit range")


class BindError(OffsetValueError):
    """Statement rejected a parameter bind."""

    def __init__(self, message: str, position: Any = None):
        self.position = position
        super().__init__(message)
