"""
Incremental offset values.

An incremental value is the last known position of a change-tracking
scan. It comes in two variants:

- IntegralValue: a signed 64-bit numeric offset, persisted as a number
- OpaqueValue: an arbitrary byte sequence (row version, timestamp bytes),
  persisted as canonical base64 text

Both are frozen dataclasses, so equality and hashing follow the payload
and instances can be shared across threads freely.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import ClassVar

from .errors import DecodeError, IntegralRangeError
from .observers import notify

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class IncrementalValue:
    """
    Base class for the last known offset of a tracked column.

    Subclasses bind themselves into a statement and render themselves
    into the form written to offset storage.
    """

    kind: ClassVar[str] = ""

    def bind(self, statement, position: int) -> None:
        """
        Bind this offset into a parameterized statement.

        Args:
            statement: Object implementing the Statement protocol
            position: 1-based parameter position

        Raises:
            BindError: Propagated unchanged from the statement
        """
        raise NotImplementedError

    def render(self) -> int | str:
        """Return the durable representation written to offset storage."""
        raise NotImplementedError


@dataclass(frozen=True)
class IntegralValue(IncrementalValue):
    """Monotonically increasing 64-bit numeric offset."""

    kind: ClassVar[str] = "integral"

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"IntegralValue requires an int, got {type(self.value).__qualname__}"
            )
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise IntegralRangeError(self.value)
        notify("on_created", self)

    def bind(self, statement, position: int) -> None:
        statement.bind_long(position, self.value)
        notify("on_bound", self, position)

    def render(self) -> int:
        notify("on_rendered", self, self.value)
        return self.value


@dataclass(frozen=True)
class OpaqueValue(IncrementalValue):
    """
    Offset held as an opaque byte sequence.

    The payload is always stored as an immutable bytes copy, so later
    mutation of a bytearray or memoryview passed in has no effect.
    """

    kind: ClassVar[str] = "opaque"

    value: bytes = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"OpaqueValue requires a bytes-like value, got {type(self.value).__qualname__}"
            )
        # frozen dataclass: assign the defensive copy through object.__setattr__
        object.__setattr__(self, "value", bytes(self.value))
        notify("on_created", self)

    @classmethod
    def from_text(cls, text: str) -> "OpaqueValue":
        """
        Build an opaque offset from its base64 text form.

        Padding is optional on input; characters outside the standard
        base64 alphabet are rejected.

        Args:
            text: Base64 text, as rendered by a previous poll

        Returns:
            OpaqueValue holding the decoded bytes

        Raises:
            DecodeError: If text is not valid base64
        """
        return cls(decode_base64(text))

    def bind(self, statement, position: int) -> None:
        statement.bind_bytes(position, self.value)
        notify("on_bound", self, position)

    def render(self) -> str:
        rendered = encode_base64(self.value)
        notify("on_rendered", self, rendered)
        return rendered

    def __repr__(self) -> str:
        return f"OpaqueValue({encode_base64(self.value)!r})"


def encode_base64(data: bytes) -> str:
    """Canonical padded standard base64 text for data."""
    return base64.b64encode(data).decode("ascii")


def decode_base64(text: str) -> bytes:
    """
    Decode standard-alphabet base64, restoring missing padding.

    Raises:
        DecodeError: If text contains characters outside the alphabet
            or has an impossible length
    """
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError as e:
        logger.error(f"Base64 offset contains non-ASCII characters: {text!r}")
        raise DecodeError(text, "non-ASCII characters") from e

    stripped = raw.rstrip(b"=")
    if len(raw) - len(stripped) > 2:
        logger.error(f"Base64 offset has excess padding: {text!r}")
        raise DecodeError(text, "excess padding")

    if len(stripped) % 4 == 1:
        logger.error(f"Base64 offset has invalid length: {text!r}")
        raise DecodeError(text, f"invalid length {len(stripped)}")

    padded = stripped + b"=" * (-len(stripped) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        logger.error(f"Failed to decode base64 offset {text!r}: {e}")
        raise DecodeError(text, str(e)) from e
