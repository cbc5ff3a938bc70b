"""
Property-based tests for incremental offset values.

Tests properties related to:
- Render/restore round trips for both variants
- Base64 canonicalisation
- Truncation of fractional numbers
- Equality and hashing over payloads
"""

import base64
import math
from decimal import Decimal

from hypothesis import given, strategies as st

from src.offsets import IntegralValue, OpaqueValue, classify, restore
from tests.helpers import RecordingStatement

int64 = st.integers(min_value=-(2**63), max_value=2**63 - 1)


@given(n=int64)
def test_integral_render_is_identity(n: int):
    """Rendering an integral offset returns exactly the integer."""
    assert IntegralValue(n).render() == n


@given(n=int64, position=st.integers(min_value=1, max_value=100))
def test_integral_bind_writes_exact_value(n: int, position: int):
    """Binding writes exactly n at the requested position."""
    statement = RecordingStatement()

    IntegralValue(n).bind(statement, position)

    assert statement.calls == [("long", position, n)]


@given(data=st.binary(max_size=256))
def test_opaque_render_decodes_to_original(data: bytes):
    """Decoding the rendered text yields the original bytes."""
    rendered = OpaqueValue(data).render()

    assert base64.b64decode(rendered, validate=True) == data


@given(data=st.binary(max_size=256))
def test_from_text_rerenders_canonically(data: bytes):
    """from_text(s).render() is the canonical encoding of decode(s)."""
    canonical = base64.b64encode(data).decode("ascii")
    unpadded = canonical.rstrip("=")

    assert OpaqueValue.from_text(canonical).render() == canonical
    assert OpaqueValue.from_text(unpadded).render() == canonical


@given(value=st.one_of(int64.map(IntegralValue), st.binary(max_size=64).map(OpaqueValue)))
def test_restore_inverts_render(value):
    """A value survives the trip through offset storage."""
    assert restore(value.render()) == value


@given(x=st.floats(min_value=-1e15, max_value=1e15, allow_nan=False))
def test_float_truncates_toward_zero(x: float):
    """Fractional parts are dropped, never rounded."""
    assert classify(x) == IntegralValue(math.trunc(x))


@given(x=st.decimals(min_value=-10**12, max_value=10**12, allow_nan=False, allow_infinity=False, places=3))
def test_decimal_truncates_toward_zero(x: Decimal):
    assert classify(x) == IntegralValue(int(x))


@given(a=st.binary(max_size=32), b=st.binary(max_size=32))
def test_opaque_equality_matches_bytes(a: bytes, b: bytes):
    """Opaque offsets are equal exactly when their bytes are."""
    assert (OpaqueValue(a) == OpaqueValue(b)) == (a == b)
    if a == b:
        assert hash(OpaqueValue(a)) == hash(OpaqueValue(b))


@given(n=int64, data=st.binary(max_size=16))
def test_variants_never_equal(n: int, data: bytes):
    assert IntegralValue(n) != OpaqueValue(data)
