import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from exactreal import DomainError
from exactreal.bridge.ieee_cr import from_ieee, to_ieee


@given(st.floats(allow_nan=False, allow_infinity=False, width=64))
def test_roundtrip_finite(x: float):
    cr = from_ieee(x)
    y = to_ieee(cr)
    assert y == x


@given(st.floats(allow_nan=False, allow_infinity=False, width=32))
def test_roundtrip_single_precision(x: float):
    assert to_ieee(from_ieee(x)) == x


@given(st.integers(min_value=-(2**53), max_value=2**53))
def test_roundtrip_integers(n: int):
    assert to_ieee(from_ieee(n)) == float(n)


@pytest.mark.parametrize("x", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_rejected(x: float):
    with pytest.raises(DomainError):
        from_ieee(x)


def test_signed_zero_collapses():
    """Both signed zeros convert back to +0.0."""
    for x in (+0.0, -0.0):
        y = to_ieee(from_ieee(x))
        assert y == 0.0
        assert not math.copysign(1.0, y) < 0
