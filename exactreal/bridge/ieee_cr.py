"""
IEEE-754 and integer conversions for constructive reals.

Conversion to a float evaluates about 60 significant bits and rounds that
approximation once to a double, so the result is within one ulp of the
true value and exact when the value is itself a double. Values that are
indistinguishable from zero at 2**-1080 (below the smallest subnormal)
convert to 0.0.
"""

import math
import numbers
import warnings
from typing import Optional, Union

import numpy as np

from ..core import CReal, CancellationToken, from_float, from_int

# Slightly finer than the smallest subnormal double.
_UNDERFLOW_PREC = -1080

# Bits evaluated beyond the leading digit before rounding to 53.
_GUARD_BITS = 60


def from_ieee(x: Union[float, int, np.floating, np.integer]) -> CReal:
    """
    Create the constructive real exactly equal to an IEEE or integer value.

    Raises:
        DomainError: For NaN and infinities
    """
    if isinstance(x, (numbers.Integral, np.integer)):
        return from_int(x)
    if isinstance(x, (float, np.floating)):
        return from_float(x)
    raise TypeError(f"Unsupported type for from_ieee: {type(x).__name__}")


def to_ieee(x: CReal, token: Optional[CancellationToken] = None) -> float:
    """
    Convert to a double within one ulp of x.

    Values beyond the double range convert to a signed infinity with a
    RuntimeWarning.
    """
    msd = x.iter_msd(_UNDERFLOW_PREC, token)
    if msd is None:
        return 0.0
    needed_prec = msd - _GUARD_BITS
    appr = x.get_appr(needed_prec, token)
    try:
        # int true division and int -> float conversion both round once
        if needed_prec >= 0:
            return float(appr << needed_prec)
        return appr / (1 << -needed_prec)
    except OverflowError:
        warnings.warn("constructive real overflows double precision", RuntimeWarning)
        return math.copysign(math.inf, appr)


def to_ieee32(x: CReal, token: Optional[CancellationToken] = None) -> np.float32:
    """Convert to single precision (via the nearest double)."""
    with np.errstate(over="ignore"):
        return np.float32(to_ieee(x, token))


def to_int(x: CReal, token: Optional[CancellationToken] = None) -> int:
    """An integer that differs from x by less than one."""
    return x.get_appr(0, token)

