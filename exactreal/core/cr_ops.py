"""
Constructive real arithmetic operations.

Every operation returns a new node and performs no numeric work, except the
transcendental functions and ``select``, which look at a coarse
approximation of their argument to choose a range reduction (or to fix the
selector's sign) before building the result. Those take an optional
cancellation token for that probe.
"""

from typing import Optional

from .cancellation import CancellationToken
from .cr_scalar import CReal, CRTag, as_creal, from_int
from .errors import DomainError
from .precision_config import PrecisionConfig, check_precision
from .scaling import div_trunc


def cr_add(x, y) -> CReal:
    """Sum of two values."""
    return CReal(CRTag.SUM, (as_creal(x), as_creal(y)))


def cr_neg(x) -> CReal:
    """Additive inverse."""
    return CReal(CRTag.NEGATE, (as_creal(x),))


def cr_sub(x, y) -> CReal:
    """Difference x - y."""
    return cr_add(x, cr_neg(y))


def cr_mul(x, y) -> CReal:
    """Product of two values."""
    return CReal(CRTag.PRODUCT, (as_creal(x), as_creal(y)))


def cr_inv(x) -> CReal:
    """
    Multiplicative inverse.

    Evaluating the inverse of zero raises PrecisionOverflowError (or is
    cancelled) rather than returning.
    """
    return CReal(CRTag.INVERSE, (as_creal(x),))


def cr_div(x, y) -> CReal:
    """Quotient x / y."""
    return cr_mul(x, cr_inv(y))


def cr_shift_left(x, n: int) -> CReal:
    """
    Multiply by 2**n.

    Raises:
        PrecisionOverflowError: If the shift count is out of range
    """
    check_precision(n)
    return CReal(CRTag.SHIFT, (as_creal(x),), n)


def cr_shift_right(x, n: int) -> CReal:
    """Multiply by 2**-n."""
    check_precision(n)
    return CReal(CRTag.SHIFT, (as_creal(x),), -n)


def cr_select(selector, x, y, token: Optional[CancellationToken] = None) -> CReal:
    """
    ``x`` if selector < 0, else ``y``.

    Requires x == y whenever the selector is exactly zero; the result is
    undefined otherwise. Since comparisons may diverge, this is the usual
    way to express a conditional on constructive reals.
    """
    selector = as_creal(selector)
    node = CReal(CRTag.SELECT, (selector, as_creal(x), as_creal(y)))
    rough = selector.get_appr(PrecisionConfig.get_select_probe_prec(), token)
    node.selector_sign = (rough > 0) - (rough < 0)
    return node


def cr_max(x, y, token: Optional[CancellationToken] = None) -> CReal:
    """The larger of two values."""
    return cr_select(cr_sub(x, y), y, x, token)


def cr_min(x, y, token: Optional[CancellationToken] = None) -> CReal:
    """The smaller of two values."""
    return cr_select(cr_sub(x, y), x, y, token)


def cr_abs(x, token: Optional[CancellationToken] = None) -> CReal:
    """Absolute value, expressed as a selection since it is not a conditional."""
    x = as_creal(x)
    return cr_select(x, cr_neg(x), x, token)


def atan_reciprocal(n: int) -> CReal:
    """
    arctan(1/n) for an integer n >= 2.

    Raises:
        ValueError: If n < 2
    """
    if n < 2:
        raise ValueError(f"atan_reciprocal needs an integer >= 2, got {n}")
    return CReal(CRTag.ATAN_RECIPROCAL, payload=int(n))


def prescaled_exp(x) -> CReal:
    """e**x for |x| < 1/2; no range reduction."""
    return CReal(CRTag.EXP, (as_creal(x),))


def prescaled_ln(x) -> CReal:
    """ln(1 + x) for |x| < 1/2; no range reduction."""
    return CReal(CRTag.LN, (as_creal(x),))


def prescaled_cos(x) -> CReal:
    """cos(x) for |x| < 1; no range reduction."""
    return CReal(CRTag.COS, (as_creal(x),))


def simple_ln(x) -> CReal:
    """ln(x) for x close to 1."""
    return prescaled_ln(cr_sub(x, from_int(1)))


def cr_exp(x, token: Optional[CancellationToken] = None) -> CReal:
    """
    The exponential function e**x.

    Negative arguments go through 1/e**-x; large ones are halved and the
    result squared until the argument is small enough for the series.
    """
    x = as_creal(x)
    rough_appr = x.get_appr(-10, token)
    if rough_appr < 0:
        return cr_inv(cr_exp(cr_neg(x), token))
    if rough_appr > 2:
        square_root = cr_exp(cr_shift_right(x, 1), token)
        return cr_mul(square_root, square_root)
    return prescaled_exp(x)


def cr_ln(x, token: Optional[CancellationToken] = None) -> CReal:
    """
    The natural logarithm.

    Raises:
        DomainError: If x is (detectably) negative
    """
    from .constants import LN2
    x = as_creal(x)
    rough_appr = x.get_appr(-4, token)  # in sixteenths
    if rough_appr < 0:
        raise DomainError("logarithm of a negative number")
    if rough_appr <= 8:  # 1/2
        return cr_neg(cr_ln(cr_inv(x), token))
    if rough_appr >= 24:  # 3/2
        if rough_appr <= 64:
            quarter = cr_ln(cr_sqrt(cr_sqrt(x)), token)
            return cr_shift_left(quarter, 2)
        extra_bits = rough_appr.bit_length() - 3
        scaled_result = cr_ln(cr_shift_right(x, extra_bits), token)
        return cr_add(scaled_result, cr_mul(from_int(extra_bits), LN2))
    return simple_ln(x)


def cr_sqrt(x) -> CReal:
    """
    The square root.

    Evaluating the square root of a negative value raises DomainError.
    """
    return CReal(CRTag.SQRT, (as_creal(x),))


def cr_cos(x, token: Optional[CancellationToken] = None) -> CReal:
    """The cosine, reduced by multiples of pi and the double angle formula."""
    from .constants import ONE, PI
    x = as_creal(x)
    rough_appr = x.get_appr(-1, token)
    abs_rough_appr = abs(rough_appr)
    if abs_rough_appr >= 6:
        # Subtract multiples of pi
        multiplier = div_trunc(rough_appr, 6)
        adjustment = cr_mul(PI, from_int(multiplier))
        reduced = cr_cos(cr_sub(x, adjustment), token)
        if multiplier & 1:
            return cr_neg(reduced)
        return reduced
    if abs_rough_appr >= 2:
        cos_half = cr_cos(cr_shift_right(x, 1), token)
        return cr_sub(cr_shift_left(cr_mul(cos_half, cos_half), 1), ONE)
    return prescaled_cos(x)


def cr_sin(x, token: Optional[CancellationToken] = None) -> CReal:
    """The sine, as cos(pi/2 - x)."""
    from .constants import HALF_PI
    return cr_cos(cr_sub(HALF_PI, x), token)
