"""
Comparison and sign queries.

The tolerant forms always terminate: a result of 0 means "equal, or too close
to tell at this tolerance", never a proof of equality. The exact forms (no
tolerance) tighten the tolerance until the operands are told apart, and so
do not return when the operands are equal or the value is zero. Use them
only when inequality is known in advance.
"""

import logging
from typing import Optional

from .cancellation import CancellationToken, resolve_token
from .precision_config import PrecisionConfig, check_precision

logger = logging.getLogger(__name__)

# Largest approximation difference (in units of 2**(abs_tol - 1)) that two
# values closer than 2**abs_tol can produce.
_SLACK = 3


def compare_absolute(x, y, abs_tol: int, token: Optional[CancellationToken] = None) -> int:
    """
    Compare x and y with an absolute tolerance of 2**abs_tol.

    Returns:
        +1 if x > y, -1 if x < y, 0 if they are within the tolerance. Values
        closer than 2**abs_tol always give 0; values at least 2**(abs_tol + 2)
        apart always give their definite order.
    """
    needed_prec = abs_tol - 1
    x_appr = x.get_appr(needed_prec, token)
    y_appr = y.get_appr(needed_prec, token)
    if x_appr > y_appr + _SLACK:
        return 1
    if x_appr < y_appr - _SLACK:
        return -1
    return 0


def compare_relative(x, y, rel_tol: int, abs_tol: int,
                     token: Optional[CancellationToken] = None) -> int:
    """
    Compare with tolerance max((|x| + |y|) * 2**rel_tol, 2**abs_tol).

    Always terminates.
    """
    x_msd = x.iter_msd(abs_tol, token)
    y_msd = y.iter_msd(x_msd if x_msd is not None and x_msd > abs_tol else abs_tol, token)
    known = [m for m in (x_msd, y_msd) if m is not None]
    if not known:
        # both operands are below the absolute tolerance
        return compare_absolute(x, y, abs_tol, token)
    rel = max(known) + rel_tol
    return compare_absolute(x, y, max(rel, abs_tol), token)


def compare_exact(x, y, token: Optional[CancellationToken] = None) -> int:
    """
    Compare two values known to be different.

    Does not return if x == y: it keeps halving the tolerance until it hits
    PrecisionOverflowError or the token is cancelled.
    """
    token = resolve_token(token)
    a = PrecisionConfig.get_compare_start_prec()
    while True:
        check_precision(a)
        token.check()
        result = compare_absolute(x, y, a, token)
        if result != 0:
            return result
        logger.debug("operands indistinguishable at %d; tightening", a)
        a *= 2


def compare(x, y, abs_tol: Optional[int] = None, rel_tol: Optional[int] = None, *,
            token: Optional[CancellationToken] = None) -> int:
    """
    Compare two constructive reals.

    Args:
        x: First operand
        y: Second operand
        abs_tol: Absolute tolerance exponent; None requests an exact answer,
            which never returns for equal operands
        rel_tol: Relative tolerance exponent; requires abs_tol
        token: Cancellation token

    Returns:
        -1, 0 or +1. Zero only when a tolerance is given.

    Raises:
        ValueError: If rel_tol is given without abs_tol
    """
    if abs_tol is None:
        if rel_tol is not None:
            raise ValueError("a relative tolerance requires an absolute tolerance")
        return compare_exact(x, y, token)
    if rel_tol is None:
        return compare_absolute(x, y, abs_tol, token)
    return compare_relative(x, y, rel_tol, abs_tol, token)


def signum(x, abs_tol: Optional[int] = None, *,
           token: Optional[CancellationToken] = None) -> int:
    """
    Sign of x.

    With a tolerance this is the sign of an approximation at ``abs_tol - 1``,
    answered from the cache when the cached approximation already has a
    definite sign; 0 means |x| may be below 2**abs_tol. Without a tolerance
    it does not return when x is zero.
    """
    if abs_tol is None:
        token = resolve_token(token)
        a = PrecisionConfig.get_compare_start_prec()
        while True:
            check_precision(a)
            token.check()
            result = signum(x, a, token=token)
            if result != 0:
                return result
            logger.debug("sign unresolved at %d; tightening", a)
            a *= 2
    entry = x.cache.entry
    if entry is not None and entry[1] != 0:
        return 1 if entry[1] > 0 else -1
    appr = x.get_appr(abs_tol - 1, token)
    return (appr > 0) - (appr < 0)
