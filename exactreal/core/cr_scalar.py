"""
Constructive real scalar type.

A CReal is a node in an immutable expression DAG. It does not hold a number;
it knows how to produce, for any precision exponent p, an integer a with
|a * 2**p - x| < 2**p. Arithmetic on CReal values builds new nodes; the
numeric work happens when an approximation is requested through
``get_appr``, which also maintains a per-node cache of the finest
approximation computed so far.
"""

import logging
import math
import numbers
import operator
from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple, Union

from .approximations import approximate
from .cancellation import CancellationToken, resolve_token
from .comparison import compare, signum
from .errors import DomainError
from .precision_config import PrecisionConfig, check_precision
from .scaling import scale

logger = logging.getLogger(__name__)


class CRTag(Enum):
    """Kind of an expression node."""

    CONSTANT = "constant"
    NEGATE = "negate"
    SHIFT = "shift"
    SUM = "sum"
    SELECT = "select"
    PRODUCT = "product"
    INVERSE = "inverse"
    EXP = "exp"
    LN = "ln"
    COS = "cos"
    ATAN_RECIPROCAL = "atan_reciprocal"
    SQRT = "sqrt"

    @property
    def bounded(self) -> bool:
        """Whether misses are re-evaluated on the coarse precision lattice."""
        return self in _BOUNDED_TAGS


_BOUNDED_TAGS = frozenset({CRTag.COS, CRTag.ATAN_RECIPROCAL, CRTag.LN})


class ApproximationCache:
    """
    Best approximation of one node computed so far.

    The entry is a ``(min_prec, max_appr)`` tuple replaced as a whole, so a
    concurrent reader sees either the old pair or the new one. Two evaluators
    racing on a miss both compute a correct value; the later store wins.
    """

    __slots__ = ("_entry",)

    def __init__(self):
        self._entry: Optional[Tuple[int, int]] = None

    @property
    def valid(self) -> bool:
        return self._entry is not None

    @property
    def entry(self) -> Optional[Tuple[int, int]]:
        """The cached ``(min_prec, max_appr)`` pair, or None."""
        return self._entry

    def lookup(self, p: int) -> Optional[int]:
        """Return the cached value rescaled to ``p``, if ``p`` is coarse enough."""
        entry = self._entry
        if entry is None:
            return None
        min_prec, max_appr = entry
        if p < min_prec:
            return None
        return scale(max_appr, min_prec - p)

    def store(self, p: int, appr: int) -> None:
        self._entry = (p, appr)

    def clear(self) -> None:
        self._entry = None

    def __repr__(self) -> str:
        if self._entry is None:
            return "ApproximationCache(invalid)"
        return "ApproximationCache(min_prec=%d, max_appr=%d)" % self._entry


class CReal:
    """
    Constructive real number.

    Attributes:
        tag: Operator kind of this node
        operands: Operand nodes, possibly shared with other parents
        payload: Integer data of CONSTANT, SHIFT and ATAN_RECIPROCAL nodes
        cache: The node's approximation cache
        selector_sign: For SELECT nodes, the known sign of the selector (0 if
            not yet resolved)
    """

    __slots__ = ("tag", "operands", "payload", "cache", "selector_sign", "__weakref__")

    def __init__(self, tag: CRTag, operands: Tuple["CReal", ...] = (), payload: Optional[int] = None):
        self.tag = tag
        self.operands = tuple(operands)
        self.payload = payload
        self.cache = ApproximationCache()
        self.selector_sign = 0

    # ------------------------------------------------------------------
    # Approximation protocol
    # ------------------------------------------------------------------

    def get_appr(self, p: int, token: Optional[CancellationToken] = None) -> int:
        """
        Return value / 2**p rounded to an integer, with error strictly < 1.

        Uses and maintains the node's cache. The cache is written only after
        the approximation has been computed, so a cancelled evaluation leaves
        it untouched.

        Args:
            p: Precision exponent; more negative is finer
            token: Cancellation token polled by long-running loops

        Raises:
            PrecisionOverflowError: If ``p`` is too close to overflow
            CancelledError: If the token is cancelled mid-computation
        """
        check_precision(p)
        token = resolve_token(token)
        cached = self.cache.lookup(p)
        if cached is not None:
            return cached
        if self.tag.bounded:
            max_prec = PrecisionConfig.get_slow_max_prec()
            step = PrecisionConfig.get_slow_prec_step()
            if p >= max_prec:
                eval_prec = max_prec
            else:
                eval_prec = (p - step + 1) & ~(step - 1)
            logger.debug("re-evaluating %s node at %d for request %d", self.tag.value, eval_prec, p)
            result = approximate(self, eval_prec, token)
            self.cache.store(eval_prec, result)
            return scale(result, eval_prec - p)
        result = approximate(self, p, token)
        self.cache.store(p, result)
        return result

    # ------------------------------------------------------------------
    # Most significant digit
    # ------------------------------------------------------------------

    def known_msd(self) -> int:
        """
        Position of the leading digit implied by the cached approximation.

        Only meaningful when the cache is valid and its value is far enough
        from zero.
        """
        min_prec, max_appr = self.cache.entry
        return min_prec + abs(max_appr).bit_length() - 1

    def msd(self, n: int, token: Optional[CancellationToken] = None) -> Optional[int]:
        """
        Return m with 2**(m-1) < |x| < 2**(m+1), or None if |x| may be < 2**n.

        Args:
            n: Finest precision worth evaluating at
            token: Cancellation token
        """
        entry = self.cache.entry
        if entry is None or abs(entry[1]) <= 1:
            self.get_appr(n - 1, token)
            entry = self.cache.entry
            if abs(entry[1]) <= 1:
                # msd could still be arbitrarily far to the right
                return None
        min_prec, max_appr = entry
        return min_prec + abs(max_appr).bit_length() - 1

    def iter_msd(self, n: Optional[int] = None, token: Optional[CancellationToken] = None) -> Optional[int]:
        """
        Like ``msd``, but approaches precision ``n`` through coarser attempts.

        With ``n=None`` there is no lower limit: for a value that is exactly
        zero this runs until PrecisionOverflowError or cancellation.
        """
        token = resolve_token(token)
        prec = 0
        while n is None or prec > n + 30:
            msd = self.msd(prec, token)
            if msd is not None:
                return msd
            check_precision(prec)
            token.check()
            logger.debug("msd unresolved at %d; refining", prec)
            prec = (prec * 3) // 2 - 16
        return self.msd(n, token)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare_to(self, other, abs_tol: Optional[int] = None, rel_tol: Optional[int] = None,
                   token: Optional[CancellationToken] = None) -> int:
        """Compare with another value; see ``exactreal.core.comparison.compare``."""
        return compare(self, as_creal(other), abs_tol, rel_tol, token=token)

    def signum(self, abs_tol: Optional[int] = None, token: Optional[CancellationToken] = None) -> int:
        """Sign of this value; see ``exactreal.core.comparison.signum``."""
        return signum(self, abs_tol, token=token)

    # Ordering uses the exact comparison and does not return for equal values.
    def __lt__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return compare(self, other) < 0

    def __gt__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return compare(self, other) > 0

    def __le__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return compare(self, other) < 0

    def __ge__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return compare(self, other) > 0

    def __bool__(self):
        raise TypeError(
            "truth value of a constructive real is undecidable; use signum(abs_tol)"
        )

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    def __add__(self, other):
        from .cr_ops import cr_add
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_add(self, other)

    def __radd__(self, other):
        from .cr_ops import cr_add
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_add(other, self)

    def __sub__(self, other):
        from .cr_ops import cr_sub
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_sub(self, other)

    def __rsub__(self, other):
        from .cr_ops import cr_sub
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_sub(other, self)

    def __mul__(self, other):
        from .cr_ops import cr_mul
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_mul(self, other)

    def __rmul__(self, other):
        from .cr_ops import cr_mul
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_mul(other, self)

    def __truediv__(self, other):
        from .cr_ops import cr_div
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_div(self, other)

    def __rtruediv__(self, other):
        from .cr_ops import cr_div
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return cr_div(other, self)

    def __neg__(self):
        from .cr_ops import cr_neg
        return cr_neg(self)

    def __pos__(self):
        return self

    def __abs__(self):
        from .cr_ops import cr_abs
        return cr_abs(self)

    def __lshift__(self, n: int):
        from .cr_ops import cr_shift_left
        return cr_shift_left(self, n)

    def __rshift__(self, n: int):
        from .cr_ops import cr_shift_right
        return cr_shift_right(self, n)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def __int__(self) -> int:
        return self.get_appr(0)

    def __float__(self) -> float:
        from ..bridge.ieee_cr import to_ieee
        return to_ieee(self)

    def __str__(self) -> str:
        from ..utils.formatting import to_string
        return to_string(self)

    def __repr__(self) -> str:
        if self.payload is not None:
            return f"CReal({self.tag.value}, {self.payload})"
        return f"CReal({self.tag.value})"


# ----------------------------------------------------------------------
# Factory functions
# ----------------------------------------------------------------------

def from_int(n: int) -> CReal:
    """
    Create an exact integer constant.

    Args:
        n: Any integral value (int, bool, numpy integer)
    """
    return CReal(CRTag.CONSTANT, payload=operator.index(n))


def from_float(x: float) -> CReal:
    """
    Create the constructive real exactly equal to a binary floating point value.

    Args:
        x: Finite float (numpy floating types are accepted)

    Raises:
        DomainError: If x is NaN or infinite
    """
    x = float(x)
    if not math.isfinite(x):
        raise DomainError(f"cannot represent non-finite value {x!r}")
    numerator, denominator = x.as_integer_ratio()
    # denominator is a power of two
    result = from_int(numerator)
    shift_count = denominator.bit_length() - 1
    if shift_count:
        from .cr_ops import cr_shift_right
        result = cr_shift_right(result, shift_count)
    return result


def _coerce(value):
    if isinstance(value, CReal):
        return value
    if isinstance(value, numbers.Integral):
        return from_int(value)
    if isinstance(value, Fraction):
        from .cr_ops import cr_div
        return cr_div(from_int(value.numerator), from_int(value.denominator))
    if isinstance(value, numbers.Real):
        return from_float(value)
    return NotImplemented


def as_creal(value: Union[CReal, int, float, Fraction]) -> CReal:
    """
    Convert a Python number to a CReal; CReal values pass through.

    Raises:
        TypeError: For unsupported types
    """
    result = _coerce(value)
    if result is NotImplemented:
        raise TypeError(f"cannot convert {type(value).__name__} to a constructive real")
    return result
