"""
Frequently used constants.

These are ordinary expression nodes, shared by every expression that uses
them, so their caches amortize across the whole process.
"""

from .cr_ops import atan_reciprocal, cr_add, cr_div, cr_exp, cr_mul, cr_shift_right, cr_sub, simple_ln
from .cr_scalar import from_int

ONE = from_int(1)
TWO = from_int(2)
FOUR = from_int(4)

# pi/4 = 4*atan(1/5) - atan(1/239)
PI = cr_mul(FOUR, cr_sub(cr_mul(FOUR, atan_reciprocal(5)), atan_reciprocal(239)))
HALF_PI = cr_shift_right(PI, 1)

# ln(2) = 7 ln(10/9) - 2 ln(25/24) + 3 ln(81/80)
_ln_10_9 = simple_ln(cr_div(from_int(10), from_int(9)))
_ln_25_24 = simple_ln(cr_div(from_int(25), from_int(24)))
_ln_81_80 = simple_ln(cr_div(from_int(81), from_int(80)))
LN2 = cr_add(
    cr_sub(cr_mul(from_int(7), _ln_10_9), cr_mul(from_int(2), _ln_25_24)),
    cr_mul(from_int(3), _ln_81_80),
)

E = cr_exp(ONE)
