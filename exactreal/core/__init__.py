"""Core constructive real type, operations, comparisons and constants."""

from .errors import (
    ExactRealError,
    PrecisionOverflowError,
    CancelledError,
    DomainError,
)

from .cancellation import CancellationToken, NEVER_CANCELLED

from .precision_config import PrecisionConfig, check_precision, evaluation_context

from .cr_scalar import (
    CReal,
    CRTag,
    ApproximationCache,
    from_int,
    from_float,
    as_creal,
)

from .cr_ops import (
    cr_add,
    cr_sub,
    cr_neg,
    cr_mul,
    cr_inv,
    cr_div,
    cr_shift_left,
    cr_shift_right,
    cr_select,
    cr_min,
    cr_max,
    cr_abs,
    cr_exp,
    cr_ln,
    cr_sqrt,
    cr_cos,
    cr_sin,
    atan_reciprocal,
)

from .comparison import compare, signum

from .constants import ONE, TWO, FOUR, PI, HALF_PI, LN2, E

__all__ = [
    # Types
    "CReal",
    "CRTag",
    "ApproximationCache",
    "CancellationToken",
    "NEVER_CANCELLED",
    "PrecisionConfig",
    "evaluation_context",
    "check_precision",

    # Errors
    "ExactRealError",
    "PrecisionOverflowError",
    "CancelledError",
    "DomainError",

    # Factory functions
    "from_int",
    "from_float",
    "as_creal",

    # Arithmetic operations
    "cr_add",
    "cr_sub",
    "cr_neg",
    "cr_mul",
    "cr_inv",
    "cr_div",
    "cr_shift_left",
    "cr_shift_right",
    "cr_select",
    "cr_min",
    "cr_max",
    "cr_abs",
    "cr_exp",
    "cr_ln",
    "cr_sqrt",
    "cr_cos",
    "cr_sin",
    "atan_reciprocal",

    # Comparison
    "compare",
    "signum",

    # Constants
    "ONE",
    "TWO",
    "FOUR",
    "PI",
    "HALF_PI",
    "LN2",
    "E",
]
