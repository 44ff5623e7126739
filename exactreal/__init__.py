# MIT License
# See LICENSE file in the project root for full license text.
"""
exactreal: Constructive real arithmetic with on-demand precision.

A value is an expression DAG node that can produce an approximation accurate
to any requested power of two. Arithmetic builds new nodes lazily; results
are exact in the sense that no rounding error accumulates across operations.
"""

__version__ = "0.1.0"

from .core import (
    CReal,
    CRTag,
    ApproximationCache,
    CancellationToken,
    NEVER_CANCELLED,
    PrecisionConfig,
    evaluation_context,
    check_precision,
    ExactRealError,
    PrecisionOverflowError,
    CancelledError,
    DomainError,
    from_int,
    from_float,
    as_creal,
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
    compare,
    signum,
    ONE,
    TWO,
    FOUR,
    PI,
    HALF_PI,
    LN2,
    E,
)

from .bridge import from_ieee, to_ieee, to_ieee32, to_int, from_numpy, to_numpy
from .utils import from_string, to_string

# Conversion aliases
to_float = to_ieee

__all__ = [
    # Version info
    "__version__",
    # Core types
    "CReal",
    "CRTag",
    "ApproximationCache",
    "CancellationToken",
    "NEVER_CANCELLED",
    # Configuration
    "PrecisionConfig",
    "evaluation_context",
    "check_precision",
    # Errors
    "ExactRealError",
    "PrecisionOverflowError",
    "CancelledError",
    "DomainError",
    # Construction
    "from_int",
    "from_float",
    "as_creal",
    "from_string",
    "from_ieee",
    "from_numpy",
    # Arithmetic
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
    # Conversion
    "to_string",
    "to_ieee",
    "to_ieee32",
    "to_float",
    "to_int",
    "to_numpy",
]
