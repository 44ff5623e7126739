"""
Approximation routines for every expression node kind.

Each routine receives a node and a target precision exponent p and returns
an integer within 1 of value / 2**p. It works out how precisely the
operands have to be known, requests them through ``get_appr`` (so operand
caches are used and refined), combines the results and rounds once at the
end. Routines are looked up by node tag in ``_APPROXIMATORS``.

Routines must only be called through ``CReal.get_appr``, which guards the
precision and maintains the cache.
"""

import logging

import numpy as np

from .comparison import signum
from .errors import DomainError
from .precision_config import PrecisionConfig
from .scaling import bound_log2, div_trunc, scale, shift

logger = logging.getLogger(__name__)


def _approx_constant(node, p, token):
    return scale(node.payload, -p)


def _approx_negate(node, p, token):
    return -node.operands[0].get_appr(p, token)


def _approx_shift(node, p, token):
    return node.operands[0].get_appr(p - node.payload, token)


def _approx_sum(node, p, token):
    # Each operand contributes < 1/4 ulp, the final rounding <= 1/2 ulp.
    op1, op2 = node.operands
    return scale(op1.get_appr(p - 2, token) + op2.get_appr(p - 2, token), -2)


def _approx_select(node, p, token):
    selector, op1, op2 = node.operands
    if node.selector_sign < 0:
        return op1.get_appr(p, token)
    if node.selector_sign > 0:
        return op2.get_appr(p, token)
    appr1 = op1.get_appr(p - 1, token)
    appr2 = op2.get_appr(p - 1, token)
    if abs(appr1 - appr2) <= 1:
        # close enough; either will do
        return scale(appr1, -1)
    # The branches differ, so the selector is nonzero and its exact sign
    # can be computed.
    if signum(selector, token=token) < 0:
        node.selector_sign = -1
        logger.debug("select resolved to first branch")
        return scale(appr1, -1)
    node.selector_sign = 1
    logger.debug("select resolved to second branch")
    return scale(appr2, -1)


def _approx_product(node, p, token):
    op1, op2 = node.operands
    half_prec = (p >> 1) - 1
    msd_op1 = op1.msd(half_prec, token)
    if msd_op1 is None:
        msd_op2 = op2.msd(half_prec, token)
        if msd_op2 is None:
            # Product is small enough that zero will do.
            return 0
        # Larger operand first.
        op1, op2 = op2, op1
        msd_op1 = msd_op2
    # The error of op2 is multiplied by at most 2**(msd_op1 + 1), so each
    # operand contributes 1/4 ulp and the final rounding another 1/2.
    prec2 = p - msd_op1 - 3
    appr2 = op2.get_appr(prec2, token)
    if appr2 == 0:
        return 0
    msd_op2 = op2.known_msd()
    prec1 = p - msd_op2 - 3
    appr1 = op1.get_appr(prec1, token)
    return scale(appr1 * appr2, prec1 + prec2 - p)


def _approx_inverse(node, p, token):
    op = node.operands[0]
    msd = op.iter_msd(token=token)
    inv_msd = 1 - msd
    # Significant digits needed from the operand: one for the relative error
    # carried over to the result, one for calculation slop, one for the final
    # rounding, and one because the msd may be off by one.
    digits_needed = inv_msd - p + 3
    prec_needed = msd - digits_needed
    log_scale_factor = -p - prec_needed
    if log_scale_factor < 0:
        return 0
    dividend = 1 << log_scale_factor
    scaled_divisor = op.get_appr(prec_needed, token)
    abs_scaled_divisor = abs(scaled_divisor)
    result = (dividend + (abs_scaled_divisor >> 1)) // abs_scaled_divisor
    return -result if scaled_divisor < 0 else result


def _approx_exp(node, p, token):
    # Taylor series; the argument is assumed to be below 1/2 in magnitude.
    if p >= 1:
        return 0
    iterations_needed = -p // 2 + 2
    # Each term is accurate to 2 * 2**calc_precision, so the accumulated
    # rounding error stays below 2 * iterations_needed * 2**calc_precision.
    calc_precision = p - bound_log2(2 * iterations_needed) - 4
    op_prec = p - 3
    op_appr = node.operands[0].get_appr(op_prec, token)
    # argument error < 3/8 ulp, term rounding < 1/16, truncation < 1/16,
    # final rounding <= 1/2
    scaled_1 = 1 << -calc_precision
    current_term = scaled_1
    current_sum = scaled_1
    n = 0
    max_trunc_error = 1 << (p - 4 - calc_precision)
    while abs(current_term) >= max_trunc_error:
        token.check()
        n += 1
        current_term = scale(current_term * op_appr, op_prec)
        current_term = div_trunc(current_term, n)
        current_sum += current_term
    return scale(current_sum, calc_precision - p)


def _approx_cos(node, p, token):
    # Taylor series in even powers; assumes |x| < 1.
    if p >= 1:
        return 0
    iterations_needed = -p // 2 + 4
    calc_precision = p - bound_log2(2 * iterations_needed) - 4
    op_prec = p - 2
    op_appr = node.operands[0].get_appr(op_prec, token)
    # argument error < 1/4 ulp, rounding < 1/16, truncation < 1/16,
    # final rounding <= 1/2
    max_trunc_error = 1 << (p - 4 - calc_precision)
    n = 0
    current_term = 1 << -calc_precision
    current_sum = current_term
    while abs(current_term) >= max_trunc_error:
        token.check()
        n += 2
        # current_term = -current_term * x * x / (n * (n - 1))
        current_term = scale(current_term * op_appr, op_prec)
        current_term = scale(current_term * op_appr, op_prec)
        current_term = div_trunc(current_term, -n * (n - 1))
        current_sum += current_term
    return scale(current_sum, calc_precision - p)


def _approx_atan_reciprocal(node, p, token):
    # atan(1/n) for an integer n > 1, as an alternating series in 1/n.
    if p >= 1:
        return 0
    iterations_needed = -p // 2 + 2
    calc_precision = p - bound_log2(2 * iterations_needed) - 2
    # rounding < 1/4 ulp, truncation < 1/4, final rounding <= 1/2
    scaled_1 = 1 << -calc_precision
    op = node.payload
    op_squared = op * op
    op_inverse = scaled_1 // op
    current_power = op_inverse
    current_term = op_inverse
    current_sum = op_inverse
    current_sign = 1
    n = 1
    max_trunc_error = 1 << (p - 2 - calc_precision)
    while abs(current_term) >= max_trunc_error:
        token.check()
        n += 2
        current_power //= op_squared
        current_sign = -current_sign
        current_term = div_trunc(current_power, current_sign * n)
        current_sum += current_term
    return scale(current_sum, calc_precision - p)


def _approx_ln(node, p, token):
    # ln(1 + x) by its Taylor series; assumes |x| < 1/2.
    if p >= 0:
        return 0
    iterations_needed = -p
    calc_precision = p - bound_log2(2 * iterations_needed) - 4
    op_prec = p - 3
    op_appr = node.operands[0].get_appr(op_prec, token)
    x_nth = scale(op_appr, op_prec - calc_precision)
    current_term = x_nth
    current_sum = current_term
    n = 1
    current_sign = 1  # (-1)**(n-1)
    max_trunc_error = 1 << (p - 4 - calc_precision)
    while abs(current_term) >= max_trunc_error:
        token.check()
        n += 1
        current_sign = -current_sign
        x_nth = scale(x_nth * op_appr, op_prec)
        # x**n / (n * (-1)**(n-1))
        current_term = div_trunc(x_nth, n * current_sign)
        current_sum += current_term
    return scale(current_sum, calc_precision - p)


def _approx_sqrt(node, p, token):
    op = node.operands[0]
    max_prec_needed = 2 * p - 1
    msd = op.msd(max_prec_needed, token)
    if msd is None or msd <= max_prec_needed:
        return 0
    result_msd = div_trunc(msd, 2)  # +- 1
    result_digits = result_msd - p  # +- 2
    fp_prec = PrecisionConfig.get_sqrt_fp_prec()
    if result_digits > fp_prec:
        # One Newton step from a coarser approximation of ourselves.
        appr_digits = result_digits // 2 + 6
        appr_prec = result_msd - appr_digits
        last_appr = node.get_appr(appr_prec, token)
        prod_prec = 2 * appr_prec
        op_appr = op.get_appr(prod_prec, token)
        # (last_appr**2 + op_appr) / (2 * last_appr), rescaled to p
        numerator = last_appr * last_appr + op_appr
        scaled_numerator = scale(numerator, appr_prec - p)
        shifted_result = div_trunc(scaled_numerator, last_appr)
        return (shifted_result + 1) >> 1
    # Double precision square root; all precisions kept even.
    fp_op_prec = PrecisionConfig.get_sqrt_fp_op_prec()
    op_prec = (msd - fp_op_prec) & ~1
    working_prec = op_prec - fp_op_prec
    scaled_bi_appr = op.get_appr(op_prec, token) << fp_op_prec
    scaled_appr = np.float64(scaled_bi_appr)
    if scaled_appr < 0.0:
        raise DomainError("square root of a negative number")
    scaled_sqrt = int(np.sqrt(scaled_appr))
    shift_count = working_prec // 2 - p
    return shift(scaled_sqrt, shift_count)


_APPROXIMATORS = {
    "constant": _approx_constant,
    "negate": _approx_negate,
    "shift": _approx_shift,
    "sum": _approx_sum,
    "select": _approx_select,
    "product": _approx_product,
    "inverse": _approx_inverse,
    "exp": _approx_exp,
    "ln": _approx_ln,
    "cos": _approx_cos,
    "atan_reciprocal": _approx_atan_reciprocal,
    "sqrt": _approx_sqrt,
}


def approximate(node, p, token):
    """
    Compute a fresh approximation of ``node`` at precision ``p``.

    Args:
        node: Expression node
        p: Checked precision exponent
        token: Resolved cancellation token
    """
    return _APPROXIMATORS[node.tag.value](node, p, token)
