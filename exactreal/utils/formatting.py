"""
Radix numeral parsing and rendering.

``from_string`` builds an exact constructive real from a numeral such as
``"-3.25"``; ``to_string`` renders a fixed number of digits after the point.
The last rendered digit may be off by one, since the value is only known to
within one unit at that position.
"""

from typing import Optional

import numpy as np

from ..core import CReal, CancellationToken, cr_div, cr_mul, cr_shift_left, from_int

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _check_radix(radix: int) -> None:
    if not 2 <= radix <= 36:
        raise ValueError(f"radix must be in [2, 36], got {radix}")


def from_string(s: str, radix: int = 10) -> CReal:
    """
    Parse ``[-] digit* [. digit*]`` in the given radix.

    Leading and trailing blanks are ignored. Digit separators and other
    whitespace are not accepted.

    Raises:
        ValueError: For an empty or malformed numeral, or a bad radix
    """
    _check_radix(radix)
    text = s.strip(" ")
    whole, _, fraction = text.partition(".")
    sign = ""
    if whole[:1] in ("-", "+"):
        sign, whole = whole[0], whole[1:]
    digits = whole + fraction
    allowed = _DIGITS[:radix]
    if not digits or any(c not in allowed for c in digits.lower()):
        raise ValueError(f"invalid numeral for radix {radix}: {s!r}")
    scaled_result = int(sign + digits, radix)
    if not fraction:
        return from_int(scaled_result)
    divisor = radix ** len(fraction)
    return cr_div(from_int(scaled_result), from_int(divisor))


def to_string(x: CReal, n: int = 10, radix: int = 10,
              token: Optional[CancellationToken] = None) -> str:
    """
    Render x with ``n`` digits after the radix point.

    Args:
        x: Value to render
        n: Number of fractional digits (>= 0)
        radix: Base of the representation, 2 to 36
        token: Cancellation token

    Raises:
        ValueError: If n is negative or the radix is out of range
    """
    _check_radix(radix)
    if n < 0:
        raise ValueError(f"number of digits must be nonnegative, got {n}")
    if radix == 16:
        scaled = cr_shift_left(x, 4 * n)
    else:
        scaled = cr_mul(x, from_int(radix ** n))
    scaled_int = scaled.get_appr(0, token)
    if radix == 10:
        scaled_string = str(abs(scaled_int))
    else:
        scaled_string = np.base_repr(abs(scaled_int), radix).lower()
    if n == 0:
        result = scaled_string
    else:
        if len(scaled_string) <= n:
            scaled_string = scaled_string.rjust(n + 1, "0")
        whole = scaled_string[:-n]
        fraction = scaled_string[-n:]
        result = f"{whole}.{fraction}"
    if scaled_int < 0:
        result = "-" + result
    return result
