"""Integer rescaling helpers shared by all approximation routines."""


def shift(k: int, n: int) -> int:
    """Multiply k by 2**n, truncating toward negative infinity."""
    if n >= 0:
        return k << n
    return k >> -n


def scale(k: int, n: int) -> int:
    """Multiply k by 2**n, rounding to the nearest integer."""
    if n >= 0:
        return k << n
    return (shift(k, n + 1) + 1) >> 1


def div_trunc(a: int, b: int) -> int:
    """Integer quotient rounded toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def bound_log2(n: int) -> int:
    """Smallest k with 2**k > |n|, i.e. ceil(log2(|n| + 1))."""
    return abs(n).bit_length()
