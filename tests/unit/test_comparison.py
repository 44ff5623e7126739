"""Unit tests for comparison and sign queries."""

import pytest

from exactreal import (
    CancellationToken,
    CancelledError,
    PrecisionOverflowError,
    compare,
    cr_div,
    cr_shift_left,
    cr_sub,
    from_float,
    from_int,
    signum,
)
from exactreal.core.comparison import compare_absolute, compare_relative


class TestCompare:
    """Test three-way comparison."""

    def test_exact_compare(self):
        """Test exact comparison of distinct integers."""
        assert compare(from_int(1), from_int(2)) == -1
        assert compare(from_int(2), from_int(1)) == 1

    def test_exact_compare_of_close_values(self):
        """Test exact comparison of values 2**-200 apart."""
        x = from_int(1)
        y = x + (from_int(1) >> 200)
        assert compare(x, y) == -1
        assert compare(y, x) == 1

    def test_absolute_tolerance_on_equal_values(self):
        """Test that equal values compare as 0 at any tolerance."""
        third = cr_div(from_int(1), from_int(3))
        same = cr_div(from_int(2), from_int(6))
        for a in (0, -10, -100, -1000):
            assert compare(third, same, a) == 0

    def test_absolute_tolerance_separates(self):
        """Test that a finer tolerance separates close values."""
        x = from_int(1)
        y = x + (from_int(1) >> 20)
        assert compare(x, y, -5) == 0
        assert compare(x, y, -30) == -1
        assert compare_absolute(y, x, -30) == 1

    def test_difference_below_tolerance_compares_equal(self):
        """Test that values closer than 2**abs_tol always compare as 0."""
        assert compare(from_int(0), from_float(0.99 * 2.0**-10), -10) == 0
        third = cr_div(from_int(1), from_int(3))
        for a in (-64, -10, 0, 5):
            eps = cr_shift_left(from_float(0.99), a)
            assert compare(from_int(0), eps, a) == 0
            assert compare(eps, from_int(0), a) == 0
            assert compare(third, third + eps, a) == 0
            assert compare(third - eps, third, a) == 0

    def test_difference_beyond_margin_is_ordered(self):
        """Test that values 2**(abs_tol + 2) apart always get their order."""
        third = cr_div(from_int(1), from_int(3))
        for a in (-64, -10, 0, 5):
            eps = cr_shift_left(from_int(1), a + 2)
            assert compare(from_int(0), eps, a) == -1
            assert compare(third + eps, third, a) == 1
            assert compare(third, third - eps, a) == 1

    def test_relative_tolerance(self):
        """Test comparison with a relative tolerance."""
        big = from_int(10**6)
        bigger = from_int(10**6 + 1)
        # Relative tolerance of 2**-10 swallows a difference of one part in 10**6.
        assert compare(big, bigger, -50, -10) == 0
        assert compare(big, bigger, -50, -40) == -1

    def test_relative_tolerance_below_absolute(self):
        """Test relative comparison of values below the absolute tolerance."""
        tiny = from_int(1) >> 300
        tinier = from_int(1) >> 301
        assert compare_relative(tiny, tinier, -10, -100) == 0

    def test_relative_without_absolute_raises(self):
        """Test that rel_tol requires abs_tol."""
        with pytest.raises(ValueError):
            compare(from_int(1), from_int(2), rel_tol=-10)

    @pytest.mark.slow
    def test_exact_compare_of_equal_values_overflows(self):
        """Test that exact comparison of equal values ends in overflow."""
        with pytest.raises(PrecisionOverflowError):
            compare(from_int(2), from_int(2))


class TestSignum:
    """Test sign determination."""

    def test_signum_exact(self):
        """Test exact sign determination."""
        assert signum(from_int(5)) == 1
        assert signum(from_int(-5)) == -1
        assert signum(from_int(1) >> 500) == 1
        assert signum(cr_sub(from_int(0), from_int(1) >> 500)) == -1

    def test_signum_with_tolerance(self):
        """Test sign determination with a tolerance."""
        assert signum(from_int(1) >> 100, -10) == 0
        assert signum(from_int(1) >> 100, -200) == 1
        assert signum(from_int(0), -50) == 0

    def test_signum_uses_cached_approximation(self):
        """Test the cached-sign fast path."""
        x = cr_div(from_int(-1), from_int(3))
        x.get_appr(-40)
        entry = x.cache.entry
        # Any tolerance can be answered from a nonzero cached approximation.
        assert signum(x, 100) == -1
        assert x.cache.entry == entry

    def test_signum_of_zero_overflows(self):
        """Test that the exact sign of zero ends in overflow."""
        with pytest.raises(PrecisionOverflowError):
            signum(from_int(0))

    def test_signum_honours_cancelled_token(self):
        """Test that exact signum polls the token."""
        token = CancellationToken()
        token.cancel()
        with pytest.raises(CancelledError):
            signum(from_int(0), token=token)

    def test_compare_honours_cancelled_token(self):
        """Test that exact comparison polls the token."""
        token = CancellationToken()
        token.cancel()
        with pytest.raises(CancelledError):
            compare(from_int(1), from_int(2), token=token)
