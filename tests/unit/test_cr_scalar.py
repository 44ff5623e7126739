"""Unit tests for the CReal node type, its cache and MSD resolution."""

import logging
from fractions import Fraction

import pytest

from exactreal import (
    CReal,
    CRTag,
    DomainError,
    PrecisionOverflowError,
    atan_reciprocal,
    cr_div,
    from_float,
    from_int,
)
from exactreal.core.scaling import scale


def within_one(appr: int, exact: Fraction, p: int) -> bool:
    return abs(appr - exact / Fraction(2) ** p) < 1


class TestCRealCreation:
    """Test creation of constructive real values."""

    def test_from_int(self):
        """Test creation from an integer."""
        x = from_int(5)
        assert x.tag == CRTag.CONSTANT
        assert x.payload == 5
        assert x.get_appr(0) == 5
        assert x.get_appr(-2) == 20
        assert x.get_appr(1) == 3  # 2.5 rounds up

    def test_from_int_accepts_bool_and_rejects_float(self):
        """Test integer coercion rules."""
        assert from_int(True).get_appr(0) == 1
        with pytest.raises(TypeError):
            from_int(1.5)

    def test_from_float_is_exact(self):
        """Test that floats convert exactly."""
        x = from_float(0.1)
        exact = Fraction(0.1)
        for p in (0, -10, -60, -200):
            assert within_one(x.get_appr(p), exact, p)
        assert from_float(-2.5).get_appr(-1) == -5

    def test_from_float_rejects_non_finite(self):
        """Test NaN and infinity rejection."""
        for value in (float("nan"), float("inf"), float("-inf")):
            with pytest.raises(DomainError):
                from_float(value)

    def test_domain_error_is_value_error(self):
        """Test that DomainError is a ValueError."""
        with pytest.raises(ValueError):
            from_float(float("nan"))

    def test_repr(self):
        """Test node representation."""
        assert repr(from_int(3)) == "CReal(constant, 3)"
        assert repr(from_int(3) + from_int(4)) == "CReal(sum)"


class TestApproximationCache:
    """Test caching of approximations."""

    def test_cache_starts_invalid(self):
        """Test that a new node has no cached approximation."""
        x = cr_div(from_int(1), from_int(3))
        assert not x.cache.valid
        assert x.cache.entry is None

    def test_cache_records_finest_request(self):
        """Test that the cache keeps the finest approximation."""
        x = cr_div(from_int(1), from_int(3))
        a = x.get_appr(-50)
        assert x.cache.entry == (-50, a)
        x.get_appr(-10)
        assert x.cache.entry == (-50, a)

    def test_repeated_requests_are_identical(self):
        """Test idempotent repeated requests."""
        x = cr_div(from_int(22), from_int(7))
        assert x.get_appr(-80) == x.get_appr(-80)

    def test_coarser_requests_rescale_cache(self):
        """Test that coarser requests rescale the cached value."""
        x = cr_div(from_int(22), from_int(7))
        fine = x.get_appr(-80)
        assert x.get_appr(-20) == scale(fine, -60)
        assert within_one(x.get_appr(-20), Fraction(22, 7), -20)

    def test_bounded_reevaluation_uses_lattice(self):
        """Test the re-evaluation lattice of slow nodes."""
        x = atan_reciprocal(5)
        x.get_appr(-10)
        assert x.cache.entry[0] == -64

        x.get_appr(-70)
        min_prec, _ = x.cache.entry
        assert min_prec == -128

    def test_bounded_reevaluation_result_is_exact_scale(self):
        """Test that slow nodes return a rescaled lattice value."""
        x = atan_reciprocal(239)
        appr = x.get_appr(-100)
        min_prec, max_appr = x.cache.entry
        assert appr == scale(max_appr, min_prec + 100)

    def test_bounded_reevaluation_is_logged(self, caplog):
        """Test debug logging of slow-node re-evaluation."""
        with caplog.at_level(logging.DEBUG, logger="exactreal.core.cr_scalar"):
            atan_reciprocal(7).get_appr(-10)
        assert "re-evaluating atan_reciprocal node at -64" in caplog.text

    def test_shared_subexpression_cache(self):
        """Test caching of a shared operand."""
        third = cr_div(from_int(1), from_int(3))
        total = third + third + third
        total.get_appr(-40)
        assert third.cache.valid


class TestMostSignificantDigit:
    """Test MSD resolution."""

    def test_msd_of_power_of_two(self):
        """Test MSD of a power of two."""
        assert from_int(8).msd(-10) == 3
        assert from_int(-8).msd(-10) == 3

    def test_msd_bounds(self):
        """Test the MSD bracketing property."""
        for value in (3, 5, 100, 1000, 12345):
            m = from_int(value).msd(-10)
            assert 2 ** (m - 1) < value < 2 ** (m + 1)

    def test_msd_too_small(self):
        """Test MSD of a value below the precision limit."""
        tiny = from_int(1) >> 100
        assert tiny.msd(-10) is None

    def test_iter_msd_refines(self):
        """Test iterative MSD refinement."""
        tiny = from_int(1) >> 100
        assert tiny.iter_msd(-200) == -100

    def test_iter_msd_of_zero_with_limit(self):
        """Test bounded iterative MSD of zero."""
        assert from_int(0).iter_msd(-100) is None

    def test_iter_msd_of_zero_without_limit_overflows(self):
        """Test unbounded iterative MSD of zero."""
        with pytest.raises(PrecisionOverflowError):
            from_int(0).iter_msd()

    def test_known_msd_uses_cache(self):
        """Test MSD read from the cache."""
        x = from_int(1000)
        x.get_appr(-4)
        assert x.known_msd() == 9


class TestOperators:
    """Test Python operator support."""

    def test_arithmetic_with_python_numbers(self):
        """Test operators with Python numbers."""
        assert (from_int(2) + 3).get_appr(0) == 5
        assert (3 + from_int(2)).get_appr(0) == 5
        assert (2 - from_int(5)).get_appr(0) == -3
        assert (from_int(3) * 0.5).get_appr(-1) == 3
        assert (1 / from_int(4)).get_appr(-2) == 1
        assert (-from_int(4)).get_appr(0) == -4
        assert (+from_int(4)).get_appr(0) == 4

    def test_fraction_operand(self):
        """Test operators with Fraction operands."""
        x = from_int(1) + Fraction(1, 3)
        assert within_one(x.get_appr(-60), Fraction(4, 3), -60)

    def test_unsupported_operand(self):
        """Test operators with unsupported operands."""
        with pytest.raises(TypeError):
            from_int(1) + "2"

    def test_shifts(self):
        """Test shift operators."""
        assert (from_int(3) << 4).get_appr(0) == 48
        assert (from_int(3) >> 1).get_appr(-1) == 3

    def test_ordering(self):
        """Test ordering operators."""
        assert from_int(1) < from_int(2)
        assert from_int(3) > 2
        assert from_int(-1) <= 0.5
        assert not (from_int(1) > from_int(2))

    def test_truth_value_is_undecidable(self):
        """Test that bool() is refused."""
        with pytest.raises(TypeError):
            bool(from_int(1))

    def test_equality_is_identity(self):
        """Test identity equality and hashing."""
        x = from_int(1)
        assert x == x
        assert x != from_int(1)
        assert len({x, x}) == 1

    def test_native_conversions(self):
        """Test int, float and str conversions."""
        x = from_float(2.75)
        assert int(from_int(7)) == 7
        assert float(x) == 2.75
        assert str(x) == "2.7500000000"

    def test_isinstance(self):
        """Test that operators return CReal nodes."""
        assert isinstance(from_int(1) * from_int(2), CReal)
