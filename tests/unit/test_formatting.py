"""Unit tests for radix numeral parsing and rendering."""

from fractions import Fraction

import pytest

from exactreal import from_float, from_int, from_string, to_string


class TestFromString:
    """Test numeral parsing."""

    def test_decimal(self):
        """Test decimal numerals."""
        assert from_string("3.25").get_appr(-2) == 13
        assert from_string("42").get_appr(0) == 42
        assert from_string("  -0.5 ").get_appr(-1) == -1
        assert from_string("+7").get_appr(0) == 7

    def test_other_radixes(self):
        """Test numerals in other radixes."""
        assert from_string("ff", 16).get_appr(0) == 255
        assert from_string("1.1", 2).get_appr(-1) == 3
        assert from_string("-z", 36).get_appr(0) == -35

    def test_repeating_fraction(self):
        """Test a fraction with no finite binary expansion."""
        x = from_string("0.1")
        assert abs(x.get_appr(-100) - Fraction(1, 10) * 2**100) < 1

    @pytest.mark.parametrize(
        "text", ["", " ", "-", ".", "1.-2", "1.2.3", "abc", "1e5", "1_000", " 1_000 ", "\t1", "1\n", "--5", "1 2"]
    )
    def test_malformed(self, text):
        """Test rejection of malformed numerals."""
        with pytest.raises(ValueError):
            from_string(text)

    def test_digit_outside_radix(self):
        """Test rejection of digits the radix does not have."""
        for text, radix in (("12", 2), ("9", 8), ("g", 16), ("0.a", 10)):
            with pytest.raises(ValueError):
                from_string(text, radix)

    def test_bad_radix(self):
        """Test rejection of radixes outside 2 to 36."""
        for radix in (0, 1, 37):
            with pytest.raises(ValueError):
                from_string("1", radix)


class TestToString:
    """Test fixed-point rendering."""

    def test_integers(self):
        """Test rendering of integers."""
        assert to_string(from_int(7), 3) == "7.000"
        assert to_string(from_int(5), 0) == "5"
        assert to_string(from_int(-3), 2) == "-3.00"

    def test_leading_zeros(self):
        """Test zero padding and sign."""
        assert to_string(from_float(-0.5), 3) == "-0.500"
        assert to_string(from_float(0.001), 2) == "0.00"

    def test_hex(self):
        """Test hexadecimal rendering."""
        assert to_string(from_float(15.9375), 2, 16) == "f.f0"

    def test_binary(self):
        """Test binary rendering."""
        assert to_string(from_float(0.25), 4, 2) == "0.0100"

    def test_parse_then_render(self):
        """Test rendering of parsed numerals."""
        assert to_string(from_string("-12.375"), 3) == "-12.375"
        assert to_string(from_string("a.8", 16), 1, 16) == "a.8"

    def test_default_digits(self):
        """Test the default digit count."""
        assert to_string(from_int(1)) == "1.0000000000"

    def test_invalid_arguments(self):
        """Test rejection of bad digit counts and radixes."""
        with pytest.raises(ValueError):
            to_string(from_int(1), -1)
        with pytest.raises(ValueError):
            to_string(from_int(1), 2, 37)
