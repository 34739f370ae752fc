"""
Tests for dimension algebra and rendering.
"""

from fractions import Fraction

import pytest

from physcalc.physics.dimension import DIMENSIONLESS, Dimension

LENGTH = Dimension.of(length=1)
TIME = Dimension.of(time=1)
FORCE = Dimension.of(time=-2, length=1, mass=1)


class TestDimensionAlgebra:
    """Tests for exponent arithmetic."""

    def test_add_then_subtract_is_identity(self):
        """Test that a + b - b == a."""
        assert FORCE.add(LENGTH).subtract(LENGTH) == FORCE

    def test_double_invert_is_identity(self):
        """Test that inverting twice returns the original."""
        assert FORCE.invert().invert() == FORCE

    def test_multiply_matches_repeated_add(self):
        """Test that multiply(2) equals adding a dimension to itself."""
        assert FORCE.multiply(2) == FORCE.add(FORCE)

    def test_divide_gives_fractions(self):
        """Test that dividing by 2 halves exponents exactly."""
        half = LENGTH.divide(2)
        assert half.length == Fraction(1, 2)
        assert half.multiply(2) == LENGTH

    def test_dimensionless(self):
        """Test dimensionless detection."""
        assert DIMENSIONLESS.is_dimensionless()
        assert LENGTH.subtract(LENGTH).is_dimensionless()
        assert not LENGTH.is_dimensionless()

    def test_equality_and_hash(self):
        """Test that equal dimensions hash equally."""
        assert Dimension.of(length=1) == LENGTH
        assert len({LENGTH, Dimension.of(length=1), TIME}) == 2

    def test_wrong_length_rejected(self):
        """Test that a dimension needs exactly seven exponents."""
        with pytest.raises(ValueError):
            Dimension((1, 2, 3))


class TestDimensionRendering:
    """Tests for text and LaTeX output."""

    def test_named_units(self):
        """Test that exact matches render as named SI units."""
        assert FORCE.to_string() == "N"
        assert Dimension.of(time=-3, length=2, mass=1, current=-1).to_string() == "V"
        assert Dimension.of(mass=1).to_string() == "kg"
        assert Dimension.of(time=-1).to_string() == "Hz"

    def test_ohm(self):
        """Test that resistance renders as Ω and \\Omega."""
        ohm = Dimension.from_symbol("O")
        assert ohm == Dimension.from_symbol("Ω")
        assert ohm.to_string() == "Ω"
        assert ohm.to_latex() == r"\Omega"

    def test_product_of_base_units(self):
        """Test fallback rendering of unnamed dimensions."""
        velocity = Dimension.of(length=1, time=-1)
        assert velocity.to_string() == "m s^-1"
        assert velocity.to_latex() == r"m\,s^{-1}"

    def test_fractional_exponent(self):
        """Test that fractional exponents are bracketed."""
        assert LENGTH.divide(2).to_string() == "m^(1/2)"

    def test_dimensionless_renders_empty(self):
        """Test that a dimensionless value has no unit text."""
        assert DIMENSIONLESS.to_string() == ""
