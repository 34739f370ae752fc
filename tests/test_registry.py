"""
Tests for unit, prefix and constant resolution.
"""

from decimal import Decimal

import pytest

from physcalc.errors import UnitError, UnrecognizedSymbolError
from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import Quantity
from physcalc.physics.units import Q_, from_pint, to_pint

LENGTH = Dimension.of(length=1)
MASS = Dimension.of(mass=1)
TIME = Dimension.of(time=1)


class TestUnitResolution:
    """Tests for UnitRegistry.resolve."""

    @pytest.mark.parametrize("symbol,expected", [
        ("m", Quantity(1, LENGTH)),
        ("km", Quantity(1000, LENGTH)),
        ("mm", Quantity(Decimal("0.001"), LENGTH)),
        ("dam", Quantity(10, LENGTH)),
        ("dm", Quantity(Decimal("0.1"), LENGTH)),
        ("g", Quantity(Decimal("0.001"), MASS)),
        ("mg", Quantity(Decimal("1e-6"), MASS)),
        ("kg", Quantity(1, MASS)),
        ("min", Quantity(60, TIME)),
        ("h", Quantity(3600, TIME)),
    ])
    def test_resolve(self, registry, symbol, expected):
        """Test resolution of common symbols."""
        assert registry.resolve(symbol) == expected

    def test_micro_aliases(self, registry):
        """Test that u and μ are both micro."""
        assert registry.resolve("us") == registry.resolve("μs")
        assert registry.resolve("us").value == Decimal("1e-6")

    def test_da_prefix(self, registry):
        """Test the two character prefix."""
        assert registry.resolve("daN") == Quantity(10, Dimension.from_symbol("N"))

    def test_prefixed_alias(self, registry):
        """Test a prefix on a non-SI unit."""
        assert registry.resolve("keV").value == Decimal("1.602176634e-16")

    def test_si_symbol_beats_prefix(self, registry):
        """Test that Pa is pascal and cd is candela."""
        assert registry.resolve("Pa").dimension == Dimension.from_symbol("Pa")
        assert registry.resolve("cd").dimension == Dimension.of(luminous=1)
        assert registry.resolve("mol").dimension == Dimension.of(amount=1)

    @pytest.mark.parametrize("symbol", ["xyz", "kk", "mkg", "da", "G"])
    def test_unknown(self, registry, symbol):
        """Test that unknown and double-prefixed symbols resolve to None."""
        assert registry.resolve(symbol) is None

    def test_lookup_raises(self, registry):
        """Test that lookup raises UnitError for unknown symbols."""
        with pytest.raises(UnitError):
            registry.lookup("zork")

    def test_prefix(self, registry):
        """Test prefix multipliers."""
        assert registry.prefix("da") == Quantity(10)
        assert registry.prefix("Q").value == Decimal("1e30")
        assert registry.prefix("x") is None


class TestConstants:
    """Tests for named constants."""

    def test_speed_of_light(self, registry):
        """Test that c has velocity dimensions."""
        c = registry.constant("c")
        assert c.value == Decimal("299792458")
        assert c.dimension == Dimension.of(length=1, time=-1)

    def test_euler_and_elementary_charge_are_distinct(self, registry):
        """Test that e is Euler's number and qe the elementary charge."""
        assert registry.constant("e").is_dimensionless()
        assert registry.constant("e").to_string() == "2.71828"
        assert registry.constant("qe").dimension == Dimension.from_symbol("C")

    def test_boltzmann_dimension(self, registry):
        """Test that kb is J/K."""
        assert registry.constant("kb").dimension == Dimension.of(time=-2, length=2, mass=1, temperature=-1)

    def test_electron_mass(self, registry):
        """Test the electron mass magnitude."""
        assert registry.constant("me").value == Decimal("9.1093837015e-31")

    def test_unknown_constant(self, registry):
        """Test unknown constants."""
        assert registry.constant("nope") is None
        with pytest.raises(UnrecognizedSymbolError):
            registry.require_constant("nope")


class TestPintInterop:
    """Tests that non-SI factors agree with pint."""

    @pytest.mark.parametrize("symbol,pint_unit", [
        ("eV", "electron_volt"),
        ("min", "minute"),
        ("h", "hour"),
        ("d", "day"),
        ("au", "astronomical_unit"),
        ("pc", "parsec"),
        ("ha", "hectare"),
        ("l", "liter"),
        ("Da", "dalton"),
        ("bar", "bar"),
        ("atm", "atmosphere"),
        ("cal", "calorie"),
    ])
    def test_factor_matches_pint(self, registry, symbol, pint_unit):
        """Test each unit's SI factor against pint."""
        expected = Q_(1, pint_unit).to_base_units().magnitude
        assert float(registry.resolve(symbol).value) == pytest.approx(expected, rel=1e-6)

    def test_to_pint(self):
        """Test conversion into pint."""
        assert to_pint(Quantity("5N")).to("newton").magnitude == pytest.approx(5)

    def test_from_pint(self):
        """Test conversion from pint into SI."""
        speed = from_pint(Q_(36, "km/h"))
        assert speed.dimension == Dimension.of(length=1, time=-1)
        assert float(speed.value) == pytest.approx(10)
