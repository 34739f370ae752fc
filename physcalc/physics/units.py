"""
Interoperability with the pint unit library.

This module is a public interop surface only: the calculator itself never
goes through pint and keeps its own exact Decimal quantities. Callers that
already work with pint convert in both directions with `to_pint` and
`from_pint`. Magnitudes cross the boundary as floats.
"""

from decimal import Decimal

import pint

from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import Quantity

# to_pint builds its quantities in this registry
ureg = pint.UnitRegistry()
Q_ = ureg.Quantity

# pint base unit and dimension name per exponent slot
PINT_BASE_UNITS = ("second", "meter", "kilogram", "ampere", "kelvin", "mole", "candela")
PINT_DIMENSIONS = ("[time]", "[length]", "[mass]", "[current]", "[temperature]", "[substance]", "[luminosity]")


def pint_units(dimension: Dimension) -> str:
    """pint unit expression in SI base units for a dimension."""
    factors = [
        f"{unit} ** {float(exponent):g}"
        for unit, exponent in zip(PINT_BASE_UNITS, dimension.exponents)
        if exponent != 0
    ]
    return " * ".join(factors) or "dimensionless"


def to_pint(quantity: Quantity) -> pint.Quantity:
    """Convert to a pint quantity in SI base units (float magnitude)."""
    return Q_(float(quantity.value), pint_units(quantity.dimension))


def from_pint(quantity: pint.Quantity) -> Quantity:
    """Convert a pint quantity to an SI-based Quantity."""
    base = quantity.to_base_units()
    dimensionality = dict(base.dimensionality)
    dimension = Dimension(tuple(dimensionality.get(name, 0) for name in PINT_DIMENSIONS))
    return Quantity(Decimal(repr(float(base.magnitude))), dimension)


def magnitude_in(quantity: Quantity, unit: str) -> float:
    """Get the magnitude of a quantity in any pint-known unit."""
    return to_pint(quantity).to(unit).magnitude
