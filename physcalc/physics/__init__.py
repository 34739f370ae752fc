"""
Dimensions, quantities and units.

This package provides exact, unit-aware arithmetic:
- Dimension vectors over the 7 SI base quantities
- Decimal quantities with dimension checking
- The unit, prefix and constant registry
- Conversion to and from pint quantities
"""

from physcalc.physics.dimension import DIMENSIONLESS, Dimension
from physcalc.physics.quantity import DEFAULT_SIG_FIGS, PRECISION, DisplayUnit, Quantity
from physcalc.physics.registry import NON_SI_UNITS, PREFIXES, UnitRegistry
from physcalc.physics.units import Q_, from_pint, to_pint, ureg

__all__ = [
    # Dimensions
    "DIMENSIONLESS",
    "Dimension",
    # Quantities
    "DEFAULT_SIG_FIGS",
    "PRECISION",
    "DisplayUnit",
    "Quantity",
    # Registry
    "NON_SI_UNITS",
    "PREFIXES",
    "UnitRegistry",
    # pint
    "Q_",
    "from_pint",
    "to_pint",
    "ureg",
]
