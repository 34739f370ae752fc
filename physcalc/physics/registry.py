"""
Unit, prefix and constant registry.

Resolves unit symbols such as "km", "mmol", "keV" or "daN" into SI-scaled
quantities. A symbol resolves, in order, as an exact non-SI alias, a named
SI symbol, or a single prefix followed by one of those. Prefixes never stack.

Constants live in a separate namespace and are only reached through
con(...) in expressions, so "h" is the hour as a unit and Planck's
constant as a constant.
"""

from decimal import Decimal
from typing import Mapping, Optional

from physcalc.errors import UnitError, UnrecognizedSymbolError
from physcalc.physics.dimension import SI_SYMBOLS, Dimension
from physcalc.physics.quantity import Quantity

# Prefix symbol -> power of ten
PREFIXES = {
    "q": -30, "r": -27, "y": -24, "z": -21, "a": -18, "f": -15,
    "p": -12, "n": -9, "u": -6, "μ": -6, "m": -3, "c": -2, "d": -1,
    "da": 1, "h": 2, "k": 3, "M": 6, "G": 9, "T": 12,
    "P": 15, "E": 18, "Z": 21, "Y": 24, "R": 27, "Q": 30,
}

_ENERGY = Dimension.of(time=-2, length=2, mass=1)
_PRESSURE = Dimension.of(time=-2, length=-1, mass=1)
_TIME = Dimension.of(time=1)
_LENGTH = Dimension.of(length=1)
_MASS = Dimension.of(mass=1)

# Non-SI units accepted by name: symbol -> (SI value, dimension, description)
NON_SI_UNITS = {
    "g": ("0.001", _MASS, "gram"),
    "eV": ("1.602176634e-19", _ENERGY, "electron volt"),
    "min": ("60", _TIME, "minute"),
    "h": ("3600", _TIME, "hour"),
    "d": ("86400", _TIME, "day"),
    "au": ("149597870700", _LENGTH, "astronomical unit"),
    "pc": ("3.0856775814913673e16", _LENGTH, "parsec"),
    "ha": ("1e4", Dimension.of(length=2), "hectare"),
    "l": ("1e-3", Dimension.of(length=3), "litre"),
    "L": ("1e-3", Dimension.of(length=3), "litre"),
    "Da": ("1.66053906660e-27", _MASS, "dalton"),
    "amu": ("1.66053906660e-27", _MASS, "atomic mass unit"),
    "bar": ("1e5", _PRESSURE, "bar"),
    "atm": ("101325", _PRESSURE, "standard atmosphere"),
    "cal": ("4.184", _ENERGY, "thermochemical calorie"),
}

# Symbols that already include a prefix and cannot take another one
_NO_PREFIX = frozenset({"kg"})


class UnitRegistry:
    """
    Lookup table for units, prefixes and named constants.

    Args:
        constants: Mapping of constant symbol to its quantity. The default
            context fills this from the bundled constants dataset.
    """

    def __init__(self, constants: Optional[Mapping[str, Quantity]] = None):
        self._aliases = {
            symbol: Quantity(value, dimension)
            for symbol, (value, dimension, _) in NON_SI_UNITS.items()
        }
        self._constants = dict(constants or {})
        self._cache = {}

    def prefix(self, symbol: str) -> Optional[Quantity]:
        """Dimensionless multiplier for an SI prefix, or None."""
        power = PREFIXES.get(symbol)
        if power is None:
            return None
        return Quantity(Decimal(1).scaleb(power))

    def resolve(self, symbol: str) -> Optional[Quantity]:
        """Resolve a unit symbol to its SI-scaled quantity, or None."""
        if symbol in self._cache:
            return self._cache[symbol]
        unit = self._unprefixed(symbol)
        if unit is None:
            unit = self._prefixed(symbol)
        self._cache[symbol] = unit
        return unit

    def lookup(self, symbol: str) -> Quantity:
        """Like resolve, but raises UnitError for unknown symbols."""
        unit = self.resolve(symbol)
        if unit is None:
            raise UnitError(symbol)
        return unit

    def is_unit(self, symbol: str) -> bool:
        return self.resolve(symbol) is not None

    def constant(self, symbol: str) -> Optional[Quantity]:
        """Named physical constant, or None."""
        return self._constants.get(symbol)

    def require_constant(self, symbol: str) -> Quantity:
        constant = self.constant(symbol)
        if constant is None:
            raise UnrecognizedSymbolError(symbol, "constant")
        return constant

    @property
    def constants(self) -> dict:
        return dict(self._constants)

    def unit_symbols(self) -> list[str]:
        """All unprefixed unit symbols, aliases first."""
        return list(self._aliases) + [s for s in SI_SYMBOLS if s not in self._aliases]

    def _unprefixed(self, symbol: str) -> Optional[Quantity]:
        alias = self._aliases.get(symbol)
        if alias is not None:
            return alias
        dimension = SI_SYMBOLS.get(symbol)
        if dimension is not None:
            return Quantity(1, dimension)
        return None

    def _prefixed(self, symbol: str) -> Optional[Quantity]:
        # "da" is the only two character prefix
        for size in (2, 1):
            if len(symbol) <= size:
                continue
            prefix = self.prefix(symbol[:size])
            base_symbol = symbol[size:]
            if prefix is None or base_symbol in _NO_PREFIX:
                continue
            base = self._unprefixed(base_symbol)
            if base is not None:
                return base.multiply(prefix)
        return None
