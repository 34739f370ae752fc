"""
Physical dimensions as vectors of rational exponents.

A Dimension holds one exponent per SI base quantity, in the fixed order
(time, length, mass, current, temperature, amount, luminous intensity).
Exponents are Fractions so that square roots can halve them exactly.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Optional, Union

BASE_COUNT = 7

# Base symbol per exponent slot, in storage order
BASE_SYMBOLS = ("s", "m", "kg", "A", "K", "mol", "cd")

# Slot order used when rendering a product of base units
DISPLAY_ORDER = (2, 1, 0, 3, 4, 5, 6)

Number = Union[int, Fraction]


@dataclass(frozen=True)
class Dimension:
    """Immutable vector of the 7 SI base exponents."""

    exponents: tuple = (Fraction(0),) * BASE_COUNT

    def __post_init__(self):
        values = tuple(Fraction(e) for e in self.exponents)
        if len(values) != BASE_COUNT:
            raise ValueError(f"Dimension needs {BASE_COUNT} exponents, got {len(values)}")
        object.__setattr__(self, "exponents", values)

    @classmethod
    def of(
        cls,
        time: Number = 0,
        length: Number = 0,
        mass: Number = 0,
        current: Number = 0,
        temperature: Number = 0,
        amount: Number = 0,
        luminous: Number = 0,
    ) -> "Dimension":
        """Build a dimension from named exponents."""
        return cls((time, length, mass, current, temperature, amount, luminous))

    @classmethod
    def dimensionless(cls) -> "Dimension":
        return DIMENSIONLESS

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Dimension"]:
        """Return the dimension of a named SI unit symbol, or None."""
        return SI_SYMBOLS.get(symbol)

    # Properties for readability
    @property
    def time(self) -> Fraction:
        return self.exponents[0]

    @property
    def length(self) -> Fraction:
        return self.exponents[1]

    @property
    def mass(self) -> Fraction:
        return self.exponents[2]

    def is_dimensionless(self) -> bool:
        return all(e == 0 for e in self.exponents)

    def add(self, other: "Dimension") -> "Dimension":
        """Exponents of a product of quantities."""
        return Dimension(tuple(a + b for a, b in zip(self.exponents, other.exponents)))

    def subtract(self, other: "Dimension") -> "Dimension":
        """Exponents of a quotient of quantities."""
        return Dimension(tuple(a - b for a, b in zip(self.exponents, other.exponents)))

    def invert(self) -> "Dimension":
        return Dimension(tuple(-e for e in self.exponents))

    def multiply(self, scalar: Number) -> "Dimension":
        """Exponents of a quantity raised to `scalar`."""
        factor = Fraction(scalar)
        return Dimension(tuple(e * factor for e in self.exponents))

    def divide(self, scalar: Number) -> "Dimension":
        factor = Fraction(scalar)
        return Dimension(tuple(e / factor for e in self.exponents))

    def named_unit(self) -> Optional[str]:
        """Symbol of the named SI unit with exactly this dimension, if any."""
        return NAMED_UNITS.get(self)

    def to_string(self) -> str:
        """
        Render the dimension as unit text.

        A dimension matching a named SI unit renders as that symbol. Anything
        else renders as a space separated product of base symbols, e.g.
        "kg m^2 s^-3 A^-1" or "m^(1/2)".
        """
        named = self.named_unit()
        if named is not None:
            return named
        return " ".join(
            _format_factor(BASE_SYMBOLS[i], self.exponents[i], latex=False)
            for i in DISPLAY_ORDER
            if self.exponents[i] != 0
        )

    def to_latex(self) -> str:
        named = self.named_unit()
        if named is not None:
            return r"\Omega" if named == "Ω" else named
        return r"\,".join(
            _format_factor(BASE_SYMBOLS[i], self.exponents[i], latex=True)
            for i in DISPLAY_ORDER
            if self.exponents[i] != 0
        )

    def __str__(self) -> str:
        return self.to_string()

    def __iter__(self):
        return iter(self.exponents)


def _format_factor(symbol: str, exponent: Fraction, latex: bool) -> str:
    if exponent == 1:
        return symbol
    if exponent.denominator == 1:
        text = str(exponent.numerator)
    else:
        text = f"({exponent.numerator}/{exponent.denominator})"
    if latex:
        return f"{symbol}^{{{text}}}"
    return f"{symbol}^{text}"


def dimension_from(values: Iterable[Number]) -> Dimension:
    """Build a dimension from any 7-item iterable of exponents."""
    return Dimension(tuple(values))


DIMENSIONLESS = Dimension()

# Named SI units and their base exponents (time, length, mass, current,
# temperature, amount, luminous)
SI_SYMBOLS = {
    "s": Dimension.of(time=1),
    "m": Dimension.of(length=1),
    "kg": Dimension.of(mass=1),
    "A": Dimension.of(current=1),
    "K": Dimension.of(temperature=1),
    "mol": Dimension.of(amount=1),
    "cd": Dimension.of(luminous=1),
    "Hz": Dimension.of(time=-1),
    "N": Dimension.of(time=-2, length=1, mass=1),
    "Pa": Dimension.of(time=-2, length=-1, mass=1),
    "J": Dimension.of(time=-2, length=2, mass=1),
    "W": Dimension.of(time=-3, length=2, mass=1),
    "C": Dimension.of(time=1, current=1),
    "V": Dimension.of(time=-3, length=2, mass=1, current=-1),
    "F": Dimension.of(time=4, length=-2, mass=-1, current=2),
    "Ω": Dimension.of(time=-3, length=2, mass=1, current=-2),
    "S": Dimension.of(time=3, length=-2, mass=-1, current=2),
    "Wb": Dimension.of(time=-2, length=2, mass=1, current=-1),
    "T": Dimension.of(time=-2, mass=1, current=-1),
    "H": Dimension.of(time=-2, length=2, mass=1, current=-2),
    "Sv": Dimension.of(time=-2, length=2),
}

# Reverse table used for rendering. Base units take priority, then derived
# units in the order above. Sv shares its dimension with Gy and is the one
# shown.
NAMED_UNITS = {}
for _symbol, _dimension in SI_SYMBOLS.items():
    NAMED_UNITS.setdefault(_dimension, _symbol)

# Accepted on input only
SI_SYMBOLS["O"] = SI_SYMBOLS["Ω"]
SI_SYMBOLS["Bq"] = SI_SYMBOLS["Hz"]
SI_SYMBOLS["Gy"] = SI_SYMBOLS["Sv"]
SI_SYMBOLS["lm"] = SI_SYMBOLS["cd"]
SI_SYMBOLS["lx"] = Dimension.of(length=-2, luminous=1)
