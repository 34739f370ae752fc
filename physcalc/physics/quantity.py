"""
Arbitrary precision physical quantities.

A Quantity pairs a Decimal value with a Dimension. Arithmetic is carried out
in a 100 digit decimal context and checks dimensions on every operation.
Transcendental functions the decimal module lacks (trigonometric and
hyperbolic) are evaluated with mpmath at a matching working precision.

Quantities may also carry the unit the user typed (for example "mm"); it is
only used when formatting LaTeX output and never affects equality.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import (
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    InvalidOperation,
)
from fractions import Fraction
from typing import Optional, Union

import mpmath

from physcalc.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    MathDomainError,
    ParseError,
    UnitError,
)
from physcalc.physics.dimension import DIMENSIONLESS, Dimension

logger = logging.getLogger(__name__)

# Significant digits kept by every intermediate result
PRECISION = 100
DECIMAL_CONTEXT = Context(prec=PRECISION, rounding=ROUND_HALF_EVEN)

DEFAULT_SIG_FIGS = 6

Numeric = Union[int, float, Decimal, Fraction]

# Functions evaluated through mpmath, keyed by engine name
MPMATH_FUNCTIONS = {
    "sin": mpmath.sin,
    "cos": mpmath.cos,
    "tan": mpmath.tan,
    "asin": mpmath.asin,
    "acos": mpmath.acos,
    "atan": mpmath.atan,
    "sinh": mpmath.sinh,
    "cosh": mpmath.cosh,
    "tanh": mpmath.tanh,
    "asinh": mpmath.asinh,
    "acosh": mpmath.acosh,
    "atanh": mpmath.atanh,
}


@dataclass(frozen=True)
class DisplayUnit:
    """The unit a quantity was entered in, with its SI scale factor."""
    symbol: str
    scale: Decimal


@contextmanager
def decimal_errors(operation: str):
    """Translate decimal signals raised inside the block into engine errors."""
    try:
        yield
    except DivisionByZero as e:
        raise DivisionByZeroError(f"Division by zero in {operation}") from e
    except DecimalException as e:
        raise MathDomainError(f"Invalid argument for {operation}") from e


def to_decimal(value) -> Decimal:
    """Convert a plain number or numeric string to a Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, Fraction):
        return DECIMAL_CONTEXT.divide(Decimal(value.numerator), Decimal(value.denominator))
    if isinstance(value, float):
        return Decimal(repr(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ParseError(f"Invalid number '{value}'") from e


def format_value(value: Decimal, sig_figs: int = DEFAULT_SIG_FIGS) -> str:
    """
    Round to significant figures and render as text.

    Rounding is half-up. Trailing zeros after a decimal point are removed,
    zeros before it are kept. Values outside the plain-notation window keep
    Decimal's scientific form, e.g. "1.23457E+6" or "1E-9".
    """
    if value.is_zero():
        return "0"
    exponent = value.adjusted() - sig_figs + 1
    rounded = value.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP, context=DECIMAL_CONTEXT)
    if rounded.adjusted() != value.adjusted():
        # Rounding carried into a new leading digit
        exponent = rounded.adjusted() - sig_figs + 1
        rounded = rounded.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP, context=DECIMAL_CONTEXT)
    mantissa, marker, power = str(rounded).partition("E")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return mantissa + marker + power


def latex_number(text: str) -> str:
    """Replace scientific 'E' notation with a LaTeX power of ten."""
    mantissa, marker, power = text.partition("E")
    if not marker:
        return text
    return f"{mantissa}*10^{{{power.lstrip('+')}}}"


def latex_unit(symbol: str) -> str:
    return symbol.replace("Ω", r"\Omega").replace("μ", r"\mu ")


class Quantity:
    """
    Immutable dimensioned value.

    Quantity("10mm") parses a literal: a number, a unit, or a number
    directly followed by a unit. Quantity(value, dimension) builds one from
    parts. Results of arithmetic never carry a display unit, except negate.
    """

    __slots__ = ("_value", "_dimension", "_unit")

    def __init__(
        self,
        value: Union[str, Numeric] = 0,
        dimension: Optional[Dimension] = None,
        unit: Optional[DisplayUnit] = None,
        registry=None,
    ):
        if isinstance(value, str) and dimension is None:
            value, dimension, unit = _parse_literal(value, registry)
        self._value = to_decimal(value)
        self._dimension = dimension if dimension is not None else DIMENSIONLESS
        self._unit = unit

    @property
    def value(self) -> Decimal:
        return self._value

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def unit(self) -> Optional[DisplayUnit]:
        return self._unit

    def is_dimensionless(self) -> bool:
        return self._dimension.is_dimensionless()

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def is_integer(self) -> bool:
        return self._value == self._value.to_integral_value()

    # Arithmetic

    def add(self, other: "Quantity") -> "Quantity":
        self._require_same_dimension(other)
        with decimal_errors("addition"):
            return Quantity(DECIMAL_CONTEXT.add(self._value, other._value), self._dimension)

    def subtract(self, other: "Quantity") -> "Quantity":
        self._require_same_dimension(other)
        with decimal_errors("subtraction"):
            return Quantity(DECIMAL_CONTEXT.subtract(self._value, other._value), self._dimension)

    def multiply(self, other: "Quantity") -> "Quantity":
        with decimal_errors("multiplication"):
            value = DECIMAL_CONTEXT.multiply(self._value, other._value)
        return Quantity(value, self._dimension.add(other._dimension))

    def divide(self, other: "Quantity") -> "Quantity":
        if other.is_zero():
            raise DivisionByZeroError()
        with decimal_errors("division"):
            value = DECIMAL_CONTEXT.divide(self._value, other._value)
        return Quantity(value, self._dimension.subtract(other._dimension))

    def negate(self) -> "Quantity":
        return Quantity(DECIMAL_CONTEXT.minus(self._value), self._dimension, self._unit)

    def pow(self, exponent: "Quantity") -> "Quantity":
        """
        Raise to a dimensionless power.

        A dimensioned base only accepts exponents n for which n * i, computed
        at working precision, is an integer for some i in 1..9. That admits
        terminating fractions such as 0.5 or 0.125, and also rounded thirds,
        sixths and ninths (1/3 * 6 rounds to exactly 2). Other exponents, e.g.
        0.3, raise DimensionMismatchError.
        """
        if not exponent.is_dimensionless():
            raise DimensionMismatchError(exponent._dimension.to_string(), "1")
        n = exponent._value
        if self.is_dimensionless():
            return Quantity(_power(self._value, n))
        for i in range(1, 10):
            scaled = DECIMAL_CONTEXT.multiply(n, Decimal(i))
            if scaled == scaled.to_integral_value():
                dimension = self._dimension.multiply(Fraction(int(scaled), i))
                return Quantity(_power(self._value, n), dimension)
        raise DimensionMismatchError(self._dimension.to_string(), f"power {format_value(n)}")

    def sqrt(self) -> "Quantity":
        if self._value < 0:
            raise MathDomainError("Square root of a negative value")
        with decimal_errors("sqrt"):
            value = DECIMAL_CONTEXT.sqrt(self._value)
        return Quantity(value, self._dimension.divide(2))

    def ln(self) -> "Quantity":
        self._require_dimensionless("ln")
        if self._value <= 0:
            raise MathDomainError("Logarithm of a non-positive value")
        with decimal_errors("ln"):
            return Quantity(DECIMAL_CONTEXT.ln(self._value))

    def log(self) -> "Quantity":
        """Base-10 logarithm."""
        self._require_dimensionless("log")
        if self._value <= 0:
            raise MathDomainError("Logarithm of a non-positive value")
        with decimal_errors("log"):
            return Quantity(DECIMAL_CONTEXT.log10(self._value))

    def exp(self) -> "Quantity":
        self._require_dimensionless("exp")
        with decimal_errors("exp"):
            return Quantity(DECIMAL_CONTEXT.exp(self._value))

    def apply(self, function: str) -> "Quantity":
        """Apply a named function (sin, sqrt, ln, ...) to this quantity."""
        method = _NATIVE_FUNCTIONS.get(function)
        if method is not None:
            return method(self)
        if function not in MPMATH_FUNCTIONS:
            raise ParseError(f"Unknown function '{function}'")
        self._require_dimensionless(function)
        return Quantity(_mp_call(function, self._value))

    def sin(self) -> "Quantity":
        return self.apply("sin")

    def cos(self) -> "Quantity":
        return self.apply("cos")

    def tan(self) -> "Quantity":
        return self.apply("tan")

    # Conversion

    def to(self, unit: str, registry=None) -> "Quantity":
        """Same quantity, displayed in `unit` (e.g. "km")."""
        target = _resolve_unit(unit, registry)
        if target._dimension != self._dimension:
            raise DimensionMismatchError(self._dimension.to_string(), target._dimension.to_string())
        return Quantity(self._value, self._dimension, DisplayUnit(unit, target._value))

    def magnitude_in(self, unit: str, registry=None) -> Decimal:
        """Numeric value expressed in `unit`."""
        converted = self.to(unit, registry)
        return DECIMAL_CONTEXT.divide(converted._value, converted._unit.scale)

    # Formatting

    def to_string(self, sig_figs: int = DEFAULT_SIG_FIGS) -> str:
        if self._value == 1 and not self.is_dimensionless():
            return self._dimension.to_string()
        return format_value(self._value, sig_figs) + self._dimension.to_string()

    def to_latex_string(self, sig_figs: int = DEFAULT_SIG_FIGS) -> str:
        if self._unit is not None:
            coefficient = DECIMAL_CONTEXT.divide(self._value, self._unit.scale)
            if coefficient == 1:
                return latex_unit(self._unit.symbol)
            return latex_number(format_value(coefficient, sig_figs)) + latex_unit(self._unit.symbol)
        if self._value == 1 and not self.is_dimensionless():
            return self._dimension.to_latex()
        return latex_number(format_value(self._value, sig_figs)) + self._dimension.to_latex()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Quantity('{self.to_string()}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._value == other._value and self._dimension == other._dimension

    def __hash__(self) -> int:
        return hash((self._value, self._dimension))

    # Operator overloads

    def __add__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.subtract(other)

    def __rsub__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.subtract(self)

    def __mul__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.multiply(other)

    def __rmul__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.multiply(self)

    def __truediv__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.divide(other)

    def __rtruediv__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.divide(self)

    def __pow__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.pow(other)

    def __neg__(self):
        return self.negate()

    # Helpers

    def _require_same_dimension(self, other: "Quantity") -> None:
        if self._dimension != other._dimension:
            raise DimensionMismatchError(self._dimension.to_string(), other._dimension.to_string())

    def _require_dimensionless(self, operation: str) -> None:
        if not self.is_dimensionless():
            raise DimensionMismatchError(self._dimension.to_string(), "1")


_NATIVE_FUNCTIONS = {
    "sqrt": Quantity.sqrt,
    "ln": Quantity.ln,
    "log": Quantity.log,
    "exp": Quantity.exp,
}

FUNCTION_NAMES = tuple(_NATIVE_FUNCTIONS) + tuple(MPMATH_FUNCTIONS)


def _coerce(other) -> Optional[Quantity]:
    if isinstance(other, Quantity):
        return other
    if isinstance(other, (int, float, Decimal, Fraction)):
        return Quantity(other, DIMENSIONLESS)
    return None


def _power(base: Decimal, exponent: Decimal) -> Decimal:
    if base < 0 and exponent != exponent.to_integral_value():
        raise MathDomainError("Negative base raised to a non-integer power")
    if base.is_zero() and exponent < 0:
        raise DivisionByZeroError("Zero raised to a negative power")
    with decimal_errors("power"):
        return DECIMAL_CONTEXT.power(base, exponent)


def _mp_call(function: str, value: Decimal) -> Decimal:
    with mpmath.workdps(PRECISION + 10):
        try:
            result = MPMATH_FUNCTIONS[function](mpmath.mpf(str(value)))
        except (ValueError, ZeroDivisionError) as e:
            raise MathDomainError(f"Invalid argument for {function}") from e
        if isinstance(result, mpmath.mpc) or not mpmath.isfinite(result):
            raise MathDomainError(f"Invalid argument for {function}")
        text = mpmath.nstr(result, PRECISION)
    return DECIMAL_CONTEXT.plus(Decimal(text))


def _default_registry():
    from physcalc.context import default_context

    return default_context().registry


def _resolve_unit(symbol: str, registry=None) -> Quantity:
    registry = registry or _default_registry()
    unit = registry.resolve(symbol.strip())
    if unit is None:
        raise UnitError(symbol)
    return unit


def _parse_literal(text: str, registry=None):
    """Split a literal after its last digit into a number and a unit."""
    text = text.strip()
    if not text:
        raise ParseError("Empty quantity literal")
    last_digit = max((i for i, ch in enumerate(text) if ch.isdigit()), default=-1)
    number_text = text[:last_digit + 1].strip()
    unit_text = text[last_digit + 1:].strip()
    value = to_decimal(number_text) if number_text else Decimal(1)
    if not unit_text:
        return value, DIMENSIONLESS, None
    unit = _resolve_unit(unit_text, registry)
    with decimal_errors("unit conversion"):
        scaled = DECIMAL_CONTEXT.multiply(value, unit.value)
    logger.debug("Parsed literal %r as %s %s", text, number_text or "1", unit_text)
    return scaled, unit.dimension, DisplayUnit(unit_text, unit.value)
