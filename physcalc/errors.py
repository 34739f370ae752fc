"""
Error hierarchy for the expression engine.

Every failure the engine can report is a CalculatorError. Each subclass
carries a numeric code so API and CLI callers can tell failure kinds apart
without matching on message text. The equation text is attached when the
error surfaces inside an equation set.
"""

from typing import Optional, Sequence


class CalculatorError(Exception):
    """Base class for all engine errors."""

    code = 3000

    def __init__(self, message: str, equation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.equation = equation

    @property
    def kind(self) -> str:
        """Short error kind used in result records."""
        return type(self).__name__

    def __str__(self) -> str:
        return self.message


class LexError(CalculatorError):
    """Raised when part of the input matches no token rule."""

    code = 3100

    def __init__(self, text: str, position: int, equation: Optional[str] = None):
        super().__init__(f"Unrecognized input '{text}' at position {position}", equation)
        self.text = text
        self.position = position


class ParseError(CalculatorError):
    """Raised for malformed token streams and invalid assignment targets."""

    code = 3200


class UnrecognizedSymbolError(CalculatorError):
    """Raised for unknown prefixes, elements, nuclides and constants."""

    code = 3300

    def __init__(self, symbol: str, what: str = "symbol", equation: Optional[str] = None):
        super().__init__(f"Unrecognized {what} '{symbol}'", equation)
        self.symbol = symbol


class UnitError(UnrecognizedSymbolError):
    """Raised when a unit symbol cannot be resolved."""

    code = 3301

    def __init__(self, symbol: str, equation: Optional[str] = None):
        super().__init__(symbol, "unit", equation)


class DimensionMismatchError(CalculatorError):
    """Raised when an operation combines incompatible dimensions."""

    code = 3400

    def __init__(self, left: str, right: str, equation: Optional[str] = None):
        super().__init__(f"Incompatible dimensions: [{left}] and [{right}]", equation)
        self.left = left
        self.right = right


class UndefinedVariableError(CalculatorError):
    """Raised when a referenced variable has no resolved value."""

    code = 3500

    def __init__(self, name: str, equation: Optional[str] = None):
        super().__init__(f"Variable '{name}' is not defined", equation)
        self.name = name


class CircularDependencyError(CalculatorError):
    """Raised when equations depend on each other in a cycle."""

    code = 3600

    def __init__(self, variable: str, cycle: Sequence[str] = (), equation: Optional[str] = None):
        path = " -> ".join(cycle) if cycle else variable
        super().__init__(f"Circular dependency on variable '{variable}': {path}", equation)
        self.variable = variable
        self.cycle = tuple(cycle)


class VariableConflictError(CalculatorError):
    """Raised when two equations assign the same variable."""

    code = 3601

    def __init__(self, name: str, equation: Optional[str] = None):
        super().__init__(f"Conflicting definitions for variable '{name}'", equation)
        self.name = name


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Raised when dividing by a zero-valued quantity."""

    code = 3003

    def __init__(self, message: str = "Division by zero", equation: Optional[str] = None):
        super().__init__(message, equation)


class MathDomainError(CalculatorError, ArithmeticError):
    """Raised when a function argument lies outside its real domain."""

    code = 3004


class StableNuclideError(UnrecognizedSymbolError):
    """Raised when asking for the half-life of a stable nuclide."""

    code = 3302

    def __init__(self, nuclide: str, equation: Optional[str] = None):
        CalculatorError.__init__(self, f"Nuclide '{nuclide}' is stable and has no half-life", equation)
        self.symbol = nuclide


__all__ = [
    "CalculatorError",
    "LexError",
    "ParseError",
    "UnrecognizedSymbolError",
    "UnitError",
    "DimensionMismatchError",
    "UndefinedVariableError",
    "CircularDependencyError",
    "VariableConflictError",
    "DivisionByZeroError",
    "MathDomainError",
    "StableNuclideError",
]
