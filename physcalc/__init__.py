"""
Unit-aware expression calculator (physcalc)

Evaluates equations mixing numbers, SI units and prefixes, physical
constants, element and nuclide lookups, functions and variables, with exact
decimal arithmetic and dimension checking.

Usage:
    python -m physcalc eval "x = 5m" "y = x + 3m"
    python -m physcalc run equations.txt
    python -m physcalc units
    python -m physcalc serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "physcalc"

from physcalc.errors import CalculatorError
from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import Quantity
from physcalc.context import CalculatorContext, default_context
from physcalc.parsing.tokenizer import tokenize
from physcalc.parsing.equation import Equation, compile_equation, parse
from physcalc.solver.dependency import DependencyResolver
from physcalc.solver.equation_set import EquationSet

__all__ = [
    "CalculatorError",
    "Dimension",
    "Quantity",
    "CalculatorContext",
    "default_context",
    "tokenize",
    "Equation",
    "compile_equation",
    "parse",
    "DependencyResolver",
    "EquationSet",
]
