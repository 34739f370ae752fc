"""
Multi-equation evaluation: dependency ordering and the equation set.
"""

from physcalc.solver.dependency import DependencyResolver
from physcalc.solver.equation_set import EquationSet, load_equations, save_equations

__all__ = [
    "DependencyResolver",
    "EquationSet",
    "load_equations",
    "save_equations",
]
