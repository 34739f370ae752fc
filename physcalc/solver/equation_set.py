"""
Equation sets: many equations sharing one variable table.

An EquationSet owns a list of equation lines. Evaluating it compiles every
line, orders the equations by dependency, and evaluates them in that order,
writing each assigned value into the variable table. Failures never stop the
set; they are reported per line and only affect the equations that depend
on the failed one.
"""

import logging
import re
from decimal import DecimalException
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from physcalc.context import CalculatorContext, default_context
from physcalc.errors import (
    CalculatorError,
    CircularDependencyError,
    MathDomainError,
    VariableConflictError,
)
from physcalc.models.outputs import EquationError, EquationResult
from physcalc.parsing.equation import Equation, compile_equation
from physcalc.physics.quantity import DEFAULT_SIG_FIGS, Quantity
from physcalc.solver.dependency import DependencyResolver

logger = logging.getLogger(__name__)

_ASSIGNED_NAME = re.compile(r"^\s*([A-Za-z][A-Za-z0-9_]*)\s*=")

PathLike = Union[str, Path]


def load_equations(path: PathLike) -> list[str]:
    """Read an equation file: UTF-8, one equation per line."""
    with open(path, encoding="utf-8") as f:
        return f.read().splitlines()


def save_equations(path: PathLike, lines: Iterable[str]) -> None:
    """Write equations one per line, each newline terminated."""
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(f"{line}\n")


class EquationSet:
    """
    Ordered equation lines evaluated against a shared variable table.

    Args:
        lines: Initial equation lines
        context: Reference tables; the bundled default when None
        sig_figs: Significant figures used when formatting results
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        context: Optional[CalculatorContext] = None,
        sig_figs: int = DEFAULT_SIG_FIGS,
    ):
        self.context = context or default_context()
        self.sig_figs = sig_figs
        self.resolver = DependencyResolver()
        self._lines: list[str] = list(lines)
        self._variables: dict[str, Quantity] = {}

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def variables(self) -> Mapping[str, Quantity]:
        """Variables resolved by the last evaluate() call (read-only)."""
        return MappingProxyType(self._variables)

    def __len__(self) -> int:
        return len(self._lines)

    def set_equations(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)

    def add(self, text: str) -> int:
        """Append an equation and return its index."""
        self._lines.append(text)
        return len(self._lines) - 1

    def update(self, index: int, text: str) -> None:
        self._lines[index] = text

    def remove(self, index: int) -> None:
        del self._lines[index]

    def clear(self) -> None:
        self._lines.clear()
        self._variables.clear()

    def load(self, path: PathLike) -> None:
        """Replace the equations with the contents of a file."""
        self._lines = load_equations(path)

    def save(self, path: PathLike) -> None:
        save_equations(path, self._lines)

    def assigned_names(self) -> set[str]:
        """Names assigned anywhere in the set, found without full parsing."""
        names = set()
        for line in self._lines:
            match = _ASSIGNED_NAME.match(line)
            if match:
                names.add(match.group(1))
        return names

    def evaluate(self) -> list[EquationResult]:
        """
        Evaluate every non-blank line.

        Returns:
            One EquationResult per non-blank line, in line order
        """
        self._variables = {}
        results: dict[int, EquationResult] = {}
        known = self.assigned_names()
        compiled: list[tuple[int, Equation]] = []
        defined: dict[str, int] = {}

        for index, line in enumerate(self._lines):
            if not line.strip():
                continue
            try:
                equation = compile_equation(line, known, self.context)
                if equation.is_assignment():
                    if equation.variable in defined:
                        raise VariableConflictError(equation.variable)
                    defined[equation.variable] = index
                compiled.append((index, equation))
            except CalculatorError as e:
                results[index] = self._failure(index, line, e)

        index_of = {id(equation): index for index, equation in compiled}
        pending = [equation for _, equation in compiled]
        ordered = self._order(pending, index_of, results)

        for equation in ordered:
            index = index_of[id(equation)]
            try:
                value = self._evaluate_one(equation)
            except CalculatorError as e:
                results[index] = self._failure(index, equation.source, e, equation)
                continue
            if equation.is_assignment():
                self._variables[equation.variable] = value
            results[index] = self._success(index, equation, value)

        logger.debug("Evaluated %d equations, %d variables", len(results), len(self._variables))
        return [results[index] for index in sorted(results)]

    def _order(self, pending: list[Equation], index_of: dict, results: dict) -> list[Equation]:
        """Dependency order, failing every equation caught in a cycle."""
        while True:
            try:
                return self.resolver.order(pending)
            except CircularDependencyError as e:
                for member in e.members:
                    index = index_of[id(member)]
                    results[index] = self._failure(index, member.source, e, member)
                    pending = [p for p in pending if p is not member]

    def _evaluate_one(self, equation: Equation) -> Quantity:
        try:
            return equation.evaluate(self._variables.get)
        except DecimalException as e:
            raise MathDomainError(f"Arithmetic error: {type(e).__name__}") from e

    def _success(self, index: int, equation: Equation, value: Quantity) -> EquationResult:
        return EquationResult(
            index=index,
            equation=equation.source,
            variable=equation.variable,
            value=value.to_string(self.sig_figs),
            value_latex=value.to_latex_string(self.sig_figs),
            latex=equation.to_latex_string(self.sig_figs),
        )

    def _failure(
        self,
        index: int,
        line: str,
        error: CalculatorError,
        equation: Optional[Equation] = None,
    ) -> EquationResult:
        if error.equation is None:
            error.equation = line
        logger.warning("Equation %d (%r) failed: %s", index, line, error)
        variable = equation.variable if equation is not None else None
        if variable is None:
            match = _ASSIGNED_NAME.match(line)
            variable = match.group(1) if match else None
        return EquationResult(
            index=index,
            equation=line,
            variable=variable,
            latex=equation.to_latex_string(self.sig_figs) if equation is not None else None,
            error=EquationError(kind=error.kind, code=error.code, message=error.message),
        )
