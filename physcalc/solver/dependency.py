"""
Ordering of equations by variable dependency.

Edges run from the equation that assigns a variable to every equation that
reads it. A depth-first topological sort then yields an order in which each
variable is computed before it is used.
"""

import logging
from typing import Sequence

from physcalc.errors import CircularDependencyError, VariableConflictError
from physcalc.parsing.equation import Equation

logger = logging.getLogger(__name__)

_UNVISITED, _VISITING, _DONE = 0, 1, 2


class DependencyResolver:
    """Topological sort of equations with cycle and conflict detection."""

    def build_edges(self, equations: Sequence[Equation]) -> dict[str, list[Equation]]:
        """Map each variable name to the equations that use it, in input order."""
        edges: dict[str, list[Equation]] = {}
        for equation in equations:
            for name in sorted(equation.variable_usage):
                edges.setdefault(name, []).append(equation)
        return edges

    def order(self, equations: Sequence[Equation]) -> list[Equation]:
        """
        Order equations so that definitions precede their uses.

        The result is deterministic for a given input order.

        Raises:
            VariableConflictError: If two equations assign the same variable
            CircularDependencyError: If equations depend on each other in a
                cycle. Its `members` attribute lists the equations involved.
        """
        defined = set()
        for equation in equations:
            if equation.is_assignment():
                if equation.variable in defined:
                    raise VariableConflictError(equation.variable, equation.source)
                defined.add(equation.variable)

        edges = self.build_edges(equations)
        marks: dict[int, int] = {}
        path: list[Equation] = []
        post_order: list[Equation] = []

        def visit(equation: Equation) -> None:
            marks[id(equation)] = _VISITING
            path.append(equation)
            if equation.is_assignment():
                for dependent in reversed(edges.get(equation.variable, [])):
                    state = marks.get(id(dependent), _UNVISITED)
                    if state == _VISITING:
                        raise _cycle_error(path, dependent)
                    if state == _UNVISITED:
                        visit(dependent)
            path.pop()
            marks[id(equation)] = _DONE
            post_order.append(equation)

        # Independent equations come out in input order
        for equation in reversed(equations):
            if marks.get(id(equation), _UNVISITED) == _UNVISITED:
                visit(equation)

        post_order.reverse()
        logger.debug("Evaluation order: %s", [e.variable or e.source for e in post_order])
        return post_order


def _cycle_error(path: list[Equation], repeated: Equation) -> CircularDependencyError:
    start = next(i for i, e in enumerate(path) if e is repeated)
    members = path[start:]
    cycle = [e.variable for e in members] + [repeated.variable]
    error = CircularDependencyError(repeated.variable, cycle, repeated.source)
    error.members = tuple(members)
    return error
