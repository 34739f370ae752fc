"""
Output models for equation evaluation.

These models are what the equation set, the API and the CLI hand back to
callers: one record per equation, carrying either a value or an error.
"""

from typing import Optional

from pydantic import BaseModel, Field


class EquationError(BaseModel):
    """Why an equation could not be evaluated."""
    kind: str = Field(..., description="Error class name, e.g. 'DimensionMismatchError'")
    code: int = Field(..., description="Numeric error code")
    message: str = Field(..., description="Human readable message")


class EquationResult(BaseModel):
    """
    Result of one equation line.

    Exactly one of `value` and `error` is set.
    """
    index: int = Field(..., ge=0, description="Line number in the equation set (0-based)")
    equation: str = Field(..., description="Equation text as entered")
    variable: Optional[str] = Field(default=None, description="Assigned variable, if any")
    value: Optional[str] = Field(default=None, description="Result formatted to the requested significant figures")
    value_latex: Optional[str] = Field(default=None, description="Result as LaTeX")
    latex: Optional[str] = Field(default=None, description="The equation itself as LaTeX")
    error: Optional[EquationError] = Field(default=None, description="Failure details")

    @property
    def ok(self) -> bool:
        return self.error is None


class EvaluateResponse(BaseModel):
    """Results of evaluating a list of equations."""
    results: list[EquationResult] = Field(default_factory=list)
    variables: dict[str, str] = Field(
        default_factory=dict,
        description="Resolved variables, formatted",
    )

    @property
    def failed(self) -> list[EquationResult]:
        return [r for r in self.results if not r.ok]


class UnitInfo(BaseModel):
    """A unit symbol the calculator accepts."""
    symbol: str
    value: str = Field(..., description="Size of one unit in SI")
    dimension: str = Field(..., description="SI dimension of the unit")


class ConstantInfo(BaseModel):
    """A physical constant reachable through con(...)."""
    symbol: str
    name: str
    value: str
    dimension: str
