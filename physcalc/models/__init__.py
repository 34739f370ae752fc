"""
Pydantic request and result models.
"""

from physcalc.models.inputs import EvaluateRequest
from physcalc.models.outputs import (
    ConstantInfo,
    EquationError,
    EquationResult,
    EvaluateResponse,
    UnitInfo,
)

__all__ = [
    "EvaluateRequest",
    "ConstantInfo",
    "EquationError",
    "EquationResult",
    "EvaluateResponse",
    "UnitInfo",
]
