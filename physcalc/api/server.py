"""
FastAPI server for the unit-aware calculator.

Provides REST endpoints to evaluate equation sets and to list the units and
constants the calculator understands.
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from physcalc import __version__
from physcalc.context import default_context
from physcalc.errors import CalculatorError
from physcalc.models.inputs import EvaluateRequest
from physcalc.models.outputs import ConstantInfo, EvaluateResponse, UnitInfo
from physcalc.reference.loader import load_constants
from physcalc.solver.equation_set import EquationSet

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="physcalc API",
    description="""
    Unit-aware expression calculator.

    Evaluates equations with SI units, prefixes, physical constants,
    element and nuclide lookups and shared variables.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/evaluate", response_model=EvaluateResponse, tags=["Evaluation"])
async def evaluate(request: EvaluateRequest):
    """
    Evaluate a list of equations together.

    Equations may assign variables and use variables assigned by other
    equations in any order. Per-equation failures are reported in the
    result records rather than as HTTP errors.
    """
    try:
        equation_set = EquationSet(request.equations, sig_figs=request.sig_figs)
        results = equation_set.evaluate()
        variables = {
            name: value.to_string(request.sig_figs)
            for name, value in equation_set.variables.items()
        }
        return EvaluateResponse(results=results, variables=variables)
    except (CalculatorError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected failure evaluating equations")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


@app.get("/units", response_model=list[UnitInfo], tags=["Reference"])
async def list_units():
    """Get the unprefixed unit symbols and their SI sizes."""
    registry = default_context().registry
    units = []
    for symbol in registry.unit_symbols():
        unit = registry.lookup(symbol)
        units.append(UnitInfo(symbol=symbol, value=unit.to_string(), dimension=unit.dimension.to_string()))
    return units


@app.get("/prefixes", tags=["Reference"])
async def list_prefixes():
    """Get the SI prefixes and their powers of ten."""
    from physcalc.physics.registry import PREFIXES

    return {"prefixes": PREFIXES}


@app.get("/constants", response_model=list[ConstantInfo], tags=["Reference"])
async def list_constants():
    """Get the physical constants usable through con(...)."""
    return [
        ConstantInfo(
            symbol=record.symbol,
            name=record.name,
            value=str(record.value),
            dimension=record.to_quantity().dimension.to_string(),
        )
        for record in load_constants()
    ]
