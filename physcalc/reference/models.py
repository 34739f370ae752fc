"""
Pydantic models for the bundled reference datasets.

Values are kept as Decimal so that dataset precision survives loading.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import Quantity


class Element(BaseModel):
    """A chemical element from the periodic table dataset."""
    atomic_number: int = Field(..., ge=1, le=118, description="Proton count Z")
    symbol: str = Field(..., min_length=1, max_length=3, description="Element symbol, e.g. 'Fe'")
    name: str = Field(..., description="English element name")
    molar_mass: Decimal = Field(..., gt=0, description="Standard molar mass in g/mol")


class NuclideRecord(BaseModel):
    """
    Ground state data for one nuclide.

    Mass is the atomic mass in micro-u, binding energy is per nucleon in keV,
    and half-life is in seconds (None for stable nuclides).
    """
    z: int = Field(..., ge=0, description="Proton count")
    n: int = Field(..., ge=0, description="Neutron count")
    symbol: str = Field(..., description="Element symbol")
    mass_micro_u: Decimal = Field(..., gt=0, description="Atomic mass in micro-u")
    binding_energy_kev: Decimal = Field(..., ge=0, description="Binding energy per nucleon in keV")
    half_life_s: Optional[Decimal] = Field(default=None, gt=0, description="Half-life in seconds")

    @property
    def a(self) -> int:
        """Mass number."""
        return self.z + self.n

    @property
    def is_stable(self) -> bool:
        return self.half_life_s is None

    @property
    def label(self) -> str:
        return f"{self.a}{self.symbol}"


class ConstantRecord(BaseModel):
    """A named physical constant with its SI dimension exponents."""
    symbol: str = Field(..., description="Symbol used inside con(...)")
    name: str = Field(..., description="Human readable name")
    value: Decimal = Field(..., description="Value in SI units")
    dimension: list[int] = Field(
        ...,
        min_length=7,
        max_length=7,
        description="Exponents of (time, length, mass, current, temperature, amount, luminous)",
    )

    def to_quantity(self) -> Quantity:
        return Quantity(self.value, Dimension(tuple(self.dimension)))
