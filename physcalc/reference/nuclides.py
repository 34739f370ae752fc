"""
Nuclide ground state lookups.

Nuclides are named by mass number and element symbol in any of the common
notations: "14C", "C14", "C-14", "14-C" or "14 C". Lookups return SI
quantities: atomic mass in kg, total binding energy in J and half-life in s.
"""

import logging
import re
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from physcalc.errors import StableNuclideError, UnrecognizedSymbolError
from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import DECIMAL_CONTEXT, Quantity
from physcalc.reference.chemistry import ElementTable
from physcalc.reference.models import NuclideRecord

logger = logging.getLogger(__name__)

DALTON_KG = Decimal("1.66053906660e-27")
KEV_J = Decimal("1.602176634e-16")
MICRO = Decimal("1e-6")

_NOTATION = re.compile(
    r"^\s*(?:(?P<a1>\d+)\s*-?\s*(?P<s1>[A-Za-z]{1,3})|(?P<s2>[A-Za-z]{1,3})\s*-?\s*(?P<a2>\d+))\s*$"
)


class NuclideField(str, Enum):
    """Data available for each nuclide."""
    MASS = "mass"
    BINDING_ENERGY = "binding_energy"
    HALF_LIFE = "half_life"


def parse_nuclide(text: str, elements: ElementTable) -> tuple[int, int]:
    """
    Parse nuclide notation into (Z, A).

    The element symbol is case-insensitive ("fe56" is iron-56).

    Raises:
        UnrecognizedSymbolError: If the notation or element is unknown
    """
    match = _NOTATION.match(text)
    if match is None:
        raise UnrecognizedSymbolError(text.strip(), "nuclide")
    symbol = (match.group("s1") or match.group("s2")).capitalize()
    mass_number = int(match.group("a1") or match.group("a2"))
    element = elements.get(symbol)
    if element is None:
        raise UnrecognizedSymbolError(symbol, "element")
    return element.atomic_number, mass_number


class NuclideTable:
    """Ground state data keyed by (Z, A)."""

    def __init__(self, records: Iterable[NuclideRecord], elements: ElementTable):
        self.elements = elements
        self._records = {(r.z, r.a): r for r in records}

    def __len__(self) -> int:
        return len(self._records)

    def record(self, z: int, a: int) -> NuclideRecord:
        record = self._records.get((z, a))
        if record is None:
            element = self.elements.by_number(z)
            label = f"{a}{element.symbol}" if element else f"Z={z}, A={a}"
            raise UnrecognizedSymbolError(label, "nuclide")
        return record

    def get(self, z: int, a: int) -> Optional[NuclideRecord]:
        return self._records.get((z, a))

    def lookup(self, z: int, a: int, field: NuclideField) -> Quantity:
        """
        Look up one field of a nuclide as an SI quantity.

        Args:
            z: Proton count
            a: Mass number
            field: Which value to return

        Returns:
            Mass in kg, total binding energy in J, or half-life in s

        Raises:
            UnrecognizedSymbolError: If the nuclide is not in the table
            StableNuclideError: For the half-life of a stable nuclide
        """
        record = self.record(z, a)
        field = NuclideField(field)
        ctx = DECIMAL_CONTEXT
        if field is NuclideField.MASS:
            kg = ctx.multiply(ctx.multiply(record.mass_micro_u, MICRO), DALTON_KG)
            return Quantity(kg, Dimension.of(mass=1))
        if field is NuclideField.BINDING_ENERGY:
            joules = ctx.multiply(ctx.multiply(record.binding_energy_kev, Decimal(a)), KEV_J)
            return Quantity(joules, Dimension.of(time=-2, length=2, mass=1))
        if record.is_stable:
            raise StableNuclideError(record.label)
        return Quantity(record.half_life_s, Dimension.of(time=1))

    def lookup_text(self, text: str, field: NuclideField) -> Quantity:
        """Look up a field by nuclide notation, e.g. lookup_text("14C", NuclideField.MASS)."""
        z, a = parse_nuclide(text, self.elements)
        logger.debug("Nuclide %r -> Z=%d A=%d (%s)", text, z, a, NuclideField(field).value)
        return self.lookup(z, a, field)
