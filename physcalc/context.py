"""
Calculator context: the reference tables every parse and evaluation uses.

The context is built once and passed explicitly to the tokenizer and the
equation set. default_context() caches the one built from bundled data.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from physcalc.physics.quantity import Quantity
from physcalc.physics.registry import UnitRegistry
from physcalc.reference.chemistry import ElementTable, parse_chemical_formula
from physcalc.reference.loader import load_constants, load_elements, load_nuclides
from physcalc.reference.nuclides import NuclideField, NuclideTable

logger = logging.getLogger(__name__)

# Call-style lookups usable in expressions, longest first for matching
LOOKUP_NAMES = ("MMass", "con", "BE", "HL", "M")


@dataclass(frozen=True)
class CalculatorContext:
    """Immutable bundle of unit registry, element table and nuclide table."""
    registry: UnitRegistry
    elements: ElementTable
    nuclides: NuclideTable

    def lookup(self, name: str, argument: str) -> Quantity:
        """
        Resolve a call-style lookup such as con(c) or MMass(H2O).

        Args:
            name: One of LOOKUP_NAMES
            argument: Text between the brackets

        Returns:
            The looked-up quantity in SI units
        """
        argument = argument.strip()
        if name == "con":
            return self.registry.require_constant(argument)
        if name == "MMass":
            return parse_chemical_formula(argument, self.elements).molar_mass()
        if name == "M":
            return self.nuclides.lookup_text(argument, NuclideField.MASS)
        if name == "BE":
            return self.nuclides.lookup_text(argument, NuclideField.BINDING_ENERGY)
        if name == "HL":
            return self.nuclides.lookup_text(argument, NuclideField.HALF_LIFE)
        raise ValueError(f"Unknown lookup '{name}'")


def load_context(data_dir: Optional[Union[str, Path]] = None) -> CalculatorContext:
    """Build a context from the bundled datasets, optionally overridden by data_dir."""
    elements = ElementTable(load_elements(data_dir=data_dir))
    nuclides = NuclideTable(load_nuclides(data_dir=data_dir), elements)
    constants = {c.symbol: c.to_quantity() for c in load_constants(data_dir=data_dir)}
    logger.debug(
        "Loaded %d elements, %d nuclides, %d constants",
        len(elements), len(nuclides), len(constants),
    )
    return CalculatorContext(UnitRegistry(constants), elements, nuclides)


@lru_cache(maxsize=None)
def default_context() -> CalculatorContext:
    """Shared context built from the bundled datasets."""
    return load_context()
