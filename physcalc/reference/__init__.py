"""
Reference data: elements, chemical formulas, nuclides and constants.
"""

from physcalc.reference.models import ConstantRecord, Element, NuclideRecord
from physcalc.reference.loader import load_constants, load_elements, load_nuclides
from physcalc.reference.chemistry import ChemicalFormula, ElementTable, parse_chemical_formula
from physcalc.reference.nuclides import NuclideField, NuclideTable, parse_nuclide

__all__ = [
    "ConstantRecord",
    "Element",
    "NuclideRecord",
    "load_constants",
    "load_elements",
    "load_nuclides",
    "ChemicalFormula",
    "ElementTable",
    "parse_chemical_formula",
    "NuclideField",
    "NuclideTable",
    "parse_nuclide",
]
