"""
Tests for the periodic table, chemical formulas and nuclide lookups.
"""

from decimal import Decimal

import pytest

from physcalc.errors import ParseError, StableNuclideError, UnrecognizedSymbolError
from physcalc.parsing.equation import compile_equation
from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import Quantity
from physcalc.reference.chemistry import MOLAR_MASS, parse_chemical_formula
from physcalc.reference.loader import load_constants, load_elements, load_nuclides
from physcalc.reference.nuclides import DALTON_KG, KEV_J, NuclideField, parse_nuclide


def molar(grams_per_mol: str) -> Quantity:
    return Quantity(Decimal(grams_per_mol) / 1000, MOLAR_MASS)


class TestDatasets:
    """Tests for the bundled datasets."""

    def test_periodic_table_complete(self):
        """Test that all 118 elements load."""
        elements = load_elements()
        assert len(elements) == 118
        assert elements[25].symbol == "Fe"

    def test_nuclides_load(self):
        """Test that stable nuclides have no half-life."""
        records = {r.label: r for r in load_nuclides()}
        assert records["12C"].is_stable
        assert not records["14C"].is_stable

    def test_constants_load(self):
        """Test that every constant has seven exponents."""
        assert all(len(c.dimension) == 7 for c in load_constants())

    def test_missing_file(self, tmp_path):
        """Test a missing explicit dataset path."""
        with pytest.raises(FileNotFoundError):
            load_elements(path=tmp_path / "none.json")


class TestElementTable:
    """Tests for element lookups."""

    def test_lookup(self, elements):
        """Test symbol and number lookups."""
        assert elements.by_number(26).symbol == "Fe"
        assert "Co" in elements
        assert len(elements) == 118

    def test_molar_mass_units(self, elements):
        """Test that element molar masses are in kg/mol."""
        assert elements.molar_mass("C") == molar("12.011")
        assert elements.molar_mass("C").dimension.to_string() == "kg mol^-1"

    def test_unknown_element(self, elements):
        """Test unknown element symbols."""
        with pytest.raises(UnrecognizedSymbolError):
            elements.molar_mass("Xx")


class TestChemicalFormula:
    """Tests for formula parsing and molar mass."""

    @pytest.mark.parametrize("formula,grams", [
        ("H2O", "18.015"),
        ("Ca(OH)2", "74.092"),
        ("2H2O", "36.030"),
        ("CO", "28.010"),
        ("Co", "58.933194"),
        ("C6H12O6", "180.156"),
        ("CuSO4(H2O)5", "249.677"),
    ])
    def test_molar_mass(self, elements, formula, grams):
        """Test molar masses of common formulas."""
        assert parse_chemical_formula(formula, elements).molar_mass() == molar(grams)

    @pytest.mark.parametrize("formula", ["H2O", "Ca(OH)2", "2H2O", "Fe2(SO4)3", "K4(Fe(CN)6)"])
    def test_to_string(self, elements, formula):
        """Test that formulas render back to their input."""
        assert parse_chemical_formula(formula, elements).to_string() == formula

    def test_unknown_symbol(self, elements):
        """Test that unknown symbols raise."""
        with pytest.raises(UnrecognizedSymbolError):
            parse_chemical_formula("Xx2", elements)

    @pytest.mark.parametrize("formula", ["(OH", "OH)2"])
    def test_unbalanced(self, elements, formula):
        """Test that unbalanced brackets raise."""
        with pytest.raises(ParseError):
            parse_chemical_formula(formula, elements)

    def test_in_expression(self):
        """Test MMass inside an equation."""
        result = compile_equation("2mol * MMass(H2O)").evaluate()
        assert result == Quantity(Decimal("0.03603"), Dimension.of(mass=1))


class TestNuclides:
    """Tests for nuclide notation and lookups."""

    @pytest.mark.parametrize("text", ["14C", "C14", "C-14", "14-C", "14 C", "c14"])
    def test_notations(self, elements, text):
        """Test the accepted nuclide notations."""
        assert parse_nuclide(text, elements) == (6, 14)

    @pytest.mark.parametrize("text", ["14Xx", "abc", "14"])
    def test_bad_notation(self, elements, text):
        """Test unknown elements and malformed notation."""
        with pytest.raises(UnrecognizedSymbolError):
            parse_nuclide(text, elements)

    def test_mass(self, nuclides):
        """Test that carbon-12 weighs exactly 12 Da."""
        mass = nuclides.lookup(6, 12, NuclideField.MASS)
        assert mass == Quantity(12 * DALTON_KG, Dimension.of(mass=1))

    def test_binding_energy(self, nuclides):
        """Test that binding energy is per-nucleon times A, in joules."""
        energy = nuclides.lookup(2, 4, "binding_energy")
        assert energy.value == Decimal("7073.9156") * 4 * KEV_J
        assert energy.dimension == Dimension.from_symbol("J")

    def test_half_life(self, nuclides):
        """Test a radioactive half-life in seconds."""
        assert nuclides.lookup(6, 14, NuclideField.HALF_LIFE) == Quantity("1.7987e11s")

    def test_stable_half_life(self, nuclides):
        """Test that stable nuclides have no half-life."""
        with pytest.raises(StableNuclideError):
            nuclides.lookup(6, 12, NuclideField.HALF_LIFE)
        with pytest.raises(UnrecognizedSymbolError):
            nuclides.lookup(6, 12, NuclideField.HALF_LIFE)

    def test_unknown_nuclide(self, nuclides):
        """Test nuclides missing from the table."""
        with pytest.raises(UnrecognizedSymbolError):
            nuclides.lookup(6, 99, NuclideField.MASS)

    def test_in_expression(self):
        """Test that M(12C)/Da is exactly 12."""
        assert compile_equation("M(12C) / 1Da").evaluate() == Quantity("12")
