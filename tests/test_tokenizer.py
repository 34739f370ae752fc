"""
Tests for the tokenizer.
"""

from decimal import Decimal

import pytest

from physcalc.errors import LexError, ParseError, UnrecognizedSymbolError
from physcalc.parsing.tokenizer import is_valid_variable_name, tokenize
from physcalc.parsing.tokens import IMPLICIT_DIV, IMPLICIT_MUL, TokenType


def types(tokens):
    return [t.type for t in tokens]


def texts(tokens):
    return [t.text for t in tokens]


class TestImplicitOperators:
    """Tests for inserted multiplication and division."""

    def test_number_unit_number_unit(self):
        """Test that 2m3s becomes 2*m*3*s."""
        tokens = tokenize("2m3s")
        assert texts(tokens) == ["2", IMPLICIT_MUL, "m", IMPLICIT_MUL, "3", IMPLICIT_MUL, "s"]

    def test_bracket_and_variable(self):
        """Test implicit multiplication around brackets and variables."""
        tokens = tokenize("2(3)x", known_variables=["x"])
        assert texts(tokens) == ["2", IMPLICIT_MUL, "(", "3", ")", IMPLICIT_MUL, "x"]

    def test_before_function(self):
        """Test implicit multiplication before a function."""
        assert texts(tokenize("2sin(0)"))[:3] == ["2", IMPLICIT_MUL, "sin"]

    def test_unit_division(self):
        """Test that / between units becomes implicit division."""
        tokens = tokenize("3 m/s")
        assert texts(tokens) == ["3", IMPLICIT_MUL, "m", IMPLICIT_DIV, "s"]

    def test_number_division_unchanged(self):
        """Test that / after a number stays ordinary division."""
        assert "/" in texts(tokenize("6/2 s"))


class TestNegation:
    """Tests for unary minus versus subtraction."""

    def test_subtraction(self):
        """Test that 5-3 is a subtraction."""
        assert texts(tokenize("5-3")) == ["5", "-", "3"]

    def test_negative_after_operator(self):
        """Test that 5*-3 negates the 3."""
        tokens = tokenize("5*-3")
        assert texts(tokens) == ["5", "*", "-3"]
        assert tokens[2].value.value == Decimal(-3)

    def test_leading_negative(self):
        """Test a negative number at the start."""
        tokens = tokenize("-92N")
        assert tokens[0].type is TokenType.NUMBER
        assert tokens[0].value.value == Decimal(-92)

    def test_negated_unit(self):
        """Test that -m becomes -1 times m."""
        tokens = tokenize("-m")
        assert types(tokens) == [TokenType.NUMBER, TokenType.OPERATOR, TokenType.UNIT]
        assert tokens[0].value.value == Decimal(-1)

    def test_negative_after_bracket(self):
        """Test negation right after an opening bracket."""
        assert texts(tokenize("(-2)")) == ["(", "-2", ")"]


class TestAssignment:
    """Tests for variable assignment."""

    def test_assignment_tokens(self):
        """Test that x = 5m yields variable, '=' and the expression."""
        tokens = tokenize("x = 5m")
        assert types(tokens) == [
            TokenType.VARIABLE, TokenType.OPERATOR, TokenType.NUMBER, TokenType.OPERATOR, TokenType.UNIT,
        ]
        assert [t.position for t in tokens] == [0, 2, 4, 5, 5]

    @pytest.mark.parametrize("text", ["m = 5", "sin = 3", "2x = 3", " = 4", "con = 1"])
    def test_invalid_targets(self, text):
        """Test that units, functions and non-identifiers cannot be assigned."""
        with pytest.raises(ParseError):
            tokenize(text)

    def test_valid_names(self):
        """Test variable name validation."""
        assert is_valid_variable_name("x")
        assert is_valid_variable_name("v_0")
        assert not is_valid_variable_name("km")


class TestIdentifierSplitting:
    """Tests for splitting identifier runs into units and variables."""

    def test_unknown_word(self):
        """Test that an unknown word is a lex error."""
        with pytest.raises(LexError) as exc:
            tokenize("3 foo")
        assert exc.value.text == "foo"
        assert exc.value.position == 2

    def test_known_variable(self):
        """Test that known variables are recognized."""
        tokens = tokenize("3 foo", known_variables=["foo"])
        assert tokens[-1].type is TokenType.VARIABLE

    def test_unit_then_variable(self):
        """Test that kgx splits into kg and x."""
        assert texts(tokenize("kgx", known_variables=["x"])) == ["kg", IMPLICIT_MUL, "x"]

    def test_longer_variable_wins(self):
        """Test that a longer variable beats a shorter unit."""
        tokens = tokenize("mx", known_variables=["mx"])
        assert types(tokens) == [TokenType.VARIABLE]

    def test_tie_goes_to_unit(self):
        """Test that units win ties."""
        assert tokenize("min", known_variables=["min"])[0].type is TokenType.UNIT

    def test_longest_unit(self):
        """Test that mol is not m and ol."""
        assert texts(tokenize("mol")) == ["mol"]

    def test_bad_character(self):
        """Test that stray characters are reported with their position."""
        with pytest.raises(LexError) as exc:
            tokenize("5 # 3")
        assert exc.value.position == 2


class TestLookups:
    """Tests for call-style lookups."""

    def test_constant(self):
        """Test con(c)."""
        tokens = tokenize("con(c)")
        assert len(tokens) == 1
        assert tokens[0].is_lookup
        assert tokens[0].text == "con(c)"
        assert tokens[0].value.value == Decimal("299792458")

    def test_nested_brackets(self):
        """Test MMass with a bracketed formula."""
        tokens = tokenize("MMass(Ca(OH)2)")
        assert len(tokens) == 1
        assert tokens[0].text == "MMass(Ca(OH)2)"

    def test_lookup_multiplied(self):
        """Test that lookups take part in implicit multiplication."""
        assert texts(tokenize("2M(12C)")) == ["2", IMPLICIT_MUL, "M(12C)"]

    def test_unknown_constant(self):
        """Test that unknown constants raise."""
        with pytest.raises(UnrecognizedSymbolError):
            tokenize("con(zzz)")

    def test_unclosed_lookup(self):
        """Test an unclosed lookup bracket."""
        with pytest.raises(ParseError):
            tokenize("M(12C")
