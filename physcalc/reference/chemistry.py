"""
Element table and chemical formula molar masses.

Formulas such as "H2O", "Ca(OH)2", "2H2O" or "CuSO4(H2O)5" are tokenized
into numbers, brackets and element symbols, then built into a small tree of
element and group nodes. Molar masses are returned in kg/mol.
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Union

from physcalc.errors import ParseError, UnrecognizedSymbolError
from physcalc.physics.dimension import Dimension
from physcalc.physics.quantity import DECIMAL_CONTEXT, Quantity
from physcalc.reference.models import Element

logger = logging.getLogger(__name__)

MOLAR_MASS = Dimension.of(mass=1, amount=-1)

# Dataset molar masses are in g/mol
_GRAMS_PER_KILOGRAM = Decimal(1000)


class ElementTable:
    """Periodic table lookups by symbol and atomic number."""

    def __init__(self, elements: Iterable[Element]):
        self._by_symbol = {e.symbol: e for e in elements}
        self._by_number = {e.atomic_number: e for e in self._by_symbol.values()}
        # Longest symbols first so "Co" wins over "C"
        symbols = sorted(self._by_symbol, key=len, reverse=True)
        self.symbol_pattern = "|".join(re.escape(s) for s in symbols)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._by_symbol

    def __len__(self) -> int:
        return len(self._by_symbol)

    def get(self, symbol: str) -> Optional[Element]:
        return self._by_symbol.get(symbol)

    def by_number(self, atomic_number: int) -> Optional[Element]:
        return self._by_number.get(atomic_number)

    def element(self, symbol: str) -> Element:
        element = self._by_symbol.get(symbol)
        if element is None:
            raise UnrecognizedSymbolError(symbol, "element")
        return element

    def molar_mass(self, symbol: str) -> Quantity:
        """Standard molar mass of an element in kg/mol."""
        grams = self.element(symbol).molar_mass
        return Quantity(DECIMAL_CONTEXT.divide(grams, _GRAMS_PER_KILOGRAM), MOLAR_MASS)


class FormulaTokenType(Enum):
    NUMBER = "number"
    ELEMENT = "element"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"


@dataclass(frozen=True)
class FormulaToken:
    type: FormulaTokenType
    text: str


@dataclass
class ElementNode:
    symbol: str
    count: int = 1


@dataclass
class GroupNode:
    components: list = field(default_factory=list)
    count: int = 1


FormulaNode = Union[ElementNode, GroupNode]


def tokenize_formula(text: str, elements: ElementTable) -> list[FormulaToken]:
    """
    Split a formula into numbers, brackets and element symbols.

    Raises:
        UnrecognizedSymbolError: For text that is not an element symbol
    """
    pattern = re.compile(rf"\s+|(?P<number>\d+)|(?P<lbracket>[(\[])|(?P<rbracket>[)\]])|(?P<element>{elements.symbol_pattern})")
    tokens = []
    position = 0
    while position < len(text):
        match = pattern.match(text, position)
        if match is None or match.end() == position:
            rest = re.match(r"[A-Za-z]+|.", text[position:]).group(0)
            raise UnrecognizedSymbolError(rest, "element")
        if match.lastgroup is not None:
            tokens.append(FormulaToken(FormulaTokenType(match.lastgroup), match.group()))
        position = match.end()
    return tokens


class ChemicalFormula:
    """
    A parsed chemical formula.

    Tokens are read right to left. A number applies to the element or
    bracket group to its left; a number at the very start multiplies the
    whole formula.
    """

    def __init__(self, tokens: list[FormulaToken], elements: ElementTable):
        self.elements = elements
        self.root = self._build(tokens)

    @staticmethod
    def _build(tokens: list[FormulaToken]) -> GroupNode:
        markers: list[GroupNode] = []
        output: list[FormulaNode] = []
        count = 1

        for token in reversed(tokens):
            if token.type is FormulaTokenType.NUMBER:
                count = int(token.text)
            elif token.type is FormulaTokenType.ELEMENT:
                output.append(ElementNode(token.text, count))
                count = 1
            elif token.type is FormulaTokenType.RBRACKET:
                group = GroupNode(count=count)
                output.append(group)
                markers.append(group)
                count = 1
            else:
                if not markers:
                    raise ParseError("Unbalanced brackets in chemical formula")
                marker = markers.pop()
                while output[-1] is not marker:
                    marker.components.append(output.pop())

        if markers:
            raise ParseError("Unbalanced brackets in chemical formula")
        output.reverse()
        return GroupNode(output, count)

    def molar_mass(self) -> Quantity:
        """Molar mass in kg/mol."""
        return node_molar_mass(self.root, self.elements)

    def to_string(self) -> str:
        return _node_text(self.root, top=True)

    def __str__(self) -> str:
        return self.to_string()


def node_molar_mass(node: FormulaNode, elements: ElementTable) -> Quantity:
    """Molar mass of a formula node, multiplied by its count."""
    count = Quantity(node.count)
    if isinstance(node, ElementNode):
        return elements.molar_mass(node.symbol).multiply(count)
    total = Quantity(0, MOLAR_MASS)
    for component in node.components:
        total = total.add(node_molar_mass(component, elements))
    return total.multiply(count)


def _node_text(node: FormulaNode, top: bool = False) -> str:
    if isinstance(node, ElementNode):
        return node.symbol if node.count == 1 else f"{node.symbol}{node.count}"
    inner = "".join(_node_text(c) for c in node.components)
    if top:
        return inner if node.count == 1 else f"{node.count}{inner}"
    return f"({inner}){node.count}" if node.count != 1 else f"({inner})"


def parse_chemical_formula(text: str, elements: ElementTable) -> ChemicalFormula:
    """Tokenize and build a formula in one step."""
    formula = ChemicalFormula(tokenize_formula(text, elements), elements)
    logger.debug("Parsed formula %r as %s", text, formula)
    return formula
