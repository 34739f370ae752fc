"""
Token model shared by the tokenizer and the parser.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from physcalc.physics.quantity import Quantity


class TokenType(Enum):
    """Kinds of token produced by the tokenizer."""
    NUMBER = "number"
    UNIT = "unit"
    OPERATOR = "operator"
    FUNCTION = "function"
    VARIABLE = "variable"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"


# Operators inserted by the tokenizer only, never typed by the user
IMPLICIT_MUL = "implicit*"
IMPLICIT_DIV = "implicit/"

# Operator precedence, low to high. All operators are left-associative.
PRECEDENCE = {
    "=": 0,
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    IMPLICIT_MUL: 3,
    IMPLICIT_DIV: 3,
    "^": 4,
}


@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    `text` is the source text (the operator symbol for operators). NUMBER
    and UNIT tokens carry their resolved quantity in `value`. Numbers that
    came from a call-style lookup such as M(14C) have `is_lookup` set.
    """
    type: TokenType
    text: str
    value: Optional[Quantity] = None
    position: int = 0
    is_lookup: bool = False

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.text]

    def is_operator(self, *symbols: str) -> bool:
        return self.type is TokenType.OPERATOR and (not symbols or self.text in symbols)

    def negated(self, position: int) -> "Token":
        """Number token with its value and text negated."""
        return replace(self, text="-" + self.text, value=self.value.negate(), position=position)

    def __str__(self) -> str:
        return self.text


def operator(symbol: str, position: int = 0) -> Token:
    return Token(TokenType.OPERATOR, symbol, position=position)
