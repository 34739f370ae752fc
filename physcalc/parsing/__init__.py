"""
Tokenizing, parsing, evaluating and rendering expressions.
"""

from physcalc.parsing.tokens import IMPLICIT_DIV, IMPLICIT_MUL, PRECEDENCE, Token, TokenType
from physcalc.parsing.tokenizer import is_valid_variable_name, tokenize
from physcalc.parsing.equation import Binary, Equation, Leaf, Unary, compile_equation, parse

__all__ = [
    "IMPLICIT_DIV",
    "IMPLICIT_MUL",
    "PRECEDENCE",
    "Token",
    "TokenType",
    "is_valid_variable_name",
    "tokenize",
    "Binary",
    "Equation",
    "Leaf",
    "Unary",
    "compile_equation",
    "parse",
]
