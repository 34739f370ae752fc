"""
Tokenizer for unit-aware expressions.

Turns text such as "F = 2kg * 9.8m/s^2" or "E = M(14C) con(c)^2" into a flat
token list. The grammar is ambiguous in a few places that are settled here
rather than in the parser:

- a leading "name =" is an assignment,
- identifier runs are split into unit symbols and known variable names by
  longest match, with units winning ties,
- adjacent operands are joined by an implicit multiplication,
- "/" between two units becomes an implicit division that binds tighter
  than ordinary division,
- "-" in operand position is a negation rather than a subtraction.
"""

import logging
import re
from collections import Counter
from typing import Iterable, Optional

from physcalc.context import LOOKUP_NAMES, CalculatorContext, default_context
from physcalc.errors import LexError, ParseError
from physcalc.parsing.tokens import IMPLICIT_DIV, IMPLICIT_MUL, Token, TokenType, operator
from physcalc.physics.quantity import FUNCTION_NAMES, Quantity, to_decimal

logger = logging.getLogger(__name__)

IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

_FUNCTION_PATTERN = "|".join(sorted(FUNCTION_NAMES, key=len, reverse=True))
_LOOKUP_PATTERN = "|".join(LOOKUP_NAMES)

_SCANNER = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    rf"|(?P<lookup>(?:{_LOOKUP_PATTERN}))(?=\s*\()"
    rf"|(?P<function>(?:{_FUNCTION_PATTERN}))(?=\s*\()"
    r"|(?P<lbracket>\()"
    r"|(?P<rbracket>\))"
    r"|(?P<operator>[\^+\-*/=])"
    r"|(?P<word>[A-Za-zμΩ][A-Za-z0-9_μΩ]*)"
)

_IMPLICIT_LEFT = (TokenType.NUMBER, TokenType.UNIT, TokenType.RBRACKET, TokenType.VARIABLE)
_IMPLICIT_RIGHT = (TokenType.NUMBER, TokenType.UNIT, TokenType.LBRACKET, TokenType.FUNCTION, TokenType.VARIABLE)
_NEGATABLE = (TokenType.UNIT, TokenType.VARIABLE, TokenType.LBRACKET, TokenType.FUNCTION)

# Text of the synthetic -1 that stands in for a unary minus
NEGATION_TEXT = "-"


def is_valid_variable_name(name: str, context: Optional[CalculatorContext] = None) -> bool:
    """True if `name` can be assigned: an identifier that is not a unit, function or lookup."""
    context = context or default_context()
    return (
        IDENTIFIER.fullmatch(name) is not None
        and name not in FUNCTION_NAMES
        and name not in LOOKUP_NAMES
        and not context.registry.is_unit(name)
    )


def tokenize(
    text: str,
    known_variables: Iterable[str] = (),
    context: Optional[CalculatorContext] = None,
) -> list[Token]:
    """
    Tokenize an expression or assignment.

    Args:
        text: Source text, e.g. "v = 3m/s + x"
        known_variables: Variable names that may appear in the expression
        context: Reference tables; the bundled default when None

    Returns:
        List of tokens with implicit operators inserted

    Raises:
        LexError: For the first substring no token rule matches
        ParseError: For an invalid assignment target or unclosed lookup
        UnrecognizedSymbolError: For an unknown constant, nuclide or element
            inside a lookup
    """
    context = context or default_context()
    known = frozenset(known_variables)
    tokens = []
    offset = 0

    name, sep, rest = text.partition("=")
    if sep:
        stripped = name.strip()
        if not is_valid_variable_name(stripped, context):
            raise ParseError(f"Invalid variable name '{stripped}'", text)
        tokens.append(Token(TokenType.VARIABLE, stripped, position=text.index(stripped) if stripped else 0))
        tokens.append(operator("=", len(name)))
        offset = len(name) + 1
    else:
        rest = text

    tokens.extend(_scan(rest, offset, known, context))
    tokens = _insert_implicit(_fold_negation(tokens))
    logger.debug("Tokenized %r into %d tokens", text, len(tokens))
    return tokens


def _scan(text: str, offset: int, known: frozenset, context: CalculatorContext) -> list[Token]:
    tokens = []
    position = 0
    while position < len(text):
        match = _SCANNER.match(text, position)
        if match is None:
            raise LexError(_bad_text(text, position), offset + position)
        kind = match.lastgroup
        start = offset + position
        if kind == "space":
            position = match.end()
        elif kind == "number":
            number = match.group()
            tokens.append(Token(TokenType.NUMBER, number, Quantity(to_decimal(number)), start))
            position = match.end()
        elif kind == "lookup":
            token, position = _scan_lookup(text, match, offset, context)
            tokens.append(token)
        elif kind == "function":
            tokens.append(Token(TokenType.FUNCTION, match.group(), position=start))
            position = match.end()
        elif kind == "lbracket":
            tokens.append(Token(TokenType.LBRACKET, "(", position=start))
            position = match.end()
        elif kind == "rbracket":
            tokens.append(Token(TokenType.RBRACKET, ")", position=start))
            position = match.end()
        elif kind == "operator":
            tokens.append(operator(match.group(), start))
            position = match.end()
        else:
            token = _split_word(match.group(), start, known, context)
            if token is None:
                raise LexError(match.group(), start)
            tokens.append(token)
            position += len(token.text)
    return tokens


def _scan_lookup(text: str, match: re.Match, offset: int, context: CalculatorContext):
    """Resolve NAME(argument) into a number token. Returns (token, next position)."""
    name = match.group()
    open_at = text.index("(", match.end())
    depth = 0
    for index in range(open_at, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                argument = text[open_at + 1:index]
                value = context.lookup(name, argument)
                source = f"{name}({argument.strip()})"
                token = Token(TokenType.NUMBER, source, value, offset + match.start(), is_lookup=True)
                return token, index + 1
    raise ParseError(f"Unclosed bracket in {name}(...)", text)


def _split_word(word: str, position: int, known: frozenset, context: CalculatorContext) -> Optional[Token]:
    """
    Take the longest unit symbol or known variable from the start of `word`.

    Returns None when neither matches.
    """
    registry = context.registry
    unit_length = 0
    for end in range(len(word), 0, -1):
        if registry.resolve(word[:end]) is not None:
            unit_length = end
            break
    variable_length = max((len(v) for v in known if v and word.startswith(v)), default=0)

    if variable_length > unit_length:
        return Token(TokenType.VARIABLE, word[:variable_length], position=position)
    if unit_length:
        symbol = word[:unit_length]
        return Token(TokenType.UNIT, symbol, registry.resolve(symbol), position)
    return None


def _bad_text(text: str, position: int) -> str:
    match = re.compile(r"\S+").match(text, position)
    return match.group() if match else text[position]


def _unary_position(previous: list[Token]) -> bool:
    if not previous:
        return True
    return previous[-1].type in (TokenType.OPERATOR, TokenType.LBRACKET)


def _fold_negation(tokens: list[Token]) -> list[Token]:
    """
    Turn a unary minus into a negative number, or -1 times the following operand.

    After '^' the -1 and its operand are wrapped in brackets, so 2^-x is
    2^(-1 x) rather than (2^-1) x.
    """
    result = []
    closing = Counter()
    index = 0
    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if token.is_operator("-") and following is not None and _unary_position(result):
            if following.type is TokenType.NUMBER:
                result.append(following.negated(token.position))
                index += 2
                _close(result, closing, index - 1)
                continue
            if following.type in _NEGATABLE:
                if result and result[-1].is_operator("^"):
                    result.append(Token(TokenType.LBRACKET, "(", position=token.position))
                    closing[_operand_end(tokens, index + 1)] += 1
                result.append(Token(TokenType.NUMBER, NEGATION_TEXT, Quantity(-1), token.position))
                index += 1
                continue
        result.append(token)
        _close(result, closing, index)
        index += 1
    return result


def _close(result: list[Token], closing: Counter, index: int) -> None:
    for _ in range(closing.pop(index, 0)):
        result.append(Token(TokenType.RBRACKET, ")", position=result[-1].position))


def _operand_end(tokens: list[Token], start: int) -> int:
    """Index of the last token of the operand starting at `start`."""
    if tokens[start].type is TokenType.FUNCTION:
        if start + 1 >= len(tokens) or tokens[start + 1].type is not TokenType.LBRACKET:
            return start
        start += 1
    if tokens[start].type is not TokenType.LBRACKET:
        return start
    depth = 0
    for index in range(start, len(tokens)):
        if tokens[index].type is TokenType.LBRACKET:
            depth += 1
        elif tokens[index].type is TokenType.RBRACKET:
            depth -= 1
            if depth == 0:
                return index
    return len(tokens) - 1

def _insert_implicit(tokens: list[Token]) -> list[Token]:
    """Insert implicit multiplications and mark unit/unit divisions."""
    result = []
    for token in tokens:
        if result:
            previous = result[-1]
            if previous.type in _IMPLICIT_LEFT and token.type in _IMPLICIT_RIGHT:
                result.append(operator(IMPLICIT_MUL, token.position))
            elif (
                token.type is TokenType.UNIT
                and previous.is_operator("/")
                and len(result) >= 2
                and result[-2].type is TokenType.UNIT
            ):
                result[-1] = operator(IMPLICIT_DIV, previous.position)
        result.append(token)
    return result
