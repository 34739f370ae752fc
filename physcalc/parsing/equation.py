"""
Expression trees: parsing, evaluation and rendering.

Token lists are parsed with the shunting-yard algorithm into a small tree of
Leaf, Unary and Binary nodes. Every binary operator is left-associative, so
2^3^2 is (2^3)^2 = 64.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from physcalc.context import CalculatorContext
from physcalc.errors import ParseError, UndefinedVariableError
from physcalc.parsing.tokenizer import NEGATION_TEXT, tokenize
from physcalc.parsing.tokens import IMPLICIT_DIV, IMPLICIT_MUL, PRECEDENCE, Token, TokenType
from physcalc.physics.quantity import DEFAULT_SIG_FIGS, Quantity, format_value, latex_number, latex_unit

logger = logging.getLogger(__name__)

VariableLookup = Union[Callable[[str], Optional[Quantity]], Mapping]

# Binding strength of leaves and function calls
_ATOM = max(PRECEDENCE.values()) + 1


@dataclass(frozen=True)
class Leaf:
    token: Token


@dataclass(frozen=True)
class Unary:
    token: Token
    operand: "Node"


@dataclass(frozen=True)
class Binary:
    token: Token
    left: "Node"
    right: "Node"


Node = Union[Leaf, Unary, Binary]


def parse(tokens: list[Token], source: str = "") -> "Equation":
    """
    Build an equation tree from tokens.

    Raises:
        ParseError: For mismatched brackets, missing operands, a misplaced
            '=' or a function not followed by '('
    """
    _check_assignment(tokens, source)
    output: list[Node] = []
    stack: list[Token] = []

    for index, token in enumerate(tokens):
        if token.type in (TokenType.NUMBER, TokenType.UNIT, TokenType.VARIABLE):
            output.append(Leaf(token))
        elif token.type is TokenType.FUNCTION:
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if following is None or following.type is not TokenType.LBRACKET:
                raise ParseError(f"Function '{token.text}' must be followed by '('", source)
            stack.append(token)
        elif token.type is TokenType.LBRACKET:
            stack.append(token)
        elif token.type is TokenType.RBRACKET:
            while stack and stack[-1].type is not TokenType.LBRACKET:
                _reduce(stack.pop(), output, source)
            if not stack:
                raise ParseError("Mismatched ')'", source)
            stack.pop()
            if stack and stack[-1].type is TokenType.FUNCTION:
                _reduce(stack.pop(), output, source)
        else:
            while (
                stack
                and stack[-1].type is TokenType.OPERATOR
                and stack[-1].precedence >= token.precedence
            ):
                _reduce(stack.pop(), output, source)
            stack.append(token)

    while stack:
        token = stack.pop()
        if token.type is TokenType.LBRACKET:
            raise ParseError("Mismatched '('", source)
        _reduce(token, output, source)

    if not output:
        raise ParseError("Empty expression", source)
    if len(output) > 1:
        raise ParseError("Missing operator between operands", source)
    return Equation(output[0], source)


def _check_assignment(tokens: list[Token], source: str) -> None:
    for index, token in enumerate(tokens):
        if token.is_operator("="):
            if index != 1 or tokens[0].type is not TokenType.VARIABLE:
                raise ParseError("'=' may only follow the assigned variable name", source)


def _reduce(token: Token, output: list[Node], source: str) -> None:
    if token.type is TokenType.FUNCTION:
        if not output:
            raise ParseError(f"Missing argument for '{token.text}'", source)
        output.append(Unary(token, output.pop()))
        return
    if len(output) < 2:
        raise ParseError(f"Missing operand for '{_symbol(token)}'", source)
    right = output.pop()
    left = output.pop()
    output.append(Binary(token, left, right))


def _symbol(token: Token) -> str:
    if token.text == IMPLICIT_MUL:
        return "*"
    if token.text == IMPLICIT_DIV:
        return "/"
    return token.text


class Equation:
    """
    A parsed expression, optionally assigning its value to a variable.

    Attributes:
        root: Tree root; an assignment's root is a '=' node
        source: Text the equation was compiled from
        variable: Assigned variable name, or None
        variable_usage: Names of variables the expression reads
    """

    def __init__(self, root: Node, source: str = ""):
        self.root = root
        self.source = source
        self.variable = None
        if isinstance(root, Binary) and root.token.is_operator("="):
            self.variable = root.left.token.text
            self.variable_usage = frozenset(_variables(root.right))
        else:
            self.variable_usage = frozenset(_variables(root))

    def is_assignment(self) -> bool:
        return self.variable is not None

    def get_variable(self) -> str:
        if self.variable is None:
            raise ParseError("Equation does not assign a variable", self.source)
        return self.variable

    @property
    def expression(self) -> Node:
        """Right-hand side for assignments, the whole tree otherwise."""
        return self.root.right if self.is_assignment() else self.root

    def evaluate(self, lookup: Optional[VariableLookup] = None) -> Quantity:
        """
        Evaluate the expression.

        Args:
            lookup: Callable or mapping giving the value of a variable name,
                returning None (or lacking the key) when it is undefined

        Raises:
            UndefinedVariableError: For a variable without a value
            DimensionMismatchError, DivisionByZeroError, MathDomainError:
                From the arithmetic itself
        """
        if lookup is None:
            getter = _no_variables
        elif isinstance(lookup, Mapping):
            getter = lookup.get
        else:
            getter = lookup
        return evaluate_node(self.expression, getter)

    def to_string(self) -> str:
        return _render(self.root)

    def to_latex_string(self, sig_figs: int = DEFAULT_SIG_FIGS) -> str:
        return _render_latex(self.root, sig_figs)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Equation({self.to_string()!r})"


def compile_equation(
    text: str,
    known_variables: Iterable[str] = (),
    context: Optional[CalculatorContext] = None,
) -> Equation:
    """Tokenize and parse `text` in one step."""
    return parse(tokenize(text, known_variables, context), text)


def _no_variables(name: str) -> Optional[Quantity]:
    return None


def _variables(node: Node) -> Iterable[str]:
    if isinstance(node, Leaf):
        if node.token.type is TokenType.VARIABLE:
            yield node.token.text
    elif isinstance(node, Unary):
        yield from _variables(node.operand)
    else:
        yield from _variables(node.left)
        yield from _variables(node.right)


def evaluate_node(node: Node, lookup: Callable[[str], Optional[Quantity]]) -> Quantity:
    """Recursively evaluate a tree node."""
    if isinstance(node, Leaf):
        token = node.token
        if token.type is TokenType.VARIABLE:
            value = lookup(token.text)
            if value is None:
                raise UndefinedVariableError(token.text)
            return value
        return token.value

    if isinstance(node, Unary):
        return evaluate_node(node.operand, lookup).apply(node.token.text)

    symbol = node.token.text
    if symbol == "=":
        return evaluate_node(node.right, lookup)
    left = evaluate_node(node.left, lookup)
    right = evaluate_node(node.right, lookup)
    if symbol == "+":
        return left.add(right)
    if symbol == "-":
        return left.subtract(right)
    if symbol in ("*", IMPLICIT_MUL):
        return left.multiply(right)
    if symbol in ("/", IMPLICIT_DIV):
        return left.divide(right)
    if symbol == "^":
        return left.pow(right)
    raise ParseError(f"Unknown operator '{symbol}'")


# Rendering

def _precedence(node: Node) -> int:
    if isinstance(node, Binary):
        return node.token.precedence
    return _ATOM


def _needs_parens(child: Node, parent: Binary, is_right: bool) -> bool:
    child_precedence = _precedence(child)
    parent_precedence = parent.token.precedence
    return child_precedence < parent_precedence or (is_right and child_precedence == parent_precedence)


def _is_negation(node: Node) -> bool:
    return isinstance(node, Leaf) and node.token.text == NEGATION_TEXT


def _is_type(node: Node, token_type: TokenType) -> bool:
    return isinstance(node, Leaf) and node.token.type is token_type


def _render(node: Node) -> str:
    if isinstance(node, Leaf):
        return node.token.text
    if isinstance(node, Unary):
        return f"{node.token.text}({_render(node.operand)})"

    symbol = node.token.text
    if symbol == "=":
        return f"{_render(node.left)} = {_render(node.right)}"

    left = _render(node.left)
    right = _render(node.right)
    if _needs_parens(node.left, node, is_right=False):
        left = f"({left})"
    if _needs_parens(node.right, node, is_right=True):
        right = f"({right})"

    if symbol == IMPLICIT_MUL:
        if _is_negation(node.left):
            return f"-{right}"
        if _is_type(node.left, TokenType.NUMBER) and _is_type(node.right, TokenType.UNIT):
            return f"{left}{right}"
        return f"{left} {right}"
    if symbol == IMPLICIT_DIV:
        return f"{left}/{right}"
    if symbol == "^":
        return f"{left}^{right}"
    return f"{left} {symbol} {right}"


def _latex_leaf(token: Token, sig_figs: int) -> str:
    if token.type is TokenType.UNIT:
        return latex_unit(token.text)
    if token.type is TokenType.VARIABLE:
        return token.text
    if token.is_lookup:
        return rf"\textrm{{{token.text}}}"
    if token.text == NEGATION_TEXT:
        return "-"
    return latex_number(format_value(token.value.value, sig_figs))


def _parens(text: str) -> str:
    return rf"\left({text}\right)"


def _render_latex(node: Node, sig_figs: int) -> str:
    if isinstance(node, Leaf):
        return _latex_leaf(node.token, sig_figs)
    if isinstance(node, Unary):
        inner = _render_latex(node.operand, sig_figs)
        if node.token.text == "sqrt":
            return rf"\sqrt{{{inner}}}"
        return rf"\textrm{{{node.token.text}}}{_parens(inner)}"

    symbol = node.token.text
    left = _render_latex(node.left, sig_figs)
    right = _render_latex(node.right, sig_figs)
    if symbol == "=":
        return f"{left} = {right}"
    if symbol in ("/", IMPLICIT_DIV):
        return rf"\frac{{{left}}}{{{right}}}"
    if symbol == "^":
        if isinstance(node.left, (Binary, Unary)) or left.startswith("-"):
            left = _parens(left)
        return f"{{{left}}}^{{{right}}}"

    if _needs_parens(node.left, node, is_right=False):
        left = _parens(left)
    if symbol == IMPLICIT_MUL:
        if _is_negation(node.left):
            if isinstance(node.right, Binary):
                right = _parens(right)
            return f"-{right}"
        if _is_type(node.right, TokenType.UNIT):
            return rf"{left}\: {right}"
        if _is_type(node.right, TokenType.NUMBER) or isinstance(node.right, Binary):
            return f"{left}{_parens(right)}"
        return f"{left} {right}"

    if _needs_parens(node.right, node, is_right=True):
        right = _parens(right)
    if symbol == "*":
        return rf"{left} \cdot {right}"
    return f"{left} {symbol} {right}"
