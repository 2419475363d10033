"""Expression tree nodes built by the key dispatcher."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from keycalc.exceptions import InvalidStateError, UnsupportedOperatorError
from keycalc.precision import parse_number

if TYPE_CHECKING:
    from collections.abc import Callable

ADD = "+"
SUBTRACT = "-"
MULTIPLY = "x"
DIVIDE = "/"
SQUARE = "s"
SQUARE_ROOT = "r"
RECIPROCAL = "i"


def _divide(a: float, b: float) -> float:
    """IEEE division: a zero divisor gives a signed infinity or NaN."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _square(a: float) -> float:
    try:
        return a**2
    except OverflowError:
        return math.inf


def _square_root(a: float) -> float:
    if math.isnan(a) or a < 0:
        return math.nan
    return math.sqrt(a)


def _reciprocal(a: float) -> float:
    return _divide(1.0, a)


BINARY_OPERATIONS: dict[str, Callable[[float, float], float]] = {
    ADD: lambda a, b: a + b,
    SUBTRACT: lambda a, b: a - b,
    MULTIPLY: lambda a, b: a * b,
    DIVIDE: _divide,
}

UNARY_OPERATIONS: dict[str, Callable[[float], float]] = {
    SQUARE: _square,
    SQUARE_ROOT: _square_root,
    RECIPROCAL: _reciprocal,
}

BINARY_SYMBOLS = {ADD: "+", SUBTRACT: "-", MULTIPLY: "×", DIVIDE: "÷"}

UNARY_TEMPLATES = {SQUARE: "sqr({})", SQUARE_ROOT: "√({})", RECIPROCAL: "1/({})"}


def has_operator(symbol: str) -> bool:
    """Whether the symbol names a unary or binary operator."""
    return symbol in BINARY_OPERATIONS or symbol in UNARY_OPERATIONS


def create_operator(symbol: str, node: MathNode) -> MathNode:
    """
    Wrap a node in a new operator node.

    Unary symbols take the node as their only child. Binary symbols take
    it as the left child and leave the right slot empty until the next
    operand is known.

    Args:
        symbol: Operator key, one of ``+ - x / s r i``
        node: The node to wrap

    Returns:
        A UnaryOperator or a BinaryOperator

    Raises:
        UnsupportedOperatorError: If the symbol is not an operator
    """
    if symbol in UNARY_OPERATIONS:
        return UnaryOperator(symbol, node)
    if symbol in BINARY_OPERATIONS:
        return BinaryOperator(symbol, node)
    raise UnsupportedOperatorError(symbol)


class MathNode(ABC):
    """A node that can be rendered as text and computed to a number."""

    @abstractmethod
    def compute(self) -> float:
        """Numeric value of the subtree."""

    @abstractmethod
    def render(self) -> str:
        """Expression text of the subtree."""

    def __str__(self) -> str:
        return self.render()


class Operand(MathNode):
    """Leaf holding the operand text exactly as it was typed."""

    def __init__(self, value: str) -> None:
        self.value = value

    def compute(self) -> float:
        return parse_number(self.value)

    def render(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Operand({self.value!r})"


class UnaryOperator(MathNode):
    """One-argument function applied to a single child."""

    def __init__(self, symbol: str, child: MathNode) -> None:
        if symbol not in UNARY_OPERATIONS:
            raise UnsupportedOperatorError(symbol)
        self.symbol = symbol
        self.child = child

    def compute(self) -> float:
        return UNARY_OPERATIONS[self.symbol](self.child.compute())

    def render(self) -> str:
        return UNARY_TEMPLATES[self.symbol].format(self.child.render())

    def __repr__(self) -> str:
        return f"UnaryOperator({self.symbol!r}, {self.child!r})"


class BinaryOperator(MathNode):
    """
    Two-argument operator whose right child is filled in later.

    The right slot is the only mutable edge of the tree: it stays ``None``
    while the operator is pending and is assigned once the next operand
    is committed.
    """

    def __init__(self, symbol: str, left: MathNode, right: MathNode | None = None) -> None:
        if symbol not in BINARY_OPERATIONS:
            raise UnsupportedOperatorError(symbol)
        self.symbol = symbol
        self.left = left
        self.right = right

    @property
    def is_complete(self) -> bool:
        return self.right is not None

    def compute(self) -> float:
        """
        Apply the operator to both children.

        Raises:
            InvalidStateError: If the right child is still absent
        """
        if not self.is_complete:
            raise InvalidStateError("Right operand is missing", self.render())
        return BINARY_OPERATIONS[self.symbol](self.left.compute(), self.right.compute())

    def render(self) -> str:
        right = self.right.render() if self.right is not None else ""
        return f"{self.left.render()} {BINARY_SYMBOLS[self.symbol]} {right}"

    def __repr__(self) -> str:
        return f"BinaryOperator({self.symbol!r}, {self.left!r}, {self.right!r})"
