"""
Key-driven calculator built on an incremental expression tree.

Each key press either edits the live operand, inserts an operator node
into the pending tree (folding the previous pair left to right), or
evaluates the tree and records the result in history.
"""

from keycalc.config import Settings, load_settings
from keycalc.core import Calculator, CalculatorState, reseed
from keycalc.exceptions import (
    CalculatorError,
    ConfigurationError,
    HistoryError,
    InvalidStateError,
    UnsupportedOperatorError,
)
from keycalc.history import HistoryEntry, HistoryService, HistorySink
from keycalc.nodes import (
    BinaryOperator,
    MathNode,
    Operand,
    UnaryOperator,
    create_operator,
    has_operator,
)
from keycalc.precision import fix_precision, format_number, parse_number

__all__ = [
    "BinaryOperator",
    "Calculator",
    "CalculatorError",
    "CalculatorState",
    "ConfigurationError",
    "HistoryEntry",
    "HistoryError",
    "HistoryService",
    "HistorySink",
    "InvalidStateError",
    "MathNode",
    "Operand",
    "Settings",
    "UnaryOperator",
    "UnsupportedOperatorError",
    "create_operator",
    "fix_precision",
    "format_number",
    "has_operator",
    "load_settings",
    "parse_number",
    "reseed",
]

__version__ = "0.1.0"
