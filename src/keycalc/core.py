"""Key-driven calculator that builds and folds an expression tree."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from keycalc import keys
from keycalc.config import Settings
from keycalc.exceptions import CalculatorError
from keycalc.history import HistoryEntry, HistoryService, HistorySink
from keycalc.nodes import (
    DIVIDE,
    BinaryOperator,
    MathNode,
    Operand,
    UnaryOperator,
    create_operator,
    has_operator,
)
from keycalc.precision import fix_precision, format_number, parse_number

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass
class CalculatorState:
    """
    Flat state mutated by each key press.

    ``root`` is the pending expression tree. It is ``None`` whenever
    ``has_result`` is true.
    """

    operand: str = "0"
    stored_operand: str = ""
    operation_key: str = ""
    expression: str = ""
    has_result: bool = False
    reset_operand: bool = True
    root: MathNode | None = None


def reseed(entry: HistoryEntry) -> CalculatorState:
    """State showing a past result, ready to repeat its operation."""
    return CalculatorState(
        operand=entry.result,
        stored_operand=entry.stored_operand,
        operation_key=entry.operation_key,
        expression=entry.expression,
        has_result=True,
        reset_operand=True,
    )


class Calculator:
    """
    Calculator driven one key at a time.

    Operators fold strictly left to right with no precedence: pressing
    an operator while a binary operator is pending computes the pending
    pair first. Unary operators evaluate as soon as they are pressed.

    Example:
        >>> calc = Calculator()
        >>> calc.press_many("5+3x2=").operand
        '16'
        >>> calc.expression
        '5 + 3 × 2 ='
    """

    def __init__(
        self,
        history: HistorySink | None = None,
        settings: Settings | None = None,
        state: CalculatorState | None = None,
    ) -> None:
        """
        Initialize a calculator in the empty state.

        Args:
            history: Receiver of finished computations (default: a new
                HistoryService, which is also subscribed for replay until
                detach is called)
            settings: Precision and length limits (default: built-in)
            state: Starting state (default: empty)
        """
        self._settings = settings or Settings()
        self._state = state or CalculatorState()
        if history is None:
            history = HistoryService(self._settings)
        self._history = history
        if isinstance(history, HistoryService):
            history.subscribe(self.on_select_history)

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def history(self) -> HistorySink:
        return self._history

    @property
    def operand(self) -> str:
        """Live operand text shown on the main display."""
        return self._state.operand

    @property
    def expression(self) -> str:
        """Expression text shown above the operand."""
        return self._state.expression

    def press(self, key: str) -> Calculator:
        """
        Dispatch a single key.

        Errors raised while handling the key are logged and the state
        from before the key is restored, so a press never raises
        a CalculatorError.

        Returns:
            Self, for chaining
        """
        key = keys.normalize_key(key)
        logger.debug("key %r", key)
        snapshot = copy.deepcopy(self._state)
        try:
            self._dispatch(key)
        except CalculatorError as e:
            logger.warning("Ignoring key %r: %s", key, e)
            self._state = snapshot
        return self

    def press_many(self, sequence: Iterable[str]) -> Calculator:
        """Dispatch each key of a sequence in order."""
        for key in sequence:
            self.press(key)
        return self

    def _dispatch(self, key: str) -> None:
        s = self._state

        if keys.is_evaluate(key):
            self.evaluate()
            return

        if key == keys.PERCENT_KEY:
            percent = parse_number(s.stored_operand) * parse_number(s.operand) / 100
            s.operand = self._format(percent)
            self.evaluate()
            return

        if key == keys.INVERSE_KEY:
            s.stored_operand = "1"
            s.operation_key = DIVIDE
            s.has_result = False
            s.root = None
            self.evaluate()
            return

        if keys.is_operator(key):
            self._push_operator(key)
            return

        if keys.is_backspace(key):
            if s.has_result:
                s.expression = ""
            else:
                s.operand = s.operand[:-1] if len(s.operand) > 1 else "0"
            return

        if keys.is_clear(key):
            self.clear()
            return

        if keys.is_clear_entry(key):
            s.operand = "0"
            s.reset_operand = True
            return

        if key == keys.SIGN_TOGGLE_KEY:
            s.operand = format_number(-parse_number(s.operand))
            return

        if not (keys.is_digit(key) or keys.is_decimal_point(key)):
            logger.debug("Unhandled key %r", key)
            return

        # Keep the operand within the display width while it is typed
        if len(s.operand) > self._settings.max_operand_length and not s.reset_operand:
            logger.debug("Operand %r is full, dropping %r", s.operand, key)
            return

        if s.has_result:
            s = self.clear().state

        if keys.is_digit(key):
            if s.reset_operand or s.operand == "0":
                s.operand = ""
                s.reset_operand = False
            s.operand += key
            return

        # A point typed where a new operand starts begins that operand as "0."
        if s.reset_operand:
            s.operand = "0"
            s.reset_operand = False
        if keys.DECIMAL_POINT not in s.operand:
            s.operand += keys.DECIMAL_POINT

    def _push_operator(self, key: str) -> None:
        s = self._state
        if len(s.operand) > 1 and s.operand.endswith(keys.DECIMAL_POINT):
            s.operand = s.operand[:-1]

        s.operation_key = key
        s.stored_operand = s.operand
        s.reset_operand = True
        s.has_result = False

        node: MathNode = Operand(s.operand)
        if isinstance(s.root, BinaryOperator):
            s.root.right = node
            s.operand = self._format(s.root.compute())
            node = s.root

        s.root = create_operator(key, node)
        s.expression = s.root.render()

        if isinstance(s.root, UnaryOperator):
            self.evaluate()

    def evaluate(self) -> None:
        """
        Compute the pending operation and publish it to history.

        After a result, evaluating again repeats the last operation with
        the same right operand against the new result. With no pending
        operation this does nothing.
        """
        s = self._state
        if not has_operator(s.operation_key):
            logger.warning("Operation not defined = %r", s.operation_key)
            return

        if s.has_result:
            left, right = s.operand, s.stored_operand
        else:
            left, right = s.stored_operand, s.operand
            s.stored_operand = s.operand

        if s.root is None:
            s.root = create_operator(s.operation_key, Operand(left))

        if isinstance(s.root, BinaryOperator):
            s.root.right = Operand(right)

        s.expression = s.root.render() + " ="
        s.operand = self._format(s.root.compute())
        s.root = None

        s.has_result = True
        s.reset_operand = True
        try:
            self._history.add(s.expression, s.operand, s.stored_operand, s.operation_key)
        except Exception:
            # The result stands even when the sink fails to record it
            logger.exception("History sink failed to record %r", s.expression)

    def clear(self) -> Calculator:
        """Reset to the empty state."""
        self._state = CalculatorState()
        return self

    def detach(self) -> None:
        """Stop following selections made on a shared HistoryService."""
        if isinstance(self._history, HistoryService):
            self._history.unsubscribe(self.on_select_history)

    def on_select_history(self, entry: HistoryEntry) -> None:
        """Show a past result as if it had just been computed."""
        self._state = reseed(entry)

    def _format(self, value: float) -> str:
        return format_number(fix_precision(value, self._settings.precision))

    def __repr__(self) -> str:
        return f"Calculator(operand={self.operand!r}, expression={self.expression!r})"
