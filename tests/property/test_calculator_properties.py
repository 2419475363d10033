"""
Property-based tests for the key-driven Calculator.

Covers the folding and editing rules with generated key sequences, and
drives random sequences through a Hypothesis state machine that checks
the state invariants after every key.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from keycalc import BinaryOperator, Calculator, fix_precision, format_number
from keycalc.nodes import BINARY_OPERATIONS

operands = st.integers(min_value=1, max_value=99999)
binary_keys = st.sampled_from(sorted(BINARY_OPERATIONS))
digit_strings = st.text(alphabet="0123456789", min_size=1, max_size=12)


def expected_text(value: float) -> str:
    return format_number(fix_precision(value))


@pytest.mark.property
class TestCalculatorProperties:
    """Property-based tests for Calculator key sequences."""

    @given(a=operands, b=operands, c=operands, op1=binary_keys, op2=binary_keys)
    def test_left_to_right_fold(self, a: int, b: int, c: int, op1: str, op2: str):
        """a op1 b op2 c = is (a op1 b) op2 c, never a op1 (b op2 c)."""
        calc = Calculator()
        calc.press_many(f"{a}{op1}{b}{op2}{c}=")

        first = BINARY_OPERATIONS[op1](float(a), float(b))
        assert calc.operand == expected_text(BINARY_OPERATIONS[op2](first, float(c)))

    @given(a=operands, b=operands)
    def test_repeat_equals(self, a: int, b: int):
        """Pressing = again adds the same right operand once more."""
        calc = Calculator()
        calc.press_many(f"{a}+{b}==")
        assert calc.operand == str(a + 2 * b)

    @given(a=operands)
    def test_square_is_immediate(self, a: int):
        calc = Calculator()
        calc.press_many(f"{a}s")
        assert calc.state.has_result
        assert calc.operand == expected_text(float(a) * float(a))

    @given(digits=digit_strings)
    def test_decimal_point_idempotent(self, digits: str):
        once = Calculator().press_many(digits + ".")
        twice = Calculator().press_many(digits + "..")
        assert once.operand == twice.operand

    @given(digits=digit_strings)
    def test_backspace_never_empties(self, digits: str):
        calc = Calculator().press_many(digits)
        before = calc.operand
        calc.press("Backspace")
        assert calc.operand == (before[:-1] if len(before) > 1 else "0")

    @given(digits=digit_strings)
    def test_clear_entry_then_digit(self, digits: str):
        calc = Calculator().press_many(digits)
        calc.press_many("e4")
        assert calc.operand == "4"


@pytest.mark.property
@pytest.mark.slow
class CalculatorStateMachine(RuleBasedStateMachine):
    """
    Stateful testing for Calculator using Hypothesis state machines.

    Random key sequences must never raise and must keep the tree
    consistent with the result flag.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calc = Calculator()

    @invariant()
    def operand_never_empty(self) -> None:
        assert self.calc.operand != ""

    @invariant()
    def no_tree_after_result(self) -> None:
        """The tree is discarded whenever a result is displayed."""
        if self.calc.state.has_result:
            assert self.calc.state.root is None

    @invariant()
    def tree_is_pending_binary(self) -> None:
        """Between keys the only tree is a binary operator awaiting its right operand."""
        root = self.calc.state.root
        if root is not None:
            assert isinstance(root, BinaryOperator)
            assert root.right is None

    @rule(key=st.sampled_from("0123456789"))
    def digit(self, key: str) -> None:
        self.calc.press(key)

    @rule()
    def decimal_point(self) -> None:
        self.calc.press(".")

    @rule(key=st.sampled_from(["+", "-", "x", "/", "s", "r"]))
    def operator(self, key: str) -> None:
        self.calc.press(key)

    @rule(key=st.sampled_from(["=", "Enter", " "]))
    def evaluate(self, key: str) -> None:
        self.calc.press(key)

    @rule(key=st.sampled_from(["%", "i", "t", "e", "Backspace"]))
    def control(self, key: str) -> None:
        self.calc.press(key)

    @rule()
    def clear(self) -> None:
        self.calc.press("C")
        assert self.calc.operand == "0"
        assert self.calc.state.root is None

    @rule(index=st.integers(min_value=0, max_value=5))
    def replay_history(self, index: int) -> None:
        history = self.calc.history
        if index < len(history):
            entry = history.select(index)
            assert self.calc.operand == entry.result
            assert self.calc.state.has_result


# Run the state machine as a pytest test
TestStateMachine = CalculatorStateMachine.TestCase
