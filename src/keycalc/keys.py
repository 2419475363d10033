"""Classification of raw input symbols."""

from __future__ import annotations

from keycalc.nodes import MULTIPLY, RECIPROCAL, has_operator

EVALUATE_KEYS = frozenset({"Enter", "=", " "})
BACKSPACE_KEYS = frozenset({"Backspace", "Delete", "<"})
CLEAR_KEYS = frozenset({"c", "C"})
CLEAR_ENTRY_KEYS = frozenset({"e", "E"})
PERCENT_KEY = "%"
SIGN_TOGGLE_KEY = "t"
INVERSE_KEY = RECIPROCAL
DECIMAL_POINT = "."

# Alternate spellings accepted from keyboards
KEY_ALIASES = {"*": MULTIPLY, "X": MULTIPLY, "×": MULTIPLY, "÷": "/", "Return": "Enter"}


def normalize_key(key: str) -> str:
    """Map alternate spellings onto the canonical key symbol."""
    return KEY_ALIASES.get(key, key)


def is_digit(key: str) -> bool:
    return len(key) == 1 and key in "0123456789"


def is_decimal_point(key: str) -> bool:
    return key == DECIMAL_POINT


def is_evaluate(key: str) -> bool:
    return key in EVALUATE_KEYS


def is_backspace(key: str) -> bool:
    return key in BACKSPACE_KEYS


def is_clear(key: str) -> bool:
    return key in CLEAR_KEYS


def is_clear_entry(key: str) -> bool:
    return key in CLEAR_ENTRY_KEYS


def is_operator(key: str) -> bool:
    """
    Whether the key starts or extends an operator chain.

    The inverse key is excluded: it evaluates ``1 / operand`` directly
    instead of joining the tree.
    """
    return key != INVERSE_KEY and has_operator(key)


def split_keys(tokens: list[str]) -> list[str]:
    """
    Expand command-line tokens into single key symbols.

    Tokens that name a key (``Enter``, ``Backspace``) are kept whole; any
    other token is split into its characters, so ``12+3=`` yields five keys.
    """
    keys: list[str] = []
    for token in tokens:
        if token in EVALUATE_KEYS or token in BACKSPACE_KEYS or token in KEY_ALIASES:
            keys.append(token)
        else:
            keys.extend(token)
    return keys
