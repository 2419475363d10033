"""Custom exceptions for the keycalc package."""

from typing import Any


class CalculatorError(Exception):
    """Base exception for all calculator errors."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.message}: {self.value}"
        return self.message


class InvalidStateError(CalculatorError):
    """Raised when a node is computed before it is complete."""

    def __init__(self, reason: str, node: Any = None) -> None:
        super().__init__(reason, node)
        self.node = node


class UnsupportedOperatorError(InvalidStateError):
    """Raised when an operator symbol is not recognized."""

    def __init__(self, symbol: str) -> None:
        super().__init__("Operation not defined", repr(symbol))
        self.symbol = symbol


class ConfigurationError(CalculatorError):
    """Raised when a setting cannot be parsed or is out of range."""

    def __init__(self, name: str, raw: Any, reason: str = "invalid setting") -> None:
        super().__init__(f"{reason} for {name}", raw)
        self.name = name
        self.raw = raw


class HistoryError(CalculatorError):
    """Raised when a history entry cannot be found."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"History index out of range [0, {size})", index)
        self.index = index
        self.size = size
