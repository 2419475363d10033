"""Record of completed evaluations that can be replayed into the calculator."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from keycalc.config import Settings
from keycalc.exceptions import HistoryError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """Immutable record of one evaluation."""

    expression: str
    result: str
    stored_operand: str
    operation_key: str
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    def __str__(self) -> str:
        return f"{self.expression} {self.result}"


class HistorySink(Protocol):
    """Receiver of finished computations."""

    def add(
        self, expression: str, result: str, stored_operand: str, operation_key: str
    ) -> None: ...


class HistoryService:
    """
    Bounded, in-memory list of history entries.

    Selecting an entry notifies every subscriber, which is how a
    calculator gets re-seeded from a past result.

    Example:
        >>> history = HistoryService()
        >>> history.add("2 + 3 =", "5", "3", "+")
        >>> history.latest.result
        '5'
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._entries: list[HistoryEntry] = []
        self._listeners: list[Callable[[HistoryEntry], None]] = []
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._settings.history_size

    @property
    def entries(self) -> list[HistoryEntry]:
        """Entries from oldest to newest."""
        with self._lock:
            return self._entries.copy()

    @property
    def latest(self) -> HistoryEntry | None:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def add(
        self, expression: str, result: str, stored_operand: str, operation_key: str
    ) -> None:
        """Append an entry, dropping the oldest ones beyond max_size."""
        entry = HistoryEntry(expression, result, stored_operand, operation_key)
        with self._lock:
            self._entries.append(entry)
            if len(self._entries) > self.max_size:
                del self._entries[: -self.max_size]
        logger.info("history: %s", entry)

    def get(self, index: int) -> HistoryEntry:
        """
        Look up an entry by position.

        Raises:
            HistoryError: If index is outside the list
        """
        with self._lock:
            if not 0 <= index < len(self._entries):
                raise HistoryError(index, len(self._entries))
            return self._entries[index]

    def subscribe(self, listener: Callable[[HistoryEntry], None]) -> None:
        """Register a callback invoked with each selected entry."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[HistoryEntry], None]) -> None:
        """Stop notifying a callback; unknown callbacks are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def select(self, index: int) -> HistoryEntry:
        """Hand the entry at index to every subscriber and return it."""
        entry = self.get(index)
        logger.debug("history selected #%d: %s", index, entry)
        for listener in self._listeners:
            listener(entry)
        return entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"HistoryService(entries={len(self)}, max_size={self.max_size})"
