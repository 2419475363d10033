"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from keycalc.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "KEYCALC_"

DEFAULT_PRECISION = 12
DEFAULT_MAX_OPERAND_LENGTH = 12
DEFAULT_HISTORY_SIZE = 100
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Tunable limits for the engine and its history."""

    precision: int = DEFAULT_PRECISION
    max_operand_length: int = DEFAULT_MAX_OPERAND_LENGTH
    history_size: int = DEFAULT_HISTORY_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from ``KEYCALC_*`` environment variables.

        Args:
            environ: Mapping to read from (default ``os.environ``)

        Returns:
            Settings with unset variables left at their defaults

        Raises:
            ConfigurationError: If a value is not a positive integer or
                the log level is unknown
        """
        env = os.environ if environ is None else environ
        level = env.get(f"{ENV_PREFIX}LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"{ENV_PREFIX}LOG_LEVEL", level, "Unknown log level")

        return cls(
            precision=_positive_int(env, "PRECISION", DEFAULT_PRECISION),
            max_operand_length=_positive_int(
                env, "MAX_OPERAND_LENGTH", DEFAULT_MAX_OPERAND_LENGTH
            ),
            history_size=_positive_int(env, "HISTORY_SIZE", DEFAULT_HISTORY_SIZE),
            log_level=level,
        )


def _positive_int(env: Mapping[str, str], suffix: str, default: int) -> int:
    name = ENV_PREFIX + suffix
    raw = env.get(name)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(name, raw, "Expected an integer") from e

    if value <= 0:
        raise ConfigurationError(name, raw, "Value must be positive")

    return value


def load_settings() -> Settings:
    """Settings for the current process environment."""
    return Settings.from_env()
