"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


class RecordingSink:
    """History sink that keeps the raw arguments of every add call."""

    def __init__(self):
        self.calls = []

    def add(self, expression, result, stored_operand, operation_key):
        self.calls.append((expression, result, stored_operand, operation_key))


@pytest.fixture
def history():
    """Provide an empty HistoryService."""
    from keycalc import HistoryService

    return HistoryService()


@pytest.fixture
def calculator(history):
    """Provide a fresh Calculator wired to the history fixture."""
    from keycalc import Calculator

    return Calculator(history=history)


@pytest.fixture
def sink():
    """Provide a sink that records add calls."""
    return RecordingSink()


@pytest.fixture
def sample_numbers():
    """Provide a set of interesting test numbers."""
    return [
        0,
        1,
        -1,
        0.5,
        -0.5,
        100,
        -100,
        1e10,
        -1e10,
        1e-10,
        -1e-10,
        0.1 + 0.2,  # Floating point edge case
    ]
