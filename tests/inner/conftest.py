"""Shared fixtures and utilities for Inner tests."""

import pytest

from inner import Inner, InnerConfig


@pytest.fixture
def facade():
    """Create a fresh Inner facade for each test."""
    return Inner()


@pytest.fixture
def facade_custom():
    """Factory for Inner facades with custom configuration."""
    def _create_inner(**kwargs) -> Inner:
        return Inner(InnerConfig(**kwargs))
    return _create_inner


class EvaluationCounter:
    """Side-effecting callable used to check how often an expression is evaluated."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


@pytest.fixture
def counter():
    """Factory for evaluation counters."""
    def _create_counter(value) -> EvaluationCounter:
        return EvaluationCounter(value)
    return _create_counter
