"""
Global pytest configuration and fixtures for dicebox tests

Provides:
- Deterministic random sources
- Common test utilities
"""

import random
from typing import Iterable, List

import pytest


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "plugin: Plugin tests")


# ============================================================================
# Random Sources
# ============================================================================

class SequenceSource:
    """Random source replaying a fixed list of draws.

    Records the face count of every call so tests can assert how many
    dice were drawn and for which term.
    """

    def __init__(self, values: Iterable[int]):
        self.values: List[int] = list(values)
        self.calls: List[int] = []

    def __call__(self, faces: int) -> int:
        self.calls.append(faces)
        if not self.values:
            raise AssertionError(f"Random source exhausted after {len(self.calls) - 1} draws")
        return self.values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self.values)


@pytest.fixture
def sequence_source():
    """Factory for sources replaying the given draws"""
    return SequenceSource


@pytest.fixture
def seeded_source():
    """Uniform source with a fixed seed"""
    rng = random.Random(42)
    return lambda faces: rng.randint(1, faces)


@pytest.fixture
def max_source():
    """Source that always rolls the maximum face"""
    return lambda faces: faces


@pytest.fixture
def min_source():
    """Source that always rolls 1"""
    return lambda faces: 1
