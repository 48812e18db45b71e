"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pybootknife.montecarlo import ResampleGenerator


@pytest.fixture
def rng():
    """Seeded NumPy generator for building test data."""
    return np.random.default_rng(42)


@pytest.fixture
def generator():
    """Seeded resample generator owned by a single test."""
    return ResampleGenerator(seed=12345)


class FixedGenerator(ResampleGenerator):
    """Generator that replays a fixed sequence of uniforms."""

    def __init__(self, values):
        super().__init__(seed=0)
        self._values = list(values)

    def random(self, size=None):
        if size is None:
            return self._values.pop(0)
        out = self._values[:size]
        del self._values[:size]
        return np.array(out, dtype=np.float64)


@pytest.fixture
def fixed_generator():
    """Factory for generators replaying a given sequence of uniforms."""
    return FixedGenerator
