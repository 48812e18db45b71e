"""
Pseudo-random generator handle for balanced resampling.

ResampleGenerator wraps a NumPy bit generator behind a small, explicit
object so the algorithm is a documented choice and seeding is an
operation on one instance rather than on hidden global state.

A single process-wide default instance exists so that a session of
unseeded calls walks through one continuous pseudo-random stream.
Seeding it (seed=... on any solver, or seed_default_generator) resets
that shared stream.

Thread safety:
    Generators are not locked. Sharing one instance between threads or
    processes that resample concurrently is unsupported: results are
    neither reproducible nor guaranteed to be independent. Give every
    worker its own ResampleGenerator (e.g. ResampleGenerator(seed=i)
    for worker i) and pass it as generator=.

Compatibility boundary:
    Bit-for-bit reproduction of another implementation's resamples
    requires the same algorithm AND the same seeding convention. The
    default algorithm is MT19937, but NumPy seeds it through
    SeedSequence, which differs from the classic init_genrand scheme.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pybootknife.core.exceptions import InvalidSeedError, ValidationError
from pybootknife.core.validation import check_finite_scalar


BIT_GENERATORS: dict[str, type[np.random.BitGenerator]] = {
    "mt19937": np.random.MT19937,
    "pcg64": np.random.PCG64,
    "philox": np.random.Philox,
    "sfc64": np.random.SFC64,
}

DEFAULT_ALGORITHM = "mt19937"

_UINT64 = 1 << 64


def validate_seed(seed: Any) -> int | float:
    """
    Check that seed is a finite real scalar.

    Raises:
        InvalidSeedError: For arrays, non-numbers, NaN and Inf
    """
    return check_finite_scalar(seed, "seed", InvalidSeedError)


def seed_entropy(seed: int | float) -> int:
    """
    Map a validated seed onto the non-negative integer NumPy expects.

    Integers (and integral floats) map to themselves modulo 2**64, so
    seed=1 and seed=1.0 give the same stream. Other floats use their
    IEEE-754 bit pattern, which keeps distinct seeds distinct.
    """
    if isinstance(seed, int):
        return seed % _UINT64
    if float(seed).is_integer():
        return int(seed) % _UINT64
    return int(np.float64(seed).view(np.uint64))


class ResampleGenerator:
    """
    Seedable source of uniform [0, 1) draws for the resampling engine.

    Args:
        seed: Optional finite real seed. None seeds from OS entropy.
        algorithm: Bit generator name, one of BIT_GENERATORS.

    Example:
        >>> gen = ResampleGenerator(seed=1)
        >>> a = resample(3, 20, generator=gen)
        >>> gen.seed(1)
        >>> b = resample(3, 20, generator=gen)   # identical to a
    """

    def __init__(self, seed: Any = None, algorithm: str = DEFAULT_ALGORITHM):
        if algorithm not in BIT_GENERATORS:
            raise ValidationError(
                f"algorithm must be one of {sorted(BIT_GENERATORS)}, "
                f"got {algorithm!r}",
                value=algorithm,
            )
        self._algorithm = algorithm
        self._rng: np.random.Generator
        self.seed(seed)

    @property
    def algorithm(self) -> str:
        """Name of the underlying bit generator."""
        return self._algorithm

    def seed(self, seed: Any = None) -> None:
        """
        Reset the stream.

        Args:
            seed: Finite real scalar, or None for fresh OS entropy.

        Raises:
            InvalidSeedError: If seed is not a finite real scalar.
        """
        if seed is None:
            bitgen = BIT_GENERATORS[self._algorithm]()
        else:
            entropy = seed_entropy(validate_seed(seed))
            bitgen = BIT_GENERATORS[self._algorithm](entropy)
        self._rng = np.random.Generator(bitgen)

    def random(self, size: int | None = None) -> float | NDArray[np.float64]:
        """Uniform draws on [0, 1)."""
        return self._rng.random(size)

    def __repr__(self) -> str:
        return f"ResampleGenerator(algorithm={self._algorithm!r})"


_default_generator = ResampleGenerator()


def get_default_generator() -> ResampleGenerator:
    """Return the process-wide shared generator."""
    return _default_generator


def seed_default_generator(seed: Any) -> None:
    """Reset the process-wide shared generator to seed."""
    _default_generator.seed(seed)
