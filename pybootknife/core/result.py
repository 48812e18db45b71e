"""
Generic result container for all pybootknife computations.

Every backend returns a Result[P] whose params payload is domain
specific (resample matrices, bootstrap replicates). Metadata, timing
and non-fatal warnings travel alongside the payload so that solution
wrappers can expose them uniformly.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (mode, generator, fallback counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for resampling computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (resample matrix, replicates, ...)
        info: Structured metadata (n, nboot, mode, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ResampleParams(bootsam=m, indices=i, ...),
        ...     info={'n': 3, 'nboot': 20, 'mode': 'bootknife'},
        ...     timing={'total_seconds': 0.01, 'draws': 0.009},
        ...     backend_name='cpu_balanced'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
